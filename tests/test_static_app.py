from fastapi.testclient import TestClient

from prerender.server.static_app import create_app


def test_root_serves_index(spa_dir):
    client = TestClient(create_app(spa_dir))
    resp = client.get("/")
    assert resp.status_code == 200
    assert '<div id="app">' in resp.text


def test_existing_asset_served(spa_dir):
    client = TestClient(create_app(spa_dir))
    resp = client.get("/assets/app.css")
    assert resp.status_code == 200
    assert resp.text == "body{margin:0}"
    assert resp.headers["content-type"].startswith("text/css")


def test_unknown_route_falls_back_to_index(spa_dir):
    client = TestClient(create_app(spa_dir))
    resp = client.get("/blog/getting-started")
    assert resp.status_code == 200
    assert '<div id="app">' in resp.text


def test_directory_index(spa_dir):
    (spa_dir / "docs").mkdir()
    (spa_dir / "docs" / "index.html").write_text("<p>docs</p>", encoding="utf-8")
    client = TestClient(create_app(spa_dir))
    assert client.get("/docs").text == "<p>docs</p>"


def test_no_spa_mode_returns_404(spa_dir):
    client = TestClient(create_app(spa_dir, single_page=False))
    assert client.get("/missing").status_code == 404


def test_traversal_rejected(spa_dir):
    secret = spa_dir.parent / "secret.txt"
    secret.write_text("nope", encoding="utf-8")
    client = TestClient(create_app(spa_dir, single_page=False))
    resp = client.get("/..%2Fsecret.txt")
    assert resp.status_code == 404
