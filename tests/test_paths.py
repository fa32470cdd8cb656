from pathlib import Path

import pytest

from prerender.core.paths import (
    ensure_output_dir,
    find_collisions,
    output_path_for,
    route_to_safe_name,
    write_page,
)


@pytest.mark.parametrize("flat", [False, True])
def test_root_route_is_index_regardless_of_layout(tmp_path, flat):
    assert output_path_for("/", tmp_path, flat_output=flat) == tmp_path / "index.html"


@pytest.mark.parametrize(
    "route,expected",
    [
        ("/about", "about"),
        ("/blog/getting-started", "blog-getting-started"),
        ("/a/b/c", "a-b-c"),
        ("/docs/", "docs-"),
    ],
)
def test_safe_name_strips_slash_and_hyphenates(route, expected):
    assert route_to_safe_name(route) == expected


def test_safe_name_falls_back_to_root():
    assert route_to_safe_name("/") == "root"
    assert route_to_safe_name("") == "root"


def test_nested_layout(tmp_path):
    assert output_path_for("/about", tmp_path) == tmp_path / "about" / "index.html"
    assert output_path_for("/blog/getting-started", tmp_path) == tmp_path / "blog-getting-started" / "index.html"


def test_flat_layout(tmp_path):
    assert output_path_for("/blog/getting-started", tmp_path, flat_output=True) == tmp_path / "blog-getting-started.html"


def test_write_page_nested_creates_directory(tmp_path):
    out = ensure_output_dir(tmp_path / "static-pages")
    target = write_page("/about", "<html>é</html>", out)
    assert target == out / "about" / "index.html"
    assert target.read_text(encoding="utf-8") == "<html>é</html>"


def test_write_page_flat_and_root(tmp_path):
    out = ensure_output_dir(tmp_path / "out" / "deep")
    write_page("/", "<html>root</html>", out, flat_output=True)
    write_page("/pricing", "<html>p</html>", out, flat_output=True)
    assert sorted(p.name for p in out.iterdir()) == ["index.html", "pricing.html"]


def test_ensure_output_dir_idempotent(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_output_dir(target)
    ensure_output_dir(target)
    assert target.is_dir()


def test_hyphen_collision_is_preserved_and_reported(tmp_path):
    routes = ["/blog/getting-started", "/blog-getting/started", "/about"]
    for flat in (False, True):
        a = output_path_for(routes[0], tmp_path, flat)
        b = output_path_for(routes[1], tmp_path, flat)
        assert a == b
        collisions = find_collisions(routes, tmp_path, flat)
        assert list(collisions.values()) == [routes[:2]]


def test_no_collisions_for_distinct_routes(tmp_path):
    assert find_collisions(["/", "/about", "/contact"], Path(tmp_path)) == {}
