# Ensure project root is on sys.path for imports of main and the prerender package
import sys, os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest  # noqa: E402 (after sys.path manipulation)
from prerender.core.config import Settings, get_settings  # noqa: E402

SPA_INDEX = """<!doctype html>
<html>
<head><title>SPA</title></head>
<body>
  <div id="app"></div>
  <div class="volatile" data-skip-prerender>changes every load</div>
  <script>
    document.getElementById('app').innerHTML =
      '<h1 data-route="' + location.pathname + '">Rendered ' + location.pathname + '</h1>';
  </script>
</body>
</html>
"""


@pytest.fixture()
def spa_dir(tmp_path):
    """A minimal built SPA: index.html renders the current path client-side."""
    build = tmp_path / "build"
    build.mkdir()
    (build / "index.html").write_text(SPA_INDEX, encoding="utf-8")
    (build / "assets").mkdir()
    (build / "assets" / "app.css").write_text("body{margin:0}", encoding="utf-8")
    return build


@pytest.fixture()
def fast_settings(monkeypatch):
    """Settings with short polling so failure paths finish quickly.

    The port window starts high to stay clear of anything a developer may be
    running on the default 5050 range.
    """
    get_settings.cache_clear()
    monkeypatch.setenv("PYTHONPATH", PROJECT_ROOT + os.pathsep + os.environ.get("PYTHONPATH", ""))
    settings = Settings(
        host="127.0.0.1",
        start_port=18050,
        port_attempts=100,
        ready_attempts=20,
        ready_interval=0.25,
        stop_grace_seconds=2.0,
        navigation_timeout_ms=10_000,
    )
    yield settings
    get_settings.cache_clear()
