"""Filesystem layout for prerendered pages.

Maps a route to its destination file under the output directory. Two layouts
are supported:

- nested (default): ``/about`` -> ``about/index.html``
- flat: ``/about`` -> ``about.html``

The root route always becomes ``index.html``. Nested segments are joined with
hyphens (``/blog/getting-started`` -> ``blog-getting-started``), so two routes
such as ``/blog/getting-started`` and ``/blog-getting/started`` land on the
same file; ``find_collisions`` reports such groups without renaming anything.
"""
from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Union

ROOT_ROUTE = "/"
INDEX_FILE = "index.html"
ROOT_FALLBACK_NAME = "root"

PathLike = Union[str, Path]


def route_to_safe_name(route: str) -> str:
    name = route[1:] if route.startswith("/") else route
    return name.replace("/", "-") or ROOT_FALLBACK_NAME


def output_path_for(route: str, out_dir: PathLike, flat_output: bool = False) -> Path:
    """Return the file a route's HTML is written to."""
    base = Path(out_dir)
    if route == ROOT_ROUTE:
        return base / INDEX_FILE
    safe_name = route_to_safe_name(route)
    if flat_output:
        return base / f"{safe_name}.html"
    return base / safe_name / INDEX_FILE


def ensure_output_dir(out_dir: PathLike) -> Path:
    """Create the output directory tree if missing. Idempotent."""
    path = Path(out_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_page(route: str, html: str, out_dir: PathLike, flat_output: bool = False) -> Path:
    target = output_path_for(route, out_dir, flat_output)
    if target.parent != Path(out_dir):
        target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    return target


def find_collisions(routes: Iterable[str], out_dir: PathLike, flat_output: bool = False) -> Dict[Path, List[str]]:
    """Group routes that resolve to the same output file (only groups of 2+)."""
    by_path: Dict[Path, List[str]] = defaultdict(list)
    for route in routes:
        by_path[output_path_for(route, out_dir, flat_output)].append(route)
    return {path: group for path, group in by_path.items() if len(group) > 1}


__all__ = [
    "ROOT_ROUTE",
    "INDEX_FILE",
    "route_to_safe_name",
    "output_path_for",
    "ensure_output_dir",
    "write_page",
    "find_collisions",
]
