"""Prerender orchestration: port -> server -> browser -> files.

Everything runs sequentially on one event loop. The browser and the server
process are released on every exit path; a failing route aborts the run and
the error propagates after cleanup. Pages written before the failure stay on
disk.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

from prerender.build import ensure_serve_dir
from prerender.capture.browser import PageCapture
from prerender.core.config import Settings, get_settings
from prerender.core.loader import resolve_config
from prerender.core.paths import ensure_output_dir, find_collisions, write_page
from prerender.models.route import RouteResult
from prerender.server.ports import find_available_port
from prerender.server.process import StaticServer


def _warn_collisions(routes: List[str], out_dir: Path, flat_output: bool) -> None:
    for path, group in find_collisions(routes, out_dir, flat_output).items():
        print(f"[warn] routes {', '.join(group)} all write to {path.relative_to(out_dir).as_posix()}; last one wins")


async def prerender(config: Any, settings: Optional[Settings] = None, debug: Optional[bool] = None) -> List[RouteResult]:
    """Prerender every configured route and return what was written.

    ``config`` may be a ``PrerenderConfig``, a mapping, or a (possibly async)
    callable producing one. ``debug`` overrides ``settings.debug``.
    """
    cfg = await resolve_config(config)
    settings = settings or get_settings()
    debug = settings.debug if debug is None else debug

    serve_dir = ensure_serve_dir(cfg.serveDir)
    out_dir = Path(cfg.outDir).resolve()
    _warn_collisions(cfg.routes, out_dir, cfg.flatOutput)

    port = find_available_port(settings.start_port, settings.port_attempts)
    server = StaticServer(
        serve_dir,
        port,
        host=settings.host,
        command=settings.serve_command,
        debug=debug,
        stop_grace_seconds=settings.stop_grace_seconds,
    )
    capture: Optional[PageCapture] = None
    results: List[RouteResult] = []
    try:
        server.start()
        await server.await_ready(settings.ready_attempts, settings.ready_interval)
        print(f"🚀 Server started on port {port}")

        capture = PageCapture(
            viewport=cfg.viewport,
            navigation_timeout_ms=settings.navigation_timeout_ms,
            debug=debug,
        )
        await capture.open()
        ensure_output_dir(out_dir)

        for route in cfg.routes:
            print(f"📄 Processing route: {route}")
            html = await capture.capture(f"{server.url}{route}", cfg.skipPrerenderSelector, route=route)
            target = write_page(route, html, out_dir, cfg.flatOutput)
            result = RouteResult(route=route, path=target, size=len(html.encode("utf-8")))
            results.append(result)
            print(f"✅ Saved static page: {result.relative_to(out_dir)}")
    finally:
        if capture is not None:
            await capture.close()
        server.stop()
    return results


__all__ = ["prerender"]
