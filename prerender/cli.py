"""Command-line entry point: ``spa-prerender [--config PATH] [--with-build] [--debug]``."""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional, Sequence

from prerender.build import run_build
from prerender.core.config import get_settings
from prerender.core.errors import PrerenderError
from prerender.core.loader import load_config
from prerender.models.route import RouteResult
from prerender.pipeline import prerender


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spa-prerender",
        description="Prerender a built single-page app into static HTML files.",
    )
    parser.add_argument("-c", "--config", default=None,
                        help="Config file (default: prerender.config.json or prerender.config.py in the current directory)")
    parser.add_argument("--with-build", action="store_true", help="Run the configured buildCommand first")
    parser.add_argument("--debug", action="store_true", help="Show static server output and browser console")
    return parser


async def run(args: argparse.Namespace) -> List[RouteResult]:
    settings = get_settings()
    debug = args.debug or settings.debug
    config = await load_config(args.config)
    if args.with_build:
        await asyncio.to_thread(run_build, config.buildCommand)
    return await prerender(config, settings=settings, debug=debug)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        results = asyncio.run(run(args))
    except (PrerenderError, OSError) as exc:
        print(f"❌ Prerendering failed: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # noqa: BLE001 - every top-level failure gets the same labeled line
        print(f"❌ Prerendering failed: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    print(f"🎉 Prerendered {len(results)} page(s)")
    return 0


__all__ = ["build_parser", "run", "main"]
