"""Static file server for a built single-page application.

Serves files from a directory the way ``serve -s`` does: real files are
returned as-is, directories answer with their ``index.html`` and any other path
falls back to the root ``index.html`` so client-side routing can take over.

Run with: python -m prerender.server.static_app --dir build --port 5050
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

INDEX_FILE = "index.html"


def _resolve_inside(root: Path, request_path: str) -> Optional[Path]:
    candidate = (root / request_path.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


def create_app(directory: Union[str, Path], single_page: bool = True) -> FastAPI:
    root = Path(directory).resolve()
    app = FastAPI(title="prerender static server", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve(full_path: str):
        candidate = _resolve_inside(root, full_path)
        if candidate is None:
            raise HTTPException(status_code=404, detail="Not Found")
        if candidate.is_dir():
            candidate = candidate / INDEX_FILE
        if candidate.is_file():
            return FileResponse(candidate)
        fallback = root / INDEX_FILE
        if single_page and fallback.is_file():
            return FileResponse(fallback, headers={"Cache-Control": "no-store"})
        raise HTTPException(status_code=404, detail="Not Found")

    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    import uvicorn

    parser = argparse.ArgumentParser(description="Serve a built SPA directory.")
    parser.add_argument("-d", "--dir", default="build", help="Directory to serve (default: build)")
    parser.add_argument("-H", "--host", default="localhost", help="Host to bind (default: localhost)")
    parser.add_argument("-p", "--port", type=int, required=True, help="Port to bind")
    parser.add_argument("--no-spa", action="store_true", help="Disable index.html fallback for unknown paths")
    args = parser.parse_args(argv)

    app = create_app(args.dir, single_page=not args.no_spa)
    uvicorn.run(app, host=args.host, port=args.port, log_level="warning")


if __name__ == "__main__":
    main()
