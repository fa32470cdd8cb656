"""Build step helpers run before prerendering."""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Union

from prerender.core.errors import BuildCommandError, BuildFolderNotFoundError


def ensure_serve_dir(serve_dir: Union[str, Path]) -> Path:
    path = Path(serve_dir).resolve()
    if not path.is_dir():
        raise BuildFolderNotFoundError(str(serve_dir))
    return path


def run_build(command: str, cwd: Optional[Union[str, Path]] = None) -> None:
    """Run the project's build command through the shell, streaming its output."""
    print(f"[build] {command}")
    result = subprocess.run(command, shell=True, cwd=cwd)
    if result.returncode != 0:
        raise BuildCommandError(command, result.returncode)
    print("✅ Build completed")


__all__ = ["ensure_serve_dir", "run_build"]
