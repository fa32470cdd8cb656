"""Error taxonomy for the prerender pipeline.

Every failure the CLI reports derives from ``PrerenderError`` so callers can
catch one type. Filesystem errors are left as plain ``OSError``.
"""
from __future__ import annotations

from typing import Optional


class PrerenderError(Exception):
    """Base class for all prerender failures."""


class ConfigError(PrerenderError):
    pass


class BuildFolderNotFoundError(PrerenderError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Build folder not found: {path} (run your build first or pass --with-build)"
        )


class BuildCommandError(PrerenderError):
    def __init__(self, command: str, returncode: int):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Build command failed with exit code {returncode}: {command}")


class NoAvailablePortError(PrerenderError):
    def __init__(self, start_port: int, attempts: int):
        self.start_port = start_port
        self.attempts = attempts
        super().__init__(
            f"No available port found in range {start_port}-{start_port + attempts - 1}"
        )


class ServerStartTimeoutError(PrerenderError):
    def __init__(self, port: int, attempts: int, detail: Optional[str] = None):
        self.port = port
        self.attempts = attempts
        msg = f"Server on port {port} did not start within {attempts} attempts"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class BrowserLaunchError(PrerenderError):
    pass


class NavigationError(PrerenderError):
    """A route could not be navigated, cleaned or serialized."""

    def __init__(self, url: str, cause: Exception, route: Optional[str] = None):
        self.url = url
        self.route = route
        self.cause = cause
        super().__init__(f"Failed to prerender {route or url}: {cause}")


__all__ = [
    "PrerenderError",
    "ConfigError",
    "BuildFolderNotFoundError",
    "BuildCommandError",
    "NoAvailablePortError",
    "ServerStartTimeoutError",
    "BrowserLaunchError",
    "NavigationError",
]
