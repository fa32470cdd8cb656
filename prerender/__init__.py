"""Prerender a built single-page app into static HTML.

Only lightweight imports happen here: the static-server child process imports
this package too and must not pull in Playwright. The orchestrator lives in
``prerender.pipeline``.
"""

from .core.errors import (  # noqa: F401
    BrowserLaunchError,
    BuildCommandError,
    BuildFolderNotFoundError,
    ConfigError,
    NavigationError,
    NoAvailablePortError,
    PrerenderError,
    ServerStartTimeoutError,
)
from .schemas.config import PrerenderConfig, Viewport  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "PrerenderConfig",
    "Viewport",
    "PrerenderError",
    "ConfigError",
    "BuildFolderNotFoundError",
    "BuildCommandError",
    "NoAvailablePortError",
    "ServerStartTimeoutError",
    "BrowserLaunchError",
    "NavigationError",
]
