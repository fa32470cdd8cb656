from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OUT_DIR = "static-pages"
DEFAULT_SERVE_DIR = "build"
DEFAULT_BUILD_COMMAND = "npm run build"


class Viewport(BaseModel):
    width: int = Field(..., gt=0, description="Viewport width in CSS pixels")
    height: int = Field(..., gt=0, description="Viewport height in CSS pixels")

    model_config = ConfigDict(frozen=True)


class PrerenderConfig(BaseModel):
    """Resolved per-site options. Field names mirror the config file keys."""

    routes: List[str]
    outDir: str = DEFAULT_OUT_DIR
    serveDir: str = DEFAULT_SERVE_DIR
    flatOutput: bool = False
    buildCommand: str = DEFAULT_BUILD_COMMAND
    skipPrerenderSelector: Optional[str] = None
    viewport: Optional[Viewport] = None

    @field_validator("routes")
    def routes_are_paths(cls, v: List[str]):  # type: ignore[override]
        for route in v:
            if not isinstance(route, str) or not route.startswith("/"):
                raise ValueError(f"route must start with '/': {route!r}")
        return v

    @field_validator("skipPrerenderSelector")
    def blank_selector_is_none(cls, v: Optional[str]):  # type: ignore[override]
        if v is not None and not v.strip():
            return None
        return v

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "routes": ["/", "/about", "/blog/getting-started"],
                "outDir": "static-pages",
                "serveDir": "build",
                "flatOutput": False,
                "buildCommand": "npm run build",
                "skipPrerenderSelector": "[data-skip-prerender]",
                "viewport": {"width": 1280, "height": 800},
            }
        },
    )

__all__ = ["PrerenderConfig", "Viewport", "DEFAULT_OUT_DIR", "DEFAULT_SERVE_DIR", "DEFAULT_BUILD_COMMAND"]
