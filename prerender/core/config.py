from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime knobs, read from ``PRERENDER_*`` environment variables or ``.env``.

    Per-site options (routes, output layout) live in the config file instead;
    see ``prerender.schemas.config.PrerenderConfig``.
    """

    debug: bool = False
    host: str = "localhost"
    start_port: int = 5050
    port_attempts: int = 100
    ready_attempts: int = 30
    ready_interval: float = 1.0
    stop_grace_seconds: float = 2.0
    navigation_timeout_ms: float = 30_000
    # Shell template replacing the bundled server, e.g. "npx serve -s {directory} -l {port}"
    serve_command: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="PRERENDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()

__all__ = ["Settings", "get_settings"]
