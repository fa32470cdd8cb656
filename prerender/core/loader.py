"""Locate and resolve the prerender configuration.

A config source may be a plain mapping, a ``PrerenderConfig``, a zero-argument
callable returning either, or an awaitable (including an async function's
result), which lets a project compute its routes from files, APIs or a
database. ``resolve_config`` unwraps all of these and validates the result.

On disk the config lives in ``prerender.config.json`` or ``prerender.config.py``
(the latter exposing a module-level ``config``).
"""
from __future__ import annotations

import importlib.util
import inspect
import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from prerender.core.errors import ConfigError
from prerender.schemas.config import PrerenderConfig

CONFIG_FILENAMES = ("prerender.config.json", "prerender.config.py")
CONFIG_ATTRIBUTE = "config"


def find_config_file(cwd: Union[str, Path, None] = None) -> Optional[Path]:
    base = Path(cwd) if cwd is not None else Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def _load_python_source(path: Path) -> Any:
    spec = importlib.util.spec_from_file_location(f"_prerender_config_{path.stem.replace('.', '_')}", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import config module: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # noqa: BLE001 - surface any import-time failure as a config problem
        raise ConfigError(f"Error while importing {path}: {exc}") from exc
    if not hasattr(module, CONFIG_ATTRIBUTE):
        raise ConfigError(f"{path} does not define '{CONFIG_ATTRIBUTE}'")
    return getattr(module, CONFIG_ATTRIBUTE)


def load_config_source(path: Union[str, Path]) -> Any:
    """Read the raw (unresolved) config object from a file."""
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Config file not found: {p}")
    if p.suffix == ".json":
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {p}: {exc}") from exc
    if p.suffix == ".py":
        return _load_python_source(p)
    raise ConfigError(f"Unsupported config file type: {p.suffix or p.name}")


async def resolve_config(source: Any) -> PrerenderConfig:
    value = source
    try:
        if callable(value) and not isinstance(value, PrerenderConfig):
            value = value()
        if inspect.isawaitable(value):
            value = await value
    except Exception as exc:  # noqa: BLE001 - user code producing the config failed
        raise ConfigError(f"Config source raised {type(exc).__name__}: {exc}") from exc
    if isinstance(value, PrerenderConfig):
        return value
    if not isinstance(value, dict):
        raise ConfigError(f"Config must be a mapping, got {type(value).__name__}")
    try:
        return PrerenderConfig.model_validate(value)
    except ValidationError as exc:
        raise ConfigError(f"Invalid prerender config:\n{exc}") from exc


async def load_config(path: Union[str, Path, None] = None, cwd: Union[str, Path, None] = None) -> PrerenderConfig:
    if path is None:
        path = find_config_file(cwd)
        if path is None:
            raise ConfigError(
                f"No config file found (looked for {', '.join(CONFIG_FILENAMES)})"
            )
    return await resolve_config(load_config_source(path))


__all__ = ["CONFIG_FILENAMES", "find_config_file", "load_config_source", "resolve_config", "load_config"]
