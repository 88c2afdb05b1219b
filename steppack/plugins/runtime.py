"""Resolution of the plugin manager a recording controller reports to."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import os
from pathlib import Path
from typing import Iterator

from steppack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from steppack.plugins.loader import load_plugin_manager_from_file
from steppack.plugins.manager import PluginManager

_OVERRIDE: ContextVar[PluginManager | None] = ContextVar(
    "steppack_plugin_manager_override",
    default=None,
)


class _EnvPluginCache:
    """Loads the env-configured manager once per distinct config path."""

    def __init__(self) -> None:
        self._path: str | None = None
        self._manager: PluginManager | None = None

    def get(self, config_path: str) -> PluginManager:
        if self._manager is None or self._path != config_path:
            self._manager = load_plugin_manager_from_file(config_path)
            self._path = config_path
        return self._manager

    def clear(self) -> None:
        self._path = None
        self._manager = None


_ENV_CACHE = _EnvPluginCache()


def get_active_plugin_manager() -> PluginManager:
    """Context override first, then ``STEPKIT_PLUGIN_CONFIG``, then no plugins."""
    manager = _OVERRIDE.get()
    if manager is not None:
        return manager

    config_path = os.getenv(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if config_path:
        return _ENV_CACHE.get(config_path)
    return PluginManager()


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    token = _OVERRIDE.set(manager)
    try:
        yield manager
    finally:
        _OVERRIDE.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[PluginManager]:
    with use_plugin_manager(load_plugin_manager_from_file(path)) as manager:
        yield manager


def reset_plugin_runtime_cache() -> None:
    """Forget the env-loaded manager (tests flip the env var between cases)."""
    _ENV_CACHE.clear()
