"""Plugin configuration loader.

Config shape::

    {"config_version": 1,
     "plugins": [{"entrypoint": "pkg.module:Factory", "options": {...}, "enabled": true}]}
"""

from __future__ import annotations

import importlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from steppack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from steppack.plugins.exceptions import PluginConfigError, PluginLoadError
from steppack.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled"})


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """One validated entry of a plugin config file."""

    position: int
    module_name: str
    attribute: str
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def entrypoint(self) -> str:
        return f"{self.module_name}:{self.attribute}"


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Load a plugin manager from JSON config."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error

    entries = parse_plugin_entries(raw, source=str(config_path))
    return PluginManager(plugins=tuple(instantiate_plugin(entry) for entry in entries))


def parse_plugin_entries(raw: Any, *, source: str = "<memory>") -> list[PluginEntry]:
    """Validate a decoded config payload; disabled entries are dropped."""
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({source}).")

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            "Unsupported plugin config version "
            f"{version!r}; expected {PLUGIN_CONFIG_VERSION}."
        )

    payloads = raw.get("plugins")
    if not isinstance(payloads, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.")

    entries: list[PluginEntry] = []
    for position, payload in enumerate(payloads, start=1):
        entry = _parse_entry(payload, position=position)
        if entry is not None:
            entries.append(entry)
    return entries


def instantiate_plugin(entry: PluginEntry) -> object:
    """Import and build the plugin an entry points at, checking its API version."""
    try:
        module = importlib.import_module(entry.module_name)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{entry.position} failed to import module '{entry.module_name}': {error}"
        ) from error

    target = getattr(module, entry.attribute, None)
    if target is None:
        raise PluginLoadError(
            f"Plugin entry #{entry.position} could not find attribute "
            f"'{entry.attribute}' in '{entry.module_name}'."
        )

    if callable(target):
        try:
            plugin = target(**entry.options)
        except Exception as error:
            raise PluginLoadError(
                f"Plugin entry #{entry.position} failed to instantiate '{entry.entrypoint}' "
                f"with options {sorted(entry.options)}: {error}"
            ) from error
    elif entry.options:
        raise PluginLoadError(
            f"Plugin entry #{entry.position} uses non-callable '{entry.entrypoint}' "
            "and cannot accept options."
        )
    else:
        plugin = target

    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if _major(declared) != _major(PLUGIN_API_VERSION):
        raise PluginLoadError(
            f"Plugin entry #{entry.position} '{entry.entrypoint}' declares unsupported "
            f"api_version {declared!r}; supported major version is {_major(PLUGIN_API_VERSION)}."
        )
    return plugin


def _parse_entry(payload: Any, *, position: int) -> PluginEntry | None:
    if not isinstance(payload, dict):
        raise PluginConfigError(f"Plugin entry #{position} must be a JSON object.")

    unknown = sorted(set(payload) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{position} contains unsupported keys: {', '.join(unknown)}"
        )

    enabled = payload.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"Plugin entry #{position} key 'enabled' must be boolean.")
    if not enabled:
        return None

    entrypoint = payload.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(
            f"Plugin entry #{position} key 'entrypoint' must be 'module:attribute'."
        )

    options = payload.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"Plugin entry #{position} key 'options' must be a JSON object.")

    module_name, _, attribute = entrypoint.partition(":")
    return PluginEntry(
        position=position,
        module_name=module_name,
        attribute=attribute,
        options=dict(options),
    )


def _major(version: str) -> str:
    return version.split(".", 1)[0]
