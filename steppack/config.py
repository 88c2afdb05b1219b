"""Recorder configuration and its JSON loader."""

from __future__ import annotations

import json
import os
import platform as platform_module
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Mapping

from steppack.exceptions import RecorderError

RECORDER_CONFIG_VERSION = 1
RECORDER_CONFIG_ENV_VAR = "STEPKIT_CONFIG"

DEFAULT_TEST_NAME = "<YOUR TEST NAME>"
DEFAULT_EDITOR_ATTRIBUTES = 'contenteditable="true" data-outline-editor="true" dir="ltr"'

PlatformName = Literal["auto", "apple", "other"]
_PLATFORM_NAMES = ("auto", "apple", "other")


class RecorderConfigError(RecorderError, ValueError):
    """Raised when a recorder config payload is invalid."""


@dataclass(frozen=True, slots=True)
class RecorderConfig:
    """Settings shared by the recorder, its hotkeys and the fixture renderer."""

    test_name: str = DEFAULT_TEST_NAME
    platform: PlatformName = "auto"
    toggle_key: str = "k"
    editor_attributes: str = DEFAULT_EDITOR_ATTRIBUTES

    @property
    def apple(self) -> bool:
        if self.platform == "auto":
            return platform_module.system() == "Darwin"
        return self.platform == "apple"


DEFAULT_RECORDER_CONFIG = RecorderConfig()


def recorder_config_from_mapping(
    config: Mapping[str, Any],
    *,
    base_config: RecorderConfig = DEFAULT_RECORDER_CONFIG,
) -> RecorderConfig:
    """Create a recorder config from a parsed mapping, layered over ``base_config``."""
    supported_keys = {
        "config_version",
        "test_name",
        "platform",
        "toggle_key",
        "editor_attributes",
    }
    unknown = sorted(set(config.keys()) - supported_keys)
    if unknown:
        raise RecorderConfigError("Unsupported recorder config keys: " + ", ".join(unknown))

    version = config.get("config_version", RECORDER_CONFIG_VERSION)
    if version != RECORDER_CONFIG_VERSION:
        raise RecorderConfigError(
            "Unsupported recorder config version "
            f"{version!r}; expected {RECORDER_CONFIG_VERSION}."
        )

    test_name = _read_string(config, key="test_name", default=base_config.test_name)
    if not test_name.strip():
        raise RecorderConfigError("recorder config key 'test_name' cannot be empty.")

    platform_name = _read_string(config, key="platform", default=base_config.platform)
    if platform_name not in _PLATFORM_NAMES:
        raise RecorderConfigError(
            "recorder config key 'platform' must be one of: " + ", ".join(_PLATFORM_NAMES)
        )

    toggle_key = _read_string(config, key="toggle_key", default=base_config.toggle_key)
    if len(toggle_key) != 1:
        raise RecorderConfigError("recorder config key 'toggle_key' must be a single character.")

    editor_attributes = _read_string(
        config,
        key="editor_attributes",
        default=base_config.editor_attributes,
    )

    return RecorderConfig(
        test_name=test_name,
        platform=platform_name,  # type: ignore[arg-type]
        toggle_key=toggle_key.lower(),
        editor_attributes=editor_attributes.strip(),
    )


def load_recorder_config(
    path: str | Path,
    *,
    base_config: RecorderConfig = DEFAULT_RECORDER_CONFIG,
) -> RecorderConfig:
    """Load recorder config from a JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as error:
        raise RecorderConfigError(f"Invalid recorder config JSON ({config_path}): {error}") from error

    if not isinstance(raw, dict):
        raise RecorderConfigError(f"Recorder config must be a JSON object ({config_path}).")

    return recorder_config_from_mapping(raw, base_config=base_config)


def resolve_recorder_config(path: str | Path | None = None) -> RecorderConfig:
    """Load config from ``path``, else from the env var, else defaults."""
    if path is not None:
        return load_recorder_config(path)
    env_path = os.getenv(RECORDER_CONFIG_ENV_VAR, "").strip()
    if env_path:
        return load_recorder_config(env_path)
    return DEFAULT_RECORDER_CONFIG


def _read_string(config: Mapping[str, Any], *, key: str, default: str) -> str:
    value = config.get(key, default)
    if not isinstance(value, str):
        raise RecorderConfigError(f"recorder config key '{key}' must be a string.")
    return value
