"""Versioned plugin interfaces and recording lifecycle event payloads."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

PLUGIN_API_VERSION = "1.0"
PLUGIN_CONFIG_VERSION = 1
PLUGIN_CONFIG_ENV_VAR = "STEPKIT_PLUGIN_CONFIG"


@dataclass(frozen=True, slots=True)
class RecordingStartEvent:
    session_id: str
    test_name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class RecordingStepEvent:
    """Last step after a change; ``rendered`` is its fixture text, e.g. ``insertText("ab")``."""

    session_id: str
    step_index: int
    kind: str
    payload: Any
    rendered: str
    coalesced: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class RecordingStopEvent:
    session_id: str
    step_count: int
    fixture: str | None

    @property
    def fixture_available(self) -> bool:
        return self.fixture is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


RecordingEvent = RecordingStartEvent | RecordingStepEvent | RecordingStopEvent


class LifecyclePlugin:
    """Base no-op lifecycle plugin interface (API v1.x)."""

    api_version = PLUGIN_API_VERSION
    name = "lifecycle-plugin"

    def on_recording_start(self, event: RecordingStartEvent) -> None:
        return None

    def on_recording_step(self, event: RecordingStepEvent) -> None:
        return None

    def on_recording_stop(self, event: RecordingStopEvent) -> None:
        return None
