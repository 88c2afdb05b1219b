"""Scripted interaction playback against the reference editor.

Event script format::

    {"script_version": 1,
     "paragraphs": ["optional", "initial content"],
     "events": [
        {"type": "key", "key": "h"},
        {"type": "key", "key": "ArrowLeft", "shift": false},
        {"type": "click", "paragraph": 0, "offset": 1},
        {"type": "blur"},
        {"type": "toggle"}
     ]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from steppack.config import DEFAULT_RECORDER_CONFIG, RecorderConfig
from steppack.core.models import Step
from steppack.editor.reference import ReferenceEditor
from steppack.exceptions import RecorderError
from steppack.input.hotkeys import KeyEvent
from steppack.plugins import PluginManager
from steppack.record.controller import RecordingController

EVENT_SCRIPT_VERSION = 1
_MODIFIERS = ("ctrl", "meta", "alt", "shift")


class EventScriptError(RecorderError, ValueError):
    """Raised when an event script is malformed."""


@dataclass(frozen=True, slots=True)
class ScriptEvent:
    type: str
    key: KeyEvent | None = None
    paragraph: int = 0
    offset: int = 0


@dataclass(frozen=True, slots=True)
class EventScript:
    events: tuple[ScriptEvent, ...]
    paragraphs: tuple[str, ...] = ("",)


@dataclass(slots=True)
class ScriptResult:
    steps: tuple[Step, ...]
    fixture: str | None
    is_recording: bool
    text: str
    diagnostics: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "steps": [step.to_dict() for step in self.steps],
            "fixture": self.fixture,
            "is_recording": self.is_recording,
            "text": self.text,
            "plugin_diagnostics": list(self.diagnostics),
        }


def parse_event_script(raw: Any) -> EventScript:
    if not isinstance(raw, dict):
        raise EventScriptError("Event script must be a JSON object.")

    version = raw.get("script_version")
    if version != EVENT_SCRIPT_VERSION:
        raise EventScriptError(
            f"Unsupported event script version {version!r}; expected {EVENT_SCRIPT_VERSION}."
        )

    paragraphs = raw.get("paragraphs", [""])
    if not isinstance(paragraphs, list) or not all(isinstance(item, str) for item in paragraphs):
        raise EventScriptError("Event script key 'paragraphs' must be a JSON array of strings.")

    payloads = raw.get("events")
    if not isinstance(payloads, list):
        raise EventScriptError("Event script key 'events' must be a JSON array.")

    events = tuple(
        _parse_event(payload, index=index) for index, payload in enumerate(payloads, start=1)
    )
    return EventScript(events=events, paragraphs=tuple(paragraphs) or ("",))


def load_event_script(path: str | Path) -> EventScript:
    script_path = Path(path)
    try:
        raw = json.loads(script_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise EventScriptError(f"Invalid event script JSON ({script_path}): {error}") from error
    return parse_event_script(raw)


def run_event_script(
    script: EventScript,
    *,
    config: RecorderConfig = DEFAULT_RECORDER_CONFIG,
    plugin_manager: PluginManager | None = None,
    autostart: bool = True,
) -> ScriptResult:
    """Play ``script`` on a fresh reference editor with a recorder attached."""
    editor = ReferenceEditor(script.paragraphs)
    controller = RecordingController(
        editor,
        editor,
        config=config,
        plugin_manager=plugin_manager,
    )
    with controller:
        if autostart:
            controller.toggle()
        for event in script.events:
            _play(editor, controller, event)
        fixture = controller.fixture_text()

    return ScriptResult(
        steps=controller.steps,
        fixture=fixture,
        is_recording=controller.is_recording,
        text=editor.text,
        diagnostics=[item.to_dict() for item in controller.plugin_manager.diagnostics],
    )


def _play(editor: ReferenceEditor, controller: RecordingController, event: ScriptEvent) -> None:
    if event.type == "key" and event.key is not None:
        editor.dispatch_key(event.key)
    elif event.type == "click":
        editor.click(event.paragraph, event.offset)
    elif event.type == "blur":
        editor.blur()
    elif event.type == "toggle":
        controller.toggle()


def _parse_event(payload: Any, *, index: int) -> ScriptEvent:
    if not isinstance(payload, dict):
        raise EventScriptError(f"Event #{index} must be a JSON object.")

    event_type = payload.get("type")
    if event_type == "key":
        key = payload.get("key")
        if not isinstance(key, str) or not key:
            raise EventScriptError(f"Event #{index} key 'key' must be a non-empty string.")
        for name in _MODIFIERS:
            if not isinstance(payload.get(name, False), bool):
                raise EventScriptError(f"Event #{index} key '{name}' must be boolean.")
        return ScriptEvent(type="key", key=KeyEvent.from_dict(payload))

    if event_type == "click":
        paragraph = payload.get("paragraph", 0)
        offset = payload.get("offset", 0)
        if not _is_index(paragraph) or not _is_index(offset):
            raise EventScriptError(
                f"Event #{index} keys 'paragraph' and 'offset' must be non-negative integers."
            )
        return ScriptEvent(type="click", paragraph=paragraph, offset=offset)

    if event_type in ("blur", "toggle"):
        return ScriptEvent(type=event_type)

    raise EventScriptError(
        f"Event #{index} has unsupported type {event_type!r}; expected key, click, blur or toggle."
    )


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
