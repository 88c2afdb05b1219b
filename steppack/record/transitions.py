"""Pure session transition function over recorder events."""

from __future__ import annotations

from dataclasses import dataclass, replace

from steppack.core.models import SelectionSnapshot
from steppack.core.types import NAVIGATION_KINDS
from steppack.editor.base import UpdateNotification
from steppack.input.classifier import classify
from steppack.input.hotkeys import KeyEvent
from steppack.record.observer import observe_update
from steppack.record.state import RecordingSession


@dataclass(frozen=True, slots=True)
class KeyDown:
    event: KeyEvent
    apple: bool = False


@dataclass(frozen=True, slots=True)
class EditorUpdate:
    notification: UpdateNotification
    markup: str | None = None
    selection: SelectionSnapshot | None = None


@dataclass(frozen=True, slots=True)
class ToggleRecording:
    """Start or stop; ``markup`` is the editor content right after the start reset."""

    markup: str | None = None


SessionEvent = KeyDown | EditorUpdate | ToggleRecording


def apply(session: RecordingSession, event: SessionEvent) -> RecordingSession:
    if isinstance(event, KeyDown):
        return _apply_key_down(session, event)
    if isinstance(event, EditorUpdate):
        return _apply_editor_update(session, event)
    if isinstance(event, ToggleRecording):
        return session.stopped() if session.is_recording else session.started(event.markup)
    raise TypeError(f"Unsupported session event: {event!r}")


def _apply_key_down(session: RecordingSession, event: KeyDown) -> RecordingSession:
    if not session.is_recording:
        return session

    kind = classify(event.event, apple=event.apple)
    if kind is None:
        return session

    payload = event.event.key if kind == "insertText" else None
    next_session = session.record(kind, payload)
    if kind in NAVIGATION_KINDS:
        next_session = replace(next_session, suppress_next_selection_capture=True)
    return next_session


def _apply_editor_update(session: RecordingSession, event: EditorUpdate) -> RecordingSession:
    next_session = observe_update(session, event.notification, event.selection)
    if next_session.is_recording and event.markup is not None:
        next_session = replace(next_session, markup=event.markup)
    return next_session
