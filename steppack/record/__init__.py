"""Step recording: coalescing, selection observation, session lifecycle."""

from steppack.record.controller import RecordingController
from steppack.record.observer import observe_update, should_capture_selection
from steppack.record.recorder import coalesces_with_last, record_step
from steppack.record.state import RecordingSession
from steppack.record.transitions import (
    EditorUpdate,
    KeyDown,
    SessionEvent,
    ToggleRecording,
    apply,
)

__all__ = [
    "EditorUpdate",
    "KeyDown",
    "RecordingController",
    "RecordingSession",
    "SessionEvent",
    "ToggleRecording",
    "apply",
    "coalesces_with_last",
    "observe_update",
    "record_step",
    "should_capture_selection",
]
