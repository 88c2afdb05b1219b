"""Derives selection-moved steps from editor update notifications."""

from __future__ import annotations

from dataclasses import replace

from steppack.core.models import SelectionSnapshot
from steppack.editor.base import UpdateNotification
from steppack.record.state import RecordingSession


def should_capture_selection(session: RecordingSession, notification: UpdateNotification) -> bool:
    """True when a notification is a selection-only change worth recording.

    Structural updates already produced their own step from the keystroke
    that caused them, and navigation keys set the suppression flag for the
    same reason.
    """
    return (
        notification.selection_ref is not session.last_selection_ref
        and not notification.structural
        and session.is_recording
        and not session.suppress_next_selection_capture
    )


def observe_update(
    session: RecordingSession,
    notification: UpdateNotification,
    selection: SelectionSnapshot | None,
) -> RecordingSession:
    """Process one update notification.

    ``selection`` is the live selection already resolved against the editor
    root, or None when it has no endpoint inside the editor; emission is then
    skipped for this cycle. The suppression flag is consumed by every
    notification whether or not a step is emitted.
    """
    next_session = session
    if should_capture_selection(session, notification) and selection is not None:
        next_session = session.record("moveNativeSelection", selection.as_payload())

    return replace(
        next_session,
        last_selection_ref=notification.selection_ref,
        suppress_next_selection_capture=False,
    )
