"""Recording session state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from steppack.core.models import Step
from steppack.record.recorder import record_step


@dataclass(frozen=True, slots=True)
class RecordingSession:
    """Snapshot of everything the recorder knows about one recording.

    Sessions are immutable; every transition returns a new instance so tests
    can compare whole snapshots.
    """

    steps: tuple[Step, ...] = ()
    is_recording: bool = False
    last_selection_ref: object | None = None
    suppress_next_selection_capture: bool = False
    markup: str | None = None

    def record(self, kind: str, payload: Any = None) -> "RecordingSession":
        return replace(self, steps=record_step(self.steps, kind, payload))

    def started(self, markup: str | None = None) -> "RecordingSession":
        """Fresh recording; any previous snapshot is replaced by ``markup``."""
        return replace(
            self,
            steps=(),
            markup=markup,
            suppress_next_selection_capture=False,
            is_recording=True,
        )

    def stopped(self) -> "RecordingSession":
        return replace(self, is_recording=False)
