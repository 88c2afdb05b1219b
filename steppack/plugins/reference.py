"""Reference plugin that logs one summary line per finished recording."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from steppack.plugins.base import (
    LifecyclePlugin,
    RecordingStartEvent,
    RecordingStepEvent,
    RecordingStopEvent,
)


@dataclass(slots=True)
class LifecycleTracePlugin(LifecyclePlugin):
    """Collects each recording's final inputs and appends them as NDJSON on stop.

    Coalesced steps overwrite their slot, so the logged ``inputs`` match the
    fixture's ``inputs`` list. With ``fixture_dir`` set, the rendered fixture is
    also written to ``<fixture_dir>/<session_id>.txt``.
    """

    output_path: str = "fixtures/plugins/recording-trace.ndjson"
    fixture_dir: str | None = None
    name: str = "recording-trace"
    _test_names: dict[str, str] = field(default_factory=dict, init=False, repr=False)
    _inputs: dict[str, list[str]] = field(default_factory=dict, init=False, repr=False)
    _coalesced: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def on_recording_start(self, event: RecordingStartEvent) -> None:
        self._test_names[event.session_id] = event.test_name
        self._inputs[event.session_id] = []
        self._coalesced[event.session_id] = 0

    def on_recording_step(self, event: RecordingStepEvent) -> None:
        inputs = self._inputs.setdefault(event.session_id, [])
        if event.step_index < len(inputs):
            inputs[event.step_index] = event.rendered
        else:
            inputs.append(event.rendered)
        if event.coalesced:
            self._coalesced[event.session_id] = self._coalesced.get(event.session_id, 0) + 1

    def on_recording_stop(self, event: RecordingStopEvent) -> None:
        record = {
            "session_id": event.session_id,
            "test_name": self._test_names.pop(event.session_id, None),
            "inputs": self._inputs.pop(event.session_id, []),
            "coalesced": self._coalesced.pop(event.session_id, 0),
            "fixture_path": self._write_fixture(event),
        }
        path = Path(self.output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, sort_keys=True) + "\n")

    def _write_fixture(self, event: RecordingStopEvent) -> str | None:
        if self.fixture_dir is None or event.fixture is None:
            return None
        fixture_path = Path(self.fixture_dir) / f"{event.session_id}.txt"
        fixture_path.parent.mkdir(parents=True, exist_ok=True)
        fixture_path.write_text(event.fixture, encoding="utf-8")
        return str(fixture_path)
