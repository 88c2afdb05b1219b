"""Routes recording lifecycle events to plugins, isolating plugin faults."""

from __future__ import annotations

from dataclasses import dataclass, field
import warnings

from steppack.plugins.base import (
    RecordingEvent,
    RecordingStartEvent,
    RecordingStepEvent,
    RecordingStopEvent,
)

_HOOKS: dict[type, str] = {
    RecordingStartEvent: "on_recording_start",
    RecordingStepEvent: "on_recording_step",
    RecordingStopEvent: "on_recording_stop",
}


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    plugin_name: str
    hook: str
    session_id: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "plugin_name": self.plugin_name,
            "hook": self.hook,
            "session_id": self.session_id,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class PluginManager:
    """Delivers recording events to plugins.

    A plugin that raises is recorded as a diagnostic and muted for the rest of
    that recording session; it receives events again from the next start.
    """

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)
    _muted: set[tuple[str, int]] = field(default_factory=set, init=False, repr=False)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def is_muted(self, plugin: object, session_id: str) -> bool:
        return (session_id, id(plugin)) in self._muted

    def emit(self, event: RecordingEvent) -> None:
        hook = _HOOKS[type(event)]
        if isinstance(event, RecordingStartEvent):
            self._muted = {key for key in self._muted if key[0] != event.session_id}

        for plugin in self.plugins:
            if self.is_muted(plugin, event.session_id):
                continue
            callback = getattr(plugin, hook, None)
            if callback is None:
                continue
            try:
                callback(event)
            except Exception as error:
                self._mute(plugin, hook, event.session_id, error)

    def _mute(self, plugin: object, hook: str, session_id: str, error: Exception) -> None:
        self._muted.add((session_id, id(plugin)))
        diagnostic = PluginDiagnostic(
            plugin_name=str(getattr(plugin, "name", type(plugin).__name__)),
            hook=hook,
            session_id=session_id,
            error_type=type(error).__name__,
            message=str(error),
        )
        self.diagnostics.append(diagnostic)
        warnings.warn(
            f"stepkit plugin failure: {diagnostic.plugin_name}.{hook} muted for "
            f"{session_id} ({diagnostic.error_type}: {diagnostic.message})",
            RuntimeWarning,
            stacklevel=3,
        )
