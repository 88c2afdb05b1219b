"""Recording lifecycle bound to a live editor."""

from __future__ import annotations

from steppack.config import DEFAULT_RECORDER_CONFIG, RecorderConfig
from steppack.core.models import SelectionSnapshot, Step
from steppack.editor.base import EditorHost, RemoveListener, SelectionProvider, UpdateNotification
from steppack.fixture.serializer import render_fixture, render_step
from steppack.input.hotkeys import KeyEvent
from steppack.plugins import (
    PluginManager,
    RecordingStartEvent,
    RecordingStepEvent,
    RecordingStopEvent,
    get_active_plugin_manager,
)
from steppack.record.state import RecordingSession
from steppack.record.transitions import (
    EditorUpdate,
    KeyDown,
    SessionEvent,
    ToggleRecording,
    apply,
)
from steppack.selection.paths import snapshot_selection


class RecordingController:
    """Owns the recording session for one editor and routes its events.

    All session mutation goes through :func:`apply`, always against the
    latest committed session.
    """

    def __init__(
        self,
        editor: EditorHost,
        selection_provider: SelectionProvider,
        *,
        config: RecorderConfig | None = None,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self.editor = editor
        self.selection_provider = selection_provider
        self.config = config or DEFAULT_RECORDER_CONFIG
        self.plugin_manager = plugin_manager or get_active_plugin_manager()
        self.session = RecordingSession()
        self._recording_count = 0
        self._remove_listeners: list[RemoveListener] = []

    @property
    def is_recording(self) -> bool:
        return self.session.is_recording

    @property
    def steps(self) -> tuple[Step, ...]:
        return self.session.steps

    @property
    def session_id(self) -> str:
        return f"recording-{self._recording_count:06d}"

    def attach(self) -> None:
        if self._remove_listeners:
            return
        self._remove_listeners = [
            self.editor.add_key_listener(self.handle_key),
            self.editor.add_update_listener(self.handle_update),
            self.editor.add_document_key_listener(self.handle_document_key),
        ]

    def detach(self) -> None:
        while self._remove_listeners:
            self._remove_listeners.pop()()

    def __enter__(self) -> "RecordingController":
        self.attach()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.detach()

    def toggle(self) -> None:
        if self.session.is_recording:
            self._commit(ToggleRecording())
            self.plugin_manager.emit(
                RecordingStopEvent(
                    session_id=self.session_id,
                    step_count=len(self.session.steps),
                    fixture=self.fixture_text(),
                )
            )
            return

        # The reset update lands while still stopped, so the canonical content
        # is handed to the start transition as the first markup snapshot.
        self.editor.replace_with_empty_paragraph()
        self._recording_count += 1
        self._commit(ToggleRecording(markup=self._root_markup()))
        self.plugin_manager.emit(
            RecordingStartEvent(session_id=self.session_id, test_name=self.config.test_name)
        )

    def is_toggle_shortcut(self, event: KeyEvent) -> bool:
        return event.key.lower() == self.config.toggle_key and (event.ctrl or event.meta)

    def handle_document_key(self, event: KeyEvent) -> None:
        if self.is_toggle_shortcut(event):
            self.toggle()

    def handle_key(self, event: KeyEvent) -> None:
        # The shortcut is handled at document level and never recorded.
        if self.is_toggle_shortcut(event):
            return
        self._commit(KeyDown(event=event, apple=self.config.apple))

    def handle_update(self, notification: UpdateNotification) -> None:
        self._commit(
            EditorUpdate(
                notification=notification,
                markup=self._root_markup(),
                selection=self.current_selection(),
            )
        )

    def current_selection(self) -> SelectionSnapshot | None:
        return snapshot_selection(self.selection_provider.get_selection(), self.editor.root)

    def fixture_text(self) -> str | None:
        """Fixture for display; None until a step exists or while focus is outside the editor."""
        if not self.session.steps:
            return None
        return render_fixture(
            self.session.steps,
            self.session.markup,
            self.current_selection(),
            config=self.config,
        )

    def _root_markup(self) -> str | None:
        root = self.editor.root
        return root.inner_html if root is not None else None

    def _commit(self, event: SessionEvent) -> None:
        previous = self.session
        self.session = apply(previous, event)
        self._report_step(previous.steps, self.session.steps)

    def _report_step(self, before: tuple[Step, ...], after: tuple[Step, ...]) -> None:
        if not self.session.is_recording or not after or before == after:
            return
        coalesced = len(after) == len(before)
        self.plugin_manager.emit(
            RecordingStepEvent(
                session_id=self.session_id,
                step_index=len(after) - 1,
                kind=after[-1].kind,
                payload=after[-1].to_dict()["payload"],
                rendered=render_step(after[-1]),
                coalesced=coalesced,
            )
        )
