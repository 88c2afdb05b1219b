import pytest

from steppack.config import RecorderConfig
from steppack.core import Step
from steppack.editor import ReferenceEditor
from steppack.plugins import LifecyclePlugin, PluginManager
from steppack.record import RecordingController
from steppack.selection import PLACEHOLDER

CONFIG = RecorderConfig(platform="other")


class _CollectingPlugin(LifecyclePlugin):
    name = "collect"

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def on_recording_start(self, event) -> None:
        self.events.append(("start", event))

    def on_recording_step(self, event) -> None:
        self.events.append(("step", event))

    def on_recording_stop(self, event) -> None:
        self.events.append(("stop", event))


@pytest.fixture
def editor() -> ReferenceEditor:
    return ReferenceEditor(["existing content", "second paragraph"])


@pytest.fixture
def controller(editor: ReferenceEditor):
    controller = RecordingController(
        editor,
        editor,
        config=CONFIG,
        plugin_manager=PluginManager(),
    )
    with controller:
        yield controller


def test_start_resets_editor_and_session(editor: ReferenceEditor, controller: RecordingController) -> None:
    controller.toggle()

    assert controller.is_recording is True
    assert controller.steps == ()
    assert editor.paragraphs == [""]
    assert editor.root.inner_html == f'<p><span data-outline-text="true">{PLACEHOLDER}</span></p>'
    assert controller.session.markup == editor.root.inner_html
    assert controller.current_selection().as_payload() == ((0, 0, 0), 0, (0, 0, 0), 0)


def test_restart_discards_previous_recording(editor: ReferenceEditor, controller: RecordingController) -> None:
    controller.toggle()
    editor.type_text("abc")
    controller.toggle()
    assert controller.steps == (Step("insertText", "abc"),)

    controller.toggle()

    assert controller.steps == ()
    assert editor.paragraphs == [""]


def test_stop_has_no_side_effects(editor: ReferenceEditor, controller: RecordingController) -> None:
    controller.toggle()
    editor.type_text("ok")
    controller.toggle()

    assert controller.is_recording is False
    assert editor.paragraphs == ["ok"]
    editor.type_text("!")
    assert controller.steps == (Step("insertText", "ok"),)


def test_typing_then_arrow_then_typing_end_to_end(
    editor: ReferenceEditor,
    controller: RecordingController,
) -> None:
    controller.toggle()
    editor.type_text("hi")
    editor.press("ArrowLeft")
    editor.type_text("!")

    assert controller.steps == (
        Step("insertText", "hi"),
        Step("moveBackward"),
        Step("insertText", "!"),
    )
    assert editor.paragraphs == ["h!i"]
    assert editor.get_selection().anchor_node is editor.text_node(0)

    fixture = controller.fixture_text()
    assert fixture is not None
    assert "    anchorPath: [0, 0, 0],\n    anchorOffset: 2,\n" in fixture
    assert "    focusPath: [0, 0, 0],\n    focusOffset: 2,\n" in fixture
    assert '<p><span data-outline-text="true">h!i</span></p></div>' in fixture


def test_click_records_native_selection_and_coalesces(
    editor: ReferenceEditor,
    controller: RecordingController,
) -> None:
    controller.toggle()
    editor.type_text("abc")
    editor.press("Enter")
    editor.type_text("de")
    editor.click(0, 1)
    editor.click(0, 2)

    assert controller.steps == (
        Step("insertText", "abc"),
        Step("insertParagraph"),
        Step("insertText", "de"),
        Step("moveNativeSelection", ((0, 0, 0), 2, (0, 0, 0), 2)),
    )


def test_arrow_key_does_not_double_record_selection(
    editor: ReferenceEditor,
    controller: RecordingController,
) -> None:
    controller.toggle()
    editor.type_text("ab")
    editor.press("ArrowLeft")
    editor.click(0, 0)

    assert [step.kind for step in controller.steps] == [
        "insertText",
        "moveBackward",
        "moveNativeSelection",
    ]


def test_blur_hides_fixture_and_skips_selection_step(
    editor: ReferenceEditor,
    controller: RecordingController,
) -> None:
    controller.toggle()
    editor.type_text("x")
    editor.blur()

    assert controller.steps == (Step("insertText", "x"),)
    assert controller.current_selection() is None
    assert controller.fixture_text() is None

    editor.click(0, 1)
    assert controller.fixture_text() is not None
    assert controller.steps[-1] == Step("moveNativeSelection", ((0, 0, 0), 1, (0, 0, 0), 1))


def test_fixture_after_non_editing_first_step_shows_empty_paragraph(
    editor: ReferenceEditor,
    controller: RecordingController,
) -> None:
    controller.toggle()
    editor.press("b", ctrl=True)

    assert controller.steps == (Step("formatBold"),)
    fixture = controller.fixture_text()
    assert fixture is not None
    assert (
        "expectedHTML: '<div contenteditable=\"true\" data-outline-editor=\"true\" dir=\"ltr\">"
        '<p><span data-outline-text="true"></span></p></div>'
    ) in fixture
    assert "    anchorPath: [0, 0, 0],\n    anchorOffset: 0,\n" in fixture


def test_edge_arrow_suppresses_the_following_click(
    editor: ReferenceEditor,
    controller: RecordingController,
) -> None:
    controller.toggle()
    editor.type_text("ab")
    editor.press("ArrowRight")
    editor.click(0, 0)
    editor.click(0, 1)

    assert controller.steps == (
        Step("insertText", "ab"),
        Step("moveForward"),
        Step("moveNativeSelection", ((0, 0, 0), 1, (0, 0, 0), 1)),
    )


def test_no_fixture_before_first_step(controller: RecordingController) -> None:
    controller.toggle()

    assert controller.fixture_text() is None


def test_unrecognized_keys_record_nothing(editor: ReferenceEditor, controller: RecordingController) -> None:
    controller.toggle()
    editor.press("Shift", shift=True)
    editor.press("ArrowUp")
    editor.press("Escape")

    assert controller.steps == ()


def test_toggle_shortcut_starts_and_stops(editor: ReferenceEditor, controller: RecordingController) -> None:
    editor.press("k", ctrl=True)
    assert controller.is_recording is True
    assert editor.paragraphs == [""]

    editor.type_text("q")
    editor.press("K", meta=True)

    assert controller.is_recording is False
    assert controller.steps == (Step("insertText", "q"),)


def test_toggle_shortcut_works_while_editor_is_blurred(
    editor: ReferenceEditor,
    controller: RecordingController,
) -> None:
    editor.blur()
    editor.press("k", ctrl=True)
    assert controller.is_recording is True

    editor.type_text("ab")
    editor.blur()
    editor.press("x")
    editor.press("k", meta=True)

    assert controller.is_recording is False
    assert controller.steps == (Step("insertText", "ab"),)
    assert editor.paragraphs == ["ab"]


def test_detach_stops_listening(editor: ReferenceEditor) -> None:
    controller = RecordingController(editor, editor, config=CONFIG, plugin_manager=PluginManager())
    controller.attach()
    controller.toggle()
    controller.detach()

    editor.type_text("ignored")

    assert controller.steps == ()


def test_lifecycle_events_reach_plugins(editor: ReferenceEditor) -> None:
    plugin = _CollectingPlugin()
    controller = RecordingController(
        editor,
        editor,
        config=RecorderConfig(platform="other", test_name="events"),
        plugin_manager=PluginManager(plugins=(plugin,)),
    )
    with controller:
        controller.toggle()
        editor.type_text("ab")
        editor.press("Backspace")
        controller.toggle()

    hooks = [hook for hook, _ in plugin.events]
    assert hooks == ["start", "step", "step", "step", "stop"]

    start = plugin.events[0][1]
    assert start.session_id == "recording-000001"
    assert start.test_name == "events"

    steps = [event for hook, event in plugin.events if hook == "step"]
    assert [(event.kind, event.payload, event.coalesced) for event in steps] == [
        ("insertText", "a", False),
        ("insertText", "ab", True),
        ("deleteBackward", None, False),
    ]
    assert [event.step_index for event in steps] == [0, 0, 1]
    assert [event.rendered for event in steps] == ['insertText("a")', 'insertText("ab")', "deleteBackward()"]

    stop = plugin.events[-1][1]
    assert stop.step_count == 2
    assert stop.fixture_available is True
    assert stop.fixture.startswith("{\n  name: 'events',\n")
