import json
from pathlib import Path

import pytest

from steppack.config import RecorderConfig
from steppack.core import Step
from steppack.input import KeyEvent
from steppack.script import (
    EventScriptError,
    load_event_script,
    parse_event_script,
    run_event_script,
)


def _script(events: list[dict], **extra: object) -> dict:
    return {"script_version": 1, "events": events, **extra}


def test_parse_event_script() -> None:
    script = parse_event_script(
        _script(
            [
                {"type": "key", "key": "b", "ctrl": True},
                {"type": "click", "paragraph": 1, "offset": 2},
                {"type": "blur"},
                {"type": "toggle"},
            ],
            paragraphs=["one", "two"],
        )
    )

    assert script.paragraphs == ("one", "two")
    assert [event.type for event in script.events] == ["key", "click", "blur", "toggle"]
    assert script.events[0].key == KeyEvent(key="b", ctrl=True)
    assert (script.events[1].paragraph, script.events[1].offset) == (1, 2)


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ([], "must be a JSON object"),
        ({"script_version": 3, "events": []}, "Unsupported event script version"),
        ({"script_version": 1}, "'events' must be a JSON array"),
        (_script([{"type": "scroll"}]), "unsupported type 'scroll'"),
        (_script([{"type": "key"}]), "non-empty string"),
        (_script([{"type": "key", "key": "a", "shift": "yes"}]), "'shift' must be boolean"),
        (_script([{"type": "click", "paragraph": -1}]), "non-negative integers"),
        (_script([], paragraphs=[1]), "array of strings"),
    ],
)
def test_invalid_scripts_are_rejected(raw: object, message: str) -> None:
    with pytest.raises(EventScriptError, match=message):
        parse_event_script(raw)


def test_run_event_script_records_fixture() -> None:
    script = parse_event_script(
        _script(
            [
                {"type": "key", "key": "h"},
                {"type": "key", "key": "i"},
                {"type": "key", "key": "ArrowLeft"},
                {"type": "key", "key": "!"},
            ],
            paragraphs=["previous content"],
        )
    )

    result = run_event_script(script, config=RecorderConfig(platform="other"))

    assert result.steps == (
        Step("insertText", "hi"),
        Step("moveBackward"),
        Step("insertText", "!"),
    )
    assert result.text == "h!i"
    assert result.is_recording is True
    assert result.fixture is not None
    assert "anchorOffset: 2," in result.fixture


def test_run_event_script_without_autostart_records_nothing() -> None:
    script = parse_event_script(_script([{"type": "key", "key": "a"}]))

    result = run_event_script(script, autostart=False)

    assert result.steps == ()
    assert result.fixture is None
    assert result.text == "a"


def test_blur_at_end_of_script_yields_no_fixture() -> None:
    script = parse_event_script(_script([{"type": "key", "key": "a"}, {"type": "blur"}]))

    result = run_event_script(script)

    assert result.steps == (Step("insertText", "a"),)
    assert result.fixture is None


def test_result_to_dict_is_json_serializable() -> None:
    script = parse_event_script(
        _script([{"type": "key", "key": "a"}, {"type": "click", "paragraph": 0, "offset": 0}])
    )

    payload = run_event_script(script).to_dict()

    assert json.loads(json.dumps(payload))["steps"] == [
        {"kind": "insertText", "payload": "a"},
        {"kind": "moveNativeSelection", "payload": [[0, 0, 0], 0, [0, 0, 0], 0]},
    ]


def test_load_event_script_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "script.json"
    path.write_text("[", encoding="utf-8")

    with pytest.raises(EventScriptError, match="Invalid event script JSON"):
        load_event_script(path)
