import json
import re
from pathlib import Path

from typer.testing import CliRunner

import stepkit
from steppack.cli.app import app


def _write_script(path: Path, events: list[dict]) -> Path:
    path.write_text(json.dumps({"script_version": 1, "events": events}), encoding="utf-8")
    return path


def _typing_script(path: Path) -> Path:
    return _write_script(
        path,
        [
            {"type": "key", "key": "h"},
            {"type": "key", "key": "i"},
            {"type": "key", "key": "ArrowLeft"},
            {"type": "key", "key": "!"},
        ],
    )


def test_cli_version_option_reports_semver_like_value() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    reported = result.output.strip()
    assert re.fullmatch(r"\d+\.\d+\.\d+", reported) is not None
    assert reported == stepkit.__version__


def test_cli_record_prints_fixture(tmp_path: Path) -> None:
    script = _typing_script(tmp_path / "script.json")

    result = CliRunner().invoke(app, ["record", str(script), "--name", "arrow edit"])

    assert result.exit_code == 0
    assert result.stdout.startswith("{\n  name: 'arrow edit',\n  inputs: [\n")
    assert '    insertText("hi"),\n    moveBackward(),\n    insertText("!")\n' in result.stdout


def test_cli_record_json_output(tmp_path: Path) -> None:
    script = _typing_script(tmp_path / "script.json")

    result = CliRunner().invoke(app, ["record", str(script), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "ok"
    assert [step["kind"] for step in payload["steps"]] == ["insertText", "moveBackward", "insertText"]
    assert payload["text"] == "h!i"


def test_cli_record_writes_out_file(tmp_path: Path) -> None:
    script = _typing_script(tmp_path / "script.json")
    out = tmp_path / "fixtures" / "arrow.txt"

    result = CliRunner().invoke(app, ["record", str(script), "--out", str(out)])

    assert result.exit_code == 0
    assert "fixture written" in result.stdout
    assert out.read_text(encoding="utf-8").startswith("{\n  name: '<YOUR TEST NAME>',")


def test_cli_record_without_fixture_exits_one(tmp_path: Path) -> None:
    script = _write_script(tmp_path / "script.json", [{"type": "key", "key": "a"}, {"type": "blur"}])

    result = CliRunner().invoke(app, ["record", str(script), "--json"])

    assert result.exit_code == 1
    assert json.loads(result.stdout.strip())["status"] == "no_fixture"


def test_cli_record_rejects_bad_script(tmp_path: Path) -> None:
    script = tmp_path / "script.json"
    script.write_text(json.dumps({"script_version": 9, "events": []}), encoding="utf-8")

    result = CliRunner().invoke(app, ["record", str(script)])

    assert result.exit_code == 2
    assert "Unsupported event script version" in result.output


def test_cli_record_missing_script(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["record", str(tmp_path / "missing.json")])

    assert result.exit_code == 2
    assert "file not found" in result.output


def test_cli_record_uses_config_file(tmp_path: Path) -> None:
    script = _write_script(tmp_path / "script.json", [{"type": "key", "key": "b", "meta": True}])
    config = tmp_path / "recorder.json"
    config.write_text(
        json.dumps({"config_version": 1, "platform": "apple", "test_name": "bold"}),
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["record", str(script), "--config", str(config)])

    assert result.exit_code == 0
    assert "  name: 'bold',\n" in result.stdout
    assert "    formatBold()\n" in result.stdout


def test_cli_record_platform_option(tmp_path: Path) -> None:
    script = _write_script(tmp_path / "script.json", [{"type": "key", "key": "Backspace", "alt": True}])

    result = CliRunner().invoke(app, ["record", str(script), "--platform", "apple", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout.strip())["steps"] == [
        {"kind": "deleteWordBackward", "payload": None}
    ]


def test_cli_classify() -> None:
    runner = CliRunner()

    text_result = runner.invoke(app, ["classify", "ArrowLeft"])
    assert text_result.exit_code == 0
    assert text_result.stdout.strip() == "moveBackward"

    json_result = runner.invoke(app, ["classify", "b", "--meta", "--apple", "--json"])
    assert json_result.exit_code == 0
    assert json.loads(json_result.stdout.strip())["kind"] == "formatBold"

    unknown = runner.invoke(app, ["classify", "Escape"])
    assert unknown.exit_code == 1
    assert unknown.stdout.strip() == "<unrecognized>"


def test_cli_kinds_lists_vocabulary() -> None:
    result = CliRunner().invoke(app, ["kinds", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert len(payload["kinds"]) == 16
    assert payload["coalescable"] == ["insertText", "moveNativeSelection"]
