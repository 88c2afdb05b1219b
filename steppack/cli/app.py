import json
from dataclasses import dataclass, replace
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Any

import typer

from steppack.config import (
    RECORDER_CONFIG_ENV_VAR,
    RecorderConfig,
    RecorderConfigError,
    recorder_config_from_mapping,
    resolve_recorder_config,
)
from steppack.core.types import ACTION_KINDS, COALESCABLE_KINDS
from steppack.input import KeyEvent, classify
from steppack.plugins import PluginError
from steppack.script import EventScriptError, load_event_script, run_event_script

app = typer.Typer(help="stepkit: record editor interactions as test fixtures.")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("stepkit")
    except PackageNotFoundError:
        from steppack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show stepkit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    else:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, indent=2)
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _load_config(
    config_path: Path | None,
    *,
    name: str | None,
    platform: str | None,
) -> RecorderConfig:
    try:
        config = resolve_recorder_config(config_path)
    except FileNotFoundError as error:
        raise RecorderConfigError(f"recorder config not found: {error.filename}") from error
    if name is not None:
        if not name.strip():
            raise RecorderConfigError("--name cannot be empty.")
        config = replace(config, test_name=name)
    if platform is not None:
        config = recorder_config_from_mapping({"platform": platform}, base_config=config)
    return config


@app.command()
def record(
    script: Path = typer.Argument(..., help="Path to a JSON event script."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        envvar=RECORDER_CONFIG_ENV_VAR,
        help=f"Recorder config JSON. Can also be set via {RECORDER_CONFIG_ENV_VAR}.",
    ),
    name: str | None = typer.Option(
        None,
        "--name",
        help="Test name written into the fixture.",
    ),
    platform: str | None = typer.Option(
        None,
        "--platform",
        help="Hotkey bindings to classify with: auto, apple or other.",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        help="Write the fixture text to this path instead of stdout.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable JSON output.",
    ),
) -> None:
    """Play an event script on the reference editor and print the recorded fixture."""
    try:
        config = _load_config(config_path, name=name, platform=platform)
        event_script = load_event_script(script)
        result = run_event_script(event_script, config=config)
    except FileNotFoundError as error:
        _echo(f"record failed: file not found: {error.filename}", err=True)
        raise typer.Exit(code=2) from error
    except (RecorderConfigError, EventScriptError, PluginError) as error:
        _echo(f"record failed: {error}", err=True)
        raise typer.Exit(code=2) from error

    if out is not None and result.fixture is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(result.fixture, encoding="utf-8")

    if json_output:
        payload = result.to_dict()
        payload["status"] = "ok" if result.fixture is not None else "no_fixture"
        payload["out"] = str(out) if out is not None and result.fixture is not None else None
        _echo_json(payload)
    elif result.fixture is None:
        _echo(
            "no fixture: record at least one step and keep the selection inside the editor.",
            err=True,
        )
    elif out is not None:
        _echo(f"fixture written: {out} ({len(result.steps)} steps)")
    else:
        _echo(result.fixture.rstrip("\n"), force=True)

    if result.fixture is None:
        raise typer.Exit(code=1)


@app.command("classify")
def classify_key(
    key: str = typer.Argument(..., help="Key name as reported by the browser, e.g. 'a' or 'ArrowLeft'."),
    ctrl: bool = typer.Option(False, "--ctrl", help="Control held."),
    meta: bool = typer.Option(False, "--meta", help="Meta / command held."),
    alt: bool = typer.Option(False, "--alt", help="Alt / option held."),
    shift: bool = typer.Option(False, "--shift", help="Shift held."),
    apple: bool = typer.Option(False, "--apple", help="Use Apple hotkey bindings."),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable JSON output."),
) -> None:
    """Show which action a single keydown would record."""
    event = KeyEvent(key=key, ctrl=ctrl, meta=meta, alt=alt, shift=shift)
    kind = classify(event, apple=apple)
    if json_output:
        _echo_json({"event": event.to_dict(), "apple": apple, "kind": kind})
    else:
        _echo(kind or "<unrecognized>")
    if kind is None:
        raise typer.Exit(code=1)


@app.command()
def kinds(
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable JSON output."),
) -> None:
    """List recognized action kinds."""
    if json_output:
        _echo_json(
            {
                "kinds": list(ACTION_KINDS),
                "coalescable": sorted(COALESCABLE_KINDS),
            }
        )
        return
    for kind in ACTION_KINDS:
        suffix = " (coalescing)" if kind in COALESCABLE_KINDS else ""
        _echo(f"{kind}{suffix}")


def main() -> None:
    app()
