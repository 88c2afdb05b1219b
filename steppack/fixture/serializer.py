"""Rendering of recorded steps into fixture text."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from steppack.config import DEFAULT_RECORDER_CONFIG, RecorderConfig
from steppack.core.models import SelectionSnapshot, Step
from steppack.selection.paths import strip_placeholders


def render_payload(payload: Any) -> str:
    if payload is None or payload == "":
        return ""
    if isinstance(payload, str):
        return _double_quoted(payload)
    if isinstance(payload, (list, tuple)):
        return ",".join(_render_payload_item(item) for item in payload)
    return str(payload)


def render_step(step: Step) -> str:
    return f"{step.kind}({render_payload(step.payload)})"


def render_fixture(
    steps: Iterable[Step],
    markup: str | None,
    selection: SelectionSnapshot | None,
    *,
    config: RecorderConfig = DEFAULT_RECORDER_CONFIG,
) -> str | None:
    """Render the fixture block, or None when the selection is not inside the editor."""
    if selection is None:
        return None

    inputs = ",\n    ".join(render_step(step) for step in steps)
    html = (
        f"<div {config.editor_attributes}>"
        f"{strip_placeholders(markup or '')}"
        "</div>"
    )
    lines = [
        "{",
        f"  name: {_single_quoted(config.test_name)},",
        "  inputs: [",
        f"    {inputs}",
        "  ],",
        f"  expectedHTML: {_single_quoted(html)},",
        "  expectedSelection: {",
        f"    anchorPath: {_render_path(selection.anchor_path, separator=', ')},",
        f"    anchorOffset: {selection.anchor_offset},",
        f"    focusPath: {_render_path(selection.focus_path, separator=', ')},",
        f"    focusOffset: {selection.focus_offset},",
        "  },",
        "},",
    ]
    return "\n".join(lines) + "\n"


def _render_payload_item(item: Any) -> str:
    if isinstance(item, tuple):
        return _render_path(item, separator=",")
    if isinstance(item, str):
        return item
    return str(item)


def _render_path(path: Sequence[int], *, separator: str) -> str:
    return "[" + separator.join(str(index) for index in path) + "]"


def _double_quoted(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _single_quoted(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
