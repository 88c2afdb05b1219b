"""Stable public API surface for stepkit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from steppack import __version__
from steppack.config import (
    DEFAULT_RECORDER_CONFIG,
    RecorderConfig,
    RecorderConfigError,
    load_recorder_config,
    resolve_recorder_config,
)
from steppack.core import ACTION_KINDS, SelectionSnapshot, Step
from steppack.editor import EditorHost, ReferenceEditor, SelectionProvider, UpdateNotification
from steppack.fixture import render_fixture
from steppack.input import KeyEvent, classify
from steppack.plugins import LifecyclePlugin, PluginManager, use_plugin_manager
from steppack.record import RecordingController, RecordingSession, apply, record_step
from steppack.script import EventScript, load_event_script, run_event_script
from steppack.selection import DomSelection, Element, Text, resolve_path, snapshot_selection


def record_script(
    path: str,
    *,
    config: RecorderConfig | None = None,
) -> str | None:
    """Play a JSON event script on the reference editor and return its fixture text."""
    script = load_event_script(path)
    result = run_event_script(script, config=config or resolve_recorder_config())
    return result.fixture


__all__ = [
    "__version__",
    "ACTION_KINDS",
    "DEFAULT_RECORDER_CONFIG",
    "DomSelection",
    "EditorHost",
    "Element",
    "EventScript",
    "KeyEvent",
    "LifecyclePlugin",
    "PluginManager",
    "RecorderConfig",
    "RecorderConfigError",
    "RecordingController",
    "RecordingSession",
    "ReferenceEditor",
    "SelectionProvider",
    "SelectionSnapshot",
    "Step",
    "Text",
    "UpdateNotification",
    "apply",
    "classify",
    "load_event_script",
    "load_recorder_config",
    "record_script",
    "record_step",
    "render_fixture",
    "resolve_path",
    "run_event_script",
    "snapshot_selection",
    "use_plugin_manager",
]
