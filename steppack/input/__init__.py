"""Keyboard input classification."""

from steppack.input.classifier import INPUT_CLASSIFIERS, classify
from steppack.input.hotkeys import KeyEvent, control_or_meta

__all__ = [
    "INPUT_CLASSIFIERS",
    "KeyEvent",
    "classify",
    "control_or_meta",
]
