"""Type definitions for recorded editor steps."""

from typing import Literal

ActionKind = Literal[
    "deleteBackward",
    "deleteForward",
    "deleteWordBackward",
    "deleteWordForward",
    "deleteLineForward",
    "deleteLineBackward",
    "insertParagraph",
    "insertLinebreak",
    "undo",
    "redo",
    "formatBold",
    "formatItalic",
    "moveBackward",
    "moveForward",
    "insertText",
    "moveNativeSelection",
]

ACTION_KINDS: tuple[str, ...] = (
    "deleteBackward",
    "deleteForward",
    "deleteWordBackward",
    "deleteWordForward",
    "deleteLineForward",
    "deleteLineBackward",
    "insertParagraph",
    "insertLinebreak",
    "undo",
    "redo",
    "formatBold",
    "formatItalic",
    "moveBackward",
    "moveForward",
    "insertText",
    "moveNativeSelection",
)

COALESCABLE_KINDS: frozenset[str] = frozenset({"insertText", "moveNativeSelection"})

NAVIGATION_KINDS: frozenset[str] = frozenset({"moveBackward", "moveForward"})

Path = tuple[int, ...]
