"""Mapping from raw key events to recorded action kinds."""

from __future__ import annotations

from collections.abc import Callable

from steppack.input.hotkeys import (
    KeyEvent,
    is_bold,
    is_delete_backward,
    is_delete_forward,
    is_delete_line_backward,
    is_delete_line_forward,
    is_delete_word_backward,
    is_delete_word_forward,
    is_italic,
    is_line_break,
    is_move_backward,
    is_move_forward,
    is_paragraph,
    is_redo,
    is_text_input,
    is_undo,
)

KeyPredicate = Callable[..., bool]

# Evaluated top to bottom; the catch-all text predicate must stay last.
INPUT_CLASSIFIERS: tuple[tuple[str, KeyPredicate], ...] = (
    ("deleteBackward", is_delete_backward),
    ("deleteForward", is_delete_forward),
    ("deleteWordBackward", is_delete_word_backward),
    ("deleteWordForward", is_delete_word_forward),
    ("deleteLineForward", is_delete_line_forward),
    ("deleteLineBackward", is_delete_line_backward),
    ("insertParagraph", is_paragraph),
    ("insertLinebreak", is_line_break),
    ("undo", is_undo),
    ("redo", is_redo),
    ("formatBold", is_bold),
    ("formatItalic", is_italic),
    ("moveBackward", is_move_backward),
    ("moveForward", is_move_forward),
    ("insertText", is_text_input),
)


def classify(event: KeyEvent, *, apple: bool = False) -> str | None:
    """Return the first action kind whose predicate matches ``event``."""
    for kind, predicate in INPUT_CLASSIFIERS:
        if predicate(event, apple=apple):
            return kind
    return None
