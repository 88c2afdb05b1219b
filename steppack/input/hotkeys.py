"""Keyboard event model and editor hotkey predicates.

Predicates mirror the editor's own hotkey table. Several bindings differ
between Apple platforms (command key) and everything else (control key), so
each predicate takes the event plus an ``apple`` flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A raw keydown event as delivered by the editor surface."""

    key: str
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "ctrl": self.ctrl,
            "meta": self.meta,
            "alt": self.alt,
            "shift": self.shift,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "KeyEvent":
        return cls(
            key=str(raw["key"]),
            ctrl=bool(raw.get("ctrl", False)),
            meta=bool(raw.get("meta", False)),
            alt=bool(raw.get("alt", False)),
            shift=bool(raw.get("shift", False)),
        )


def control_or_meta(event: KeyEvent, *, apple: bool) -> bool:
    if apple:
        return event.meta
    return event.ctrl


def _is_key(event: KeyEvent, letter: str) -> bool:
    return event.key.lower() == letter


def is_backspace(event: KeyEvent) -> bool:
    return event.key == "Backspace"


def is_delete(event: KeyEvent) -> bool:
    return event.key == "Delete"


def is_enter(event: KeyEvent) -> bool:
    return event.key == "Enter"


def is_delete_backward(event: KeyEvent, *, apple: bool = False) -> bool:
    if apple:
        if event.alt or event.meta:
            return False
        return (is_backspace(event) and not event.ctrl) or (_is_key(event, "h") and event.ctrl)
    if event.ctrl or event.alt or event.meta:
        return False
    return is_backspace(event)


def is_delete_forward(event: KeyEvent, *, apple: bool = False) -> bool:
    if apple:
        if event.alt or event.meta:
            return False
        return (is_delete(event) and not event.ctrl) or (_is_key(event, "d") and event.ctrl)
    if event.ctrl or event.alt or event.meta:
        return False
    return is_delete(event)


def is_delete_word_backward(event: KeyEvent, *, apple: bool = False) -> bool:
    return is_backspace(event) and (event.alt if apple else event.ctrl)


def is_delete_word_forward(event: KeyEvent, *, apple: bool = False) -> bool:
    return is_delete(event) and (event.alt if apple else event.ctrl)


def is_delete_line_backward(event: KeyEvent, *, apple: bool = False) -> bool:
    return apple and event.meta and is_backspace(event)


def is_delete_line_forward(event: KeyEvent, *, apple: bool = False) -> bool:
    return apple and event.meta and is_delete(event)


def is_paragraph(event: KeyEvent, *, apple: bool = False) -> bool:
    return is_enter(event) and not event.shift


def is_line_break(event: KeyEvent, *, apple: bool = False) -> bool:
    return is_enter(event) and event.shift


def is_undo(event: KeyEvent, *, apple: bool = False) -> bool:
    return _is_key(event, "z") and not event.shift and control_or_meta(event, apple=apple)


def is_redo(event: KeyEvent, *, apple: bool = False) -> bool:
    if apple:
        return _is_key(event, "z") and event.meta and event.shift
    return (_is_key(event, "y") and event.ctrl) or (
        _is_key(event, "z") and event.ctrl and event.shift
    )


def is_bold(event: KeyEvent, *, apple: bool = False) -> bool:
    return _is_key(event, "b") and control_or_meta(event, apple=apple)


def is_italic(event: KeyEvent, *, apple: bool = False) -> bool:
    return _is_key(event, "i") and control_or_meta(event, apple=apple)


def is_move_backward(event: KeyEvent, *, apple: bool = False) -> bool:
    return event.key == "ArrowLeft"


def is_move_forward(event: KeyEvent, *, apple: bool = False) -> bool:
    return event.key == "ArrowRight"


def is_text_input(event: KeyEvent, *, apple: bool = False) -> bool:
    # Named keys (ArrowUp, Shift, Escape, ...) are always longer than one character.
    return len(event.key) == 1
