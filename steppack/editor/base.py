"""Capabilities the recorder consumes from a rich-text editor."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from steppack.input.hotkeys import KeyEvent
from steppack.selection.dom import DomSelection, Element


@dataclass(frozen=True, slots=True)
class UpdateNotification:
    """One editor document update.

    ``selection_ref`` is an opaque identity for the editor's logical selection;
    consumers compare it with ``is``, never by value.
    """

    structural: bool
    selection_ref: object | None


UpdateListener = Callable[[UpdateNotification], None]
KeyListener = Callable[[KeyEvent], None]
RemoveListener = Callable[[], None]


class EditorHost(Protocol):
    @property
    def root(self) -> Element | None: ...

    def replace_with_empty_paragraph(self) -> None:
        """Atomically replace content with one empty paragraph, cursor inside."""

    def add_update_listener(self, listener: UpdateListener) -> RemoveListener: ...

    def add_key_listener(self, listener: KeyListener) -> RemoveListener:
        """Key listeners must run before the editor applies the key."""

    def add_document_key_listener(self, listener: KeyListener) -> RemoveListener:
        """Every keydown on the page, delivered whether or not the editor has focus."""


class SelectionProvider(Protocol):
    def get_selection(self) -> DomSelection | None: ...
