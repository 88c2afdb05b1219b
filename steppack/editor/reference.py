"""Deterministic in-memory editor for driving the recorder without a browser.

Models plain paragraphs only. Each paragraph renders as
``<p><span data-outline-text="true">text</span></p>``; an empty paragraph holds
the zero-width placeholder, and the platform reports the caret after it
(offset 1), as browsers do.
"""

from __future__ import annotations

from collections.abc import Iterable

from steppack.editor.base import (
    KeyListener,
    RemoveListener,
    UpdateListener,
    UpdateNotification,
)
from steppack.input.hotkeys import KeyEvent
from steppack.selection.dom import DomSelection, Element, Text
from steppack.selection.paths import PLACEHOLDER


class Caret:
    """Logical selection; a fresh instance is created whenever it moves."""

    __slots__ = ("paragraph", "offset")

    def __init__(self, paragraph: int, offset: int) -> None:
        self.paragraph = paragraph
        self.offset = offset

    def __repr__(self) -> str:
        return f"Caret(paragraph={self.paragraph}, offset={self.offset})"


class ReferenceEditor:
    def __init__(self, paragraphs: Iterable[str] = ("",)) -> None:
        self.paragraphs: list[str] = list(paragraphs) or [""]
        last = len(self.paragraphs) - 1
        self.caret: Caret | None = Caret(last, len(self.paragraphs[last]))
        self.body = Element("body")
        self._root = Element("div", {"contenteditable": "true"})
        self._outside = Element("input", {"type": "text"})
        self.body.append(self._root, self._outside)
        self._text_nodes: list[Text] = []
        self._key_listeners: list[KeyListener] = []
        self._document_key_listeners: list[KeyListener] = []
        self._update_listeners: list[UpdateListener] = []
        self._render()

    @property
    def root(self) -> Element:
        return self._root

    @property
    def text(self) -> str:
        return "\n".join(self.paragraphs)

    def text_node(self, paragraph: int) -> Text:
        return self._text_nodes[paragraph]

    def add_key_listener(self, listener: KeyListener) -> RemoveListener:
        self._key_listeners.append(listener)
        return lambda: self._remove(self._key_listeners, listener)

    def add_document_key_listener(self, listener: KeyListener) -> RemoveListener:
        self._document_key_listeners.append(listener)
        return lambda: self._remove(self._document_key_listeners, listener)

    def add_update_listener(self, listener: UpdateListener) -> RemoveListener:
        self._update_listeners.append(listener)
        return lambda: self._remove(self._update_listeners, listener)

    def get_selection(self) -> DomSelection | None:
        if self.caret is None:
            return DomSelection.collapsed(self._outside, 0)
        text = self.paragraphs[self.caret.paragraph]
        offset = self.caret.offset if text else 1
        return DomSelection.collapsed(self._text_nodes[self.caret.paragraph], offset)

    def replace_with_empty_paragraph(self) -> None:
        self.paragraphs = [""]
        self.caret = Caret(0, 0)
        self._commit(structural=True)

    def press(self, key: str, **modifiers: bool) -> None:
        self.dispatch_key(KeyEvent(key=key, **modifiers))

    def type_text(self, text: str) -> None:
        for character in text:
            self.press(character)

    def dispatch_key(self, event: KeyEvent) -> None:
        # A blurred editor receives no keydown; the document always does, after it.
        if self.caret is not None:
            for listener in list(self._key_listeners):
                listener(event)
            if not (event.ctrl or event.meta or event.alt):
                self._edit(event)
        for listener in list(self._document_key_listeners):
            listener(event)

    def _edit(self, event: KeyEvent) -> None:
        if len(event.key) == 1:
            self._insert(event.key)
        elif event.key == "Backspace":
            self._delete_backward()
        elif event.key == "Delete":
            self._delete_forward()
        elif event.key == "Enter" and not event.shift:
            self._split_paragraph()
        elif event.key == "ArrowLeft":
            self._move(-1)
        elif event.key == "ArrowRight":
            self._move(1)

    def click(self, paragraph: int, offset: int) -> None:
        paragraph = max(0, min(paragraph, len(self.paragraphs) - 1))
        offset = max(0, min(offset, len(self.paragraphs[paragraph])))
        self.caret = Caret(paragraph, offset)
        self._commit(structural=False)

    def blur(self) -> None:
        if self.caret is None:
            return
        self.caret = None
        self._commit(structural=False)

    def _insert(self, character: str) -> None:
        index, offset = self.caret.paragraph, self.caret.offset
        text = self.paragraphs[index]
        self.paragraphs[index] = text[:offset] + character + text[offset:]
        self.caret = Caret(index, offset + 1)
        self._commit(structural=True)

    def _delete_backward(self) -> None:
        index, offset = self.caret.paragraph, self.caret.offset
        if offset > 0:
            text = self.paragraphs[index]
            self.paragraphs[index] = text[: offset - 1] + text[offset:]
            self.caret = Caret(index, offset - 1)
        elif index > 0:
            previous = self.paragraphs[index - 1]
            self.paragraphs[index - 1] = previous + self.paragraphs.pop(index)
            self.caret = Caret(index - 1, len(previous))
        else:
            return
        self._commit(structural=True)

    def _delete_forward(self) -> None:
        index, offset = self.caret.paragraph, self.caret.offset
        text = self.paragraphs[index]
        if offset < len(text):
            self.paragraphs[index] = text[:offset] + text[offset + 1 :]
        elif index < len(self.paragraphs) - 1:
            self.paragraphs[index] = text + self.paragraphs.pop(index + 1)
        else:
            return
        self.caret = Caret(index, offset)
        self._commit(structural=True)

    def _split_paragraph(self) -> None:
        index, offset = self.caret.paragraph, self.caret.offset
        text = self.paragraphs[index]
        self.paragraphs[index : index + 1] = [text[:offset], text[offset:]]
        self.caret = Caret(index + 1, 0)
        self._commit(structural=True)

    def _move(self, delta: int) -> None:
        index, offset = self.caret.paragraph, self.caret.offset
        target = offset + delta
        if 0 <= target <= len(self.paragraphs[index]):
            self.caret = Caret(index, target)
        elif target < 0 and index > 0:
            self.caret = Caret(index - 1, len(self.paragraphs[index - 1]))
        elif target > 0 and index < len(self.paragraphs) - 1:
            self.caret = Caret(index + 1, 0)
        else:
            # Caret already at the document edge: no selection change, no update.
            return
        self._commit(structural=False)

    def _commit(self, *, structural: bool) -> None:
        if structural:
            self._render()
        notification = UpdateNotification(structural=structural, selection_ref=self.caret)
        for listener in list(self._update_listeners):
            listener(notification)

    def _render(self) -> None:
        self._root.clear()
        self._text_nodes = []
        for text in self.paragraphs:
            node = Text(text or PLACEHOLDER)
            self._text_nodes.append(node)
            self._root.append(
                Element("p").append(Element("span", {"data-outline-text": "true"}).append(node))
            )

    @staticmethod
    def _remove(listeners: list, listener: object) -> None:
        if listener in listeners:
            listeners.remove(listener)
