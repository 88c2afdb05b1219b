"""Editor collaborator protocol and the in-memory reference editor."""

from steppack.editor.base import EditorHost, SelectionProvider, UpdateNotification
from steppack.editor.reference import Caret, ReferenceEditor

__all__ = [
    "Caret",
    "EditorHost",
    "ReferenceEditor",
    "SelectionProvider",
    "UpdateNotification",
]
