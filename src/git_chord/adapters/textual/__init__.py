"""Textual chord picker; the controller has no Textual dependency."""

from .controller import ChordPreview, ChordPreviewAdapter, ChordPreviewHooks

__all__ = ["ChordPreview", "ChordPreviewAdapter", "ChordPreviewHooks"]
