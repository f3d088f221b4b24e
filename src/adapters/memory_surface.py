"""
In-memory editing surface.

Implements the SurfacePort over an owned markup tree plus a selection, so
the history engine, the export manager and the editor session can run
without a browser.

Key behaviors:
- Selection offsets index the flattened text and are clamped after every change
- perform() is deterministic: the same state and payload give the same result
- Unknown command kinds raise UnsupportedCommandError

Command kinds:
- format: bold/italic/underline/strikeThrough wrap the selection in an element;
  foreColor/backColor wrap it in a styled span
- insert_html: replace the selection with a parsed fragment, caret after it
- delete: remove the selection, or the character before a collapsed caret
- style: wrap the selection in a span carrying the given inline style
- preset: wrap the selection (inline) or its top-level block (block) in a
  classed, styled element
- remove_image: remove elements carrying the given data-image-id
- image_align: restyle the image wrapper for left/center/right alignment
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from src.domain.errors import UnsupportedCommandError
from src.domain.markup import (
    MarkupNode,
    Selection,
    clamp_selection,
    clone_tree,
    delete_range,
    find_elements,
    flatten_text,
    insert_fragment,
    parse_fragment,
    parse_markup,
    remove_elements,
    serialize_markup,
    text_length,
    wrap_block_at,
    wrap_range,
)

logger = logging.getLogger(__name__)

FORMAT_TAGS: dict[str, str] = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
    "strikeThrough": "s",
}

FORMAT_STYLES: dict[str, str] = {
    "foreColor": "color",
    "backColor": "background-color",
}

ALIGNMENT_STYLES: dict[str, str] = {
    "left": "float: left; margin: 0 1em 1em 0",
    "right": "float: right; margin: 0 0 1em 1em",
    "center": "display: block; margin: 1em auto; text-align: center",
}

# Declarations replaced when an image is realigned.
_ALIGNMENT_PROPERTIES = {"float", "display", "margin", "text-align"}

IMAGE_ID_ATTRIBUTE = "data-image-id"


def _merge_alignment(style: str, alignment: str) -> str:
    kept = []
    for declaration in style.split(";"):
        prop, _, value = declaration.partition(":")
        if prop.strip() and value.strip() and prop.strip().lower() not in _ALIGNMENT_PROPERTIES:
            kept.append(f"{prop.strip()}: {value.strip()}")
    kept.append(ALIGNMENT_STYLES[alignment])
    return "; ".join(kept)


class InMemorySurface:
    """SurfacePort backed by a MarkupNode tree."""

    def __init__(self, markup: str = "", selection: Selection | None = None) -> None:
        self._tree = parse_markup(markup)
        self._selection = clamp_selection(selection, text_length(self._tree))
        self._handlers: dict[str, Callable[[dict[str, Any]], None]] = {
            "format": self._format,
            "insert_html": self._insert_html,
            "delete": self._delete,
            "style": self._style,
            "preset": self._preset,
            "remove_image": self._remove_image,
            "image_align": self._image_align,
        }

    # --- SurfacePort ---

    def get_current_markup(self) -> str:
        return serialize_markup(self._tree)

    def apply_markup(self, markup: str) -> None:
        self._set_tree(parse_markup(markup))

    def get_selection_offsets(self) -> Selection | None:
        return self._selection

    def apply_selection_offsets(self, selection: Selection | None) -> None:
        self._selection = clamp_selection(selection, text_length(self._tree))

    def perform(self, kind: str, payload: dict[str, Any]) -> None:
        handler = self._handlers.get(kind)
        if handler is None:
            raise UnsupportedCommandError(f"Unsupported command kind: {kind}")
        logger.debug("Performing %s %r", kind, payload)
        handler(payload)

    # --- Inspection ---

    @property
    def tree(self) -> MarkupNode:
        return clone_tree(self._tree)

    @property
    def text(self) -> str:
        return flatten_text(self._tree)

    def select(self, start: int, end: int | None = None) -> None:
        self.apply_selection_offsets(Selection(start, start if end is None else end))

    # --- Helpers ---

    def _set_tree(self, tree: MarkupNode) -> None:
        self._tree = tree
        self._selection = clamp_selection(self._selection, text_length(tree))

    def _range(self) -> tuple[int, int]:
        """Selected range, or a caret at the end of the document without a selection."""
        if self._selection is None:
            length = text_length(self._tree)
            return length, length
        return self._selection.start, self._selection.end

    def _wrap_selection(self, make_wrapper: Callable[[], MarkupNode]) -> None:
        start, end = self._range()
        self._set_tree(wrap_range(self._tree, start, end, make_wrapper))

    # --- Command Handlers ---

    def _format(self, payload: dict[str, Any]) -> None:
        command = payload.get("command", "")
        if command in FORMAT_TAGS:
            tag = FORMAT_TAGS[command]
            self._wrap_selection(lambda: MarkupNode.element(tag))
        elif command in FORMAT_STYLES:
            style = f"{FORMAT_STYLES[command]}: {payload.get('value', '')}"
            self._wrap_selection(lambda: MarkupNode.element("span", {"style": style}))
        else:
            raise UnsupportedCommandError(f"Unsupported format command: {command}")

    def _insert_html(self, payload: dict[str, Any]) -> None:
        start, end = self._range()
        fragment = parse_fragment(payload.get("html", ""))
        tree = insert_fragment(delete_range(self._tree, start, end), start, fragment)
        self._set_tree(tree)
        caret = start + sum(text_length(node) for node in fragment)
        self.apply_selection_offsets(Selection(caret, caret))

    def _delete(self, payload: dict[str, Any]) -> None:
        start, end = self._range()
        if start == end:
            if start == 0:
                return
            start -= 1
        self._set_tree(delete_range(self._tree, start, end))
        self.apply_selection_offsets(Selection(start, start))

    def _style(self, payload: dict[str, Any]) -> None:
        style = payload.get("style", "")
        self._wrap_selection(lambda: MarkupNode.element("span", {"style": style}))

    def _preset(self, payload: dict[str, Any]) -> None:
        attributes = {"class": payload.get("css_class", ""), "style": payload.get("style", "")}
        if payload.get("block"):
            start, _ = self._range()
            self._set_tree(wrap_block_at(self._tree, start, MarkupNode.element("div", attributes)))
        else:
            self._wrap_selection(lambda: MarkupNode.element("span", dict(attributes)))

    def _remove_image(self, payload: dict[str, Any]) -> None:
        image_id = payload.get("image_id")
        self._set_tree(
            remove_elements(
                self._tree,
                lambda node: node.attributes.get(IMAGE_ID_ATTRIBUTE) == image_id,
            )
        )

    def _image_align(self, payload: dict[str, Any]) -> None:
        image_id = payload.get("image_id")
        alignment = payload.get("alignment", "")
        if alignment not in ALIGNMENT_STYLES:
            raise UnsupportedCommandError(f"Unsupported image alignment: {alignment}")

        tree = clone_tree(self._tree)
        for wrapper in find_elements(
            tree, lambda node: node.attributes.get(IMAGE_ID_ATTRIBUTE) == image_id
        ):
            wrapper.attributes["style"] = _merge_alignment(
                wrapper.attributes.get("style", ""), alignment
            )
        self._set_tree(tree)
