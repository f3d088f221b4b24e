"""
Markup tree model shared by the translator, the sanitizer and the surfaces.

Key behaviors:
- Parses HTML into an explicitly owned MarkupNode tree (stdlib html.parser)
- Serializes trees back to HTML with escaped text and attribute values
- Flattens text depth-first, left-to-right; selection offsets index this text
- Range edits (delete, insert, wrap) return a new tree and never touch the input

Invariants:
- Only element and root nodes have children; text and comment nodes are leaves
- A transform never shares node objects between its input and its output
"""

from __future__ import annotations

import copy
import html
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from html.parser import HTMLParser

# --- Node Model ---


class NodeKind(str, Enum):
    """Kinds of node in a markup tree."""

    ROOT = "root"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


VOID_ELEMENTS: frozenset[str] = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    ]
)

# Elements whose content is raw text, not markup.
RAW_TEXT_ELEMENTS: frozenset[str] = frozenset(["script", "style"])


@dataclass
class MarkupNode:
    """
    A node in the markup tree.

    Root and element nodes carry children; text nodes carry text_content;
    comment nodes keep their body in text_content as well.
    """

    kind: NodeKind
    tag_name: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[MarkupNode] = field(default_factory=list)
    text_content: str | None = None

    @classmethod
    def root(cls, children: list[MarkupNode] | None = None) -> MarkupNode:
        return cls(kind=NodeKind.ROOT, children=list(children or []))

    @classmethod
    def element(
        cls,
        tag_name: str,
        attributes: dict[str, str] | None = None,
        children: list[MarkupNode] | None = None,
    ) -> MarkupNode:
        return cls(
            kind=NodeKind.ELEMENT,
            tag_name=tag_name.lower(),
            attributes=dict(attributes or {}),
            children=list(children or []),
        )

    @classmethod
    def text(cls, content: str) -> MarkupNode:
        return cls(kind=NodeKind.TEXT, text_content=content)

    @classmethod
    def comment(cls, content: str) -> MarkupNode:
        return cls(kind=NodeKind.COMMENT, text_content=content)

    @property
    def is_text(self) -> bool:
        return self.kind == NodeKind.TEXT

    @property
    def is_element(self) -> bool:
        return self.kind == NodeKind.ELEMENT

    @property
    def has_children(self) -> bool:
        return self.kind in (NodeKind.ROOT, NodeKind.ELEMENT)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary."""
        result: dict[str, object] = {"kind": self.kind.value}
        if self.tag_name is not None:
            result["tag_name"] = self.tag_name
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        if self.text_content is not None:
            result["text_content"] = self.text_content
        return result


def clone_tree(node: MarkupNode) -> MarkupNode:
    """Deep copy a tree so the caller owns the result exclusively."""
    return copy.deepcopy(node)


# --- Parsing ---


class _TreeBuilder(HTMLParser):
    """Builds a MarkupNode tree from HTMLParser callbacks."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = MarkupNode.root()
        self._stack: list[MarkupNode] = [self.root]

    @property
    def _current(self) -> MarkupNode:
        return self._stack[-1]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        node = MarkupNode.element(tag, {name: value or "" for name, value in attrs})
        self._current.children.append(node)
        if node.tag_name not in VOID_ELEMENTS:
            self._stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        node = MarkupNode.element(tag, {name: value or "" for name, value in attrs})
        self._current.children.append(node)

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        # Close up to the nearest matching open element; stray end tags are ignored.
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag_name == tag:
                del self._stack[depth:]
                return

    def handle_data(self, data: str) -> None:
        if not data:
            return
        children = self._current.children
        if children and children[-1].is_text:
            children[-1].text_content = (children[-1].text_content or "") + data
        else:
            children.append(MarkupNode.text(data))

    def handle_comment(self, data: str) -> None:
        self._current.children.append(MarkupNode.comment(data))


def parse_markup(markup: str) -> MarkupNode:
    """
    Parse an HTML string into a root MarkupNode.

    Malformed input never raises: unclosed elements are closed at the end
    of input and stray end tags are dropped.
    """
    builder = _TreeBuilder()
    if markup:
        builder.feed(markup)
        builder.close()
    return builder.root


def parse_fragment(markup: str) -> list[MarkupNode]:
    """Parse an HTML fragment into a list of top-level nodes."""
    return parse_markup(markup).children


# --- Serialization ---


def _serialize_attributes(attributes: dict[str, str]) -> str:
    return "".join(
        f' {name}="{html.escape(value, quote=True)}"' for name, value in attributes.items()
    )


def serialize_markup(node: MarkupNode) -> str:
    """Serialize a tree (or subtree) to an HTML string."""
    if node.kind == NodeKind.TEXT:
        return html.escape(node.text_content or "", quote=False)
    if node.kind == NodeKind.COMMENT:
        return f"<!--{node.text_content or ''}-->"
    if node.kind == NodeKind.ROOT:
        return "".join(serialize_markup(child) for child in node.children)

    tag = node.tag_name or ""
    attrs = _serialize_attributes(node.attributes)
    if tag in VOID_ELEMENTS:
        return f"<{tag}{attrs}>"
    if tag in RAW_TEXT_ELEMENTS:
        inner = "".join(child.text_content or "" for child in node.children if child.is_text)
    else:
        inner = "".join(serialize_markup(child) for child in node.children)
    return f"<{tag}{attrs}>{inner}</{tag}>"


def serialize_children(nodes: list[MarkupNode]) -> str:
    return "".join(serialize_markup(node) for node in nodes)


# --- Text Flattening ---


def iter_text_nodes(node: MarkupNode) -> list[MarkupNode]:
    """Collect text nodes depth-first, left-to-right."""
    if node.kind == NodeKind.TEXT:
        return [node]
    found: list[MarkupNode] = []
    for child in node.children:
        found.extend(iter_text_nodes(child))
    return found


def flatten_text(node: MarkupNode) -> str:
    """Concatenate all text-node contents in document order."""
    return "".join(text_node.text_content or "" for text_node in iter_text_nodes(node))


def text_length(node: MarkupNode) -> int:
    return len(flatten_text(node))


# --- Selection ---


@dataclass(frozen=True)
class Selection:
    """Character-offset range over the flattened text."""

    start: int
    end: int

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


def clamp_selection(selection: Selection | None, length: int) -> Selection | None:
    """Clamp a selection into 0 <= start <= end <= length."""
    if selection is None:
        return None
    start = min(max(selection.start, 0), length)
    end = min(max(selection.end, start), length)
    return Selection(start, end)


# --- Range Editing ---


def _rebuild(
    node: MarkupNode,
    offset: list[int],
    on_text: Callable[[MarkupNode, int], list[MarkupNode]],
) -> list[MarkupNode]:
    """
    Rebuild a subtree, replacing each text node with on_text(node, start).

    offset is a one-element running counter of flattened text consumed so far.
    """
    if node.kind == NodeKind.TEXT:
        start = offset[0]
        offset[0] += len(node.text_content or "")
        return on_text(node, start)
    if not node.has_children:
        return [copy.deepcopy(node)]

    rebuilt = MarkupNode(
        kind=node.kind,
        tag_name=node.tag_name,
        attributes=dict(node.attributes),
    )
    for child in node.children:
        rebuilt.children.extend(_rebuild(child, offset, on_text))
    return [rebuilt]


def _rebuild_root(
    root: MarkupNode,
    on_text: Callable[[MarkupNode, int], list[MarkupNode]],
) -> MarkupNode:
    (result,) = _rebuild(root, [0], on_text)
    return result


def delete_range(root: MarkupNode, start: int, end: int) -> MarkupNode:
    """Remove flattened text in [start, end); empty text nodes are dropped."""
    if end <= start:
        return clone_tree(root)

    def cut(node: MarkupNode, node_start: int) -> list[MarkupNode]:
        content = node.text_content or ""
        node_end = node_start + len(content)
        if node_end <= start or node_start >= end:
            return [MarkupNode.text(content)]
        keep = content[: max(start - node_start, 0)] + content[max(end - node_start, 0) :]
        return [MarkupNode.text(keep)] if keep else []

    return _rebuild_root(root, cut)


def insert_fragment(root: MarkupNode, offset: int, fragment: list[MarkupNode]) -> MarkupNode:
    """
    Insert fragment nodes at a flattened-text offset.

    The first text node whose range contains the offset is split around it.
    A tree without text receives the fragment at the end of the root.
    """
    inserted = [False]

    def split(node: MarkupNode, node_start: int) -> list[MarkupNode]:
        content = node.text_content or ""
        if inserted[0] or not (node_start <= offset <= node_start + len(content)):
            return [MarkupNode.text(content)]
        inserted[0] = True
        cut_at = offset - node_start
        parts: list[MarkupNode] = []
        if content[:cut_at]:
            parts.append(MarkupNode.text(content[:cut_at]))
        parts.extend(copy.deepcopy(fragment))
        if content[cut_at:]:
            parts.append(MarkupNode.text(content[cut_at:]))
        return parts

    result = _rebuild_root(root, split)
    if not inserted[0]:
        result.children.extend(copy.deepcopy(fragment))
    return result


def wrap_range(
    root: MarkupNode,
    start: int,
    end: int,
    make_wrapper: Callable[[], MarkupNode],
) -> MarkupNode:
    """
    Wrap the text in [start, end) with fresh wrapper elements.

    Each overlapped text node is split and its selected part wrapped on its
    own, so the wrapper never straddles element boundaries.
    """
    if end <= start:
        return clone_tree(root)

    def wrap(node: MarkupNode, node_start: int) -> list[MarkupNode]:
        content = node.text_content or ""
        node_end = node_start + len(content)
        if node_end <= start or node_start >= end:
            return [MarkupNode.text(content)]
        lo = max(start - node_start, 0)
        hi = min(end - node_start, len(content))
        parts: list[MarkupNode] = []
        if content[:lo]:
            parts.append(MarkupNode.text(content[:lo]))
        wrapper = make_wrapper()
        wrapper.children.append(MarkupNode.text(content[lo:hi]))
        parts.append(wrapper)
        if content[hi:]:
            parts.append(MarkupNode.text(content[hi:]))
        return parts

    return _rebuild_root(root, wrap)


def wrap_block_at(root: MarkupNode, offset: int, wrapper: MarkupNode) -> MarkupNode:
    """
    Wrap the top-level child that contains the offset in a block wrapper.

    A document without top-level children is left unchanged.
    """
    result = clone_tree(root)
    if not result.children:
        return result

    position = 0
    target = len(result.children) - 1
    for index, child in enumerate(result.children):
        length = text_length(child)
        if position <= offset <= position + length and length > 0:
            target = index
            break
        position += length

    block = copy.deepcopy(wrapper)
    block.children.append(result.children[target])
    result.children[target] = block
    return result


def remove_elements(root: MarkupNode, predicate: Callable[[MarkupNode], bool]) -> MarkupNode:
    """Remove every element (with its subtree) matching the predicate."""

    def prune(node: MarkupNode) -> MarkupNode:
        pruned = MarkupNode(
            kind=node.kind,
            tag_name=node.tag_name,
            attributes=dict(node.attributes),
            text_content=node.text_content,
        )
        for child in node.children:
            if child.is_element and predicate(child):
                continue
            pruned.children.append(prune(child))
        return pruned

    return prune(root)


def find_elements(root: MarkupNode, predicate: Callable[[MarkupNode], bool]) -> list[MarkupNode]:
    """Find elements matching the predicate, depth-first."""
    found: list[MarkupNode] = []
    for child in root.children:
        if child.is_element and predicate(child):
            found.append(child)
        found.extend(find_elements(child, predicate))
    return found
