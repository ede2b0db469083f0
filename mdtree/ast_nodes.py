"""
AST Node Classes for mdtree

This module defines the document tree produced by the parser. Every node is an
immutable dataclass built bottom-up during a single parse; child sequences are
tuples. Only the top-level list of MDDocument is mutable, so that postprocess
extensions can rewrite the tree.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple


class NodeType(StrEnum):
    """Enumeration of all AST node types."""

    DOCUMENT = "document"
    HEADING = "heading"
    HORIZONTAL_RULE = "horizontalRule"
    PARAGRAPH = "paragraph"
    LINE_BREAK = "lineBreak"
    LINK = "link"
    IMAGE = "image"
    EMPHASIS = "emphasis"
    TEXT = "text"
    INLINE_MATH = "inlineMath"
    BLOCK_MATH = "blockMath"
    CODE_SPAN = "codeSpan"
    CODE_BLOCK = "codeBlock"
    BLOCK_QUOTE = "blockQuote"
    LIST = "list"
    TABLE = "table"
    CUSTOM_BLOCK = "customBlock"


class EmphasisType(StrEnum):
    """Types of emphasis formatting."""

    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    UNDERLINE = "underline"


class ListType(StrEnum):
    """Types of lists."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


class TableAlignment(StrEnum):
    """Per-column alignment taken from a table separator row."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    NONE = "none"


def _nodesToDict(nodes: Sequence["MDNode"]) -> List[Dict[str, Any]]:
    return [node.toDict() for node in nodes]


class MDNode(ABC):
    """Base class for all Markdown AST nodes."""

    nodeType: ClassVar[NodeType]

    @abstractmethod
    def toDict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        pass


@dataclass(frozen=True)
class MDHeading(MDNode):
    """Heading node, level is the length of the `#` run."""

    nodeType: ClassVar[NodeType] = NodeType.HEADING

    level: int
    id: str
    children: Tuple[MDNode, ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "level": self.level,
            "id": self.id,
            "children": _nodesToDict(self.children),
        }


@dataclass(frozen=True)
class MDHorizontalRule(MDNode):
    """Horizontal rule node."""

    nodeType: ClassVar[NodeType] = NodeType.HORIZONTAL_RULE

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value}


@dataclass(frozen=True)
class MDParagraph(MDNode):
    """Paragraph node containing inline elements."""

    nodeType: ClassVar[NodeType] = NodeType.PARAGRAPH

    children: Tuple[MDNode, ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "children": _nodesToDict(self.children)}


@dataclass(frozen=True)
class MDLineBreak(MDNode):
    """Line break produced by a backslash in running text."""

    nodeType: ClassVar[NodeType] = NodeType.LINE_BREAK

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value}


@dataclass(frozen=True)
class MDLink(MDNode):
    """Link node, children hold the parsed label."""

    nodeType: ClassVar[NodeType] = NodeType.LINK

    url: str
    children: Tuple[MDNode, ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "url": self.url,
            "children": _nodesToDict(self.children),
        }


@dataclass(frozen=True)
class MDImage(MDNode):
    """Image node with URL and plain alt text."""

    nodeType: ClassVar[NodeType] = NodeType.IMAGE

    alt: str
    url: str

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "alt": self.alt, "url": self.url}


@dataclass(frozen=True)
class MDEmphasis(MDNode):
    """Emphasis node for bold, italic, strikethrough and underline text."""

    nodeType: ClassVar[NodeType] = NodeType.EMPHASIS

    emphasisType: EmphasisType
    children: Tuple[MDNode, ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "emphasisType": self.emphasisType.value,
            "children": _nodesToDict(self.children),
        }


@dataclass(frozen=True)
class MDText(MDNode):
    """Plain text node."""

    nodeType: ClassVar[NodeType] = NodeType.TEXT

    content: str

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "content": self.content}


@dataclass(frozen=True)
class MDInlineMath(MDNode):
    """Inline `$...$` math, content kept verbatim."""

    nodeType: ClassVar[NodeType] = NodeType.INLINE_MATH

    content: str

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "content": self.content}


@dataclass(frozen=True)
class MDBlockMath(MDNode):
    """Fenced `$$` math block, content kept verbatim."""

    nodeType: ClassVar[NodeType] = NodeType.BLOCK_MATH

    content: str

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "content": self.content}


@dataclass(frozen=True)
class MDCodeSpan(MDNode):
    """Inline code span node."""

    nodeType: ClassVar[NodeType] = NodeType.CODE_SPAN

    content: str

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "content": self.content}


@dataclass(frozen=True)
class MDCodeBlock(MDNode):
    """Fenced code block with language and optional filename from the fence header."""

    nodeType: ClassVar[NodeType] = NodeType.CODE_BLOCK

    content: str
    language: str = ""
    filename: Optional[str] = None

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "content": self.content,
            "language": self.language,
            "filename": self.filename,
        }


@dataclass(frozen=True)
class MDBlockQuote(MDNode):
    """Block quote node that can contain other block elements."""

    nodeType: ClassVar[NodeType] = NodeType.BLOCK_QUOTE

    children: Tuple[MDNode, ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "children": _nodesToDict(self.children)}


@dataclass(frozen=True)
class MDListItem:
    """
    Single entry of an MDList.

    Attributes:
        content: Inline nodes of the item line
        children: Nested lists built from deeper-indented lines
        checked: True/False for `[x]`/`[ ]` task items, None otherwise
    """

    content: Tuple[MDNode, ...] = ()
    children: Tuple[MDNode, ...] = ()
    checked: Optional[bool] = None

    def toDict(self) -> Dict[str, Any]:
        return {
            "content": _nodesToDict(self.content),
            "children": _nodesToDict(self.children),
            "checked": self.checked,
        }


@dataclass(frozen=True)
class MDList(MDNode):
    """List node (ordered or unordered)."""

    nodeType: ClassVar[NodeType] = NodeType.LIST

    listType: ListType
    items: Tuple[MDListItem, ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "listType": self.listType.value,
            "items": [item.toDict() for item in self.items],
        }


@dataclass(frozen=True)
class MDTableCell:
    """Table cell with its column alignment."""

    children: Tuple[MDNode, ...] = ()
    alignment: TableAlignment = TableAlignment.NONE

    def toDict(self) -> Dict[str, Any]:
        return {"children": _nodesToDict(self.children), "alignment": self.alignment.value}


@dataclass(frozen=True)
class MDTable(MDNode):
    """Pipe table: one header row and any number of data rows."""

    nodeType: ClassVar[NodeType] = NodeType.TABLE

    header: Tuple[MDTableCell, ...] = ()
    rows: Tuple[Tuple[MDTableCell, ...], ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "header": [cell.toDict() for cell in self.header],
            "rows": [[cell.toDict() for cell in row] for row in self.rows],
        }


@dataclass(frozen=True)
class MDCustomBlock(MDNode):
    """
    `:::name key=value` container with block-level children.

    Attributes are kept as (key, value) pairs in header order.
    """

    nodeType: ClassVar[NodeType] = NodeType.CUSTOM_BLOCK

    name: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple[MDNode, ...] = ()

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "name": self.name,
            "attributes": dict(self.attributes),
            "children": _nodesToDict(self.children),
        }


@dataclass
class MDDocument:
    """
    Root of a parsed document.

    The children list is the only mutable part of the tree; postprocess
    extensions may append, remove or replace top-level nodes in place.
    """

    nodeType: ClassVar[NodeType] = NodeType.DOCUMENT

    children: List[MDNode] = field(default_factory=list)

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "children": _nodesToDict(self.children)}
