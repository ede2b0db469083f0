"""
Inline Parser for mdtree

This module handles parsing of inline elements like emphasis, links, images,
code spans and inline math within block elements.

Markup whose closing token never shows up is kept as literal text: the opener
and every character consumed while looking for the closer end up in the
output, nothing is dropped or duplicated.
"""

import logging
from typing import List, Optional, Sequence, Type, Union

from .ast_nodes import (
    EmphasisType,
    MDCodeSpan,
    MDEmphasis,
    MDImage,
    MDInlineMath,
    MDLineBreak,
    MDLink,
    MDNode,
    MDText,
)
from .cursor import Cursor
from .types import DEFAULT_MAX_NESTING_DEPTH

logger = logging.getLogger(__name__)

# Openers checked in this order, the longest run of `*` first
EMPHASIS_MARKERS = (
    ("***", (EmphasisType.BOLD, EmphasisType.ITALIC)),
    ("**", (EmphasisType.BOLD,)),
    ("__", (EmphasisType.UNDERLINE,)),
    ("~~", (EmphasisType.STRIKETHROUGH,)),
    ("*", (EmphasisType.ITALIC,)),
)


class InlineParser:
    """
    Parser for inline Markdown elements.

    Scans the cursor character by character, stopping at a delimiter
    character, at a newline, or at the end of input. Emphasis is parsed by a
    nested parser sharing the same cursor; link labels are parsed by a fresh
    parser over the extracted label text.
    """

    def __init__(self, cursor: Cursor, maxNestingDepth: int = DEFAULT_MAX_NESTING_DEPTH, depth: int = 0):
        self.cursor = cursor
        self.maxNestingDepth = maxNestingDepth
        self.depth = depth

    @classmethod
    def parseText(cls, text: str, maxNestingDepth: int = DEFAULT_MAX_NESTING_DEPTH, depth: int = 0) -> List[MDNode]:
        """
        Parse a standalone string (link label, list item text, table cell).

        Args:
            text: Text to parse, normally a single line
            maxNestingDepth: Nesting limit
            depth: Nesting depth the text is found at

        Returns:
            List of inline nodes
        """
        return cls(Cursor(text), maxNestingDepth, depth).parseInline(None)

    def parseInline(self, delimiter: Optional[str]) -> List[MDNode]:
        """
        Parse inline content up to delimiter, end of line or end of input.

        The delimiter itself is not consumed; the caller decides what closes
        its construct.

        Args:
            delimiter: Character that ends the scan, None to scan to end of input

        Returns:
            List of inline nodes with adjacent text merged
        """
        cursor = self.cursor
        nodes: List[MDNode] = []
        textAcc: List[str] = []

        while not cursor.isEof():
            char = cursor.peek()
            if char == "\n" or char == delimiter:
                break

            if char == "\\":
                self._flushText(textAcc, nodes)
                cursor.advance()
                nodes.append(MDLineBreak())
            elif cursor.startsWith("$$"):
                # Block math fence is only meaningful at block start
                cursor.advance(2)
                textAcc.append("$$")
            elif char == "$":
                self._parseVerbatimSpan(MDInlineMath, textAcc, nodes)
            elif char in "*_~" and self._parseEmphasis(textAcc, nodes):
                continue
            elif char == "`":
                self._parseVerbatimSpan(MDCodeSpan, textAcc, nodes)
            elif cursor.startsWith("!["):
                self._parseImage(textAcc, nodes)
            elif char == "[":
                self._parseLink(textAcc, nodes)
            else:
                textAcc.append(cursor.nextChar())

        self._flushText(textAcc, nodes)
        return self._mergeAdjacentTextNodes(nodes)

    def _parseEmphasis(self, textAcc: List[str], nodes: List[MDNode]) -> bool:
        """
        Parse emphasis starting at the cursor.

        Returns:
            False if no emphasis marker starts here, True otherwise
        """
        cursor = self.cursor
        for marker, emphasisTypes in EMPHASIS_MARKERS:
            if cursor.startsWith(marker):
                break
        else:
            return False

        if self.depth >= self.maxNestingDepth:
            logger.warning(f"Inline nesting depth {self.maxNestingDepth} reached, keeping '{marker}' as text")
            cursor.advance(len(marker))
            textAcc.append(marker)
            return True

        closeChar = marker[0]
        self._flushText(textAcc, nodes)
        cursor.advance(len(marker))
        inner = InlineParser(cursor, self.maxNestingDepth, self.depth + 1).parseInline(closeChar)

        if cursor.peek() != closeChar:
            nodes.append(MDText(marker))
            nodes.extend(inner)
            return True

        # Any run of the marker character closes, up to the opener length
        cursor.consumeRepeated(closeChar, len(marker))
        node: MDNode = MDEmphasis(emphasisTypes[-1], tuple(inner))
        for emphasisType in reversed(emphasisTypes[:-1]):
            node = MDEmphasis(emphasisType, (node,))
        nodes.append(node)
        return True

    def _parseVerbatimSpan(
        self, nodeClass: Type[Union[MDCodeSpan, MDInlineMath]], textAcc: List[str], nodes: List[MDNode]
    ) -> None:
        """Parse `code` or $math$, content is taken as is up to the same character."""
        opener = self.cursor.nextChar()
        content, closed = self.cursor.readUntil(opener)
        if not closed:
            textAcc.append(opener + content)
            return
        self._flushText(textAcc, nodes)
        nodes.append(nodeClass(content))

    def _parseImage(self, textAcc: List[str], nodes: List[MDNode]) -> None:
        """Parse ![alt](url)."""
        cursor = self.cursor
        cursor.advance(2)
        alt, altClosed = cursor.readUntil("]")
        if not altClosed or cursor.peek() != "(":
            textAcc.append("![" + alt + ("]" if altClosed else ""))
            return

        cursor.advance()
        url, urlClosed = cursor.readUntil(")")
        if not urlClosed:
            textAcc.append(f"![{alt}]({url}")
            return

        self._flushText(textAcc, nodes)
        nodes.append(MDImage(alt, url))

    def _parseLink(self, textAcc: List[str], nodes: List[MDNode]) -> None:
        """Parse [label](url), the label may hold nested inline formatting."""
        cursor = self.cursor
        if self.depth >= self.maxNestingDepth:
            logger.warning(f"Inline nesting depth {self.maxNestingDepth} reached, keeping '[' as text")
            textAcc.append(cursor.nextChar())
            return

        cursor.advance()
        label, labelClosed = cursor.readUntil("]")
        if not labelClosed or cursor.peek() != "(":
            textAcc.append("[" + label + ("]" if labelClosed else ""))
            return

        cursor.advance()
        url, urlClosed = cursor.readUntil(")")
        if not urlClosed:
            textAcc.append(f"[{label}]({url}")
            return

        self._flushText(textAcc, nodes)
        children = InlineParser.parseText(label, self.maxNestingDepth, self.depth + 1)
        nodes.append(MDLink(url, tuple(children)))

    @staticmethod
    def _flushText(textAcc: List[str], nodes: List[MDNode]) -> None:
        if textAcc:
            nodes.append(MDText("".join(textAcc)))
            textAcc.clear()

    @staticmethod
    def _mergeAdjacentTextNodes(nodes: Sequence[MDNode]) -> List[MDNode]:
        """Merge adjacent text nodes into single nodes."""
        merged: List[MDNode] = []
        currentText = ""

        for node in nodes:
            if isinstance(node, MDText):
                currentText += node.content
            else:
                if currentText:
                    merged.append(MDText(currentText))
                    currentText = ""
                merged.append(node)

        if currentText:
            merged.append(MDText(currentText))

        return merged
