"""
Block Parser for mdtree

This module handles parsing of block-level elements: headings, horizontal
rules, fenced code and math, block quotes, custom `:::` blocks, tables, lists
and paragraphs.
"""

import dataclasses
import logging
import re
from typing import List, Optional, Sequence, Tuple

from .ast_nodes import (
    ListType,
    MDBlockMath,
    MDBlockQuote,
    MDCodeBlock,
    MDCustomBlock,
    MDDocument,
    MDHeading,
    MDHorizontalRule,
    MDList,
    MDListItem,
    MDNode,
    MDParagraph,
    MDTable,
    MDTableCell,
    MDText,
    TableAlignment,
)
from .cursor import Cursor
from .inline_parser import InlineParser
from .types import DEFAULT_MAX_NESTING_DEPTH, MarkdownOptions
from .utils import extractPlainText, slugify

logger = logging.getLogger(__name__)

LIST_MARKER_PATTERN = re.compile(r"^(?:(?P<bullet>[-*])|\d+\.) ")
CUSTOM_ATTRIBUTE_PATTERN = re.compile(r'([^\s=]+)=("[^"]*"|\S+)')

CODE_FENCE = "```"
MATH_FENCE = "$$"
CUSTOM_FENCE = ":::"
HORIZONTAL_RULE = "---"


class BlockParser:
    """
    Parser for block-level Markdown elements.

    Works directly on a Cursor over the document text. Block quotes and custom
    blocks are parsed by a fresh BlockParser over their extracted inner text.
    """

    def __init__(self, text: str, options: Optional[MarkdownOptions] = None, depth: int = 0):
        self.cursor = Cursor(text)
        self.options: MarkdownOptions = options or {}
        self.maxNestingDepth = self.options.get("maxNestingDepth", DEFAULT_MAX_NESTING_DEPTH)
        self.depth = depth

    def parse(self) -> MDDocument:
        """
        Parse the whole text into a document.

        Returns:
            MDDocument containing all parsed block elements.
        """
        document = MDDocument()

        while True:
            self.cursor.skipWhitespace()
            if self.cursor.isEof():
                break
            document.children.append(self._parseBlock())

        return document

    def _parseBlock(self) -> MDNode:
        """Parse a single block element, anything unrecognised is a paragraph."""
        cursor = self.cursor

        if cursor.startsWith("#"):
            return self._parseHeading()

        if cursor.startsWith(HORIZONTAL_RULE):
            cursor.readLine()
            return MDHorizontalRule()

        if cursor.startsWith(CODE_FENCE):
            return self._parseCodeBlock()

        if cursor.startsWith(">"):
            return self._parseBlockQuote()

        if cursor.startsWith(MATH_FENCE):
            return self._parseBlockMath()

        if cursor.startsWith(CUSTOM_FENCE):
            return self._parseCustomBlock()

        line = cursor.peekLine()
        if self._isTableLine(line):
            return self._parseTable()

        if LIST_MARKER_PATTERN.match(line):
            return self._parseList(cursor.column(), self.depth)

        return self._parseParagraph()

    def _parseHeading(self) -> MDHeading:
        """Parse `# Heading`, the level is the number of `#`."""
        cursor = self.cursor
        level = 0
        while cursor.consumeIf("#"):
            level += 1
        cursor.skipInlineWhitespace()

        children = self._inlineParser().parseInline("\n")
        cursor.consumeIf("\n")

        return MDHeading(level, slugify(extractPlainText(children)), tuple(children))

    def _parseParagraph(self) -> MDParagraph:
        """Parse the rest of the current line as a paragraph."""
        children = self._inlineParser().parseInline("\n")
        self.cursor.consumeIf("\n")
        return MDParagraph(tuple(children))

    def _parseCodeBlock(self) -> MDCodeBlock:
        """Parse a fenced code block, the header holds language and optional filename."""
        cursor = self.cursor
        cursor.advance(len(CODE_FENCE))

        header = cursor.readLine().split()
        language = header[0] if header else ""
        filename = header[1] if len(header) > 1 else None

        content, closed = cursor.readUntilSequence(CODE_FENCE)
        if not closed:
            logger.debug("Code block is not closed, reading to end of input")

        return MDCodeBlock(content.strip(), language, filename)

    def _parseBlockMath(self) -> MDBlockMath:
        """Parse a `$$` math block."""
        self.cursor.advance(len(MATH_FENCE))
        content, _ = self.cursor.readUntilSequence(MATH_FENCE)
        return MDBlockMath(content.strip())

    def _parseBlockQuote(self) -> MDBlockQuote:
        """Parse contiguous `>` lines and re-parse their content as blocks."""
        cursor = self.cursor
        quotedLines = []

        while not cursor.isEof():
            stripped = cursor.peekLine().lstrip(" \t")
            if not stripped.startswith(">"):
                break
            cursor.readLine()

            body = stripped[1:]
            if body.startswith(" "):
                body = body[1:]
            quotedLines.append(body)

        return MDBlockQuote(self._parseNested("\n".join(quotedLines)))

    def _parseCustomBlock(self) -> MDCustomBlock:
        """
        Parse a `:::name key=value` block up to its matching `:::`.

        Nested blocks are tracked with a plain counter: every other `:::name`
        line opens one level, every bare `:::` line closes one.
        """
        cursor = self.cursor
        cursor.advance(len(CUSTOM_FENCE))
        name, attributes = self._parseCustomHeader(cursor.readLine())

        innerLines = []
        nestLevel = 1
        while not cursor.isEof():
            line = cursor.readLine()
            marker = line.strip()
            if marker == CUSTOM_FENCE:
                nestLevel -= 1
                if nestLevel == 0:
                    break
            elif marker.startswith(CUSTOM_FENCE):
                nestLevel += 1
            innerLines.append(line)

        return MDCustomBlock(name, attributes, self._parseNested("\n".join(innerLines)))

    @staticmethod
    def _parseCustomHeader(header: str) -> Tuple[str, Tuple[Tuple[str, str], ...]]:
        """
        Split a custom block header into name and attributes.

        Example:
            >>> BlockParser._parseCustomHeader('tab title="My Tab" active=true')
            ('tab', (('title', 'My Tab'), ('active', 'true')))
        """
        parts = header.split(None, 1)
        if not parts:
            return "", ()

        rest = parts[1] if len(parts) > 1 else ""
        attributes = {key: value.strip('"') for key, value in CUSTOM_ATTRIBUTE_PATTERN.findall(rest)}
        return parts[0], tuple(attributes.items())

    def _parseTable(self) -> MDTable:
        """Parse header, separator and the following pipe rows."""
        cursor = self.cursor
        headerLine = cursor.readLine()
        separatorLine = cursor.readLine()

        alignments = self._parseAlignments(separatorLine)
        header = self._parseTableRow(headerLine, alignments)

        rows = []
        while not cursor.isEof() and self._isTableLine(cursor.peekLine()):
            rows.append(self._parseTableRow(cursor.readLine(), alignments))

        return MDTable(header, tuple(rows))

    def _parseTableRow(self, line: str, alignments: Sequence[TableAlignment]) -> Tuple[MDTableCell, ...]:
        cells = []
        for index, cellText in enumerate(self._splitTableRow(line)):
            alignment = alignments[index] if index < len(alignments) else TableAlignment.NONE
            children = InlineParser.parseText(cellText.strip(), self.maxNestingDepth, self.depth)
            cells.append(MDTableCell(tuple(children), alignment))
        return tuple(cells)

    @classmethod
    def _parseAlignments(cls, separatorLine: str) -> List[TableAlignment]:
        alignments = []
        for cell in cls._splitTableRow(separatorLine):
            cell = cell.strip()
            if cell.startswith(":") and cell.endswith(":"):
                alignments.append(TableAlignment.CENTER)
            elif cell.startswith(":"):
                alignments.append(TableAlignment.LEFT)
            elif cell.endswith(":"):
                alignments.append(TableAlignment.RIGHT)
            else:
                alignments.append(TableAlignment.NONE)
        return alignments

    @staticmethod
    def _splitTableRow(line: str) -> List[str]:
        return line.strip().strip("|").split("|")

    @staticmethod
    def _isTableLine(line: str) -> bool:
        return line.strip().startswith("|")

    def _parseList(self, baseIndent: int, depth: int) -> MDList:
        """
        Parse list lines at baseIndent into one list.

        Deeper-indented list lines become a nested list attached to the last
        item. The list ends at a blank line, a shallower or non-list line,
        or a line at baseIndent with the other list type.

        Args:
            baseIndent: Indentation of the items of this list
            depth: Nesting depth of this list

        Returns:
            MDList with all parsed items
        """
        cursor = self.cursor
        listType = self._identifyListType(cursor.peekLine().lstrip())
        items: List[MDListItem] = []

        while not cursor.isEof():
            rawLine = cursor.peekLine()
            line = rawLine.lstrip()
            if not line.strip():
                break

            indent = cursor.column() + len(rawLine) - len(line)
            if indent < baseIndent or not LIST_MARKER_PATTERN.match(line):
                break
            if indent == baseIndent and self._identifyListType(line) != listType:
                break

            if indent > baseIndent and items:
                if depth < self.maxNestingDepth:
                    nested = self._parseList(indent, depth + 1)
                    items[-1] = dataclasses.replace(items[-1], children=items[-1].children + (nested,))
                    continue
                logger.warning(f"List nesting depth {self.maxNestingDepth} reached, flattening deeper items")

            cursor.readLine()
            checked, text = self._extractCheckbox(LIST_MARKER_PATTERN.sub("", line, count=1).rstrip())
            content = InlineParser.parseText(text, self.maxNestingDepth, depth)
            items.append(MDListItem(content=tuple(content), checked=checked))

        return MDList(listType, tuple(items))

    @staticmethod
    def _identifyListType(line: str) -> ListType:
        match = LIST_MARKER_PATTERN.match(line)
        if match and match.group("bullet"):
            return ListType.UNORDERED
        return ListType.ORDERED

    @staticmethod
    def _extractCheckbox(text: str) -> Tuple[Optional[bool], str]:
        """Split `[ ] `/`[x] ` task prefix: `[x] Done` -> (True, "Done")."""
        if text.startswith("[ ] "):
            return False, text[4:]
        if text.startswith("[x] ") or text.startswith("[X] "):
            return True, text[4:]
        return None, text

    def _parseNested(self, text: str) -> Tuple[MDNode, ...]:
        """Parse extracted container content with a fresh parser one level deeper."""
        if self.depth >= self.maxNestingDepth:
            logger.warning(f"Block nesting depth {self.maxNestingDepth} reached, keeping content as text")
            return tuple(MDParagraph((MDText(line.strip()),)) for line in text.splitlines() if line.strip())

        return tuple(BlockParser(text, self.options, self.depth + 1).parse().children)

    def _inlineParser(self) -> InlineParser:
        return InlineParser(self.cursor, self.maxNestingDepth, self.depth)
