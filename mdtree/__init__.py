"""
mdtree - Markdown to document tree and HTML converter

A small embeddable Markdown engine: one call turns the text of a document into
an immutable document tree, another renders that tree to HTML.

This module provides:
- Block parsing: headings, rules, fenced code, `$$` math, block quotes,
  `:::name` custom blocks, pipe tables, nested and task lists
- Inline parsing: `*`, `**`, `***`, `__`, `~~`, code spans, `$math$`,
  images, links with formatted labels
- AST representation with JSON-friendly serialization
- HTML rendering
- Optional extension pipeline for text preprocessing and tree postprocessing

Usage:
    from mdtree import MarkdownParser, markdownToHtml

    # Basic HTML rendering
    html = markdownToHtml("# Hello World\\n\\nThis is **bold** text.")

    # Document tree
    parser = MarkdownParser()
    document = parser.parse("- [x] Done\\n- [ ] Pending")
    tree = document.toDict()

Broken markup never raises: whatever can't be parsed is kept as literal text.
Output is not HTML-escaped unless the escapeHtml renderer option is set.
"""

from .ast_nodes import (
    EmphasisType,
    ListType,
    MDBlockMath,
    MDBlockQuote,
    MDCodeBlock,
    MDCodeSpan,
    MDCustomBlock,
    MDDocument,
    MDEmphasis,
    MDHeading,
    MDHorizontalRule,
    MDImage,
    MDInlineMath,
    MDLineBreak,
    MDLink,
    MDList,
    MDListItem,
    MDNode,
    MDParagraph,
    MDTable,
    MDTableCell,
    MDText,
    NodeType,
    TableAlignment,
)
from .block_parser import BlockParser
from .config import ConfigError, ConfigManager
from .cursor import Cursor
from .extensions import BaseExtension, ExtensionHost
from .inline_parser import InlineParser
from .parser import MarkdownParser, markdownToDict, markdownToHtml, parseMarkdown
from .renderer import HTMLRenderer
from .types import HtmlRendererOptions, MarkdownOptions
from .utils import extractPlainText, slugify

__version__ = "1.0.0"
__all__ = [
    "MarkdownParser",
    "parseMarkdown",
    "markdownToHtml",
    "markdownToDict",
    "Cursor",
    "BlockParser",
    "InlineParser",
    "HTMLRenderer",
    "BaseExtension",
    "ExtensionHost",
    "ConfigManager",
    "ConfigError",
    "MarkdownOptions",
    "HtmlRendererOptions",
    "extractPlainText",
    "slugify",
    # AST Nodes
    "NodeType",
    "EmphasisType",
    "ListType",
    "TableAlignment",
    "MDNode",
    "MDDocument",
    "MDHeading",
    "MDHorizontalRule",
    "MDParagraph",
    "MDLineBreak",
    "MDLink",
    "MDImage",
    "MDEmphasis",
    "MDText",
    "MDInlineMath",
    "MDBlockMath",
    "MDCodeSpan",
    "MDCodeBlock",
    "MDBlockQuote",
    "MDList",
    "MDListItem",
    "MDTable",
    "MDTableCell",
    "MDCustomBlock",
]
