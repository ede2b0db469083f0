"""
Main Markdown Parser for mdtree

This module provides the MarkdownParser class that runs the pipeline:
extension preprocess, block and inline parsing, extension postprocess and
HTML rendering.
"""

import logging
from typing import Any, Dict, Optional, Unpack

from .ast_nodes import MDDocument
from .block_parser import BlockParser
from .extensions import ExtensionHost
from .renderer import HTMLRenderer
from .types import DEFAULT_MAX_NESTING_DEPTH, MarkdownOptions

logger = logging.getLogger(__name__)


class MarkdownParser:
    """
    Main Markdown parser that coordinates all parsing stages.

    Processing model:
    1. Preprocess: registered extensions rewrite the raw text
    2. Parsing: block elements, each with its inline content
    3. Postprocess: registered extensions rewrite the document
    4. Rendering: convert the tree to HTML

    Parsing never fails on any text: unknown or broken markup is kept as
    literal text. A parser instance holds no per-document state, so it can be
    reused for any number of documents.
    """

    def __init__(self, options: Optional[MarkdownOptions] = None, extensions: Optional[ExtensionHost] = None):
        """
        Initialize the Markdown parser.

        Args:
            options: Optional parser configuration
            extensions: Optional extension pipeline, none by default
        """
        self.options: MarkdownOptions = options or {}
        self.extensions = extensions if extensions is not None else ExtensionHost()

        self.maxNestingDepth = self.options.get("maxNestingDepth", DEFAULT_MAX_NESTING_DEPTH)
        self.htmlRenderer = HTMLRenderer(self.options.get("htmlOptions", {}))

    def parse(self, markdownText: str) -> MDDocument:
        """
        Parse Markdown text into an AST.

        Args:
            markdownText: The Markdown text to parse

        Returns:
            MDDocument representing the parsed document

        Raises:
            ValueError: If input is not a string
        """
        if not isinstance(markdownText, str):
            raise ValueError("Input must be a string")

        markdownText = self.extensions.runPreprocess(markdownText)

        document = BlockParser(markdownText, {"maxNestingDepth": self.maxNestingDepth}).parse()
        logger.debug(f"Parsed {len(markdownText)} chars into {len(document.children)} top-level blocks")

        self.extensions.runPostprocess(document)
        return document

    def parseToHtml(self, markdownText: str) -> str:
        """
        Parse Markdown text and render to HTML.

        Args:
            markdownText: The Markdown text to parse

        Returns:
            HTML string representation
        """
        return self.htmlRenderer.render(self.parse(markdownText))

    def parseToDict(self, markdownText: str) -> Dict[str, Any]:
        """
        Parse Markdown text and return the AST as a JSON-serializable dictionary.

        Keys are camelCase and every node carries its variant in "type".
        """
        return self.parse(markdownText).toDict()

    def setOption(self, key: str, value: Any) -> None:
        """
        Set a parser option.

        Args:
            key: Option name
            value: Option value
        """
        self.options[key] = value  # type: ignore[literal-required]

        if key == "maxNestingDepth":
            self.maxNestingDepth = value
        elif key == "htmlOptions":
            self.htmlRenderer = HTMLRenderer(value)

    def getOption(self, key: str, default: Any = None) -> Any:
        """
        Get a parser option.

        Args:
            key: Option name
            default: Default value if option not found

        Returns:
            Option value or default
        """
        return self.options.get(key, default)


# Convenience functions for quick parsing


def parseMarkdown(text: str, **options: Unpack[MarkdownOptions]) -> MDDocument:
    """
    Parse Markdown text into an AST.

    Args:
        text: Markdown text to parse
        **options: Parser options

    Returns:
        MDDocument representing the parsed document
    """
    return MarkdownParser(options).parse(text)


def markdownToHtml(text: str, **options: Unpack[MarkdownOptions]) -> str:
    """
    Convert Markdown text to HTML.

    Args:
        text: Markdown text to convert
        **options: Parser and renderer options

    Returns:
        HTML string
    """
    return MarkdownParser(options).parseToHtml(text)


def markdownToDict(text: str, **options: Unpack[MarkdownOptions]) -> Dict[str, Any]:
    """Convert Markdown text to the serialized document tree."""
    return MarkdownParser(options).parseToDict(text)
