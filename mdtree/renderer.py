"""
HTML Renderer for mdtree

Converts the document tree into an HTML string. The renderer knows nothing
about Markdown syntax; it only walks nodes.

Note: by default nothing is escaped. Text, URLs and attribute values are
emitted verbatim, so untrusted input must be sanitised by the caller or
rendered with the escapeHtml option.
"""

import html
from typing import List, Optional, Sequence, Union

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
    MDNode,
    MDParagraph,
    MDTable,
    MDTableCell,
    MDText,
    TableAlignment,
)
from .types import DEFAULT_CODE_CLASS_PREFIX, DEFAULT_LIST_INDENT, HtmlRendererOptions

EMPHASIS_TAGS = {
    EmphasisType.BOLD: "strong",
    EmphasisType.ITALIC: "em",
    EmphasisType.STRIKETHROUGH: "del",
    EmphasisType.UNDERLINE: "u",
}

ALIGNMENT_STYLES = {
    TableAlignment.LEFT: " style='text-align: left'",
    TableAlignment.CENTER: " style='text-align: center'",
    TableAlignment.RIGHT: " style='text-align: right'",
    TableAlignment.NONE: "",
}


class HTMLRenderer:
    """
    Renderer that converts the Markdown AST to HTML.

    Block elements end with a newline, inline elements are concatenated
    without separators.
    """

    def __init__(self, options: Optional[HtmlRendererOptions] = None):
        """
        Initialize the HTML renderer.

        Args:
            options: Optional rendering configuration
        """
        self.options: HtmlRendererOptions = options or {}

        self.escapeHtml = self.options.get("escapeHtml", False)
        self.codeClassPrefix = self.options.get("codeClassPrefix", DEFAULT_CODE_CLASS_PREFIX)
        self.listIndent = self.options.get("listIndent", DEFAULT_LIST_INDENT)

    def render(self, nodes: Union[MDDocument, Sequence[MDNode]]) -> str:
        """
        Render a document or a sequence of nodes to HTML.

        Args:
            nodes: Parsed document or any node sequence from it

        Returns:
            HTML string

        Raises:
            ValueError: If an object outside of the tree model is found
        """
        if isinstance(nodes, MDDocument):
            nodes = nodes.children
        return "".join(self._renderNode(node) for node in nodes)

    def _renderNode(self, node: MDNode) -> str:
        """Render a single AST node to HTML."""
        if isinstance(node, MDText):
            return self._escape(node.content)
        elif isinstance(node, MDParagraph):
            return f"<p>{self.render(node.children)}</p>\n"
        elif isinstance(node, MDHeading):
            return f'<h{node.level} id="{self._escape(node.id)}">{self.render(node.children)}</h{node.level}>\n'
        elif isinstance(node, MDEmphasis):
            tag = EMPHASIS_TAGS[node.emphasisType]
            return f"<{tag}>{self.render(node.children)}</{tag}>"
        elif isinstance(node, MDLink):
            return f"<a href='{self._escape(node.url)}'>{self.render(node.children)}</a>"
        elif isinstance(node, MDImage):
            return f"<img src='{self._escape(node.url)}' alt='{self._escape(node.alt)}' />"
        elif isinstance(node, MDCodeSpan):
            return f"<code>{self._escape(node.content)}</code>"
        elif isinstance(node, MDInlineMath):
            return f"<span class='math-inline'>\\( {self._escape(node.content)} \\)</span>"
        elif isinstance(node, MDLineBreak):
            return "<br />\n"
        elif isinstance(node, MDHorizontalRule):
            return "<hr />\n"
        elif isinstance(node, MDCodeBlock):
            return self._renderCodeBlock(node)
        elif isinstance(node, MDBlockMath):
            return f"<div class='math-block'>\\[ {self._escape(node.content)} \\]</div>\n"
        elif isinstance(node, MDBlockQuote):
            return f"<blockquote>\n{self.render(node.children)}</blockquote>\n"
        elif isinstance(node, MDList):
            return self._renderList(node)
        elif isinstance(node, MDTable):
            return self._renderTable(node)
        elif isinstance(node, MDCustomBlock):
            return self._renderCustomBlock(node)

        raise ValueError(f"Unknown node type: {type(node).__name__}")

    def _renderCodeBlock(self, node: MDCodeBlock) -> str:
        attrs = ""
        if node.language:
            attrs += f' class="{self.codeClassPrefix}{self._escape(node.language)}"'
        if node.filename:
            attrs += f' data-filename="{self._escape(node.filename)}"'
        return f"<pre><code{attrs}>{self._escape(node.content)}</code></pre>\n"

    def _renderList(self, node: MDList) -> str:
        """
        Render list node.

        Nested lists are indented inside their <li> for readability only.
        """
        tag = "ol" if node.listType == ListType.ORDERED else "ul"
        indent = " " * self.listIndent
        parts = [f"<{tag}>\n"]

        for item in node.items:
            parts.append("  <li>")
            if item.checked is not None:
                checkedAttr = " checked" if item.checked else ""
                parts.append(f"<input type='checkbox' disabled{checkedAttr} style='margin-right: 5px;' />")
            parts.append(self.render(item.content))

            if item.children:
                parts.append("\n")
                for line in self.render(item.children).splitlines():
                    parts.append(f"{indent}{line}\n")

            parts.append("</li>\n")

        parts.append(f"</{tag}>\n")
        return "".join(parts)

    def _renderTable(self, node: MDTable) -> str:
        parts = ["<table>\n<thead>\n<tr>\n"]
        parts.extend(self._renderCells(node.header, "th"))
        parts.append("\n</tr>\n</thead>\n<tbody>\n")

        for row in node.rows:
            parts.append("<tr>\n")
            parts.extend(self._renderCells(row, "td"))
            parts.append("\n</tr>\n")

        parts.append("</tbody>\n</table>\n")
        return "".join(parts)

    def _renderCells(self, cells: Sequence[MDTableCell], tag: str) -> List[str]:
        return [f"<{tag}{ALIGNMENT_STYLES[cell.alignment]}>{self.render(cell.children)}</{tag}>" for cell in cells]

    def _renderCustomBlock(self, node: MDCustomBlock) -> str:
        attrs = "".join(f" data-{key}='{self._escape(value)}'" for key, value in node.attributes)
        return f"<div class='{self._escape(node.name)}'{attrs}>{self.render(node.children)}</div>\n"

    def _escape(self, text: str) -> str:
        """Escape HTML special characters when escapeHtml is enabled."""
        if self.escapeHtml:
            return html.escape(text, quote=True)
        return text
