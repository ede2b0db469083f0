"""
Text helpers shared by the parser and extensions.
"""

from typing import Iterable

from .ast_nodes import MDCodeSpan, MDEmphasis, MDInlineMath, MDNode, MDText


def extractPlainText(nodes: Iterable[MDNode]) -> str:
    """
    Flatten inline nodes into the plain text used for heading ids.

    Emphasis is descended into, code spans and inline math contribute their
    raw content. Links, images and line breaks contribute nothing.

    Args:
        nodes: Inline nodes, usually the children of a heading

    Returns:
        Concatenated plain text
    """
    parts = []
    for node in nodes:
        if isinstance(node, MDText):
            parts.append(node.content)
        elif isinstance(node, MDEmphasis):
            parts.append(extractPlainText(node.children))
        elif isinstance(node, (MDCodeSpan, MDInlineMath)):
            parts.append(node.content)
    return "".join(parts)


def slugify(text: str) -> str:
    """
    Build a heading anchor id from text.

    Lowercases, turns every non-alphanumeric run into a single hyphen and
    trims hyphens from both ends, e.g. "Project Setup" -> "project-setup".
    """
    mapped = "".join(ch if ch.isalnum() else "-" for ch in text.lower())
    return "-".join(part for part in mapped.split("-") if part)
