"""Type definitions for mdtree options and configuration."""

from typing_extensions import NotRequired, TypedDict

DEFAULT_MAX_NESTING_DEPTH = 100
DEFAULT_CODE_CLASS_PREFIX = "language-"
DEFAULT_LIST_INDENT = 4


class HtmlRendererOptions(TypedDict, total=False):
    """Options for HTMLRenderer.

    Attributes:
        escapeHtml: Escape text, code and attribute values (off by default,
            output is verbatim)
        codeClassPrefix: Prefix for the language class of code blocks
        listIndent: Spaces used to indent nested lists inside <li>
    """

    escapeHtml: bool
    codeClassPrefix: str
    listIndent: int


class MarkdownOptions(TypedDict, total=False):
    """Options for MarkdownParser.

    Attributes:
        maxNestingDepth: Recursion depth at which the parser stops nesting
            and keeps the remaining markup as literal text
        htmlOptions: Options passed to the HTML renderer
    """

    maxNestingDepth: int
    htmlOptions: HtmlRendererOptions


class LoggingConfig(TypedDict, closed=False):
    """Logger configuration, as found in the [logging] config section.

    Attributes:
        level: Logger level name, e.g. "DEBUG"
        format: logging.Formatter format string
        console: Attach a console handler
        file: Path of the log file, enables the file handler
        rotate: Rotate the log file daily
    """

    level: NotRequired[str]
    format: NotRequired[str]
    console: NotRequired[bool]
    file: NotRequired[str]
    rotate: NotRequired[bool]
    propagate: NotRequired[bool]
