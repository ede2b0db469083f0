"""
Extension host for mdtree.

Extensions hook into the pipeline around the parser: preprocess rewrites
the raw Markdown text before parsing, postprocess rewrites the finished
document. An ExtensionHost is an explicit, ordered registry handed to
MarkdownParser by the caller; there is no global registry.

Example:
    >>> from mdtree import BaseExtension, ExtensionHost, MarkdownParser
    >>>
    >>> class NbspExtension(BaseExtension):
    ...     name = "nbsp"
    ...
    ...     def preprocess(self, text):
    ...         return text.replace("&nbsp;", " ")
    >>>
    >>> host = ExtensionHost().register(NbspExtension())
    >>> parser = MarkdownParser(extensions=host)
"""

import logging
from typing import Dict, List, Optional

from .ast_nodes import MDDocument

logger = logging.getLogger(__name__)


class BaseExtension:
    """
    Base class for pipeline extensions.

    Both hooks are optional; the defaults leave text and tree untouched.
    Subclasses must set a unique name.
    """

    name: str = ""

    def preprocess(self, text: str) -> Optional[str]:
        """
        Rewrite raw Markdown before parsing.

        Args:
            text: Markdown produced by the previous extension (or the input)

        Returns:
            New text, or None to keep the text unchanged
        """
        return None

    def postprocess(self, document: MDDocument) -> None:
        """
        Rewrite the parsed document in place.

        Nodes are immutable, so replace them in document.children (use
        dataclasses.replace to derive changed copies).
        """
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class ExtensionHost:
    """Ordered registry of extensions; hooks run in registration order."""

    def __init__(self) -> None:
        self._extensions: Dict[str, BaseExtension] = {}

    def __len__(self) -> int:
        return len(self._extensions)

    def register(self, extension: BaseExtension) -> "ExtensionHost":
        """
        Append an extension to the pipeline.

        Args:
            extension: Extension instance with a unique name

        Returns:
            This host, so that registrations can be chained

        Raises:
            ValueError: If the name is empty or already registered
        """
        if not extension.name:
            raise ValueError(f"Extension {extension!r} has no name")
        if extension.name in self._extensions:
            raise ValueError(f"Extension '{extension.name}' is already registered")

        self._extensions[extension.name] = extension
        logger.debug(f"Registered extension '{extension.name}'")
        return self

    def unregister(self, name: str) -> Optional[BaseExtension]:
        """Remove an extension by name, returns it or None if unknown."""
        return self._extensions.pop(name, None)

    def getExtension(self, name: str) -> Optional[BaseExtension]:
        """Get registered extension by name."""
        return self._extensions.get(name)

    def listExtensions(self) -> List[str]:
        """Get extension names in pipeline order."""
        return list(self._extensions.keys())

    def runPreprocess(self, text: str) -> str:
        """Feed text through every preprocess hook, each output is the next input."""
        for extension in self._extensions.values():
            result = extension.preprocess(text)
            if result is not None:
                logger.debug(f"Extension '{extension.name}' rewrote input text")
                text = result
        return text

    def runPostprocess(self, document: MDDocument) -> None:
        """Run every postprocess hook on the document."""
        for extension in self._extensions.values():
            extension.postprocess(document)
