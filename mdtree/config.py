"""
Configuration management for mdtree.

Example config.toml:

    [markdown]
    maxNestingDepth = 50

    [markdown.html]
    escapeHtml = true
    listIndent = 2

    [logging]
    level = "DEBUG"
    console = true
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import tomli

from .extensions import ExtensionHost
from .logging_utils import configureLogger, initLogging
from .parser import MarkdownParser
from .types import HtmlRendererOptions, LoggingConfig, MarkdownOptions

logger = logging.getLogger(__name__)

MARKDOWN_OPTION_TYPES = {"maxNestingDepth": int}
HTML_OPTION_TYPES = {"escapeHtml": bool, "codeClassPrefix": str, "listIndent": int}


class ConfigError(Exception):
    """Raised when configuration can't be loaded or has invalid values."""


class ConfigManager:
    """Loads mdtree settings from a TOML file and builds configured parsers."""

    def __init__(self, configPath: Optional[str] = "config.toml", config: Optional[Mapping[str, Any]] = None):
        """
        Initialize ConfigManager.

        Args:
            configPath: Path of the TOML file to load
            config: Already loaded settings, used instead of reading configPath
        """
        self.configPath = configPath
        if config is not None:
            self.config = self._validate(dict(config))
        else:
            self.config = self._loadConfig()

    @classmethod
    def fromDict(cls, config: Mapping[str, Any]) -> "ConfigManager":
        """Create a ConfigManager from already loaded settings."""
        return cls(configPath=None, config=config)

    def _loadConfig(self) -> Dict[str, Any]:
        """
        Load configuration from TOML file.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if self.configPath is None or not Path(self.configPath).is_file():
            raise ConfigError(f"Configuration file {self.configPath} not found")

        try:
            with open(self.configPath, "rb") as f:
                config = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load configuration {self.configPath}: {e}") from e

        config = self._validate(config)
        logger.info(f"Configuration loaded from {self.configPath}")
        return config

    def _validate(self, config: Dict[str, Any]) -> Dict[str, Any]:
        markdownConfig = config.get("markdown", {})
        if not isinstance(markdownConfig, dict):
            raise ConfigError("[markdown] must be a table")
        self._checkTypes("markdown", markdownConfig, MARKDOWN_OPTION_TYPES)

        htmlConfig = markdownConfig.get("html", {})
        if not isinstance(htmlConfig, dict):
            raise ConfigError("[markdown.html] must be a table")
        self._checkTypes("markdown.html", htmlConfig, HTML_OPTION_TYPES)

        if not isinstance(config.get("logging", {}), dict):
            raise ConfigError("[logging] must be a table")

        return config

    @staticmethod
    def _checkTypes(section: str, values: Dict[str, Any], types: Dict[str, type]) -> None:
        for key, expectedType in types.items():
            if key not in values:
                continue
            value = values[key]
            # bool is a subclass of int, don't let `true` pass as a number
            if not isinstance(value, expectedType) or (expectedType is int and isinstance(value, bool)):
                raise ConfigError(f"[{section}] {key} must be {expectedType.__name__}, got {value!r}")

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getHtmlOptions(self) -> HtmlRendererOptions:
        """Get HTML renderer options from [markdown.html]."""
        htmlConfig = self.get("markdown", {}).get("html", {})
        options: HtmlRendererOptions = {}
        for key in HTML_OPTION_TYPES:
            if key in htmlConfig:
                options[key] = htmlConfig[key]  # type: ignore[literal-required]
        return options

    def getMarkdownOptions(self) -> MarkdownOptions:
        """Get parser options from [markdown] including renderer options."""
        markdownConfig = self.get("markdown", {})
        options: MarkdownOptions = {"htmlOptions": self.getHtmlOptions()}
        if "maxNestingDepth" in markdownConfig:
            options["maxNestingDepth"] = markdownConfig["maxNestingDepth"]
        return options

    def getLoggingConfig(self) -> LoggingConfig:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def createParser(self, extensions: Optional[ExtensionHost] = None) -> MarkdownParser:
        """Create a MarkdownParser configured from this config."""
        return MarkdownParser(self.getMarkdownOptions(), extensions)

    def configureLogging(self, localLogger: Optional[logging.Logger] = None) -> logging.Logger:
        """
        Apply the [logging] section.

        Args:
            localLogger: Logger to configure, the "mdtree" package logger by default

        Returns:
            The configured logger
        """
        if localLogger is None:
            return initLogging(self.getLoggingConfig())
        configureLogger(localLogger, self.getLoggingConfig())
        return localLogger
