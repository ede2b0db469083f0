"""
Tests for ConfigManager and logging helpers.
"""

import logging
import os
import tempfile
import unittest

from mdtree.config import ConfigError, ConfigManager
from mdtree.logging_utils import configureLogger, getLogLevelByStr

SAMPLE_CONFIG = """
[markdown]
maxNestingDepth = 10

[markdown.html]
escapeHtml = true
codeClassPrefix = "lang-"

[logging]
level = "DEBUG"
console = true
"""


class TestConfigManager(unittest.TestCase):
    """Test loading and validation of TOML configuration."""

    def setUp(self):
        self.tmpDir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpDir.cleanup()

    def writeConfig(self, content: str) -> str:
        path = os.path.join(self.tmpDir.name, "config.toml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def testLoadConfig(self):
        manager = ConfigManager(self.writeConfig(SAMPLE_CONFIG))
        self.assertEqual(
            manager.getMarkdownOptions(),
            {"maxNestingDepth": 10, "htmlOptions": {"escapeHtml": True, "codeClassPrefix": "lang-"}},
        )
        self.assertEqual(manager.getLoggingConfig(), {"level": "DEBUG", "console": True})

    def testCreateParser(self):
        parser = ConfigManager(self.writeConfig(SAMPLE_CONFIG)).createParser()
        self.assertEqual(parser.maxNestingDepth, 10)
        self.assertEqual(
            parser.parseToHtml("```py\n<x>\n```"),
            '<pre><code class="lang-py">&lt;x&gt;</code></pre>\n',
        )

    def testEmptyConfigUsesDefaults(self):
        manager = ConfigManager(self.writeConfig(""))
        self.assertEqual(manager.getMarkdownOptions(), {"htmlOptions": {}})
        self.assertEqual(manager.createParser().parseToHtml("<b>"), "<p><b></p>\n")

    def testMissingFile(self):
        with self.assertRaises(ConfigError):
            ConfigManager(os.path.join(self.tmpDir.name, "missing.toml"))

    def testInvalidToml(self):
        with self.assertRaises(ConfigError):
            ConfigManager(self.writeConfig("[markdown\nmaxNestingDepth = "))

    def testWrongTypes(self):
        testCases = [
            '[markdown]\nmaxNestingDepth = "ten"',
            "[markdown]\nmaxNestingDepth = true",
            "[markdown.html]\nescapeHtml = 1",
            "[markdown.html]\nlistIndent = 2.5",
            'markdown = "flat"',
            "logging = 1",
        ]
        for content in testCases:
            with self.subTest(content=content):
                with self.assertRaises(ConfigError):
                    ConfigManager(self.writeConfig(content))

    def testFromDict(self):
        manager = ConfigManager.fromDict({"markdown": {"html": {"listIndent": 2}}})
        self.assertIsNone(manager.configPath)
        self.assertEqual(manager.getHtmlOptions(), {"listIndent": 2})
        self.assertEqual(manager.get("missing", "x"), "x")

        with self.assertRaises(ConfigError):
            ConfigManager.fromDict({"markdown": {"html": {"listIndent": "2"}}})


class TestLogging(unittest.TestCase):
    """Test logger configuration."""

    def setUp(self):
        self.logger = logging.getLogger("mdtree.test.configured")
        self.tmpDir = tempfile.TemporaryDirectory()

    def tearDown(self):
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)
        self.logger.setLevel(logging.NOTSET)
        self.logger.propagate = True
        self.tmpDir.cleanup()

    def testGetLogLevelByStr(self):
        self.assertEqual(getLogLevelByStr("debug"), logging.DEBUG)
        self.assertEqual(getLogLevelByStr("WARNING"), logging.WARNING)
        self.assertIsNone(getLogLevelByStr("loud"))
        self.assertEqual(getLogLevelByStr("loud", logging.INFO), logging.INFO)
        self.assertEqual(getLogLevelByStr("basicConfig", logging.INFO), logging.INFO)

    def testConsoleHandler(self):
        configureLogger(self.logger, {"level": "DEBUG", "console": True, "console-level": "ERROR"})
        self.assertEqual(self.logger.level, logging.DEBUG)
        self.assertEqual(len(self.logger.handlers), 1)
        self.assertEqual(self.logger.handlers[0].level, logging.ERROR)

    def testReconfigureDoesNotDuplicateHandlers(self):
        configureLogger(self.logger, {"console": True})
        configureLogger(self.logger, {"console": True})
        self.assertEqual(len(self.logger.handlers), 1)

    def testFileHandler(self):
        logFile = os.path.join(self.tmpDir.name, "logs", "mdtree.log")
        configureLogger(self.logger, {"level": "INFO", "file": logFile, "propagate": False})
        self.logger.info("written to file")
        for handler in self.logger.handlers:
            handler.flush()

        self.assertFalse(self.logger.propagate)
        self.assertIsInstance(self.logger.handlers[0], logging.FileHandler)
        with open(logFile, encoding="utf-8") as f:
            self.assertIn("written to file", f.read())

    def testRotatingFileHandler(self):
        from logging.handlers import TimedRotatingFileHandler

        logFile = os.path.join(self.tmpDir.name, "rotating.log")
        configureLogger(self.logger, {"file": logFile, "rotate": True, "backup-count": 3})
        handler = self.logger.handlers[0]
        self.assertIsInstance(handler, TimedRotatingFileHandler)
        self.assertEqual(handler.backupCount, 3)

    def testConfigManagerConfiguresLogger(self):
        manager = ConfigManager.fromDict({"logging": {"level": "WARNING", "console": True}})
        configured = manager.configureLogging(self.logger)
        self.assertIs(configured, self.logger)
        self.assertEqual(self.logger.level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
