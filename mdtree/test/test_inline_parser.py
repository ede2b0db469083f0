"""
Tests for inline parsing: emphasis, code spans, math, images, links and
line breaks.
"""

import unittest

from mdtree.ast_nodes import (
    EmphasisType,
    MDCodeSpan,
    MDEmphasis,
    MDImage,
    MDInlineMath,
    MDLineBreak,
    MDLink,
    MDText,
)
from mdtree.cursor import Cursor
from mdtree.inline_parser import InlineParser


def parse(text, **kwargs):
    return InlineParser.parseText(text, **kwargs)


class TestEmphasis(unittest.TestCase):
    """Test emphasis markers."""

    def testBold(self):
        self.assertEqual(
            parse("**bold** text"),
            [MDEmphasis(EmphasisType.BOLD, (MDText("bold"),)), MDText(" text")],
        )

    def testItalic(self):
        self.assertEqual(parse("*it*"), [MDEmphasis(EmphasisType.ITALIC, (MDText("it"),))])

    def testBoldItalicNesting(self):
        """Test `***` produces bold wrapping italic."""
        self.assertEqual(
            parse("***both***"),
            [MDEmphasis(EmphasisType.BOLD, (MDEmphasis(EmphasisType.ITALIC, (MDText("both"),)),))],
        )

    def testUnderline(self):
        self.assertEqual(parse("__under__"), [MDEmphasis(EmphasisType.UNDERLINE, (MDText("under"),))])

    def testStrikethrough(self):
        self.assertEqual(parse("~~gone~~"), [MDEmphasis(EmphasisType.STRIKETHROUGH, (MDText("gone"),))])

    def testNestedDifferentMarkers(self):
        """Test emphasis of another kind inside emphasis."""
        self.assertEqual(
            parse("~~a **b** c~~"),
            [
                MDEmphasis(
                    EmphasisType.STRIKETHROUGH,
                    (MDText("a "), MDEmphasis(EmphasisType.BOLD, (MDText("b"),)), MDText(" c")),
                )
            ],
        )

    def testShorterCloserIsAccepted(self):
        """Test a single `*` closes `**`."""
        self.assertEqual(parse("**a*"), [MDEmphasis(EmphasisType.BOLD, (MDText("a"),))])

    def testSingleUnderscoreAndTildeAreText(self):
        self.assertEqual(parse("snake_case ~approx~"), [MDText("snake_case ~approx~")])

    def testUnclosedEmphasisIsLiteral(self):
        for text in ["**abc", "*abc", "***abc", "__abc", "~~abc"]:
            with self.subTest(text=text):
                self.assertEqual(parse(text), [MDText(text)])


class TestVerbatimSpans(unittest.TestCase):
    """Test code spans and inline math."""

    def testCodeSpanIsVerbatim(self):
        self.assertEqual(parse("use `a*b*c` here"), [MDText("use "), MDCodeSpan("a*b*c"), MDText(" here")])

    def testInlineMath(self):
        self.assertEqual(parse("area $\\pi r^2$"), [MDText("area "), MDInlineMath("\\pi r^2")])

    def testDoubleDollarInlineIsText(self):
        self.assertEqual(parse("costs $$5"), [MDText("costs $$5")])

    def testUnclosedSpansAreLiteral(self):
        self.assertEqual(parse("`code"), [MDText("`code")])
        self.assertEqual(parse("price $5"), [MDText("price $5")])

    def testSpansDoNotCrossLines(self):
        """Test an unclosed span stops at the newline."""
        cursor = Cursor("`a\nb`")
        self.assertEqual(InlineParser(cursor).parseInline(None), [MDText("`a")])
        self.assertEqual(cursor.peek(), "\n")


class TestLinksAndImages(unittest.TestCase):
    """Test links and images."""

    def testImage(self):
        self.assertEqual(parse("![Alt text](img.png)"), [MDImage("Alt text", "img.png")])

    def testLink(self):
        self.assertEqual(parse("[Rust](https://rust-lang.org)"), [MDLink("https://rust-lang.org", (MDText("Rust"),))])

    def testLinkLabelWithFormatting(self):
        self.assertEqual(
            parse("see [**docs**](/docs)"),
            [MDText("see "), MDLink("/docs", (MDEmphasis(EmphasisType.BOLD, (MDText("docs"),)),))],
        )

    def testBrokenLinksAreLiteral(self):
        """Test every consumed character of a broken link is kept."""
        for text in ["[label", "[label]", "[label] after", "[label](url", "![alt", "![alt]", "![alt](url"]:
            with self.subTest(text=text):
                self.assertEqual(parse(text), [MDText(text)])


class TestLineBreaksAndScanning(unittest.TestCase):
    """Test line breaks and scan boundaries."""

    def testBackslashIsLineBreak(self):
        self.assertEqual(parse("a\\b"), [MDText("a"), MDLineBreak(), MDText("b")])

    def testScanStopsAtNewline(self):
        cursor = Cursor("first\nsecond")
        self.assertEqual(InlineParser(cursor).parseInline(None), [MDText("first")])
        self.assertEqual(cursor.pos, 5)

    def testScanStopsAtDelimiterWithoutConsumingIt(self):
        cursor = Cursor("abc*def")
        self.assertEqual(InlineParser(cursor).parseInline("*"), [MDText("abc")])
        self.assertEqual(cursor.peek(), "*")

    def testEmptyText(self):
        self.assertEqual(parse(""), [])


class TestNestingLimit(unittest.TestCase):
    """Test markup past the nesting limit is kept as text."""

    def testEmphasisAtLimit(self):
        with self.assertLogs("mdtree", level="WARNING"):
            self.assertEqual(parse("**a**", maxNestingDepth=0), [MDText("**a**")])

    def testLinkAtLimit(self):
        with self.assertLogs("mdtree", level="WARNING"):
            self.assertEqual(parse("[a](u)", maxNestingDepth=0), [MDText("[a](u)")])

    def testDeepAlternatingEmphasisTerminates(self):
        text = "~~__" * 300 + "x"
        nodes = parse(text)
        self.assertTrue(nodes)


if __name__ == "__main__":
    unittest.main()
