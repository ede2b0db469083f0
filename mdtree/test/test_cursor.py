"""
Tests for the Cursor read head.
"""

import unittest

from mdtree.cursor import EOF_CHAR, Cursor


class TestCursorBasics(unittest.TestCase):
    """Test single character access and movement."""

    def testPeekAndAdvance(self):
        """Test peek does not move, advance does."""
        cursor = Cursor("ab")
        self.assertEqual(cursor.peek(), "a")
        self.assertEqual(cursor.peek(), "a")
        cursor.advance()
        self.assertEqual(cursor.peek(), "b")
        cursor.advance()
        self.assertTrue(cursor.isEof())
        self.assertEqual(cursor.peek(), EOF_CHAR)

    def testAdvanceNeverPassesEnd(self):
        """Test advancing past the end is clamped."""
        cursor = Cursor("abc")
        cursor.advance(10)
        self.assertEqual(cursor.pos, 3)
        cursor.advance()
        self.assertEqual(cursor.pos, 3)

    def testNextChar(self):
        cursor = Cursor("xy")
        self.assertEqual(cursor.nextChar(), "x")
        self.assertEqual(cursor.nextChar(), "y")
        self.assertEqual(cursor.nextChar(), EOF_CHAR)
        self.assertTrue(cursor.isEof())

    def testEmptyInput(self):
        """Test every operation is safe on empty text."""
        cursor = Cursor("")
        self.assertTrue(cursor.isEof())
        self.assertEqual(cursor.peekLine(), "")
        self.assertEqual(cursor.readLine(), "")
        self.assertEqual(cursor.readUntil("x"), ("", False))
        self.assertEqual(cursor.readUntilSequence("```"), ("", False))
        self.assertFalse(cursor.consumeIf("a"))

    def testConsumeIf(self):
        cursor = Cursor("#a")
        self.assertFalse(cursor.consumeIf("a"))
        self.assertTrue(cursor.consumeIf("#"))
        self.assertEqual(cursor.pos, 1)

    def testConsumeRepeated(self):
        """Test consumeRepeated stops at maxCount and at another character."""
        cursor = Cursor("****x")
        self.assertEqual(cursor.consumeRepeated("*", 3), 3)
        self.assertEqual(cursor.consumeRepeated("*", 3), 1)
        self.assertEqual(cursor.consumeRepeated("*", 3), 0)
        self.assertEqual(cursor.peek(), "x")

    def testStartsWith(self):
        cursor = Cursor("a```b")
        self.assertFalse(cursor.startsWith("```"))
        cursor.advance()
        self.assertTrue(cursor.startsWith("```"))
        self.assertFalse(cursor.startsWith("````"))

    def testColumn(self):
        """Test column is measured from the start of the current line."""
        cursor = Cursor("ab\n  cd")
        self.assertEqual(cursor.column(), 0)
        cursor.advance(2)
        self.assertEqual(cursor.column(), 2)
        cursor.advance(3)
        self.assertEqual(cursor.column(), 2)


class TestCursorLines(unittest.TestCase):
    """Test line oriented reads."""

    def testPeekLineDoesNotConsume(self):
        cursor = Cursor("first\nsecond")
        self.assertEqual(cursor.peekLine(), "first")
        self.assertEqual(cursor.pos, 0)

    def testReadLineConsumesNewline(self):
        cursor = Cursor("first\nsecond")
        self.assertEqual(cursor.readLine(), "first")
        self.assertEqual(cursor.peek(), "s")
        self.assertEqual(cursor.readLine(), "second")
        self.assertTrue(cursor.isEof())

    def testSkipWhitespace(self):
        """Test skipWhitespace crosses blank lines, skipInlineWhitespace doesn't."""
        cursor = Cursor("  \n\t x")
        cursor.skipInlineWhitespace()
        self.assertEqual(cursor.peek(), "\n")
        cursor.skipWhitespace()
        self.assertEqual(cursor.peek(), "x")


class TestCursorReadUntil(unittest.TestCase):
    """Test bounded reads."""

    def testReadUntilFound(self):
        cursor = Cursor("label](url)")
        self.assertEqual(cursor.readUntil("]"), ("label", True))
        self.assertEqual(cursor.peek(), "(")

    def testReadUntilStopsAtNewline(self):
        """Test the newline ends the read and is left in place."""
        cursor = Cursor("abc\ndef]")
        self.assertEqual(cursor.readUntil("]"), ("abc", False))
        self.assertEqual(cursor.peek(), "\n")

    def testReadUntilEof(self):
        cursor = Cursor("abc")
        self.assertEqual(cursor.readUntil("`"), ("abc", False))
        self.assertTrue(cursor.isEof())

    def testReadUntilSequenceCrossesLines(self):
        cursor = Cursor("line 1\nline 2\n```after")
        self.assertEqual(cursor.readUntilSequence("```"), ("line 1\nline 2\n", True))
        self.assertEqual(cursor.peekLine(), "after")

    def testReadUntilSequenceWithoutFence(self):
        cursor = Cursor("no fence here")
        self.assertEqual(cursor.readUntilSequence("$$"), ("no fence here", False))
        self.assertTrue(cursor.isEof())


if __name__ == "__main__":
    unittest.main()
