"""
Cursor for mdtree

A read head over the full text of one document. All block and inline parsers
are written in terms of this class; there is no token stream and no
backtracking buffer, lookahead goes through peekLine().
"""

from typing import Tuple

EOF_CHAR = "\0"


class Cursor:
    """
    Character cursor over an in-memory string.

    Example:
        >>> cursor = Cursor("# Title\\nBody")
        >>> cursor.startsWith("#")
        True
        >>> cursor.readLine()
        '# Title'
        >>> cursor.peekLine()
        'Body'
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, length={len(self.text)})"

    def isEof(self) -> bool:
        """Check if the whole input has been consumed."""
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Return current character or EOF_CHAR when exhausted."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return EOF_CHAR

    def advance(self, count: int = 1) -> None:
        """Move forward by count characters, never past the end."""
        self.pos = min(self.pos + count, len(self.text))

    def nextChar(self) -> str:
        """Return current character and move past it."""
        char = self.peek()
        self.advance()
        return char

    def consumeIf(self, char: str) -> bool:
        """Consume char if it is the current character."""
        if not self.isEof() and self.text[self.pos] == char:
            self.pos += 1
            return True
        return False

    def consumeRepeated(self, char: str, maxCount: int) -> int:
        """
        Consume up to maxCount repetitions of char.

        Returns:
            Number of characters actually consumed
        """
        consumed = 0
        while consumed < maxCount and self.consumeIf(char):
            consumed += 1
        return consumed

    def startsWith(self, prefix: str) -> bool:
        """Check if the remaining input starts with prefix."""
        return self.text.startswith(prefix, self.pos)

    def column(self) -> int:
        """Offset of the cursor from the start of the current line."""
        return self.pos - (self.text.rfind("\n", 0, self.pos) + 1)

    def peekLine(self) -> str:
        """Return the rest of the current line without consuming it or the newline."""
        end = self.text.find("\n", self.pos)
        if end == -1:
            end = len(self.text)
        return self.text[self.pos : end]

    def readLine(self) -> str:
        """Consume the rest of the current line including its newline, return it without the newline."""
        line = self.peekLine()
        self.pos += len(line)
        self.consumeIf("\n")
        return line

    def skipWhitespace(self) -> None:
        """Skip any whitespace, blank lines included."""
        while not self.isEof() and self.text[self.pos].isspace():
            self.pos += 1

    def skipInlineWhitespace(self) -> None:
        """Skip spaces and tabs on the current line."""
        while not self.isEof() and self.text[self.pos] in " \t":
            self.pos += 1

    def readUntil(self, stopChar: str) -> Tuple[str, bool]:
        """
        Read up to stopChar on the current line.

        The stop character is consumed when found; the newline is never
        consumed.

        Args:
            stopChar: Character that ends the read

        Returns:
            Tuple of (text read, whether stopChar was found)
        """
        start = self.pos
        while not self.isEof():
            char = self.text[self.pos]
            if char == stopChar:
                value = self.text[start : self.pos]
                self.pos += 1
                return value, True
            if char == "\n":
                break
            self.pos += 1
        return self.text[start : self.pos], False

    def readUntilSequence(self, fence: str) -> Tuple[str, bool]:
        """
        Read verbatim across lines up to fence, consuming the fence.

        Without a closing fence everything up to the end of input is returned.

        Returns:
            Tuple of (text read, whether fence was found)
        """
        end = self.text.find(fence, self.pos)
        if end == -1:
            value = self.text[self.pos :]
            self.pos = len(self.text)
            return value, False
        value = self.text[self.pos : end]
        self.pos = end + len(fence)
        return value, True
