"""
Scan position over Amp source text.

The cursor walks the text one character at a time. Its position never
leaves the text: moving forward stops on the last character. Separately,
the cursor counts how many characters have been consumed (the offset),
which runs from 0 to len(text); consuming the last character makes the
cursor exhausted without moving the position. A stack of saved offsets
lets the lexer look ahead and come back without copying anything.
"""

from typing import List, Optional


ASCII_WHITESPACE = frozenset(" \t\n\r\x0b\x0c")


class Cursor:
    """Read-only, rewindable position over a string."""

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self._offset = 0
        self._saved: List[int] = []

    @property
    def position(self) -> int:
        """Index of the current character, clamped to the last one."""
        return min(self._offset, max(self.length - 1, 0))

    @property
    def offset(self) -> int:
        """Number of characters consumed so far."""
        return self._offset

    def current(self) -> str:
        """
        Character at the current position.

        Raises:
            IndexError: if the text is empty
        """
        if self.length == 0:
            raise IndexError("cursor over empty text has no current character")
        return self.text[self.position]

    def peek_next(self) -> Optional[str]:
        """Character after the current one, without moving."""
        next_position = self._offset + 1
        if next_position < self.length:
            return self.text[next_position]
        return None

    def advance(self) -> Optional[str]:
        """
        Move one character forward and return the new current character.

        On the last character the position stays put, the character is
        consumed and None is returned.
        """
        if self._offset < self.length:
            self._offset += 1
        if self._offset < self.length:
            return self.text[self._offset]
        return None

    def skip(self, n: int):
        """Consume n characters; the position stops on the last character."""
        self._offset = min(self._offset + n, self.length)

    def rewind(self, n: int):
        """Un-consume the last n characters, never before the start."""
        self._offset = max(self._offset - n, 0)

    def at_end(self) -> bool:
        """True on the last character (or when the text is empty)."""
        return self.position >= self.length - 1

    def exhausted(self) -> bool:
        """True once every character has been consumed."""
        return self._offset >= self.length

    def skip_whitespace(self):
        """Advance past ASCII whitespace."""
        while self._offset < self.length and self.text[self._offset] in ASCII_WHITESPACE:
            self._offset += 1

    # Saved positions

    def save(self):
        """Push the current offset onto the saved stack."""
        self._saved.append(self._offset)

    def restore(self):
        """Pop the most recently saved offset and move back to it."""
        self._offset = self._saved.pop()

    def discard(self):
        """Pop the most recently saved offset without moving."""
        self._saved.pop()

    @property
    def saved_depth(self) -> int:
        return len(self._saved)

    def __repr__(self) -> str:
        return f"Cursor(position={self.position}, offset={self._offset}, length={self.length})"
