"""Forward-only scanning cursor over an indexable sequence.

The cursor is the only component that touches the raw input. It works the same
way over text (items are one-character strings), bytes (items are ints) and
lists of arbitrary items; the tokenizer uses it over ``str``.
"""

from typing import Any, Callable, Optional, Sequence


class ReadError(Exception):
    """Base exception for cursor read failures."""


class DelimiterNotFound(ReadError):
    """The delimiter does not occur in the unconsumed remainder."""

    def __init__(self, delimiter: Any, position: int) -> None:
        super().__init__(f"delimiter {delimiter!r} not found after offset {position}")
        self.delimiter = delimiter
        self.position = position


class Cursor:
    """Position-tracking cursor over a borrowed sequence.

    Positions past the end are legal: ``skip`` never checks bounds, and every
    subsequent read behaves as end of input.
    """

    def __init__(self, data: Sequence[Any]) -> None:
        self.data = data
        self.position = 0

    def __repr__(self) -> str:
        return f"Cursor(position={self.position}, end={self.end})"

    @property
    def end(self) -> int:
        return len(self.data)

    def rest(self) -> Sequence[Any]:
        """Return the unconsumed remainder of the sequence."""
        return self.data[self.position:]

    def is_eof(self) -> bool:
        return self.position >= len(self.data)

    def reset(self) -> None:
        self.position = 0

    def peek(self) -> Optional[Any]:
        """Return the current item without advancing, or None at end of input."""
        if self.position < len(self.data):
            return self.data[self.position]
        return None

    def skip(self, n: int = 1) -> None:
        self.position += n

    def skip_while(self, predicate: Callable[[Any], bool]) -> None:
        """Advance while ``predicate`` holds for the current item."""
        while True:
            item = self.peek()
            if item is None or not predicate(item):
                break
            self.position += 1

    def _find(self, delimiter: Any) -> int:
        if self.position >= len(self.data):
            return -1
        if isinstance(self.data, (str, bytes, bytearray)):
            return self.data.find(delimiter, self.position)
        for index in range(self.position, len(self.data)):
            if self.data[index] == delimiter:
                return index
        return -1

    def peek_until(self, delimiter: Any) -> Optional[Sequence[Any]]:
        """Return the items up to ``delimiter`` without advancing.

        Returns None when the delimiter does not occur in the remainder.
        """
        index = self._find(delimiter)
        if index < 0:
            return None
        return self.data[self.position:index]

    def read_until(self, delimiter: Any) -> Sequence[Any]:
        """Consume and return the items up to, not including, ``delimiter``.

        On success the cursor is left on the delimiter itself; the caller has
        to ``skip`` it. On failure the position is unchanged.

        Raises:
            DelimiterNotFound: If the delimiter does not occur in the remainder
        """
        index = self._find(delimiter)
        if index < 0:
            raise DelimiterNotFound(delimiter, self.position)
        span = self.data[self.position:index]
        self.position = index
        return span
