"""Exception hierarchy for tinymarkup.

Parsing is all-or-nothing: every malformed input aborts the call with exactly
one of the exceptions below. Reader failures coming from the cursor are wrapped
in ``ReaderError`` and chained, structural violations detected while building
the tree surface as ``InvalidAstError``.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from tinymarkup.character.cursor import ReadError


class MarkupError(Exception):
    """Base exception for all parse failures."""


class ReaderError(MarkupError):
    """A required delimiter was not found before the end of input."""

    def __init__(self, cause: "ReadError") -> None:
        super().__init__(f"reader error: {cause}")
        self.cause = cause
        self.delimiter = getattr(cause, "delimiter", None)
        self.offset = getattr(cause, "position", None)


class InvalidAstError(MarkupError):
    """Token stream violates the structural rules of the tree builder."""

    def __init__(
        self,
        reason: str = "invalid token stream",
        token: Optional[Any] = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.token = token


class DecodeFailedError(MarkupError):
    """Raw bytes could not be decoded into text."""

    def __init__(self, encoding: str, cause: Optional[Exception] = None) -> None:
        message = f"could not decode input as {encoding}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.encoding = encoding
        self.cause = cause
