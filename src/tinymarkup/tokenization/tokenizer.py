"""Markup tokenizer.

Converts a text buffer into a flat, document-ordered list of tokens in a single
forward pass over a ``Cursor``. The tokenizer is strict: a missing ``>`` after
``<`` or a missing ``<`` after a run of text raises ``ReaderError``.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

from tinymarkup.character import Cursor, ReadError
from tinymarkup.shared import ReaderError, TokenizationConfig, get_logger

TAG_OPEN = "<"
TAG_CLOSE = ">"
END_TAG_MARKER = "/"
COMMENT_MARKER = "!"
ATTRIBUTE_SEPARATOR = " "
VALUE_SEPARATOR = "="
QUOTE = '"'


class TokenType(Enum):
    """Lexical token types."""

    START_TAG = auto()   # <name ...>
    ATTRIBUTE = auto()   # name or name="value" inside a start tag
    END_TAG = auto()     # </...>
    TEXT = auto()        # character run between tags


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    ``name`` holds the tag or attribute name, ``value`` the attribute value or
    the text content. ``offset`` points at the input index where the construct
    that produced the token starts and is ignored by equality.
    """

    type: TokenType
    name: Optional[str] = None
    value: Optional[str] = None
    offset: int = field(default=0, compare=False)

    @classmethod
    def start_tag(cls, name: str, offset: int = 0) -> "Token":
        return cls(TokenType.START_TAG, name=name, offset=offset)

    @classmethod
    def attribute(
        cls, name: str, value: Optional[str] = None, offset: int = 0
    ) -> "Token":
        return cls(TokenType.ATTRIBUTE, name=name, value=value, offset=offset)

    @classmethod
    def end_tag(cls, name: Optional[str] = None, offset: int = 0) -> "Token":
        return cls(TokenType.END_TAG, name=name, offset=offset)

    @classmethod
    def text(cls, value: str, offset: int = 0) -> "Token":
        return cls(TokenType.TEXT, value=value, offset=offset)

    def __repr__(self) -> str:
        if self.type is TokenType.START_TAG:
            return f"StartTag({self.name!r})"
        if self.type is TokenType.ATTRIBUTE:
            return f"Attribute({self.name!r}, {self.value!r})"
        if self.type is TokenType.END_TAG:
            return "EndTag" if self.name is None else f"EndTag({self.name!r})"
        return f"Text({self.value!r})"

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type.name, "offset": self.offset}
        if self.name is not None:
            result["name"] = self.name
        if self.type is TokenType.ATTRIBUTE or self.value is not None:
            result["value"] = self.value
        return result


def split_attribute(fragment: str) -> Tuple[str, Optional[str]]:
    """Split one attribute fragment into its name and optional value.

    The value loses surrounding whitespace and one pair of enclosing double
    quotes; a fragment without ``=`` is a valueless attribute.
    """
    name, separator, value = fragment.partition(VALUE_SEPARATOR)
    if not separator:
        return fragment.strip(), None

    value = value.strip()
    if len(value) >= 2 and value[0] == QUOTE and value[-1] == QUOTE:
        value = value[1:-1]
    return name.strip(), value


class MarkupTokenizer:
    """Single-pass tokenizer producing START_TAG, ATTRIBUTE, END_TAG and TEXT tokens.

    Attribute fragments are separated on every single space before quotes are
    considered, so a quoted value that contains a space is split into several
    attributes. Comments (``<!...>``) produce no token and end at the first
    ``>``.
    """

    def __init__(
        self,
        config: Optional[TokenizationConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the tokenizer.

        Args:
            config: Tokenization settings, defaults to TokenizationConfig()
            correlation_id: Optional correlation ID for tracking calls
        """
        self.config = config or TokenizationConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_tokenizer")

    def tokenize(self, data: str) -> List[Token]:
        """Tokenize ``data`` into a document-ordered token list.

        Raises:
            ReaderError: If a ``>`` or ``<`` delimiter is missing
        """
        cursor = Cursor(data)
        tokens: List[Token] = []

        self.logger.debug("Starting tokenization", extra={"content_length": len(data)})

        try:
            while True:
                cursor.skip_while(str.isspace)
                if cursor.is_eof():
                    break

                start = cursor.position
                if cursor.peek() == TAG_OPEN:
                    cursor.skip(1)
                    marker = cursor.peek()
                    if marker == END_TAG_MARKER:
                        tokens.append(self._read_end_tag(cursor, start))
                    elif marker == COMMENT_MARKER:
                        self._skip_comment(cursor)
                    else:
                        tokens.extend(self._read_start_tag(cursor, start))
                else:
                    tokens.append(Token.text(cursor.read_until(TAG_OPEN), start))
        except ReadError as e:
            self.logger.debug(
                "Tokenization failed",
                extra={"offset": cursor.position, "tokens_so_far": len(tokens)},
            )
            raise ReaderError(e) from e

        self.logger.debug("Tokenization completed", extra={"token_count": len(tokens)})
        return tokens

    def _read_end_tag(self, cursor: Cursor, start: int) -> Token:
        # Cursor sits on "/"; the name is consumed but never checked here
        raw = cursor.read_until(TAG_CLOSE)
        cursor.skip(1)
        if self.config.record_end_tag_names:
            return Token.end_tag(raw[1:].strip(), start)
        return Token.end_tag(offset=start)

    def _skip_comment(self, cursor: Cursor) -> None:
        # An unterminated comment swallows the rest of the input
        cursor.skip(1)
        cursor.skip_while(lambda ch: ch != TAG_CLOSE)
        cursor.skip(1)

    def _read_start_tag(self, cursor: Cursor, start: int) -> List[Token]:
        content = cursor.read_until(TAG_CLOSE)
        cursor.skip(1)

        name, separator, remainder = content.partition(ATTRIBUTE_SEPARATOR)
        tokens = [Token.start_tag(name, start)]
        if separator:
            for fragment in remainder.strip().split(ATTRIBUTE_SEPARATOR):
                attr_name, attr_value = split_attribute(fragment)
                tokens.append(Token.attribute(attr_name, attr_value, start))
        return tokens


def tokenize(
    data: str,
    config: Optional[TokenizationConfig] = None,
    correlation_id: Optional[str] = None,
) -> List[Token]:
    """Tokenize ``data`` with a one-off ``MarkupTokenizer``."""
    return MarkupTokenizer(config, correlation_id).tokenize(data)
