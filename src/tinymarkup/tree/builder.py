"""Tree builder.

Reduces a token stream into a forest of ``Element`` trees with an explicit
stack of open elements. Tokens are processed strictly in order with no
lookahead and no backtracking; any structural violation raises
``InvalidAstError`` and no partial forest is returned.
"""

from typing import Iterable, List, Optional

from tinymarkup.shared import InvalidAstError, TreeConfig, get_logger
from tinymarkup.tokenization import Token, TokenType

from .element import Element


class TreeBuilder:
    """Stack-based builder turning tokens into a list of top-level elements.

    Without ``TreeConfig.validate_end_tags`` an END_TAG closes whatever element
    is currently open, so mismatched tag names go unnoticed.
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Tree building settings, defaults to TreeConfig()
            correlation_id: Optional correlation ID for call tracking
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

        self._stack: List[Element] = []
        self._forest: List[Element] = []
        self.elements_built = 0

    def _reset_state(self) -> None:
        self._stack = []
        self._forest = []
        self.elements_built = 0

    def build(self, tokens: Iterable[Token]) -> List[Element]:
        """Build the element forest from ``tokens``.

        Returns:
            Top-level elements in the order they were closed

        Raises:
            InvalidAstError: On attributes or text outside an element, an end
                tag with nothing open, or elements left unclosed
        """
        self._reset_state()
        self.logger.debug("Starting tree building")

        for token in tokens:
            self._process_token(token)

        if self._stack:
            self.logger.debug(
                "Tree building failed",
                extra={"unclosed": [element.tag for element in self._stack]},
            )
            raise InvalidAstError(
                f"{len(self._stack)} unclosed element(s), innermost "
                f"<{self._stack[-1].tag}>"
            )

        self.logger.debug(
            "Tree building completed",
            extra={
                "element_count": self.elements_built,
                "root_count": len(self._forest),
            },
        )
        return self._forest

    def _process_token(self, token: Token) -> None:
        if token.type is TokenType.START_TAG:
            self._open_element(token)
        elif token.type is TokenType.ATTRIBUTE:
            self._current(token).add_attribute(token.name, token.value)
        elif token.type is TokenType.END_TAG:
            self._close_element(token)
        elif token.type is TokenType.TEXT:
            # Last text run wins
            self._current(token).text = token.value
        else:
            raise InvalidAstError(f"unknown token type {token.type!r}", token)

    def _current(self, token: Token) -> Element:
        if not self._stack:
            raise InvalidAstError(
                f"{token.type.name} at offset {token.offset} outside any element",
                token,
            )
        return self._stack[-1]

    def _open_element(self, token: Token) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and len(self._stack) >= max_depth:
            raise InvalidAstError(
                f"<{token.name}> at offset {token.offset} exceeds max depth {max_depth}",
                token,
            )
        self._stack.append(Element(token.name))
        self.elements_built += 1

    def _close_element(self, token: Token) -> None:
        if not self._stack:
            raise InvalidAstError(
                f"end tag at offset {token.offset} with no open element", token
            )

        element = self._stack[-1]
        if (
            self.config.validate_end_tags
            and token.name is not None
            and token.name != element.tag
        ):
            raise InvalidAstError(
                f"</{token.name}> at offset {token.offset} does not close <{element.tag}>",
                token,
            )

        self._stack.pop()
        if self._stack:
            self._stack[-1].add_child(element)
        else:
            self._forest.append(element)


def build_tree(
    tokens: Iterable[Token],
    config: Optional[TreeConfig] = None,
    correlation_id: Optional[str] = None,
) -> List[Element]:
    """Build a forest with a one-off ``TreeBuilder``."""
    return TreeBuilder(config, correlation_id).build(tokens)
