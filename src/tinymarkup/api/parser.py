"""Core parser API for tinymarkup.

Progressive disclosure from module-level functions to a configured, reusable
``MarkupParser``. Every entry point is strict: malformed input raises a
``MarkupError`` subclass and nothing partial is returned.
"""

import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import psutil

from tinymarkup.serialization import MarkupSerializer
from tinymarkup.shared import (
    DecodeFailedError,
    MarkupError,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
)
from tinymarkup.tokenization import MarkupTokenizer, Token
from tinymarkup.tree import Element, TreeBuilder

MS_PER_SECOND = 1000
DEFAULT_ENCODING = "utf-8"


class MarkupParser:
    """Configured parser with reusable components and usage statistics.

    Examples:
        >>> parser = MarkupParser()
        >>> parser.parse('<p class="x">Hi</p>')[0].get_attribute('class')
        'x'

        Rejecting mismatched end tags:
        >>> MarkupParser(ParserConfig.strict()).parse('<a></b>')
        Traceback (most recent call last):
        ...
        tinymarkup.shared.errors.InvalidAstError: </b> at offset 3 does not close <a>
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration, defaults to ParserConfig()
            correlation_id: Optional correlation ID for call tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_parser")
        self.last_metrics: Optional[PerformanceMetrics] = None
        self._process = psutil.Process()
        self.reconfigure(config or ParserConfig())
        self.reset_statistics()

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration and rebuild the pipeline components."""
        self.config = config
        self._tokenizer = MarkupTokenizer(config.tokenization, self.correlation_id)
        self._tree_builder = TreeBuilder(config.tree, self.correlation_id)
        self._serializer = MarkupSerializer(self.correlation_id)

        self.logger.debug(
            "Parser configured",
            extra={"config_name": config.name},
        )

    def tokenize(self, data: str) -> List[Token]:
        """Tokenize ``data`` into a document-ordered token list."""
        return self._tokenizer.tokenize(data)

    def build_tree(self, tokens: Sequence[Token]) -> List[Element]:
        """Reduce an already tokenized stream into a forest."""
        return self._tree_builder.build(tokens)

    @property
    def elements_built(self) -> int:
        """Number of elements opened by the most recent tree build."""
        return self._tree_builder.elements_built

    def parse(self, data: str) -> List[Element]:
        """Parse ``data`` into a forest of top-level elements.

        Raises:
            ReaderError: If a delimiter is missing while scanning
            InvalidAstError: If the token stream is structurally invalid
        """
        start_time = time.time()
        memory_start = self._memory_usage()
        self._parse_count += 1

        try:
            tokens = self._tokenizer.tokenize(data)
            forest = self._tree_builder.build(tokens)
        except MarkupError as e:
            self._failed_parses += 1
            self.logger.debug(
                "Parse failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            raise

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        self._total_processing_time += processing_time

        if self.config.global_.enable_metrics:
            self.last_metrics = PerformanceMetrics(
                processing_time_ms=processing_time,
                memory_used_bytes=max(0, self._memory_usage() - memory_start),
                characters_processed=len(data),
                tokens_generated=len(tokens),
                elements_built=self._tree_builder.elements_built,
            )

        self.logger.debug(
            "Parse completed",
            extra={"root_count": len(forest), "processing_time_ms": processing_time},
        )
        return forest

    def _memory_usage(self) -> int:
        """Resident set size in bytes, 0 when metrics are disabled."""
        if not self.config.global_.enable_metrics:
            return 0
        return self._process.memory_info().rss

    def parse_bytes(self, data: bytes, encoding: str = DEFAULT_ENCODING) -> List[Element]:
        """Decode ``data`` strictly and parse the resulting text.

        Raises:
            DecodeFailedError: If ``data`` is not valid in ``encoding``
        """
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            self._parse_count += 1
            self._failed_parses += 1
            raise DecodeFailedError(encoding, e) from e
        return self.parse(text)

    def parse_file(
        self,
        file_path: Union[str, Path],
        encoding: str = DEFAULT_ENCODING
    ) -> List[Element]:
        """Read a file as bytes and parse it.

        Raises:
            OSError: If the file cannot be read
            DecodeFailedError: If the file is not valid in ``encoding``
        """
        path_obj = Path(file_path)
        self.logger.debug("Reading file", extra={"file_path": str(path_obj)})
        return self.parse_bytes(path_obj.read_bytes(), encoding)

    def serialize(self, elements: Sequence[Element]) -> str:
        """Render a forest back into markup text."""
        return self._serializer.serialize(elements)

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        successful = self._parse_count - self._failed_parses
        return {
            "total_parses": self._parse_count,
            "successful_parses": successful,
            "failed_parses": self._failed_parses,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / successful if successful > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._failed_parses = 0
        self._total_processing_time = 0.0


def tokenize(
    data: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> List[Token]:
    """Tokenize markup text.

    Examples:
        >>> tokenize('<button>Hello</button>')
        [StartTag('button'), Text('Hello'), EndTag]
    """
    return MarkupParser(config, correlation_id).tokenize(data)


def parse(
    data: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> List[Element]:
    """Parse markup text into a forest of elements.

    Examples:
        >>> forest = parse('<div><button class="btn">Hello</button></div>')
        >>> forest[0].children[0].text
        'Hello'
    """
    return MarkupParser(config, correlation_id).parse(data)


def parse_bytes(
    data: bytes,
    encoding: str = DEFAULT_ENCODING,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> List[Element]:
    """Decode and parse markup bytes."""
    return MarkupParser(config, correlation_id).parse_bytes(data, encoding)


def parse_file(
    file_path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> List[Element]:
    """Read and parse a markup file."""
    return MarkupParser(config, correlation_id).parse_file(file_path, encoding)


def serialize(elements: Sequence[Element]) -> str:
    """Render a forest back into markup text.

    Examples:
        >>> serialize([Element('p', text='Hi')])
        '<p>Hi</p>'
    """
    return MarkupSerializer().serialize(elements)
