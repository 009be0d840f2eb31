"""Markup serializer.

Renders a forest back into markup text. No escaping is performed on attribute
values or text; content is passed through verbatim.
"""

from typing import List, Optional, Sequence

from tinymarkup.shared import get_logger
from tinymarkup.tree import Element


class MarkupSerializer:
    """Recursive forest-to-text serializer."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_serializer")

    def serialize(self, elements: Sequence[Element]) -> str:
        """Serialize top-level elements in order with no separators."""
        parts: List[str] = []
        for element in elements:
            self._format_element(element, parts)
        output = "".join(parts)

        self.logger.debug(
            "Serialization completed",
            extra={"root_count": len(elements), "output_length": len(output)},
        )
        return output

    def _format_element(self, element: Element, parts: List[str]) -> None:
        parts.append(f"<{element.tag}")
        for attribute in element.attributes:
            if attribute.value is None:
                parts.append(f" {attribute.name}")
            else:
                parts.append(f' {attribute.name}="{attribute.value}"')
        parts.append(">")

        # Inner text wins over children when both are set
        if element.text is not None:
            parts.append(element.text)
        else:
            for child in element.children:
                self._format_element(child, parts)

        parts.append(f"</{element.tag}>")


def serialize(elements: Sequence[Element]) -> str:
    """Serialize ``elements`` with a one-off ``MarkupSerializer``."""
    return MarkupSerializer().serialize(elements)
