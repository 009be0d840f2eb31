"""Serialization of element forests back into markup text."""

from .serializer import MarkupSerializer, serialize

__all__ = [
    "MarkupSerializer",
    "serialize",
]
