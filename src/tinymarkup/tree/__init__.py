"""Tree building engine for tinymarkup.

Key Components:
    TreeBuilder: Stack-based reduction of a token stream into a forest
    Element: Tag, attributes, children and optional inner text
    Attribute: Name with an optional value
"""

from .builder import TreeBuilder, build_tree
from .element import Attribute, Element

__all__ = [
    "Attribute",
    "Element",
    "TreeBuilder",
    "build_tree",
]
