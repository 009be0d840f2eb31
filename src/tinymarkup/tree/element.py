"""Element tree data model.

Elements own their children outright; there are no parent pointers, so a
forest is a plain nested structure that compares by value.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class Attribute:
    """A single attribute; ``value`` is None for valueless attributes."""

    name: str
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class Element:
    """A structural node with a tag, attributes, children and inner text.

    Attributes keep insertion order and duplicates. ``children`` and ``text``
    are both kept even though serialization only ever emits one of them.
    """

    tag: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Element"] = field(default_factory=list)
    text: Optional[str] = None

    def add_attribute(self, name: str, value: Optional[str] = None) -> None:
        self.attributes.append(Attribute(name, value))

    def add_child(self, child: "Element") -> None:
        """Append a child element."""
        if not isinstance(child, Element):
            raise TypeError("Child must be an Element instance")
        self.children.append(child)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute called ``name``.

        Valueless attributes return None, use ``has_attribute`` to tell them
        apart from missing ones.
        """
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return default

    def has_attribute(self, name: str) -> bool:
        return any(attribute.name == name for attribute in self.attributes)

    def iter(self) -> Iterator["Element"]:
        """Iterate over this element and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find(self, tag: str) -> Optional["Element"]:
        """Find the first descendant element with a matching tag."""
        for element in self.iter():
            if element is not self and element.tag == tag:
                return element
        return None

    def find_all(self, tag: str) -> List["Element"]:
        """Find all descendant elements with a matching tag."""
        return [
            element for element in self.iter()
            if element is not self and element.tag == tag
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "tag": self.tag,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "children": [child.to_dict() for child in self.children],
        }
        if self.text is not None:
            result["text"] = self.text
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Element":
        return cls(
            tag=data["tag"],
            attributes=[
                Attribute(item["name"], item.get("value"))
                for item in data.get("attributes", [])
            ],
            children=[cls.from_dict(child) for child in data.get("children", [])],
            text=data.get("text"),
        )
