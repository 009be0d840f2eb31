"""Tests for the element data model."""

import pytest

from tinymarkup.tree import Attribute, Element


@pytest.fixture
def page():
    return Element(
        "div",
        attributes=[Attribute("id", "root")],
        children=[
            Element("p", attributes=[Attribute("hidden")], text="one"),
            Element("section", children=[Element("p", text="two")]),
        ],
    )


class TestElement:
    """Tests for Element helpers."""

    def test_defaults(self):
        """Test a new element has no attributes, children or text."""
        element = Element("br")
        assert element.attributes == []
        assert element.children == []
        assert element.text is None

    def test_add_attribute_and_child(self):
        """Test building an element by hand."""
        root = Element("html")
        root.add_child(Element("p"))
        root.add_attribute("lang", "en")
        assert root == Element(
            "html", attributes=[Attribute("lang", "en")], children=[Element("p")]
        )

    def test_add_child_type_check(self):
        """Test only elements can be added as children."""
        with pytest.raises(TypeError):
            Element("div").add_child("text")

    def test_get_attribute(self, page):
        """Test attribute lookup and defaults."""
        assert page.get_attribute("id") == "root"
        assert page.get_attribute("missing", "fallback") == "fallback"

    def test_valueless_attribute(self, page):
        """Test valueless attributes are present with a None value."""
        paragraph = page.children[0]
        assert paragraph.has_attribute("hidden")
        assert paragraph.get_attribute("hidden", "default") is None
        assert not paragraph.has_attribute("id")

    def test_iter_document_order(self, page):
        """Test iteration is depth-first in document order."""
        assert [element.tag for element in page.iter()] == ["div", "p", "section", "p"]

    def test_find(self, page):
        """Test find returns the first descendant."""
        assert page.find("p").text == "one"
        assert page.find("div") is None

    def test_find_all(self, page):
        """Test find_all collects every descendant."""
        assert [element.text for element in page.find_all("p")] == ["one", "two"]

    def test_to_dict_round_trip(self, page):
        """Test dictionary conversion can be reversed."""
        data = page.to_dict()
        assert data["attributes"] == [{"name": "id", "value": "root"}]
        assert "text" not in data
        assert Element.from_dict(data) == page
