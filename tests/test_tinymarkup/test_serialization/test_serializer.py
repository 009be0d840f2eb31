"""Tests for forest serialization."""

from tinymarkup.serialization import MarkupSerializer, serialize
from tinymarkup.tokenization import tokenize
from tinymarkup.tree import Attribute, Element, build_tree


class TestSerialize:
    """Tests for rendering elements back to text."""

    def test_attribute_and_text(self):
        """Test attribute values are double quoted."""
        element = Element("button", attributes=[Attribute("class", "btn")], text="Hello")
        assert serialize([element]) == '<button class="btn">Hello</button>'

    def test_nested(self):
        """Test children are rendered recursively without separators."""
        forest = [Element("div", children=[Element("p", text="a"), Element("p", text="b")])]
        assert serialize(forest) == "<div><p>a</p><p>b</p></div>"

    def test_valueless_attribute(self):
        """Test valueless attributes render as bare names."""
        element = Element(
            "button",
            attributes=[Attribute("class", "btn"), Attribute("disabled")],
            text="Hello",
        )
        assert serialize([element]) == '<button class="btn" disabled>Hello</button>'

    def test_empty_value_is_quoted(self):
        """Test an empty string value is not treated as valueless."""
        assert serialize([Element("img", attributes=[Attribute("alt", "")])]) == (
            '<img alt=""></img>'
        )

    def test_text_wins_over_children(self):
        """Test children are dropped when inner text is set."""
        element = Element("div", children=[Element("b", text="x")], text="c")
        assert serialize([element]) == "<div>c</div>"

    def test_empty_text_wins_over_children(self):
        """Test an empty string still counts as text."""
        element = Element("div", children=[Element("b")], text="")
        assert serialize([element]) == "<div></div>"

    def test_forest_concatenated(self):
        """Test top-level elements are joined in order."""
        assert serialize([Element("a"), Element("b")]) == "<a></a><b></b>"

    def test_empty_forest(self):
        """Test an empty forest renders as an empty string."""
        assert serialize([]) == ""

    def test_no_escaping(self):
        """Test text and values are emitted verbatim."""
        element = Element("p", attributes=[Attribute("title", 'a"b')], text="1 < 2 & 3")
        assert serialize([element]) == '<p title="a"b">1 < 2 & 3</p>'

    def test_serializer_instance(self):
        """Test the serializer class matches the module function."""
        forest = build_tree(tokenize('<ul><li id="1">x</li></ul>'))
        assert MarkupSerializer(correlation_id="c1").serialize(forest) == serialize(forest)
