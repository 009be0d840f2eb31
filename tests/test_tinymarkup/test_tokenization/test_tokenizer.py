"""Comprehensive tests for markup tokenization."""

import pytest

from tinymarkup.character import DelimiterNotFound
from tinymarkup.shared import ReaderError, TokenizationConfig
from tinymarkup.tokenization import (
    MarkupTokenizer,
    Token,
    TokenType,
    split_attribute,
    tokenize,
)

StartTag = Token.start_tag
Attribute = Token.attribute
Text = Token.text
EndTag = Token.end_tag()


class TestToken:
    """Tests for the Token data class."""

    def test_constructors(self):
        """Test the factory methods set type, name and value."""
        assert StartTag("div").type is TokenType.START_TAG
        assert Attribute("id", "x") == Token(TokenType.ATTRIBUTE, name="id", value="x")
        assert Text("hi").value == "hi"
        assert EndTag.name is None

    def test_offset_ignored_by_equality(self):
        """Test tokens compare equal regardless of their offsets."""
        assert StartTag("p", offset=0) == StartTag("p", offset=42)

    def test_repr(self):
        """Test tokens have a readable representation."""
        assert repr(StartTag("a")) == "StartTag('a')"
        assert repr(Attribute("x", None)) == "Attribute('x', None)"
        assert repr(EndTag) == "EndTag"
        assert repr(Token.end_tag("a")) == "EndTag('a')"
        assert repr(Text("t")) == "Text('t')"

    def test_to_dict(self):
        """Test dictionary conversion keeps attribute values even when None."""
        assert Attribute("disabled", None, 4).to_dict() == {
            "type": "ATTRIBUTE", "offset": 4, "name": "disabled", "value": None
        }
        assert EndTag.to_dict() == {"type": "END_TAG", "offset": 0}


class TestSplitAttribute:
    """Tests for attribute fragment splitting."""

    def test_quoted_value(self):
        """Test one pair of double quotes is removed."""
        assert split_attribute('class="btn"') == ("class", "btn")

    def test_unquoted_value(self):
        """Test unquoted values are kept as-is."""
        assert split_attribute("width=10") == ("width", "10")

    def test_valueless(self):
        """Test fragments without '=' have no value."""
        assert split_attribute("disabled") == ("disabled", None)

    def test_empty_value(self):
        """Test an empty quoted value is an empty string, not None."""
        assert split_attribute('alt=""') == ("alt", "")
        assert split_attribute("alt=") == ("alt", "")

    def test_splits_on_first_equals(self):
        """Test later '=' characters stay in the value."""
        assert split_attribute('href="a=b"') == ("href", "a=b")

    def test_only_one_quote_pair_removed(self):
        """Test nested quote pairs keep the inner pair."""
        assert split_attribute('x=""y""') == ("x", '"y"')

    def test_unbalanced_quote_kept(self):
        """Test a lone quote is not stripped."""
        assert split_attribute('title="a') == ("title", '"a')


class TestTokenizeDocuments:
    """Tests for tokenizing well-formed fragments."""

    def test_single_tag(self):
        """Test a single element with text."""
        assert tokenize("<button>Hello</button>") == [
            StartTag("button"), Text("Hello"), EndTag
        ]

    def test_nested_tags(self):
        """Test nested elements keep document order."""
        assert tokenize("<div><button>Hello</button></div>") == [
            StartTag("div"),
            StartTag("button"),
            Text("Hello"),
            EndTag,
            EndTag,
        ]

    def test_attribute(self):
        """Test a quoted attribute."""
        assert tokenize('<button class="btn">Hello</button>') == [
            StartTag("button"),
            Attribute("class", "btn"),
            Text("Hello"),
            EndTag,
        ]

    def test_attributes_in_order(self):
        """Test valued and valueless attributes keep their order."""
        assert tokenize('<button class="btn" disabled>Hello</button>') == [
            StartTag("button"),
            Attribute("class", "btn"),
            Attribute("disabled", None),
            Text("Hello"),
            EndTag,
        ]

    def test_duplicate_attributes_kept(self):
        """Test duplicate attributes are not merged."""
        tokens = tokenize('<a x="1" x="2"></a>')
        assert tokens[1:3] == [Attribute("x", "1"), Attribute("x", "2")]

    def test_whitespace_between_tags_skipped(self):
        """Test whitespace-only runs produce no tokens."""
        assert tokenize("  <ul>\n  <li>a</li>\n</ul>\n") == [
            StartTag("ul"), StartTag("li"), Text("a"), EndTag, EndTag
        ]

    def test_text_keeps_trailing_whitespace(self):
        """Test leading whitespace is skipped but trailing whitespace stays."""
        assert tokenize("<p>  Hello  </p>") == [StartTag("p"), Text("Hello  "), EndTag]

    def test_empty_input(self):
        """Test empty and whitespace-only inputs produce no tokens."""
        assert tokenize("") == []
        assert tokenize(" \n\t ") == []

    def test_empty_tag_name(self):
        """Test '<>' yields an empty start tag name."""
        assert tokenize("<></>") == [StartTag(""), EndTag]

    def test_end_tag_name_not_checked(self):
        """Test the end tag name is discarded without validation."""
        assert tokenize("<div></span>") == [StartTag("div"), EndTag]

    def test_offsets(self):
        """Test tokens record where their construct starts."""
        tokens = tokenize('<p id="x">Hi</p>')
        assert [token.offset for token in tokens] == [0, 0, 10, 12]


class TestComments:
    """Tests for comment elision."""

    def test_comment_elided(self):
        """Test a comment produces no token."""
        assert tokenize("<!-- comment -->") == []

    def test_comment_between_elements(self):
        """Test comments inside elements are skipped."""
        assert tokenize("<div><!-- note --><p>x</p></div>") == [
            StartTag("div"), StartTag("p"), Text("x"), EndTag, EndTag
        ]

    def test_unterminated_comment_consumes_rest(self):
        """Test an unclosed comment swallows the remaining input."""
        assert tokenize("<a></a><!-- never closed <b") == [StartTag("a"), EndTag]

    def test_comment_ends_at_first_close_bracket(self):
        """Test a '>' inside a comment ends it early."""
        with pytest.raises(ReaderError):
            tokenize("<!-- a > b -->")


class TestKnownLimitations:
    """Tests documenting preserved attribute-splitting behaviour."""

    def test_quoted_value_with_space_is_split(self):
        """Test a space inside quotes produces extra attributes."""
        assert tokenize('<p title="a b">t</p>')[1:3] == [
            Attribute("title", '"a'),
            Attribute('b"', None),
        ]

    def test_trailing_space_yields_empty_attribute(self):
        """Test a space before '>' produces an empty attribute name."""
        assert tokenize("<div ></div>") == [StartTag("div"), Attribute("", None), EndTag]

    def test_double_space_yields_empty_attribute(self):
        """Test consecutive spaces produce an empty fragment."""
        assert tokenize('<a x="1"  y></a>')[1:4] == [
            Attribute("x", "1"), Attribute("", None), Attribute("y", None)
        ]

    def test_self_closing_not_inferred(self):
        """Test '<br/>' is an ordinary start tag named 'br/'."""
        assert tokenize("<br/>") == [StartTag("br/")]


class TestTokenizeErrors:
    """Tests for strict delimiter failures."""

    @pytest.mark.parametrize("data", ["<div", "</div", "<", "<p>x</p><a"])
    def test_missing_close_bracket(self, data):
        """Test an unterminated tag raises ReaderError for '>'."""
        with pytest.raises(ReaderError) as exc_info:
            tokenize(data)
        assert exc_info.value.delimiter == ">"
        assert isinstance(exc_info.value.cause, DelimiterNotFound)
        assert exc_info.value.__cause__ is exc_info.value.cause

    @pytest.mark.parametrize("data", ["text", "<p>x</p>tail"])
    def test_trailing_text(self, data):
        """Test text without a following '<' raises ReaderError."""
        with pytest.raises(ReaderError) as exc_info:
            tokenize(data)
        assert exc_info.value.delimiter == "<"

    def test_bare_text_before_tag_tokenizes(self):
        """Test leading text is a valid token for the tokenizer alone."""
        assert tokenize("text<p></p>") == [Text("text"), StartTag("p"), EndTag]


class TestMarkupTokenizer:
    """Tests for the configurable tokenizer class."""

    def test_default_end_tags_unnamed(self):
        """Test end tags carry no name by default."""
        tokens = MarkupTokenizer().tokenize("<a></a>")
        assert tokens[-1].name is None

    def test_record_end_tag_names(self):
        """Test end tag names are kept when configured."""
        tokenizer = MarkupTokenizer(TokenizationConfig(record_end_tag_names=True))
        assert tokenizer.tokenize("<div><p>x</p ></div>") == [
            StartTag("div"),
            StartTag("p"),
            Text("x"),
            Token.end_tag("p"),
            Token.end_tag("div"),
        ]

    def test_tokenizer_is_reusable(self):
        """Test one tokenizer instance handles several inputs."""
        tokenizer = MarkupTokenizer(correlation_id="abc")
        assert tokenizer.tokenize("<a></a>") == [StartTag("a"), EndTag]
        assert tokenizer.tokenize("<b></b>") == [StartTag("b"), EndTag]
