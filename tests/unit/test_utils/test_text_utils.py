"""
Unit tests for utils.text_utils module.
"""
from utils.text_utils import (
    clean_block_text,
    strip_html_tags,
    strip_quotes,
    strip_trailing_annotation
)


class TestStripTrailingAnnotation:
    """Tests for strip_trailing_annotation function."""

    def test_coordinate_annotation(self):
        """Test the coordinate parenthetical is removed."""
        text = "Abra (from: {x:1, y:2}, to: {x:3, y:4})"

        assert strip_trailing_annotation(text) == "Abra"

    def test_other_parenthetical(self):
        """Test a generic trailing parenthetical is removed as well."""
        assert strip_trailing_annotation("Menu (bold)") == "Menu"

    def test_inner_parenthetical_kept(self):
        """Test parentheses that are not trailing survive."""
        assert strip_trailing_annotation("Tea (hot) & coffee") == "Tea (hot) & coffee"


class TestStripQuotes:
    """Tests for strip_quotes function."""

    def test_straight_and_curly(self):
        """Test quotes on both ends are trimmed."""
        assert strip_quotes('"Hello"') == "Hello"
        assert strip_quotes("‘Hi’") == "Hi"
        assert strip_quotes(' “Spaced” ') == "Spaced"

    def test_inner_quotes_kept(self):
        """Test quotes inside the text are kept."""
        assert strip_quotes("It's") == "It's"


class TestStripHtmlTags:
    """Tests for strip_html_tags function."""

    def test_tags_removed(self):
        """Test paired and unterminated tags are removed."""
        assert strip_html_tags("<b>Bold</b> text") == "Bold text"
        assert strip_html_tags("Title<br") == "Title"


class TestCleanBlockText:
    """Tests for clean_block_text function."""

    def test_full_cleanup(self):
        """Test annotation, quotes and tags are removed together."""
        text = ' "<i>Abra</i>" (from: {x:1, y:2}, to: {x:3, y:4}) '

        assert clean_block_text(text) == "Abra"

    def test_empty_after_cleanup(self):
        """Test a block of only quotes becomes empty."""
        assert clean_block_text('""') == ""
