# ABOUTME: Unit tests for ISBN normalization.
# ABOUTME: Validates separator stripping and the empty-identifier error.

import pytest

from booklend.errors import ValidationError
from booklend.isbn import isbn_key, normalize_isbn


class TestNormalizeIsbn:
    """Tests for normalize_isbn."""

    def test_strips_hyphens(self) -> None:
        """Hyphenated ISBN-13 reduces to its digits."""
        assert normalize_isbn("978-4-87311-565-8") == "9784873115658"

    def test_strips_spaces(self) -> None:
        assert normalize_isbn(" 978 0156 001311 ") == "9780156001311"

    def test_keeps_uppercase_check_character(self) -> None:
        """ISBN-10 check digit X survives normalization."""
        assert normalize_isbn("0-8044-2957-X") == "080442957X"

    def test_lowercase_x_is_removed(self) -> None:
        """Only uppercase X counts as a check character."""
        assert normalize_isbn("080442957x") == "080442957"

    def test_already_normalized_is_unchanged(self) -> None:
        assert normalize_isbn("9780000000001") == "9780000000001"

    @pytest.mark.parametrize("raw", ["", "   ", "---", None, "abc"])
    def test_empty_after_normalization_raises(self, raw: str | None) -> None:
        """Identifiers with no digits are rejected as validation errors."""
        with pytest.raises(ValidationError):
            normalize_isbn(raw)


class TestIsbnKey:
    """Tests for isbn_key (lenient comparison form of stored cells)."""

    def test_normalizes_like_normalize_isbn(self) -> None:
        assert isbn_key("978-4-87311-565-8") == "9784873115658"

    def test_blank_cell_maps_to_empty_string(self) -> None:
        """Blank cells do not raise; they just never match."""
        assert isbn_key("") == ""
        assert isbn_key("n/a") == ""
