"""
Tests for form field coercion.
"""

import pytest

from cinerank.api.forms import (
    parse_int,
    parse_optional_float,
    parse_rating,
    require_text,
    split_tags,
)
from cinerank.core.errors import InvalidInputError


class TestFormParsing:

    def test_parse_int(self):
        assert parse_int(" 2010 ", "year") == 2010

    @pytest.mark.parametrize("value", ["", None, "20x", "3.5"])
    def test_parse_int_rejects_garbage(self, value):
        with pytest.raises(InvalidInputError, match="Invalid year"):
            parse_int(value, "year")

    def test_parse_optional_float_defaults(self):
        assert parse_optional_float("8.8") == 8.8
        assert parse_optional_float("") == 0.0
        assert parse_optional_float("n/a") == 0.0

    @pytest.mark.parametrize("value", ["0", "6", "-1", "four", ""])
    def test_parse_rating_out_of_range(self, value):
        with pytest.raises(InvalidInputError, match="1-5"):
            parse_rating(value)

    def test_parse_rating(self):
        assert parse_rating("1") == 1
        assert parse_rating("5") == 5

    def test_split_tags(self):
        assert split_tags(" Drama, Sci-Fi ,,  ,Heist") == ["Drama", "Sci-Fi", "Heist"]
        assert split_tags("") == []
        assert split_tags(None) == []

    def test_require_text(self):
        assert require_text("  Inception ", "title") == "Inception"
        with pytest.raises(InvalidInputError, match="Title is required"):
            require_text("   ", "title")
