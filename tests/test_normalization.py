"""
Tests for text normalization module.

Tests:
- Case folding and punctuation stripping
- Idempotence
- Tokenization
- Version extraction and version-token classification
"""

import pytest

from rank_lookup.normalization.text_normalizer import (
    TextNormalizer,
    normalize_text,
    NORMALIZATION_VERSION,
)
from tests.fixtures.test_data import (
    NORMALIZATION_TEST_CASES,
    VERSION_EXTRACTION_TEST_CASES,
)


# ============================================================================
# TEXT NORMALIZER TESTS
# ============================================================================

class TestTextNormalizer:
    """Tests for TextNormalizer class."""

    @pytest.mark.parametrize("text,expected", NORMALIZATION_TEST_CASES)
    def test_normalize_cases(self, text_normalizer, text, expected):
        """Test normalization against the reference table."""
        assert text_normalizer.normalize(text) == expected

    def test_normalize_case_folding(self, text_normalizer):
        """Test case variations collapse to one form."""
        variants = ["HOPELESS PURSUIT", "Hopeless Pursuit", "hopeless pursuit", "HoPeLeSs PuRsUiT"]

        results = {text_normalizer.normalize(v) for v in variants}
        assert results == {"hopeless pursuit"}

    def test_normalize_keeps_dots(self, text_normalizer):
        """Test dots survive so versions stay intact."""
        assert text_normalizer.normalize("v1.6.5") == "v1.6.5"

    def test_normalize_idempotent(self, text_normalizer):
        """Test normalizing twice equals normalizing once."""
        samples = [text for text, _ in NORMALIZATION_TEST_CASES] + [
            "  Mixed--Case__v2.0 (Hard) ",
            "\tTabs\nand newlines\r\n",
            "ÀÉÎÕÜ accents",
        ]
        for text in samples:
            once = text_normalizer.normalize(text)
            assert text_normalizer.normalize(once) == once, f"Not idempotent for '{text}'"

    def test_normalize_output_alphabet(self, text_normalizer):
        """Test output only contains [a-z0-9.] and single spaces."""
        result = text_normalizer.normalize("Weird™ name — with/üñíçødé & 42%!")
        assert all(ch in "abcdefghijklmnopqrstuvwxyz0123456789. " for ch in result)
        assert "  " not in result
        assert result == result.strip()

    @pytest.mark.parametrize("value", [None, 42, ["list"]])
    def test_normalize_non_string(self, text_normalizer, value):
        """Test non-string input normalizes to empty string."""
        assert text_normalizer.normalize(value) == ''

    def test_tokenize(self, text_normalizer):
        """Test tokenization keeps order and drops empties."""
        assert text_normalizer.tokenize("  Fall  of the---Sky ") == ["fall", "of", "the", "sky"]
        assert text_normalizer.tokenize("") == []
        assert text_normalizer.tokenize("!!!") == []

    @pytest.mark.parametrize("text,expected", VERSION_EXTRACTION_TEST_CASES)
    def test_extract_version(self, text_normalizer, text, expected):
        """Test first-occurrence version extraction."""
        assert text_normalizer.extract_version(text) == expected

    def test_extract_version_non_string(self, text_normalizer):
        assert text_normalizer.extract_version(None) is None

    @pytest.mark.parametrize("token,expected", [
        ("v2.0", True),
        ("V1", True),
        ("1.6.5", True),
        ("v", False),
        ("v1.", False),
        ("abc", False),
        ("2b", False),
        ("", False),
    ])
    def test_is_version_token(self, text_normalizer, token, expected):
        assert text_normalizer.is_version_token(token) is expected

    @pytest.mark.parametrize("token,expected", [
        ("1.6", True),
        ("7", True),
        ("v2", False),
        ("1.", False),
        ("a1", False),
    ])
    def test_is_numeric_token(self, text_normalizer, token, expected):
        assert text_normalizer.is_numeric_token(token) is expected


# ============================================================================
# CONVENIENCE FUNCTION TESTS
# ============================================================================

def test_normalize_text_matches_class(text_normalizer):
    """Test module-level convenience function agrees with the class."""
    for text, expected in NORMALIZATION_TEST_CASES:
        assert normalize_text(text) == text_normalizer.normalize(text) == expected


def test_normalization_version_is_positive_int():
    assert isinstance(NORMALIZATION_VERSION, int)
    assert NORMALIZATION_VERSION >= 1
