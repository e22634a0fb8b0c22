"""
Text normalization module for level names and lookup queries.

Provides the shared preprocessing used by every matching tier:
lowercasing, punctuation stripping (dots survive so version numbers
stay intact), tokenization, and version-number extraction.
"""

import re
from typing import List, Optional

# Versioned normalization — increment when rules change
NORMALIZATION_VERSION = 1


class TextNormalizer:
    """
    Normalizes level names and queries to a standard form for matching.

    Handles:
    - Case folding (ASCII lowercase)
    - Punctuation stripping, keeping '.' for version numbers
    - Whitespace collapse
    - Tokenization into an ordered word list
    - Version extraction ("v1.6.5" -> "1.6.5")

    normalize() is idempotent: normalizing an already-normalized
    string returns it unchanged.
    """

    # Everything outside [a-z0-9.] collapses to one space
    NON_WORD_PATTERN = re.compile(r'[^a-z0-9.]+')

    # Optional v/V prefix followed by dotted digit groups
    VERSION_PATTERN = re.compile(r'[vV]?(\d+(?:\.\d+)*)')

    VERSION_TOKEN_PATTERN = re.compile(r'^[vV]?\d+(?:\.\d+)*$')
    NUMERIC_TOKEN_PATTERN = re.compile(r'^\d+(?:\.\d+)*$')

    def __init__(self):
        """Initialize the text normalizer."""
        pass

    def normalize(self, text: str) -> str:
        """
        Apply the normalization pipeline to a name or query.

        Pipeline order:
        1. Case folding (lowercase)
        2. Replace runs of characters outside [a-z0-9.] with one space
        3. Trim

        Args:
            text: Raw level name or query

        Returns:
            Normalized text ('' for None or non-string input)

        Examples:
            >>> normalizer = TextNormalizer()
            >>> normalizer.normalize("Hopeless Pursuit!")
            'hopeless pursuit'
            >>> normalizer.normalize("Generator  (v1.6.5)")
            'generator v1.6.5'
        """
        if not text or not isinstance(text, str):
            return ''

        text = self._case_fold(text)
        text = self.NON_WORD_PATTERN.sub(' ', text)

        return text.strip()

    def tokenize(self, text: str) -> List[str]:
        """
        Split normalized text into its ordered word list.

        Args:
            text: Raw or normalized text

        Returns:
            Tokens in original order, empties dropped
        """
        return [token for token in self.normalize(text).split() if token]

    def extract_version(self, text: str) -> Optional[str]:
        """
        Extract the first version number found in text.

        Only the first occurrence is considered; a leading 'v' or 'V'
        is consumed but not returned.

        Args:
            text: Input text potentially containing a version

        Returns:
            Dotted digit string if found, None otherwise

        Examples:
            >>> normalizer.extract_version("Generator v1.6.5")
            '1.6.5'
            >>> normalizer.extract_version("Generator")
            None
        """
        if not text or not isinstance(text, str):
            return None

        match = self.VERSION_PATTERN.search(text)
        if not match:
            return None

        return match.group(1)

    def is_version_token(self, token: str) -> bool:
        """Check whether a whole token is a version string (e.g. 'v2.0', '1.6')."""
        return bool(token) and bool(self.VERSION_TOKEN_PATTERN.match(token))

    def is_numeric_token(self, token: str) -> bool:
        """Check whether a whole token is a pure dotted number (no 'v' prefix)."""
        return bool(token) and bool(self.NUMERIC_TOKEN_PATTERN.match(token))

    def _case_fold(self, text: str) -> str:
        """Convert text to lowercase."""
        return text.lower()


# Module-level singleton for convenience function
_normalizer_instance = None


def _get_normalizer() -> TextNormalizer:
    """Get or create the module-level TextNormalizer singleton."""
    global _normalizer_instance
    if _normalizer_instance is None:
        _normalizer_instance = TextNormalizer()
    return _normalizer_instance


def normalize_text(text: str) -> str:
    """
    Convenience function for text normalization.

    Uses a module-level TextNormalizer singleton to avoid
    repeated construction.

    Args:
        text: Level name or query to normalize

    Returns:
        Normalized text string
    """
    return _get_normalizer().normalize(text)
