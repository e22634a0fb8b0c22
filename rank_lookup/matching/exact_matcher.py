"""
Exact matching module for level names.

Compares the normalized query against every normalized level name.
"""

from typing import List, Optional, Sequence

from rank_lookup.normalization.text_normalizer import TextNormalizer
from rank_lookup.matching.types import EnrichedLevel


class ExactMatcher:
    """
    Exact matching engine for level names.

    Uses normalized text equality, so case and punctuation
    differences never block an exact hit.
    """

    def __init__(self, normalizer: Optional[TextNormalizer] = None):
        """
        Initialize the exact matcher.

        Args:
            normalizer: TextNormalizer instance (creates new if None)
        """
        self.normalizer = normalizer or TextNormalizer()

    def match(self, text: str, levels: Sequence[EnrichedLevel]) -> List[EnrichedLevel]:
        """
        Find levels whose normalized name equals the normalized input.

        Args:
            text: Raw query text
            levels: Enriched level list

        Returns:
            Matching levels in original order (more than one only when
            the source list repeats a name)
        """
        normalized = self.normalizer.normalize(text)
        return [level for level in levels if level.normalized_name == normalized]
