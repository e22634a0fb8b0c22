"""
Fuzzy matching module for level names.

Uses Levenshtein distance for approximate string matching. This is
the last-resort tier, reserved for typos once every token tier has
come up empty.
"""

import logging
from typing import Optional, Sequence, Tuple

import Levenshtein

from rank_lookup.matching.types import EnrichedLevel

logger = logging.getLogger(__name__)


def similarity(a: str, b: str) -> float:
    """
    Length-normalized edit similarity between two strings.

    Computes 1 - distance / max(len(a), len(b)) with unit-cost
    insertion, deletion and substitution. Case-insensitive and
    symmetric.

    Args:
        a: First string
        b: Second string

    Returns:
        Similarity in [0.0, 1.0]; 1.0 when both are empty, 0.0 when
        exactly one is empty
    """
    a = (a or '').lower()
    b = (b or '').lower()

    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    distance = Levenshtein.distance(a, b)
    return 1.0 - distance / max(len(a), len(b))


class FuzzyMatcher:
    """
    Fuzzy matching engine using Levenshtein distance.

    Compares the normalized query against every normalized level
    name and keeps the single best-scoring level.
    """

    def __init__(self, threshold: float = 0.72):
        """
        Initialize the fuzzy matcher.

        Args:
            threshold: Minimum similarity to accept the best level
        """
        self.threshold = threshold

    def best_match(self, normalized_query: str,
                   levels: Sequence[EnrichedLevel]) -> Tuple[Optional[EnrichedLevel], float]:
        """
        Find the highest-scoring level, regardless of threshold.

        Ties keep the first level encountered.

        Returns:
            (level, score), or (None, 0.0) for an empty level list
        """
        best_level: Optional[EnrichedLevel] = None
        best_score = 0.0

        for level in levels:
            score = similarity(normalized_query, level.normalized_name)
            if best_level is None or score > best_score:
                best_level = level
                best_score = score

        return best_level, best_score

    def match(self, normalized_query: str,
              levels: Sequence[EnrichedLevel]) -> Tuple[Optional[EnrichedLevel], float]:
        """
        Find the best level if it clears the threshold.

        Args:
            normalized_query: Query after TextNormalizer.normalize()
            levels: Enriched level list

        Returns:
            (level, score) when score >= threshold, else (None, best score)
        """
        level, score = self.best_match(normalized_query, levels)

        if level is None or score < self.threshold:
            logger.debug(
                f"Fuzzy tier rejected '{normalized_query}': best={score:.3f} "
                f"< threshold={self.threshold}"
            )
            return None, score

        return level, score
