"""
Token-containment matching module.

Handles partial names and version-qualified queries ("generator v1.6",
"pursuit hp") by requiring every query token to be accounted for by a
level, without paying for fuzzy scoring.

Two rule sets are provided:

- mixed: numeric tokens must prefix the level version, alphabetic
  tokens (length >= 2) may hit either a word or the acronym, anything
  else must be a literal word.
- strict: every token must be a literal word, except version tokens
  which may instead prefix the level version.
"""

import logging
from typing import List, Optional, Sequence

from rank_lookup.normalization.text_normalizer import TextNormalizer
from rank_lookup.matching.acronym_matcher import matches_acronym_query
from rank_lookup.matching.types import EnrichedLevel

logger = logging.getLogger(__name__)


class TokenMatcher:
    """
    Token-containment tiers of the resolution pipeline.
    """

    def __init__(self, normalizer: Optional[TextNormalizer] = None,
                 min_acronym_token_length: int = 2):
        """
        Initialize the token matcher.

        Args:
            normalizer: TextNormalizer instance (creates new if None)
            min_acronym_token_length: Shortest alphabetic token allowed
                to match through the acronym in the mixed rule set
        """
        self.normalizer = normalizer or TextNormalizer()
        self.min_acronym_token_length = min_acronym_token_length

    # ── Mixed rule set ──────────────────────────────────────────────

    def mixed_token_qualifies(self, token: str, level: EnrichedLevel) -> bool:
        """Check one token against one level under the mixed rules."""
        if self.normalizer.is_numeric_token(token):
            return level.version_startswith(token)

        if token.isalpha() and len(token) >= self.min_acronym_token_length:
            return level.has_word(token) or matches_acronym_query(level.acronym, token)

        return level.has_word(token)

    def match_mixed(self, levels: Sequence[EnrichedLevel],
                    tokens: Sequence[str]) -> List[EnrichedLevel]:
        """
        Find levels that account for every token under the mixed rules.

        Returns:
            Qualifying levels in original order
        """
        if not tokens:
            return []
        return [
            level for level in levels
            if all(self.mixed_token_qualifies(token, level) for token in tokens)
        ]

    # ── Strict rule set ─────────────────────────────────────────────

    def strict_token_qualifies(self, token: str, level: EnrichedLevel) -> bool:
        """Check one token against one level under the strict rules."""
        if level.has_word(token):
            return True

        if self.normalizer.is_version_token(token):
            return level.version_startswith(self.normalizer.extract_version(token))

        return False

    def match_strict(self, levels: Sequence[EnrichedLevel],
                     tokens: Sequence[str]) -> List[EnrichedLevel]:
        """
        Find levels that contain every token as a word (or version prefix).

        Returns:
            Qualifying levels in original order
        """
        if not tokens:
            return []
        return [
            level for level in levels
            if all(self.strict_token_qualifies(token, level) for token in tokens)
        ]

    # ── Version tiebreak ────────────────────────────────────────────

    def pick_by_version(self, qualifiers: Sequence[EnrichedLevel],
                        query: str) -> Optional[EnrichedLevel]:
        """
        Break a multi-qualifier tie using the version typed in the query.

        Args:
            qualifiers: Levels that qualified within one tier
            query: Raw query text

        Returns:
            First qualifier whose version starts with the query version,
            or None if the query has no version or nothing matches it
        """
        query_version = self.normalizer.extract_version(query)
        if query_version is None:
            return None

        for level in qualifiers:
            if level.version_startswith(query_version):
                logger.debug(
                    f"Version tiebreak: '{query_version}' selected '{level.name}' "
                    f"out of {len(qualifiers)} qualifiers"
                )
                return level

        return None
