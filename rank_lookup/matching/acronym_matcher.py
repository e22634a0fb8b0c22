"""
Acronym matching module for level names.

Builds one-letter-per-word acronyms and tests whether a typed
abbreviation is an ordered subsequence of a level's acronym, so that
"hp" finds "Hopeless Pursuit" and also sits inside longer acronyms
like "HPRVNPG" while respecting word order.
"""

import re
from typing import List, Sequence

from rank_lookup.matching.types import EnrichedLevel

ALPHA_PATTERN = re.compile(r'^[A-Za-z]+$')


def generate_acronym(name: str) -> str:
    """
    Build an acronym from the first character of every word.

    No stop-word filtering: "Fall of the Sky" -> "FOTS".

    Args:
        name: Level name (normally already normalized)

    Returns:
        Uppercase acronym, '' for empty input
    """
    if not name or not isinstance(name, str):
        return ''
    return ''.join(token[0] for token in name.split() if token).upper()


def matches_acronym_query(acronym: str, letters: str) -> bool:
    """
    Check whether letters form an ordered subsequence of acronym.

    Case-insensitive. Letters need not be contiguous in the acronym,
    but their order must be preserved.

    Examples:
        >>> matches_acronym_query("HPRVNPG", "HP")
        True
        >>> matches_acronym_query("HPRVNPG", "PH")
        False
    """
    if not letters or not acronym:
        return False

    remaining = iter(acronym.upper())
    # each `in` advances the iterator past the matched character
    return all(letter in remaining for letter in letters.upper())


class AcronymMatcher:
    """
    Acronym tier of the resolution pipeline.

    Only engaged when the query, with whitespace removed, is purely
    alphabetic.
    """

    def query_letters(self, query: str) -> str:
        """
        Return the acronym letters for a query, or '' if the query
        is not an acronym candidate.
        """
        if not query or not isinstance(query, str):
            return ''
        letters = ''.join(query.split())
        if not ALPHA_PATTERN.match(letters):
            return ''
        return letters.upper()

    def match(self, levels: Sequence[EnrichedLevel], query: str) -> List[EnrichedLevel]:
        """
        Find every level whose acronym contains the query letters in order.

        Args:
            levels: Enriched level list
            query: Raw query text

        Returns:
            Matching levels in original order (empty if the query is
            not alphabetic or nothing matched)
        """
        letters = self.query_letters(query)
        if not letters:
            return []

        return [level for level in levels if matches_acronym_query(level.acronym, letters)]
