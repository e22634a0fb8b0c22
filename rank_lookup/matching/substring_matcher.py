"""
Substring (autofill) matching module for level names.

Treats the normalized query as a fragment of a longer name, so a
half-typed "hopeless purs" completes to "Hopeless Pursuit". Among all
names containing the fragment, the shortest one is the completion.
"""

from typing import Optional, Sequence

from rank_lookup.matching.types import EnrichedLevel


class SubstringMatcher:
    """Autofill matching by normalized substring containment."""

    def match(self, normalized_query: str,
              levels: Sequence[EnrichedLevel]) -> Optional[EnrichedLevel]:
        """
        Find the level that completes the query with the fewest extra characters.

        Args:
            normalized_query: Query after TextNormalizer.normalize()
            levels: Enriched level list

        Returns:
            Best completing level (first on ties), or None
        """
        if not normalized_query:
            return None

        best: Optional[EnrichedLevel] = None
        best_extra = 0

        for level in levels:
            if normalized_query not in level.normalized_name:
                continue
            extra = len(level.normalized_name) - len(normalized_query)
            if best is None or extra < best_extra:
                best = level
                best_extra = extra

        return best
