"""
Data structures for lookup outcomes.

Every resolve() call ends in exactly one of three outcomes:
UniqueMatch, Ambiguous or NoMatch. Match status travels on the
outcome wrapper, never on the level record itself.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Any, Union

from rank_lookup.matching.types import Candidate, EnrichedLevel, MatchTier


class InputRejected(ValueError):
    """Query is empty after trimming; no tier was attempted."""


@dataclass(frozen=True)
class UniqueMatch:
    """
    A single confident match.

    Attributes:
        level: The matched level
        exact: True for exact, acronym and session-selection matches;
            False for token-containment and fuzzy matches
        tier: Pipeline tier that produced the match
        score: Similarity score for fuzzy matches (1.0 otherwise)
    """
    level: EnrichedLevel
    exact: bool
    tier: MatchTier
    score: float = 1.0

    @property
    def name(self) -> str:
        return self.level.name

    @property
    def top(self) -> int:
        return self.level.top

    @property
    def is_resolved(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "outcome": "unique_match",
            "name": self.level.name,
            "top": self.level.top,
            "exact": self.exact,
            "tier": self.tier.value,
            "score": self.score,
        }


@dataclass(frozen=True)
class Ambiguous:
    """
    Several levels qualified within one tier.

    The caller presents candidates as a numbered list (1-based) and
    routes the numeric reply through the disambiguation session store.
    """
    candidates: Tuple[Candidate, ...]
    tier: MatchTier

    @property
    def is_resolved(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "outcome": "ambiguous",
            "tier": self.tier.value,
            "candidates": [c.to_dict() for c in self.candidates],
        }


@dataclass(frozen=True)
class NoMatch:
    """All tiers exhausted without a result."""
    best_score: Optional[float] = None
    tier: MatchTier = field(default=MatchTier.FUZZY)

    @property
    def is_resolved(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "outcome": "no_match",
            "tier": self.tier.value,
            "best_score": self.best_score,
        }


Outcome = Union[UniqueMatch, Ambiguous, NoMatch]
