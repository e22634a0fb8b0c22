"""
Type definitions for the level lookup engine.

Defines data structures and enums used across all matching modules.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Dict, Any


class MatchTier(Enum):
    """Pipeline tier that produced an outcome."""
    EXACT = "exact"
    ACRONYM = "acronym"
    MIXED_TOKEN = "mixed_token"
    STRICT_MULTIWORD = "strict_multiword"
    SUBSTRING = "substring"  # opt-in autofill, see MatcherConfig.substring_autofill
    FUZZY = "fuzzy"
    SELECTION = "selection"  # numeric follow-up served from a session


@dataclass(frozen=True)
class EnrichedLevel:
    """
    A level record prepared for matching.

    Built fresh from the raw record list on every request; the
    matchers only read it.
    """
    name: str
    top: int
    normalized_name: str
    normalized_words: Tuple[str, ...]
    acronym: str
    version: Optional[str] = None

    def has_word(self, token: str) -> bool:
        """Check literal membership of a token in the word list."""
        return token in self.normalized_words

    def version_startswith(self, prefix: Optional[str]) -> bool:
        """Check whether this level's version starts with prefix."""
        if not prefix or self.version is None:
            return False
        return self.version.startswith(prefix)

    def to_candidate(self) -> 'Candidate':
        """Project to the name/rank pair shown in a numbered list."""
        return Candidate(name=self.name, top=self.top)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "top": self.top,
            "normalized_name": self.normalized_name,
            "normalized_words": list(self.normalized_words),
            "acronym": self.acronym,
            "version": self.version,
        }


@dataclass(frozen=True)
class Candidate:
    """One entry of an ambiguous candidate list."""
    name: str
    top: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "top": self.top}


@dataclass
class MatcherConfig:
    """Configuration for matching thresholds and parameters."""
    # Fuzzy tier
    fuzzy_threshold: float = 0.72

    # Acronym-or-word rule in the mixed-token tier
    min_acronym_token_length: int = 2

    # Substring completion between the strict multiword and fuzzy tiers
    substring_autofill: bool = False

    def __post_init__(self):
        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            raise ValueError(
                f"fuzzy_threshold must be between 0.0 and 1.0, got {self.fuzzy_threshold}"
            )
        if self.min_acronym_token_length < 1:
            raise ValueError(
                f"min_acronym_token_length must be positive, got {self.min_acronym_token_length}"
            )
