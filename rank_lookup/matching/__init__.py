"""
Level name matching engine package.

Provides tiered lookup of a free-form query against a ranked level
list using:
- Exact matching (normalized names)
- Acronym subsequence matching
- Token containment with version tiebreak (mixed and strict)
- Substring autofill (opt-in)
- Fuzzy matching (Levenshtein similarity)
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from rank_lookup.matching.types import Candidate, EnrichedLevel, MatchTier, MatcherConfig
from rank_lookup.matching.match_result import (
    Ambiguous, InputRejected, NoMatch, Outcome, UniqueMatch,
)
from rank_lookup.matching.level_indexer import LevelIndexer, MalformedRecordSet
from rank_lookup.matching.exact_matcher import ExactMatcher
from rank_lookup.matching.acronym_matcher import (
    AcronymMatcher, generate_acronym, matches_acronym_query,
)
from rank_lookup.matching.token_matcher import TokenMatcher
from rank_lookup.matching.substring_matcher import SubstringMatcher
from rank_lookup.matching.fuzzy_matcher import FuzzyMatcher, similarity
from rank_lookup.matching.resolution_engine import ResolutionEngine

_logger = logging.getLogger(__name__)


def build_engine(config_path: Optional[Path] = None,
                 fuzzy_threshold: Optional[float] = None,
                 min_acronym_token_length: Optional[int] = None,
                 substring_autofill: Optional[bool] = None) -> ResolutionEngine:
    """
    Build a ResolutionEngine from config with optional overrides.

    Args:
        config_path: YAML config path (default: config/resolver_config.yaml)
        fuzzy_threshold: Override the fuzzy tier acceptance threshold
        min_acronym_token_length: Override the acronym token length rule
        substring_autofill: Override whether partial names are completed

    Returns:
        Fully-wired ResolutionEngine instance.
    """
    engine = ResolutionEngine(config_path=config_path)
    overrides = {
        'fuzzy_threshold': fuzzy_threshold,
        'min_acronym_token_length': min_acronym_token_length,
        'substring_autofill': substring_autofill,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return engine

    config = replace(engine.config, **overrides)
    _logger.info("Engine overrides: %s", overrides)
    return ResolutionEngine(config=config)


__all__ = [
    "Ambiguous",
    "AcronymMatcher",
    "Candidate",
    "EnrichedLevel",
    "ExactMatcher",
    "FuzzyMatcher",
    "InputRejected",
    "LevelIndexer",
    "MalformedRecordSet",
    "MatchTier",
    "MatcherConfig",
    "NoMatch",
    "Outcome",
    "ResolutionEngine",
    "SubstringMatcher",
    "TokenMatcher",
    "UniqueMatch",
    "build_engine",
    "generate_acronym",
    "matches_acronym_query",
    "similarity",
]
