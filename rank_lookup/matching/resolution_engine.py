"""
Resolution engine for level lookup.

Implements the tiered matching pipeline that turns a free-form query
into a UniqueMatch, Ambiguous or NoMatch outcome against a ranked
level list.

Cascade order (first tier with a non-empty result wins):
  Step 1: Exact normalized matching
  Step 2: Acronym subsequence matching (alphabetic queries only)
  Step 3: Mixed-token containment with version tiebreak
  Step 4: Strict multiword containment with version tiebreak
  Step 4b: Substring autofill (only when enabled in config)
  Step 5: Fuzzy matching (Levenshtein similarity)
"""

import time
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from rank_lookup.normalization.text_normalizer import TextNormalizer
from rank_lookup.matching.level_indexer import LevelIndexer
from rank_lookup.matching.exact_matcher import ExactMatcher
from rank_lookup.matching.acronym_matcher import AcronymMatcher
from rank_lookup.matching.token_matcher import TokenMatcher
from rank_lookup.matching.substring_matcher import SubstringMatcher
from rank_lookup.matching.fuzzy_matcher import FuzzyMatcher
from rank_lookup.matching.match_result import (
    Ambiguous, InputRejected, NoMatch, Outcome, UniqueMatch,
)
from rank_lookup.matching.types import EnrichedLevel, MatchTier, MatcherConfig
from rank_lookup.utils.config_manager import ConfigManager, DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def _load_matcher_config(config_path: Optional[Path] = None) -> MatcherConfig:
    """
    Load matching thresholds from YAML, falling back to defaults.

    Raises:
        InvalidConfig: If a configured value has the wrong type or range
    """
    cfg = ConfigManager(config_path or DEFAULT_CONFIG_PATH)
    cfg.require_valid()
    return MatcherConfig(
        fuzzy_threshold=float(cfg.get_threshold('fuzzy_accept')),
        min_acronym_token_length=cfg.get_matching_param('min_acronym_token_length'),
        substring_autofill=cfg.get_matching_param('substring_autofill'),
    )


class ResolutionEngine:
    """
    Tiered matching engine for level lookup.

    Coordinates the matching tiers in fixed priority order:
    1. Exact normalized name
    2. Acronym subsequence
    3. Mixed-token containment
    4. Strict multiword containment
    (4b. Substring autofill, off unless configured)
    5. Fuzzy (typo) fallback

    The engine holds no per-query state: identical inputs always
    produce identical outcomes, and enriched levels are rebuilt from
    the raw records on every resolve() call.

    Thresholds loaded from config/resolver_config.yaml with constructor
    overrides.
    """

    def __init__(self,
                 normalizer: Optional[TextNormalizer] = None,
                 indexer: Optional[LevelIndexer] = None,
                 exact_matcher: Optional[ExactMatcher] = None,
                 acronym_matcher: Optional[AcronymMatcher] = None,
                 token_matcher: Optional[TokenMatcher] = None,
                 substring_matcher: Optional[SubstringMatcher] = None,
                 fuzzy_matcher: Optional[FuzzyMatcher] = None,
                 config: Optional[MatcherConfig] = None,
                 config_path: Optional[Path] = None):
        """
        Initialize the resolution engine.

        Args:
            normalizer: TextNormalizer instance (creates new if None)
            indexer: LevelIndexer instance (creates new if None)
            exact_matcher: ExactMatcher instance (creates new if None)
            acronym_matcher: AcronymMatcher instance (creates new if None)
            token_matcher: TokenMatcher instance (creates new if None)
            substring_matcher: SubstringMatcher instance (creates new if None)
            fuzzy_matcher: FuzzyMatcher instance (creates new if None)
            config: Explicit thresholds (skips the YAML file)
            config_path: Path to YAML config (default: config/resolver_config.yaml)
        """
        self.config = config or _load_matcher_config(config_path)

        self.normalizer = normalizer or TextNormalizer()
        self.indexer = indexer or LevelIndexer(self.normalizer)
        self.exact_matcher = exact_matcher or ExactMatcher(self.normalizer)
        self.acronym_matcher = acronym_matcher or AcronymMatcher()
        self.token_matcher = token_matcher or TokenMatcher(
            self.normalizer,
            min_acronym_token_length=self.config.min_acronym_token_length,
        )
        self.substring_matcher = substring_matcher or SubstringMatcher()
        self.fuzzy_matcher = fuzzy_matcher or FuzzyMatcher(
            threshold=self.config.fuzzy_threshold
        )

    # ── Public API ──────────────────────────────────────────────────

    def resolve(self, records: Sequence[Any], query: str) -> Outcome:
        """
        Resolve a query against a raw level record list.

        Args:
            records: Raw records ({'name': ..., 'top': ...}) from the front end
            query: Free-form user query

        Returns:
            UniqueMatch, Ambiguous or NoMatch

        Raises:
            InputRejected: If the query is empty after trimming
            MalformedRecordSet: If records is not a list of records
        """
        query = self._check_query(query)
        levels = self.indexer.enrich(records)
        return self._run_tiers(levels, query)

    def resolve_enriched(self, levels: Sequence[EnrichedLevel], query: str) -> Outcome:
        """
        Resolve a query against an already-enriched level list.

        The caller is responsible for enriching the same record snapshot
        it is querying.
        """
        query = self._check_query(query)
        return self._run_tiers(levels, query)

    def batch_resolve(self, records: Sequence[Any], queries: List[str]) -> List[Outcome]:
        """
        Resolve multiple queries against one record snapshot.

        Records are enriched once for the whole batch.

        Args:
            records: Raw level records
            queries: Queries to resolve

        Returns:
            List of outcomes, one per query
        """
        levels = self.indexer.enrich(records)
        return [self.resolve_enriched(levels, query) for query in queries]

    # ── Main cascade ────────────────────────────────────────────────

    def _check_query(self, query: str) -> str:
        """Trim the query and reject it if it is empty."""
        if not isinstance(query, str) or not query.strip():
            raise InputRejected("Query is empty")

        return query.strip()

    def _run_tiers(self, levels: Sequence[EnrichedLevel], query: str) -> Outcome:
        start_time = time.time()
        outcome = self._cascade(levels, query)
        elapsed_ms = (time.time() - start_time) * 1000

        logger.debug(
            f"Resolved '{query}' against {len(levels)} levels -> "
            f"{type(outcome).__name__} via {outcome.tier.value} ({elapsed_ms:.2f}ms)"
        )
        return outcome

    def _cascade(self, levels: Sequence[EnrichedLevel], query: str) -> Outcome:
        normalized_query = self.normalizer.normalize(query)

        # ── Step 1: Exact matching ─────────────────────────────────
        exact_hits = self.exact_matcher.match(query, levels)
        if len(exact_hits) == 1:
            return UniqueMatch(level=exact_hits[0], exact=True, tier=MatchTier.EXACT)
        if exact_hits:
            return self._ambiguous(exact_hits, MatchTier.EXACT)

        # ── Step 2: Acronym matching ───────────────────────────────
        acronym_hits = self.acronym_matcher.match(levels, query)
        if len(acronym_hits) == 1:
            return UniqueMatch(level=acronym_hits[0], exact=True, tier=MatchTier.ACRONYM)
        if acronym_hits:
            return self._ambiguous(acronym_hits, MatchTier.ACRONYM)

        tokens = normalized_query.split()

        # ── Step 3: Mixed-token containment ────────────────────────
        qualifiers = self.token_matcher.match_mixed(levels, tokens)
        if qualifiers:
            return self._decide(qualifiers, query, MatchTier.MIXED_TOKEN)

        # ── Step 4: Strict multiword containment ───────────────────
        qualifiers = self.token_matcher.match_strict(levels, tokens)
        if qualifiers:
            return self._decide(qualifiers, query, MatchTier.STRICT_MULTIWORD)

        # ── Step 4b: Substring autofill ────────────────────────────
        if self.config.substring_autofill:
            level = self.substring_matcher.match(normalized_query, levels)
            if level is not None:
                return UniqueMatch(level=level, exact=False, tier=MatchTier.SUBSTRING)

        # ── Step 5: Fuzzy matching ─────────────────────────────────
        level, score = self.fuzzy_matcher.match(normalized_query, levels)
        if level is not None:
            return UniqueMatch(level=level, exact=False, tier=MatchTier.FUZZY, score=score)

        return NoMatch(best_score=score if levels else None, tier=MatchTier.FUZZY)

    def _decide(self, qualifiers: List[EnrichedLevel], query: str, tier: MatchTier) -> Outcome:
        """
        Turn a token tier's qualifier list into an outcome.

        One qualifier is a match; several are narrowed by the query
        version if it names one, otherwise surfaced as Ambiguous.
        """
        if len(qualifiers) == 1:
            return UniqueMatch(level=qualifiers[0], exact=False, tier=tier)

        picked = self.token_matcher.pick_by_version(qualifiers, query)
        if picked is not None:
            return UniqueMatch(level=picked, exact=False, tier=tier)

        return self._ambiguous(qualifiers, tier)

    def _ambiguous(self, levels: Sequence[EnrichedLevel], tier: MatchTier) -> Ambiguous:
        logger.debug(f"{len(levels)} candidates at tier {tier.value}")
        return Ambiguous(
            candidates=tuple(level.to_candidate() for level in levels),
            tier=tier,
        )
