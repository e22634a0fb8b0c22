"""
Pytest configuration and shared fixtures for Rank Lookup tests.

Provides:
- Sample ranked level lists
- Normalizer, indexer and per-tier matchers
- Resolution engine with explicit thresholds
- Controllable clock and session store
- Performance tracking utilities
"""

import copy

import pytest

from rank_lookup.lookup_service import LookupService
from rank_lookup.normalization.text_normalizer import TextNormalizer
from rank_lookup.matching.level_indexer import LevelIndexer
from rank_lookup.matching.exact_matcher import ExactMatcher
from rank_lookup.matching.acronym_matcher import AcronymMatcher
from rank_lookup.matching.token_matcher import TokenMatcher
from rank_lookup.matching.fuzzy_matcher import FuzzyMatcher
from rank_lookup.matching.resolution_engine import ResolutionEngine
from rank_lookup.matching.types import MatcherConfig
from rank_lookup.session.session_store import DisambiguationSessionStore, TTLPolicy
from tests.fixtures.test_data import SAMPLE_LEVELS


# ============================================================================
# CLOCK
# ============================================================================

class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# RECORD FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def sample_levels():
    """
    Ranked level list as the front end hands it over.

    Includes two acronym twins (RV), two versions of one level, a
    stop-word name and three unnamed records that indexing must drop.
    """
    return copy.deepcopy(SAMPLE_LEVELS)


# ============================================================================
# NORMALIZATION / MATCHING FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def text_normalizer() -> TextNormalizer:
    """Fresh text normalizer instance."""
    return TextNormalizer()


@pytest.fixture(scope="function")
def level_indexer(text_normalizer) -> LevelIndexer:
    """Fresh level indexer instance."""
    return LevelIndexer(normalizer=text_normalizer)


@pytest.fixture(scope="function")
def enriched_levels(level_indexer, sample_levels):
    """Sample levels after indexing."""
    return level_indexer.enrich(sample_levels)


@pytest.fixture(scope="function")
def exact_matcher(text_normalizer) -> ExactMatcher:
    """Fresh exact matcher instance."""
    return ExactMatcher(normalizer=text_normalizer)


@pytest.fixture(scope="function")
def acronym_matcher() -> AcronymMatcher:
    """Fresh acronym matcher instance."""
    return AcronymMatcher()


@pytest.fixture(scope="function")
def token_matcher(text_normalizer) -> TokenMatcher:
    """Fresh token matcher instance."""
    return TokenMatcher(normalizer=text_normalizer)


@pytest.fixture(scope="function")
def fuzzy_matcher() -> FuzzyMatcher:
    """Fresh fuzzy matcher instance."""
    return FuzzyMatcher(threshold=0.72)


@pytest.fixture(scope="function")
def resolution_engine(text_normalizer, level_indexer, exact_matcher,
                      acronym_matcher, token_matcher, fuzzy_matcher) -> ResolutionEngine:
    """Fresh resolution engine with default thresholds (no config file read)."""
    return ResolutionEngine(
        normalizer=text_normalizer,
        indexer=level_indexer,
        exact_matcher=exact_matcher,
        acronym_matcher=acronym_matcher,
        token_matcher=token_matcher,
        fuzzy_matcher=fuzzy_matcher,
        config=MatcherConfig(),
    )


# ============================================================================
# SESSION FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def clock() -> FakeClock:
    """Controllable clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture(scope="function")
def session_store(clock) -> DisambiguationSessionStore:
    """Session store with the standard 5 minute TTL and a fake clock."""
    return DisambiguationSessionStore(policy=TTLPolicy(ttl_seconds=300), clock=clock)


@pytest.fixture(scope="function")
def lookup_service(resolution_engine, session_store) -> LookupService:
    """Lookup service wired to the test engine and session store."""
    return LookupService(engine=resolution_engine, sessions=session_store)


# ============================================================================
# PERFORMANCE TRACKING FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def performance_tracker():
    """Simple performance tracking for benchmarks."""
    import time

    class PerformanceTracker:
        def __init__(self):
            self.measurements = []

        def measure(self, func, *args, **kwargs):
            """Measure execution time of a function."""
            start = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.measurements.append(elapsed_ms)
            return result, elapsed_ms

        def avg_time(self):
            """Calculate average execution time."""
            return sum(self.measurements) / len(self.measurements) if self.measurements else 0

        def max_time(self):
            """Get maximum execution time."""
            return max(self.measurements) if self.measurements else 0

    return PerformanceTracker()
