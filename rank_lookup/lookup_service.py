"""
Lookup service tying the resolution engine to disambiguation sessions.

A front end (chat command, HTTP handler) passes each requester query
and the current level list here:

- a pure-numeric query picks from the requester's pending candidate
  list and never reaches the engine;
- anything else is resolved, and an Ambiguous outcome is stored for
  the requester so the next numeric reply can settle it.
"""

import logging
import re
from typing import Any, Optional, Sequence

from rank_lookup.matching.match_result import Ambiguous, Outcome, UniqueMatch
from rank_lookup.matching.resolution_engine import ResolutionEngine
from rank_lookup.matching.types import MatchTier
from rank_lookup.session.session_store import DisambiguationSessionStore

logger = logging.getLogger(__name__)

SELECTION_PATTERN = re.compile(r'^\d+$')


class LookupService:
    """
    Front-end facing entry point for rank lookups.
    """

    def __init__(self, engine: Optional[ResolutionEngine] = None,
                 sessions: Optional[DisambiguationSessionStore] = None):
        """
        Initialize the lookup service.

        Args:
            engine: ResolutionEngine instance (creates new if None)
            sessions: DisambiguationSessionStore (creates new if None)
        """
        self.engine = engine or ResolutionEngine()
        self.sessions = sessions or DisambiguationSessionStore()

    @staticmethod
    def is_selection(query: str) -> bool:
        """Check whether a query is a numeric follow-up selection."""
        return isinstance(query, str) and bool(SELECTION_PATTERN.match(query.strip()))

    def handle_query(self, requester_id: str, query: str,
                     records: Optional[Sequence[Any]] = None) -> Outcome:
        """
        Handle one query from one requester.

        Args:
            requester_id: Opaque requester identity
            query: Raw query text (after the command prefix)
            records: Current raw level list; not consulted for numeric
                selections

        Returns:
            UniqueMatch, Ambiguous or NoMatch

        Raises:
            InputRejected: If the query is empty
            MalformedRecordSet: If records is not a list of records
            SessionNotFound / SessionExpired: Numeric query with no live session
            SessionInvalidSelection: Numeric query outside the candidate range
        """
        if self.is_selection(query):
            return self.select(requester_id, int(query.strip()))

        outcome = self.engine.resolve(records, query)

        if isinstance(outcome, Ambiguous):
            self.sessions.put(requester_id, outcome.candidates)
            logger.debug(
                f"Stored {len(outcome.candidates)} candidates for {requester_id} "
                f"({outcome.tier.value})"
            )

        return outcome

    def select(self, requester_id: str, index: int) -> UniqueMatch:
        """
        Resolve a numeric selection against the requester's pending list.

        Returns:
            UniqueMatch flagged exact, since the requester chose it
        """
        candidate = self.sessions.consume_selection(requester_id, index)
        level = self.engine.indexer.enrich_one(candidate.name, candidate.top)
        return UniqueMatch(level=level, exact=True, tier=MatchTier.SELECTION)
