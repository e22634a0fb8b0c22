"""
Disambiguation session store.

Holds the ambiguous candidate list shown to a requester so that a
follow-up numeric reply ("2") can pick one of them. Entries are
short-lived: they expire after the TTL and are evicted lazily when
read. A newer ambiguous result for the same requester replaces the
older one (last writer wins).

The key-value backend, the expiry policy and the clock are all
injected, so the store carries no process-wide state.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from rank_lookup.matching.types import Candidate

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


class SessionNotFound(LookupError):
    """No live disambiguation session exists for the requester."""


class SessionExpired(SessionNotFound):
    """The requester's session existed but is older than the TTL."""


class SessionInvalidSelection(ValueError):
    """The numeric selection is not an index into the candidate list."""


@dataclass(frozen=True)
class SessionEntry:
    """Candidate list awaiting a numeric selection."""
    created_at: float
    candidates: Tuple[Candidate, ...]

    def __len__(self) -> int:
        return len(self.candidates)


class InMemorySessionBackend:
    """Dict-backed key-value backend; one instance per store."""

    def __init__(self):
        self._entries: Dict[str, SessionEntry] = {}

    def get(self, key: str) -> Optional[SessionEntry]:
        return self._entries.get(key)

    def set(self, key: str, entry: SessionEntry) -> None:
        self._entries[key] = entry

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)


class TTLPolicy:
    """Expiry policy: an entry is stale once its age exceeds ttl_seconds."""

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds

    def is_expired(self, entry: SessionEntry, now: float) -> bool:
        return now - entry.created_at > self.ttl_seconds


class DisambiguationSessionStore:
    """
    Per-requester store of pending candidate lists.

    Expiry is enforced only when an entry is read; sweep_expired() is
    available for callers that want an explicit purge, but nothing
    schedules it.
    """

    def __init__(self,
                 backend: Optional[InMemorySessionBackend] = None,
                 policy: Optional[TTLPolicy] = None,
                 clock: Optional[Callable[[], float]] = None):
        """
        Initialize the session store.

        Args:
            backend: Key-value backend with get/set/delete/keys
                (in-memory dict if None)
            policy: Expiry policy (300 second TTL if None)
            clock: Monotonic seconds source (time.monotonic if None)
        """
        self.backend = backend if backend is not None else InMemorySessionBackend()
        self.policy = policy or TTLPolicy()
        self.clock = clock or time.monotonic

    def put(self, requester_id: str, candidates: Sequence[Candidate]) -> SessionEntry:
        """
        Store a candidate list for a requester, replacing any prior entry.

        Args:
            requester_id: Opaque requester identity from the front end
            candidates: Candidates in the order they were presented

        Returns:
            The stored entry
        """
        entry = SessionEntry(created_at=self.clock(), candidates=tuple(candidates))

        if self.backend.get(requester_id) is not None:
            logger.info(f"Replacing pending disambiguation session for {requester_id}")

        self.backend.set(requester_id, entry)
        return entry

    def get(self, requester_id: str) -> Optional[SessionEntry]:
        """
        Get the live entry for a requester.

        Returns:
            The entry, or None if absent or expired (expired entries
            are evicted here)
        """
        entry, _ = self._lookup(requester_id)
        return entry

    def consume_selection(self, requester_id: str, index: int) -> Candidate:
        """
        Pick a candidate by its 1-based position and close the session.

        Args:
            requester_id: Opaque requester identity
            index: 1-based position in the stored candidate list

        Returns:
            The selected candidate

        Raises:
            SessionExpired: If the session existed but timed out
            SessionNotFound: If there is no session for the requester
            SessionInvalidSelection: If index is not an integer in
                [1, len(candidates)]; the session is kept
        """
        entry, expired = self._lookup(requester_id)
        if entry is None:
            if expired:
                raise SessionExpired(f"Disambiguation session for {requester_id} has expired")
            raise SessionNotFound(f"No disambiguation session for {requester_id}")

        if isinstance(index, bool) or not isinstance(index, int):
            raise SessionInvalidSelection(f"Selection must be an integer, got {index!r}")

        if not 1 <= index <= len(entry.candidates):
            raise SessionInvalidSelection(
                f"Selection {index} is out of range 1-{len(entry.candidates)}"
            )

        self.backend.delete(requester_id)
        selected = entry.candidates[index - 1]
        logger.debug(f"{requester_id} selected #{index}: {selected.name}")
        return selected

    def sweep_expired(self) -> int:
        """
        Evict every expired entry.

        Returns:
            Number of entries evicted
        """
        now = self.clock()
        expired_keys: List[str] = []
        for key in self.backend.keys():
            entry = self.backend.get(key)
            if entry is not None and self.policy.is_expired(entry, now):
                expired_keys.append(key)

        for key in expired_keys:
            self.backend.delete(key)

        if expired_keys:
            logger.debug(f"Swept {len(expired_keys)} expired disambiguation session(s)")
        return len(expired_keys)

    def _lookup(self, requester_id: str) -> Tuple[Optional[SessionEntry], bool]:
        """Return (live entry or None, whether an expired entry was evicted)."""
        entry = self.backend.get(requester_id)
        if entry is None:
            return None, False

        if self.policy.is_expired(entry, self.clock()):
            self.backend.delete(requester_id)
            return None, True

        return entry, False
