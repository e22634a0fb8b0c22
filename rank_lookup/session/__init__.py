"""
Disambiguation session package.

Short-lived, per-requester storage of ambiguous candidate lists
awaiting a numeric follow-up selection.
"""

from .session_store import (
    DEFAULT_TTL_SECONDS,
    DisambiguationSessionStore,
    InMemorySessionBackend,
    SessionEntry,
    SessionExpired,
    SessionInvalidSelection,
    SessionNotFound,
    TTLPolicy,
)

__all__ = [
    'DEFAULT_TTL_SECONDS',
    'DisambiguationSessionStore',
    'InMemorySessionBackend',
    'SessionEntry',
    'SessionExpired',
    'SessionInvalidSelection',
    'SessionNotFound',
    'TTLPolicy',
]
