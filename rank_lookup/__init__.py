"""
Rank Lookup - Source Package

Resolves a typed level name against a ranked level list.

Main modules:
- normalization: Text normalization, tokenization, version extraction
- matching: Tiered resolution engine (exact, acronym, token, fuzzy)
- session: Disambiguation sessions for numeric follow-up selections
- lookup_service: Front-end entry point wiring engine and sessions
- utils: YAML configuration
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from rank_lookup.lookup_service import LookupService
from rank_lookup.matching import ResolutionEngine
from rank_lookup.session import DisambiguationSessionStore, TTLPolicy
from rank_lookup.utils.config_manager import ConfigManager, DEFAULT_CONFIG_PATH

__version__ = "1.0.0"

_logger = logging.getLogger(__name__)


def build_service(config_path: Optional[Path] = None,
                  backend=None,
                  clock: Optional[Callable[[], float]] = None) -> LookupService:
    """
    Build a LookupService with engine and session store wired from config.

    Args:
        config_path: YAML config path (default: config/resolver_config.yaml)
        backend: Session key-value backend (in-memory if None)
        clock: Monotonic seconds source for session expiry

    Returns:
        Ready-to-use LookupService

    Raises:
        InvalidConfig: If the YAML file holds unusable values
    """
    path = config_path or DEFAULT_CONFIG_PATH
    cfg = ConfigManager(path)
    cfg.require_valid()
    ttl_seconds = cfg.get_session_param('ttl_seconds')

    sessions = DisambiguationSessionStore(
        backend=backend,
        policy=TTLPolicy(ttl_seconds=ttl_seconds),
        clock=clock,
    )
    _logger.debug("Session TTL: %ss", ttl_seconds)
    return LookupService(engine=ResolutionEngine(config_path=path), sessions=sessions)


__all__ = ["LookupService", "build_service", "__version__"]
