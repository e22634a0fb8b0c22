"""
Level indexing module.

Converts the raw ranked record list handed over by the front end into
EnrichedLevel objects carrying everything the tiers compare against.
Indexing is a pure function of the record list: call it again for every
new snapshot, never patch its output.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple

from rank_lookup.normalization.text_normalizer import TextNormalizer
from rank_lookup.matching.acronym_matcher import generate_acronym
from rank_lookup.matching.types import EnrichedLevel

logger = logging.getLogger(__name__)


class MalformedRecordSet(ValueError):
    """The raw record list is not a sequence of record-shaped values."""


class LevelIndexer:
    """
    Builds the searchable form of a level list.

    Records with an absent or empty name are skipped; everything else
    keeps its input order.
    """

    def __init__(self, normalizer: Optional[TextNormalizer] = None):
        """
        Initialize the level indexer.

        Args:
            normalizer: TextNormalizer instance (creates new if None)
        """
        self.normalizer = normalizer or TextNormalizer()

    def enrich(self, records: Sequence[Any]) -> Tuple[EnrichedLevel, ...]:
        """
        Enrich a raw record list.

        Args:
            records: List or tuple of mappings (or objects) with
                'name' and 'top'

        Returns:
            Tuple of EnrichedLevel in input order

        Raises:
            MalformedRecordSet: If records is not a list/tuple, an item
                is not record-shaped, or a named record has a
                non-integer rank
        """
        if not isinstance(records, (list, tuple)):
            raise MalformedRecordSet(
                f"Expected a list of level records, got {type(records).__name__}"
            )

        levels = []
        skipped = 0
        for position, record in enumerate(records):
            name, top = self._read_record(record, position)

            if not isinstance(name, str) or not name.strip():
                skipped += 1
                continue

            if isinstance(top, bool) or not isinstance(top, int):
                raise MalformedRecordSet(
                    f"Record {position} ('{name}') has non-integer rank {top!r}"
                )

            levels.append(self.enrich_one(name, top))

        if skipped:
            logger.debug(f"Skipped {skipped} unnamed record(s) out of {len(records)}")

        return tuple(levels)

    def enrich_one(self, name: str, top: int) -> EnrichedLevel:
        """Enrich a single named record."""
        normalized_name = self.normalizer.normalize(name)
        words = tuple(normalized_name.split())

        return EnrichedLevel(
            name=name,
            top=top,
            normalized_name=normalized_name,
            normalized_words=words,
            acronym=generate_acronym(normalized_name),
            version=self.normalizer.extract_version(name),
        )

    def _read_record(self, record: Any, position: int) -> Tuple[Any, Any]:
        """Pull name/top out of a mapping or attribute-style record."""
        if isinstance(record, Mapping):
            return record.get('name'), record.get('top')

        if hasattr(record, 'name'):
            return getattr(record, 'name', None), getattr(record, 'top', None)

        raise MalformedRecordSet(
            f"Record {position} is not record-shaped: {type(record).__name__}"
        )
