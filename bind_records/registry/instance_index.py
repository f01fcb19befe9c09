"""
Instance index module for bind-records.

This module holds every live record discovered during one reconciliation pass and
matches desired records against them.
"""

import logging
from types import MappingProxyType
from typing import AbstractSet, Dict, Iterator, List, Mapping, Optional, Tuple

from bind_records.models.models import PRESENT, Record, Target

IndexKey = Tuple[Target, str]


class InstanceIndex:
    """
    Read-only index of live records, keyed by (zone, server) pair and record name.

    Built once per pass and replaced wholesale on the next one.
    """

    def __init__(self, records_by_target: Mapping[Target, List[Record]]):
        """
        Initialize an InstanceIndex.

        Args:
            records_by_target: Parsed live records for each transferred pair
        """
        self.logger = logging.getLogger("bind-records.registry.index")

        index: Dict[IndexKey, List[Record]] = {}
        for target, records in records_by_target.items():
            for record in records:
                index.setdefault((target, record.name.lower()), []).append(record)

        self._index = MappingProxyType(
            {key: tuple(records) for key, records in index.items()}
        )
        self._targets = frozenset(records_by_target)

    def __len__(self) -> int:
        return sum(len(records) for records in self._index.values())

    def __iter__(self) -> Iterator[Record]:
        for records in self._index.values():
            yield from records

    def has_target(self, target: Target) -> bool:
        """Whether the pair was transferred successfully in this pass."""
        return target in self._targets

    def records_named(self, target: Target, name: str) -> Tuple[Record, ...]:
        """
        Returns every live record under a name.

        Args:
            target: Pair the name lives in
            name: Record name, with or without a trailing dot

        Returns:
            Tuple[Record, ...]: Live records in transcript order
        """
        key = (target, name.rstrip(".").lower())
        return self._index.get(key, ())

    def lookup(
        self, desired: Record, declared_types: AbstractSet[str] = frozenset()
    ) -> Optional[Record]:
        """
        Find the live record a desired record should be converged from.

        A live record with the same name and type wins. Otherwise, for a present
        record whose name holds exactly one live record, that record is the match
        so a type change can delete it under its old type. A live record whose
        type is itself declared under the name is never taken over.

        Args:
            desired: Desired record
            declared_types: Types declared under the desired record's name

        Returns:
            Optional[Record]: Matching live record, if any
        """
        target = desired.target
        if target is None:
            return None

        candidates = self.records_named(target, desired.name)
        for record in candidates:
            if record.record_type == desired.record_type:
                return record

        if desired.ensure != PRESENT:
            return None

        if len(candidates) == 1 and candidates[0].record_type not in declared_types:
            self.logger.debug(
                f"{desired.id} matched live {candidates[0].id} by name (type change)"
            )
            return candidates[0]

        if candidates:
            self.logger.debug(
                f"{desired.id} has {len(candidates)} live records of other types, none matched"
            )
        return None
