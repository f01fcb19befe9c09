"""
Plan module for bind-records.

This module is responsible for calculating the dynamic-update operations needed to
bring a live record in line with its desired state.
"""

import logging
from typing import Iterable, Optional, Tuple

from bind_records.models.models import (
    ABSENT,
    ADD,
    DELETE,
    PRESENT,
    Operation,
    Record,
    UpdatePlan,
)


class Plan:
    """
    Plan calculates the operations for one desired record.

    Updates are always delete-before-add: the previously live values are removed
    under their previously live type before the desired values are added.
    """

    def __init__(self, desired: Record, live: Optional[Record] = None):
        """
        Initialize a Plan.

        Args:
            desired: Desired record
            live: Matching live record, or None if the record does not exist yet
        """
        self.desired = desired
        self.live = live
        self.logger = logging.getLogger("bind-records.plan")

    def calculate_changes(self) -> UpdatePlan:
        """
        Calculate the operations for the desired record.

        Returns:
            UpdatePlan: Deletes followed by adds
        """
        desired = self.desired
        live = self.live
        deletes: Tuple[Operation, ...] = ()
        adds: Tuple[Operation, ...] = ()

        if desired.ensure == PRESENT:
            if live is not None:
                self.logger.info(
                    f"Record {desired.id} exists as {live.id}, deleting old values first"
                )
                deletes = self._operations(
                    DELETE,
                    desired.name,
                    live.ttl,
                    self._live_type(live),
                    self._live_values(live),
                )
            else:
                self.logger.info(f"Record {desired.id} will be created")
            adds = self._operations(
                ADD, desired.name, desired.ttl, desired.record_type, desired.content
            )
        elif desired.ensure == ABSENT:
            if live is not None and self._live_type(live) == desired.record_type:
                ttl = live.ttl
                values = self._live_values(live)
            else:
                ttl = desired.ttl
                values = desired.content
            self.logger.info(f"Record {desired.id} will be deleted")
            deletes = self._operations(
                DELETE, desired.name, ttl, desired.record_type, values
            )
        else:
            raise ValueError(f"Unknown ensure value '{desired.ensure}' for {desired.id}")

        return UpdatePlan(record=desired, deletes=deletes, adds=adds)

    @staticmethod
    def needs_update(live: Optional[Record], desired: Record) -> bool:
        """
        Check if a desired record differs from its live state.

        Args:
            live: Matching live record, if any
            desired: Desired record

        Returns:
            bool: True if the record needs to be flushed, False otherwise
        """
        if desired.ensure == ABSENT:
            return live is not None and Plan._live_type(live) == desired.record_type

        if live is None:
            return True

        # Check if type is different
        if Plan._live_type(live) != desired.record_type:
            return True

        # Check if values are different
        if set(Plan._live_values(live)) != set(desired.content):
            return True

        # Check if TTL is different
        if desired.ttl is not None and live.ttl != desired.ttl:
            return True

        return False

    @staticmethod
    def _live_type(live: Record) -> str:
        return live.old_type or live.record_type

    @staticmethod
    def _live_values(live: Record) -> Tuple[str, ...]:
        if live.old_content is not None:
            return live.old_content
        return live.content

    @staticmethod
    def _operations(
        action: str,
        name: str,
        ttl: Optional[int],
        record_type: str,
        values: Iterable[str],
    ) -> Tuple[Operation, ...]:
        return tuple(
            Operation(
                action=action,
                name=name,
                ttl=ttl,
                record_type=record_type,
                value=value,
            )
            for value in values
        )
