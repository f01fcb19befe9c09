"""
Declared record source module for bind-records.

This module is responsible for turning the records declared in the configuration
into desired records.
"""

import logging
from typing import List, Optional

from bind_records.config.config import Config, RecordConfig
from bind_records.models.models import Record, strip_root_dot


class DeclaredRecordSource:
    """
    Source that reads desired records from the configuration.
    """

    def __init__(self, config: Config):
        """
        Initialize a DeclaredRecordSource.

        Args:
            config: Loaded configuration
        """
        self.config = config
        self.logger = logging.getLogger("bind-records.source.declared")

    def records(self) -> List[Record]:
        """
        Returns the desired records, with defaults applied.

        Returns:
            List[Record]: List of desired records
        """
        records = [self._record_from_config(entry) for entry in self.config.records]
        self.logger.debug(f"Loaded {len(records)} desired records")
        return records

    def _record_from_config(self, entry: RecordConfig) -> Record:
        """
        Convert a declared record into a desired Record.

        Args:
            entry: Declared record

        Returns:
            Record: Desired record
        """
        ttl = entry.ttl if entry.ttl is not None else self.config.default_ttl
        return Record(
            name=strip_root_dot(entry.name.strip()),
            record_type=entry.type,
            content=tuple(strip_root_dot(value) for value in entry.content),
            ttl=ttl,
            ensure=entry.ensure,
            zone=self._zone(entry.zone),
            server=entry.server or self.config.default_server,
            ddns_key=entry.ddns_key or self.config.default_ddns_key,
        )

    @staticmethod
    def _zone(zone: Optional[str]) -> Optional[str]:
        if zone is None or not zone.strip():
            return None
        return strip_root_dot(zone.strip())
