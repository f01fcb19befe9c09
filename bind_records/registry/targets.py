"""
Target resolver module for bind-records.

This module works out which (zone, server) pairs must be transferred to discover
the live state of a set of desired records.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from bind_records.models.errors import ResolutionError
from bind_records.models.models import Record, Target

logger = logging.getLogger("bind-records.registry.targets")


def resolve_target(record: Record) -> Target:
    """
    Resolve the (zone, server) pair for a single record.

    Args:
        record: Desired record

    Returns:
        Target: Pair to transfer

    Raises:
        ResolutionError: If the record has no zone
    """
    target = record.target
    if target is None:
        raise ResolutionError(record.id)
    return target


def resolve_targets(
    records: Iterable[Record],
) -> Tuple[List[Target], List[ResolutionError]]:
    """
    Resolve the distinct (zone, server) pairs for a set of desired records.

    Pairs are returned in first-seen order. Records without a zone produce a
    ResolutionError and contribute no pair.

    Args:
        records: Desired records

    Returns:
        Tuple[List[Target], List[ResolutionError]]: Pairs and resolution errors
    """
    targets: Dict[Target, None] = {}
    errors: List[ResolutionError] = []

    for record in records:
        try:
            target = resolve_target(record)
        except ResolutionError as e:
            logger.error(str(e))
            errors.append(e)
            continue
        targets.setdefault(target, None)

    logger.debug(f"Resolved {len(targets)} transfer targets: {[str(t) for t in targets]}")
    return list(targets), errors
