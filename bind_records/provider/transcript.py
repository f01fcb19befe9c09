"""
Transcript parser module for bind-records.

This module turns the text output of a ``dig axfr`` zone transfer into live records.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from bind_records.models.errors import ParseWarning
from bind_records.models.models import PRESENT, Record, strip_root_dot

# Records of these types under one name are merged into a single record
MERGED_TYPES = ("A",)

logger = logging.getLogger("bind-records.transcript")


@dataclass
class ParseResult:
    """
    Records parsed from one transcript along with the lines that were skipped.
    """

    records: List[Record] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)


def parse_line(line: str, zone: Optional[str] = None, server: Optional[str] = None) -> Record:
    """
    Parse one transcript line of the form ``name ttl class type content``.

    Args:
        line: Transcript line, not a comment or blank
        zone: Zone the transcript was transferred from
        server: Server the transcript was transferred from

    Returns:
        Record: Live record

    Raises:
        ParseWarning: If the line is malformed
    """
    normalized = line.replace("\t", " ").replace('"', "")
    fields = normalized.split(None, 4)
    if len(fields) < 5:
        raise ParseWarning(line, f"expected 5 fields, found {len(fields)}")

    name, ttl, record_class, record_type, content = fields
    content = strip_root_dot(content.strip())
    if not content:
        raise ParseWarning(line, "missing content")

    try:
        ttl_value = int(ttl)
    except ValueError:
        raise ParseWarning(line, f"invalid TTL '{ttl}'")
    if ttl_value < 0:
        raise ParseWarning(line, f"invalid TTL '{ttl}'")

    return Record(
        name=strip_root_dot(name),
        record_type=record_type,
        content=(content,),
        ttl=ttl_value,
        record_class=record_class,
        ensure=PRESENT,
        old_type=record_type,
        old_content=(content,),
        zone=zone,
        server=server,
    )


def parse_transcript(
    transcript: str, zone: Optional[str] = None, server: Optional[str] = None
) -> ParseResult:
    """
    Parse a zone transfer transcript into live records, in transcript order.

    Comment and blank lines are ignored. Address records sharing a name are merged
    into one record whose content lists every value. Malformed lines are skipped and
    reported as warnings.

    Args:
        transcript: Raw transcript
        zone: Zone the transcript was transferred from
        server: Server the transcript was transferred from

    Returns:
        ParseResult: Parsed records and warnings
    """
    result = ParseResult()
    # (name, type) -> position in result.records for mergeable types
    merge_positions: Dict[tuple, int] = {}

    for line in transcript.splitlines():
        if not line.strip() or line.startswith(";"):
            continue

        try:
            record = parse_line(line, zone=zone, server=server)
        except ParseWarning as warning:
            logger.warning(str(warning))
            result.warnings.append(warning)
            continue

        if record.record_type not in MERGED_TYPES:
            result.records.append(record)
            continue

        key = (record.name, record.record_type)
        position = merge_positions.get(key)
        if position is None:
            merge_positions[key] = len(result.records)
            result.records.append(record)
            continue

        existing = result.records[position]
        result.records[position] = replace(
            existing,
            content=existing.content + record.content,
            old_content=existing.old_content + record.content,
        )
        logger.debug(f"Merged {record.content[0]} into {existing.id}")

    logger.debug(
        f"Parsed {len(result.records)} records ({len(result.warnings)} skipped lines)"
    )
    return result
