"""
Data models for bind-records.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

PRESENT = "present"
ABSENT = "absent"

ADD = "add"
DELETE = "delete"


def strip_root_dot(value: str) -> str:
    """
    Strip exactly one trailing root-dot from a name or value.

    Args:
        value: Name or value

    Returns:
        str: Value without its trailing root-dot
    """
    if value.endswith("."):
        return value[:-1]
    return value


@dataclass(frozen=True)
class Target:
    """
    A (zone, server) pair to transfer. No server means the system resolver.
    """

    zone: str
    server: Optional[str] = None

    def __str__(self) -> str:
        if self.server:
            return f"{self.zone}@{self.server}"
        return self.zone


@dataclass(frozen=True)
class Record:
    """
    Represents one DNS resource record, either discovered live or desired.
    """

    name: str
    record_type: str
    content: Tuple[str, ...] = ()
    ttl: Optional[int] = None
    record_class: str = "IN"
    ensure: str = PRESENT
    old_type: Optional[str] = None
    old_content: Optional[Tuple[str, ...]] = None
    zone: Optional[str] = None
    server: Optional[str] = None
    ddns_key: Optional[str] = None

    @property
    def id(self) -> str:
        """
        Generate a unique identifier for this record.

        Returns:
            str: Unique identifier
        """
        return f"{self.name}:{self.record_type}"

    @property
    def target(self) -> Optional[Target]:
        """The (zone, server) pair this record lives in, if a zone is known."""
        if not self.zone:
            return None
        return Target(zone=self.zone, server=self.server)


@dataclass(frozen=True)
class Operation:
    """
    A single dynamic-update operation.
    """

    action: str
    name: str
    ttl: Optional[int]
    record_type: str
    value: str

    def to_update_line(self) -> str:
        """
        Render the operation as an nsupdate ``update`` directive.

        TXT values are wrapped in double quotes, every other type is unquoted.

        Returns:
            str: Update directive
        """
        value = f'"{self.value}"' if self.record_type == "TXT" else self.value
        ttl = "" if self.ttl is None else f" {self.ttl}"
        return f"update {self.action} {self.name}{ttl} {self.record_type} {value}"


@dataclass(frozen=True)
class UpdatePlan:
    """
    The operations needed to converge one record, deletes before adds.
    """

    record: Record
    deletes: Tuple[Operation, ...] = ()
    adds: Tuple[Operation, ...] = ()

    @property
    def operations(self) -> Tuple[Operation, ...]:
        return self.deletes + self.adds

    @property
    def server(self) -> Optional[str]:
        return self.record.server

    def has_changes(self) -> bool:
        """
        Check if there are any operations to be applied.

        Returns:
            bool: True if there are operations, False otherwise
        """
        return bool(self.deletes or self.adds)


@dataclass
class ReconcileReport:
    """
    Outcome of one reconciliation pass.
    """

    errors: List[Exception] = field(default_factory=list)
    warnings: List[Exception] = field(default_factory=list)
    flushed: List[str] = field(default_factory=list)
    in_sync: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def has_errors(self) -> bool:
        return bool(self.errors)
