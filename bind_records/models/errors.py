"""
Exception hierarchy for bind-records.

Errors scoped to one (zone, server) pair or one record are collected in the
reconciliation report instead of aborting the pass.
"""

from typing import List, Optional


class BindRecordsError(Exception):
    """Root exception for all bind-records errors."""


class CommandTimeout(BindRecordsError):
    """An external command did not finish in time."""

    def __init__(self, command: List[str], timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"Command '{' '.join(command)}' timed out after {timeout}s")


class TransferError(BindRecordsError):
    """Zone transfer failed or produced unusable output for a (zone, server) pair."""

    def __init__(self, target, message: str, command=None, output: str = ""):
        self.target = target
        self.command = command or []
        self.output = output
        super().__init__(f"Zone transfer for {target} failed: {message}")


class ParseWarning(BindRecordsError):
    """A malformed transcript line that was skipped."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Skipping transcript line '{line}': {reason}")


class UpdateError(BindRecordsError):
    """Dynamic update failed for one record's flush."""

    def __init__(
        self,
        record_id: str,
        message: str,
        script: str = "",
        output: str = "",
        returncode: Optional[int] = None,
    ):
        self.record_id = record_id
        self.script = script
        self.output = output
        self.returncode = returncode
        super().__init__(
            f"Dynamic update for {record_id} failed: {message}\n"
            f"script:\n{script}\noutput:\n{output}"
        )


class ResolutionError(BindRecordsError):
    """A desired record has no zone to transfer."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Record {record_id} has no zone")
