"""
Dynamic update provider module for bind-records.

This module is responsible for turning an update plan into an nsupdate script and
submitting it as one transaction per record.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from bind_records.models.errors import BindRecordsError, UpdateError
from bind_records.models.models import UpdatePlan
from bind_records.utils.process import run_command


@dataclass(frozen=True)
class FlushResult:
    """
    The submitted script and what the transport returned.
    """

    record_id: str
    script: str
    returncode: Optional[int] = None
    output: str = ""
    dry_run: bool = False


class NSUpdateExecutor:
    """
    Provider that applies update plans with nsupdate.
    """

    def __init__(
        self,
        nsupdate: str = "nsupdate",
        timeout: Optional[float] = None,
        dry_run: bool = False,
    ):
        """
        Initialize an NSUpdateExecutor.

        Args:
            nsupdate: nsupdate executable
            timeout: Seconds before a submission is abandoned
            dry_run: Whether to log scripts instead of submitting them
        """
        self.nsupdate = nsupdate
        self.timeout = timeout
        self.dry_run = dry_run
        self.logger = logging.getLogger("bind-records.provider.nsupdate")

    @staticmethod
    def build_script(plan: UpdatePlan) -> str:
        """
        Serialize a plan into nsupdate syntax.

        The server line is only emitted when the record names a server. All
        operations are committed together by the single trailing ``send``.

        Args:
            plan: Update plan

        Returns:
            str: nsupdate script
        """
        lines = []
        if plan.server:
            lines.append(f"server {plan.server}")
        lines.extend(op.to_update_line() for op in plan.operations)
        lines.append("send")
        return "\n".join(lines) + "\n"

    def command(self, ddns_key: Optional[str]) -> List[str]:
        """
        Build the nsupdate command line.

        Args:
            ddns_key: Path to the TSIG key file, if any

        Returns:
            List[str]: Command line
        """
        cmd = [self.nsupdate, "-v"]
        if ddns_key:
            cmd.extend(["-k", ddns_key])
        return cmd

    async def flush(self, plan: UpdatePlan) -> FlushResult:
        """
        Submit a plan as one nsupdate transaction.

        Args:
            plan: Update plan for one record

        Returns:
            FlushResult: Submitted script, exit status and output

        Raises:
            UpdateError: If nsupdate could not run or exited abnormally
        """
        record_id = plan.record.id
        script = self.build_script(plan)
        cmd = self.command(plan.record.ddns_key)

        if self.dry_run:
            self.logger.info(f"Dry run mode, not submitting update for {record_id}")
            self.logger.info(f"Script for {record_id}:\n{script}")
            return FlushResult(record_id=record_id, script=script, dry_run=True)

        self.logger.debug(f"Running '{' '.join(cmd)}' with script:\n{script}")
        try:
            result = await run_command(*cmd, stdin=script, timeout=self.timeout)
        except BindRecordsError as e:
            raise UpdateError(record_id, str(e), script=script)
        except OSError as e:
            raise UpdateError(record_id, f"could not run {self.nsupdate}: {e}", script=script)

        if not result.succeeded:
            raise UpdateError(
                record_id,
                f"command '{' '.join(cmd)}' exited with status {result.returncode}",
                script=script,
                output=result.output,
                returncode=result.returncode,
            )

        for op in plan.operations:
            self.logger.info(
                f"BIND: {op.action} {op.record_type} record {op.name} {op.value} (TTL: {op.ttl})"
            )
        return FlushResult(
            record_id=record_id,
            script=script,
            returncode=result.returncode,
            output=result.output,
        )
