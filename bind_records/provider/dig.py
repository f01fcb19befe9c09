"""
Zone transfer provider module for bind-records.

This module is responsible for running ``dig axfr`` against each (zone, server) pair
and turning the output into live records.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Union

from bind_records.models.errors import BindRecordsError, TransferError
from bind_records.models.models import Target
from bind_records.provider.transcript import ParseResult, parse_transcript
from bind_records.utils.process import run_command

# dig exits 0 for these, the failure only shows in the transcript
FAILURE_BANNERS = (
    "; Transfer failed",
    ";; connection timed out",
    ";; communications error",
    ";; Connection to",
)


class ZoneTransfer:
    """
    Provider that fetches live zone contents with dig.
    """

    def __init__(
        self, dig: str = "dig", tries: int = 5, timeout: Optional[float] = None
    ):
        """
        Initialize a ZoneTransfer.

        Args:
            dig: dig executable
            tries: Number of UDP/TCP attempts passed to dig
            timeout: Seconds before a transfer is abandoned
        """
        self.dig = dig
        self.tries = tries
        self.timeout = timeout
        self.logger = logging.getLogger("bind-records.provider.dig")

    def command(self, target: Target) -> List[str]:
        """
        Build the dig command for a pair.

        Args:
            target: Pair to transfer

        Returns:
            List[str]: Command line
        """
        cmd = [self.dig]
        if target.server:
            cmd.append(f"@{target.server}")
        cmd.extend(["axfr", target.zone, "+nostats"])
        if self.tries:
            cmd.append(f"+tries={self.tries}")
        return cmd

    async def transfer(self, target: Target) -> ParseResult:
        """
        Transfer one zone and parse the transcript.

        Args:
            target: Pair to transfer

        Returns:
            ParseResult: Live records and skipped lines

        Raises:
            TransferError: If dig could not run, failed, or reported a failed transfer
        """
        cmd = self.command(target)
        self.logger.debug(f"Transferring {target}: {' '.join(cmd)}")

        try:
            result = await run_command(*cmd, timeout=self.timeout)
        except BindRecordsError as e:
            raise TransferError(target, str(e), command=cmd)
        except OSError as e:
            raise TransferError(target, f"could not run {self.dig}: {e}", command=cmd)

        if not result.succeeded:
            raise TransferError(
                target,
                f"command '{' '.join(cmd)}' exited with status {result.returncode}",
                command=cmd,
                output=result.output,
            )

        for line in result.output.splitlines():
            if line.startswith(FAILURE_BANNERS):
                raise TransferError(
                    target, line.lstrip("; ").strip(), command=cmd, output=result.output
                )

        parsed = parse_transcript(result.output, zone=target.zone, server=target.server)
        self.logger.info(f"Transferred {target}: {len(parsed.records)} records")
        return parsed

    async def transfer_all(
        self, targets: Iterable[Target]
    ) -> Dict[Target, Union[ParseResult, TransferError]]:
        """
        Transfer every pair concurrently. A failed pair does not affect the others.

        Args:
            targets: Pairs to transfer

        Returns:
            Dict[Target, Union[ParseResult, TransferError]]: Outcome per pair
        """
        targets = list(targets)
        outcomes = await asyncio.gather(
            *(self._transfer_or_error(target) for target in targets)
        )
        return dict(zip(targets, outcomes))

    async def _transfer_or_error(
        self, target: Target
    ) -> Union[ParseResult, TransferError]:
        try:
            return await self.transfer(target)
        except TransferError as e:
            self.logger.error(str(e))
            return e
