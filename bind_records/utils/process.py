"""
Process module for bind-records.

This module runs the external zone-transfer and dynamic-update executables.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from bind_records.models.errors import CommandTimeout

logger = logging.getLogger("bind-records.process")


@dataclass(frozen=True)
class CommandResult:
    """Exit status and combined stdout/stderr of a finished command."""

    returncode: int
    output: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


async def run_command(
    *command: str, stdin: Optional[str] = None, timeout: Optional[float] = None
) -> CommandResult:
    """
    Execute a command, feeding it stdin and capturing its output.

    Args:
        command: Executable and arguments
        stdin: Text written to the command's standard input
        timeout: Seconds to wait before killing the command

    Returns:
        CommandResult: Exit status and output

    Raises:
        CommandTimeout: If the command did not finish within the timeout
        OSError: If the executable could not be started
    """
    logger.debug(f"Running: {' '.join(command)}")
    process = await asyncio.create_subprocess_exec(
        *command,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    data = stdin.encode() if stdin is not None else None
    try:
        stdout, _ = await asyncio.wait_for(process.communicate(data), timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CommandTimeout(list(command), timeout)

    return CommandResult(
        returncode=process.returncode,
        output=stdout.decode("utf-8", "replace"),
    )
