"""
Main entry point for bind-records.
"""

import asyncio
import logging
import sys
from pathlib import Path

from bind_records.config.config import Config
from bind_records.controller.controller import Controller
from bind_records.provider.dig import ZoneTransfer
from bind_records.provider.nsupdate import NSUpdateExecutor
from bind_records.source.declared import DeclaredRecordSource


async def main() -> int:
    """Main entry point. Returns the process exit status."""
    # Setup logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger = logging.getLogger("bind-records")

    # Load configuration
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    config = Config.from_yaml(config_path)

    # Set log level from configuration
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(log_level)
    logger.info(f"Starting bind-records with {len(config.records)} declared records")

    # Initialize components
    timeout = Config.parse_duration(config.timeout, default=30)
    source = DeclaredRecordSource(config)
    transfer = ZoneTransfer(config.dig, tries=config.tries, timeout=timeout)
    executor = NSUpdateExecutor(
        config.nsupdate, timeout=timeout, dry_run=config.dry_run
    )
    controller = Controller(
        source,
        transfer,
        executor,
        interval=Config.parse_duration(config.interval),
    )

    if not config.once:
        await controller.run_reconciliation_loop()
        return 0

    report = await controller.run_once()
    if report.has_errors() and config.fail_on_error:
        logger.error(f"Reconciliation finished with {len(report.errors)} errors")
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nShutting down bind-records")
        sys.exit(0)


if __name__ == "__main__":
    run()
