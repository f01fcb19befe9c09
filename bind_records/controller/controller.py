"""
Controller module for bind-records.

This module is responsible for coordinating the source, zone transfer and dynamic
update components so that live DNS records converge to their declared state.
"""

import asyncio
import logging
from typing import Dict, List, Set, Tuple

from bind_records.controller.plan import Plan
from bind_records.models.errors import TransferError, UpdateError
from bind_records.models.models import ReconcileReport, Record, Target
from bind_records.provider.transcript import ParseResult
from bind_records.registry.instance_index import InstanceIndex
from bind_records.registry.targets import resolve_targets


class Controller:
    """
    Controller that runs reconciliation passes.
    """

    def __init__(self, source, transfer, executor, interval: int = 60):
        """
        Initialize a Controller.

        Args:
            source: Source of desired records
            transfer: Zone transfer provider
            executor: Dynamic update provider
            interval: Seconds between passes in the reconciliation loop
        """
        self.source = source
        self.transfer = transfer
        self.executor = executor
        self.interval = interval
        self.logger = logging.getLogger("bind-records.controller")

    async def run_reconciliation_loop(self) -> None:
        """
        Runs reconciliation passes at the configured interval.
        """
        self.logger.debug(
            f"Reconciliation loop starting with interval {self.interval} seconds"
        )

        while True:
            try:
                await self.run_once()
            except Exception as e:
                self.logger.error(f"Error in reconciliation loop: {e}", exc_info=True)

            await asyncio.sleep(self.interval)

    async def run_once(self) -> ReconcileReport:
        """
        Performs a single reconciliation pass.

        Errors scoped to one (zone, server) pair or one record are collected in the
        report and never abort the rest of the pass.

        Returns:
            ReconcileReport: Outcome of the pass
        """
        report = ReconcileReport()
        desired_records = self.source.records()

        targets, resolution_errors = resolve_targets(desired_records)
        report.errors.extend(resolution_errors)

        declared_types = self._declared_types(desired_records)
        outcomes = await self.transfer.transfer_all(targets)
        index = self._build_index(outcomes, report)

        self.logger.info(
            f"Running reconciliation: Found {len(desired_records)} desired and "
            f"{len(index)} live records across {len(targets)} zones."
        )

        for desired in desired_records:
            target = desired.target
            if target is None:
                continue
            if not index.has_target(target):
                self.logger.warning(
                    f"Skipping {desired.id}: transfer of {target} failed"
                )
                report.skipped.append(desired.id)
                continue

            live = index.lookup(
                desired, declared_types.get((target, desired.name.lower()), set())
            )
            if not Plan.needs_update(live, desired):
                self.logger.debug(f"Record {desired.id} is up-to-date")
                report.in_sync.append(desired.id)
                continue

            await self._flush(desired, live, report)

        self._log_summary(report)
        return report

    @staticmethod
    def _declared_types(
        desired_records: List[Record],
    ) -> Dict[Tuple[Target, str], Set[str]]:
        """Types declared under each name, so one live record is never claimed twice."""
        declared: Dict[Tuple[Target, str], Set[str]] = {}
        for record in desired_records:
            if record.target is not None:
                key = (record.target, record.name.lower())
                declared.setdefault(key, set()).add(record.record_type)
        return declared

    def _build_index(
        self, outcomes: Dict[Target, object], report: ReconcileReport
    ) -> InstanceIndex:
        """
        Build the instance index from successful transfers, recording failures.

        Args:
            outcomes: Transfer outcome per pair
            report: Report to record errors and warnings in

        Returns:
            InstanceIndex: Live records for this pass
        """
        records_by_target: Dict[Target, List[Record]] = {}
        for target, outcome in outcomes.items():
            if isinstance(outcome, TransferError):
                report.errors.append(outcome)
                continue
            if isinstance(outcome, ParseResult):
                report.warnings.extend(outcome.warnings)
                records_by_target[target] = outcome.records
        return InstanceIndex(records_by_target)

    async def _flush(self, desired: Record, live, report: ReconcileReport) -> None:
        """
        Plan and submit the operations for one record.

        Args:
            desired: Desired record
            live: Matching live record, if any
            report: Report to record the outcome in
        """
        plan = Plan(desired, live).calculate_changes()
        if not plan.has_changes():
            self.logger.debug(f"No operations for {desired.id}")
            report.in_sync.append(desired.id)
            return

        self.logger.info(
            f"Applying changes to {desired.id}: {len(plan.deletes)} deletes, "
            f"{len(plan.adds)} adds"
        )
        try:
            await self.executor.flush(plan)
        except UpdateError as e:
            self.logger.error(str(e))
            report.errors.append(e)
            return
        report.flushed.append(desired.id)

    def _log_summary(self, report: ReconcileReport) -> None:
        log_level = logging.WARNING if report.has_errors() else logging.INFO
        self.logger.log(
            log_level,
            f"Reconciliation finished: {len(report.flushed)} flushed, "
            f"{len(report.in_sync)} in sync, {len(report.skipped)} skipped, "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings",
        )
