"""Replay of selected failed executions.

The orchestrator keeps side-effects (printing, progress bars) out of the core
logic: the UI layer plugs in through `RetryHooks`.

Batch policy:
- Items run strictly one after another, in selection order.
- The first error aborts the rest of the batch and is re-raised unchanged.
- Executions already restarted stay restarted (at-least-once).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from core.domain.errors import MissingPayloadError, PawError
from core.domain.models import (
    ExecutionSummary,
    Machine,
    RetryOutcome,
    RetryReport,
    RetryStatus,
)
from core.interfaces.workflow_client import WorkflowClient

logger = logging.getLogger(__name__)


@dataclass
class RetryHooks:
    """Optional callbacks for UI layers (progress, failures)."""

    started: Callable[[int], None] | None = None
    progress: Callable[[int, int, str], None] | None = None
    failed: Callable[[int, int, Exception], None] | None = None


@dataclass
class RetryOrchestrator:
    """Resubmit failed executions with their original input.

    `report` is filled as the batch advances, so it is still meaningful after
    `retry` raised.
    """

    client: WorkflowClient
    hooks: RetryHooks = field(default_factory=RetryHooks)
    machine: Machine | None = None
    report: RetryReport = field(default_factory=RetryReport)

    def retry(self, executions: Sequence[ExecutionSummary], selection: Sequence[int]) -> RetryReport:
        """Replay `executions[i]` for each `i` in `selection`."""

        selected = [executions[index] for index in selection]
        return self.retry_executions(selected)

    def retry_executions(self, selected: Sequence[ExecutionSummary]) -> RetryReport:
        total = len(selected)
        self.report = RetryReport(machine=self.machine, total_selected=total)
        if self.hooks.started:
            self.hooks.started(total)

        for position, execution in enumerate(selected, start=1):
            try:
                new_execution_id = self._replay(execution)
            except PawError as exc:
                logger.warning(
                    "Retry batch aborted at item %d of %d (%s): %s",
                    position,
                    total,
                    execution.name,
                    exc,
                )
                self.report.outcomes.append(
                    RetryOutcome(
                        position=position,
                        execution=execution,
                        status=RetryStatus.FAILED,
                        reason=str(exc),
                    )
                )
                if self.hooks.failed:
                    self.hooks.failed(position, total, exc)
                raise

            self.report.outcomes.append(
                RetryOutcome(
                    position=position,
                    execution=execution,
                    status=RetryStatus.STARTED,
                    new_execution_id=new_execution_id,
                )
            )
            if self.hooks.progress:
                self.hooks.progress(position, total, execution.name)

        return self.report

    def _replay(self, execution: ExecutionSummary) -> str:
        detail = self.client.describe_execution(execution.id)
        if detail.input is None:
            raise MissingPayloadError(detail.id)

        new_execution_id = self.client.start_execution(detail.machine_id, detail.input)
        logger.info("Restarted %s as %s", detail.name, new_execution_id)
        return new_execution_id
