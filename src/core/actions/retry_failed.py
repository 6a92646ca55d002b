"""Action: retry failed executions of one state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.domain.errors import MachineNotFoundError
from core.domain.models import DateWindow, ExecutionCatalog, Machine, RetryReport
from core.interfaces.action import RemediationAction
from core.interfaces.operator import Operator
from core.interfaces.workflow_client import WorkflowClient
from core.services.date_window import TIMESTAMP_EXAMPLE
from core.services.retry_orchestrator import RetryHooks, RetryOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryOptions:
    """Answers supplied up front (CLI flags) instead of prompting."""

    machine_name: str | None = None
    window: DateWindow | None = None
    assume_yes: bool = False


class RetryFailedExecutions(RemediationAction):
    """Pick a machine and a date window, then replay the chosen failures."""

    def __init__(
        self,
        client: WorkflowClient,
        operator: Operator,
        options: RetryOptions | None = None,
    ) -> None:
        self._client = client
        self._operator = operator
        self._options = options or RetryOptions()

    def name(self) -> str:
        return "Retry Failed Executions"

    def execute(self) -> None:
        machines = self._client.list_machines()
        if not machines:
            self._operator.notify("No state machines found.")
            return

        machine = self._pick_machine(machines)
        window = self._options.window or DateWindow(
            start=self._operator.ask_timestamp(f"Start Date (ex. {TIMESTAMP_EXAMPLE})"),
            end=self._operator.ask_timestamp(f"End Date (ex. {TIMESTAMP_EXAMPLE})"),
        )
        logger.debug("Listing failed executions of %s in %s", machine.name, window.describe())

        catalog = ExecutionCatalog(
            machine=machine,
            window=window,
            executions=tuple(self._client.list_failed_executions(machine.id, window)),
        )
        if catalog.is_empty:
            self._operator.notify(f"No failed executions of {machine.name} in {window.describe()}.")
            self._operator.retry_finished(RetryReport(machine=machine))
            return

        if self._options.assume_yes:
            selection = list(range(len(catalog)))
        else:
            selection = self._operator.choose_many(
                "Select the executions to retry:",
                [str(execution) for execution in catalog.executions],
            )
        if not selection:
            self._operator.notify("No executions selected.")
            self._operator.retry_finished(RetryReport(machine=machine))
            return

        orchestrator = RetryOrchestrator(
            client=self._client,
            hooks=RetryHooks(
                started=self._operator.retry_started,
                progress=self._operator.retry_progress,
            ),
            machine=machine,
        )
        try:
            orchestrator.retry_executions(catalog.select(selection))
        finally:
            self._operator.retry_finished(orchestrator.report)

    def _pick_machine(self, machines: list[Machine]) -> Machine:
        wanted = self._options.machine_name
        if wanted is not None:
            for machine in machines:
                if machine.name == wanted or machine.id == wanted:
                    return machine
            raise MachineNotFoundError(wanted, [machine.name for machine in machines])

        index = self._operator.choose("Select the Machine:", [str(machine) for machine in machines])
        return machines[index]
