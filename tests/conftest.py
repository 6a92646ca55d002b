"""Shared fakes and fixtures for paw tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

import pytest

from core.domain.errors import TransportError
from core.domain.models import (
    DateWindow,
    ExecutionDetail,
    ExecutionSummary,
    Machine,
    RetryReport,
)
from core.services.date_window import filter_executions

MACHINE = Machine(id="arn:aws:states:us-east-1:123456789012:stateMachine:orders", name="orders")
BRT = timezone(timedelta(hours=-3))


def make_execution(name: str, started_at: datetime, machine: Machine = MACHINE) -> ExecutionSummary:
    return ExecutionSummary(
        id=f"arn:aws:states:us-east-1:123456789012:execution:{machine.name}:{name}",
        machine_id=machine.id,
        name=name,
        started_at=started_at,
    )


class FakeWorkflowClient:
    """In-memory workflow service recording every call.

    `failures` maps (operation, call number) to the error raised on that call,
    call numbers being 1-based per operation.
    """

    def __init__(
        self,
        machines: Sequence[Machine] = (MACHINE,),
        executions: Sequence[ExecutionSummary] = (),
        inputs: dict[str, str | None] | None = None,
        failures: dict[tuple[str, int], Exception] | None = None,
    ) -> None:
        self.machines = list(machines)
        self.executions = list(executions)
        self.inputs = inputs or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, operation: str, *args: object) -> None:
        self.calls.append((operation, args))
        count = sum(1 for op, _ in self.calls if op == operation)
        error = self.failures.get((operation, count))
        if error is not None:
            raise error

    def calls_to(self, operation: str) -> list[tuple]:
        return [args for op, args in self.calls if op == operation]

    def list_machines(self) -> list[Machine]:
        self._record("list_machines")
        return list(self.machines)

    def list_failed_executions(self, machine_id: str, window: DateWindow) -> list[ExecutionSummary]:
        self._record("list_failed_executions", machine_id, window)
        mine = [execution for execution in self.executions if execution.machine_id == machine_id]
        return filter_executions(mine, window)

    def describe_execution(self, execution_id: str) -> ExecutionDetail:
        self._record("describe_execution", execution_id)
        for execution in self.executions:
            if execution.id == execution_id:
                return ExecutionDetail(
                    **execution.model_dump(),
                    input=self.inputs.get(execution_id, f'{{"replay": "{execution.name}"}}'),
                )
        raise TransportError("describe_execution", f"ExecutionDoesNotExist: {execution_id}")

    def start_execution(self, machine_id: str, input: str) -> str:
        self._record("start_execution", machine_id, input)
        return f"{machine_id.replace(':stateMachine:', ':execution:')}:retry-{len(self.calls_to('start_execution'))}"


class ScriptedOperator:
    """Operator answering from pre-recorded answers and logging every event."""

    def __init__(
        self,
        *,
        choices: Sequence[int] = (),
        selections: Sequence[Sequence[int]] = (),
        timestamps: Sequence[datetime | None] = (),
    ) -> None:
        self._choices = list(choices)
        self._selections = [list(selection) for selection in selections]
        self._timestamps = list(timestamps)
        self.events: list[tuple] = []
        self.reports: list[RetryReport] = []

    def choose(self, prompt: str, options: Sequence[str]) -> int:
        self.events.append(("choose", prompt, list(options)))
        return self._choices.pop(0)

    def choose_many(self, prompt: str, options: Sequence[str]) -> list[int]:
        self.events.append(("choose_many", prompt, list(options)))
        return self._selections.pop(0)

    def ask_timestamp(self, prompt: str) -> datetime | None:
        self.events.append(("ask_timestamp", prompt))
        return self._timestamps.pop(0) if self._timestamps else None

    def notify(self, message: str) -> None:
        self.events.append(("notify", message))

    def retry_started(self, total: int) -> None:
        self.events.append(("retry_started", total))

    def retry_progress(self, position: int, total: int, name: str) -> None:
        self.events.append(("retry_progress", position, total, name))

    def retry_finished(self, report: RetryReport) -> None:
        self.events.append(("retry_finished", report.started_count))
        self.reports.append(report)

    def event_kinds(self) -> list[str]:
        return [event[0] for event in self.events]


@pytest.fixture
def three_failures() -> list[ExecutionSummary]:
    """Executions at 21:00, 22:30 and 23:30 (-03:00) on 1989-09-30."""

    return [
        make_execution("early", datetime(1989, 9, 30, 21, 0, tzinfo=BRT)),
        make_execution("middle", datetime(1989, 9, 30, 22, 30, tzinfo=BRT)),
        make_execution("late", datetime(1989, 9, 30, 23, 30, tzinfo=BRT)),
    ]
