"""Contract of the remote workflow service.

Why Protocol:
- Structural contract: the boto3 adapter and the in-memory fakes used in
  tests are interchangeable without inheritance.
- Pagination is an adapter concern; callers always receive full lists.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import DateWindow, ExecutionDetail, ExecutionSummary, Machine


@runtime_checkable
class WorkflowClient(Protocol):
    """Minimal set of workflow-service calls needed to replay failures.

    Every method raises `core.domain.errors.TransportError` when the remote
    call fails.
    """

    def list_machines(self) -> list[Machine]:
        ...

    def list_failed_executions(self, machine_id: str, window: DateWindow) -> list[ExecutionSummary]:
        """Drain every page of failed executions, keeping those inside `window`."""

        ...

    def describe_execution(self, execution_id: str) -> ExecutionDetail:
        ...

    def start_execution(self, machine_id: str, input: str) -> str:
        """Start a new execution and return its id."""

        ...
