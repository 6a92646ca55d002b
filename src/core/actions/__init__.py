"""Remediation actions offered by the entry point.

Adding an action means appending it to `get_actions`; the entry point only
shows this catalog as a menu and calls `execute()` on the chosen entry.
"""

from __future__ import annotations

from core.actions.retry_failed import RetryFailedExecutions, RetryOptions
from core.interfaces.action import RemediationAction
from core.interfaces.operator import Operator
from core.interfaces.workflow_client import WorkflowClient


def get_actions(
    *,
    client: WorkflowClient,
    operator: Operator,
    retry_options: RetryOptions | None = None,
) -> list[RemediationAction]:
    """Build the ordered action catalog once per run."""

    return [
        RetryFailedExecutions(client, operator, retry_options),
    ]


__all__ = [
    "RetryFailedExecutions",
    "RetryOptions",
    "get_actions",
]
