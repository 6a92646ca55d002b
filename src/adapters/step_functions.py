"""AWS Step Functions adapter (boto3).

Implements `core.interfaces.workflow_client.WorkflowClient`:
- hides `ListExecutions` pagination behind a fully drained list;
- maps boto3 response dicts onto domain models (UTC timestamps);
- raises every SDK failure as `TransportError`, chained to the original.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.config import MAX_PAGE_SIZE, AppSettings
from core.domain.errors import TransportError
from core.domain.models import DateWindow, ExecutionDetail, ExecutionSummary, Machine
from core.interfaces.workflow_client import WorkflowClient
from core.services.date_window import filter_executions

logger = logging.getLogger(__name__)

FAILED_STATUS = "FAILED"


def build_sfn_client(settings: AppSettings | None = None) -> Any:
    """Create a boto3 `stepfunctions` client with the configured defaults.

    Built once per run and shared by every call.
    """

    settings = settings or AppSettings()
    try:
        session = boto3.Session(
            profile_name=settings.aws_profile,
            region_name=settings.aws_region,
        )
        return session.client(
            "stepfunctions",
            endpoint_url=settings.endpoint_url,
            config=Config(
                connect_timeout=settings.connect_timeout_seconds,
                read_timeout=settings.read_timeout_seconds,
            ),
        )
    except BotoCoreError as exc:
        # Unknown profile, missing region.
        raise TransportError("create_client", str(exc)) from exc


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _client_error_message(exc: ClientError) -> str:
    error = exc.response.get("Error", {})
    code = error.get("Code")
    message = error.get("Message") or str(exc)
    return f"{code}: {message}" if code else message


class StepFunctionsClient(WorkflowClient):
    """Step Functions implementation of the workflow-service contract."""

    def __init__(self, sfn: Any, *, page_size: int = MAX_PAGE_SIZE) -> None:
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        self._sfn = sfn
        self._page_size = page_size

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "StepFunctionsClient":
        settings = settings or AppSettings()
        return cls(build_sfn_client(settings), page_size=settings.page_size)

    def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        try:
            return getattr(self._sfn, operation)(**params)
        except ClientError as exc:
            raise TransportError(operation, _client_error_message(exc)) from exc
        except BotoCoreError as exc:
            raise TransportError(operation, str(exc)) from exc

    def list_machines(self) -> list[Machine]:
        response = self._call("list_state_machines")
        return [
            Machine(id=item["stateMachineArn"], name=item["name"])
            for item in response.get("stateMachines", [])
        ]

    def list_failed_executions(self, machine_id: str, window: DateWindow) -> list[ExecutionSummary]:
        executions: list[ExecutionSummary] = []
        token: str | None = None
        page = 0

        while True:
            params: dict[str, Any] = {
                "stateMachineArn": machine_id,
                "statusFilter": FAILED_STATUS,
                "maxResults": self._page_size,
            }
            if token:
                params["nextToken"] = token

            response = self._call("list_executions", **params)
            page += 1

            items = [self._to_summary(item) for item in response.get("executions", [])]
            kept = filter_executions(items, window)
            logger.debug("Page %d: %d failed executions, %d inside window", page, len(items), len(kept))
            executions.extend(kept)

            token = response.get("nextToken")
            if not token:
                break

        return executions

    def describe_execution(self, execution_id: str) -> ExecutionDetail:
        response = self._call("describe_execution", executionArn=execution_id)
        return ExecutionDetail(
            id=response["executionArn"],
            machine_id=response["stateMachineArn"],
            name=response.get("name") or response["executionArn"].rsplit(":", 1)[-1],
            started_at=_utc(response["startDate"]),
            input=response.get("input"),
            output=response.get("output"),
        )

    def start_execution(self, machine_id: str, input: str) -> str:
        response = self._call("start_execution", stateMachineArn=machine_id, input=input)
        return response["executionArn"]

    @staticmethod
    def _to_summary(item: dict[str, Any]) -> ExecutionSummary:
        return ExecutionSummary(
            id=item["executionArn"],
            machine_id=item["stateMachineArn"],
            name=item["name"],
            started_at=_utc(item["startDate"]),
        )
