"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to boto3 response shapes.
- Stable JSON serialisation for the retry report export.

Note:
- These models describe *what* a machine or execution is, not *how* it is
  fetched. All timestamps are timezone-aware and normalised to UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.config import ConfigDict


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    return value.astimezone(timezone.utc)


class Machine(BaseModel):
    """A registered state machine that can be executed many times."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque handle of the machine (state machine ARN).",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Human readable machine name, used for menus.",
    )

    def __str__(self) -> str:
        return self.name


class ExecutionSummary(BaseModel):
    """A failed execution as returned by the listing call (no payloads)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Execution ARN.")
    machine_id: str = Field(..., min_length=1, description="ARN of the owning machine.")
    name: str = Field(..., min_length=1, description="Execution name.")
    started_at: datetime = Field(..., description="Start time of the execution (UTC).")

    @field_validator("started_at")
    @classmethod
    def _normalise_started_at(cls, value: datetime) -> datetime:
        return _to_utc(value)

    def __str__(self) -> str:
        return f"{self.name} : {self.started_at.isoformat(sep=' ')}"


class ExecutionDetail(ExecutionSummary):
    """Full execution description, fetched one at a time.

    The listing call does not return payloads, so retrying needs one describe
    call per selected execution to recover the original `input`.
    """

    input: str | None = Field(
        default=None,
        description="Original input payload (typically serialised JSON).",
    )
    output: str | None = Field(
        default=None,
        description="Output payload, if the execution produced one.",
    )

    def summary(self) -> ExecutionSummary:
        return ExecutionSummary(
            id=self.id,
            machine_id=self.machine_id,
            name=self.name,
            started_at=self.started_at,
        )


class DateWindow(BaseModel):
    """Inclusive start/end bound on execution start time.

    Either side may be open. An inverted window (start after end) is accepted
    and simply matches nothing.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime | None = Field(default=None, description="Inclusive lower bound.")
    end: datetime | None = Field(default=None, description="Inclusive upper bound.")

    @field_validator("start", "end")
    @classmethod
    def _normalise_bounds(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return _to_utc(value)

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def describe(self) -> str:
        start = self.start.isoformat(sep=" ") if self.start else "-inf"
        end = self.end.isoformat(sep=" ") if self.end else "+inf"
        return f"[{start}, {end}]"


class ExecutionCatalog(BaseModel):
    """Failed executions of one machine, materialised for one action run."""

    model_config = ConfigDict(frozen=True)

    machine: Machine
    window: DateWindow = Field(default_factory=DateWindow)
    executions: tuple[ExecutionSummary, ...] = Field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.executions)

    @property
    def is_empty(self) -> bool:
        return not self.executions

    def select(self, indices: Sequence[int]) -> list[ExecutionSummary]:
        """Return the executions at `indices`, in the given order."""

        selected: list[ExecutionSummary] = []
        for index in indices:
            if index < 0 or index >= len(self.executions):
                raise IndexError(f"execution index {index} out of range (0..{len(self.executions) - 1})")
            selected.append(self.executions[index])
        return selected


class RetryStatus(str, Enum):
    """Per-item result of a retry attempt."""

    STARTED = "started"
    FAILED = "failed"


class RetryOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=1, description="1-based position in the batch.")
    execution: ExecutionSummary
    status: RetryStatus
    reason: str | None = Field(default=None, description="Error text when status is FAILED.")
    new_execution_id: str | None = Field(
        default=None,
        description="ARN of the execution started by the retry, when known.",
    )


class RetryReport(BaseModel):
    """Aggregated outcome of one retry batch.

    A batch is fail-fast: at most one outcome is FAILED and it is the last one.
    """

    machine: Machine | None = None
    total_selected: int = Field(default=0, ge=0)
    outcomes: list[RetryOutcome] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def started_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is RetryStatus.STARTED)

    @property
    def failed(self) -> RetryOutcome | None:
        for outcome in self.outcomes:
            if outcome.status is RetryStatus.FAILED:
                return outcome
        return None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_complete(self) -> bool:
        return self.failed is None and self.started_count == self.total_selected
