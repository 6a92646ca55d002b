"""Date-range filtering of failed executions.

Pure functions: no I/O and no implicit "now". A missing bound is an open
bound, so an operator who leaves both prompts empty gets every failure.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from core.domain.errors import DateParseError
from core.domain.models import DateWindow, ExecutionSummary

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"
TIMESTAMP_EXAMPLE = "1989-09-30 22:10:32 -03:00"


def parse_operator_timestamp(text: str | None) -> datetime | None:
    """Parse `YYYY-MM-DD HH:MM:SS ±HH:MM` into a UTC datetime.

    Blank input returns `None` (no bound). Anything else that does not match
    raises `DateParseError`; callers re-prompt rather than guessing.
    """

    raw = (text or "").strip()
    if not raw:
        return None
    try:
        parsed = datetime.strptime(raw, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise DateParseError(raw, TIMESTAMP_FORMAT) from exc
    return parsed.astimezone(timezone.utc)


def in_window(started_at: datetime, window: DateWindow) -> bool:
    """Inclusive bound check, both sides optional."""

    ts = started_at.astimezone(timezone.utc)
    if window.start is not None and ts < window.start:
        return False
    if window.end is not None and ts > window.end:
        return False
    return True


def filter_executions(
    executions: Iterable[ExecutionSummary],
    window: DateWindow,
) -> list[ExecutionSummary]:
    """Keep the executions whose start time falls inside `window`, in order."""

    if window.is_open:
        return list(executions)
    return [execution for execution in executions if in_window(execution.started_at, window)]
