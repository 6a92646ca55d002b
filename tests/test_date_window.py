from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import BRT, make_execution
from core.domain.errors import DateParseError
from core.domain.models import DateWindow
from core.services.date_window import (
    filter_executions,
    in_window,
    parse_operator_timestamp,
)


def test_parse_operator_timestamp_normalises_to_utc() -> None:
    parsed = parse_operator_timestamp("1989-09-30 22:10:32 -03:00")

    assert parsed == datetime(1989, 10, 1, 1, 10, 32, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


@pytest.mark.parametrize("text", ["", "   ", None])
def test_parse_operator_timestamp_blank_means_no_bound(text: str | None) -> None:
    assert parse_operator_timestamp(text) is None


@pytest.mark.parametrize(
    "text",
    [
        "1989-09-30",
        "1989-09-30 22:10:32",
        "30/09/1989 22:10:32 -03:00",
        "1989-13-30 22:10:32 -03:00",
        "yesterday",
    ],
)
def test_parse_operator_timestamp_rejects_malformed_text(text: str) -> None:
    with pytest.raises(DateParseError) as excinfo:
        parse_operator_timestamp(text)

    assert excinfo.value.text == text.strip()
    assert isinstance(excinfo.value, ValueError)


def test_window_scenario_keeps_only_the_middle_execution(three_failures) -> None:
    window = DateWindow(
        start=datetime(1989, 9, 30, 22, 10, 32, tzinfo=BRT),
        end=datetime(1989, 9, 30, 23, 15, 0, tzinfo=BRT),
    )

    kept = filter_executions(three_failures, window)

    assert [execution.name for execution in kept] == ["middle"]


def test_open_window_keeps_everything_in_order(three_failures) -> None:
    assert filter_executions(three_failures, DateWindow()) == three_failures


def test_start_only_is_inclusive(three_failures) -> None:
    window = DateWindow(start=datetime(1989, 9, 30, 22, 30, tzinfo=BRT))

    kept = filter_executions(three_failures, window)

    assert [execution.name for execution in kept] == ["middle", "late"]


def test_end_only_is_inclusive(three_failures) -> None:
    window = DateWindow(end=datetime(1989, 9, 30, 22, 30, tzinfo=BRT))

    kept = filter_executions(three_failures, window)

    assert [execution.name for execution in kept] == ["early", "middle"]


def test_missing_bound_is_never_now() -> None:
    future = make_execution("future", datetime.now(timezone.utc) + timedelta(days=365))
    window = DateWindow(start=datetime(2000, 1, 1, tzinfo=timezone.utc))

    assert filter_executions([future], window) == [future]


def test_inverted_window_is_empty_not_an_error(three_failures) -> None:
    window = DateWindow(
        start=datetime(1989, 9, 30, 23, 59, tzinfo=BRT),
        end=datetime(1989, 9, 30, 20, 0, tzinfo=BRT),
    )

    assert filter_executions(three_failures, window) == []


def test_bounds_in_other_offsets_compare_in_utc(three_failures) -> None:
    # 22:30 -03:00 is 01:30 UTC on the next day.
    window = DateWindow(
        start=datetime(1989, 10, 1, 1, 30, tzinfo=timezone.utc),
        end=datetime(1989, 10, 1, 3, 30, tzinfo=timezone(timedelta(hours=2))),
    )

    assert [execution.name for execution in filter_executions(three_failures, window)] == ["middle"]


def test_filter_matches_predicate_for_every_window(three_failures) -> None:
    instants = [None] + [execution.started_at for execution in three_failures]
    for start in instants:
        for end in instants:
            window = DateWindow(start=start, end=end)
            expected = [
                execution
                for execution in three_failures
                if (start is None or start <= execution.started_at)
                and (end is None or execution.started_at <= end)
            ]
            assert filter_executions(three_failures, window) == expected
            assert all(in_window(execution.started_at, window) for execution in expected)


def test_naive_bounds_are_rejected() -> None:
    with pytest.raises(ValueError):
        DateWindow(start=datetime(1989, 9, 30, 22, 0))
