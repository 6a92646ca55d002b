from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from typing import Iterator

import pytest
from rich.console import Console

from cli.prompts import RichOperator, parse_selection
from conftest import MACHINE, make_execution
from core.domain.models import RetryOutcome, RetryReport, RetryStatus


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", [0, 1, 2, 3, 4]),
        ("all", [0, 1, 2, 3, 4]),
        (" ALL ", [0, 1, 2, 3, 4]),
        ("none", []),
        ("3", [2]),
        ("3,1", [2, 0]),
        ("1,3-5", [0, 2, 3, 4]),
        ("2,2,1-2", [1, 0]),
    ],
)
def test_parse_selection(text: str, expected: list[int]) -> None:
    assert parse_selection(text, 5) == expected


@pytest.mark.parametrize("text", ["0", "6", "a", "4-2", "1-x", "1,,7"])
def test_parse_selection_rejects_bad_input(text: str) -> None:
    with pytest.raises(ValueError):
        parse_selection(text, 5)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=120)


def _answers(monkeypatch: pytest.MonkeyPatch, *values: str) -> None:
    queue: Iterator[str] = iter(values)
    monkeypatch.setattr("builtins.input", lambda *args: next(queue))


def test_ask_timestamp_reprompts_until_valid(monkeypatch: pytest.MonkeyPatch, console: Console) -> None:
    _answers(monkeypatch, "yesterday", "1989-09-30 22:10:32 -03:00")

    value = RichOperator(console).ask_timestamp("Start Date")

    assert value == datetime(1989, 10, 1, 1, 10, 32, tzinfo=timezone.utc)
    assert "Invalid date" in console.file.getvalue()


def test_ask_timestamp_blank_is_open_bound(monkeypatch: pytest.MonkeyPatch, console: Console) -> None:
    _answers(monkeypatch, "")

    assert RichOperator(console).ask_timestamp("End Date") is None


def test_choose_returns_zero_based_index(monkeypatch: pytest.MonkeyPatch, console: Console) -> None:
    _answers(monkeypatch, "2")

    assert RichOperator(console).choose("Select the Machine:", ["billing", "orders"]) == 1


def test_choose_many_defaults_to_everything(monkeypatch: pytest.MonkeyPatch, console: Console) -> None:
    _answers(monkeypatch, "")

    assert RichOperator(console).choose_many("Select:", ["a", "b", "c"]) == [0, 1, 2]
    assert "[x]" in console.file.getvalue()


def test_choose_many_reprompts_on_bad_selection(monkeypatch: pytest.MonkeyPatch, console: Console) -> None:
    _answers(monkeypatch, "9", "2")

    assert RichOperator(console).choose_many("Select:", ["a", "b"]) == [1]
    assert "Invalid selection" in console.file.getvalue()


def test_retry_finished_prints_table_and_writes_report(tmp_path, console: Console) -> None:
    execution = make_execution("middle", datetime(1989, 10, 1, 1, 30, tzinfo=timezone.utc))
    report = RetryReport(
        machine=MACHINE,
        total_selected=2,
        outcomes=[
            RetryOutcome(position=1, execution=execution, status=RetryStatus.STARTED, new_execution_id="arn:new"),
            RetryOutcome(position=2, execution=execution, status=RetryStatus.FAILED, reason="boom"),
        ],
    )
    output = tmp_path / "reports" / "batch.json"
    operator = RichOperator(console, report_path=output)

    operator.retry_started(2)
    operator.retry_progress(1, 2, "middle")
    operator.retry_finished(report)

    printed = console.file.getvalue()
    assert "STARTED" in printed and "FAILED" in printed
    assert "1 of 2 restarted" in printed
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["started_count"] == 1
    assert payload["is_complete"] is False
    assert payload["outcomes"][1]["reason"] == "boom"
