"""Interactive operator surface (rich prompts and progress).

Implements `core.interfaces.operator.Operator` for a terminal session:
numbered single-select menus, a pre-checked multi-select checklist, date
prompts that loop until the text parses, and a progress bar for retries.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.prompt import Prompt

from adapters.json_exporter import export_report_json
from cli.ui_components import build_report_table
from core.domain.errors import DateParseError
from core.domain.models import RetryReport
from core.services.date_window import parse_operator_timestamp

SELECT_ALL = "all"
SELECT_NONE = "none"


def parse_selection(text: str, count: int) -> list[int]:
    """Turn checklist input into 0-based indices, in the order typed.

    Accepts `all` (or blank), `none`, and comma separated 1-based numbers or
    ranges such as `1,3-5`. Repeated numbers are kept once.
    """

    raw = text.strip().lower()
    if raw in ("", SELECT_ALL):
        return list(range(count))
    if raw == SELECT_NONE:
        return []

    indices: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            first, _, last = part.partition("-")
            if not first.strip().isdigit() or not last.strip().isdigit():
                raise ValueError(f"invalid range {part!r}")
            lo, hi = int(first), int(last)
            if lo > hi:
                raise ValueError(f"invalid range {part!r}")
            numbers = range(lo, hi + 1)
        elif part.isdigit():
            numbers = range(int(part), int(part) + 1)
        else:
            raise ValueError(f"invalid item {part!r}")

        for number in numbers:
            if number < 1 or number > count:
                raise ValueError(f"item {number} is out of range (1..{count})")
            if number - 1 not in indices:
                indices.append(number - 1)
    return indices


class RichOperator:
    """Terminal operator backed by a rich `Console`."""

    def __init__(self, console: Console | None = None, *, report_path: Path | None = None) -> None:
        self._console = console or Console()
        self._report_path = report_path
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def choose(self, prompt: str, options: Sequence[str]) -> int:
        if not options:
            raise ValueError("nothing to choose from")
        for number, option in enumerate(options, start=1):
            self._console.print(f"  [cyan]{number}.[/cyan] {escape(option)}")
        answer = Prompt.ask(
            prompt,
            console=self._console,
            choices=[str(number) for number in range(1, len(options) + 1)],
            default="1",
            show_choices=False,
        )
        return int(answer) - 1

    def choose_many(self, prompt: str, options: Sequence[str]) -> list[int]:
        for number, option in enumerate(options, start=1):
            self._console.print(f"  [green]\\[x][/green] [cyan]{number}.[/cyan] {escape(option)}")
        while True:
            answer = Prompt.ask(
                f"{prompt} ({SELECT_ALL}, {SELECT_NONE} or e.g. 1,3-5)",
                console=self._console,
                default=SELECT_ALL,
            )
            try:
                return parse_selection(answer, len(options))
            except ValueError as exc:
                self._console.print(f"[red]Invalid selection ({escape(str(exc))}). Please try again![/red]")

    def ask_timestamp(self, prompt: str) -> datetime | None:
        while True:
            answer = Prompt.ask(prompt, console=self._console, default="", show_default=False)
            try:
                return parse_operator_timestamp(answer)
            except DateParseError as exc:
                self._console.print(f"[red]Invalid date ({escape(str(exc))}). Please try again![/red]")

    def notify(self, message: str) -> None:
        self._console.print(f"[yellow]{escape(message)}[/yellow]")

    def retry_started(self, total: int) -> None:
        self._progress = Progress(
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            BarColumn(complete_style="cyan", finished_style="blue"),
            TextColumn("({task.completed} of {task.total})"),
            TextColumn("ID: {task.description}", markup=False),
            console=self._console,
        )
        self._progress.start()
        self._task = self._progress.add_task("", total=total)

    def retry_progress(self, position: int, total: int, name: str) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(self._task, completed=position, total=total, description=name)

    def retry_finished(self, report: RetryReport) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task = None

        if report.outcomes:
            self._console.print(build_report_table(report))
        if self._report_path is not None:
            path = export_report_json(report=report, output_path=self._report_path)
            self._console.print(f"[green]Report saved to:[/green] {escape(str(path))}")
