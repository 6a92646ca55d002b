"""CLI UI components (rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets the menu, the retry command and the doctor reuse tables/panels.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import RetryReport, RetryStatus


def print_banner(console: Console) -> None:
    """Print the welcome banner (interactive mode only)."""

    title = Text("paw", style="bold cyan")
    subtitle = Text("Step Functions remediation • Retry failed executions", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_report_table(report: RetryReport) -> Table:
    """Table of per-execution outcomes for one retry batch."""

    title = "Retry report"
    if report.machine is not None:
        title = f"Retry report: {escape(report.machine.name)}"

    table = Table(title=title, caption=f"{report.started_count} of {report.total_selected} restarted")
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Execution", style="white")
    table.add_column("Started at", style="dim")
    table.add_column("Status", no_wrap=True)
    table.add_column("Details", style="magenta")

    for outcome in report.outcomes:
        if outcome.status is RetryStatus.STARTED:
            status = "[green]STARTED[/green]"
            details = outcome.new_execution_id or ""
        else:
            status = "[red]FAILED[/red]"
            details = outcome.reason or ""
        table.add_row(
            f"{outcome.position}/{report.total_selected}",
            escape(outcome.execution.name),
            outcome.execution.started_at.isoformat(sep=" "),
            status,
            escape(details),
        )
    return table
