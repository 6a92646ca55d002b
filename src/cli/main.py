"""paw command-line entry point (typer).

- `paw` with no command shows the action menu.
- `paw retry` runs the retry action directly; flags replace prompts.
- `paw doctor` diagnoses the AWS setup.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.step_functions import StepFunctionsClient
from cli import doctor
from cli.prompts import RichOperator
from cli.ui_components import print_banner
from core.actions import RetryFailedExecutions, RetryOptions, get_actions
from core.config import LOG_LEVELS, AppSettings
from core.domain.errors import DateParseError, PawError
from core.domain.models import DateWindow
from core.interfaces.action import RemediationAction
from core.interfaces.workflow_client import WorkflowClient
from core.log import configure_logging
from core.services.date_window import TIMESTAMP_EXAMPLE, parse_operator_timestamp

app = typer.Typer(
    help="Find failed Step Functions executions and start them again with their original input.",
    invoke_without_command=True,
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_workflow_client(settings: AppSettings) -> WorkflowClient:
    return StepFunctionsClient.from_settings(settings)


def _settings(ctx: typer.Context) -> AppSettings:
    if isinstance(ctx.obj, AppSettings):
        return ctx.obj
    return AppSettings()


def _log_level_option(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"expected one of {', '.join(LOG_LEVELS)}")
    return level


def _parse_bound(value: Optional[str], option: str) -> Optional[datetime]:
    try:
        return parse_operator_timestamp(value)
    except DateParseError as exc:
        raise typer.BadParameter(f"{exc} (ex. {TIMESTAMP_EXAMPLE})", param_hint=option) from exc


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except PawError as exc:
        _console.print(f"[red]Error on processing action:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def run_action(action: RemediationAction) -> None:
    """Execute `action` and print the outcome."""

    with _reporting_errors():
        action.execute()
    _console.print("[green]Success[/green]")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        callback=_log_level_option,
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default: PAW_LOG_LEVEL or WARNING).",
    ),
) -> None:
    """Step Functions remediation toolkit."""

    settings = AppSettings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is not None:
        return

    print_banner(_console)
    operator = RichOperator(_console)
    with _reporting_errors():
        client = build_workflow_client(settings)
    actions = get_actions(client=client, operator=operator)
    selected = operator.choose("Select the Action:", [action.name() for action in actions])
    run_action(actions[selected])


@app.command()
def retry(
    ctx: typer.Context,
    machine: Optional[str] = typer.Option(
        None,
        "--machine",
        "-m",
        help="State machine name or ARN (skips the machine menu).",
    ),
    start: Optional[str] = typer.Option(
        None,
        "--start",
        help=f"Inclusive lower bound, e.g. '{TIMESTAMP_EXAMPLE}'.",
    ),
    end: Optional[str] = typer.Option(
        None,
        "--end",
        help=f"Inclusive upper bound, e.g. '{TIMESTAMP_EXAMPLE}'.",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Retry every listed execution without showing the checklist.",
    ),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        help="Write the batch report as JSON to this path.",
    ),
) -> None:
    """Retry failed executions of one state machine."""

    settings = _settings(ctx)
    lower = _parse_bound(start, "--start")
    upper = _parse_bound(end, "--end")
    window = None
    if lower is not None or upper is not None:
        window = DateWindow(start=lower, end=upper)

    with _reporting_errors():
        client = build_workflow_client(settings)
    action = RetryFailedExecutions(
        client,
        RichOperator(_console, report_path=report),
        RetryOptions(machine_name=machine, window=window, assume_yes=yes),
    )
    run_action(action)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
