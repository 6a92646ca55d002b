"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import boto3
import typer
from botocore.exceptions import BotoCoreError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import probe_endpoint, states_endpoint
from adapters.step_functions import StepFunctionsClient, build_sfn_client
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import TransportError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_credentials(settings: AppSettings) -> tuple[bool, str, str | None]:
    """Resolve credentials the way boto3 will. Returns (ok, detail, region)."""

    try:
        session = boto3.Session(profile_name=settings.aws_profile, region_name=settings.aws_region)
    except BotoCoreError as exc:
        return False, str(exc), settings.aws_region

    region = session.region_name
    try:
        credentials = session.get_credentials()
    except BotoCoreError as exc:
        # credential_process, SSO and assume-role failures surface lazily here.
        return False, str(exc), region
    if credentials is None:
        return False, "No credentials found (env, profile, SSO or instance role)", region
    return True, f"Resolved via {credentials.method}", region


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        client = StepFunctionsClient(build_sfn_client(settings), page_size=settings.page_size)
        machines = client.list_machines()
    except TransportError as exc:
        return False, str(exc)
    return True, f"{len(machines)} state machine(s) visible"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="paw Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("AWS profile", "OK", settings.aws_profile or "default chain")
    table.add_row("Page size", "OK", str(settings.page_size))

    ok_creds, detail_creds, region = _check_credentials(settings)
    table.add_row("AWS region", "OK" if region else "FAIL", region or "Not set (PAW_AWS_REGION / AWS_REGION)")
    table.add_row("AWS credentials", "OK" if ok_creds else "FAIL", escape(detail_creds))

    # Connectivity (best-effort)
    endpoint = states_endpoint(settings, region)
    if endpoint:
        ok_http, detail_http = asyncio.run(probe_endpoint(endpoint, settings))
        table.add_row("Endpoint reachable", "OK" if ok_http else "FAIL", escape(f"{endpoint} -> {detail_http}"))
    else:
        ok_http = False
        table.add_row("Endpoint reachable", "SKIPPED", "No region or endpoint configured")

    # API
    if ok_creds and ok_http:
        ok_api, detail_api = _check_api(settings)
        table.add_row("ListStateMachines", "OK" if ok_api else "FAIL", escape(detail_api))
    else:
        table.add_row("ListStateMachines", "SKIPPED", "Fix the checks above first")

    _console.print(table)

    if not region:
        _console.print("\n[yellow]Note:[/yellow] Run `paw doctor setup-aws` to store a default region.")


@app.command(name="setup-aws")
def setup_aws() -> None:
    """Interactive AWS setup (stores region/profile in the user config .env)."""

    settings = AppSettings()

    region = typer.prompt(
        "AWS region",
        default=settings.aws_region or "us-east-1",
        show_default=True,
    ).strip()
    profile = typer.prompt(
        "AWS profile (blank for the default chain)",
        default=settings.aws_profile or "",
        show_default=False,
    ).strip()

    if not region:
        raise typer.BadParameter("region is required")

    env_path = write_user_env_vars(
        {
            "PAW_AWS_REGION": region,
            "PAW_AWS_PROFILE": profile or None,
        }
    )

    _console.print(f"[green]Saved AWS config to:[/green] {env_path}")
