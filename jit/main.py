"""jit CLI — all commands."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from jit.client import JiraClient
from jit.errors import JitError
from jit.identifiers import resolve_identifier
from jit.presenter import render_brief, render_detailed, render_json, render_sprint_table, render_text
from jit.settings import CONFIG_PATH, get_settings

app = typer.Typer(help="jit: look up Jira tickets from the terminal", no_args_is_help=True)

ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Profile name from ~/.config/jit/config.toml"),
]
EnvFileOpt = Annotated[
    Path | None,
    typer.Option("--env-file", help="Path to a custom .env file"),
]
NoColorOpt = Annotated[bool, typer.Option("--no-color", help="Disable colored output")]
TicketArg = Annotated[
    str,
    typer.Argument(help="Jira issue key (e.g. RW-1931) or URL (e.g. https://company.atlassian.net/browse/RW-1931)"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# ---------------------------------------------------------------------------
# Client factory
# ---------------------------------------------------------------------------


def _use_color(no_color: bool) -> bool:
    """Honour --no-color and the NO_COLOR convention (rich reads NO_COLOR for us)."""
    return not (no_color or Console().no_color)


def get_client(profile: str | None = None, env_file: Path | None = None) -> JiraClient:
    return JiraClient(get_settings(profile=profile, env_file=env_file))


@contextmanager
def _exit_on_error() -> Iterator[None]:
    try:
        yield
    except JitError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1) from exc


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("get")
def get_ticket(
    ticket: TicketArg,
    as_json: Annotated[bool, typer.Option("--json", help="Output in JSON format")] = False,
    as_text: Annotated[bool, typer.Option("--text", help='Output as plain text in format "KEY: Summary"')] = False,
    profile: ProfileOpt = None,
    env_file: EnvFileOpt = None,
) -> None:
    """Print the key and summary of a ticket."""
    with _exit_on_error():
        key = resolve_identifier(ticket)
        issue = get_client(profile, env_file).get_issue(key)

    if as_json:
        typer.echo(render_json(issue))
    elif as_text:
        typer.echo(render_text(issue))
    else:
        typer.echo(render_brief(issue))


@app.command("show")
def show_ticket(
    ticket: TicketArg,
    no_color: NoColorOpt = False,
    profile: ProfileOpt = None,
    env_file: EnvFileOpt = None,
) -> None:
    """Show detailed information about a ticket."""
    with _exit_on_error():
        key = resolve_identifier(ticket)
        issue = get_client(profile, env_file).get_issue(key)
        rendered = render_detailed(issue, color=_use_color(no_color))

    typer.echo(rendered)


@app.command("my-tickets")
def my_tickets(
    limit: Annotated[int, typer.Option("--limit", "-n", min=1, help="Maximum number of tickets to retrieve")] = 10,
    no_color: NoColorOpt = False,
    profile: ProfileOpt = None,
    env_file: EnvFileOpt = None,
) -> None:
    """List my tickets in the active sprint."""
    with _exit_on_error():
        issues = get_client(profile, env_file).search_my_active_sprint_issues(limit)
        rendered = render_sprint_table(issues, color=_use_color(no_color))

    typer.echo(rendered)


@app.command("config-show")
def config_show(profile: ProfileOpt = None, env_file: EnvFileOpt = None) -> None:
    """Show resolved configuration (masks credentials)."""
    with _exit_on_error():
        settings = get_settings(profile=profile, env_file=env_file)

    def mask(val: str) -> str:
        if len(val) <= 5:
            return "***"
        return f"...{val[-5:]}"

    table = Table(title="jit Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("config_file", str(CONFIG_PATH))
    table.add_row("base_url", settings.base_url)
    table.add_row("user_email", settings.user_email)
    table.add_row("api_token", mask(settings.api_token.get_secret_value()))  # type: ignore[union-attr]
    table.add_row("sprint_field", settings.sprint_field)

    rprint(table)
