"""Output modes for a fetched issue (or a list of them)."""

import json
from collections.abc import Sequence

from rich.style import Style

from jit.document import extract_plain_text
from jit.models import Issue, Sprint
from jit.status import colorize, styled
from jit.table import Cell, render_table, truncate_with_ellipsis

BOLD = Style(bold=True)

NOT_SET = "Not set"
NO_DESCRIPTION = "No description provided."
NO_TICKETS = "No tickets found in the current sprint."

LABEL_WIDTH = 12
VALUE_WIDTH = 18
KEY_MIN_WIDTH = 20


def format_date(value: str | None) -> str:
    """Jira timestamps look like 2023-09-15T14:53:37.123+0000; keep the date part."""
    if not value:
        return NOT_SET
    return value.split("T", 1)[0]


def active_sprint_name(sprints: Sequence[Sprint]) -> str | None:
    for sprint in sprints:
        if sprint.state == "active":
            return sprint.name
    return None


def sprint_banner_name(sprints: Sequence[Sprint]) -> str:
    """Active sprint, else the first one listed, else a placeholder."""
    name = active_sprint_name(sprints)
    if name is not None:
        return name
    if sprints:
        return sprints[0].name
    return "Unknown Sprint"


def render_brief(issue: Issue) -> str:
    return f"Ticket:   {issue.key}\nSummary:  {issue.summary}"


def render_json(issue: Issue) -> str:
    return json.dumps({"ticket": issue.key, "summary": issue.summary}, separators=(",", ":"), ensure_ascii=False)


def render_text(issue: Issue) -> str:
    return f"{issue.key}: {issue.summary}"


def _pad(cell: Cell, width: int) -> str:
    return cell.styled + " " * max(0, width - cell.width)


def _grid_line(*pairs: tuple[str, Cell], color: bool) -> str:
    columns = []
    for label, value in pairs:
        columns.append(_pad(styled(label, BOLD, color=color), LABEL_WIDTH))
        columns.append(_pad(value, VALUE_WIDTH))
    return " ".join(columns)


def render_description(description: object) -> str:
    """Extracted text if there is any, else the raw value as JSON."""
    if description is None:
        return NO_DESCRIPTION
    text = extract_plain_text(description)
    if text:
        return text
    return json.dumps(description, indent=2, ensure_ascii=False)


def render_detailed(issue: Issue, color: bool = True) -> str:
    def bold(text: str) -> str:
        return styled(text, BOLD, color=color).styled

    status = colorize(issue.status or NOT_SET, color=color)
    lines = [
        bold("TICKET DETAILS"),
        "",
        f"{bold(issue.key)}: {bold(issue.summary)}",
        "",
        _grid_line(
            ("Type:", Cell.plain(issue.issue_type or NOT_SET)),
            ("Priority:", Cell.plain(issue.priority or NOT_SET)),
            color=color,
        ),
        _grid_line(
            ("Status:", status),
            ("Sprint:", Cell.plain(active_sprint_name(issue.sprints) or "Not in sprint")),
            color=color,
        ),
        _grid_line(
            ("Assignee:", Cell.plain(issue.assignee or "Unassigned")),
            ("Reporter:", Cell.plain(issue.reporter or "Unknown")),
            color=color,
        ),
        _grid_line(
            ("Created:", Cell.plain(format_date(issue.created))),
            ("Updated:", Cell.plain(format_date(issue.updated))),
            color=color,
        ),
        _grid_line(("Due Date:", Cell.plain(format_date(issue.due_date))), color=color),
        "",
        bold("DESCRIPTION"),
        "",
        render_description(issue.description),
    ]
    return "\n".join(lines)


def render_sprint_table(issues: Sequence[Issue], color: bool = True) -> str:
    """Sprint banner plus a Key / Summary / Status table."""
    if not issues:
        return NO_TICKETS

    rows = [
        [
            Cell.plain(issue.key),
            Cell.plain(truncate_with_ellipsis(issue.summary)),
            colorize(issue.status or "Unknown", color=color),
        ]
        for issue in issues
    ]
    table = render_table(["Key", "Summary", "Status"], rows, min_widths=[KEY_MIN_WIDTH])
    return f"Current Sprint: {sprint_banner_name(issues[0].sprints)}\n\n{table}"
