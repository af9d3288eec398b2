"""Status label → terminal colour."""

from rich.color import ColorSystem
from rich.style import Style

from jit.table import Cell

DONE = Style(color="bright_green", bold=True)
IN_PROGRESS = Style(color="bright_yellow", bold=True)
IN_REVIEW = Style(color="yellow", bold=True)
TODO = Style(color="bright_blue")
BACKLOG = Style(color="blue")
SELECTED = Style(color="cyan")
BLOCKED = Style(color="bright_red", bold=True)
CANCELLED = Style(color="red", bold=True)
DEFAULT = Style(color="white")

# Checked in order against the lowercased label; first hit wins.
STATUS_RULES: list[tuple[tuple[str, ...], Style]] = [
    (("done", "complete", "resolved"), DONE),
    (("progress", "implement", "testing"), IN_PROGRESS),
    (("review",), IN_REVIEW),
    (("todo", "open"), TODO),
    (("backlog",), BACKLOG),
    (("selected",), SELECTED),
    (("block", "impediment"), BLOCKED),
    (("cancel", "won't", "wont"), CANCELLED),
]


def style_for_status(label: str) -> Style:
    lowered = label.lower()
    for keywords, style in STATUS_RULES:
        if any(keyword in lowered for keyword in keywords):
            return style
    return DEFAULT


def styled(text: str, style: Style, color: bool = True) -> Cell:
    """Wrap text in the ANSI codes for style, keeping its unstyled width."""
    plain = Cell.plain(text)
    if not color:
        return plain
    return Cell(style.render(text, color_system=ColorSystem.STANDARD), plain.width)


def colorize(label: str, color: bool = True) -> Cell:
    return styled(label, style_for_status(label), color=color)
