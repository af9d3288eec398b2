"""Box-drawn tables whose cells may carry ANSI styling."""

from collections.abc import Sequence
from typing import NamedTuple

from rich.cells import cell_len

from jit.errors import RenderError

CELL_PADDING = 2  # one space each side
SUMMARY_MAX_LEN = 58
ELLIPSIS = "..."


class Cell(NamedTuple):
    """A table cell: what gets printed, and how wide it looks on screen.

    The width is taken from the text before styling; measuring ``styled``
    would count escape sequences as columns.
    """

    styled: str
    width: int

    @classmethod
    def plain(cls, text: str) -> "Cell":
        return cls(text, cell_len(text))


def truncate_with_ellipsis(text: str, max_len: int = SUMMARY_MAX_LEN) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - len(ELLIPSIS)] + ELLIPSIS


def column_widths(rows: Sequence[Sequence[Cell]], min_widths: Sequence[int] = ()) -> list[int]:
    """Return one width per column, wide enough for every cell plus padding."""
    column_count = len(rows[0])
    if len(min_widths) > column_count:
        raise RenderError(f"{len(min_widths)} minimum widths given for {column_count} columns")

    widths = [*min_widths, *[0] * (column_count - len(min_widths))]
    for row in rows:
        if len(row) != column_count:
            raise RenderError(f"Row has {len(row)} cells, expected {column_count}")
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], cell.width + CELL_PADDING)
    return widths


def _border(widths: Sequence[int], left: str, joint: str, right: str) -> str:
    return left + joint.join("─" * w for w in widths) + right


def _row_line(row: Sequence[Cell], widths: Sequence[int]) -> str:
    cells = (f" {cell.styled}{' ' * (width - cell.width - 1)}" for cell, width in zip(row, widths))
    return "│" + "│".join(cells) + "│"


def render_table(
    header: Sequence[str],
    rows: Sequence[Sequence[Cell]],
    min_widths: Sequence[int] = (),
) -> str:
    """Render header + rows as a bordered table and return it without a trailing newline.

    Every row is separated from the next by a rule; widths are computed from all
    rows before anything is drawn.
    """
    if not header:
        raise RenderError("Table needs at least one column")

    table = [[Cell.plain(h) for h in header], *rows]
    widths = column_widths(table, min_widths)

    lines = [_border(widths, "┌", "┬", "┐")]
    for idx, row in enumerate(table):
        lines.append(_row_line(row, widths))
        if idx < len(table) - 1:
            lines.append(_border(widths, "├", "┼", "┤"))
    lines.append(_border(widths, "└", "┴", "┘"))
    return "\n".join(lines)
