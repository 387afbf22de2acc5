"""Rendering of the board with Rich: draft line, task rows, and counters."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from taskboard.board import TaskBoard
from taskboard.tasks.model import Task

TITLE = "Task Board"

ROW_PALETTE: tuple[str, ...] = (
    "#EAD1DC",
    "#C6E2E9",
    "#D1E8D1",
    "#FFFACD",
    "#D1D1E8",
    "#FFD1DC",
    "#BFD8D2",
)

DONE_MARK = "●"
OPEN_MARK = "○"
DELETE_MARK = "✕"


@dataclass(frozen=True)
class TaskRow:
    position: int
    task: Task
    color: str

    @property
    def number(self) -> int:
        return self.position + 1


def row_color(position: int) -> str:
    """Background for the row at *position*; cycles through the palette."""
    return ROW_PALETTE[position % len(ROW_PALETTE)]


def build_rows(tasks: Sequence[Task]) -> list[TaskRow]:
    return [TaskRow(position=i, task=t, color=row_color(i)) for i, t in enumerate(tasks)]


def _draft_line(draft: str) -> Text:
    line = Text("> ", style="bold")
    if draft:
        line.append(draft)
    else:
        line.append("Enter a task", style="dim italic")
    return line


def _task_table(rows: Sequence[TaskRow]) -> Table:
    table = Table(show_header=False, show_edge=False, box=None, expand=True, pad_edge=False)
    table.add_column("#", justify="right", width=3, no_wrap=True)
    table.add_column("done", width=1, no_wrap=True)
    table.add_column("text", ratio=1)
    table.add_column("delete", width=1, no_wrap=True)

    for row in rows:
        mark = Text(DONE_MARK if row.task.completed else OPEN_MARK, style="bold green")
        label = Text(row.task.text, style="strike" if row.task.completed else "")
        table.add_row(
            Text(f"{row.number}."),
            mark,
            label,
            Text(DELETE_MARK, style="bold red"),
            style=f"black on {row.color}",
        )
    return table


def render_counters(board: TaskBoard) -> Text:
    text = Text()
    text.append(f"Total tasks: {board.total_count}\n")
    text.append(f"Completed tasks: {board.completed_count}")
    return text


def render_board(board: TaskBoard) -> RenderableType:
    """Build the full screen for *board*."""
    parts: list[RenderableType] = [
        Text(TITLE, style="bold #4B0082", justify="center"),
        _draft_line(board.draft),
        Text(""),
    ]
    rows = build_rows(board.tasks)
    if rows:
        parts.append(_task_table(rows))
    else:
        parts.append(Text("(no tasks yet)", style="dim"))
    parts.append(Text(""))
    parts.append(render_counters(board))
    return Group(*parts)
