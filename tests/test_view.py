"""Tests for taskboard.view: row palette, rows, and rendered text."""

from __future__ import annotations

import io

from rich.console import Console

from taskboard.view import (
    DELETE_MARK,
    DONE_MARK,
    OPEN_MARK,
    ROW_PALETTE,
    build_rows,
    render_board,
    row_color,
)


def _render_text(board) -> str:
    console = Console(record=True, width=80, file=io.StringIO())
    console.print(render_board(board))
    return console.export_text()


def test_palette_has_seven_colors():
    assert len(ROW_PALETTE) == 7
    assert len(set(ROW_PALETTE)) == 7


def test_row_color_cycles():
    assert [row_color(i) for i in range(7)] == list(ROW_PALETTE)
    assert row_color(7) == ROW_PALETTE[0]
    assert row_color(15) == ROW_PALETTE[1]


def test_build_rows_numbers_and_colors(make_task):
    tasks = [make_task(str(i)) for i in range(9)]
    rows = build_rows(tasks)

    assert [r.number for r in rows] == list(range(1, 10))
    assert [r.task for r in rows] == tasks
    assert rows[8].color == ROW_PALETTE[1]


def test_colors_shift_after_delete(board):
    a = board.add_task("A")
    b = board.add_task("B")
    assert build_rows(board.tasks)[1].color == ROW_PALETTE[1]

    board.delete_task(a.id)

    rows = build_rows(board.tasks)
    assert rows[0].task == b
    assert rows[0].color == ROW_PALETTE[0]


def test_render_empty_board(board):
    text = _render_text(board)
    assert "Task Board" in text
    assert "(no tasks yet)" in text
    assert "Enter a task" in text
    assert "Total tasks: 0" in text
    assert "Completed tasks: 0" in text


def test_render_rows_and_counters(board):
    board.add_task("Buy milk")
    done = board.add_task("Walk dog")
    board.toggle_completed(done.id)

    text = _render_text(board)

    assert "1." in text and "Buy milk" in text
    assert "2." in text and "Walk dog" in text
    assert OPEN_MARK in text
    assert DONE_MARK in text
    assert text.count(DELETE_MARK) == 2
    assert "Total tasks: 2" in text
    assert "Completed tasks: 1" in text


def test_render_shows_draft(board):
    board.set_draft("half-typed")
    text = _render_text(board)
    assert "> half-typed" in text
    assert "Enter a task" not in text


def test_task_text_is_not_markup(board):
    board.add_task("[bold]literal[/bold]")
    assert "[bold]literal[/bold]" in _render_text(board)
