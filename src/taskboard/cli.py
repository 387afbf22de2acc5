"""taskboard CLI: the interactive board plus one-shot commands.

Installed as the ``taskboard`` console_script; also runs as
``python -m taskboard``.
"""

from __future__ import annotations

import click
from rich.markup import escape

from taskboard import __version__
from taskboard import log as tlog
from taskboard.board import TaskBoard
from taskboard.config import Config
from taskboard.storage import SaveWorker, open_repository
from taskboard.tasks.model import Task
from taskboard.view import render_board

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

QUIT_WORDS = frozenset({"q", "quit", "exit"})
TOGGLE_WORDS = frozenset({"t", "toggle", "done"})
DELETE_WORDS = frozenset({"d", "rm", "del", "delete"})

SESSION_HELP = """\
Commands:
  <text>          Type text into the draft (not saved until 'add')
  add             Add the current draft as a task
  add <text>      Add <text> as a task
  draft <text>    Replace the draft; 'draft' alone clears it
  t <ref>         Toggle completed (ref = row number or id prefix)
  d <ref>         Delete a task
  help            Show this help
  q               Save and quit

Text that starts with a command word followed by a single word, such as
'done laundry', is read as that command; use 'draft' or 'add' for it."""


def _open_board(cfg: Config, *, background: bool) -> TaskBoard:
    repository = open_repository(cfg)
    tlog.debug(f"Store: {cfg.store_path} (key {cfg.storage_key!r})")
    board = TaskBoard(repository, saver=SaveWorker(repository, background=background))
    board.load()
    return board


def _label(task: Task) -> str:
    """Short id for confirmations; the full id with ``-v``."""
    return task.id if tlog.is_verbose() else task.id[:8]


def _resolve_or_fail(board: TaskBoard, ref: str) -> Task:
    task = board.find(ref)
    if task is None:
        raise click.BadParameter(f"No single task matches {ref!r}.", param_hint="REF")
    return task


# ── Interactive session ──────────────────────────────────────────


class Session:
    """Prompt loop that redraws the board whenever it changes."""

    def __init__(self, board: TaskBoard) -> None:
        self.board = board
        self._unsubscribe = board.subscribe(lambda _board: self.draw())

    def draw(self) -> None:
        tlog.console.clear()
        tlog.console.print(render_board(self.board))

    def run(self) -> None:
        self.draw()
        try:
            while True:
                line = click.prompt("", prompt_suffix="> ", default="", show_default=False)
                if line.strip().lower() in QUIT_WORDS:
                    break
                notice = self.handle(line)
                if notice:
                    tlog.console.print(notice)
        except (click.Abort, KeyboardInterrupt, EOFError):
            tlog.console.print()
        finally:
            self._unsubscribe()
            self.board.close()
        tlog.console.print("Goodbye.")

    def handle(self, line: str) -> str | None:
        """Apply one input line. Returns a message to show, if any."""
        stripped = line.strip()
        if not stripped:
            return None

        cmd, _, rest = stripped.partition(" ")
        cmd = cmd.lower()
        rest = rest.strip()

        if cmd in {"help", "?"}:
            return SESSION_HELP
        if cmd == "add":
            if rest:
                self.board.set_draft(rest)
            self.board.add_task()
            return None
        if cmd == "draft":
            self.board.set_draft(rest)
            return None
        if (cmd in TOGGLE_WORDS or cmd in DELETE_WORDS) and len(rest.split()) <= 1:
            if not rest:
                return f"[yellow]Usage: {cmd} <row number or id prefix>[/yellow]"
            task = self.board.find(rest)
            if task is None:
                return f"[yellow]No single task matches {escape(repr(rest))}.[/yellow]"
            if cmd in TOGGLE_WORDS:
                self.board.toggle_completed(task.id)
            else:
                self.board.delete_task(task.id)
            return None

        self.board.set_draft(stripped)
        return None


# ── Command group ────────────────────────────────────────────────


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option("--store", "store_path", default="", help="Storage file (default: $TASKBOARD_STORE or ~/.taskboard/storage.json)")
@click.option("--key", "storage_key", default="", help="Storage key holding the list (default: $TASKBOARD_KEY or 'tasks')")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="taskboard")
@click.pass_context
def main(ctx: click.Context, store_path: str, storage_key: str, verbose: bool) -> None:
    """taskboard: a single-screen to-do list.

    Without a command, opens the interactive board.

    \b
    EXAMPLES:
      taskboard                       # interactive board
      taskboard add Buy milk          # add a task
      taskboard toggle 1              # mark row 1 complete (or undo)
      taskboard rm 3f2a               # delete by id prefix
      taskboard --store ./todo.json list
    """
    tlog.set_verbose(verbose)
    cfg = Config(store_path=store_path, storage_key=storage_key, verbose=verbose)
    ctx.obj = cfg

    if ctx.invoked_subcommand is not None:
        return

    _run_session(cfg)


def _run_session(cfg: Config) -> None:
    board = _open_board(cfg, background=cfg.background_saves)
    Session(board).run()


@main.command()
@click.pass_obj
def run(cfg: Config) -> None:
    """Open the interactive board."""
    _run_session(cfg)


@main.command("list")
@click.pass_obj
def list_cmd(cfg: Config) -> None:
    """Print the board."""
    board = _open_board(cfg, background=False)
    tlog.console.print(render_board(board))


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.pass_obj
def add(cfg: Config, text: tuple[str, ...]) -> None:
    """Add a task with TEXT."""
    board = _open_board(cfg, background=False)
    task = board.add_task(" ".join(text))
    tlog.console.print(render_board(board))
    if task is not None:
        tlog.success(f"Added {_label(task)}")


@main.command()
@click.argument("ref")
@click.pass_obj
def toggle(cfg: Config, ref: str) -> None:
    """Toggle completion of the task at REF (row number or id prefix)."""
    board = _open_board(cfg, background=False)
    task = _resolve_or_fail(board, ref)
    updated = board.toggle_completed(task.id)
    tlog.console.print(render_board(board))
    if updated is not None:
        state = "completed" if updated.completed else "reopened"
        tlog.success(f"Task {_label(updated)} {state}")


@main.command()
@click.argument("ref")
@click.pass_obj
def rm(cfg: Config, ref: str) -> None:
    """Delete the task at REF (row number or id prefix)."""
    board = _open_board(cfg, background=False)
    task = _resolve_or_fail(board, ref)
    board.delete_task(task.id)
    tlog.console.print(render_board(board))
    tlog.success(f"Deleted {_label(task)}")
