"""Console logging for taskboard, rendered with Rich."""

from __future__ import annotations

from rich.console import Console

console = Console(highlight=False)
err_console = Console(highlight=False, stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    return _verbose


def success(msg: str) -> None:
    console.print(f"[green]\\[ok][/green] {msg}")


def warn(msg: str) -> None:
    err_console.print(f"[yellow]\\[warn][/yellow] {msg}")


def error(msg: str) -> None:
    err_console.print(f"[red]\\[error][/red] {msg}")


def debug(msg: str) -> None:
    if _verbose:
        err_console.print(f"[dim]\\[debug] {msg}[/dim]")
