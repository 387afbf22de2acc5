"""Shared fixtures for taskboard tests.

Storage in tests:
- Use MemoryStore for board/repository behaviour so tests never touch disk.
- Use tmp_path for anything file-backed (FileStore, CLI --store).
"""

from __future__ import annotations

from pathlib import Path

import pytest

from taskboard import log
from taskboard.board import TaskBoard
from taskboard.storage import TaskRepository
from taskboard.tasks.io import dumps_tasks
from taskboard.tasks.model import Task

from .fakes import RecordingStore


def _make_task(text: str = "Task", completed: bool = False, id: str | None = None) -> Task:
    if id is None:
        return Task(text=text, completed=completed)
    return Task(text=text, completed=completed, id=id)


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def repository(store: RecordingStore) -> TaskRepository:
    return TaskRepository(store)


@pytest.fixture
def board(repository: TaskRepository) -> TaskBoard:
    """A loaded board over an empty in-memory store, saving synchronously."""
    b = TaskBoard(repository)
    b.load()
    return b


@pytest.fixture
def seeded_board():
    """Factory: a loaded board whose store already holds *tasks*."""

    def _seed(tasks: list[Task]) -> TaskBoard:
        store = RecordingStore({"tasks": dumps_tasks(tasks)})
        b = TaskBoard(TaskRepository(store))
        b.load()
        return b

    return _seed


@pytest.fixture
def log_calls(monkeypatch: pytest.MonkeyPatch) -> dict[str, list[str]]:
    """Capture taskboard.log.error / warn messages."""
    calls: dict[str, list[str]] = {"error": [], "warn": []}
    monkeypatch.setattr(log, "error", calls["error"].append)
    monkeypatch.setattr(log, "warn", calls["warn"].append)
    return calls


@pytest.fixture
def store_file(tmp_path: Path) -> Path:
    return tmp_path / "storage.json"
