"""Serialize and parse the stored task list (a JSON array of task objects)."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from taskboard.tasks.model import Task


class TaskFormatError(ValueError):
    """Raised when a stored value cannot be read back as a task list."""


def dumps_tasks(tasks: Iterable[Task]) -> str:
    """Encode *tasks* as a compact JSON array, preserving order."""
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, separators=(",", ":"))


def _task_from_obj(obj: Any, index: int) -> Task:
    if not isinstance(obj, dict):
        raise TaskFormatError(f"entry {index}: expected an object, got {type(obj).__name__}")

    task_id = obj.get("id")
    text = obj.get("text")
    completed = obj.get("completed", False)

    if not isinstance(task_id, str) or not task_id:
        raise TaskFormatError(f"entry {index}: missing or invalid 'id'")
    if not isinstance(text, str):
        raise TaskFormatError(f"entry {index}: missing or invalid 'text'")
    if not text.strip():
        raise TaskFormatError(f"entry {index}: 'text' is blank")
    if not isinstance(completed, bool):
        raise TaskFormatError(f"entry {index}: 'completed' must be a boolean")

    return Task(id=task_id, text=text, completed=completed)


def loads_tasks(raw: str) -> list[Task]:
    """Parse a stored value into tasks.

    Raises :class:`TaskFormatError` on invalid JSON, a non-list payload,
    a malformed entry, or a repeated id.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise TaskFormatError(f"not valid JSON: {exc.msg} (line {exc.lineno})") from exc

    if not isinstance(data, list):
        raise TaskFormatError(f"expected a list of tasks, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[str] = set()
    for index, obj in enumerate(data):
        task = _task_from_obj(obj, index)
        if task.id in seen:
            raise TaskFormatError(f"entry {index}: duplicate id {task.id!r}")
        seen.add(task.id)
        tasks.append(task)
    return tasks
