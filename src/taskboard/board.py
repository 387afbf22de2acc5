"""The task board: in-memory task list, draft input, and mutations.

Every successful mutation hands a snapshot of the full list to the save
worker. Invalid input and unknown ids are no-ops and save nothing.
"""

from __future__ import annotations

from collections.abc import Callable

from taskboard import log
from taskboard.storage import SaveWorker, TaskRepository
from taskboard.tasks.model import Task

Listener = Callable[["TaskBoard"], None]


class TaskBoard:
    """State container for one to-do list.

    Usage::

        board = TaskBoard(repository)
        board.load()                    # once, at startup
        board.set_draft("Buy milk")
        board.add_task()                # appends, clears draft, saves
        board.toggle_completed(tid)     # flips completed, saves
        board.delete_task(tid)          # removes, saves
    """

    def __init__(
        self,
        repository: TaskRepository,
        *,
        saver: SaveWorker | None = None,
        background: bool = False,
    ) -> None:
        self._repository = repository
        self._saver = saver or SaveWorker(repository, background=background)
        self._tasks: list[Task] = []
        self._draft = ""
        self._loaded = False
        self._listeners: list[Listener] = []

    # ── state queries ────────────────────────────────────────────

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def total_count(self) -> int:
        return len(self._tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.completed)

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def find(self, ref: str) -> Task | None:
        """Resolve a 1-based row number or a unique id prefix to a task."""
        ref = ref.strip().rstrip(".")
        if not ref:
            return None
        if ref.isascii() and ref.isdecimal():
            position = int(ref) - 1
            if 0 <= position < len(self._tasks):
                return self._tasks[position]
            return None
        matches = [t for t in self._tasks if t.id.startswith(ref.lower())]
        if len(matches) == 1:
            return matches[0]
        return None

    # ── lifecycle ────────────────────────────────────────────────

    def load(self) -> None:
        """Replace the list with the stored one. Only the first call reads storage."""
        if self._loaded:
            log.debug("Board already loaded; ignoring second load")
            return
        self._loaded = True
        stored = self._repository.load()
        if stored:
            self._tasks = stored
            self._persist()
        self._notify()

    def flush(self) -> None:
        self._saver.flush()

    def close(self) -> None:
        self._saver.close()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ── intents ──────────────────────────────────────────────────

    def set_draft(self, text: str) -> None:
        self._draft = text
        self._notify()

    def add_task(self, text: str | None = None) -> Task | None:
        """Append a task built from *text* (or the draft).

        Input that is empty after trimming is ignored without any message.
        """
        raw = self._draft if text is None else text
        cleaned = raw.strip()
        if not cleaned:
            return None

        task = Task(text=cleaned)
        while self.get_task(task.id) is not None:
            task = Task(text=cleaned)
        self._tasks.append(task)
        self._draft = ""
        self._persist()
        self._notify()
        return task

    def toggle_completed(self, task_id: str) -> Task | None:
        for idx, t in enumerate(self._tasks):
            if t.id == task_id:
                updated = t.toggled()
                self._tasks[idx] = updated
                self._persist()
                self._notify()
                return updated
        return None

    def delete_task(self, task_id: str) -> Task | None:
        for idx, t in enumerate(self._tasks):
            if t.id == task_id:
                del self._tasks[idx]
                self._persist()
                self._notify()
                return t
        return None

    # ── internals ────────────────────────────────────────────────

    def _persist(self) -> None:
        self._saver.submit(self._tasks)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def __str__(self) -> str:
        return f"Tasks: {self.total_count}, completed: {self.completed_count}"
