"""Persistence: key-value stores, the task repository, and the save worker.

The whole task list lives in one string slot of a key-value store. It is
read once at startup and rewritten in full after every change.
"""

from __future__ import annotations

import json
import os
import queue
import tempfile
import threading
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from taskboard import log
from taskboard.config import DEFAULT_STORAGE_KEY, Config
from taskboard.tasks.io import TaskFormatError, dumps_tasks, loads_tasks
from taskboard.tasks.model import Task


class KeyValueStore(Protocol):
    """String-keyed slots holding string values."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing outlives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value


class FileStore:
    """A single UTF-8 JSON object file mapping keys to string values.

    Writes go to a temporary sibling first and are moved into place with
    ``os.replace`` so a crash never leaves a half-written file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.is_file():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not hold a JSON object")
        return data

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(f"value under {key!r} in {self._path} is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError as exc:
            log.warn(f"Replacing unreadable store {self._path}: {exc}")
            data = {}
        data[key] = value
        self._write_atomic(json.dumps(data, ensure_ascii=False, indent=2) + "\n")

    def _write_atomic(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class TaskRepository:
    """Reads and writes the full task list under one storage key.

    Neither method raises for storage or format problems: failures are
    logged and the caller keeps going with what it has in memory.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Task]:
        try:
            raw = self._store.get_item(self._key)
        except (OSError, ValueError) as exc:
            log.error(f"Could not read stored tasks: {exc}")
            return []

        if raw is None:
            log.debug(f"No stored tasks under {self._key!r}")
            return []

        try:
            tasks = loads_tasks(raw)
        except TaskFormatError as exc:
            log.error(f"Stored tasks under {self._key!r} are malformed, starting empty: {exc}")
            return []

        log.debug(f"Loaded {len(tasks)} task(s) from {self._key!r}")
        return tasks

    def save(self, tasks: Iterable[Task]) -> bool:
        """Overwrite the slot with *tasks*. Returns ``False`` if the write failed."""
        tasks = list(tasks)
        raw = dumps_tasks(tasks)
        try:
            self._store.set_item(self._key, raw)
        except (OSError, ValueError) as exc:
            log.error(f"Could not save tasks: {exc}")
            return False
        log.debug(f"Saved {len(tasks)} task(s) to {self._key!r}")
        return True


class SaveWorker:
    """Hands task-list snapshots to the repository.

    In background mode a single daemon thread drains a FIFO queue, so writes
    land in submission order and the main thread never waits on storage.
    Each snapshot carries a sequence number; the worker skips a snapshot when
    a newer one has already been submitted, which means the most recently
    submitted list is always the one left in storage.

    With ``background=False`` every snapshot is written inline.
    """

    def __init__(self, repository: TaskRepository, *, background: bool = True) -> None:
        self._repository = repository
        self._background = background

        self._queue: queue.Queue[tuple[int, tuple[Task, ...]] | None] | None = None
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()
        self._seq = 0
        self._closed = False

    @property
    def background(self) -> bool:
        return self._background

    def submit(self, tasks: Sequence[Task]) -> None:
        snapshot = tuple(tasks)
        if not self._background or self._closed:
            self._repository.save(snapshot)
            return

        self._ensure_worker()
        assert self._queue is not None
        with self._lock:
            self._seq += 1
            seq = self._seq
        self._queue.put((seq, snapshot))

    def flush(self) -> None:
        """Block until every submitted snapshot has been handled."""
        if self._queue is not None:
            self._queue.join()

    def close(self) -> None:
        """Flush pending writes and stop the worker thread."""
        if self._closed:
            return
        self._closed = True
        if self._queue is None or self._worker is None:
            return
        self._queue.join()
        self._queue.put(None)
        self._worker.join()
        log.debug("Save worker stopped")

    def _latest_seq(self) -> int:
        with self._lock:
            return self._seq

    def _ensure_worker(self) -> None:
        if self._worker is not None:
            return
        self._queue = queue.Queue()
        self._worker = threading.Thread(target=self._run, name="taskboard-save", daemon=True)
        self._worker.start()

    def _run(self) -> None:
        assert self._queue is not None
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    return
                seq, snapshot = item
                if seq < self._latest_seq():
                    log.debug(f"Skipping stale snapshot #{seq}")
                    continue
                self._repository.save(snapshot)
            except Exception as exc:
                log.error(f"Save worker failed: {exc!r}")
            finally:
                self._queue.task_done()


def open_repository(cfg: Config) -> TaskRepository:
    """Build the file-backed repository described by *cfg*."""
    return TaskRepository(FileStore(cfg.store_path), cfg.storage_key)
