"""Task data model shared by the board, the codec, and the view."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Task:
    """A single to-do entry.

    Immutable; toggling produces a new instance via :meth:`toggled`.
    """

    text: str
    id: str = field(default_factory=new_task_id)
    completed: bool = False

    def toggled(self) -> Task:
        return replace(self, completed=not self.completed)

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "text": self.text, "completed": self.completed}
