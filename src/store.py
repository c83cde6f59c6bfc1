"""In-memory task state: the ordered task list and the active edit session.

The store is the single source of truth for the board. It validates edits
but never renders; callers re-render after a successful apply_edit.
"""
from __future__ import annotations
import logging
from collections.abc import Sequence
from typing import Dict, Iterable, Iterator, List, Optional, Any
from models import Task, STATUSES

log = logging.getLogger(__name__)


class KanbanError(Exception):
    """Base class for board state errors."""


class TaskNotFound(KanbanError, LookupError):
    def __init__(self, task_id: int):
        super().__init__(f"Task id {task_id} not found.")
        self.task_id = task_id


class NoActiveEdit(KanbanError):
    def __init__(self) -> None:
        super().__init__("No task is being edited.")


class ValidationError(KanbanError, ValueError):
    """Rejected edit. ``errors`` maps each failing field to its message."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors: Dict[str, str] = dict(errors)


class TaskView(Sequence):
    """Read-only, restartable view over the store's tasks in stored order."""

    def __init__(self, tasks: List[Task]):
        self._tasks = tasks

    def __getitem__(self, index):
        return self._tasks[index]

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)


def validate_edit(title: str, description: str, status: str) -> Dict[str, str]:
    """Return field -> message for every invalid field (empty when valid)."""
    errors: Dict[str, str] = {}
    if not (title or '').strip():
        errors['title'] = 'Title is required.'
    if not (description or '').strip():
        errors['description'] = 'Description is required.'
    if status not in STATUSES:
        errors['status'] = f'Status must be one of: {", ".join(STATUSES)}.'
    return errors


class TaskStore:
    def __init__(self, tasks: Iterable[Task] = ()):
        self._tasks: List[Task] = []
        self._by_id: Dict[int, Task] = {}
        self._active_id: Optional[int] = None
        for task in tasks:
            if task.id in self._by_id:
                raise ValueError(f'Duplicate task id {task.id}')
            self._tasks.append(task)
            self._by_id[task.id] = task
        log.debug("store seeded with %d tasks", len(self._tasks))

    # -------------------- queries --------------------
    def list_tasks(self) -> TaskView:
        return TaskView(self._tasks)

    def find_by_id(self, task_id: int) -> Task:
        try:
            return self._by_id[task_id]
        except KeyError:
            raise TaskNotFound(task_id) from None

    def snapshot(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self._tasks]

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    # -------------------- edit session --------------------
    @property
    def active_id(self) -> Optional[int]:
        return self._active_id

    @property
    def is_editing(self) -> bool:
        return self._active_id is not None

    def active_task(self) -> Optional[Task]:
        if self._active_id is None:
            return None
        return self._by_id.get(self._active_id)

    def begin_edit(self, task_id: int) -> Task:
        task = self.find_by_id(task_id)
        self._active_id = task_id
        log.debug("begin edit of task %s", task_id)
        return task

    def end_edit(self) -> None:
        if self._active_id is not None:
            log.debug("end edit of task %s", self._active_id)
        self._active_id = None

    def apply_edit(self, title: str, description: str, status: str) -> Task:
        """Replace title, description and status of the task being edited.

        All fields are checked before anything changes, so a rejected edit
        leaves the task untouched. The session stays open either way.
        """
        task = self.active_task()
        if task is None:
            raise NoActiveEdit()
        errors = validate_edit(title, description, status)
        if errors:
            raise ValidationError(errors)
        task.title = title.strip()
        task.description = description.strip()
        task.status = status
        log.info("task %s saved (status=%s)", task.id, task.status)
        return task

    def __str__(self) -> str:
        counts = {s: sum(1 for t in self._tasks if t.status == s) for s in STATUSES}
        return ', '.join(f'{s}: {n}' for s, n in counts.items())
