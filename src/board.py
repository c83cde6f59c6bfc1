"""Board presenter: keeps the on-screen board in step with the TaskStore.

The presenter owns a render target and a dialog and only talks to them
through the small interfaces below, so it runs the same against the
terminal implementations and against test doubles.
"""
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Protocol
from models import Task, STATUSES, column_for
from store import TaskStore, TaskNotFound, NoActiveEdit, ValidationError

log = logging.getLogger(__name__)

Columns = Dict[str, List["Card"]]
FormValues = Mapping[str, str]


@dataclass
class Card:
    """Minimal visual representation of a task."""
    task_id: int
    title: str
    on_click: Callable[[], None]

    def click(self) -> None:
        self.on_click()


class EditState(enum.Enum):
    CLOSED = "closed"
    OPEN_CLEAN = "open-clean"
    OPEN_DIRTY = "open-dirty"


class RenderTarget(Protocol):
    def show(self, columns: Columns) -> None: ...


class Dialog(Protocol):
    is_open: bool

    def bind(self, on_submit: Callable[[FormValues], object], on_dismiss: Callable[[], None],
             on_cancel: Callable[[], None], on_change: Callable[[str, str], None]) -> None: ...

    def open(self, initial_values: FormValues) -> None: ...

    def close(self) -> None: ...

    def show_errors(self, errors: Mapping[str, str]) -> None: ...


def compute_columns(tasks: Iterable[Task]) -> Dict[str, List[Task]]:
    """Group tasks by status, keeping their relative order.

    Tasks whose status matches no column are left out.
    """
    columns: Dict[str, List[Task]] = {s: [] for s in STATUSES}
    for task in tasks:
        status = column_for(task.status)
        if status is None:
            log.debug("task %s has unknown status %r; not shown", task.id, task.status)
            continue
        columns[status].append(task)
    return columns


def form_values(task: Task) -> Dict[str, str]:
    return {'title': task.title, 'description': task.description, 'status': task.status}


class BoardPresenter:
    def __init__(self, store: TaskStore, target: RenderTarget, dialog: Dialog):
        self.store = store
        self.target = target
        self.dialog = dialog
        self.state = EditState.CLOSED
        dialog.bind(on_submit=self.on_submit, on_dismiss=self.on_dismiss,
                    on_cancel=self.on_cancel, on_change=self.on_change)

    compute_columns = staticmethod(compute_columns)

    # -------------------- rendering --------------------
    def render(self) -> Columns:
        grouped = compute_columns(self.store.list_tasks())
        columns: Columns = {s: [self.render_card(t) for t in tasks] for s, tasks in grouped.items()}
        self.target.show(columns)
        return columns

    def render_card(self, task: Task) -> Card:
        task_id = task.id
        return Card(task_id=task_id, title=task.title, on_click=lambda: self.open_task(task_id))

    # -------------------- dialog flow --------------------
    def open_task(self, task_id: int) -> bool:
        """Card click: start an edit session and open the dialog on the task."""
        try:
            task = self.store.begin_edit(task_id)
        except TaskNotFound:
            log.warning("click on unknown task %s ignored", task_id)
            return False
        self.state = EditState.OPEN_CLEAN
        self.dialog.open(form_values(task))
        return True

    def on_change(self, field: str, value: str) -> None:
        if self.state is EditState.OPEN_CLEAN:
            self.state = EditState.OPEN_DIRTY

    def on_submit(self, values: FormValues) -> Optional[Task]:
        try:
            task = self.store.apply_edit(values.get('title', ''), values.get('description', ''),
                                         values.get('status', ''))
        except ValidationError as exc:
            log.info("edit rejected: %s", exc)
            self.state = EditState.OPEN_DIRTY
            self.dialog.show_errors(exc.errors)
            return None
        except NoActiveEdit:
            log.warning("submit without an active edit ignored")
            return None
        self.store.end_edit()
        self.state = EditState.CLOSED
        self.render()
        self.dialog.close()
        return task

    def on_cancel(self) -> None:
        self._close_without_saving()

    def on_dismiss(self) -> None:
        self._close_without_saving()

    def _close_without_saving(self) -> None:
        if self.state is EditState.CLOSED and not self.store.is_editing:
            return
        self.store.end_edit()
        self.state = EditState.CLOSED
        self.dialog.close()
