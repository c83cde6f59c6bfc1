"""Shared fixtures for the Kanban board tests."""

import logging
import sys
from pathlib import Path

import pytest

# modules live flat under src/ and import each other by top-level name
SRC_DIR = Path(__file__).parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from models import Task  # noqa: E402
from store import TaskStore  # noqa: E402
from main import LOG_HANDLER_NAME  # noqa: E402


class RecordingTarget:
    """Render target double that keeps every show() call."""

    def __init__(self):
        self.calls = []

    def show(self, columns):
        self.calls.append(columns)

    @property
    def last(self):
        return self.calls[-1]

    def ids(self, status):
        return [card.task_id for card in self.last[status]]


class RecordingDialog:
    """Dialog double: records open/close/error requests."""

    def __init__(self):
        self.is_open = False
        self.opened_with = []
        self.close_calls = 0
        self.errors = {}
        self.handlers = {}

    def bind(self, on_submit, on_dismiss, on_cancel, on_change):
        self.handlers = dict(submit=on_submit, dismiss=on_dismiss, cancel=on_cancel, change=on_change)

    def open(self, initial_values):
        self.is_open = True
        self.opened_with.append(dict(initial_values))

    def close(self):
        self.is_open = False
        self.close_calls += 1
        self.errors = {}

    def show_errors(self, errors):
        self.errors = dict(errors)


def make_tasks():
    return [
        Task(1, "A", "d1", "todo"),
        Task(2, "B", "d2", "doing"),
        Task(3, "C", "d3", "done"),
    ]


@pytest.fixture
def tasks():
    return make_tasks()


@pytest.fixture
def store(tasks):
    return TaskStore(tasks)


@pytest.fixture
def target():
    return RecordingTarget()


@pytest.fixture
def dialog():
    return RecordingDialog()


@pytest.fixture
def presenter(store, target, dialog):
    from board import BoardPresenter
    return BoardPresenter(store, target, dialog)


@pytest.fixture
def log_file(tmp_path):
    """Log file path for main(); detaches the file handler afterwards."""
    path = tmp_path / "kanban.log"
    yield path
    root = logging.getLogger()
    for h in list(root.handlers):
        if h.get_name() == LOG_HANDLER_NAME:
            root.removeHandler(h)
            h.close()
