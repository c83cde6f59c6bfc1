"""Seed data for the board.

The board starts from INITIAL_TASKS unless a JSON seed file is given.
Seed files are treated as untrusted: statuses are normalized and bad
entries are skipped. Nothing is ever written back.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from models import Task, normalize_status

log = logging.getLogger(__name__)

TaskEntry = Dict[str, Any]

INITIAL_TASKS: List[TaskEntry] = [
    {"id": 1, "title": "Launch Epic Career", "description": "Create a killer Resume", "status": "todo"},
    {"id": 2, "title": "Master JavaScript", "description": "Get comfortable with the fundamentals", "status": "doing"},
    {"id": 3, "title": "Contribute to Open Source Projects",
     "description": "Gain practical experience and collaborate with others", "status": "done"},
]


class SeedError(ValueError):
    """Seed file could not be read or has an unsupported shape."""


def initial_tasks() -> List[Task]:
    """Fresh Task objects for the built-in seed (safe to mutate)."""
    return tasks_from_entries(INITIAL_TASKS)


def load_seed(path: Union[str, Path, None] = None) -> List[Task]:
    """Load tasks from a JSON seed file, or the built-in seed when path is None.

    Accepts a list of task objects or the legacy column mapping
    ``{"todo": [...], "doing"|"in-progress": [...], "done": [...]}``.
    """
    if path is None:
        return initial_tasks()
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as exc:
        raise SeedError(f'Cannot read seed file {path}: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise SeedError(f'Seed file {path} is not valid JSON: {exc}') from exc
    if isinstance(data, Mapping):
        entries = _flatten_columns(data)
    elif isinstance(data, list):
        entries = data
    else:
        raise SeedError(f'Seed file {path} must hold a list or a column mapping')
    tasks = tasks_from_entries(entries)
    log.info("loaded %d tasks from %s", len(tasks), path)
    return tasks


def _flatten_columns(data: Mapping[str, Any]) -> List[TaskEntry]:
    """Turn the column mapping into a flat list; the column key is the status."""
    flat: List[TaskEntry] = []
    for column, entries in data.items():
        if not isinstance(entries, list):
            log.warning("ignoring seed column %r: not a list", column)
            continue
        for raw in entries:
            if isinstance(raw, Mapping):
                flat.append({**raw, 'status': column})
            else:
                flat.append(raw)
    return flat


def tasks_from_entries(entries: Iterable[Any]) -> List[Task]:
    collected: List[Task] = []
    seen = set()
    pending: List[TaskEntry] = []
    for raw in entries:
        if not isinstance(raw, Mapping):
            log.warning("skipping seed entry %r: not an object", raw)
            continue
        raw_title = raw.get('title')
        if raw_title is None or not str(raw_title).strip():
            log.warning("skipping seed entry without title: %r", raw)
            continue
        raw_desc = raw.get('description')
        if raw_desc is None or not str(raw_desc).strip():
            log.warning("skipping seed entry without description: %r", raw)
            continue
        pending.append(dict(raw))
    # explicit ids first so generated ids never collide with them
    explicit = [r.get('id') for r in pending if _is_int_id(r.get('id'))]
    next_id = max(explicit, default=0) + 1
    for raw in pending:
        tid: Optional[int] = raw.get('id') if _is_int_id(raw.get('id')) else None
        if tid is None:
            tid = next_id
            next_id += 1
        if tid in seen:
            log.warning("skipping seed entry with duplicate id %s", tid)
            continue
        seen.add(tid)
        collected.append(Task(
            id=tid,
            title=str(raw['title']).strip(),
            description=str(raw['description']).strip(),
            status=normalize_status(raw.get('status')),
        ))
    return collected


def _is_int_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
