"""Data models for the terminal Kanban board.

Exposes the Task dataclass and the status vocabulary. Stored status keys
are "todo", "doing", "done"; headers render as "TO DO", "DOING", "DONE".
Legacy "in-progress" spellings map onto "doing".
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

STATUSES: Tuple[str, ...] = ("todo", "doing", "done")
DEFAULT_STATUS = "todo"

# legacy spellings accepted from seed files
STATUS_ALIASES: Dict[str, str] = {
    'in-progress': 'doing',
    'in progress': 'doing',
    'inprogress': 'doing',
}


def column_for(value: Optional[str]) -> Optional[str]:
    """Return the canonical status for ``value`` or None when unrecognized."""
    if value is None:
        return None
    key = str(value).strip().lower()
    if key in STATUSES:
        return key
    return STATUS_ALIASES.get(key)


def normalize_status(value: Optional[str]) -> str:
    """Map a loosely spelled status onto one of STATUSES.

    Unrecognized values fall back to "todo". Only meant for input coming
    from files or older data; the edit dialog offers the canonical values.
    """
    return column_for(value) or DEFAULT_STATUS


@dataclass
class Task:
    """A single Kanban task.

    Fields:
        id: Unique integer id, fixed for the whole session.
        title: Short title shown on the card.
        description: Longer text, only visible in the edit dialog.
        status: One of: "todo", "doing", "done".
    """
    id: int
    title: str
    description: str = ""
    status: str = DEFAULT_STATUS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, title={self.title}, status={self.status})"
