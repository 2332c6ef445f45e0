"""Task model — hydrated tasks and their stored, by-reference records.

Tasks reach the layout core fully hydrated: ``subtasks`` and ``blocked_by``
hold Task objects. Storage keeps ids only (``TaskRecord``); ``hydrate_tasks``
turns a list of records into an arena where every relationship points at the
single Task object for that id.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Task:
    """A unit of work, estimated in man-days."""

    id: str
    title: str = ""
    description: str = ""
    estimate: float = 0.0
    subtasks: list[Task] = field(default_factory=list)
    blocked_by: list[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | str) -> Task:
        """Build a Task from a camelCase mapping.

        Nested ``subtasks``/``blockedBy`` entries may be mappings or bare ids;
        a bare id becomes a stub Task carrying only that id.
        """
        if isinstance(data, str):
            return cls(id=data)
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            estimate=float(data.get("estimate") or 0.0),
            subtasks=[cls.from_dict(s) for s in data.get("subtasks") or []],
            blocked_by=[cls.from_dict(b) for b in data.get("blockedBy") or data.get("blocked_by") or []],
        )


@dataclass
class TaskRecord:
    """Stored form of a task: relationships as id lists."""

    id: str
    title: str = ""
    description: str = ""
    estimate: float = 0.0
    subtask_ids: list[str] = field(default_factory=list)
    blocked_by_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TaskRecord:
        subtask_ids = data.get("subtaskIds", data.get("subtask_ids")) or []
        blocked_by_ids = data.get("blockedByIds", data.get("blocked_by_ids")) or []
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            estimate=float(data.get("estimate") or 0.0),
            subtask_ids=[str(s) for s in subtask_ids],
            blocked_by_ids=[str(b) for b in blocked_by_ids],
        )


def hydrate_tasks(records: Iterable[TaskRecord]) -> list[Task]:
    """Resolve stored records into hydrated Tasks, preserving record order.

    Pass 1 creates one Task per record id (first record wins on duplicates).
    Pass 2 links subtasks and blockers by reference; ids with no record are
    dropped.
    """
    records = list(records)
    arena: dict[str, Task] = {}
    for rec in records:
        if rec.id in arena:
            continue
        arena[rec.id] = Task(
            id=rec.id,
            title=rec.title,
            description=rec.description,
            estimate=rec.estimate,
        )

    linked: set[str] = set()
    for rec in records:
        if rec.id in linked:
            continue
        linked.add(rec.id)
        task = arena[rec.id]
        task.subtasks = [arena[sid] for sid in rec.subtask_ids if sid in arena]
        task.blocked_by = [arena[bid] for bid in rec.blocked_by_ids if bid in arena]

    return list(arena.values())


def task_to_record(task: Task) -> TaskRecord:
    """Project a hydrated Task back to its stored, id-only form."""
    return TaskRecord(
        id=task.id,
        title=task.title,
        description=task.description,
        estimate=task.estimate,
        subtask_ids=[s.id for s in task.subtasks],
        blocked_by_ids=[b.id for b in task.blocked_by],
    )
