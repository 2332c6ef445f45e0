"""Task graph model — flat relationship maps over a hydrated task forest.

``build_maps`` normalizes the input list into id-keyed maps (subtask
containment, blocked-by and its inverse, blocks) plus a networkx DiGraph of
the blocking relation, and classifies every task as a group, a nested leaf or
a standalone task.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

import networkx as nx

from task_layout import diagnostics as diag
from task_layout.diagnostics import LayoutWarning
from task_layout.model import Task


class TaskKind(Enum):
    GROUP = "group"
    NESTED_LEAF = "nested-leaf"
    STANDALONE = "standalone"


@dataclass(frozen=True)
class TaskGraph:
    """Relationship maps for one layout pass.

    Attributes:
        tasks: id -> Task, in input order (first occurrence of an id wins).
        estimates: id -> own estimate, clamped to be non-negative.
        subtask_map: id -> direct subtask ids, for tasks with subtasks.
        blocked_by_map: id -> blocker ids, for tasks with blockers.
        blocks_map: blocker id -> ids it blocks (inverse of blocked_by_map).
        parent_map: contained id -> owning parent id (first parent wins).
        kinds: id -> TaskKind.
        digraph: one edge blocker -> blocked per blocking relationship.
        warnings: problems found while building the maps.
    """

    tasks: dict[str, Task]
    estimates: dict[str, float]
    subtask_map: dict[str, list[str]]
    blocked_by_map: dict[str, list[str]]
    blocks_map: dict[str, list[str]]
    parent_map: dict[str, str]
    kinds: dict[str, TaskKind]
    digraph: nx.DiGraph
    warnings: list[LayoutWarning] = field(default_factory=list)

    def is_group(self, task_id: str) -> bool:
        return self.kinds.get(task_id) is TaskKind.GROUP

    def top_level_ids(self) -> list[str]:
        """Tasks not listed as a subtask of any other task."""
        return [tid for tid in self.tasks if tid not in self.parent_map]

    def group_ids(self) -> list[str]:
        return [tid for tid in self.tasks if self.kinds[tid] is TaskKind.GROUP]

    def unit_ids(self) -> list[str]:
        """Placement units: standalone tasks and groups, in input order."""
        return [tid for tid in self.tasks if self.kinds[tid] is not TaskKind.NESTED_LEAF]

    def contained_leaves(self, group_id: str) -> list[str]:
        """Direct subtasks of ``group_id`` that are drawn inside its box."""
        return [sid for sid in self.subtask_map.get(group_id, []) if self.kinds[sid] is TaskKind.NESTED_LEAF]

    def unit_of(self, task_id: str) -> str:
        """The placement unit carrying ``task_id``: itself, or its owning group."""
        if self.kinds.get(task_id) is TaskKind.NESTED_LEAF:
            return self.parent_map[task_id]
        return task_id


def build_maps(tasks: Iterable[Task]) -> TaskGraph:
    """Build the relationship maps for a list of hydrated tasks.

    Never raises. Dangling references are dropped, a subtask listed under
    several parents belongs to the first one only, and every such repair is
    recorded as a warning on the returned graph.
    """
    warnings: list[LayoutWarning] = []

    by_id: dict[str, Task] = {}
    estimates: dict[str, float] = {}
    for task in tasks:
        if task.id in by_id:
            diag.warn(warnings, diag.W_DUPLICATE_TASK, f"duplicate task id {task.id!r} ignored", task.id)
            continue
        by_id[task.id] = task
        estimate = float(task.estimate or 0.0)
        if estimate < 0:
            diag.warn(
                warnings,
                diag.W_NEGATIVE_ESTIMATE,
                f"task {task.id!r} has negative estimate {estimate}; using 0",
                task.id,
            )
            estimate = 0.0
        estimates[task.id] = estimate

    subtask_map: dict[str, list[str]] = {}
    blocked_by_map: dict[str, list[str]] = {}
    blocks_map: dict[str, list[str]] = {}
    parent_map: dict[str, str] = {}

    for tid, task in by_id.items():
        subtask_ids: list[str] = []
        for sub in task.subtasks or []:
            if sub.id not in by_id:
                diag.warn(
                    warnings,
                    diag.W_DANGLING_SUBTASK,
                    f"task {tid!r} lists unknown subtask {sub.id!r}",
                    tid,
                    sub.id,
                )
                continue
            owner = parent_map.get(sub.id)
            if owner is not None and owner != tid:
                diag.warn(
                    warnings,
                    diag.W_SHARED_SUBTASK,
                    f"subtask {sub.id!r} already belongs to {owner!r}; ignored under {tid!r}",
                    tid,
                    sub.id,
                )
                continue
            if sub.id in subtask_ids:
                continue
            parent_map[sub.id] = tid
            subtask_ids.append(sub.id)
        if subtask_ids:
            subtask_map[tid] = subtask_ids

        blocker_ids: list[str] = []
        for blocker in task.blocked_by or []:
            if blocker.id not in by_id:
                diag.warn(
                    warnings,
                    diag.W_DANGLING_BLOCKER,
                    f"task {tid!r} is blocked by unknown task {blocker.id!r}",
                    tid,
                    blocker.id,
                )
                continue
            if blocker.id in blocker_ids:
                continue
            blocker_ids.append(blocker.id)
            blocks_map.setdefault(blocker.id, []).append(tid)
        if blocker_ids:
            blocked_by_map[tid] = blocker_ids

    kinds: dict[str, TaskKind] = {}
    for tid in by_id:
        if tid in subtask_map:
            kinds[tid] = TaskKind.GROUP
        elif tid in parent_map:
            kinds[tid] = TaskKind.NESTED_LEAF
        else:
            kinds[tid] = TaskKind.STANDALONE

    digraph: nx.DiGraph = nx.DiGraph()
    for tid in by_id:
        digraph.add_node(tid, kind=kinds[tid])
    for tid, blocker_ids in blocked_by_map.items():
        for bid in blocker_ids:
            digraph.add_edge(bid, tid)

    return TaskGraph(
        tasks=by_id,
        estimates=estimates,
        subtask_map=subtask_map,
        blocked_by_map=blocked_by_map,
        blocks_map=blocks_map,
        parent_map=parent_map,
        kinds=kinds,
        digraph=digraph,
        warnings=warnings,
    )
