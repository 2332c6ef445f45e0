"""Estimate aggregation — a task's own estimate plus all descendant estimates."""

from __future__ import annotations

from task_layout import diagnostics as diag
from task_layout.diagnostics import LayoutWarning
from task_layout.graph import TaskGraph


class EstimateAggregator:
    """Memoized total-estimate lookup for one layout pass.

    Subtask containment is expected to be a forest. A task reached again
    while its own subtree is being summed contributes 0 and is reported as a
    ``W_SUBTASK_CYCLE`` warning instead of recursing forever.
    """

    def __init__(self, graph: TaskGraph) -> None:
        self.graph = graph
        self.warnings: list[LayoutWarning] = []
        self._memo: dict[str, float] = {}
        self._reported: set[str] = set()

    def total_estimate(self, task_id: str, visiting: frozenset[str] = frozenset()) -> float:
        return self._total(task_id, visiting)[0]

    def _total(self, task_id: str, visiting: frozenset[str]) -> tuple[float, bool]:
        """(total, cut): ``cut`` is set when the cycle guard fired below ``task_id``."""
        if task_id in visiting:
            self._report_cycle(task_id)
            return 0.0, True
        if task_id in self._memo:
            return self._memo[task_id], False

        inner = visiting | {task_id}
        total = self.graph.estimates.get(task_id, 0.0)
        cut = False
        for child_id in self.graph.subtask_map.get(task_id, []):
            child_total, child_cut = self._total(child_id, inner)
            total += child_total
            cut = cut or child_cut

        # A cut total depends on where the walk entered the cycle.
        if not cut:
            self._memo[task_id] = total
        return total, cut

    def totals(self) -> dict[str, float]:
        """Total estimate of every task, in input order."""
        return {tid: self.total_estimate(tid) for tid in self.graph.tasks}

    def _report_cycle(self, task_id: str) -> None:
        if task_id in self._reported:
            return
        self._reported.add(task_id)
        diag.warn(
            self.warnings,
            diag.W_SUBTASK_CYCLE,
            f"task {task_id!r} contains itself through its subtasks",
            task_id,
        )
