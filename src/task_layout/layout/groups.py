"""Group geometry — box sizes for groups and leaves, and contained-leaf slots.

A group is drawn as a header followed by one row per direct subtask. Leaf
subtasks are drawn inside that box; subtasks that are groups themselves are
laid out as independent units instead (renderers rarely support nested
groups), so their parent only reserves a row for them.
"""

from __future__ import annotations

from dataclasses import dataclass

from task_layout.graph import TaskGraph
from task_layout.layout.config import LayoutConfig
from task_layout.layout.types import Point


@dataclass
class ContainedLeaf:
    """A leaf subtask slot inside its group, in group-local coordinates."""

    task_id: str
    index: int
    position: Point
    width: float
    height: float


@dataclass
class GroupBox:
    task_id: str
    width: float
    height: float
    subtask_ids: list[str]
    leaves: list[ContainedLeaf]


def leaf_dimensions(total_estimate: float, config: LayoutConfig) -> tuple[float, float]:
    """(width, height) of a plain leaf; only the width scales with estimate."""
    scale = 1 + config.estimate_fraction(total_estimate) * config.leaf_max_width_scale
    return (config.leaf_base_width * scale, config.leaf_base_height)


def group_height(subtask_count: int, config: LayoutConfig) -> float:
    """Header plus one row per direct subtask (nested descendants not counted)."""
    return config.group_header_height + subtask_count * config.subtask_row_height


def group_width(total_estimate: float, config: LayoutConfig) -> float:
    scale = 1 + config.estimate_fraction(total_estimate) * config.group_max_width_scale
    return max(config.group_min_width, config.group_base_width * scale)


def contained_leaf_slot(
    index: int,
    total_estimate: float,
    box_width: float,
    config: LayoutConfig,
) -> tuple[Point, float, float]:
    """Position and size of the ``index``-th subtask row, clamped inside the box."""
    width, height = leaf_dimensions(total_estimate, config)
    width = max(0.0, min(width, box_width - 2 * config.subtask_margin))
    height = max(0.0, min(height, config.subtask_row_height - config.subtask_row_gap))
    position = Point(
        x=config.subtask_margin,
        y=config.group_header_height + index * config.subtask_row_height,
    )
    return position, width, height


def resolve_groups(
    graph: TaskGraph,
    totals: dict[str, float],
    config: LayoutConfig,
) -> dict[str, GroupBox]:
    """Size every group and lay out its contained leaves.

    Returns group task id -> GroupBox, in input order.
    """
    boxes: dict[str, GroupBox] = {}
    for gid in graph.group_ids():
        subtask_ids = graph.subtask_map[gid]
        width = group_width(totals[gid], config)
        height = group_height(len(subtask_ids), config)

        leaf_ids = set(graph.contained_leaves(gid))
        leaves: list[ContainedLeaf] = []
        for index, sid in enumerate(subtask_ids):
            if sid not in leaf_ids:
                continue
            position, lw, lh = contained_leaf_slot(index, totals[sid], width, config)
            leaves.append(ContainedLeaf(task_id=sid, index=index, position=position, width=lw, height=lh))

        boxes[gid] = GroupBox(
            task_id=gid,
            width=width,
            height=height,
            subtask_ids=list(subtask_ids),
            leaves=leaves,
        )
    return boxes
