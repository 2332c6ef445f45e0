"""Full layout pipeline: task list -> positioned nodes + blocks edges."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from task_layout.estimate import EstimateAggregator
from task_layout.graph import TaskGraph, build_maps
from task_layout.layout.config import DEFAULT_CONFIG, LayoutConfig
from task_layout.layout.edges import synthesize_edges
from task_layout.layout.groups import GroupBox, resolve_groups
from task_layout.layout.positioner import Placement, position_units
from task_layout.layout.types import KIND_GROUP, KIND_LEAF, LayoutNode, LayoutResult, Point, group_node_id
from task_layout.model import Task


def full_layout(tasks: Iterable[Task]) -> LayoutResult:
    """Run the full layout pipeline with the default geometry."""
    return full_layout_with_config(tasks, DEFAULT_CONFIG)


def full_layout_with_config(tasks: Iterable[Task], config: LayoutConfig) -> LayoutResult:
    """Like full_layout but with caller-supplied geometry.

    Every derived structure is rebuilt from ``tasks`` on each call, so the
    same input always yields the same nodes and edges. Never raises on
    malformed task data; problems come back as ``LayoutResult.warnings``.
    """
    graph = build_maps(tasks)
    aggregator = EstimateAggregator(graph)
    totals = aggregator.totals()
    boxes = resolve_groups(graph, totals, config)
    placement = position_units(graph, totals, boxes, config)

    result = LayoutResult(
        nodes=build_nodes(graph, totals, boxes, placement),
        edges=synthesize_edges(graph),
        warnings=[*graph.warnings, *aggregator.warnings, *placement.warnings],
    )
    logger.debug(
        "laid out {} task(s): {} node(s), {} edge(s), {} warning(s)",
        len(graph.tasks),
        len(result.nodes),
        len(result.edges),
        len(result.warnings),
    )
    return result


def build_nodes(
    graph: TaskGraph,
    totals: dict[str, float],
    boxes: dict[str, GroupBox],
    placement: Placement,
) -> list[LayoutNode]:
    """Group boxes (each followed by its contained leaves), then plain leaves.

    Parents always precede their children, which renderers that attach
    children to a parent box require.
    """
    group_nodes: list[LayoutNode] = []
    leaf_nodes: list[LayoutNode] = []

    for uid, unit in placement.units.items():
        box = boxes.get(uid)
        if box is None:
            leaf_nodes.append(
                LayoutNode(
                    id=uid,
                    kind=KIND_LEAF,
                    task_id=uid,
                    position=Point(unit.position.x, unit.position.y),
                    width=unit.width,
                    height=unit.height,
                    total_estimate=totals[uid],
                    circular=unit.circular,
                )
            )
            continue

        gid = group_node_id(uid)
        group_nodes.append(
            LayoutNode(
                id=gid,
                kind=KIND_GROUP,
                task_id=uid,
                position=Point(unit.position.x, unit.position.y),
                width=box.width,
                height=box.height,
                total_estimate=totals[uid],
                subtask_ids=list(box.subtask_ids),
                is_subtask=uid in graph.parent_map,
                parent_task_id=graph.parent_map.get(uid),
                circular=unit.circular,
            )
        )
        for leaf in box.leaves:
            group_nodes.append(
                LayoutNode(
                    id=leaf.task_id,
                    kind=KIND_LEAF,
                    task_id=leaf.task_id,
                    position=Point(leaf.position.x, leaf.position.y),
                    width=leaf.width,
                    height=leaf.height,
                    total_estimate=totals[leaf.task_id],
                    is_subtask=True,
                    parent_group_id=gid,
                    parent_task_id=uid,
                    circular=unit.circular,
                )
            )

    return [*group_nodes, *leaf_nodes]
