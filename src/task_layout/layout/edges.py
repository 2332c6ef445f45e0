"""Edge synthesis — one ``blocks`` edge per resolved blocked-by relationship."""

from __future__ import annotations

from task_layout.graph import TaskGraph
from task_layout.layout.types import EDGE_PREFIX, LayoutEdge, group_node_id


def endpoint_id(graph: TaskGraph, task_id: str) -> str:
    """Node id an edge attaches to: the group box for groups, else the task node."""
    return group_node_id(task_id) if graph.is_group(task_id) else task_id


def synthesize_edges(graph: TaskGraph) -> list[LayoutEdge]:
    """Emit ``blocker -> blocked`` edges in task order, then blocker order.

    Containment is never emitted as an edge; it is carried by node nesting.
    """
    edges: list[LayoutEdge] = []
    for tid, blocker_ids in graph.blocked_by_map.items():
        target = endpoint_id(graph, tid)
        for bid in blocker_ids:
            edges.append(
                LayoutEdge(
                    id=f"{EDGE_PREFIX}{bid}-{tid}",
                    source=endpoint_id(graph, bid),
                    target=target,
                    source_task_id=bid,
                    target_task_id=tid,
                )
            )
    return edges
