"""Topological positioning of placement units on a timeline.

Placement units are standalone tasks and groups. Each unit gets its own row;
its x is pushed right past every blocker it depends on:

    x = max(0, max(right(blocker) + HORIZONTAL_GAP for each blocker))

Units are placed in waves: a unit is ready once all of its blockers are
placed. When nothing is ready but units remain, the rest sit on a blocking
cycle (or downstream of one). They are placed one strongly connected
component at a time, in blocking order, and flagged ``circular`` instead of
failing the layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx
from loguru import logger

from task_layout import diagnostics as diag
from task_layout.diagnostics import LayoutWarning
from task_layout.graph import TaskGraph, TaskKind
from task_layout.layout.config import LayoutConfig
from task_layout.layout.groups import GroupBox, leaf_dimensions
from task_layout.layout.types import Point


@dataclass
class PlacedUnit:
    task_id: str
    position: Point
    width: float
    height: float
    order: int
    circular: bool = False

    @property
    def right(self) -> float:
        return self.position.x + self.width


@dataclass
class Placement:
    """Placed units in placement order, plus the unit-level blocking graph."""

    units: dict[str, PlacedUnit]
    unit_graph: nx.DiGraph
    warnings: list[LayoutWarning] = field(default_factory=list)


def build_unit_graph(graph: TaskGraph) -> nx.DiGraph:
    """Lift the task-level blocking digraph onto placement units.

    A contained leaf is represented by its group. Blocking between two tasks
    of the same unit has no horizontal meaning and is dropped, except a task
    blocking itself, which is kept as a self-loop so it reads as a cycle.
    """
    ug: nx.DiGraph = nx.DiGraph()
    for tid, kind in graph.digraph.nodes(data="kind"):
        if kind is not TaskKind.NESTED_LEAF:
            ug.add_node(tid)
    for bid, tid in graph.digraph.edges():
        source, target = graph.unit_of(bid), graph.unit_of(tid)
        if source == target and bid != tid:
            continue
        ug.add_edge(source, target)
    return ug


def unit_dimensions(
    unit_id: str,
    boxes: dict[str, GroupBox],
    totals: dict[str, float],
    config: LayoutConfig,
) -> tuple[float, float]:
    box = boxes.get(unit_id)
    if box is not None:
        return (box.width, box.height)
    return leaf_dimensions(totals[unit_id], config)


def position_units(
    graph: TaskGraph,
    totals: dict[str, float],
    boxes: dict[str, GroupBox],
    config: LayoutConfig,
) -> Placement:
    """Assign a position to every placement unit, then enforce blocker gaps."""
    unit_graph = build_unit_graph(graph)
    placement = Placement(units={}, unit_graph=unit_graph)
    placed = placement.units
    current_y = 0.0

    def start_x(uid: str) -> float:
        rights = [placed[b].right + config.horizontal_gap for b in unit_graph.predecessors(uid) if b in placed]
        return max([0.0, *rights])

    def place(uid: str, circular: bool) -> None:
        nonlocal current_y
        width, height = unit_dimensions(uid, boxes, totals, config)
        placed[uid] = PlacedUnit(
            task_id=uid,
            position=Point(start_x(uid), current_y),
            width=width,
            height=height,
            order=len(placed),
            circular=circular,
        )
        current_y += height + config.row_height

    remaining = graph.unit_ids()
    while remaining:
        ready = [uid for uid in remaining if all(b in placed for b in unit_graph.predecessors(uid))]

        if not ready:
            # Cycle members in input order, each cycle ahead of whatever it blocks.
            components = components_in_order(unit_graph, remaining)
            _report_cycle(placement, remaining, components)
            for members in components:
                for uid in members:
                    place(uid, circular=True)
            break

        for uid in ready:
            place(uid, circular=False)
        remaining = [uid for uid in remaining if uid not in placed]

    enforce_blocker_gaps(placement, config.horizontal_gap)
    return placement


def components_in_order(unit_graph: nx.DiGraph, unit_ids: list[str]) -> list[list[str]]:
    """Strongly connected components of ``unit_ids`` in blocking order.

    Components are topologically sorted on the condensed graph. Ties between
    components, and members within one, follow the order of ``unit_ids``.
    """
    rank = {uid: i for i, uid in enumerate(unit_ids)}
    condensed = nx.condensation(unit_graph.subgraph(unit_ids))
    members = {c: sorted(condensed.nodes[c]["members"], key=rank.__getitem__) for c in condensed}
    order = nx.lexicographical_topological_sort(condensed, key=lambda c: rank[members[c][0]])
    return [members[c] for c in order]


def enforce_blocker_gaps(placement: Placement, gap: float) -> int:
    """Shift units right until each starts ``gap`` past its blockers' right edges.

    Units are visited in blocking order (placement order within a cycle), so
    every blocker has its final position before the units it blocks are
    checked. Edges between two units of the same cycle cannot all be
    satisfied and are left alone.

    Returns the number of units shifted.
    """
    placed = placement.units
    ug = placement.unit_graph
    by_order = sorted(placed, key=lambda uid: placed[uid].order)
    shifted = 0
    for members in components_in_order(ug, by_order):
        cycle = set(members)
        for uid in members:
            unit = placed[uid]
            rights = [placed[b].right for b in ug.predecessors(uid) if b in placed and b not in cycle]
            if not rights:
                continue
            required = max(rights) + gap
            if unit.position.x < required:
                logger.debug("shifting {} right by {}", uid, required - unit.position.x)
                unit.position.x = required
                shifted += 1
    return shifted


def _report_cycle(placement: Placement, remaining: list[str], components: list[list[str]]) -> None:
    ug = placement.unit_graph
    rank = {uid: i for i, uid in enumerate(remaining)}
    cycles = [m for m in components if len(m) > 1 or ug.has_edge(m[0], m[0])]
    cycles.sort(key=lambda members: rank[members[0]])

    described = "; ".join(" -> ".join(members) for members in cycles) or "unresolved blockers"
    diag.warn(
        placement.warnings,
        diag.W_CIRCULAR_DEPENDENCY,
        f"circular dependency ({described}); placing {len(remaining)} task(s) sequentially",
        *remaining,
    )
