"""Layout IR — geometry constants and the node/edge records a layout produces."""

from __future__ import annotations

from dataclasses import dataclass, field

from task_layout.diagnostics import LayoutWarning

# ─── Geometry Constants ───────────────────────────────────────────────────────

ROW_HEIGHT: float = 200  # vertical gap between placement rows
HORIZONTAL_GAP: float = 150  # min gap between a blocker's right edge and a blocked unit

LEAF_BASE_WIDTH: float = 150
LEAF_BASE_HEIGHT: float = 100
LEAF_MAX_WIDTH_SCALE: float = 3

GROUP_BASE_WIDTH: float = 300
GROUP_MIN_WIDTH: float = 350
GROUP_MAX_WIDTH_SCALE: float = 2
GROUP_HEADER_HEIGHT: float = 120  # base group height, above the first subtask row
SUBTASK_ROW_HEIGHT: float = 80  # height added per direct subtask
SUBTASK_MARGIN: float = 20  # left/right inset of contained leaves
SUBTASK_ROW_GAP: float = 10  # vertical gap between contained leaves

ESTIMATE_SATURATION: float = 10  # man-days at which width scaling saturates

GROUP_PREFIX = "group-"
EDGE_PREFIX = "blocks-"

KIND_GROUP = "group"
KIND_LEAF = "leaf"
BLOCKS = "blocks"


def group_node_id(task_id: str) -> str:
    return f"{GROUP_PREFIX}{task_id}"


# ─── Layout Records ───────────────────────────────────────────────────────────


@dataclass
class Point:
    """A 2D point in layout units."""

    x: float
    y: float


@dataclass
class LayoutNode:
    """A positioned group box or leaf box.

    ``position`` is absolute for groups and plain leaves. For leaves drawn
    inside a group (``parent_group_id`` set) it is relative to that group.
    """

    id: str
    kind: str
    task_id: str
    position: Point
    width: float
    height: float
    total_estimate: float
    subtask_ids: list[str] = field(default_factory=list)
    is_subtask: bool = False
    parent_group_id: str | None = None
    parent_task_id: str | None = None
    circular: bool = False

    @property
    def right(self) -> float:
        return self.position.x + self.width


@dataclass
class LayoutEdge:
    """A directed ``blocks`` edge between two node ids."""

    id: str
    source: str
    target: str
    source_task_id: str
    target_task_id: str
    relationship: str = BLOCKS


@dataclass
class LayoutResult:
    """Positioned nodes, edges and the warnings raised while laying them out."""

    nodes: list[LayoutNode] = field(default_factory=list)
    edges: list[LayoutEdge] = field(default_factory=list)
    warnings: list[LayoutWarning] = field(default_factory=list)

    def node(self, node_id: str) -> LayoutNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def absolute_position(self, node_id: str) -> Point:
        n = self.node(node_id)
        if n.parent_group_id is None:
            return Point(n.position.x, n.position.y)
        parent = self.absolute_position(n.parent_group_id)
        return Point(parent.x + n.position.x, parent.y + n.position.y)

    def right_edge(self, node_id: str) -> float:
        return self.absolute_position(node_id).x + self.node(node_id).width

    @property
    def has_cycles(self) -> bool:
        return any(n.circular for n in self.nodes)
