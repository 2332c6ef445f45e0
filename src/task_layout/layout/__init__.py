"""Layout of task forests: groups, leaves and blocks edges on a timeline."""

from task_layout.layout.config import DEFAULT_CONFIG, LayoutConfig, load_layout_config
from task_layout.layout.pipeline import full_layout, full_layout_with_config
from task_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult, Point

__all__ = [
    "DEFAULT_CONFIG",
    "LayoutConfig",
    "LayoutEdge",
    "LayoutNode",
    "LayoutResult",
    "Point",
    "full_layout",
    "full_layout_with_config",
    "load_layout_config",
]
