"""JSON renderer — the node/edge contract consumed by rendering layers."""

from __future__ import annotations

from typing import Any

import orjson

from task_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult


def _node_dict(n: LayoutNode) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": n.id,
        "kind": n.kind,
        "taskId": n.task_id,
        "position": {"x": n.position.x, "y": n.position.y},
        "width": n.width,
        "height": n.height,
        "totalEstimate": n.total_estimate,
        "isSubtask": n.is_subtask,
        "circular": n.circular,
    }
    if n.subtask_ids:
        out["subtaskIds"] = list(n.subtask_ids)
    if n.parent_group_id is not None:
        out["parentGroupId"] = n.parent_group_id
    if n.parent_task_id is not None:
        out["parentTaskId"] = n.parent_task_id
    return out


def _edge_dict(e: LayoutEdge) -> dict[str, Any]:
    return {
        "id": e.id,
        "source": e.source,
        "target": e.target,
        "relationship": e.relationship,
        "sourceTaskId": e.source_task_id,
        "targetTaskId": e.target_task_id,
    }


def layout_to_dict(result: LayoutResult) -> dict[str, Any]:
    return {
        "nodes": [_node_dict(n) for n in result.nodes],
        "edges": [_edge_dict(e) for e in result.edges],
        "warnings": [
            {"code": w.code, "message": w.message, "taskIds": list(w.task_ids)} for w in result.warnings
        ],
    }


class JsonRenderer:
    def __init__(self, indent: bool = True) -> None:
        self.indent = indent

    def render(self, result: LayoutResult) -> str:
        option = orjson.OPT_INDENT_2 if self.indent else 0
        return orjson.dumps(layout_to_dict(result), option=option).decode("utf-8")
