"""Plain-text renderer — one line per node, edge and warning."""

from __future__ import annotations

from task_layout.layout.types import KIND_GROUP, LayoutNode, LayoutResult


def _num(value: float) -> str:
    return f"{value:g}"


def _node_line(result: LayoutResult, n: LayoutNode) -> str:
    pos = result.absolute_position(n.id)
    indent = "    " if n.parent_group_id else "  "
    line = (
        f"{indent}{n.kind:<5} {n.id}  at ({_num(pos.x)}, {_num(pos.y)})"
        f"  size {_num(n.width)}x{_num(n.height)}  total {_num(n.total_estimate)}d"
    )
    if n.kind == KIND_GROUP:
        line += f"  subtasks {len(n.subtask_ids)}"
    if n.circular:
        line += "  (circular dependency)"
    return line


class TextRenderer:
    def render(self, result: LayoutResult) -> str:
        lines: list[str] = [f"Nodes ({len(result.nodes)}):"]
        lines.extend(_node_line(result, n) for n in result.nodes)
        lines.append(f"Edges ({len(result.edges)}):")
        lines.extend(f"  {e.source} -{e.relationship}-> {e.target}" for e in result.edges)
        if result.warnings:
            lines.append(f"Warnings ({len(result.warnings)}):")
            lines.extend(f"  {w}" for w in result.warnings)
        return "\n".join(lines)
