"""Tests for renderers — JSON contract and text summary."""

from __future__ import annotations

import orjson
from builders import make_tasks

from task_layout.layout import full_layout
from task_layout.renderers import JsonRenderer, TextRenderer, layout_to_dict


def sample_result():
    return full_layout(
        make_tasks(
            ("p", 1, ["s1", "s2"]),
            ("s1", 2),
            ("s2", 3),
            ("t", 1, [], ["p", "s1"]),
        )
    )


class TestJsonRenderer:
    def test_contract_keys(self):
        data = layout_to_dict(sample_result())
        group, s1, s2, t = data["nodes"]
        assert group["id"] == "group-p"
        assert group["kind"] == "group"
        assert group["subtaskIds"] == ["s1", "s2"]
        assert group["totalEstimate"] == 6
        assert s1["parentGroupId"] == "group-p"
        assert s1["isSubtask"] is True
        assert "parentGroupId" not in t
        assert "subtaskIds" not in t
        assert t["position"]["y"] == group["height"] + 200

    def test_edges(self):
        data = layout_to_dict(sample_result())
        assert data["edges"] == [
            {
                "id": "blocks-p-t",
                "source": "group-p",
                "target": "t",
                "relationship": "blocks",
                "sourceTaskId": "p",
                "targetTaskId": "t",
            },
            {
                "id": "blocks-s1-t",
                "source": "s1",
                "target": "t",
                "relationship": "blocks",
                "sourceTaskId": "s1",
                "targetTaskId": "t",
            },
        ]

    def test_render_is_valid_json(self):
        text = JsonRenderer().render(sample_result())
        assert orjson.loads(text) == layout_to_dict(sample_result())

    def test_compact_output(self):
        text = JsonRenderer(indent=False).render(sample_result())
        assert "\n" not in text


class TestTextRenderer:
    def test_lists_nodes_and_edges(self):
        out = TextRenderer().render(sample_result())
        assert out.startswith("Nodes (4):")
        assert "group group-p  at (0, 0)" in out
        assert "    leaf  s1  at (20, 120)" in out
        assert "Edges (2):" in out
        assert "  group-p -blocks-> t" in out
        assert "Warnings" not in out

    def test_marks_cycles(self):
        result = full_layout(make_tasks(("a", 1, [], ["b"]), ("b", 1, [], ["a"])))
        out = TextRenderer().render(result)
        assert "(circular dependency)" in out
        assert "Warnings (1):" in out
        assert "W_CIRCULAR_DEPENDENCY" in out
