"""Renderers turn a LayoutResult into text for downstream consumers."""

from task_layout.renderers.base import Renderer
from task_layout.renderers.json import JsonRenderer, layout_to_dict
from task_layout.renderers.text import TextRenderer

__all__ = ["JsonRenderer", "Renderer", "TextRenderer", "layout_to_dict"]
