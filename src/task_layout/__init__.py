"""task_layout — timeline layout for task forests with blocking dependencies."""

from loguru import logger

from task_layout.graph import TaskGraph, TaskKind, build_maps
from task_layout.layout import LayoutConfig, LayoutResult, full_layout, full_layout_with_config
from task_layout.model import Task, TaskRecord, hydrate_tasks

__version__ = "0.1.0"

# Library code stays quiet unless an application opts in.
logger.disable("task_layout")

__all__ = [
    "LayoutConfig",
    "LayoutResult",
    "Task",
    "TaskGraph",
    "TaskKind",
    "TaskRecord",
    "build_maps",
    "full_layout",
    "full_layout_with_config",
    "hydrate_tasks",
]
