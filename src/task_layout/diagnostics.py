"""Recoverable layout diagnostics.

Malformed task data never aborts a layout; each problem is logged and recorded
as a ``LayoutWarning`` so the caller can surface it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

W_DUPLICATE_TASK = "W_DUPLICATE_TASK"
W_DANGLING_SUBTASK = "W_DANGLING_SUBTASK"
W_DANGLING_BLOCKER = "W_DANGLING_BLOCKER"
W_SHARED_SUBTASK = "W_SHARED_SUBTASK"
W_NEGATIVE_ESTIMATE = "W_NEGATIVE_ESTIMATE"
W_SUBTASK_CYCLE = "W_SUBTASK_CYCLE"
W_CIRCULAR_DEPENDENCY = "W_CIRCULAR_DEPENDENCY"


@dataclass(frozen=True)
class LayoutWarning:
    code: str
    message: str
    task_ids: tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def warn(sink: list[LayoutWarning], code: str, message: str, *task_ids: str) -> LayoutWarning:
    """Log a warning and append it to ``sink``."""
    warning = LayoutWarning(code=code, message=message, task_ids=tuple(task_ids))
    logger.warning("{}: {}", code, message)
    sink.append(warning)
    return warning
