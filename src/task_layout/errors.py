"""Error envelopes for the I/O and configuration edges of task_layout.

The layout core itself never raises for bad task data; it recovers and reports
``LayoutWarning`` entries instead. These errors only come from loading files.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskLayoutError(Exception):
    """Base error envelope: a stable code plus a human-readable message."""

    code: str
    message: str
    file: str | None = None
    path: str | None = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<tasks>"
        return f"{loc}: {self.code}: {self.message}"


class TaskLoadError(TaskLayoutError):
    pass


class LayoutConfigError(TaskLayoutError):
    pass
