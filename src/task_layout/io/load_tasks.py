from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import yaml

from task_layout.errors import TaskLoadError
from task_layout.model import Task, TaskRecord, hydrate_tasks


def load_tasks(path: str | Path) -> list[Task]:
    """Load a YAML/JSON task file and hydrate it into Tasks (file order kept)."""
    return hydrate_tasks(load_task_records(path))


def load_task_records(path: str | Path) -> list[TaskRecord]:
    """Load stored task records from a YAML/JSON file.

    The top level is either a list of records or a mapping with a ``tasks``
    list. Relationships are id lists (``subtaskIds``/``blockedByIds``); nested
    ``subtasks``/``blockedBy`` entries are reduced to their ids.
    """
    p = Path(path)
    if not p.exists():
        raise TaskLoadError(code="E_FILE_NOT_FOUND", message="file does not exist", file=str(p))

    suffix = p.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise TaskLoadError(
            code="E_UNSUPPORTED_FORMAT",
            message="supported formats are .yaml/.yml and .json",
            file=str(p),
        )

    raw_text = p.read_text(encoding="utf-8")
    try:
        data = orjson.loads(raw_text) if suffix == ".json" else yaml.safe_load(raw_text)
    except (orjson.JSONDecodeError, yaml.YAMLError) as e:
        code = "E_JSON_PARSE" if suffix == ".json" else "E_YAML_PARSE"
        raise TaskLoadError(code=code, message=str(e), file=str(p)) from e

    if data is None:
        return []
    if isinstance(data, dict):
        if "tasks" not in data:
            raise TaskLoadError(
                code="E_INVALID_TOP_LEVEL",
                message="top-level mapping must have a 'tasks' list",
                file=str(p),
                path="tasks",
            )
        data = data["tasks"] or []
    if not isinstance(data, list):
        raise TaskLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a list of tasks or a mapping with a 'tasks' list",
            file=str(p),
        )

    return [_record(item, index, str(p)) for index, item in enumerate(data)]


def _ids(value: Any) -> list[str]:
    out: list[str] = []
    for item in value or []:
        if isinstance(item, dict):
            if "id" in item:
                out.append(str(item["id"]))
        else:
            out.append(str(item))
    return out


def _record(item: Any, index: int, file: str) -> TaskRecord:
    where = f"tasks[{index}]"
    if not isinstance(item, dict):
        raise TaskLoadError(code="E_INVALID_TASK", message="task must be a mapping", file=file, path=where)
    if item.get("id") in (None, ""):
        raise TaskLoadError(code="E_INVALID_TASK", message="task is missing an id", file=file, path=where)

    estimate = item.get("estimate", 0)
    if isinstance(estimate, bool) or not isinstance(estimate, (int, float)):
        raise TaskLoadError(
            code="E_INVALID_TASK",
            message=f"estimate must be a number, got {estimate!r}",
            file=file,
            path=f"{where}.estimate",
        )
    if estimate < 0:
        raise TaskLoadError(
            code="E_INVALID_TASK",
            message=f"estimate must be non-negative, got {estimate}",
            file=file,
            path=f"{where}.estimate",
        )

    normalized = dict(item)
    if "subtaskIds" not in normalized and "subtask_ids" not in normalized:
        normalized["subtaskIds"] = _ids(item.get("subtasks"))
    if "blockedByIds" not in normalized and "blocked_by_ids" not in normalized:
        normalized["blockedByIds"] = _ids(item.get("blockedBy"))
    return TaskRecord.from_dict(normalized)
