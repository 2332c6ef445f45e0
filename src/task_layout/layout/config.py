"""Layout configuration — geometry constants with optional YAML overrides."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from task_layout.errors import LayoutConfigError
from task_layout.layout import types as t


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry used by one layout pass. Defaults are the module constants."""

    row_height: float = t.ROW_HEIGHT
    horizontal_gap: float = t.HORIZONTAL_GAP
    leaf_base_width: float = t.LEAF_BASE_WIDTH
    leaf_base_height: float = t.LEAF_BASE_HEIGHT
    leaf_max_width_scale: float = t.LEAF_MAX_WIDTH_SCALE
    group_base_width: float = t.GROUP_BASE_WIDTH
    group_min_width: float = t.GROUP_MIN_WIDTH
    group_max_width_scale: float = t.GROUP_MAX_WIDTH_SCALE
    group_header_height: float = t.GROUP_HEADER_HEIGHT
    subtask_row_height: float = t.SUBTASK_ROW_HEIGHT
    subtask_margin: float = t.SUBTASK_MARGIN
    subtask_row_gap: float = t.SUBTASK_ROW_GAP
    estimate_saturation: float = t.ESTIMATE_SATURATION

    def estimate_fraction(self, total_estimate: float) -> float:
        """``min(total / saturation, 1)``: how far width scaling has progressed."""
        return min(total_estimate / self.estimate_saturation, 1.0)


DEFAULT_CONFIG = LayoutConfig()


def load_layout_config(path: str | Path) -> LayoutConfig:
    """Load a YAML mapping of LayoutConfig field -> non-negative number.

    Fields left out keep their defaults; an empty file yields DEFAULT_CONFIG.
    """
    p = Path(path)
    if not p.exists():
        raise LayoutConfigError(code="E_CONFIG_NOT_FOUND", message="file does not exist", file=str(p))

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise LayoutConfigError(code="E_YAML_PARSE", message=str(e), file=str(p)) from e

    if raw is None:
        return DEFAULT_CONFIG
    if not isinstance(raw, dict):
        raise LayoutConfigError(
            code="E_INVALID_TOP_LEVEL",
            message="layout config must be a mapping of field -> number",
            file=str(p),
        )
    return config_from_mapping(raw, file=str(p))


def config_from_mapping(raw: dict[str, Any], file: str | None = None) -> LayoutConfig:
    known = {f.name for f in fields(LayoutConfig)}
    overrides: dict[str, float] = {}
    for key, value in raw.items():
        if key not in known:
            raise LayoutConfigError(
                code="E_UNKNOWN_FIELD",
                message=f"unknown layout setting: {key}",
                file=file,
                path=str(key),
            )
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise LayoutConfigError(
                code="E_INVALID_VALUE",
                message=f"{key} must be a non-negative number, got {value!r}",
                file=file,
                path=str(key),
            )
        if key == "estimate_saturation" and value == 0:
            raise LayoutConfigError(
                code="E_INVALID_VALUE",
                message="estimate_saturation must be greater than 0",
                file=file,
                path=str(key),
            )
        overrides[key] = float(value)
    return replace(DEFAULT_CONFIG, **overrides)
