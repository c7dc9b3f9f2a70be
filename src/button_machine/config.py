from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_MAX_BUTTONS = 20
DEFAULT_MAX_FREE_VARIABLES = 24


class SolveKind(str, Enum):
    lights = "lights"
    joltage = "joltage"


class JoltageBackend(str, Enum):
    parity = "parity"
    z3 = "z3"


class SolverConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    joltage_backend: JoltageBackend = JoltageBackend.parity
    workers: int = Field(1, ge=1)
    # 2^max_buttons patterns are tabulated per machine by the parity solver.
    max_buttons: int = Field(DEFAULT_MAX_BUTTONS, ge=0, le=30)
    max_free_variables: int = Field(DEFAULT_MAX_FREE_VARIABLES, ge=0, le=30)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SolverConfig":
        data = _load_yaml(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid solver config: {path}\n{exc}") from exc


def _load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML: {p}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid solver config: {path}\nexpected a mapping, got {type(data).__name__}")
    return data
