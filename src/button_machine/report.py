from __future__ import annotations

from pydantic import BaseModel, Field

from .config import SolveKind, SolverConfig


class MachineResult(BaseModel):
    index: int = Field(..., ge=0)
    line_number: int | None = None
    presses: int = Field(..., ge=0)
    counts: list[int]


class BatchReport(BaseModel):
    kind: SolveKind
    backend: str
    total: int = Field(..., ge=0)
    machines: list[MachineResult]

    @classmethod
    def from_results(cls, kind: SolveKind, backend: str, results: list[MachineResult]) -> "BatchReport":
        return cls(kind=kind, backend=backend, total=sum(r.presses for r in results), machines=results)


class RunReport(BaseModel):
    generated_at: str
    input: str | None = None
    n_machines: int = Field(..., ge=0)
    config: SolverConfig
    lights: BatchReport
    joltage: BatchReport
    notes: list[str] = Field(default_factory=list)
