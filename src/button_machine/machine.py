from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Machine(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: tuple[bool, ...] = ()
    buttons: tuple[frozenset[int], ...] = ()
    joltage: tuple[int, ...] = ()
    line_number: int | None = Field(default=None, ge=1)

    @field_validator("buttons")
    @classmethod
    def _validate_buttons(cls, v: tuple[frozenset[int], ...]) -> tuple[frozenset[int], ...]:
        for b, indices in enumerate(v):
            for i in indices:
                if i < 0:
                    raise ValueError(f"button {b} has negative index: {i}")
        return v

    @field_validator("joltage")
    @classmethod
    def _validate_joltage(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        for i, val in enumerate(v):
            if val < 0:
                raise ValueError(f"joltage must be non-negative: counter={i} val={val}")
        return v

    @property
    def n_lights(self) -> int:
        return len(self.target)

    @property
    def n_buttons(self) -> int:
        return len(self.buttons)

    @property
    def n_counters(self) -> int:
        return len(self.joltage)


def check_indices(buttons: tuple[frozenset[int], ...], size: int, what: str) -> None:
    """Raise ValueError if any button touches an index outside ``[0, size)``."""
    for b, indices in enumerate(buttons):
        for i in indices:
            if i < 0 or i >= size:
                raise ValueError(f"button {b} references {what} {i} (n_{what}s={size})")
