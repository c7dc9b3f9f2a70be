"""Minimum presses for the indicator lights, solved over GF(2).

Pressing a button toggles every light it is wired to, so pressing it twice is a
no-op and an optimal solution presses each button zero or one times. The
problem is therefore the linear system ``A x = t`` over GF(2), where column j of
``A`` is button j's light set, and we want the solution ``x`` of minimum Hamming
weight.

Rows of the augmented matrix are stored as int bitmasks: bit j is button j and
bit ``n_buttons`` holds the target light.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from pydantic import BaseModel, Field

from .config import DEFAULT_MAX_FREE_VARIABLES
from .errors import UnsolvableError
from .machine import Machine, check_indices


logger = logging.getLogger(__name__)


class LightsSolution(BaseModel):
    presses: int = Field(..., ge=0)
    pressed: tuple[bool, ...]


def _augmented_rows(target: Sequence[bool], buttons: Sequence[frozenset[int]]) -> list[int]:
    n_buttons = len(buttons)
    rows: list[int] = []
    for i, on in enumerate(target):
        row = 0
        for j, indices in enumerate(buttons):
            if i in indices:
                row |= 1 << j
        if on:
            row |= 1 << n_buttons
        rows.append(row)
    return rows


def _row_reduce(rows: list[int], n_buttons: int) -> list[int]:
    """Reduce ``rows`` in place to reduced row echelon form; return the pivot columns."""
    n_rows = len(rows)
    pivots: list[int] = []
    for col in range(n_buttons):
        rank = len(pivots)
        if rank == n_rows:
            break
        bit = 1 << col
        pivot_row = next((r for r in range(rank, n_rows) if rows[r] & bit), None)
        if pivot_row is None:
            continue
        rows[rank], rows[pivot_row] = rows[pivot_row], rows[rank]
        for r in range(n_rows):
            if r != rank and rows[r] & bit:
                rows[r] ^= rows[rank]
        pivots.append(col)
    return pivots


def _back_substitute(rows: list[int], pivots: list[int], n_buttons: int, assignment: int) -> int:
    coeff_mask = (1 << n_buttons) - 1
    for r in range(len(pivots) - 1, -1, -1):
        col = pivots[r]
        right = coeff_mask & ~((1 << (col + 1)) - 1)
        value = (rows[r] >> n_buttons) & 1
        value ^= (rows[r] & assignment & right).bit_count() & 1
        if value:
            assignment |= 1 << col
    return assignment


def solve_lights(
    target: Sequence[bool],
    buttons: Sequence[Iterable[int]],
    max_free_variables: int | None = DEFAULT_MAX_FREE_VARIABLES,
) -> LightsSolution:
    button_sets = tuple(frozenset(b) for b in buttons)
    n_lights = len(target)
    n_buttons = len(button_sets)
    if n_lights == 0:
        return LightsSolution(presses=0, pressed=(False,) * n_buttons)
    check_indices(button_sets, n_lights, "light")

    rows = _augmented_rows(target, button_sets)
    pivots = _row_reduce(rows, n_buttons)
    rank = len(pivots)

    for r in range(rank, n_lights):
        if (rows[r] >> n_buttons) & 1:
            raise UnsolvableError("lights", f"light system is inconsistent (rank={rank})")

    pivot_set = set(pivots)
    free = [col for col in range(n_buttons) if col not in pivot_set]
    if max_free_variables is not None and len(free) > max_free_variables:
        raise ValueError(
            f"{len(free)} free variables exceed max_free_variables={max_free_variables}"
        )
    logger.debug("lights: lights=%d buttons=%d rank=%d free=%d", n_lights, n_buttons, rank, len(free))

    best: int | None = None
    for mask in range(1 << len(free)):
        assignment = 0
        for k, col in enumerate(free):
            if (mask >> k) & 1:
                assignment |= 1 << col
        assignment = _back_substitute(rows, pivots, n_buttons, assignment)
        if best is None or assignment.bit_count() < best.bit_count():
            best = assignment

    assert best is not None
    pressed = tuple(bool((best >> j) & 1) for j in range(n_buttons))
    return LightsSolution(presses=best.bit_count(), pressed=pressed)


def min_light_presses(
    target: Sequence[bool],
    buttons: Sequence[Iterable[int]],
    max_free_variables: int | None = DEFAULT_MAX_FREE_VARIABLES,
) -> int:
    return solve_lights(target, buttons, max_free_variables).presses


def solve_machine_lights(
    machine: Machine, max_free_variables: int | None = DEFAULT_MAX_FREE_VARIABLES
) -> LightsSolution:
    return solve_lights(machine.target, machine.buttons, max_free_variables)
