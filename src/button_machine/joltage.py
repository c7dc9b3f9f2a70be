"""Minimum presses for the joltage counters, by parity reduction.

Every press count ``p_b`` can be written as ``2 * q_b + r_b`` with ``r_b`` in
{0, 1}. The low bits ``r`` (a *pattern* over the buttons) must produce exactly
the odd counters of the target; once they are applied, every remaining counter
is even and the problem halves: ``A q = (t - A r) / 2``. The total cost is
``popcount(r) + 2 * cost(q)``, minimized over all patterns with the right
parity. Reduced targets recur often, so each search memoizes on the target
vector.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, NamedTuple, Sequence

from pydantic import BaseModel, Field

from .config import DEFAULT_MAX_BUTTONS
from .errors import UnsolvableError
from .machine import Machine, check_indices


logger = logging.getLogger(__name__)


class JoltageSolution(BaseModel):
    presses: int = Field(..., ge=0)
    counts: tuple[int, ...]


class _Result(NamedTuple):
    cost: int | None
    presses: tuple[int, ...] | None


_UNSOLVABLE = _Result(None, None)


class PatternTable:
    """Button patterns grouped by the counter parities they produce.

    A pattern is a bitmask over buttons; its parity is a bitmask over counters
    with bit i set iff an odd number of the selected buttons touch counter i.
    Within each group, patterns are ordered by popcount so cheaper ones are
    tried first.
    """

    def __init__(self, buttons: Sequence[frozenset[int]], n_counters: int) -> None:
        self.buttons = tuple(buttons)
        self.n_counters = n_counters
        n_buttons = len(self.buttons)

        button_parity = [sum(1 << i for i in indices) for indices in self.buttons]
        parities = [0] * (1 << n_buttons)
        for mask in range(1, 1 << n_buttons):
            low = mask & -mask
            parities[mask] = parities[mask ^ low] ^ button_parity[low.bit_length() - 1]

        groups: dict[int, list[int]] = defaultdict(list)
        for mask, parity in enumerate(parities):
            groups[parity].append(mask)
        for patterns in groups.values():
            patterns.sort(key=lambda m: (m.bit_count(), m))
        self._by_parity = dict(groups)
        self._contributions: dict[int, tuple[int, ...]] = {}

    def __len__(self) -> int:
        return len(self._by_parity)

    def patterns_for(self, parity: int) -> list[int]:
        return self._by_parity.get(parity, [])

    def contribution(self, pattern: int) -> tuple[int, ...]:
        cached = self._contributions.get(pattern)
        if cached is not None:
            return cached
        counts = [0] * self.n_counters
        for b, indices in enumerate(self.buttons):
            if (pattern >> b) & 1:
                for i in indices:
                    counts[i] += 1
        out = tuple(counts)
        self._contributions[pattern] = out
        return out


def _halve(target: tuple[int, ...], contribution: tuple[int, ...]) -> tuple[int, ...] | None:
    reduced: list[int] = []
    for t, c in zip(target, contribution):
        rest = t - c
        if rest < 0 or rest & 1:
            return None
        reduced.append(rest >> 1)
    return tuple(reduced)


class _ReductionSearch:
    """One machine's search; the memo lives and dies with this object."""

    def __init__(self, table: PatternTable) -> None:
        self.table = table
        self.memo: dict[tuple[int, ...], _Result] = {}
        self._zero = _Result(0, (0,) * len(table.buttons))

    def solve(self, target: tuple[int, ...]) -> _Result:
        if not any(target):
            return self._zero
        cached = self.memo.get(target)
        if cached is not None:
            return cached

        parity = 0
        for i, t in enumerate(target):
            if t & 1:
                parity |= 1 << i

        best = _UNSOLVABLE
        for pattern in self.table.patterns_for(parity):
            pattern_cost = pattern.bit_count()
            if best.cost is not None and pattern_cost >= best.cost:
                break
            reduced = _halve(target, self.table.contribution(pattern))
            if reduced is None:
                continue
            sub = self.solve(reduced)
            if sub.cost is None or sub.presses is None:
                continue
            cost = pattern_cost + 2 * sub.cost
            if best.cost is None or cost < best.cost:
                presses = tuple(2 * p + ((pattern >> b) & 1) for b, p in enumerate(sub.presses))
                best = _Result(cost, presses)

        self.memo[target] = best
        return best


def solve_joltage(
    joltage: Sequence[int],
    buttons: Sequence[Iterable[int]],
    max_buttons: int | None = DEFAULT_MAX_BUTTONS,
) -> JoltageSolution:
    button_sets = tuple(frozenset(b) for b in buttons)
    target = tuple(joltage)
    n_counters = len(target)
    n_buttons = len(button_sets)

    if n_counters == 0:
        return JoltageSolution(presses=0, counts=(0,) * n_buttons)
    check_indices(button_sets, n_counters, "counter")
    if any(t < 0 for t in target):
        raise ValueError(f"joltage must be non-negative: {list(target)}")

    touched = set().union(*button_sets)
    for i, t in enumerate(target):
        if t > 0 and i not in touched:
            raise UnsolvableError("joltage", f"counter {i} needs {t} but no button touches it")

    if max_buttons is not None and n_buttons > max_buttons:
        raise ValueError(f"{n_buttons} buttons exceed max_buttons={max_buttons}")

    table = PatternTable(button_sets, n_counters)
    search = _ReductionSearch(table)
    result = search.solve(target)
    logger.debug(
        "joltage: counters=%d buttons=%d parity_groups=%d memo=%d",
        n_counters,
        n_buttons,
        len(table),
        len(search.memo),
    )
    if result.cost is None or result.presses is None:
        raise UnsolvableError("joltage", "no press pattern reaches the target")
    return JoltageSolution(presses=result.cost, counts=result.presses)


def min_joltage_presses(
    joltage: Sequence[int],
    buttons: Sequence[Iterable[int]],
    max_buttons: int | None = DEFAULT_MAX_BUTTONS,
) -> int:
    return solve_joltage(joltage, buttons, max_buttons).presses


def solve_machine_joltage(machine: Machine, max_buttons: int | None = DEFAULT_MAX_BUTTONS) -> JoltageSolution:
    return solve_joltage(machine.joltage, machine.buttons, max_buttons)
