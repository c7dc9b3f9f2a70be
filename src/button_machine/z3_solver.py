from __future__ import annotations

import logging
from typing import Iterable, Sequence

import z3

from .errors import UnsolvableError
from .joltage import JoltageSolution
from .machine import Machine, check_indices


logger = logging.getLogger(__name__)


def solve_joltage_z3(joltage: Sequence[int], buttons: Sequence[Iterable[int]]) -> JoltageSolution:
    """Integer-programming formulation of the joltage problem, minimized by z3."""
    button_sets = tuple(frozenset(b) for b in buttons)
    target = tuple(joltage)
    n_counters = len(target)
    n_buttons = len(button_sets)

    if n_counters == 0:
        return JoltageSolution(presses=0, counts=(0,) * n_buttons)
    check_indices(button_sets, n_counters, "counter")

    for i, t in enumerate(target):
        if t > 0 and not any(i in indices for indices in button_sets):
            raise UnsolvableError("joltage", f"counter {i} needs {t} but no button touches it")

    opt = z3.Optimize()
    x = [z3.Int(f"x_{b}") for b in range(n_buttons)]
    for xb in x:
        opt.add(xb >= 0)
    for i, t in enumerate(target):
        terms = [x[b] for b, indices in enumerate(button_sets) if i in indices]
        opt.add(z3.Sum(terms) == t if terms else z3.IntVal(0) == t)
    opt.minimize(z3.Sum(x) if x else z3.IntVal(0))

    status = opt.check()
    if status != z3.sat:
        raise UnsolvableError("joltage", f"z3 returned {status}")

    model = opt.model()
    counts = tuple(model.eval(xb, model_completion=True).as_long() for xb in x)
    logger.debug("joltage z3: counters=%d buttons=%d presses=%d", n_counters, n_buttons, sum(counts))
    return JoltageSolution(presses=sum(counts), counts=counts)


def solve_machine_joltage_z3(machine: Machine) -> JoltageSolution:
    return solve_joltage_z3(machine.joltage, machine.buttons)
