from __future__ import annotations

import logging
from concurrent.futures import Future, ProcessPoolExecutor
from datetime import datetime, timezone
from typing import Sequence

from .config import JoltageBackend, SolveKind, SolverConfig
from .errors import UnsolvableError
from .joltage import solve_machine_joltage
from .lights import solve_machine_lights
from .machine import Machine
from .report import BatchReport, MachineResult, RunReport
from .z3_solver import solve_machine_joltage_z3


logger = logging.getLogger(__name__)


def _backend_name(kind: SolveKind, config: SolverConfig) -> str:
    if kind == SolveKind.lights:
        return "gf2"
    return config.joltage_backend.value


def _solve_one(machine: Machine, kind: SolveKind, config: SolverConfig) -> tuple[int, list[int]]:
    if kind == SolveKind.lights:
        lights = solve_machine_lights(machine, config.max_free_variables)
        return lights.presses, [int(p) for p in lights.pressed]

    if config.joltage_backend == JoltageBackend.z3:
        joltage = solve_machine_joltage_z3(machine)
    else:
        joltage = solve_machine_joltage(machine, config.max_buttons)
    return joltage.presses, list(joltage.counts)


def _result(index: int, machine: Machine, presses: int, counts: list[int]) -> MachineResult:
    return MachineResult(index=index, line_number=machine.line_number, presses=presses, counts=counts)


def _solve_sequential(
    machines: Sequence[Machine], kind: SolveKind, config: SolverConfig
) -> list[MachineResult]:
    results: list[MachineResult] = []
    for index, machine in enumerate(machines):
        try:
            presses, counts = _solve_one(machine, kind, config)
        except UnsolvableError as exc:
            raise exc.for_machine(index, machine.line_number) from exc
        logger.debug("%s machine %d: %d presses", kind.value, index, presses)
        results.append(_result(index, machine, presses, counts))
    return results


def _solve_parallel(
    machines: Sequence[Machine], kind: SolveKind, config: SolverConfig
) -> list[MachineResult]:
    results: list[MachineResult] = []
    with ProcessPoolExecutor(max_workers=config.workers) as pool:
        futures: list[Future[tuple[int, list[int]]]] = [
            pool.submit(_solve_one, machine, kind, config) for machine in machines
        ]
        # Collected in input order so a failure names the first unsolvable machine.
        for index, (machine, future) in enumerate(zip(machines, futures)):
            try:
                presses, counts = future.result()
            except UnsolvableError as exc:
                for pending in futures:
                    pending.cancel()
                raise exc.for_machine(index, machine.line_number) from exc
            logger.debug("%s machine %d: %d presses", kind.value, index, presses)
            results.append(_result(index, machine, presses, counts))
    return results


def solve_batch(
    machines: Sequence[Machine],
    kind: SolveKind | str,
    config: SolverConfig | None = None,
) -> BatchReport:
    """Solve every machine and sum the minima.

    Raises ``UnsolvableError`` naming the first machine (in input order) that has
    no solution; no partial total is returned in that case.
    """
    kind = SolveKind(kind)
    if config is None:
        config = SolverConfig()

    if config.workers > 1 and len(machines) > 1:
        results = _solve_parallel(machines, kind, config)
    else:
        results = _solve_sequential(machines, kind, config)

    report = BatchReport.from_results(kind, _backend_name(kind, config), results)
    logger.info("%s total over %d machines: %d", kind.value, len(machines), report.total)
    return report


def run(
    machines: Sequence[Machine],
    config: SolverConfig | None = None,
    input_path: str | None = None,
) -> RunReport:
    if config is None:
        config = SolverConfig()
    return RunReport(
        generated_at=datetime.now(timezone.utc).isoformat(),
        input=input_path,
        n_machines=len(machines),
        config=config,
        lights=solve_batch(machines, SolveKind.lights, config),
        joltage=solve_batch(machines, SolveKind.joltage, config),
        notes=[
            "Lights: GF(2) elimination with exhaustive search over free variables.",
            f"Joltage: exact minimum via the {config.joltage_backend.value} backend.",
        ],
    )
