import pytest

from button_machine.batch import run, solve_batch
from button_machine.config import SolverConfig
from button_machine.errors import UnsolvableError
from button_machine.io import parse_machines


def test_example_totals(example_machines) -> None:
    assert solve_batch(example_machines, "lights").total == 7
    assert solve_batch(example_machines, "joltage").total == 33


def test_batch_report_shape(example_machines) -> None:
    report = solve_batch(example_machines, "joltage")
    payload = report.model_dump(mode="json")
    assert payload["kind"] == "joltage"
    assert payload["backend"] == "parity"
    assert [m["index"] for m in payload["machines"]] == [0, 1, 2]
    assert [m["line_number"] for m in payload["machines"]] == [1, 2, 3]
    assert [m["presses"] for m in payload["machines"]] == [10, 12, 11]


def test_z3_backend_totals(example_machines) -> None:
    config = SolverConfig(joltage_backend="z3")
    report = solve_batch(example_machines, "joltage", config)
    assert report.backend == "z3"
    assert report.total == 33


def test_parallel_matches_sequential(example_machines) -> None:
    config = SolverConfig(workers=2)
    assert solve_batch(example_machines, "lights", config).total == 7
    assert solve_batch(example_machines, "joltage", config).total == 33


def test_first_unsolvable_machine_aborts_batch() -> None:
    machines = parse_machines("[#.] (0) {1,0}\n\n[.#] (0) {0,1}\n[.#] (0) {0,1}\n")
    with pytest.raises(UnsolvableError) as info:
        solve_batch(machines, "lights")
    assert info.value.machine_index == 1
    assert info.value.line_number == 3
    assert "machine 1 (line 3)" in str(info.value)

    with pytest.raises(UnsolvableError, match="No joltage solution for machine 1"):
        solve_batch(machines, "joltage")


def test_parallel_reports_first_unsolvable_machine() -> None:
    machines = parse_machines("[#] (0) {1}\n[.#] (0) {0,1}\n[.#] (0) {0,1}\n")
    with pytest.raises(UnsolvableError) as info:
        solve_batch(machines, "joltage", SolverConfig(workers=2))
    assert info.value.machine_index == 1


def test_machine_without_joltage_counts_zero() -> None:
    machines = parse_machines("[#.] (0) (1)\n")
    assert solve_batch(machines, "joltage").total == 0


def test_run_report(example_machines) -> None:
    report = run(example_machines, input_path="machines.txt")
    payload = report.model_dump(mode="json")
    assert payload["n_machines"] == 3
    assert payload["input"] == "machines.txt"
    assert payload["lights"]["total"] == 7
    assert payload["joltage"]["total"] == 33
    assert payload["config"]["joltage_backend"] == "parity"
    assert "generated_at" in payload
