import pytest

from button_machine.errors import MalformedInputError
from button_machine.io import load_machines, parse_machine, parse_machines


def test_parse_machine_line() -> None:
    machine = parse_machine("[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}")
    assert machine.target == (False, True, True, False)
    assert machine.buttons[1] == frozenset({1, 3})
    assert machine.n_buttons == 6
    assert machine.joltage == (3, 5, 4, 7)


def test_joltage_is_optional() -> None:
    machine = parse_machine("[#.] (0) (0,1)")
    assert machine.joltage == ()
    assert machine.n_counters == 0


def test_parse_machines_skips_blank_lines_and_keeps_line_numbers() -> None:
    machines = parse_machines("[#] (0)\n\n[.] (0) {2}\n")
    assert [m.line_number for m in machines] == [1, 3]


@pytest.mark.parametrize(
    ("line", "match"),
    [
        ("(0) (1) {1,2}", "light pattern"),
        ("[.#x] (0)", "'.'/'#'"),
        ("[.#] (0,a)", "non-numeric button"),
        ("[.#] (0) {1,-2}", "non-numeric joltage"),
        ("[.#] (0) (1", "unexpected text"),
        ("[.#] () {1}", "non-numeric button"),
        ("[.#] (0) {1} {2}", "more than one"),
    ],
)
def test_malformed_lines_rejected(line: str, match: str) -> None:
    with pytest.raises(MalformedInputError, match=match):
        parse_machine(line)


def test_malformed_error_names_line(tmp_path) -> None:
    path = tmp_path / "machines.txt"
    path.write_text("[#] (0)\n[#] (zero)\n", encoding="utf-8")
    with pytest.raises(MalformedInputError, match="line 2") as info:
        load_machines(path)
    assert info.value.line_number == 2


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_machines(tmp_path / "nope.txt")
