from __future__ import annotations

import re
from pathlib import Path

from .errors import MalformedInputError
from .machine import Machine


_PATTERN_RE = re.compile(r"\[([^\[\]]*)\]")
_BUTTON_RE = re.compile(r"\(([^()]*)\)")
_JOLTAGE_RE = re.compile(r"\{([^{}]*)\}")
_INT_RE = re.compile(r"[0-9]+")


def _int_list(body: str, what: str, line_number: int | None) -> list[int]:
    items = [item.strip() for item in body.split(",")]
    out: list[int] = []
    for item in items:
        if not _INT_RE.fullmatch(item):
            raise MalformedInputError(f"non-numeric {what} entry: {item!r}", line_number)
        out.append(int(item))
    return out


def parse_machine(line: str, line_number: int | None = None) -> Machine:
    """Parse one ``[.##.] (3) (1,3) ... {3,5,4,7}`` line."""
    text = line.strip()

    patterns = _PATTERN_RE.findall(text)
    if len(patterns) != 1:
        raise MalformedInputError(f"expected exactly one [..] light pattern: {text!r}", line_number)
    pattern = patterns[0]
    if not pattern or any(ch not in ".#" for ch in pattern):
        raise MalformedInputError(f"light pattern must be '.'/'#' characters: [{pattern}]", line_number)

    joltages = _JOLTAGE_RE.findall(text)
    if len(joltages) > 1:
        raise MalformedInputError("more than one {..} joltage list", line_number)

    buttons = [_int_list(body, "button", line_number) for body in _BUTTON_RE.findall(text)]
    joltage = _int_list(joltages[0], "joltage", line_number) if joltages else []

    rest = _JOLTAGE_RE.sub(" ", _BUTTON_RE.sub(" ", _PATTERN_RE.sub(" ", text)))
    if rest.strip():
        raise MalformedInputError(f"unexpected text: {rest.strip()!r}", line_number)

    return Machine(
        target=tuple(ch == "#" for ch in pattern),
        buttons=tuple(frozenset(b) for b in buttons),
        joltage=tuple(joltage),
        line_number=line_number,
    )


def parse_machines(text: str) -> list[Machine]:
    machines: list[Machine] = []
    for n, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        machines.append(parse_machine(line, line_number=n))
    return machines


def load_machines(path: str | Path) -> list[Machine]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    return parse_machines(p.read_text(encoding="utf-8"))
