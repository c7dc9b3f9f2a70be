from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .batch import run
from .config import SolverConfig
from .io import load_machines


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File not found: {value}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="button-machine", add_help=True)
    parser.add_argument("input", type=_existing_path, help="Machine descriptions, one per line")
    parser.add_argument("--config", type=_existing_path, default=None, help="Path to solver.yaml")
    parser.add_argument("--json", action="store_true", help="Emit the full report as JSON")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write output to this path (default: stdout)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log solver progress to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = SolverConfig.from_yaml(args.config) if args.config is not None else SolverConfig()
        machines = load_machines(args.input)
        report = run(machines, config=config, input_path=str(args.input))
    except Exception as exc:  # noqa: BLE001
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        payload = report.model_dump(mode="json")
        text = json.dumps(payload, indent=2, sort_keys=True)
    else:
        text = f"{report.lights.total}\n{report.joltage.total}"

    if args.output is None:
        print(text)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())
