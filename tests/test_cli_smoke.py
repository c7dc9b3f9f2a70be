import json
from pathlib import Path

from button_machine.cli import main


def test_cli_runs_on_examples(capsys) -> None:
    repo_root = Path(__file__).resolve().parents[1]
    rc = main(
        [
            str(repo_root / "examples" / "machines.txt"),
            "--config",
            str(repo_root / "examples" / "solver.yaml"),
        ]
    )
    assert rc == 0
    assert capsys.readouterr().out == "7\n33\n"


def test_cli_json_report(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[1]
    out_path = tmp_path / "out" / "report.json"
    rc = main([str(repo_root / "examples" / "machines.txt"), "--json", "--output", str(out_path)])
    assert rc == 0

    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["lights"]["total"] == 7
    assert payload["joltage"]["total"] == 33
    assert len(payload["joltage"]["machines"]) == 3


def test_cli_reports_unsolvable_machine(tmp_path: Path, capsys) -> None:
    path = tmp_path / "machines.txt"
    path.write_text("[#] (0) {1}\n[.#] (0) {0,1}\n", encoding="utf-8")
    rc = main([str(path)])
    assert rc == 2
    err = capsys.readouterr().err
    assert "error: No lights solution for machine 1 (line 2)" in err


def test_cli_reports_malformed_input(tmp_path: Path, capsys) -> None:
    path = tmp_path / "machines.txt"
    path.write_text("[#] (0,x)\n", encoding="utf-8")
    rc = main([str(path)])
    assert rc == 2
    assert "line 1: non-numeric button entry" in capsys.readouterr().err
