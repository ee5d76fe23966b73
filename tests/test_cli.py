import json
import logging

import pytest

from logical_sudoku import cli

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_file_gets_logic_solve_objects(tmp_path, capsys):
    path = tmp_path / "pack.json"
    data = {"puzzles": [
        {"id": "easy", "givens": PUZZLE, "solution": SOLUTION},
        {"id": "dup", "givens": "55" + PUZZLE[2:]},
        {"id": "short", "givens": PUZZLE[:10]},
    ]}
    path.write_text(json.dumps(data), encoding="utf-8")

    cli.main([str(path), "--keep-trace"])

    out = json.loads((tmp_path / "pack.solved.json").read_text(encoding="utf-8"))
    easy, dup, short = (p["logicSolve"] for p in out["puzzles"])
    assert easy["state"] == "solved"
    assert easy["matchesProvidedSolution"] is True
    assert easy["finalGrid"] == SOLUTION
    assert easy["trace"]
    assert dup["state"] == "contradiction"
    assert dup["cell"] == "r1c2"
    assert short["state"] == "invalid"

    summary = capsys.readouterr().out
    assert "total=3 solved=1 stuck=0 contradiction=1 invalid=1" in summary


def test_inplace_rewrites_source(tmp_path):
    path = tmp_path / "pack.json"
    path.write_text(json.dumps({"puzzles": [{"givens": PUZZLE}]}), encoding="utf-8")
    cli.main([str(path), "--inplace"])
    out = json.loads(path.read_text(encoding="utf-8"))
    assert out["puzzles"][0]["logicSolve"]["state"] == "solved"
    assert "trace" not in out["puzzles"][0]["logicSolve"]


def test_text_file_prints_one_line_per_puzzle(tmp_path, capsys):
    path = tmp_path / "puzzles.txt"
    path.write_text(f"{PUZZLE}\n\n{SOLUTION}\n", encoding="utf-8")
    cli.main([str(path)])
    out = capsys.readouterr().out
    assert f"1: solved {SOLUTION}" in out
    assert f"3: solved {SOLUTION}" in out
    assert "total=2 solved=2" in out


def test_single_line_prints_grid(capsys):
    cli.main(["--line", PUZZLE])
    out = capsys.readouterr().out
    assert "SOLVED after" in out
    assert "534|678|912" in out


def test_log_file_receives_trace(tmp_path):
    log_path = tmp_path / "log.txt"
    cli.main(["--line", PUZZLE, "--verbose", "--log-file", str(log_path)])
    text = log_path.read_text(encoding="utf-8")
    assert "Naked Single" in text or "Hidden Single" in text


def test_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit):
        cli.main([str(tmp_path / "nope.json")])
