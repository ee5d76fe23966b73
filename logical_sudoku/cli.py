import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .grid import Grid, Step, cell_name
from .solver import SolveResult, solve, solve_line
from .text_io import format_candidates, format_grid, parse_line


def step_to_json(step: Step) -> Dict[str, object]:
    return {
        "technique": step.technique,
        "unit": step.unit,
        "fills": [{"cell": cell_name(idx), "digit": d} for idx, d in step.fills],
        "eliminations": [{"cell": cell_name(idx), "digit": d} for idx, d in step.eliminations],
        "note": step.note,
    }


def result_to_json(result: SolveResult, keep_trace: bool = False) -> Dict[str, object]:
    obj: Dict[str, object] = {
        "version": "Logic-v1",
        "state": result.state.value,
        "passes": result.passes,
        "steps": len(result.steps),
        "techniqueCounts": result.technique_counts,
        "finalGrid": result.final_grid,
    }
    if result.error:
        obj["error"] = result.error
    if result.cell is not None:
        obj["cell"] = cell_name(result.cell)
        obj["digit"] = result.digit
    if keep_trace:
        obj["trace"] = [step_to_json(s) for s in result.steps]
    return obj


def solve_json_file(path: Path, write_path: Path, keep_trace: bool = False,
                    max_passes: Optional[int] = None) -> Dict[str, int]:
    data = json.loads(path.read_text(encoding="utf-8"))

    puzzles = data.get("puzzles", [])
    counts = {"total": len(puzzles), "solved": 0, "stuck": 0, "contradiction": 0, "invalid": 0}

    for puzzle in puzzles:
        try:
            result = solve_line(puzzle.get("givens", ""), max_passes=max_passes)
        except ValueError as e:
            counts["invalid"] += 1
            puzzle["logicSolve"] = {"version": "Logic-v1", "state": "invalid", "error": str(e)}
            continue
        counts[result.state.value] += 1

        obj = result_to_json(result, keep_trace=keep_trace)
        if puzzle.get("solution") and result.solved:
            obj["matchesProvidedSolution"] = puzzle["solution"] == result.final_grid
        puzzle["logicSolve"] = obj

    write_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return counts


def solve_text_file(path: Path, max_passes: Optional[int] = None) -> Dict[str, int]:
    counts = {"total": 0, "solved": 0, "stuck": 0, "contradiction": 0, "invalid": 0}
    for n, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        counts["total"] += 1
        try:
            result = solve_line(line, max_passes=max_passes)
        except ValueError as e:
            counts["invalid"] += 1
            print(f"{n}: invalid {e}")
            continue
        counts[result.state.value] += 1
        print(f"{n}: {result.state.value} {result.final_grid}")
    return counts


def print_result(result: SolveResult, grid: Grid) -> None:
    print(format_grid(grid))
    if result.stuck:
        print()
        print(format_candidates(grid))
    elif result.contradiction:
        print()
        print(format_candidates(grid, show_values=False))
    print(f"\n{result.state.value.upper()} after {result.passes} passes")
    if result.error:
        print(result.error)


def setup_logging(verbose: bool, log_file: Optional[str]) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        handlers=handlers,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Logical (non-guessing) Sudoku solver")
    parser.add_argument("paths", nargs="*", help="JSON files with puzzles[] or text files with one puzzle per line")
    parser.add_argument("--line", help="solve a single 81-char puzzle and print the grid")
    parser.add_argument("--inplace", action="store_true", help="write back to source JSON file")
    parser.add_argument("--keep-trace", action="store_true", help="store full step trace per puzzle")
    parser.add_argument("--max-passes", type=int, default=None, help="stop after this many passes")
    parser.add_argument("--verbose", action="store_true", help="log every step")
    parser.add_argument("--log-file", help="also write the log to this file")
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.log_file)

    if not args.line and not args.paths:
        parser.error("give --line or at least one path")

    if args.line:
        grid = Grid.from_rows(parse_line(args.line))
        print(format_grid(grid))
        print()
        result = solve(grid, max_passes=args.max_passes)
        print_result(result, grid)

    for name in args.paths:
        path = Path(name)
        if not path.exists():
            raise SystemExit(f"No such file: {path}")
        if path.suffix == ".json":
            out_path = path if args.inplace else path.with_suffix(".solved.json")
            summary = solve_json_file(path, out_path, keep_trace=args.keep_trace, max_passes=args.max_passes)
        else:
            out_path = path
            summary = solve_text_file(path, max_passes=args.max_passes)
        print(
            f"{out_path}: total={summary['total']} solved={summary['solved']} "
            f"stuck={summary['stuck']} contradiction={summary['contradiction']} invalid={summary['invalid']}"
        )


if __name__ == "__main__":
    main()
