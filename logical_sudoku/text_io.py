from typing import List

from .grid import Grid, rc_to_idx

BLANKS = ".0"
DIGIT_CHARS = "123456789"


def parse_line(line: str) -> List[List[int]]:
    s = line.strip()
    if len(s) != 81:
        raise ValueError("puzzle line must be exactly 81 chars")
    values = []
    for ch in s:
        if ch in DIGIT_CHARS:
            values.append(int(ch))
        elif ch in BLANKS:
            values.append(0)
        else:
            raise ValueError(f"invalid char in puzzle line: {ch}")
    return [values[i : i + 9] for i in range(0, 81, 9)]


def grid_to_string(grid: Grid) -> str:
    return "".join(str(v) if v else "." for v in grid.values)


def format_grid(grid: Grid) -> str:
    lines = []
    for r in range(9):
        row = ""
        for c in range(9):
            v = grid.values[rc_to_idx(r, c)]
            row += str(v) if v else " "
            if c in (2, 5):
                row += "|"
        lines.append(row)
        if r in (2, 5):
            lines.append("-----------")
    return "\n".join(lines)


def format_candidates(grid: Grid, show_values: bool = True) -> str:
    # each cell is a 3x3 block of its candidates, the value sits in the centre
    lines = []
    for r in range(9):
        for band in range(3):
            line = ""
            for c in range(9):
                idx = rc_to_idx(r, c)
                for k in range(band * 3 + 1, band * 3 + 4):
                    if k in grid.cands[idx]:
                        line += str(k)
                    elif show_values and k == 5 and grid.values[idx]:
                        line += str(grid.values[idx])
                    else:
                        line += " "
                line += " "
                if c in (2, 5):
                    line += "| "
            lines.append(line.rstrip())
        lines.append("-" * 39 if r in (2, 5) else "")
    return "\n".join(lines).rstrip("\n")
