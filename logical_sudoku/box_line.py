from typing import List

from .grid import BOX_UNITS, COL_UNITS, DIGITS, ROW_UNITS, Grid, Step, idx_to_rc


def reduce_box_lines(grid: Grid) -> List[Step]:
    """Pointing pairs/triples: a digit confined to one line of a block leaves the rest of that line."""
    steps: List[Step] = []
    for b, box in enumerate(BOX_UNITS):
        members = set(box)
        for d in DIGITS:
            spots = [idx for idx in box if grid.values[idx] == 0 and d in grid.cands[idx]]
            if len(spots) not in (2, 3):
                continue
            rows = {idx_to_rc(i)[0] for i in spots}
            cols = {idx_to_rc(i)[1] for i in spots}

            if len(rows) == 1:
                line = next(iter(rows))
                unit, label = ROW_UNITS[line], f"row {line+1}"
            elif len(cols) == 1:
                line = next(iter(cols))
                unit, label = COL_UNITS[line], f"column {line+1}"
            else:
                continue

            elims = [(idx, d) for idx in unit
                     if idx not in members and grid.values[idx] == 0 and d in grid.cands[idx]]
            if not elims:
                continue
            step = Step("Box-Line Reduction", f"block {b+1}", eliminations=elims,
                        note=f"digit {d} pointing along {label}")
            if grid.apply_step(step):
                steps.append(step)
    return steps
