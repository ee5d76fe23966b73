from typing import List, Sequence

from .grid import SWEEP_ORDER, UNIT_FAMILIES, Grid, Step, cell_name, unit_label


def eliminate(grid: Grid, order: Sequence[str] = SWEEP_ORDER) -> List[Step]:
    """Remove every fixed value from the candidates of its group peers."""
    grid.normalize()
    steps: List[Step] = []
    for family in order:
        for n, unit in enumerate(UNIT_FAMILIES[family]):
            for idx in unit:
                v = grid.values[idx]
                if v == 0:
                    continue
                elims = [(p, v) for p in unit if p != idx and grid.values[p] == 0 and v in grid.cands[p]]
                if not elims:
                    continue
                step = Step("Elimination", unit_label(family, n), eliminations=elims,
                            note=f"{cell_name(idx)}={v}")
                if grid.apply_step(step):
                    steps.append(step)
    return steps
