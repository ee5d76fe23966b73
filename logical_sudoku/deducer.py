from collections import Counter
from typing import Dict, FrozenSet, List, Optional, Sequence

from .grid import SWEEP_ORDER, UNIT_FAMILIES, Grid, Idx, Step, cell_name, unit_label


def unit_snapshot(grid: Grid, unit: Sequence[Idx]) -> Dict[Idx, FrozenSet[int]]:
    return {idx: frozenset(grid.cands[idx]) for idx in unit if grid.values[idx] == 0}


def find_naked_singles(grid: Grid, unit: Sequence[Idx], label: str = "") -> List[Step]:
    steps: List[Step] = []
    for idx in unit:
        if grid.values[idx] == 0 and len(grid.cands[idx]) == 1:
            d = next(iter(grid.cands[idx]))
            step = Step("Naked Single", label, fills=[(idx, d)], note=f"{cell_name(idx)}={d}")
            if grid.apply_step(step):
                steps.append(step)
    return steps


def find_hidden_singles(grid: Grid, unit: Sequence[Idx], label: str = "") -> List[Step]:
    # digit -> only cell holding it, or None once a second cell is seen
    owners: Dict[int, Optional[Idx]] = {}
    for idx in unit:
        if grid.values[idx] != 0:
            continue
        for d in sorted(grid.cands[idx]):
            if d not in owners:
                owners[d] = idx
            elif owners[d] != idx:
                owners[d] = None

    steps: List[Step] = []
    for d, idx in sorted(owners.items()):
        if idx is None or grid.values[idx] != 0:
            continue
        step = Step("Hidden Single", label, fills=[(idx, d)], note=f"{cell_name(idx)}={d}")
        if grid.apply_step(step):
            steps.append(step)
    return steps


def find_hidden_subsets(grid: Grid, unit: Sequence[Idx], label: str = "") -> List[Step]:
    snap = unit_snapshot(grid, unit)
    occurrences = Counter(d for cands in snap.values() for d in cands)

    steps: List[Step] = []
    for k in range(2, len(snap)):
        digits = [d for d in sorted(occurrences) if occurrences[d] == k]
        if len(digits) < k:
            continue

        clusters: Dict[FrozenSet[Idx], List[int]] = {}
        for d in digits:
            spots = frozenset(idx for idx, cands in snap.items() if d in cands)
            clusters.setdefault(spots, []).append(d)

        for spots, cluster in clusters.items():
            if len(cluster) != k:
                continue
            allowed = set(cluster)
            elims = [(idx, d) for idx in sorted(spots) if len(grid.cands[idx]) > k
                     for d in sorted(grid.cands[idx] - allowed)]
            if not elims:
                continue
            step = Step("Hidden Subset", label, eliminations=elims,
                        note=f"{sorted(cluster)} in {[cell_name(i) for i in sorted(spots)]}")
            if grid.apply_step(step):
                steps.append(step)
    return steps


def find_naked_subsets(grid: Grid, unit: Sequence[Idx], label: str = "") -> List[Step]:
    snap = unit_snapshot(grid, unit)

    steps: List[Step] = []
    for k in range(2, len(snap)):
        clusters: Dict[FrozenSet[int], List[Idx]] = {}
        for idx, cands in snap.items():
            if len(cands) == k:
                clusters.setdefault(cands, []).append(idx)

        for digits, cells in clusters.items():
            if len(cells) != k:
                continue
            elims = [(idx, d) for idx in unit if idx not in cells and grid.values[idx] == 0
                     for d in sorted(digits & grid.cands[idx])]
            if not elims:
                continue
            step = Step("Naked Subset", label, eliminations=elims,
                        note=f"{sorted(digits)} in {[cell_name(i) for i in cells]}")
            if grid.apply_step(step):
                steps.append(step)
    return steps


def deduce_unit(grid: Grid, unit: Sequence[Idx], label: str = "") -> List[Step]:
    steps = find_naked_singles(grid, unit, label)
    steps += find_hidden_singles(grid, unit, label)
    steps += find_hidden_subsets(grid, unit, label)
    steps += find_naked_subsets(grid, unit, label)
    return steps


def deduce(grid: Grid, order: Sequence[str] = SWEEP_ORDER) -> List[Step]:
    steps: List[Step] = []
    for family in order:
        for n, unit in enumerate(UNIT_FAMILIES[family]):
            steps += deduce_unit(grid, unit, unit_label(family, n))
    return steps


def committed(steps: Sequence[Step]) -> bool:
    return any(step.fills for step in steps)
