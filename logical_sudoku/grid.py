import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

import numpy as np

log = logging.getLogger(__name__)

DIGITS: Tuple[int, ...] = tuple(range(1, 10))

Idx = int
Pos = Tuple[int, int]


def rc_to_idx(r: int, c: int) -> Idx:
    return r * 9 + c


def idx_to_rc(i: Idx) -> Pos:
    return divmod(i, 9)


def box_of(i: Idx) -> int:
    r, c = idx_to_rc(i)
    return (r // 3) * 3 + (c // 3)


def cell_name(i: Idx) -> str:
    r, c = idx_to_rc(i)
    return f"r{r+1}c{c+1}"


ROW_UNITS: List[List[Idx]] = [[rc_to_idx(r, c) for c in range(9)] for r in range(9)]
COL_UNITS: List[List[Idx]] = [[rc_to_idx(r, c) for r in range(9)] for c in range(9)]
BOX_UNITS: List[List[Idx]] = []
for br in range(0, 9, 3):
    for bc in range(0, 9, 3):
        BOX_UNITS.append([rc_to_idx(r, c) for r in range(br, br + 3) for c in range(bc, bc + 3)])
UNITS: List[List[Idx]] = ROW_UNITS + COL_UNITS + BOX_UNITS

UNIT_FAMILIES: Dict[str, List[List[Idx]]] = {
    "rows": ROW_UNITS,
    "columns": COL_UNITS,
    "blocks": BOX_UNITS,
}
FAMILY_LABELS: Dict[str, str] = {"rows": "row", "columns": "column", "blocks": "block"}
SWEEP_ORDER: Tuple[str, ...] = ("rows", "columns", "blocks")

PEERS: List[Set[Idx]] = [set() for _ in range(81)]
for i in range(81):
    r, c = idx_to_rc(i)
    for j in ROW_UNITS[r] + COL_UNITS[c] + BOX_UNITS[box_of(i)]:
        if j != i:
            PEERS[i].add(j)


def unit_label(family: str, n: int) -> str:
    return f"{FAMILY_LABELS[family]} {n+1}"


class ContradictionError(Exception):
    def __init__(self, message: str, index: Optional[Idx] = None, digit: Optional[int] = None):
        super().__init__(message)
        self.index = index
        self.digit = digit

    @property
    def row(self) -> Optional[int]:
        return None if self.index is None else self.index // 9

    @property
    def col(self) -> Optional[int]:
        return None if self.index is None else self.index % 9


@dataclass
class Step:
    technique: str
    unit: str = ""
    fills: List[Tuple[Idx, int]] = field(default_factory=list)
    eliminations: List[Tuple[Idx, int]] = field(default_factory=list)
    note: str = ""


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    value: int
    candidates: FrozenSet[int]

    @property
    def fixed(self) -> bool:
        return self.value != 0


class Grid:
    """9x9 board: fixed values plus one candidate set per cell.

    Both are flat lists indexed by ``r * 9 + c``; rows, columns and blocks are
    index lists into them, so an edit made through one group is seen by the
    other two.
    """

    def __init__(self) -> None:
        self.values: List[int] = [0] * 81
        self.cands: List[Set[int]] = [set(DIGITS) for _ in range(81)]

    @classmethod
    def from_rows(cls, rows) -> "Grid":
        grid = cls()
        grid.load(rows)
        return grid

    def load(self, rows) -> None:
        arr = np.asarray(rows)
        if arr.shape != (9, 9):
            raise ValueError(f"grid must be 9x9, got shape {arr.shape}")
        self.values = [int(v) for v in arr.reshape(81)]
        self.cands = [set(DIGITS) for _ in range(81)]
        self.normalize()

    def normalize(self) -> None:
        for idx in range(81):
            v = self.values[idx]
            if v < 0 or v > 9:
                log.debug("malformed value %d at %s reset to blank", v, cell_name(idx))
                self.values[idx] = 0
            elif v != 0:
                self.cands[idx].clear()

    def finished(self) -> bool:
        return all(v != 0 for v in self.values)

    def validate(self) -> None:
        for unit in UNITS:
            self.validate_unit(unit)

    def validate_unit(self, unit: Iterable[Idx]) -> None:
        seen: Set[int] = set()
        for idx in unit:
            v = self.values[idx]
            if v == 0:
                continue
            if v in seen:
                raise ContradictionError(f"duplicate digit {v} at {cell_name(idx)}", idx, v)
            seen.add(v)

    def discard(self, idx: Idx, d: int) -> bool:
        if self.values[idx] != 0 or d not in self.cands[idx]:
            return False
        self.cands[idx].discard(d)
        if not self.cands[idx]:
            raise ContradictionError(f"candidate wipeout at {cell_name(idx)}", idx, d)
        return True

    def commit(self, idx: Idx, v: int) -> None:
        if v not in self.cands[idx]:
            raise ContradictionError(f"invalid fill {v} at {cell_name(idx)}", idx, v)
        self.values[idx] = v
        self.cands[idx].clear()
        try:
            self.validate()
        except ContradictionError as e:
            raise ContradictionError(f"committing {v} at {cell_name(idx)}: {e}", idx, v) from e
        for p in PEERS[idx]:
            self.discard(p, v)

    def apply_step(self, step: Step) -> bool:
        changed = False

        for idx, d in sorted(set(step.eliminations)):
            if self.discard(idx, d):
                changed = True

        for idx, v in step.fills:
            if self.values[idx] == 0:
                self.commit(idx, v)
                changed = True
            elif self.values[idx] != v:
                raise ContradictionError(f"conflicting fill at {cell_name(idx)}", idx, v)

        if changed:
            log.debug("%s %s: fills=%s eliminations=%s %s", step.technique, step.unit,
                      step.fills, step.eliminations, step.note)
        return changed

    def cell(self, r: int, c: int) -> Cell:
        idx = rc_to_idx(r, c)
        return Cell(r, c, self.values[idx], frozenset(self.cands[idx]))

    def value_grid(self) -> np.ndarray:
        return np.array(self.values, dtype=int).reshape(9, 9)

    def candidate_grid(self) -> List[List[FrozenSet[int]]]:
        return [[frozenset(self.cands[rc_to_idx(r, c)]) for c in range(9)] for r in range(9)]
