import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .box_line import reduce_box_lines
from .deducer import committed, deduce
from .eliminator import eliminate
from .grid import SWEEP_ORDER, UNIT_FAMILIES, ContradictionError, Grid, Idx, Step
from .text_io import grid_to_string, parse_line

log = logging.getLogger(__name__)


class SolveState(Enum):
    RUNNING = "running"
    SOLVED = "solved"
    STUCK = "stuck"
    CONTRADICTION = "contradiction"


@dataclass
class SolveResult:
    state: SolveState
    final_grid: str
    steps: List[Step] = field(default_factory=list)
    technique_counts: Dict[str, int] = field(default_factory=dict)
    passes: int = 0
    error: str = ""
    cell: Optional[Idx] = None
    digit: Optional[int] = None

    @property
    def solved(self) -> bool:
        return self.state is SolveState.SOLVED

    @property
    def stuck(self) -> bool:
        return self.state is SolveState.STUCK

    @property
    def contradiction(self) -> bool:
        return self.state is SolveState.CONTRADICTION


def count_techniques(steps: Sequence[Step]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for st in steps:
        counts[st.technique] = counts.get(st.technique, 0) + 1
    return counts


def solve(grid: Grid, order: Sequence[str] = SWEEP_ORDER, max_passes: Optional[int] = None) -> SolveResult:
    for family in order:
        if family not in UNIT_FAMILIES:
            raise ValueError(f"unknown group family: {family}")

    steps: List[Step] = []
    passes = 0
    state = SolveState.RUNNING
    error = ""

    try:
        grid.normalize()
        grid.validate()

        while state is SolveState.RUNNING:
            if grid.finished():
                state = SolveState.SOLVED
                break
            if max_passes is not None and passes >= max_passes:
                state = SolveState.STUCK
                error = f"pass limit {max_passes} reached"
                break

            passes += 1
            log.debug("pass %d", passes)
            pass_steps = eliminate(grid, order)
            pass_steps += deduce(grid, order)
            pass_steps += reduce_box_lines(grid)
            steps += pass_steps

            if grid.finished():
                state = SolveState.SOLVED
            elif not committed(pass_steps):
                state = SolveState.STUCK
            else:
                log.debug("pass %d: %d steps", passes, len(pass_steps))
    except ContradictionError as e:
        log.warning("contradiction after %d passes: %s", passes, e)
        return SolveResult(
            state=SolveState.CONTRADICTION,
            final_grid=grid_to_string(grid),
            steps=steps,
            technique_counts=count_techniques(steps),
            passes=passes,
            error=str(e),
            cell=e.index,
            digit=e.digit,
        )

    log.info("%s after %d passes", state.value, passes)
    return SolveResult(
        state=state,
        final_grid=grid_to_string(grid),
        steps=steps,
        technique_counts=count_techniques(steps),
        passes=passes,
        error=error,
    )


def solve_line(line: str, order: Sequence[str] = SWEEP_ORDER, max_passes: Optional[int] = None) -> SolveResult:
    return solve(Grid.from_rows(parse_line(line)), order=order, max_passes=max_passes)
