from .grid import ContradictionError, Grid, Step
from .solver import SolveResult, SolveState, solve, solve_line
from .text_io import format_candidates, format_grid, grid_to_string, parse_line

__all__ = [
    "ContradictionError",
    "Grid",
    "Step",
    "SolveResult",
    "SolveState",
    "solve",
    "solve_line",
    "format_candidates",
    "format_grid",
    "grid_to_string",
    "parse_line",
]
