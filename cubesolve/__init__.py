"""
Cubesolve - 3x3x3 cube engine and two-phase solver

A deterministic engine for the 54-facelet cube with a two-phase solver.
The package provides:
- Facelet state parsing and formatting
- The 18 face turns and sequence simplification
- Validation (color counts and solvability)
- Coordinate tables and a two-phase IDA* search
"""

from .engine_core import (
    Color,
    Face,
    CubeState,
    Move,
    InvalidConfigurationError,
    apply_move,
    apply_moves,
    format_moves,
    is_solved,
    is_valid,
    optimize,
    parse_moves,
    solved_state,
)
from .search import SolverConfig, SolveResult, SolveStatus, TwoPhaseSolver, solve

__version__ = "0.1.0"

__all__ = [
    "Color",
    "Face",
    "CubeState",
    "Move",
    "InvalidConfigurationError",
    "apply_move",
    "apply_moves",
    "format_moves",
    "is_solved",
    "is_valid",
    "optimize",
    "parse_moves",
    "solved_state",
    "SolverConfig",
    "SolveResult",
    "SolveStatus",
    "TwoPhaseSolver",
    "solve",
]
