"""
Engine Core - Facelet cube state and the moves that act on it.

The engine is the runtime that:
1. Parses and formats 54-facelet states
2. Names the 18 face turns
3. Applies turns via the reducer
4. Generates non-redundant successor moves
5. Checks color counts and solvability
6. Simplifies move sequences
"""

from .state import Color, Face, CubeState, CubeParseError, solved_state, is_solved
from .move import Move, UnknownMoveError, ALL_MOVES, PHASE2_MOVES, parse_moves, format_moves
from .reducer import Reducer, apply_move, apply_moves, replay
from .move_generator import MoveGenerator, legal_moves, random_scramble
from .validation import InvalidConfigurationError, ValidationResult, is_valid, validate_state
from .optimizer import optimize, invert

__all__ = [
    "Color",
    "Face",
    "CubeState",
    "CubeParseError",
    "solved_state",
    "is_solved",
    "Move",
    "UnknownMoveError",
    "ALL_MOVES",
    "PHASE2_MOVES",
    "parse_moves",
    "format_moves",
    "Reducer",
    "apply_move",
    "apply_moves",
    "replay",
    "MoveGenerator",
    "legal_moves",
    "random_scramble",
    "InvalidConfigurationError",
    "ValidationResult",
    "is_valid",
    "validate_state",
    "optimize",
    "invert",
]
