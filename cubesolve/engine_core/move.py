"""
Moves - The 18 legal face turns and their notation.

A move is a face plus a modifier: clockwise quarter turn, half turn, or
counter-clockwise quarter turn. Moves compare equal to their standard
notation strings ("R", "R2", "R'") so sequences can be written either way.
"""

from __future__ import annotations
import re
from enum import Enum
from typing import Iterable

from .state import Face


class UnknownMoveError(ValueError):
    """Raised when a move identifier is not one of the 18 legal moves."""


class Move(str, Enum):
    """A single face turn in standard notation."""
    U = "U"
    U2 = "U2"
    U_PRIME = "U'"
    R = "R"
    R2 = "R2"
    R_PRIME = "R'"
    F = "F"
    F2 = "F2"
    F_PRIME = "F'"
    D = "D"
    D2 = "D2"
    D_PRIME = "D'"
    L = "L"
    L2 = "L2"
    L_PRIME = "L'"
    B = "B"
    B2 = "B2"
    B_PRIME = "B'"

    @property
    def face(self) -> Face:
        return Face(self.value[0])

    @property
    def quarter_turns(self) -> int:
        """Number of clockwise quarter turns: 1, 2 or 3."""
        if self.value.endswith("'"):
            return 3
        if self.value.endswith("2"):
            return 2
        return 1

    @property
    def is_half_turn(self) -> bool:
        return self.quarter_turns == 2

    @property
    def inverse(self) -> Move:
        return Move.from_turns(self.face, -self.quarter_turns)

    @classmethod
    def from_turns(cls, face: Face | str, quarter_turns: int) -> Move | None:
        """
        Build the move that turns a face by the given number of quarter turns.

        Returns None when the net rotation is zero.
        """
        turns = quarter_turns % 4
        if turns == 0:
            return None
        suffix = {1: "", 2: "2", 3: "'"}[turns]
        return cls(Face(face).value + suffix)

    @classmethod
    def parse(cls, token: Move | str) -> Move:
        """Parse a notation token, raising UnknownMoveError if it is not legal."""
        if isinstance(token, Move):
            return token
        text = str(token).strip().replace("′", "'").replace("’", "'")
        try:
            return cls(text)
        except ValueError:
            raise UnknownMoveError(f"Unknown move: {token!r}") from None

    def __str__(self) -> str:
        return self.value


ALL_MOVES: tuple[Move, ...] = tuple(Move)

# Phase 2 only allows half turns on the four side faces.
PHASE2_MOVES: tuple[Move, ...] = (
    Move.U, Move.U2, Move.U_PRIME,
    Move.D, Move.D2, Move.D_PRIME,
    Move.R2, Move.F2, Move.L2, Move.B2,
)

_SEPARATORS = re.compile(r"[\s,]+")


def parse_moves(moves: str | Iterable[Move | str]) -> list[Move]:
    """
    Parse a move sequence.

    Accepts either a notation string ("R U R' U'", commas also allowed)
    or an iterable of tokens.
    """
    if isinstance(moves, str):
        tokens = [t for t in _SEPARATORS.split(moves) if t]
    else:
        tokens = list(moves)
    return [Move.parse(t) for t in tokens]


def format_moves(moves: Iterable[Move | str]) -> str:
    """Render a move sequence as space-separated notation."""
    return " ".join(Move.parse(m).value for m in moves)
