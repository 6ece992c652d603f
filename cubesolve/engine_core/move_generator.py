"""
Move Generator - Enumerates the moves worth exploring after a given move.

The generator is used by:
1. The two-phase search to expand nodes
2. Scramble generation, so scrambles contain no trivially redundant turns

Two kinds of successor are skipped:
- a move on the same face as the previous move (the pair collapses to a
  single turn or nothing)
- the non-canonical order of two commuting opposite faces. Opposite faces
  commute, so only one order is explored: U before D, R before L, F before B.
  A U, R or F move never directly follows a D, L or B move.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from .state import Face
from .move import Move, ALL_MOVES, PHASE2_MOVES


# Faces that must come first when two opposite faces are adjacent in a sequence.
CANONICAL_FIRST = frozenset({Face.U, Face.R, Face.F})


def is_redundant(move: Move, last_move: Move | None) -> bool:
    """True if exploring `move` right after `last_move` can only waste budget."""
    if last_move is None:
        return False
    if move.face == last_move.face:
        return True
    return move.face in CANONICAL_FIRST and last_move.face == move.face.opposite


@dataclass
class MoveGenerator:
    """
    Generates successor moves for a search node.

    The move set is fixed per phase: all 18 moves in phase 1, the
    10 subgroup-preserving moves in phase 2.
    """
    moves: tuple[Move, ...] = ALL_MOVES
    _successors: dict[Move | None, tuple[Move, ...]] = field(init=False, repr=False)

    def __post_init__(self):
        self._successors = {
            last: tuple(m for m in self.moves if not is_redundant(m, last))
            for last in (None, *ALL_MOVES)
        }

    def generate(self, last_move: Move | None = None) -> tuple[Move, ...]:
        """Moves to try after `last_move` (None at the root)."""
        return self._successors[last_move]


PHASE1_GENERATOR = MoveGenerator(ALL_MOVES)
PHASE2_GENERATOR = MoveGenerator(PHASE2_MOVES)


def legal_moves(last_move: Move | str | None = None, phase: int = 1) -> tuple[Move, ...]:
    """
    Convenience function for non-redundant successors.

    Equivalent to: MoveGenerator(moves_for_phase).generate(last_move)
    """
    generator = PHASE2_GENERATOR if phase == 2 else PHASE1_GENERATOR
    last = None if last_move is None else Move.parse(last_move)
    return generator.generate(last)


def random_scramble(length: int, seed: int | None = None) -> list[Move]:
    """
    Generate a scramble of `length` moves with no same-face repeats.

    Pass a seed for a reproducible sequence.
    """
    if length < 0:
        raise ValueError("Scramble length must be >= 0")
    rng = random.Random(seed)
    scramble: list[Move] = []
    last: Move | None = None
    for _ in range(length):
        last = rng.choice(PHASE1_GENERATOR.generate(last))
        scramble.append(last)
    return scramble
