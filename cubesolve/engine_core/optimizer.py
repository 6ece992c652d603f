"""
Move-Sequence Optimizer - Collapses consecutive turns of the same face.

A run of moves on one face is replaced by its net rotation (mod 4):
0 -> nothing, 1 -> X, 2 -> X2, 3 -> X'. The output is kept on a stack so
a run that cancels out lets its neighbours merge in the same pass
("R U U' R" -> "R2"), which makes optimize() idempotent.
"""

from __future__ import annotations
from typing import Iterable

from .move import Move


def optimize(moves: Iterable[Move | str]) -> list[Move]:
    """Return the canonical form of a move sequence."""
    # Stack entries are (face, net quarter turns), never zero.
    stack: list[tuple] = []
    for token in moves:
        move = Move.parse(token)
        if stack and stack[-1][0] == move.face:
            face, turns = stack.pop()
            turns = (turns + move.quarter_turns) % 4
            if turns:
                stack.append((face, turns))
        else:
            stack.append((move.face, move.quarter_turns))
    return [Move.from_turns(face, turns) for face, turns in stack]


def invert(moves: Iterable[Move | str]) -> list[Move]:
    """Return the sequence that undoes `moves`."""
    return [Move.parse(m).inverse for m in reversed(list(moves))]
