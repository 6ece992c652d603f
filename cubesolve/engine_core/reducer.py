"""
Reducer - Applies moves to cube state.

The reducer is the single point of state transformation.
All state changes must go through apply_move().

Design principles:
- Pure function: (state, move) -> new_state
- Every move is 1, 2 or 3 repetitions of its face's atomic clockwise
  quarter turn, so four-fold and inverse identities hold by construction
- No legality checking: any well-formed state can be turned
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .state import CubeState, Face, FACE_ORDER, NUM_FACELETS
from .move import Move


# Outer ring of a face, clockwise from the top-left corner. A clockwise
# quarter turn advances every ring facelet two places.
FACE_RING = (0, 1, 2, 5, 8, 7, 6, 3)

# Adjacent strips cycled by each clockwise quarter turn. The content of each
# strip moves into the next one; element j lands on element j.
ADJACENT_STRIPS: dict[Face, tuple[tuple[Face, tuple[int, int, int]], ...]] = {
    Face.U: ((Face.F, (0, 1, 2)), (Face.L, (0, 1, 2)), (Face.B, (0, 1, 2)), (Face.R, (0, 1, 2))),
    Face.D: ((Face.F, (6, 7, 8)), (Face.R, (6, 7, 8)), (Face.B, (6, 7, 8)), (Face.L, (6, 7, 8))),
    Face.F: ((Face.U, (6, 7, 8)), (Face.R, (0, 3, 6)), (Face.D, (2, 1, 0)), (Face.L, (8, 5, 2))),
    Face.B: ((Face.U, (2, 1, 0)), (Face.L, (0, 3, 6)), (Face.D, (6, 7, 8)), (Face.R, (8, 5, 2))),
    Face.R: ((Face.U, (2, 5, 8)), (Face.B, (6, 3, 0)), (Face.D, (2, 5, 8)), (Face.F, (2, 5, 8))),
    Face.L: ((Face.U, (0, 3, 6)), (Face.F, (0, 3, 6)), (Face.D, (0, 3, 6)), (Face.B, (8, 5, 2))),
}


def _quarter_turn_permutation(face: Face) -> tuple[int, ...]:
    """
    Build the facelet permutation of one clockwise quarter turn.

    Result[i] is the index whose color lands on facelet i.
    """
    source = list(range(NUM_FACELETS))

    base = face.offset
    for k, pos in enumerate(FACE_RING):
        target = FACE_RING[(k + 2) % len(FACE_RING)]
        source[base + target] = base + pos

    strips = ADJACENT_STRIPS[face]
    for k, (from_face, from_idx) in enumerate(strips):
        to_face, to_idx = strips[(k + 1) % len(strips)]
        for a, b in zip(from_idx, to_idx):
            source[to_face.offset + b] = from_face.offset + a

    return tuple(source)


QUARTER_TURNS: Mapping[Face, tuple[int, ...]] = MappingProxyType({
    face: _quarter_turn_permutation(face) for face in FACE_ORDER
})


@dataclass
class Reducer:
    """
    Reducer applies moves to cube state.

    Stateless - all state is in CubeState. A move is 1, 2 or 3 repetitions
    of its face's atomic quarter-turn permutation.
    """
    quarter_turns: Mapping[Face, tuple[int, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(QUARTER_TURNS))
    )

    def apply(self, state: CubeState, move: Move | str) -> CubeState:
        """
        Apply a move to the cube state.

        Raises UnknownMoveError if the move is not one of the 18 legal moves.
        """
        move = Move.parse(move)
        new_state = state
        for _ in range(move.quarter_turns):
            new_state = self._permute(new_state, move.face)
        return new_state

    def apply_all(self, state: CubeState, moves: Iterable[Move | str]) -> CubeState:
        for move in moves:
            state = self.apply(state, move)
        return state

    def _permute(self, state: CubeState, face: Face) -> CubeState:
        source = self.quarter_turns[face]
        old = state.facelets
        return CubeState(tuple(old[i] for i in source))


_REDUCER = Reducer()


def apply_move(state: CubeState, move: Move | str) -> CubeState:
    """
    Convenience function to apply a single move.

    Equivalent to: Reducer().apply(state, move)
    """
    return _REDUCER.apply(state, move)


def apply_moves(state: CubeState, moves: Iterable[Move | str]) -> CubeState:
    """Apply a sequence of moves in order."""
    return _REDUCER.apply_all(state, moves)


def replay(state: CubeState, moves: Iterable[Move | str]) -> list[CubeState]:
    """
    Return the states reached after each move, for step-by-step playback.

    The starting state is not included; the last entry is the final state.
    """
    states = []
    for move in moves:
        state = _REDUCER.apply(state, move)
        states.append(state)
    return states
