"""
Cubie Model - Piece-level view of a cube state.

A CubieCube records, for each of the 8 corner and 12 edge positions, which
piece occupies it and how that piece is twisted or flipped. This is the
"replaced-by" representation: cp[i] is the corner sitting at position i.

Conversion from facelets uses the center colors to name each sticker by
its home face, so any color scheme works as long as centers are distinct.
Move cubies are derived from the facelet engine itself, so the piece model
and the reducer cannot drift apart.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping

from ..engine_core.state import Color, CubeState, Face, FACE_ORDER, NUM_FACELETS, SOLVED_SCHEME, CENTER
from ..engine_core.move import Move, ALL_MOVES
from ..engine_core.validation import InvalidConfigurationError


class Corner(IntEnum):
    URF = 0
    UFL = 1
    ULB = 2
    UBR = 3
    DFR = 4
    DLF = 5
    DBL = 6
    DRB = 7


class Edge(IntEnum):
    UR = 0
    UF = 1
    UL = 2
    UB = 3
    DR = 4
    DF = 5
    DL = 6
    DB = 7
    FR = 8
    FL = 9
    BL = 10
    BR = 11


NUM_CORNERS = len(Corner)
NUM_EDGES = len(Edge)

# The four middle-layer edges, home in the last four edge positions.
SLICE_EDGES = (Edge.FR, Edge.FL, Edge.BL, Edge.BR)


def _at(face: Face, index: int) -> int:
    return face.offset + index


# Stickers of each corner position, starting with its U or D sticker and
# going clockwise around the corner.
CORNER_FACELETS: tuple[tuple[int, int, int], ...] = (
    (_at(Face.U, 8), _at(Face.R, 0), _at(Face.F, 2)),
    (_at(Face.U, 6), _at(Face.F, 0), _at(Face.L, 2)),
    (_at(Face.U, 0), _at(Face.L, 0), _at(Face.B, 2)),
    (_at(Face.U, 2), _at(Face.B, 0), _at(Face.R, 2)),
    (_at(Face.D, 2), _at(Face.F, 8), _at(Face.R, 6)),
    (_at(Face.D, 0), _at(Face.L, 8), _at(Face.F, 6)),
    (_at(Face.D, 6), _at(Face.B, 8), _at(Face.L, 6)),
    (_at(Face.D, 8), _at(Face.R, 8), _at(Face.B, 6)),
)

CORNER_FACES: tuple[tuple[Face, Face, Face], ...] = (
    (Face.U, Face.R, Face.F),
    (Face.U, Face.F, Face.L),
    (Face.U, Face.L, Face.B),
    (Face.U, Face.B, Face.R),
    (Face.D, Face.F, Face.R),
    (Face.D, Face.L, Face.F),
    (Face.D, Face.B, Face.L),
    (Face.D, Face.R, Face.B),
)

EDGE_FACELETS: tuple[tuple[int, int], ...] = (
    (_at(Face.U, 5), _at(Face.R, 1)),
    (_at(Face.U, 7), _at(Face.F, 1)),
    (_at(Face.U, 3), _at(Face.L, 1)),
    (_at(Face.U, 1), _at(Face.B, 1)),
    (_at(Face.D, 5), _at(Face.R, 7)),
    (_at(Face.D, 1), _at(Face.F, 7)),
    (_at(Face.D, 3), _at(Face.L, 7)),
    (_at(Face.D, 7), _at(Face.B, 7)),
    (_at(Face.F, 5), _at(Face.R, 3)),
    (_at(Face.F, 3), _at(Face.L, 5)),
    (_at(Face.B, 5), _at(Face.L, 3)),
    (_at(Face.B, 3), _at(Face.R, 5)),
)

EDGE_FACES: tuple[tuple[Face, Face], ...] = (
    (Face.U, Face.R),
    (Face.U, Face.F),
    (Face.U, Face.L),
    (Face.U, Face.B),
    (Face.D, Face.R),
    (Face.D, Face.F),
    (Face.D, Face.L),
    (Face.D, Face.B),
    (Face.F, Face.R),
    (Face.F, Face.L),
    (Face.B, Face.L),
    (Face.B, Face.R),
)


def permutation_parity(perm: tuple[int, ...] | list[int]) -> int:
    """0 for an even permutation, 1 for an odd one."""
    inversions = 0
    for i in range(len(perm)):
        for j in range(i + 1, len(perm)):
            if perm[i] > perm[j]:
                inversions += 1
    return inversions % 2


@dataclass(frozen=True)
class CubieCube:
    """
    Corner and edge permutation/orientation of a cube.

    Orientation digits: corners 0-2 (clockwise twist), edges 0-1 (flip).
    """
    cp: tuple[int, ...] = tuple(range(NUM_CORNERS))
    co: tuple[int, ...] = (0,) * NUM_CORNERS
    ep: tuple[int, ...] = tuple(range(NUM_EDGES))
    eo: tuple[int, ...] = (0,) * NUM_EDGES

    @classmethod
    def from_state(cls, state: CubeState) -> CubieCube:
        """
        Decode pieces from facelets.

        Raises InvalidConfigurationError when centers are not distinct or a
        corner/edge sticker combination matches no real piece.
        """
        color_to_face = {state.center(face): face for face in FACE_ORDER}
        if len(color_to_face) != len(FACE_ORDER):
            raise InvalidConfigurationError(["Center colors are not distinct"])
        faces = [color_to_face[color] for color in state.facelets]

        errors: list[str] = []
        cp: list[int] = []
        co: list[int] = []
        for pos, stickers in enumerate(CORNER_FACELETS):
            for ori in range(3):
                if faces[stickers[ori]] in (Face.U, Face.D):
                    break
            else:
                errors.append(f"Corner at {Corner(pos).name} has no U or D sticker")
                cp.append(-1)
                co.append(0)
                continue
            layer = faces[stickers[ori]]
            side1 = faces[stickers[(ori + 1) % 3]]
            side2 = faces[stickers[(ori + 2) % 3]]
            for piece, piece_faces in enumerate(CORNER_FACES):
                if piece_faces == (layer, side1, side2):
                    cp.append(piece)
                    co.append(ori)
                    break
            else:
                errors.append(f"Corner at {Corner(pos).name} matches no corner piece")
                cp.append(-1)
                co.append(0)

        ep: list[int] = []
        eo: list[int] = []
        for pos, (a, b) in enumerate(EDGE_FACELETS):
            pair = (faces[a], faces[b])
            for piece, piece_faces in enumerate(EDGE_FACES):
                if pair == piece_faces:
                    ep.append(piece)
                    eo.append(0)
                    break
                if pair == piece_faces[::-1]:
                    ep.append(piece)
                    eo.append(1)
                    break
            else:
                errors.append(f"Edge at {Edge(pos).name} matches no edge piece")
                ep.append(-1)
                eo.append(0)

        if errors:
            raise InvalidConfigurationError(errors)
        return cls(cp=tuple(cp), co=tuple(co), ep=tuple(ep), eo=tuple(eo))

    def to_state(self, scheme: Mapping[Face, Color] | None = None) -> CubeState:
        """Encode pieces back to facelets using a color scheme."""
        scheme = scheme or SOLVED_SCHEME
        facelets: list[Color | None] = [None] * NUM_FACELETS
        for face in FACE_ORDER:
            facelets[face.offset + CENTER] = scheme[face]
        for pos in range(NUM_CORNERS):
            piece, ori = self.cp[pos], self.co[pos]
            for n in range(3):
                facelets[CORNER_FACELETS[pos][(n + ori) % 3]] = scheme[CORNER_FACES[piece][n]]
        for pos in range(NUM_EDGES):
            piece, ori = self.ep[pos], self.eo[pos]
            for n in range(2):
                facelets[EDGE_FACELETS[pos][(n + ori) % 2]] = scheme[EDGE_FACES[piece][n]]
        return CubeState(tuple(facelets))

    def multiply(self, other: CubieCube) -> CubieCube:
        """Return the cube obtained by applying `other` after this one."""
        cp = tuple(self.cp[other.cp[i]] for i in range(NUM_CORNERS))
        co = tuple((self.co[other.cp[i]] + other.co[i]) % 3 for i in range(NUM_CORNERS))
        ep = tuple(self.ep[other.ep[i]] for i in range(NUM_EDGES))
        eo = tuple((self.eo[other.ep[i]] + other.eo[i]) % 2 for i in range(NUM_EDGES))
        return CubieCube(cp=cp, co=co, ep=ep, eo=eo)

    def apply(self, move: Move | str) -> CubieCube:
        return self.multiply(MOVE_CUBES[Move.parse(move)])

    @property
    def corner_parity(self) -> int:
        return permutation_parity(self.cp)

    @property
    def edge_parity(self) -> int:
        return permutation_parity(self.ep)

    @property
    def in_subgroup(self) -> bool:
        """True when no piece is twisted or flipped and slice edges are in the slice."""
        return (
            not any(self.co)
            and not any(self.eo)
            and all(piece in SLICE_EDGES for piece in self.ep[Edge.FR:])
        )

    def solvability_errors(self) -> list[str]:
        """List the physical invariants this cube breaks (empty if solvable)."""
        errors = []
        if sorted(self.cp) != list(range(NUM_CORNERS)):
            errors.append("Some corner pieces are duplicated or missing")
        if sorted(self.ep) != list(range(NUM_EDGES)):
            errors.append("Some edge pieces are duplicated or missing")
        if errors:
            return errors
        if sum(self.co) % 3:
            errors.append("Corner twist is invalid (a corner is rotated in place)")
        if sum(self.eo) % 2:
            errors.append("Edge flip is invalid (an edge is flipped in place)")
        if self.corner_parity != self.edge_parity:
            errors.append("Permutation parity mismatch (two pieces are swapped)")
        return errors

    def is_solvable(self) -> bool:
        return not self.solvability_errors()


def _build_move_cubes() -> dict[Move, CubieCube]:
    from ..engine_core.reducer import apply_move
    from ..engine_core.state import solved_state

    solved = solved_state()
    return {move: CubieCube.from_state(apply_move(solved, move)) for move in ALL_MOVES}


# Piece-level effect of each of the 18 moves, read off the facelet engine.
MOVE_CUBES: dict[Move, CubieCube] = _build_move_cubes()
