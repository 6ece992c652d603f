"""
Coordinates - Bounded integers encoding one property of a cube each.

Every coordinate walks the canonical piece order and folds one digit per
piece with mixed-radix encoding: coord = coord * radix + digit.

- Orientation: radix 3 (corner twist) or 2 (edge flip). The last piece is
  left out because the others fix its digit.
- Permutation: Lehmer code, radix n - i at step i (the number of later
  pieces smaller than the current one). The last digit is always zero and
  is left out. The identity ranks 0.
- UD slice: the rank of the set of positions holding the four middle-layer
  edges, 0 when they are home.

Phase-1 coordinates (corner_orientation, edge_orientation, ud_slice) are all
zero exactly in the subgroup reachable with <U, D, R2, F2, L2, B2>. Inside
that subgroup the phase-2 coordinates (corner_permutation, edge_permutation
of the eight U/D-layer edges, slice_permutation) are all zero exactly for
the solved cube.

Each encoder has a vectorized numpy twin used by the table builder.
"""

from __future__ import annotations
from functools import lru_cache
from itertools import combinations, permutations
from typing import NamedTuple, Sequence

import numpy as np

from ..engine_core.state import CubeState
from .cubie import CubieCube, NUM_CORNERS, NUM_EDGES, Edge

N_CORNER_ORIENTATION = 3 ** (NUM_CORNERS - 1)  # 2187
N_EDGE_ORIENTATION = 2 ** (NUM_EDGES - 1)  # 2048
N_UD_SLICE = 495  # C(12, 4)
N_CORNER_PERMUTATION = 40320  # 8!
N_EDGE_PERMUTATION = 40320  # 8!, U/D-layer edges only
N_SLICE_PERMUTATION = 24  # 4!

_FIRST_SLICE_EDGE = int(Edge.FR)


class Coordinates(NamedTuple):
    """
    Coordinate tuple of a state.

    The phase-2 fields are None unless the four middle-layer edges are all
    in the middle layer, since the permutation split is undefined otherwise.
    """
    corner_orientation: int
    edge_orientation: int
    ud_slice: int
    corner_permutation: int | None = None
    edge_permutation: int | None = None
    slice_permutation: int | None = None

    @property
    def phase1(self) -> tuple[int, int, int]:
        return (self.corner_orientation, self.edge_orientation, self.ud_slice)

    @property
    def phase2(self) -> tuple[int, int, int] | None:
        if self.corner_permutation is None:
            return None
        return (self.corner_permutation, self.edge_permutation, self.slice_permutation)

    @property
    def in_subgroup(self) -> bool:
        return not any(self.phase1)

    @property
    def is_solved(self) -> bool:
        return self.in_subgroup and not any(self.phase2)


# Scalar encoders

def encode_orientation(digits: Sequence[int], radix: int) -> int:
    coord = 0
    for digit in digits[:-1]:
        coord = coord * radix + digit
    return coord


def decode_orientation(coord: int, n: int, radix: int) -> list[int]:
    digits = [0] * n
    for i in range(n - 2, -1, -1):
        coord, digits[i] = divmod(coord, radix)
    digits[-1] = -sum(digits[:-1]) % radix
    return digits


def encode_permutation(perm: Sequence[int]) -> int:
    """Lehmer rank; equals the lexicographic index of the permutation."""
    n = len(perm)
    coord = 0
    for i in range(n - 1):
        smaller = sum(1 for j in range(i + 1, n) if perm[j] < perm[i])
        coord = coord * (n - i) + smaller
    return coord


def decode_permutation(coord: int, n: int) -> list[int]:
    return all_permutations(n)[coord].tolist()


@lru_cache(maxsize=None)
def _slice_ranks() -> tuple[tuple[tuple[int, ...], ...], np.ndarray]:
    # Reverse lexicographic order puts the home positions (8, 9, 10, 11) first.
    combos = tuple(reversed(list(combinations(range(NUM_EDGES), 4))))
    rank_by_mask = np.full(1 << NUM_EDGES, -1, dtype=np.int32)
    for rank, combo in enumerate(combos):
        rank_by_mask[sum(1 << p for p in combo)] = rank
    rank_by_mask.flags.writeable = False
    return combos, rank_by_mask


def encode_ud_slice(ep: Sequence[int]) -> int:
    mask = 0
    for pos, piece in enumerate(ep):
        if piece >= _FIRST_SLICE_EDGE:
            mask |= 1 << pos
    return int(_slice_ranks()[1][mask])


def decode_ud_slice(coord: int) -> tuple[int, ...]:
    """Positions of the four slice edges for a ud_slice coordinate."""
    return _slice_ranks()[0][coord]


# Extraction

def phase1_coordinates(cube: CubieCube) -> tuple[int, int, int]:
    return (
        encode_orientation(cube.co, 3),
        encode_orientation(cube.eo, 2),
        encode_ud_slice(cube.ep),
    )


def phase2_coordinates(cube: CubieCube) -> tuple[int, int, int]:
    """
    Permutation coordinates of a cube inside the phase-1 subgroup.

    Raises ValueError if a middle-layer edge sits outside the middle layer.
    """
    ud_edges = cube.ep[:_FIRST_SLICE_EDGE]
    if any(piece >= _FIRST_SLICE_EDGE for piece in ud_edges):
        raise ValueError("Phase-2 coordinates need the slice edges in the middle layer")
    return (
        encode_permutation(cube.cp),
        encode_permutation(ud_edges),
        encode_permutation([piece - _FIRST_SLICE_EDGE for piece in cube.ep[_FIRST_SLICE_EDGE:]]),
    )


def extract(state: CubeState | CubieCube) -> Coordinates:
    """Derive the coordinate tuple of a state."""
    cube = state if isinstance(state, CubieCube) else CubieCube.from_state(state)
    co, eo, sl = phase1_coordinates(cube)
    if sl != 0:
        return Coordinates(co, eo, sl)
    return Coordinates(co, eo, sl, *phase2_coordinates(cube))


# Vectorized helpers

def _radix_weights(n: int, radix: int) -> np.ndarray:
    return radix ** np.arange(n - 2, -1, -1, dtype=np.int64)


def all_orientations(n: int, radix: int) -> np.ndarray:
    """Orientation digit rows for every coordinate value, indexed by coordinate."""
    count = radix ** (n - 1)
    coords = np.arange(count, dtype=np.int64)
    digits = np.zeros((count, n), dtype=np.int8)
    for i in range(n - 2, -1, -1):
        coords, digits[:, i] = np.divmod(coords, radix)
    digits[:, -1] = (-digits[:, :-1].sum(axis=1)) % radix
    return digits


def encode_orientations(digits: np.ndarray, radix: int) -> np.ndarray:
    return digits[:, :-1].astype(np.int64) @ _radix_weights(digits.shape[1], radix)


@lru_cache(maxsize=None)
def all_permutations(n: int) -> np.ndarray:
    """Every permutation of range(n), row index == Lehmer rank."""
    perms = np.array(list(permutations(range(n))), dtype=np.int8)
    perms.flags.writeable = False
    return perms


def encode_permutations(perms: np.ndarray) -> np.ndarray:
    n = perms.shape[1]
    coords = np.zeros(perms.shape[0], dtype=np.int64)
    for i in range(n - 1):
        smaller = (perms[:, i + 1:] < perms[:, i:i + 1]).sum(axis=1)
        coords = coords * (n - i) + smaller
    return coords


def all_slice_masks() -> np.ndarray:
    """Boolean occupancy rows (slice edge at position p) indexed by ud_slice."""
    combos, _ = _slice_ranks()
    masks = np.zeros((len(combos), NUM_EDGES), dtype=bool)
    for rank, combo in enumerate(combos):
        masks[rank, list(combo)] = True
    return masks


def encode_slice_masks(masks: np.ndarray) -> np.ndarray:
    bits = masks.astype(np.int64) @ (1 << np.arange(NUM_EDGES, dtype=np.int64))
    return _slice_ranks()[1][bits]
