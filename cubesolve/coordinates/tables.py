"""
Tables - Move tables and pruning tables over the coordinates.

Move tables map (coordinate, move) -> coordinate so the search never
touches facelets. Pruning tables hold the exact distance to the goal for
pairs of coordinates, found by breadth-first search from the goal; an
exact distance can never overestimate, so it is admissible.

All tables are built with vectorized numpy operations, marked read-only,
and owned by whoever built them. Nothing here is stored at module level.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, fields

import numpy as np

from ..engine_core.move import ALL_MOVES, PHASE2_MOVES, Move
from .cubie import MOVE_CUBES, NUM_CORNERS, NUM_EDGES, Edge
from .coords import (
    N_CORNER_ORIENTATION,
    N_EDGE_ORIENTATION,
    N_UD_SLICE,
    N_CORNER_PERMUTATION,
    N_EDGE_PERMUTATION,
    N_SLICE_PERMUTATION,
    all_orientations,
    all_permutations,
    all_slice_masks,
    encode_orientations,
    encode_permutations,
    encode_slice_masks,
)
from .cache import TableCache

logger = logging.getLogger(__name__)

# Bump when any table layout or coordinate definition changes.
TABLE_FORMAT_VERSION = "1"

UNVISITED = -1

_FIRST_SLICE_EDGE = int(Edge.FR)

PHASE1_MOVE_INDEX: dict[Move, int] = {m: i for i, m in enumerate(ALL_MOVES)}
PHASE2_MOVE_INDEX: dict[Move, int] = {m: i for i, m in enumerate(PHASE2_MOVES)}


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class MoveTables:
    """
    Coordinate transition tables.

    Phase-1 tables have one column per move in ALL_MOVES; phase-2 tables
    have one column per move in PHASE2_MOVES.
    """
    corner_orientation: np.ndarray
    edge_orientation: np.ndarray
    ud_slice: np.ndarray
    corner_permutation: np.ndarray
    edge_permutation: np.ndarray
    slice_permutation: np.ndarray

    @classmethod
    def build(cls) -> MoveTables:
        started = time.perf_counter()
        moves1 = [MOVE_CUBES[m] for m in ALL_MOVES]
        moves2 = [MOVE_CUBES[m] for m in PHASE2_MOVES]

        corner_digits = all_orientations(NUM_CORNERS, 3)
        edge_digits = all_orientations(NUM_EDGES, 2)
        slice_masks = all_slice_masks()
        perms8 = all_permutations(8)
        perms4 = all_permutations(4)

        co = np.stack([
            encode_orientations((corner_digits[:, list(m.cp)] + np.array(m.co, dtype=np.int8)) % 3, 3)
            for m in moves1
        ], axis=1)
        eo = np.stack([
            encode_orientations((edge_digits[:, list(m.ep)] + np.array(m.eo, dtype=np.int8)) % 2, 2)
            for m in moves1
        ], axis=1)
        ud_slice = np.stack([
            encode_slice_masks(slice_masks[:, list(m.ep)])
            for m in moves1
        ], axis=1)

        # Phase-2 moves keep U/D-layer edges in the U/D layers and slice
        # edges in the slice, so each group permutes among itself.
        cp = np.stack([encode_permutations(perms8[:, list(m.cp)]) for m in moves2], axis=1)
        ep = np.stack([
            encode_permutations(perms8[:, list(m.ep[:_FIRST_SLICE_EDGE])])
            for m in moves2
        ], axis=1)
        sp = np.stack([
            encode_permutations(perms4[:, [p - _FIRST_SLICE_EDGE for p in m.ep[_FIRST_SLICE_EDGE:]]])
            for m in moves2
        ], axis=1)

        tables = cls(
            corner_orientation=_freeze(co.astype(np.int32)),
            edge_orientation=_freeze(eo.astype(np.int32)),
            ud_slice=_freeze(ud_slice.astype(np.int32)),
            corner_permutation=_freeze(cp.astype(np.int32)),
            edge_permutation=_freeze(ep.astype(np.int32)),
            slice_permutation=_freeze(sp.astype(np.int32)),
        )
        logger.debug("Built move tables in %.2fs", time.perf_counter() - started)
        return tables


def _bfs_distances(move_a: np.ndarray, move_b: np.ndarray) -> np.ndarray:
    """
    Distance table over the product of two coordinates.

    Index is a * size_b + b; the goal (0, 0) has distance 0. Every move
    column of move_a must correspond to the same move in move_b.
    """
    size_a, n_moves = move_a.shape
    size_b = move_b.shape[0]
    table = np.full(size_a * size_b, UNVISITED, dtype=np.int8)
    table[0] = 0
    frontier = np.array([0], dtype=np.int64)
    depth = 0
    while frontier.size:
        a, b = np.divmod(frontier, size_b)
        for m in range(n_moves):
            nxt = move_a[a, m].astype(np.int64) * size_b + move_b[b, m]
            nxt = nxt[table[nxt] == UNVISITED]
            table[nxt] = depth + 1
        depth += 1
        frontier = np.flatnonzero(table == depth)
    logger.debug("Pruning table of %d entries has depth %d", table.size, depth - 1)
    return table


@dataclass(frozen=True)
class PruningTables:
    """
    Exact distances for coordinate pairs.

    - corner_orientation_slice: (corner_orientation, ud_slice), phase 1
    - edge_orientation_slice: (edge_orientation, ud_slice), phase 1
    - corner_permutation_slice: (corner_permutation, slice_permutation), phase 2
    - edge_permutation_slice: (edge_permutation, slice_permutation), phase 2
    """
    corner_orientation_slice: np.ndarray
    edge_orientation_slice: np.ndarray
    corner_permutation_slice: np.ndarray
    edge_permutation_slice: np.ndarray

    @classmethod
    def build(cls, moves: MoveTables) -> PruningTables:
        started = time.perf_counter()
        tables = cls(
            corner_orientation_slice=_freeze(_bfs_distances(moves.corner_orientation, moves.ud_slice)),
            edge_orientation_slice=_freeze(_bfs_distances(moves.edge_orientation, moves.ud_slice)),
            corner_permutation_slice=_freeze(
                _bfs_distances(moves.corner_permutation, moves.slice_permutation)
            ),
            edge_permutation_slice=_freeze(
                _bfs_distances(moves.edge_permutation, moves.slice_permutation)
            ),
        )
        logger.debug("Built pruning tables in %.2fs", time.perf_counter() - started)
        return tables


EXPECTED_SHAPES = {
    "corner_orientation": (N_CORNER_ORIENTATION, len(ALL_MOVES)),
    "edge_orientation": (N_EDGE_ORIENTATION, len(ALL_MOVES)),
    "ud_slice": (N_UD_SLICE, len(ALL_MOVES)),
    "corner_permutation": (N_CORNER_PERMUTATION, len(PHASE2_MOVES)),
    "edge_permutation": (N_EDGE_PERMUTATION, len(PHASE2_MOVES)),
    "slice_permutation": (N_SLICE_PERMUTATION, len(PHASE2_MOVES)),
    "corner_orientation_slice": (N_CORNER_ORIENTATION * N_UD_SLICE,),
    "edge_orientation_slice": (N_EDGE_ORIENTATION * N_UD_SLICE,),
    "corner_permutation_slice": (N_CORNER_PERMUTATION * N_SLICE_PERMUTATION,),
    "edge_permutation_slice": (N_EDGE_PERMUTATION * N_SLICE_PERMUTATION,),
}


@dataclass(frozen=True)
class SolverTables:
    """
    Everything the search needs, built once and treated as immutable.

    Pruning tables are optional: a solver using the floor estimator only
    needs move tables.
    """
    moves: MoveTables
    pruning: PruningTables | None = None

    @classmethod
    def build(cls, with_pruning: bool = True, cache: TableCache | None = None) -> SolverTables:
        """
        Build (or load from cache) the tables.

        A cache miss builds everything and stores it for next time.
        """
        if cache is not None:
            cached = cls._from_cache(cache, with_pruning)
            if cached is not None:
                return cached

        moves = MoveTables.build()
        pruning = PruningTables.build(moves) if with_pruning else None
        tables = cls(moves=moves, pruning=pruning)

        if cache is not None:
            cache.put(cls._cache_name(with_pruning), tables.to_arrays())
        return tables

    def to_arrays(self) -> dict[str, np.ndarray]:
        arrays = {f.name: getattr(self.moves, f.name) for f in fields(MoveTables)}
        if self.pruning is not None:
            arrays.update({f.name: getattr(self.pruning, f.name) for f in fields(PruningTables)})
        return arrays

    @classmethod
    def from_arrays(cls, arrays: dict[str, np.ndarray], with_pruning: bool = True) -> SolverTables:
        """
        Rebuild tables from named arrays.

        Raises KeyError or ValueError when arrays are missing or misshapen.
        """
        names = [f.name for f in fields(MoveTables)]
        if with_pruning:
            names += [f.name for f in fields(PruningTables)]
        for name in names:
            if arrays[name].shape != EXPECTED_SHAPES[name]:
                raise ValueError(f"Table {name} has shape {arrays[name].shape}")

        moves = MoveTables(**{
            f.name: _freeze(np.array(arrays[f.name], dtype=np.int32)) for f in fields(MoveTables)
        })
        pruning = None
        if with_pruning:
            pruning = PruningTables(**{
                f.name: _freeze(np.array(arrays[f.name], dtype=np.int8)) for f in fields(PruningTables)
            })
        return cls(moves=moves, pruning=pruning)

    @staticmethod
    def _cache_name(with_pruning: bool) -> str:
        kind = "full" if with_pruning else "moves"
        return f"two_phase_{kind}_v{TABLE_FORMAT_VERSION}"

    @classmethod
    def _from_cache(cls, cache: TableCache, with_pruning: bool) -> SolverTables | None:
        arrays = cache.get(cls._cache_name(with_pruning))
        if arrays is None:
            return None
        try:
            return cls.from_arrays(arrays, with_pruning)
        except (KeyError, ValueError) as e:
            logger.warning("Discarding unusable cached tables: %s", e)
            cache.invalidate(cls._cache_name(with_pruning))
            return None
