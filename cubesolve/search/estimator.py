"""
Distance Estimator - Admissible lower bounds for the two-phase search.

The estimator answers "at least how many moves until this coordinate is
zero?" It must never overestimate: IDA* only returns shortest phase
solutions when the bound is admissible.

Two estimators ship:
- TableEstimator: exact distances over coordinate pairs, read from
  breadth-first pruning tables. The per-phase bound is the max over pairs.
- FloorEstimator: 0 at the goal and 1 elsewhere. Still admissible, but
  prunes almost nothing, so only short searches finish in reasonable time.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..coordinates.coords import Coordinates, N_UD_SLICE, N_SLICE_PERMUTATION
from ..coordinates.tables import PruningTables


class DistanceEstimator(ABC):
    """
    Abstract base class for lower bounds.

    phase1_distance bounds the moves (any of the 18) needed to bring the
    orientation and slice coordinates to zero. phase2_distance bounds the
    moves (the 10 phase-2 moves) needed to bring the permutation
    coordinates to zero.
    """

    @abstractmethod
    def phase1_distance(self, corner_orientation: int, edge_orientation: int, ud_slice: int) -> int:
        pass

    @abstractmethod
    def phase2_distance(
        self,
        corner_permutation: int,
        edge_permutation: int,
        slice_permutation: int,
    ) -> int:
        pass

    def distance(self, coordinates: Coordinates) -> int:
        """
        Lower bound for the phase a coordinate tuple is in.

        Outside the phase-1 subgroup this is the phase-1 bound; inside it
        the phase-2 bound.
        """
        if not coordinates.in_subgroup:
            return self.phase1_distance(*coordinates.phase1)
        return self.phase2_distance(*coordinates.phase2)

    def get_name(self) -> str:
        return self.__class__.__name__


class FloorEstimator(DistanceEstimator):
    """Coarse bound: any nonzero coordinate needs at least one move."""

    def phase1_distance(self, corner_orientation, edge_orientation, ud_slice):
        return 0 if corner_orientation == edge_orientation == ud_slice == 0 else 1

    def phase2_distance(self, corner_permutation, edge_permutation, slice_permutation):
        return 0 if corner_permutation == edge_permutation == slice_permutation == 0 else 1


class TableEstimator(DistanceEstimator):
    """
    Exact pair distances from pruning tables.

    The numpy tables are copied into tuples once at construction so the
    per-node lookup is a plain Python index.
    """

    def __init__(self, tables: PruningTables):
        self.tables = tables
        self._co_slice = tuple(tables.corner_orientation_slice.tolist())
        self._eo_slice = tuple(tables.edge_orientation_slice.tolist())
        self._cp_slice = tuple(tables.corner_permutation_slice.tolist())
        self._ep_slice = tuple(tables.edge_permutation_slice.tolist())

    def phase1_distance(self, corner_orientation, edge_orientation, ud_slice):
        return max(
            self._co_slice[corner_orientation * N_UD_SLICE + ud_slice],
            self._eo_slice[edge_orientation * N_UD_SLICE + ud_slice],
        )

    def phase2_distance(self, corner_permutation, edge_permutation, slice_permutation):
        return max(
            self._cp_slice[corner_permutation * N_SLICE_PERMUTATION + slice_permutation],
            self._ep_slice[edge_permutation * N_SLICE_PERMUTATION + slice_permutation],
        )
