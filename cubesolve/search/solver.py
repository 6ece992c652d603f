"""
Two-Phase Solver - IDA* search in two stages.

Phase 1 drives corner orientation, edge orientation and the UD-slice
coordinate to zero using all 18 moves, which lands the cube in the subgroup
generated by <U, D, R2, F2, L2, B2>. Phase 2 replays the phase-1 moves on
the original state and solves it using only those 10 subgroup moves.

Both phases deepen the budget one move at a time and prune any node where
depth + lower bound > budget. Search nodes are (depth, last move,
coordinates) and live only on the recursion stack; expansion looks up the
next coordinates in the move tables and never mutates anything.

Phase 1 yields its solutions lazily, shortest first, so a phase-1 solution
whose phase 2 does not fit under the total ceiling is simply followed by the
next one.
"""

from __future__ import annotations
import logging
import time
from typing import Callable, Iterator

from ..engine_core.move import Move
from ..engine_core.move_generator import PHASE1_GENERATOR, PHASE2_GENERATOR
from ..engine_core.optimizer import optimize
from ..engine_core.reducer import apply_moves
from ..engine_core.state import CubeState, is_solved
from ..engine_core.validation import require_valid, validate_state
from ..coordinates.cache import TableCache
from ..coordinates.cubie import CubieCube
from ..coordinates.coords import phase1_coordinates, phase2_coordinates
from ..coordinates.tables import (
    PHASE1_MOVE_INDEX,
    PHASE2_MOVE_INDEX,
    SolverTables,
    TABLE_FORMAT_VERSION,
)
from .config import SolverConfig, HeuristicKind
from .estimator import DistanceEstimator, FloorEstimator, TableEstimator
from .result import SolveResult, SolveStatus

logger = logging.getLogger(__name__)

AbortCheck = Callable[[], bool]


class SearchAborted(Exception):
    """Raised inside the search when the abort check fires."""


class TwoPhaseSolver:
    """
    Solver instance owning its tables.

    Tables are built (or loaded from the configured cache) once, in the
    constructor, and only read afterwards. One instance can serve any
    number of solve() calls.

    Usage:
        solver = TwoPhaseSolver()
        result = solver.solve(state)
        if result.found:
            print(result.notation)
    """

    def __init__(
        self,
        config: SolverConfig | None = None,
        tables: SolverTables | None = None,
    ):
        self.config = config or SolverConfig()
        use_tables = self.config.heuristic is HeuristicKind.TABLES

        if tables is None:
            cache = None
            if self.config.table_cache_dir is not None:
                cache = TableCache(self.config.table_cache_dir, format_version=TABLE_FORMAT_VERSION)
            tables = SolverTables.build(with_pruning=use_tables, cache=cache)
        elif use_tables and tables.pruning is None:
            raise ValueError("Table heuristic needs pruning tables")
        self.tables = tables

        self.estimator: DistanceEstimator = (
            TableEstimator(tables.pruning) if use_tables else FloorEstimator()
        )

        moves = tables.moves
        self._co_move = tuple(tuple(row) for row in moves.corner_orientation.tolist())
        self._eo_move = tuple(tuple(row) for row in moves.edge_orientation.tolist())
        self._slice_move = tuple(tuple(row) for row in moves.ud_slice.tolist())
        self._cp_move = tuple(tuple(row) for row in moves.corner_permutation.tolist())
        self._ep_move = tuple(tuple(row) for row in moves.edge_permutation.tolist())
        self._sp_move = tuple(tuple(row) for row in moves.slice_permutation.tolist())

    def solve(self, state: CubeState, should_abort: AbortCheck | None = None) -> SolveResult:
        """
        Find a move sequence that solves `state`.

        Raises InvalidConfigurationError if color counts are wrong. Every
        other outcome, including "no solution within max_length", comes
        back as a SolveResult. `should_abort` is polled at every node.
        """
        require_valid(state)
        started = time.perf_counter()
        search = _Search(self, should_abort)

        try:
            result = self._solve(state, search)
        except SearchAborted:
            logger.info("Solve aborted after %d nodes", search.nodes)
            result = SolveResult.failure(SolveStatus.ABORTED, "Search aborted")

        result.nodes_expanded = search.nodes
        result.elapsed_s = time.perf_counter() - started
        if result.found:
            logger.info(
                "Solved in %d moves (%d + %d before optimizing), %d nodes, %.3fs",
                result.length, len(result.phase1_moves), len(result.phase2_moves),
                result.nodes_expanded, result.elapsed_s,
            )
        return result

    def _solve(self, state: CubeState, search: _Search) -> SolveResult:
        if is_solved(state):
            return SolveResult.solved([])

        check = validate_state(state, strict=True)
        if not check.valid:
            return SolveResult.failure(SolveStatus.UNSOLVABLE, "; ".join(check.errors))

        cfg = self.config
        co, eo, sl = phase1_coordinates(CubieCube.from_state(state))

        for depth in range(min(cfg.phase1_max_depth, cfg.max_length) + 1):
            logger.debug("Phase 1 depth %d", depth)
            for phase1 in search.phase1(co, eo, sl, depth, None, []):
                budget = min(cfg.phase2_max_depth, cfg.max_length - len(phase1))
                phase2 = search.phase2(apply_moves(state, phase1), budget)
                if phase2 is None:
                    continue
                moves = phase1 + phase2
                if cfg.optimize:
                    moves = optimize(moves)
                return SolveResult.solved(moves, phase1, phase2)

        return SolveResult.failure(
            SolveStatus.NOT_FOUND,
            f"No solution within {cfg.max_length} moves",
        )


class _Search:
    """
    State of one solve call: the node counter and the abort check.

    Reads the solver's tables; owns nothing else, so one solver can run
    several searches.
    """

    def __init__(self, solver: TwoPhaseSolver, should_abort: AbortCheck | None):
        self.solver = solver
        self.estimator = solver.estimator
        self.should_abort = should_abort
        self.nodes = 0

    def expand(self) -> None:
        self.nodes += 1
        if self.should_abort is not None and self.should_abort():
            raise SearchAborted()

    def phase1(
        self,
        co: int,
        eo: int,
        sl: int,
        remaining: int,
        last: Move | None,
        path: list[Move],
    ) -> Iterator[list[Move]]:
        """Yield every phase-1 solution using exactly `remaining` more moves."""
        self.expand()
        if remaining == 0:
            if co == 0 and eo == 0 and sl == 0:
                yield list(path)
            return
        if self.estimator.phase1_distance(co, eo, sl) > remaining:
            return

        s = self.solver
        for move in PHASE1_GENERATOR.generate(last):
            i = PHASE1_MOVE_INDEX[move]
            path.append(move)
            yield from self.phase1(
                s._co_move[co][i], s._eo_move[eo][i], s._slice_move[sl][i],
                remaining - 1, move, path,
            )
            path.pop()

    def phase2(self, state: CubeState, max_depth: int) -> list[Move] | None:
        """Shortest phase-2 solution of a subgroup state, or None past max_depth."""
        cp, ep, sp = phase2_coordinates(CubieCube.from_state(state))
        path: list[Move] = []
        for depth in range(max_depth + 1):
            if self._phase2_step(cp, ep, sp, depth, None, path):
                return path
        return None

    def _phase2_step(
        self,
        cp: int,
        ep: int,
        sp: int,
        remaining: int,
        last: Move | None,
        path: list[Move],
    ) -> bool:
        self.expand()
        if cp == 0 and ep == 0 and sp == 0:
            return True
        if self.estimator.phase2_distance(cp, ep, sp) > remaining:
            return False

        s = self.solver
        for move in PHASE2_GENERATOR.generate(last):
            i = PHASE2_MOVE_INDEX[move]
            path.append(move)
            if self._phase2_step(
                s._cp_move[cp][i], s._ep_move[ep][i], s._sp_move[sp][i],
                remaining - 1, move, path,
            ):
                return True
            path.pop()
        return False


def solve(
    state: CubeState,
    config: SolverConfig | None = None,
    solver: TwoPhaseSolver | None = None,
) -> SolveResult:
    """
    Convenience function to solve a single state.

    Equivalent to: TwoPhaseSolver(config).solve(state). Building a solver
    builds its tables, so pass a long-lived `solver` when solving many
    states.
    """
    if solver is None:
        solver = TwoPhaseSolver(config)
    return solver.solve(state)
