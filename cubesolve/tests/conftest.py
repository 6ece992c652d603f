"""
Pytest fixtures for cubesolve tests.
"""

import pytest

from ..engine_core.state import CubeState, solved_state
from ..engine_core.reducer import apply_moves
from ..engine_core.move import parse_moves
from ..coordinates.tables import SolverTables
from ..search.config import SolverConfig
from ..search.solver import TwoPhaseSolver


@pytest.fixture
def solved() -> CubeState:
    """The solved cube in the standard color scheme."""
    return solved_state()


@pytest.fixture
def sexy_move_state(solved: CubeState) -> CubeState:
    """Solved cube after R U R' U'."""
    return apply_moves(solved, parse_moves("R U R' U'"))


@pytest.fixture
def twisted_corner_state(solved: CubeState) -> CubeState:
    """
    Solved cube with the URF corner rotated in place.

    Color counts are untouched, so only strict validation rejects it.
    """
    # U8 -> R0 -> F2 -> U8 (a clockwise twist of one corner)
    u8, r0, f2 = 8, 9 + 0, 18 + 2
    facelets = list(solved.facelets)
    facelets[u8], facelets[r0], facelets[f2] = solved.facelets[f2], solved.facelets[u8], solved.facelets[r0]
    return CubeState(tuple(facelets))


@pytest.fixture(scope="session")
def solver_tables() -> SolverTables:
    """Move and pruning tables, built once per test session."""
    return SolverTables.build(with_pruning=True)


@pytest.fixture(scope="session")
def solver(solver_tables: SolverTables) -> TwoPhaseSolver:
    """Solver with default settings sharing the session tables."""
    return TwoPhaseSolver(SolverConfig(), tables=solver_tables)
