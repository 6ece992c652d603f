"""
Integration tests - End-to-end workflow tests.

Tests the complete flow:
1. Read a cube from face-grid text
2. Validate it
3. Solve it
4. Play the solution back step by step
"""

import pytest

from .. import (
    CubeState,
    Move,
    SolveStatus,
    apply_moves,
    format_moves,
    is_solved,
    is_valid,
    optimize,
    parse_moves,
    solve,
    solved_state,
)
from ..engine_core.reducer import replay
from ..engine_core.move_generator import random_scramble
from ..engine_core.validation import validate_state


class TestFullSolveFlow:
    """Tests for the complete input-to-playback flow."""

    def test_face_grid_input_to_solution(self, solver):
        """Lowercase face grids from an input widget solve back to solved."""
        scrambled = apply_moves(solved_state(), parse_moves("F R U' B2 D L'"))
        faces = {face: text.lower() for face, text in scrambled.to_faces().items()}

        state = CubeState.from_faces(faces)
        assert is_valid(state)
        assert validate_state(state, strict=True).valid

        result = solve(state, solver=solver)
        assert result.status is SolveStatus.SOLVED
        assert is_solved(apply_moves(state, result.moves))

    def test_playback_ends_solved(self, solver):
        state = apply_moves(solved_state(), random_scramble(7, seed=13))
        result = solver.solve(state)

        frames = replay(state, result.moves)
        assert len(frames) == result.length
        assert is_solved(frames[-1])
        assert not any(is_solved(frame) for frame in frames[:-1])

    def test_notation_round_trip(self, solver):
        """The notation string of a solution parses back to the same moves."""
        state = apply_moves(solved_state(), parse_moves("D2 R' F U"))
        result = solver.solve(state)
        assert parse_moves(result.notation) == result.moves
        assert format_moves(result.moves) == result.notation

    def test_solution_already_optimized(self, solver):
        state = apply_moves(solved_state(), random_scramble(8, seed=99))
        result = solver.solve(state)
        assert optimize(result.moves) == result.moves

    def test_facelet_string_input(self, solver):
        """A 54-letter color string from a saved scramble solves too."""
        text = apply_moves(solved_state(), parse_moves("R2 U F'")).to_string()
        result = solver.solve(CubeState.from_string(text))
        assert result.found
        assert result.length <= 3

    def test_repeat_solves_independent(self, solver):
        """One solver serves several solves with per-call statistics."""
        a = solver.solve(apply_moves(solved_state(), parse_moves("R")))
        b = solver.solve(apply_moves(solved_state(), parse_moves("R U2 F")))
        assert a.moves == [Move.R_PRIME]
        assert b.found
        assert a.nodes_expanded < b.nodes_expanded

    def test_misread_sticker_rejected_before_search(self, solver):
        state = solved_state()
        faces = state.to_faces()
        faces["U"] = "wwwwwwwwg"
        from ..engine_core.validation import InvalidConfigurationError

        with pytest.raises(InvalidConfigurationError):
            solver.solve(CubeState.from_faces(faces))
