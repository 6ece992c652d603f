"""
Tests for the cubie model and coordinate extraction.

Tests:
- Facelet <-> cubie conversion
- Move cubies agree with the facelet engine
- Scalar encoders and their vectorized twins
- Coordinate invariants for the solved state and the phase-1 subgroup
"""

import numpy as np
import pytest

from ..engine_core.state import Color, Face, solved_state
from ..engine_core.move import Move, ALL_MOVES, PHASE2_MOVES, parse_moves
from ..engine_core.reducer import apply_move, apply_moves
from ..engine_core.move_generator import random_scramble
from ..engine_core.validation import InvalidConfigurationError
from ..coordinates.cubie import CubieCube, Corner, MOVE_CUBES, permutation_parity
from ..coordinates.coords import (
    Coordinates,
    N_CORNER_ORIENTATION,
    N_EDGE_ORIENTATION,
    N_UD_SLICE,
    N_CORNER_PERMUTATION,
    N_SLICE_PERMUTATION,
    encode_orientation,
    decode_orientation,
    encode_permutation,
    decode_permutation,
    encode_ud_slice,
    decode_ud_slice,
    phase1_coordinates,
    phase2_coordinates,
    extract,
    all_orientations,
    encode_orientations,
    all_permutations,
    encode_permutations,
    all_slice_masks,
    encode_slice_masks,
)


class TestCubieCube:
    """Tests for the piece-level model."""

    def test_solved_is_identity(self, solved):
        assert CubieCube.from_state(solved) == CubieCube()

    def test_round_trip(self, solved):
        state = apply_moves(solved, random_scramble(25, seed=8))
        assert CubieCube.from_state(state).to_state() == state

    def test_custom_scheme_decodes(self):
        """Pieces are named by center colors, not a fixed scheme."""
        scheme = {Face.U: Color.YELLOW, Face.D: Color.WHITE, Face.F: Color.ORANGE,
                  Face.B: Color.RED, Face.L: Color.GREEN, Face.R: Color.BLUE}
        state = apply_move(solved_state(scheme), "R")
        assert CubieCube.from_state(state) == MOVE_CUBES[Move.R]

    @pytest.mark.parametrize("move", ALL_MOVES)
    def test_apply_matches_facelets(self, sexy_move_state, move):
        """Piece-level moves agree with the facelet engine."""
        cube = CubieCube.from_state(sexy_move_state).apply(move)
        assert cube == CubieCube.from_state(apply_move(sexy_move_state, move))

    def test_multiply_sequence(self, solved):
        moves = parse_moves("R U F' D2 L B")
        cube = CubieCube()
        for move in moves:
            cube = cube.multiply(MOVE_CUBES[move])
        assert cube.to_state() == apply_moves(solved, moves)

    def test_quarter_turn_shapes(self):
        """U permutes four corners and four edges without twisting them."""
        u = MOVE_CUBES[Move.U]
        assert sum(1 for i, p in enumerate(u.cp) if i != p) == 4
        assert not any(u.co)
        assert not any(u.eo)

    def test_f_flips_edges(self):
        f = MOVE_CUBES[Move.F]
        assert sum(f.eo) == 4
        assert sum(f.co) % 3 == 0
        assert any(f.co)

    def test_parities_match_after_moves(self, solved):
        cube = CubieCube.from_state(apply_moves(solved, random_scramble(17, seed=1)))
        assert cube.corner_parity == cube.edge_parity
        assert cube.is_solvable()

    def test_twisted_corner_unsolvable(self, twisted_corner_state):
        cube = CubieCube.from_state(twisted_corner_state)
        assert cube.co[Corner.URF] == 1
        assert not cube.is_solvable()

    def test_duplicate_centers_rejected(self, solved):
        state = solved.with_facelet(Face.R.offset + 4, Color.WHITE)
        with pytest.raises(InvalidConfigurationError):
            CubieCube.from_state(state)

    def test_in_subgroup(self, solved):
        assert CubieCube.from_state(apply_moves(solved, PHASE2_MOVES)).in_subgroup
        assert not CubieCube.from_state(apply_move(solved, "R")).in_subgroup

    def test_permutation_parity(self):
        assert permutation_parity([0, 1, 2]) == 0
        assert permutation_parity([1, 0, 2]) == 1
        assert permutation_parity([1, 2, 0]) == 0


class TestScalarEncoders:
    """Tests for the coordinate encoders."""

    def test_orientation_round_trip(self):
        digits = [2, 0, 1, 1, 0, 2, 1, 2]
        assert sum(digits) % 3 == 0
        coord = encode_orientation(digits, 3)
        assert decode_orientation(coord, 8, 3) == digits

    def test_orientation_bounds(self):
        assert encode_orientation([0] * 8, 3) == 0
        assert encode_orientation([2] * 7 + [1], 3) == N_CORNER_ORIENTATION - 1
        assert encode_orientation([1] * 11 + [1], 2) == N_EDGE_ORIENTATION - 1

    def test_permutation_identity_zero(self):
        assert encode_permutation(range(8)) == 0

    def test_permutation_reversed_last(self):
        assert encode_permutation(list(reversed(range(8)))) == N_CORNER_PERMUTATION - 1
        assert encode_permutation([3, 2, 1, 0]) == N_SLICE_PERMUTATION - 1

    def test_permutation_lexicographic(self):
        assert encode_permutation([0, 2, 1]) == 1
        assert encode_permutation([1, 0, 2]) == 2

    def test_decode_permutation(self):
        assert decode_permutation(0, 4) == [0, 1, 2, 3]
        assert decode_permutation(encode_permutation([2, 0, 3, 1]), 4) == [2, 0, 3, 1]

    def test_ud_slice_home_is_zero(self):
        assert encode_ud_slice(list(range(12))) == 0
        assert decode_ud_slice(0) == (8, 9, 10, 11)

    def test_ud_slice_range(self):
        ep = [8, 9, 10, 11] + list(range(8))
        coord = encode_ud_slice(ep)
        assert 0 < coord < N_UD_SLICE
        assert decode_ud_slice(coord) == (0, 1, 2, 3)


class TestExtract:
    """Tests for state -> coordinate extraction."""

    def test_solved_all_zero(self, solved):
        coords = extract(solved)
        assert coords == Coordinates(0, 0, 0, 0, 0, 0)
        assert coords.is_solved

    def test_phase2_moves_keep_phase1_zero(self, solved):
        state = apply_moves(solved, parse_moves("U R2 D' F2 L2 U2 B2 D"))
        coords = extract(state)
        assert coords.phase1 == (0, 0, 0)
        assert coords.in_subgroup
        assert not coords.is_solved

    def test_quarter_turn_leaves_subgroup(self, solved):
        coords = extract(apply_move(solved, "F"))
        assert coords.corner_orientation != 0
        assert coords.edge_orientation != 0
        assert not coords.in_subgroup

    def test_phase2_fields_none_outside_slice(self, solved):
        coords = extract(apply_move(solved, "R"))
        assert coords.ud_slice != 0
        assert coords.phase2 is None

    def test_phase2_coordinates_precondition(self, solved):
        cube = CubieCube.from_state(apply_move(solved, "R"))
        with pytest.raises(ValueError):
            phase2_coordinates(cube)

    def test_extract_accepts_cubie(self, solved):
        state = apply_moves(solved, parse_moves("R U"))
        assert extract(CubieCube.from_state(state)) == extract(state)

    def test_phase1_coordinates_bounds(self, solved):
        for seed in range(5):
            cube = CubieCube.from_state(apply_moves(solved, random_scramble(20, seed=seed)))
            co, eo, sl = phase1_coordinates(cube)
            assert 0 <= co < N_CORNER_ORIENTATION
            assert 0 <= eo < N_EDGE_ORIENTATION
            assert 0 <= sl < N_UD_SLICE


class TestVectorizedEncoders:
    """Tests that the numpy encoders agree with the scalar ones."""

    def test_all_orientations_indexed_by_coordinate(self):
        digits = all_orientations(8, 3)
        assert digits.shape == (N_CORNER_ORIENTATION, 8)
        assert np.array_equal(encode_orientations(digits, 3), np.arange(N_CORNER_ORIENTATION))
        assert list(digits[1234]) == decode_orientation(1234, 8, 3)

    def test_edge_orientations_sum_even(self):
        digits = all_orientations(12, 2)
        assert (digits.sum(axis=1) % 2 == 0).all()

    def test_all_permutations_indexed_by_rank(self):
        perms = all_permutations(4)
        assert perms.shape == (24, 4)
        assert np.array_equal(encode_permutations(perms), np.arange(24))
        assert encode_permutation(list(perms[17])) == 17

    def test_all_permutations_read_only(self):
        with pytest.raises(ValueError):
            all_permutations(4)[0, 0] = 3

    def test_slice_masks_indexed_by_rank(self):
        masks = all_slice_masks()
        assert masks.shape == (N_UD_SLICE, 12)
        assert (masks.sum(axis=1) == 4).all()
        assert np.array_equal(encode_slice_masks(masks), np.arange(N_UD_SLICE))
