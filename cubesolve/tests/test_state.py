"""
Tests for the facelet model.

Tests:
- Solved state layout and accessors
- Text encodings (face fields, 54-letter string, face-letter string)
- Parse errors
"""

import pytest

from ..engine_core.state import (
    Color,
    Face,
    CubeState,
    CubeParseError,
    FACE_ORDER,
    NUM_FACELETS,
    solved_state,
    is_solved,
)
from ..engine_core.reducer import apply_move


class TestSolvedState:
    """Tests for the canonical solved state."""

    def test_has_54_facelets(self, solved):
        assert len(solved.facelets) == NUM_FACELETS

    def test_color_scheme(self, solved):
        """U=W, D=Y, F=R, B=O, L=B, R=G."""
        assert solved.center(Face.U) == Color.WHITE
        assert solved.center(Face.D) == Color.YELLOW
        assert solved.center(Face.F) == Color.RED
        assert solved.center(Face.B) == Color.ORANGE
        assert solved.center(Face.L) == Color.BLUE
        assert solved.center(Face.R) == Color.GREEN

    def test_every_face_uniform(self, solved):
        for face, colors in solved.faces.items():
            assert set(colors) == {solved.center(face)}

    def test_is_solved(self, solved):
        assert is_solved(solved)

    def test_custom_scheme(self):
        """Any scheme with distinct colors is solved."""
        scheme = dict(zip(FACE_ORDER, [Color.YELLOW, Color.BLUE, Color.ORANGE,
                                       Color.WHITE, Color.GREEN, Color.RED]))
        state = solved_state(scheme)
        assert state.center(Face.U) == Color.YELLOW
        assert is_solved(state)

    def test_turned_state_not_solved(self, solved):
        assert not is_solved(apply_move(solved, "F"))


class TestStateConstruction:
    """Tests for building and modifying states."""

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            CubeState((Color.WHITE,) * 53)

    def test_with_face_returns_new_state(self, solved):
        """Replacing a face leaves the original untouched."""
        new_state = solved.with_face(Face.U, "YYYYYYYYY")
        assert new_state.face(Face.U) == (Color.YELLOW,) * 9
        assert solved.face(Face.U) == (Color.WHITE,) * 9

    def test_with_face_wrong_size(self, solved):
        with pytest.raises(ValueError):
            solved.with_face(Face.U, "WWW")

    def test_with_facelet(self, solved):
        new_state = solved.with_facelet(0, Color.RED)
        assert new_state.facelets[0] == Color.RED
        assert new_state.facelets[1:] == solved.facelets[1:]

    def test_states_hashable(self, solved):
        assert len({solved, solved_state(), apply_move(solved, "U")}) == 2


class TestTextEncodings:
    """Tests for parsing and formatting."""

    def test_string_round_trip(self, sexy_move_state):
        text = sexy_move_state.to_string()
        assert len(text) == NUM_FACELETS
        assert CubeState.from_string(text) == sexy_move_state

    def test_solved_string(self, solved):
        assert solved.to_string() == "W" * 9 + "G" * 9 + "R" * 9 + "Y" * 9 + "B" * 9 + "O" * 9

    def test_from_faces_case_insensitive(self, solved):
        """Input widgets send lowercase color letters."""
        faces = {face: text.lower() for face, text in solved.to_faces().items()}
        assert CubeState.from_faces(faces) == solved

    def test_from_faces_lowercase_keys(self, solved):
        faces = {face.lower(): text for face, text in solved.to_faces().items()}
        assert CubeState.from_faces(faces) == solved

    def test_from_faces_missing_face(self, solved):
        faces = solved.to_faces()
        del faces["B"]
        with pytest.raises(CubeParseError, match="Missing face B"):
            CubeState.from_faces(faces)

    def test_unknown_color_letter(self):
        with pytest.raises(CubeParseError, match="Unknown color"):
            CubeState.from_string("X" * NUM_FACELETS)

    def test_wrong_string_length(self):
        with pytest.raises(CubeParseError):
            CubeState.from_string("W" * 10)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            CubeState.from_string("")

    def test_facelet_string_solved(self, solved):
        expected = "".join(face.value * 9 for face in FACE_ORDER)
        assert solved.to_facelet_string() == expected

    def test_facelet_string_follows_centers(self, solved):
        """Stickers are named after the face whose center they match."""
        state = apply_move(solved, "U")
        text = state.to_facelet_string()
        # After U, the front top row shows the right face's color.
        assert text[18:21] == "RRR"
        assert text[9:12] == "BBB"

    def test_str_shows_net(self, solved):
        lines = str(solved).splitlines()
        assert len(lines) == 9
        assert lines[0].strip() == "W W W"
        assert lines[3] == "B B B  R R R  G G G  O O O"
