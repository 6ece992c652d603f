"""
Cube State - Canonical facelet representation of the 3x3x3 puzzle.

Design principles:
- Immutable: all mutations return a new state
- Serializable: round-trips through a 54-character string
- Layout-stable: six faces of nine facelets, row-major, center at index 4

Faces are stored in U, R, F, D, L, B order. Within a face the facelets are
numbered as seen when looking straight at that face in the standard net:

            U0 U1 U2
            U3 U4 U5
            U6 U7 U8
    L0 L1 L2 F0 F1 F2 R0 R1 R2 B0 B1 B2
    L3 L4 L5 F3 F4 F5 R3 R4 R5 B3 B4 B5
    L6 L7 L8 F6 F7 F8 R6 R7 R8 B6 B7 B8
            D0 D1 D2
            D3 D4 D5
            D6 D7 D8
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping


class Color(str, Enum):
    """The six sticker colors."""
    WHITE = "W"
    YELLOW = "Y"
    RED = "R"
    ORANGE = "O"
    BLUE = "B"
    GREEN = "G"


class Face(str, Enum):
    """The six rigid layers, in storage order."""
    U = "U"
    R = "R"
    F = "F"
    D = "D"
    L = "L"
    B = "B"

    @property
    def index(self) -> int:
        return FACE_ORDER.index(self)

    @property
    def offset(self) -> int:
        """Index of this face's first facelet in the flat 54-tuple."""
        return self.index * FACELETS_PER_FACE

    @property
    def opposite(self) -> Face:
        return _OPPOSITES[self]


FACE_ORDER: tuple[Face, ...] = (Face.U, Face.R, Face.F, Face.D, Face.L, Face.B)
FACELETS_PER_FACE = 9
NUM_FACELETS = FACELETS_PER_FACE * len(FACE_ORDER)
CENTER = 4

_OPPOSITES = {
    Face.U: Face.D,
    Face.D: Face.U,
    Face.R: Face.L,
    Face.L: Face.R,
    Face.F: Face.B,
    Face.B: Face.F,
}

SOLVED_SCHEME: dict[Face, Color] = {
    Face.U: Color.WHITE,
    Face.D: Color.YELLOW,
    Face.F: Color.RED,
    Face.B: Color.ORANGE,
    Face.L: Color.BLUE,
    Face.R: Color.GREEN,
}


class CubeParseError(ValueError):
    """Raised when a textual cube encoding cannot be read."""


@dataclass(frozen=True)
class CubeState:
    """
    Complete puzzle state at a point in time.

    This is the canonical state that the engine operates on. All state
    changes go through the reducer, which always returns a new instance.
    """
    facelets: tuple[Color, ...]

    def __post_init__(self):
        if len(self.facelets) != NUM_FACELETS:
            raise ValueError(
                f"A cube state needs {NUM_FACELETS} facelets, got {len(self.facelets)}"
            )

    def face(self, face: Face | str) -> tuple[Color, ...]:
        """Get the nine colors of a face."""
        start = Face(face).offset
        return self.facelets[start:start + FACELETS_PER_FACE]

    @property
    def faces(self) -> dict[Face, tuple[Color, ...]]:
        return {face: self.face(face) for face in FACE_ORDER}

    def center(self, face: Face | str) -> Color:
        return self.face(face)[CENTER]

    def color_counts(self) -> Counter:
        """Occurrences of each color over all 54 facelets."""
        return Counter(self.facelets)

    def with_face(self, face: Face | str, colors: Iterable[Color | str]) -> CubeState:
        """Return new state with one face replaced."""
        new_colors = tuple(Color(c) for c in colors)
        if len(new_colors) != FACELETS_PER_FACE:
            raise ValueError(f"A face needs {FACELETS_PER_FACE} colors, got {len(new_colors)}")
        start = Face(face).offset
        facelets = list(self.facelets)
        facelets[start:start + FACELETS_PER_FACE] = new_colors
        return CubeState(tuple(facelets))

    def with_facelet(self, index: int, color: Color | str) -> CubeState:
        """Return new state with a single facelet recolored."""
        facelets = list(self.facelets)
        facelets[index] = Color(color)
        return CubeState(tuple(facelets))

    # Text encodings

    @classmethod
    def from_faces(cls, faces: Mapping[str, str]) -> CubeState:
        """
        Parse the six-field encoding used by face-grid input widgets.

        Each field maps a face letter to nine color letters, e.g.
        {"U": "wwwwwwwww", "R": "ggggggggg", ...}. Letters are
        case-insensitive.
        """
        facelets: list[Color] = []
        for face in FACE_ORDER:
            text = faces.get(face.value)
            if text is None:
                text = faces.get(face.value.lower())
            if text is None:
                raise CubeParseError(f"Missing face {face.value}")
            facelets.extend(_parse_colors(text, f"face {face.value}"))
        return cls(tuple(facelets))

    @classmethod
    def from_string(cls, text: str) -> CubeState:
        """Parse a 54-letter color string in U, R, F, D, L, B face order."""
        return cls(tuple(_parse_colors(text, "cube string", NUM_FACELETS)))

    def to_string(self) -> str:
        """Serialize to a 54-letter color string (inverse of from_string)."""
        return "".join(c.value for c in self.facelets)

    def to_faces(self) -> dict[str, str]:
        return {face.value: "".join(c.value for c in colors) for face, colors in self.faces.items()}

    def to_facelet_string(self) -> str:
        """
        Serialize using face letters instead of colors.

        Each sticker is named after the face whose center shares its color,
        giving the "UUUUUUUUURRRRRRRRR..." form that two-phase solvers
        conventionally exchange.
        """
        by_color = {self.center(face): face.value for face in FACE_ORDER}
        if len(by_color) != len(FACE_ORDER):
            raise CubeParseError("Center colors are not distinct")
        return "".join(by_color[c] for c in self.facelets)

    def __str__(self) -> str:
        rows = []
        pad = " " * 7
        up, down = self.face(Face.U), self.face(Face.D)
        for r in range(3):
            rows.append(pad + " ".join(c.value for c in up[r * 3:r * 3 + 3]))
        for r in range(3):
            rows.append("  ".join(
                " ".join(c.value for c in self.face(face)[r * 3:r * 3 + 3])
                for face in (Face.L, Face.F, Face.R, Face.B)
            ))
        for r in range(3):
            rows.append(pad + " ".join(c.value for c in down[r * 3:r * 3 + 3]))
        return "\n".join(rows)


def _parse_colors(text: str, what: str, expected: int = FACELETS_PER_FACE) -> list[Color]:
    letters = text.strip().upper()
    if len(letters) != expected:
        raise CubeParseError(f"{what} needs {expected} letters, got {len(letters)}")
    colors = []
    for letter in letters:
        try:
            colors.append(Color(letter))
        except ValueError:
            raise CubeParseError(f"Unknown color {letter!r} in {what}") from None
    return colors


def solved_state(scheme: Mapping[Face, Color] | None = None) -> CubeState:
    """Create the solved state, optionally with a custom color scheme."""
    scheme = scheme or SOLVED_SCHEME
    facelets: list[Color] = []
    for face in FACE_ORDER:
        facelets.extend([scheme[face]] * FACELETS_PER_FACE)
    return CubeState(tuple(facelets))


def is_solved(state: CubeState) -> bool:
    """True when every facelet matches the center of its face."""
    return all(
        all(color == colors[CENTER] for color in colors)
        for colors in state.faces.values()
    )
