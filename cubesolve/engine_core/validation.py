"""
State Validation - Checks that a facelet assignment can be a real cube.

Validates that:
1. Each of the six colors occurs exactly nine times (the basic invariant)
2. Centers carry six distinct colors (warning only in non-strict mode)
3. In strict mode, the assignment is physically solvable: every piece is
   recognisable and unique, corner twist and edge flip sums vanish, and
   corner and edge permutation parities agree

The count check is necessary but not sufficient for solvability. Callers
must not treat is_valid() as "solvable".
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .state import Color, CubeState, FACE_ORDER, FACELETS_PER_FACE


class InvalidConfigurationError(Exception):
    """Raised when a facelet assignment cannot be a legal cube."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid cube configuration: {'; '.join(errors)}")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def is_valid(state: CubeState) -> bool:
    """True iff every color occurs exactly nine times."""
    return not _count_errors(state)


def validate_state(state: CubeState, strict: bool = False) -> ValidationResult:
    """
    Validate a cube state.

    Non-strict validation only enforces color counts. Strict validation also
    decodes the pieces and checks the orientation and parity invariants.
    """
    errors = _count_errors(state)
    warnings: list[str] = []

    centers = [state.center(face) for face in FACE_ORDER]
    if len(set(centers)) != len(centers):
        message = "Center colors are not distinct"
        if strict:
            errors.append(message)
        else:
            warnings.append(message)

    if strict and not errors:
        errors.extend(_solvability_errors(state))

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def require_valid(state: CubeState) -> None:
    """Raise InvalidConfigurationError unless the color counts are right."""
    errors = _count_errors(state)
    if errors:
        raise InvalidConfigurationError(errors)


def _count_errors(state: CubeState) -> list[str]:
    counts = state.color_counts()
    return [
        f"Color {color.value} appears {counts.get(color, 0)} times (expected {FACELETS_PER_FACE})"
        for color in Color
        if counts.get(color, 0) != FACELETS_PER_FACE
    ]


def _solvability_errors(state: CubeState) -> list[str]:
    from ..coordinates.cubie import CubieCube

    try:
        cube = CubieCube.from_state(state)
    except InvalidConfigurationError as e:
        return list(e.errors)
    return cube.solvability_errors()
