"""
Solve Result - Outcome of a solve call.

Not finding a solution within the configured ceiling is an expected
outcome, so it is reported here as data rather than raised.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from ..engine_core.move import Move, format_moves


class SolveStatus(Enum):
    """How a solve call ended."""
    SOLVED = "solved"
    NOT_FOUND = "not_found"  # search exhausted within the depth ceiling
    UNSOLVABLE = "unsolvable"  # counts are fine but no sequence of turns can solve it
    ABORTED = "aborted"


@dataclass
class SolveResult:
    """
    Result of solving a state.

    Contains:
    - Status and, when solved, the move list
    - The raw phase-1 and phase-2 parts (before optimization)
    - Search statistics (for UI/debugging)
    """
    status: SolveStatus
    moves: list[Move] = field(default_factory=list)
    phase1_moves: list[Move] = field(default_factory=list)
    phase2_moves: list[Move] = field(default_factory=list)
    error: str | None = None

    nodes_expanded: int = 0
    elapsed_s: float = 0.0

    @property
    def found(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def length(self) -> int:
        return len(self.moves)

    @property
    def notation(self) -> str:
        return format_moves(self.moves)

    @classmethod
    def solved(
        cls,
        moves: list[Move],
        phase1_moves: list[Move] | None = None,
        phase2_moves: list[Move] | None = None,
    ) -> SolveResult:
        """Create a success result."""
        return cls(
            status=SolveStatus.SOLVED,
            moves=moves,
            phase1_moves=phase1_moves or [],
            phase2_moves=phase2_moves or [],
        )

    @classmethod
    def failure(cls, status: SolveStatus, error: str) -> SolveResult:
        """Create a not-found, unsolvable or aborted result."""
        return cls(status=status, error=error)
