"""
Solver configuration - Validated settings for a solver instance.

Uses Pydantic so bad settings fail loudly at construction instead of deep
inside a search.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class HeuristicKind(str, Enum):
    """Which admissible lower bound guides the search."""
    TABLES = "tables"  # exact BFS pruning tables
    FLOOR = "floor"  # 0 at the goal, 1 elsewhere


class SolverConfig(BaseModel):
    """Settings for TwoPhaseSolver."""
    max_length: int = Field(
        25, ge=1, le=50,
        description="Ceiling on total solution length; longer solutions are reported as not found",
    )
    phase1_max_depth: int = Field(12, ge=0, le=20, description="Deepest phase-1 iteration")
    phase2_max_depth: int = Field(18, ge=0, le=30, description="Deepest phase-2 iteration")
    heuristic: HeuristicKind = HeuristicKind.TABLES
    optimize: bool = Field(True, description="Merge same-face runs in the returned solution")
    table_cache_dir: Optional[Path] = Field(
        None, description="Directory for cached tables; None disables the disk cache",
    )

    model_config = {"frozen": True}

