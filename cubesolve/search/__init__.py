"""
Search - Two-phase IDA* over cube coordinates.

Provides:
- SolverConfig for validated settings
- Distance estimators (admissible lower bounds)
- TwoPhaseSolver and the solve() convenience function
"""

from .config import SolverConfig, HeuristicKind
from .estimator import DistanceEstimator, FloorEstimator, TableEstimator
from .result import SolveResult, SolveStatus
from .solver import TwoPhaseSolver, SearchAborted, solve

__all__ = [
    "SolverConfig",
    "HeuristicKind",
    "DistanceEstimator",
    "FloorEstimator",
    "TableEstimator",
    "SolveResult",
    "SolveStatus",
    "TwoPhaseSolver",
    "SearchAborted",
    "solve",
]
