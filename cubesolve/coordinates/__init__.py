"""
Coordinates - Compact integer views of a cube and the tables built on them.

1. Decode facelets into pieces (CubieCube)
2. Fold piece orientation/permutation into bounded coordinates
3. Tabulate coordinate transitions per move (MoveTables)
4. Tabulate exact distances to the goal (PruningTables)
"""

from .cubie import CubieCube, Corner, Edge, MOVE_CUBES
from .coords import Coordinates, extract, phase1_coordinates, phase2_coordinates
from .tables import MoveTables, PruningTables, SolverTables
from .cache import TableCache

__all__ = [
    "CubieCube",
    "Corner",
    "Edge",
    "MOVE_CUBES",
    "Coordinates",
    "extract",
    "phase1_coordinates",
    "phase2_coordinates",
    "MoveTables",
    "PruningTables",
    "SolverTables",
    "TableCache",
]
