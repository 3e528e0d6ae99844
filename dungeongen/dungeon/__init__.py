"""Public dungeon package interface.

    DungeonGraph(width, length, floors).generate(seed)
    rooms() -> Room(x, y, z, w, l) in creation order
    edges() -> EdgeView(x, y, z, alignment, state) in lattice order
"""

from .cells import (
    Alignment,
    CellEdge,
    EdgeState,
    EdgeView,
    InvalidDimension,
    InvariantViolation,
    Room,
)  # noqa: F401
from .config import GenerationConfig
from .generator import DungeonGraph, GenerationState

__all__ = [
    "Alignment",
    "CellEdge",
    "DungeonGraph",
    "EdgeState",
    "EdgeView",
    "GenerationConfig",
    "GenerationState",
    "InvalidDimension",
    "InvariantViolation",
    "Room",
]
