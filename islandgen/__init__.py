"""
project: islandgen
module: __init__.py
License: MIT

Public island generation interface.

Wave Function Collapse style tile map generator: every cell starts with all
five tile types and is narrowed to one, neighbours constrained by adjacency
rules, until the map is fully determined.
"""

__version__ = "0.1.0"

from .catalog import DEFAULT_RULES, TileCatalog, default_catalog
from .cells import Cell
from .config import IslandConfig
from .errors import (
    ContradictionError,
    InvalidDimensionsError,
    InvariantViolation,
    IslandGenError,
    IterationLimitError,
    RenderBeforeResolutionError,
    RuleConfigError,
)
from .generator import Island, build_island, generate_island
from .grid import Grid
from .solver import Solver, SolverState
from .tiles import DESERT, JUNGLE, MOUNTAINS, OCEAN, SAVANNAH, Direction, TileType  # noqa: F401

__all__ = [
    "generate_island",
    "build_island",
    "Island",
    "IslandConfig",
    "Grid",
    "Cell",
    "Solver",
    "SolverState",
    "TileCatalog",
    "DEFAULT_RULES",
    "default_catalog",
    "TileType",
    "Direction",
    "MOUNTAINS",
    "OCEAN",
    "SAVANNAH",
    "JUNGLE",
    "DESERT",
    "IslandGenError",
    "InvalidDimensionsError",
    "ContradictionError",
    "RenderBeforeResolutionError",
    "IterationLimitError",
    "InvariantViolation",
    "RuleConfigError",
]
