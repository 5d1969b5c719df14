# Tile and direction constants centralized for modular imports
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Tuple


class TileType(Enum):
    MOUNTAINS = "Mountains"
    OCEAN = "Ocean"
    SAVANNAH = "Savannah"
    JUNGLE = "Jungle"
    DESERT = "Desert"

    @property
    def char(self) -> str:
        return self.value[0]

    def __str__(self) -> str:
        return self.value


class Direction(Enum):
    NORTH = (0, -1)
    SOUTH = (0, 1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

# Declaration order doubles as the canonical ordering for random draws
ALL_TILES: Tuple[TileType, ...] = tuple(TileType)
TILE_ORDER = {t: i for i, t in enumerate(ALL_TILES)}

MOUNTAINS = TileType.MOUNTAINS.char
OCEAN = TileType.OCEAN.char
SAVANNAH = TileType.SAVANNAH.char
JUNGLE = TileType.JUNGLE.char
DESERT = TileType.DESERT.char

CHAR_TO_TILE = {t.char: t for t in ALL_TILES}


def ordered(tiles: Iterable[TileType]) -> List[TileType]:
    """Return tiles sorted by declaration order (set iteration order is not stable across processes)."""
    return sorted(tiles, key=TILE_ORDER.__getitem__)


def tile_from_name(name: str) -> TileType:
    """Resolve 'Ocean', 'ocean', 'OCEAN' or the single letter 'O' to a TileType."""
    key = name.strip()
    if len(key) == 1 and key.upper() in CHAR_TO_TILE:
        return CHAR_TO_TILE[key.upper()]
    for t in ALL_TILES:
        if t.value.lower() == key.lower():
            return t
    raise KeyError(name)


def direction_from_name(name: str) -> Direction:
    key = name.strip().upper()
    short = {"N": "NORTH", "S": "SOUTH", "E": "EAST", "W": "WEST"}
    return Direction[short.get(key, key)]


__all__ = [
    "TileType",
    "Direction",
    "ALL_TILES",
    "TILE_ORDER",
    "MOUNTAINS",
    "OCEAN",
    "SAVANNAH",
    "JUNGLE",
    "DESERT",
    "CHAR_TO_TILE",
    "ordered",
    "tile_from_name",
    "direction_from_name",
]
