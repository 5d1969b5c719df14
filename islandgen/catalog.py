"""Adjacency rules for island tiles.

The catalog is the single source of truth for which tile may sit next to which.
Rules are declared per tile and direction, then closed symmetrically: when A
declares B towards ``d``, B implicitly accepts A towards ``d.opposite``. Every
tile always accepts itself.

Rule mappings (``from_mapping`` / ``from_json``) take either a flat list applied
to all four directions or a per-direction mapping::

    {"Ocean": ["Savannah", "Jungle"],
     "Desert": {"north": ["Savannah"], "south": ["Jungle"]}}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Mapping, Set, Union

from .errors import RuleConfigError
from .tiles import ALL_TILES, Direction, TileType, direction_from_name, tile_from_name

RuleTable = Dict[TileType, Dict[Direction, FrozenSet[TileType]]]

DEFAULT_RULES: Dict[str, list] = {
    "Savannah": ["Jungle", "Mountains", "Desert"],
    "Ocean": ["Savannah", "Jungle"],
    "Desert": ["Savannah", "Jungle"],
    "Mountains": ["Savannah"],
    "Jungle": ["Savannah"],
}


class TileCatalog:
    __slots__ = ("_declared", "_allowed")

    def __init__(self, declared: Mapping[TileType, Mapping[Direction, Iterable[TileType]]] | None = None):
        table: Dict[TileType, Dict[Direction, Set[TileType]]] = {
            t: {d: {t} for d in Direction} for t in ALL_TILES
        }
        for tile, per_dir in (declared or {}).items():
            for direction, extra in per_dir.items():
                table[tile][direction].update(extra)
        self._declared: RuleTable = _freeze(table)
        # Symmetric closure
        for tile in ALL_TILES:
            for direction in Direction:
                for other in self._declared[tile][direction]:
                    table[other][direction.opposite].add(tile)
        self._allowed: RuleTable = _freeze(table)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Union[Iterable[str], Mapping[str, Iterable[str]]]]) -> "TileCatalog":
        declared: Dict[TileType, Dict[Direction, Set[TileType]]] = {}
        for tile_name, rule in mapping.items():
            tile = _tile(tile_name)
            per_dir = declared.setdefault(tile, {d: set() for d in Direction})
            if isinstance(rule, Mapping):
                for dir_name, names in rule.items():
                    try:
                        direction = direction_from_name(str(dir_name))
                    except KeyError:
                        raise RuleConfigError(f"Unknown direction {dir_name!r} in rules for {tile_name!r}") from None
                    per_dir[direction].update(_tiles(names, tile_name))
            elif isinstance(rule, (list, tuple, set, frozenset)):
                extra = _tiles(rule, tile_name)
                for direction in Direction:
                    per_dir[direction].update(extra)
            else:
                raise RuleConfigError(f"Rules for {tile_name!r} must be a list or a direction mapping")
        return cls(declared)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "TileCatalog":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise RuleConfigError(f"Invalid JSON in rules file {path}: {exc}") from exc
        if not isinstance(data, Mapping):
            raise RuleConfigError(f"Rules file {path} must contain a JSON object")
        return cls.from_mapping(data)

    def all_types(self) -> FrozenSet[TileType]:
        return frozenset(ALL_TILES)

    def allowed_neighbors(self, tile: TileType, direction: Direction) -> FrozenSet[TileType]:
        """Tiles allowed in the cell lying ``direction`` of a cell holding ``tile``."""
        return self._allowed[tile][direction]

    def declared_neighbors(self, tile: TileType, direction: Direction) -> FrozenSet[TileType]:
        """Rules exactly as declared, before symmetric closure."""
        return self._declared[tile][direction]

    def is_legal(self, tile: TileType, direction: Direction, neighbor: TileType) -> bool:
        return neighbor in self._allowed[tile][direction]

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        return {
            t.value: {d.name.lower(): [n.value for n in ALL_TILES if n in self._allowed[t][d]] for d in Direction}
            for t in ALL_TILES
        }


def _freeze(table) -> RuleTable:
    return {t: {d: frozenset(s) for d, s in per_dir.items()} for t, per_dir in table.items()}


def _tile(name) -> TileType:
    if isinstance(name, TileType):
        return name
    try:
        return tile_from_name(str(name))
    except KeyError:
        raise RuleConfigError(f"Unknown tile type {name!r}") from None


def _tiles(names, owner) -> Set[TileType]:
    if isinstance(names, str):
        raise RuleConfigError(f"Neighbours for {owner!r} must be a list, got a string")
    return {_tile(n) for n in names}


_DEFAULT = None


def default_catalog() -> TileCatalog:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = TileCatalog.from_mapping(DEFAULT_RULES)
    return _DEFAULT


__all__ = ["TileCatalog", "DEFAULT_RULES", "default_catalog"]
