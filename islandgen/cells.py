from typing import AbstractSet, Iterable, Optional, Set, Tuple

from .errors import ContradictionError, RenderBeforeResolutionError
from .tiles import ALL_TILES, TileType, ordered

Coord2D = Tuple[int, int]


class Cell:
    """Superposed grid cell: the tiles still possible at one position."""
    __slots__ = ("position", "candidates", "resolved")

    def __init__(self, position: Coord2D, candidates: Optional[Iterable[TileType]] = None):
        self.position = position
        self.candidates: Set[TileType] = set(ALL_TILES if candidates is None else candidates)
        self.resolved = False

    def entropy(self) -> int:
        return len(self.candidates)

    @property
    def is_contradiction(self) -> bool:
        return not self.candidates

    @property
    def tile(self) -> TileType:
        if not self.resolved:
            raise RenderBeforeResolutionError(position=self.position)
        return next(iter(self.candidates))

    def restrict_to(self, allowed: AbstractSet[TileType]) -> bool:
        """Intersect candidates with ``allowed``; True when something was removed."""
        before = len(self.candidates)
        self.candidates.intersection_update(allowed)
        return len(self.candidates) != before

    def collapse(self, rng) -> TileType:
        if self.resolved:
            return self.tile
        if not self.candidates:
            raise ContradictionError(self.position)
        choice = rng.choice(ordered(self.candidates))
        self.candidates = {choice}
        self.resolved = True
        return choice

    def to_dict(self):
        return {
            "position": list(self.position),
            "candidates": [t.value for t in ordered(self.candidates)],
            "resolved": self.resolved,
        }

    def __repr__(self):
        letters = "".join(t.char for t in ordered(self.candidates))
        return f"Cell({self.position}, {letters or '-'}{', resolved' if self.resolved else ''})"
