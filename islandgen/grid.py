"""Arena grid of superposed cells.

Cells live in one flat row-major list; neighbour lookup is computed from the
position and the grid dimensions only, so cells never reference the grid.
"""
from __future__ import annotations

import random
from typing import Iterator, List, Optional, Tuple

from .cells import Cell, Coord2D
from .errors import InvalidDimensionsError, RenderBeforeResolutionError
from .tiles import Direction, ordered

# Fixed N,S,E,W order keeps neighbour iteration (and therefore metrics) deterministic
_NEIGHBOR_ORDER = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)


class Grid:
    def __init__(self, width: int, height: int, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        if not _is_dimension(width) or not _is_dimension(height):
            raise InvalidDimensionsError(width, height)
        self.width = width
        self.height = height
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self._cells: List[Cell] = [Cell((x, y)) for y in range(height) for x in range(width)]

    def in_bounds(self, position: Coord2D) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, position: Coord2D) -> Cell:
        if not self.in_bounds(position):
            raise IndexError(f"Position {position} outside {self.width}x{self.height} grid")
        x, y = position
        return self._cells[y * self.width + x]

    def cells(self) -> Iterator[Cell]:
        return iter(self._cells)

    def neighbors(self, position: Coord2D) -> List[Tuple[Direction, Coord2D]]:
        x, y = position
        out = []
        for d in _NEIGHBOR_ORDER:
            nx, ny = x + d.dx, y + d.dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                out.append((d, (nx, ny)))
        return out

    def neighbor_cells(self, position: Coord2D) -> List[Tuple[Direction, Cell]]:
        """Same as ``neighbors`` but yields the Cell objects (hot path of propagation)."""
        x, y = position
        w, h = self.width, self.height
        out = []
        for d in _NEIGHBOR_ORDER:
            nx, ny = x + d.dx, y + d.dy
            if 0 <= nx < w and 0 <= ny < h:
                out.append((d, self._cells[ny * w + nx]))
        return out

    # ---------------- Entropy queries ---------------------------------------
    def min_entropy_among_unresolved(self) -> Optional[int]:
        """Smallest entropy of any unresolved cell, or None once every cell is resolved."""
        lowest = None
        for c in self._cells:
            if c.resolved:
                continue
            e = c.entropy()
            if lowest is None or e < lowest:
                lowest = e
        return lowest

    def cells_with_entropy(self, value: int) -> List[Coord2D]:
        return [c.position for c in self._cells if not c.resolved and c.entropy() == value]

    def resolved_positions(self) -> List[Coord2D]:
        return [c.position for c in self._cells if c.resolved]

    def unresolved_count(self) -> int:
        return sum(1 for c in self._cells if not c.resolved)

    def is_fully_resolved(self) -> bool:
        return all(c.resolved for c in self._cells)

    def entropy_snapshot(self) -> List[int]:
        return [c.entropy() for c in self._cells]

    def total_entropy(self) -> int:
        return sum(c.entropy() for c in self._cells)

    def first_contradiction(self) -> Optional[Coord2D]:
        for c in self._cells:
            if not c.resolved and c.is_contradiction:
                return c.position
        return None

    # ---------------- Rendering ----------------------------------------------
    def rows(self) -> List[str]:
        unresolved = self.unresolved_count()
        if unresolved:
            raise RenderBeforeResolutionError(unresolved)
        w = self.width
        return ["".join(c.tile.char for c in self._cells[y * w:(y + 1) * w]) for y in range(self.height)]

    def render_layout(self, multiline: bool = True) -> str:
        return ("\n" if multiline else "").join(self.rows())

    def render_superposition(self) -> str:
        """Debug view of every cell's remaining candidates, usable mid-run."""
        lines = []
        w = self.width
        for y in range(self.height):
            parts = ["|"]
            for c in self._cells[y * w:(y + 1) * w]:
                parts.append("".join(t.char for t in ordered(c.candidates)).ljust(5) + "|")
            lines.append("".join(parts))
        return "\n".join(lines)

    def __repr__(self):
        return f"Grid({self.width}x{self.height}, unresolved={self.unresolved_count()})"


def _is_dimension(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


__all__ = ["Grid"]
