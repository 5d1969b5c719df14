"""Exception taxonomy for island generation.

All errors are local to a single generation run. ``ContradictionError`` is the
one callers are expected to recover from (retry with another seed); the solver
never retries on its own.
"""

from __future__ import annotations

from typing import Optional, Tuple


class IslandGenError(Exception):
    """Base class for every error raised by islandgen."""


class InvalidDimensionsError(IslandGenError, ValueError):
    def __init__(self, width, height):
        self.width = width
        self.height = height
        super().__init__(f"Island dimensions must be positive integers, got width={width!r} height={height!r}")


class ContradictionError(IslandGenError):
    """A cell ran out of candidate tiles before it could be resolved."""

    def __init__(
        self,
        position: Optional[Tuple[int, int]] = None,
        *,
        seed: Optional[int] = None,
        cycle: Optional[int] = None,
    ):
        self.position = position
        self.seed = seed
        self.cycle = cycle
        where = f" at {position}" if position is not None else ""
        msg = f"Contradiction{where}: no legal tile remains"
        if cycle is not None:
            msg += f" (cycle {cycle})"
        if seed is not None:
            msg += f"; retry with a seed other than {seed}"
        super().__init__(msg)


class RenderBeforeResolutionError(IslandGenError):
    def __init__(self, unresolved: int = 0, position: Optional[Tuple[int, int]] = None):
        self.unresolved = unresolved
        self.position = position
        if position is not None:
            msg = f"Cell {position} is not resolved"
        else:
            msg = f"Cannot render layout: {unresolved} cell(s) still unresolved"
        super().__init__(msg)


class IterationLimitError(IslandGenError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Solver exceeded {limit} cycles without terminating")


class InvariantViolation(IslandGenError):
    """Raised when the solver notices its own bookkeeping went wrong (e.g. entropy grew)."""


class RuleConfigError(IslandGenError, ValueError):
    """Adjacency rule configuration could not be understood."""


__all__ = [
    "IslandGenError",
    "InvalidDimensionsError",
    "ContradictionError",
    "RenderBeforeResolutionError",
    "IterationLimitError",
    "InvariantViolation",
    "RuleConfigError",
]
