"""Entropy-driven collapse loop.

Each cycle:
    * Selection: lowest entropy among unresolved cells. None left -> RESOLVED,
      entropy 0 -> CONTRADICTION.
    * Collapse: one of the tied cells is drawn uniformly, then one of its
      candidates. Both draws use the grid's random source, selection first.
    * Propagation: every resolved cell restricts each unresolved cardinal
      neighbour to its allowed set for that direction. One hop only; the full
      re-scan each cycle keeps constraints consistent without a flood fill.

Every cycle resolves at least one cell, so a run needs at most width*height
cycles. The hard cap (``max_cycles``) only trips if that bookkeeping breaks.
Contradictions are reported, never retried here; restarting with a different
seed is up to the caller.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from .catalog import TileCatalog, default_catalog
from .cells import Coord2D
from .errors import ContradictionError, InvariantViolation, IterationLimitError
from .grid import Grid
from .logging_utils import get_logger
from .metrics import init_metrics

log = get_logger("solver")

DEFAULT_MAX_CYCLES_FACTOR = 4


class SolverState(Enum):
    RUNNING = "running"
    RESOLVED = "resolved"
    CONTRADICTION = "contradiction"

    @property
    def terminal(self) -> bool:
        return self is not SolverState.RUNNING


class Solver:
    def __init__(
        self,
        grid: Grid,
        catalog: TileCatalog | None = None,
        *,
        max_cycles: int | None = None,
        check_invariants: bool = True,
        record_history: bool = False,
        metrics: Dict[str, Any] | None = None,
    ):
        self.grid = grid
        self.catalog = catalog or default_catalog()
        self.rng = grid.rng
        self.max_cycles = max_cycles if max_cycles is not None else grid.width * grid.height * DEFAULT_MAX_CYCLES_FACTOR
        self.check_invariants = check_invariants
        self.record_history = record_history
        self.metrics: Dict[str, Any] = metrics if metrics is not None else init_metrics()
        self.state = SolverState.RUNNING
        self.cycles = 0
        self.contradiction_at: Optional[Coord2D] = None
        self.history: List[List[int]] = []
        if record_history:
            self.history.append(grid.entropy_snapshot())

    def run(self) -> SolverState:
        while not self.state.terminal:
            self.step()
        return self.state

    def run_or_raise(self) -> Grid:
        """Run to completion and return the grid, raising ContradictionError on failure."""
        if self.run() is SolverState.CONTRADICTION:
            raise ContradictionError(self.contradiction_at, seed=self.grid.seed, cycle=self.cycles)
        return self.grid

    def step(self) -> SolverState:
        if self.state.terminal:
            return self.state
        min_entropy = self.grid.min_entropy_among_unresolved()
        if min_entropy is None:
            return self._finish(SolverState.RESOLVED)
        if min_entropy == 0:
            self.contradiction_at = self.grid.first_contradiction()
            self.metrics['contradiction'] = True
            return self._finish(SolverState.CONTRADICTION)
        if self.cycles >= self.max_cycles:
            raise IterationLimitError(self.max_cycles)

        unresolved_before = self.grid.unresolved_count()
        snapshot_before = self.grid.entropy_snapshot() if self.check_invariants else None

        position = self.rng.choice(self.grid.cells_with_entropy(min_entropy))
        tile = self.grid.cell(position).collapse(self.rng)
        self.cycles += 1
        self.metrics['cycles'] = self.cycles
        self.metrics['collapses'] += 1
        log.debug(event="collapse", cycle=self.cycles, x=position[0], y=position[1], tile=tile.value, entropy=min_entropy)

        self.propagate()

        if self.grid.unresolved_count() >= unresolved_before:
            raise InvariantViolation(f"Cycle {self.cycles} resolved no cell")
        if snapshot_before is not None:
            self._assert_entropy_non_increasing(snapshot_before)
        if self.record_history:
            self.history.append(self.grid.entropy_snapshot())
        return self.state

    def propagate(self) -> int:
        """Restrict unresolved neighbours of every resolved cell; returns how many cells changed."""
        allowed_neighbors = self.catalog.allowed_neighbors
        checks = changed = removed = 0
        for cell in self.grid.cells():
            if not cell.resolved:
                continue
            tile = cell.tile
            for direction, neighbor in self.grid.neighbor_cells(cell.position):
                checks += 1
                if neighbor.resolved:
                    continue
                before = neighbor.entropy()
                if neighbor.restrict_to(allowed_neighbors(tile, direction)):
                    changed += 1
                    removed += before - neighbor.entropy()
        self.metrics['neighbor_checks'] += checks
        self.metrics['restrictions_applied'] += changed
        self.metrics['candidates_removed'] += removed
        return changed

    def _assert_entropy_non_increasing(self, before: List[int]) -> None:
        for idx, (old, new) in enumerate(zip(before, self.grid.entropy_snapshot())):
            if new > old:
                pos = (idx % self.grid.width, idx // self.grid.width)
                raise InvariantViolation(f"Entropy of cell {pos} increased from {old} to {new} in cycle {self.cycles}")

    def _finish(self, state: SolverState) -> SolverState:
        self.state = state
        if state is SolverState.CONTRADICTION:
            log.info(event="solve_contradiction", cycles=self.cycles, x=self.contradiction_at[0], y=self.contradiction_at[1])
        else:
            log.info(event="solve_resolved", cycles=self.cycles, width=self.grid.width, height=self.grid.height)
        return state


__all__ = ["Solver", "SolverState", "DEFAULT_MAX_CYCLES_FACTOR"]
