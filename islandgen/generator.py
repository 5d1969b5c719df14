"""Island generation entry points.

``generate_island`` is the public contract: it returns the rendered layout
string. ``build_island`` runs the same pipeline but hands back the ``Island``
result so callers can inspect the grid, seed and generation metrics.

Output alphabet (first letter of each tile name):
    'M' Mountains, 'O' Ocean, 'S' Savannah, 'J' Jungle, 'D' Desert

A ContradictionError means the chosen seed produced an unsatisfiable map with
the active rules. Nothing is retried internally; pass a different seed.
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, List, Optional

from .catalog import TileCatalog
from .config import IslandConfig
from .errors import ContradictionError
from .grid import Grid
from .logging_utils import get_logger
from .metrics import count_tiles, init_metrics
from .solver import Solver, SolverState

log = get_logger("generator")

_SEED_SOURCE = random.SystemRandom()


class Island:
    """Fully resolved island plus the bookkeeping from its generation run."""

    def __init__(
        self,
        grid: Grid,
        *,
        seed: Optional[int],
        state: SolverState,
        metrics: Dict[str, Any],
        history: Optional[List[List[int]]] = None,
    ):
        self.grid = grid
        self.seed = seed
        self.state = state
        self.metrics = metrics
        self.history = history or []
        self.rows: List[str] = grid.rows()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def layout(self, flattened: bool = True) -> str:
        return ("" if flattened else "\n").join(self.rows).strip()

    def tile_at(self, x: int, y: int):
        return self.grid.cell((x, y)).tile

    def tile_counts(self) -> Dict[str, int]:
        return count_tiles(self.grid.cells())

    # Convenience outputs
    def to_ascii(self) -> str:
        return "\n".join(self.rows)

    def to_json(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "grid": list(self.rows),
            "metrics": self.metrics,
        }

    def __str__(self) -> str:
        return self.to_ascii()


def build_island(
    width: Optional[int] = None,
    height: Optional[int] = None,
    seed: Optional[int] = None,
    *,
    config: Optional[IslandConfig] = None,
    catalog: Optional[TileCatalog] = None,
    rng: Optional[random.Random] = None,
) -> Island:
    """Run the full pipeline and return the resolved Island.

    Explicit arguments win over ``config``; ``config`` defaults to
    ``IslandConfig()`` (20x20, random seed). Passing ``rng`` injects the random
    source directly, in which case ``seed`` is only recorded; with an injected
    source and no seed, ``Island.seed`` stays None since no seed drove the run.
    """
    cfg = config or IslandConfig()
    width = cfg.width if width is None else width
    height = cfg.height if height is None else height
    if seed is None:
        seed = cfg.seed
    if seed is None and rng is None:
        seed = _SEED_SOURCE.randint(0, 2**31 - 1)
    metrics: Dict[str, Any] = init_metrics() if cfg.enable_metrics else {}
    phase_times: Dict[str, int] = {}

    def _phase(label, fn, *a, **k):
        if not cfg.enable_metrics:
            return fn(*a, **k)
        ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
        phase_times[label] = int((pe - ps) * 1000)
        return r

    start = time.perf_counter()
    # Grid construction validates the dimensions before any draw happens
    grid = _phase('init_grid', Grid, width, height, rng=rng if rng is not None else random.Random(seed), seed=seed)
    solver = Solver(
        grid,
        catalog if catalog is not None else cfg.catalog(),
        max_cycles=width * height * cfg.max_cycles_factor,
        check_invariants=cfg.check_invariants,
        record_history=cfg.record_history,
        metrics=metrics if cfg.enable_metrics else None,
    )
    state = _phase('solve', solver.run)
    if state is SolverState.CONTRADICTION:
        pos = solver.contradiction_at
        log.warn(event="island_contradiction", seed=seed, width=width, height=height, cycle=solver.cycles, x=pos[0], y=pos[1])
        raise ContradictionError(pos, seed=seed, cycle=solver.cycles)

    island = _phase(
        'render',
        Island,
        grid,
        seed=seed,
        state=state,
        metrics=metrics,
        history=solver.history,
    )
    if cfg.enable_metrics:
        metrics.update({"seed": seed, "width": width, "height": height})
        metrics.update(island.tile_counts())
        metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        metrics['phase_ms'] = phase_times
    log.info(event="island_generated", seed=seed, width=width, height=height, cycles=solver.cycles,
             runtime_ms=metrics.get('runtime_ms'))
    return island


def generate_island(
    width: Optional[int] = None,
    height: Optional[int] = None,
    seed: Optional[int] = None,
    flattened: Optional[bool] = None,
    *,
    config: Optional[IslandConfig] = None,
    catalog: Optional[TileCatalog] = None,
) -> str:
    """Generate an island layout string.

    Width and height default to 20 (or the config's values). ``flattened``
    (default True) concatenates all rows; False joins rows with '\\n'.
    Same (width, height, seed) always yields the same string. Raises
    InvalidDimensionsError for non-positive sizes and ContradictionError when
    the rules cannot be satisfied for this seed.
    """
    cfg = config or IslandConfig()
    island = build_island(width, height, seed, config=cfg, catalog=catalog)
    return island.layout(cfg.flattened if flattened is None else flattened)


__all__ = ["Island", "build_island", "generate_island"]
