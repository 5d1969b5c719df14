import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from islandgen import logging_utils  # noqa: E402
from islandgen.catalog import TileCatalog  # noqa: E402


class CyclingRandom:
    """Deterministic stand-in for random.Random: the n-th draw returns seq[n % len(seq)]."""

    def __init__(self):
        self.calls = 0

    def choice(self, seq):
        item = seq[self.calls % len(seq)]
        self.calls += 1
        return item


class RecordingCatalog(TileCatalog):
    """Catalog that remembers every (tile, direction) lookup."""

    __slots__ = ("lookups",)

    def __init__(self, declared=None):
        super().__init__(declared)
        self.lookups = []

    def allowed_neighbors(self, tile, direction):
        self.lookups.append((tile, direction))
        return super().allowed_neighbors(tile, direction)


@pytest.fixture
def cycling_rng():
    return CyclingRandom()


@pytest.fixture
def contradiction_catalog():
    # Ocean forces Savannah east / Jungle south, Savannah forces Desert south:
    # with CyclingRandom on a 2x2 grid the bottom-right cell ends up empty.
    return TileCatalog.from_mapping(
        {
            "Ocean": {"east": ["Savannah"], "south": ["Jungle"]},
            "Savannah": {"south": ["Desert"]},
        }
    )


@pytest.fixture
def log_level():
    previous = logging_utils.CURRENT_LEVEL
    previous_json = logging_utils.JSON_MODE

    def _set(level, json_mode=False):
        logging_utils.set_level(level)
        logging_utils.set_json_mode(json_mode)

    yield _set
    logging_utils.CURRENT_LEVEL = previous
    logging_utils.JSON_MODE = previous_json
