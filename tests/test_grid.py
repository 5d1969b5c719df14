import random

import pytest

from islandgen.errors import InvalidDimensionsError, RenderBeforeResolutionError
from islandgen.grid import Grid
from islandgen.tiles import Direction, TileType


def _resolve_all(grid, tile=TileType.SAVANNAH):
    for c in grid.cells():
        c.candidates = {tile}
        c.resolved = True


@pytest.mark.parametrize("w,h", [(0, 5), (5, 0), (-1, 3), (2.5, 2), ("3", 3), (True, 2)])
def test_invalid_dimensions(w, h):
    with pytest.raises(InvalidDimensionsError):
        Grid(w, h)


def test_invalid_dimensions_is_value_error():
    with pytest.raises(ValueError):
        Grid(0, 0)


def test_cells_are_row_major_positions():
    g = Grid(3, 2, seed=1)
    assert [c.position for c in g.cells()] == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]
    assert g.cell((2, 1)).position == (2, 1)
    with pytest.raises(IndexError):
        g.cell((3, 0))


def test_neighbors_interior_and_edges():
    g = Grid(3, 3)
    assert g.neighbors((1, 1)) == [
        (Direction.NORTH, (1, 0)),
        (Direction.SOUTH, (1, 2)),
        (Direction.EAST, (2, 1)),
        (Direction.WEST, (0, 1)),
    ]
    assert g.neighbors((0, 0)) == [(Direction.SOUTH, (0, 1)), (Direction.EAST, (1, 0))]
    assert g.neighbors((2, 2)) == [(Direction.NORTH, (2, 1)), (Direction.WEST, (1, 2))]


def test_single_cell_and_strip_neighbors():
    assert Grid(1, 1).neighbors((0, 0)) == []
    strip = Grid(1, 4)
    for y in range(4):
        dirs = {d for d, _ in strip.neighbors((0, y))}
        assert not dirs & {Direction.EAST, Direction.WEST}


def test_entropy_queries():
    g = Grid(3, 1)
    assert g.min_entropy_among_unresolved() == 5
    assert g.cells_with_entropy(5) == [(0, 0), (1, 0), (2, 0)]
    g.cell((2, 0)).restrict_to({TileType.OCEAN, TileType.JUNGLE})
    g.cell((1, 0)).restrict_to({TileType.OCEAN, TileType.DESERT})
    assert g.min_entropy_among_unresolved() == 2
    assert g.cells_with_entropy(2) == [(1, 0), (2, 0)]
    assert g.total_entropy() == 9
    assert g.entropy_snapshot() == [5, 2, 2]


def test_resolved_cells_excluded_from_entropy_queries():
    g = Grid(2, 1)
    g.cell((0, 0)).collapse(random.Random(0))
    assert g.cells_with_entropy(1) == []
    assert g.min_entropy_among_unresolved() == 5
    assert g.resolved_positions() == [(0, 0)]
    g.cell((1, 0)).collapse(random.Random(0))
    assert g.min_entropy_among_unresolved() is None
    assert g.is_fully_resolved()


def test_first_contradiction():
    g = Grid(2, 2)
    assert g.first_contradiction() is None
    g.cell((1, 1)).restrict_to(set())
    assert g.first_contradiction() == (1, 1)
    assert g.min_entropy_among_unresolved() == 0


def test_render_layout_multiline_and_flat():
    g = Grid(2, 2)
    _resolve_all(g)
    g.cell((1, 0)).candidates = {TileType.OCEAN}
    g.cell((0, 1)).candidates = {TileType.JUNGLE}
    assert g.render_layout(True) == "SO\nJS"
    assert g.render_layout(False) == "SOJS"


def test_render_before_resolution_fails():
    g = Grid(2, 2)
    g.cell((0, 0)).collapse(random.Random(5))
    with pytest.raises(RenderBeforeResolutionError) as exc:
        g.render_layout(True)
    assert exc.value.unresolved == 3


def test_render_superposition_debug_view():
    g = Grid(2, 1)
    g.cell((1, 0)).restrict_to({TileType.DESERT, TileType.OCEAN})
    assert g.render_superposition() == "|MOSJD|OD   |"


def test_seeded_rng_is_owned_by_grid():
    a = Grid(2, 2, seed=11)
    b = Grid(2, 2, seed=11)
    assert a.rng.random() == b.rng.random()
    injected = random.Random(4)
    assert Grid(1, 1, rng=injected).rng is injected
