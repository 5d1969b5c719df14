from islandgen.catalog import default_catalog
from islandgen.tiles import CHAR_TO_TILE, Direction

ALPHABET = set("MOSJD")


def layout_rows(layout: str):
    return layout.split("\n")


def iter_adjacent_pairs(rows):
    """Yield (tile_a, direction, tile_b) for every ordered cardinal pair in a rendered layout."""
    h = len(rows)
    w = len(rows[0])
    for y in range(h):
        for x in range(w):
            a = CHAR_TO_TILE[rows[y][x]]
            for d in Direction:
                nx, ny = x + d.dx, y + d.dy
                if 0 <= nx < w and 0 <= ny < h:
                    yield a, d, CHAR_TO_TILE[rows[ny][nx]]


def adjacency_violations(rows, catalog=None):
    catalog = catalog or default_catalog()
    return [(a, d, b) for a, d, b in iter_adjacent_pairs(rows) if not catalog.is_legal(a, d, b)]
