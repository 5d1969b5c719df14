from typing import Dict

from .tiles import ALL_TILES


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'cycles': 0,
        'collapses': 0,
        'restrictions_applied': 0,
        'candidates_removed': 0,
        'neighbor_checks': 0,
        'contradiction': False,
        'runtime_ms': 0.0,
    }


def tile_count_keys():
    return [f"tiles_{t.value.lower()}" for t in ALL_TILES]


def count_tiles(cells) -> Dict[str, int]:
    counts = dict.fromkeys(tile_count_keys(), 0)
    for cell in cells:
        counts[f"tiles_{cell.tile.value.lower()}"] += 1
    return counts
