import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from dotenv import dotenv_values, find_dotenv

from .catalog import TileCatalog, default_catalog

_FALSE_VALUES = {'0', 'false', 'no', ''}


@dataclass
class IslandConfig:
    width: int = 20
    height: int = 20
    seed: Optional[int] = None
    flattened: bool = True
    enable_metrics: bool = True
    check_invariants: bool = True
    record_history: bool = False
    rules_path: Optional[str] = None
    max_cycles_factor: int = 4

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv_path: Optional[str] = None,
        **overrides,
    ) -> "IslandConfig":
        """Build a config from ISLAND_* environment variables.

        When ``environ`` is not given, values from a ``.env`` file (searched
        from the working directory, or ``dotenv_path``) are layered under
        ``os.environ``; the process environment is never modified. Keyword
        overrides take precedence over both.
        """
        if environ is None:
            file_values = dotenv_values(dotenv_path or find_dotenv(usecwd=True))
            env = {k: v for k, v in file_values.items() if v is not None}
            env.update(os.environ)
        else:
            env = environ
        cfg = cls()
        int_keys = {
            'ISLAND_WIDTH': 'width',
            'ISLAND_HEIGHT': 'height',
            'ISLAND_SEED': 'seed',
            'ISLAND_MAX_CYCLES_FACTOR': 'max_cycles_factor',
        }
        bool_keys = {
            'ISLAND_FLATTENED': 'flattened',
            'ISLAND_ENABLE_METRICS': 'enable_metrics',
            'ISLAND_CHECK_INVARIANTS': 'check_invariants',
            'ISLAND_RECORD_HISTORY': 'record_history',
        }
        for env_key, attr in int_keys.items():
            raw = env.get(env_key)
            if raw is None or raw.strip() == '':
                continue
            try:
                setattr(cfg, attr, int(raw))
            except ValueError:
                raise ValueError(f"{env_key} must be an integer, got {raw!r}") from None
        for env_key, attr in bool_keys.items():
            if env_key in env:
                setattr(cfg, attr, env.get(env_key, '').strip().lower() not in _FALSE_VALUES)
        rules_path = env.get('ISLAND_RULES_PATH')
        if rules_path:
            cfg.rules_path = rules_path
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown IslandConfig field(s): {', '.join(sorted(unknown))}")
        return replace(cfg, **overrides)

    def catalog(self) -> TileCatalog:
        if self.rules_path:
            return TileCatalog.from_json(self.rules_path)
        return default_catalog()


__all__ = ["IslandConfig"]
