import os
import random
from dataclasses import dataclass
from typing import Optional, Tuple

_FALSY = {'0', 'false', 'no', ''}


@dataclass
class GenerationConfig:
    width: int = 8
    length: int = 8
    floors: int = 8
    seed: Optional[int] = None
    enable_metrics: bool = True

    @property
    def size(self) -> Tuple[int, int, int]:
        return (self.width, self.length, self.floors)

    def resolve_seed(self) -> int:
        # 0 is a valid deterministic seed; None => random
        if self.seed is None:
            return random.randint(1, 1_000_000)
        return self.seed

    @classmethod
    def from_env(cls, **overrides) -> "GenerationConfig":
        """Build a config from ``DUNGEON_*`` environment variables.

        Keyword overrides win over the environment; ``None`` overrides are ignored.
        """
        cfg = cls()
        env_map = {
            'DUNGEON_WIDTH': 'width',
            'DUNGEON_LENGTH': 'length',
            'DUNGEON_FLOORS': 'floors',
            'DUNGEON_SEED': 'seed',
        }
        for env_key, attr in env_map.items():
            raw = os.environ.get(env_key, '').strip()
            if raw:
                setattr(cfg, attr, int(raw))
        if 'DUNGEON_ENABLE_GENERATION_METRICS' in os.environ:
            cfg.enable_metrics = os.environ['DUNGEON_ENABLE_GENERATION_METRICS'].lower() not in _FALSY
        for attr, value in overrides.items():
            if value is not None:
                setattr(cfg, attr, value)
        return cfg


__all__ = ["GenerationConfig"]
