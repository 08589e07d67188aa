from __future__ import annotations

import random
from typing import Any, Optional

from .catalog import HorseCatalog
from .config import get_config
from .engine import LengthClass, Race, RacerState, Terrain

DEFAULT_MIN_FIELD = 5
DEFAULT_MAX_FIELD = 11


class RaceFactory:
    """Builds a fresh race per round from the catalog, sharing one RNG for reproducibility."""

    def __init__(self, catalog: HorseCatalog, rng: Optional[random.Random] = None, **race_options: Any):
        self.catalog = catalog
        self.rng = rng or random.Random()
        # Forwarded to every Race (renderer, tick_seconds, sleep, telemetry, ...).
        self.race_options = race_options

    def pick_field_size(self) -> int:
        low = int(get_config('race.field_size.min', DEFAULT_MIN_FIELD))
        high = int(get_config('race.field_size.max', DEFAULT_MAX_FIELD))
        return self.rng.randint(low, high)

    def pick_length(self, length_class: LengthClass) -> float:
        return self.rng.choice(length_class.lengths)

    def build_race(self, n: int, length_class: LengthClass, terrain: Terrain, **overrides: Any) -> Race:
        length = self.pick_length(length_class)

        if n > len(self.catalog):
            print(f"Warning: Only {len(self.catalog)} horses available, field reduced from {n}.")
        horses = self.catalog.sample(n, self.rng)

        racers = []
        for number, profile in enumerate(horses, start=1):
            racer = RacerState(profile=profile)
            racer.set_number(number)
            racers.append(racer)

        options = dict(self.race_options)
        options.update(overrides)
        options.setdefault('rng', self.rng)
        return Race(racers, length, terrain, **options)
