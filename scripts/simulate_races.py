"""
Utility script to run many races headless and tally the winners.

Usage:
    python scripts/simulate_races.py --races 500 --seed 7 --terrain mud

Races are drawn exactly like the interactive game (random field size and
length within the class) but nothing is drawn and no time is spent sleeping.
"""

from __future__ import annotations

import argparse
import os
import random
import sys
from collections import Counter

# Ensure repo root is on sys.path when script is executed from anywhere
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.append(REPO_ROOT)

from console_derby.catalog import HorseCatalog  # noqa: E402
from console_derby.config import get_config  # noqa: E402
from console_derby.engine import LengthClass, Terrain  # noqa: E402
from console_derby.race_factory import RaceFactory  # noqa: E402


def simulate(catalog, races, length_class, terrain, seed=None):
    """Returns (wins per horse name, starts per horse name, total ticks)."""
    factory = RaceFactory(catalog, random.Random(seed), tick_seconds=0)
    wins = Counter()
    starts = Counter()
    ticks = 0
    for _ in range(races):
        race = factory.build_race(factory.pick_field_size(), length_class, terrain)
        for racer in race.racers:
            starts[racer.name] += 1
        winner = race.start()
        ticks += race.tick_count
        if winner is not None:
            wins[winner.name] += 1
    return wins, starts, ticks


def main() -> None:
    parser = argparse.ArgumentParser(description="Run headless Derby races and print a win table.")
    parser.add_argument("--races", type=int, default=200, help="Number of races to run.")
    parser.add_argument("--seed", type=int, help="Seed for a reproducible run.")
    parser.add_argument("--horses", default=get_config('files.horses_csv', "horses.csv"))
    parser.add_argument("--length-class", type=LengthClass.from_str, default=LengthClass.SHORT)
    parser.add_argument("--terrain", type=Terrain.from_str, default=Terrain.DIRT)
    args = parser.parse_args()

    catalog = HorseCatalog.load(args.horses)
    if not len(catalog):
        print("No horses loaded; nothing to simulate.")
        return

    wins, starts, ticks = simulate(catalog, args.races, args.length_class, args.terrain, args.seed)

    print(f"\n{args.races} {args.length_class.name.lower()} races on {args.terrain.label}"
          f" ({ticks / max(args.races, 1):.1f} ticks per race)")
    for name, count in sorted(starts.items(), key=lambda item: (-wins[item[0]], item[0])):
        rate = wins[name] / count if count else 0.0
        print(f"{name:<18} {wins[name]:>4} wins / {count:>4} starts  ({rate:.1%})")


if __name__ == "__main__":
    main()
