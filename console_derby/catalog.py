from __future__ import annotations

import csv
import random
from typing import Iterable, List, Optional, Sequence

from .engine.data_models import HorseProfile

CATALOG_COLUMNS = ("name", "mud_rating", "grass_rating", "dirt_rating", "preferred_length")


class HorseCatalog:
    """
    The pool of horses available for racing, read from a header-prefixed CSV:

        name,mud_rating,grass_rating,dirt_rating,preferred_length
    """

    def __init__(self, horses: Iterable[HorseProfile] = ()):
        self._horses: List[HorseProfile] = list(horses)

    def __len__(self) -> int:
        return len(self._horses)

    def __repr__(self) -> str:
        return f"<HorseCatalog | {len(self._horses)} horses>"

    @property
    def horses(self) -> Sequence[HorseProfile]:
        return tuple(self._horses)

    @classmethod
    def load(cls, path: str) -> "HorseCatalog":
        """
        Reads the catalog file. Rows with the wrong column count, bad numbers
        or bytes that are not UTF-8 are skipped; a missing file gives an empty
        catalog.
        """
        catalog = cls()
        try:
            with open(path, 'rb') as f:
                raw_lines = f.read().splitlines()
        except FileNotFoundError:
            print(f"Error: Horse catalog not found at {path}. Starting with no horses.")
            return catalog
        except OSError as e:
            print(f"Error: Could not read horse catalog {path}: {e}")
            return catalog

        # Line 1 is the header.
        for line_number, raw in enumerate(raw_lines[1:], start=2):
            try:
                text = raw.decode('utf-8')
                row = next(csv.reader([text]), [])
            except UnicodeDecodeError as e:
                print(f"Warning: Skipping {path}:{line_number}, not valid UTF-8 ({e.reason})")
                continue
            except csv.Error as e:
                print(f"Warning: Skipping {path}:{line_number}: {e}")
                continue
            horse = _parse_row(row, path, line_number)
            if horse is not None:
                catalog._horses.append(horse)
        return catalog

    def sample(self, n: int, rng: Optional[random.Random] = None) -> List[HorseProfile]:
        """n distinct horses drawn without replacement; n is clamped to the pool size."""
        rng = rng or random.Random()
        n = max(0, min(n, len(self._horses)))
        shuffled = list(self._horses)
        rng.shuffle(shuffled)
        return shuffled[:n]


def _parse_row(row: List[str], path: str, line_number: int) -> Optional[HorseProfile]:
    if not row or not any(cell.strip() for cell in row):
        return None
    if len(row) != len(CATALOG_COLUMNS):
        print(f"Warning: Skipping {path}:{line_number}, expected {len(CATALOG_COLUMNS)} columns but got {len(row)}")
        return None

    name, mud, grass, dirt, preferred = (cell.strip() for cell in row)
    try:
        return HorseProfile.from_ratings(
            name=name,
            mud_rating=int(mud),
            grass_rating=int(grass),
            dirt_rating=int(dirt),
            preferred_length=float(preferred),
        )
    except ValueError as e:
        print(f"Warning: Skipping {path}:{line_number}: {e}")
        return None
