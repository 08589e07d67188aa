from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Terrain(Enum):
    """Race surface, keyed by the legacy numeric terrain codes."""

    GRASS = 0
    DIRT = 1
    MUD = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_code(cls, code: int) -> "Terrain":
        try:
            return cls(int(code))
        except ValueError as exc:
            raise ValueError(f"Unknown terrain code: {code}") from exc

    @classmethod
    def from_str(cls, value: str) -> "Terrain":
        text = value.strip()
        if text.isdigit():
            return cls.from_code(int(text))
        try:
            return cls[text.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown terrain: {value}") from exc


class LengthClass(Enum):
    """Race length buckets, measured in furlongs."""

    SHORT = 0
    MIDDLE = 1
    LONG = 2

    @property
    def lengths(self):
        return LENGTH_BUCKETS[self]

    @classmethod
    def from_code(cls, code: int) -> "LengthClass":
        try:
            return cls(int(code))
        except ValueError as exc:
            raise ValueError(f"Unknown length class code: {code}") from exc

    @classmethod
    def from_str(cls, value: str) -> "LengthClass":
        text = value.strip()
        if text.isdigit():
            return cls.from_code(int(text))
        try:
            return cls[text.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown length class: {value}") from exc


LENGTH_BUCKETS = {
    LengthClass.SHORT: (5.0, 5.5, 6.0),
    LengthClass.MIDDLE: (7.0, 8.0),
    LengthClass.LONG: (9.0, 10.0, 12.0),
}

MIN_RATING = 1
MAX_RATING = 100


class RaceStatus(Enum):
    CONFIGURED = "configured"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class HorseProfile:
    """Catalog entry. Shared across races and never mutated."""

    name: str
    ratings: Dict[Terrain, int]
    preferred_length: float

    @classmethod
    def from_ratings(
        cls,
        name: str,
        mud_rating: int,
        grass_rating: int,
        dirt_rating: int,
        preferred_length: float,
    ) -> "HorseProfile":
        preferred_length = float(preferred_length)
        if not math.isfinite(preferred_length) or preferred_length <= 0:
            raise ValueError(f"Preferred length must be a positive number, got {preferred_length}")
        ratings = {
            Terrain.MUD: int(mud_rating),
            Terrain.GRASS: int(grass_rating),
            Terrain.DIRT: int(dirt_rating),
        }
        for terrain, rating in ratings.items():
            if not MIN_RATING <= rating <= MAX_RATING:
                raise ValueError(f"{terrain.label} rating must be {MIN_RATING}..{MAX_RATING}, got {rating}")
        return cls(name=name, ratings=ratings, preferred_length=preferred_length)

    def rating_for(self, terrain: Terrain) -> int:
        if terrain not in self.ratings:
            raise ValueError(f"Unknown terrain: {terrain!r}")
        return self.ratings[terrain]


@dataclass
class RacerState:
    """Mutable per-race state wrapping a catalog profile."""

    profile: HorseProfile
    track_width: int = 1
    number: Optional[int] = None
    current_position: int = 0
    fitness: float = 0.0
    last_step: int = 0

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def finish_column(self) -> int:
        return self.track_width - 1

    @property
    def is_finished(self) -> bool:
        return self.current_position >= self.finish_column

    def set_number(self, number: int) -> None:
        if number < 1:
            raise ValueError(f"Lane numbers start at 1, got {number}")
        self.number = number

    def get_number(self) -> Optional[int]:
        return self.number

    def advance(self, delta: int) -> int:
        """Moves the racer forward, saturating at the finish column. Returns the new position."""
        if delta < 0:
            raise ValueError(f"Cannot advance by a negative step: {delta}")
        self.current_position = min(self.current_position + delta, self.finish_column)
        self.last_step = delta
        return self.current_position

    def reset(self) -> None:
        self.number = None
        self.current_position = 0
        self.last_step = 0
        self.fitness = 0.0

    def __repr__(self) -> str:
        return f"<Racer #{self.number} | Name: {self.name} | Pos: {self.current_position}/{self.finish_column}>"
