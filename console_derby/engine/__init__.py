"""
Race engine package for the console derby.

The package is split into data models, the stepping model, the tick loop,
the text renderer and telemetry. The game driver composes these pieces
for each round.
"""

from .data_models import (  # noqa: F401
    LENGTH_BUCKETS,
    HorseProfile,
    LengthClass,
    RacerState,
    RaceStatus,
    Terrain,
)
from .stepping import fitness, sample_step, step_probabilities  # noqa: F401
from .telemetry import TelemetryCollector, TelemetryFrame, TelemetryRacerFrame  # noqa: F401
from .renderer import TrackRenderer  # noqa: F401
from .race_loop import Race, track_width_for  # noqa: F401

__all__ = [
    "LENGTH_BUCKETS",
    "HorseProfile",
    "LengthClass",
    "RacerState",
    "RaceStatus",
    "Terrain",
    "fitness",
    "sample_step",
    "step_probabilities",
    "TelemetryCollector",
    "TelemetryFrame",
    "TelemetryRacerFrame",
    "TrackRenderer",
    "Race",
    "track_width_for",
]
