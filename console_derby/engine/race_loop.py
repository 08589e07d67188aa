from __future__ import annotations

import random
import sys
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple

from ..config import get_config
from ..terminal import pause_for
from .data_models import RacerState, RaceStatus, Terrain
from .renderer import TrackRenderer
from .stepping import fitness, sample_step, step_probabilities
from .telemetry import TelemetryCollector, TelemetryFrame, TelemetryRacerFrame

DEFAULT_TICK_SECONDS = 0.1
# 5 columns per furlong keeps a 12f race inside an 80 column terminal.
DEFAULT_COLUMNS_PER_FURLONG = 5
MIN_TRACK_WIDTH = 2


def format_furlongs(length: float) -> str:
    return f"{length:g}"


def track_width_for(length: float, columns_per_furlong: Optional[float] = None) -> int:
    """W = round(k * length), rounding halves up."""
    if columns_per_furlong is None:
        columns_per_furlong = get_config('race.columns_per_furlong', DEFAULT_COLUMNS_PER_FURLONG)
    raw = Decimal(str(columns_per_furlong)) * Decimal(str(length))
    width = int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(MIN_TRACK_WIDTH, width)


class Race:
    """
    A single race: a field of racers, a length in furlongs and a terrain.

    The loop is single threaded. Each tick every unfinished racer draws a
    step of 0, 1 or 2 columns from a distribution skewed by its fitness,
    the track is redrawn, and the loop sleeps for one tick period. The race
    ends on the first tick any racer reaches the finish column; ties go to
    the lowest lane number.
    """

    def __init__(
        self,
        racers: Sequence[RacerState],
        length: float,
        terrain: Terrain,
        rng: Optional[random.Random] = None,
        renderer: Optional[TrackRenderer] = None,
        tick_seconds: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        telemetry: Optional[TelemetryCollector] = None,
        columns_per_furlong: Optional[float] = None,
        penalty_per_furlong: Optional[float] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        if length <= 0:
            raise ValueError(f"Race length must be positive, got {length}")
        if not isinstance(terrain, Terrain):
            raise ValueError(f"Unknown terrain: {terrain!r}")

        self.racers: List[RacerState] = list(racers)
        self._validate_field(self.racers)

        self.length = float(length)
        self.terrain = terrain
        self.rng = rng or random.Random()
        self.renderer = renderer
        self.tick_seconds = (
            float(get_config('race.tick_seconds', DEFAULT_TICK_SECONDS)) if tick_seconds is None else tick_seconds
        )
        self.sleep = sleep
        self.telemetry = telemetry
        self.out = out or sys.stdout

        self.track_width = track_width_for(self.length, columns_per_furlong)
        self.status = RaceStatus.CONFIGURED
        self.winner: Optional[RacerState] = None
        self.tick_count = 0

        self._step_probs: Dict[int, Tuple[float, ...]] = {}
        for racer in self.racers:
            racer.track_width = self.track_width
            racer.current_position = 0
            racer.last_step = 0
            racer.fitness = fitness(racer.profile, terrain, self.length, penalty_per_furlong)
            self._step_probs[racer.number] = step_probabilities(racer.fitness)

    @staticmethod
    def _validate_field(racers: Sequence[RacerState]) -> None:
        numbers = [r.get_number() for r in racers]
        if sorted(n for n in numbers if n is not None) != list(range(1, len(racers) + 1)):
            raise ValueError(f"Lane numbers must be exactly 1..{len(racers)}, got {numbers}")
        if len({id(r.profile) for r in racers}) != len(racers):
            raise ValueError("A horse cannot be entered twice in the same race.")

    @property
    def finish_column(self) -> int:
        return self.track_width - 1

    def lane_order(self) -> List[RacerState]:
        return sorted(self.racers, key=lambda r: r.get_number())

    def step_probabilities_for(self, racer: RacerState) -> Tuple[float, ...]:
        return self._step_probs[racer.get_number()]

    def display_info(self) -> None:
        print(f"--- {format_furlongs(self.length)} Furlong Race on {self.terrain.label} ---", file=self.out)
        if not self.racers:
            print("No horses entered.", file=self.out)
            return
        print("Starting grid:", file=self.out)
        for racer in self.lane_order():
            profile = racer.profile
            print(
                f"  {racer.get_number():>2}. {profile.name:<18} "
                f"{self.terrain.label} {profile.rating_for(self.terrain):>3}  "
                f"prefers {format_furlongs(profile.preferred_length)}f",
                file=self.out,
            )

    def start(self) -> Optional[RacerState]:
        """Runs the race to completion and returns the winner (None for an empty field)."""
        if self.status is not RaceStatus.CONFIGURED:
            raise RuntimeError(f"Race has already been started (status: {self.status.value}).")
        self.status = RaceStatus.RUNNING

        if not self.racers:
            self.status = RaceStatus.FINISHED
            return None

        if self.renderer is not None:
            self.renderer.update(self.lane_order(), self.track_width)

        while self.status is RaceStatus.RUNNING:
            self._run_tick()

        return self.winner

    def _run_tick(self) -> None:
        self.tick_count += 1
        lanes = self.lane_order()

        # --- 1. Sample and apply steps in lane order ---
        for racer in lanes:
            if racer.is_finished:
                racer.last_step = 0
                continue
            step = sample_step(self.rng, self._step_probs[racer.get_number()])
            racer.advance(step)

        self._record_frame(lanes)

        # --- 2. Redraw and wait ---
        if self.renderer is not None:
            self.renderer.update(lanes, self.track_width)
        pause_for(self.tick_seconds, self.sleep)

        # --- 3. First finisher in lane order takes it ---
        for racer in lanes:
            if racer.is_finished:
                self.winner = racer
                self.status = RaceStatus.FINISHED
                break

    def _record_frame(self, lanes: Sequence[RacerState]) -> None:
        if self.telemetry is None:
            return
        frame = TelemetryFrame(tick=self.tick_count, track_width=self.track_width)
        for racer in lanes:
            frame.racers.append(
                TelemetryRacerFrame(
                    number=racer.get_number(),
                    name=racer.name,
                    position=racer.current_position,
                    step=racer.last_step,
                    fitness=racer.fitness,
                    is_finished=racer.is_finished,
                )
            )
        self.telemetry.record_frame(frame)

    def standings(self) -> List[RacerState]:
        """Field ordered by distance covered, lane number breaking ties."""
        return sorted(self.racers, key=lambda r: (-r.current_position, r.get_number()))
