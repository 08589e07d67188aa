from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence


@dataclass
class TelemetryRacerFrame:
    number: int
    name: str
    position: int
    step: int
    fitness: float
    is_finished: bool


@dataclass
class TelemetryFrame:
    tick: int
    track_width: int
    racers: List[TelemetryRacerFrame] = field(default_factory=list)

    def positions(self) -> Dict[int, int]:
        return {racer.number: racer.position for racer in self.racers}


class TelemetryCollector:
    def __init__(self) -> None:
        self.frames: List[TelemetryFrame] = []

    def record_frame(self, frame: TelemetryFrame) -> None:
        self.frames.append(frame)

    def export(self) -> Sequence[TelemetryFrame]:
        return tuple(self.frames)

    def position_history(self) -> List[Dict[int, int]]:
        return [frame.positions() for frame in self.frames]

    def clear(self) -> None:
        self.frames.clear()
