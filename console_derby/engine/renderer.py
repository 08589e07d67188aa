from __future__ import annotations

import sys
from functools import partial
from typing import Callable, Optional, Sequence, TextIO

from ..terminal import clear_console
from .data_models import RacerState

RAIL = "|"


def empty_track_row(width: int) -> str:
    return f"{RAIL}{' ' * width}{RAIL}"


def horse_row(racer: RacerState, width: int) -> str:
    """
    Places the racer's lane number so its last character sits on the racer's
    column. Numbers wider than the column index are pushed right, so the zero
    column still renders a full-width row.
    """
    glyph = str(racer.get_number() if racer.get_number() is not None else "?")
    end = max(min(racer.current_position, width - 1), len(glyph) - 1)
    start = end - len(glyph) + 1
    cells = ((" " * start) + glyph).ljust(width)
    return f"{RAIL}{cells}{RAIL}"


class TrackRenderer:
    """Synchronous text renderer for the race track."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        clear_screen: Optional[Callable[[], None]] = None,
    ) -> None:
        self.out = out or sys.stdout
        self.clear_screen = clear_screen if clear_screen is not None else partial(clear_console, self.out)

    def _emit(self, line: str) -> None:
        self.out.write(line + "\n")

    def draw_empty_track(self, width: int) -> None:
        self._emit(empty_track_row(width))

    def draw_horse(self, racer: RacerState, width: int) -> None:
        self._emit(horse_row(racer, width))

    def update(self, racers: Sequence[RacerState], width: int) -> None:
        self.clear_screen()
        for racer in sorted(racers, key=lambda r: r.get_number() or 0):
            self.draw_empty_track(width)
            self.draw_horse(racer, width)
        self.draw_empty_track(width)
        self.out.flush()
