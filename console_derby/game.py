from __future__ import annotations

import argparse
import random
import sys
import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, Sequence, TextIO

from .audio import MusicPlayer
from .catalog import HorseCatalog
from .config import get_config, get_env_setting
from .engine import LengthClass, Terrain, TrackRenderer
from .race_factory import RaceFactory
from .terminal import ask_play_again, clear_console, pause_for


@dataclass
class GameSettings:
    horses_csv: str = "horses.csv"
    length_class: LengthClass = LengthClass.SHORT
    terrain: Terrain = Terrain.DIRT
    seed: Optional[int] = None
    tick_seconds: Optional[float] = None
    grid_seconds: float = 1.5
    music: Optional[str] = None
    finish_music: Optional[str] = None


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Watch a horse race in your terminal.")
    parser.add_argument("--horses", help="Path to the horse catalog CSV.")
    parser.add_argument("--length-class", type=LengthClass.from_str, help="short, middle or long (or 0/1/2).")
    parser.add_argument("--terrain", type=Terrain.from_str, help="grass, dirt or mud (or 0/1/2).")
    parser.add_argument("--seed", type=int, help="Seed the RNG for a reproducible meeting.")
    parser.add_argument("--tick-seconds", type=float, help="Delay between animation frames.")
    parser.add_argument("--music", help="WAV file looped during each race.")
    parser.add_argument("--no-music", action="store_true", help="Race in silence.")
    return parser


def resolve_settings(args: argparse.Namespace) -> GameSettings:
    """Config file first, then DERBY_* environment variables, then command-line flags."""
    settings = GameSettings(
        horses_csv=get_config('files.horses_csv', "horses.csv"),
        music=get_config('files.music'),
        finish_music=get_config('files.finish_music'),
        grid_seconds=float(get_config('race.grid_seconds', 1.5)),
    )

    settings.horses_csv = get_env_setting("DERBY_HORSES_CSV", settings.horses_csv)
    settings.music = get_env_setting("DERBY_MUSIC_FILE", settings.music)
    settings.seed = get_env_setting("DERBY_SEED", settings.seed, int)
    settings.tick_seconds = get_env_setting("DERBY_TICK_SECONDS", settings.tick_seconds, float)
    settings.length_class = get_env_setting("DERBY_LENGTH_CLASS", settings.length_class, LengthClass.from_str)
    settings.terrain = get_env_setting("DERBY_TERRAIN", settings.terrain, Terrain.from_str)

    if args.horses:
        settings.horses_csv = args.horses
    if args.length_class is not None:
        settings.length_class = args.length_class
    if args.terrain is not None:
        settings.terrain = args.terrain
    if args.seed is not None:
        settings.seed = args.seed
    if args.tick_seconds is not None:
        settings.tick_seconds = args.tick_seconds
    if args.music:
        settings.music = args.music
    if args.no_music:
        settings.music = None
        settings.finish_music = None
    return settings


def run_game(
    settings: GameSettings,
    input_fn: Callable[[str], str] = input,
    out: Optional[TextIO] = None,
    clear_screen: Optional[Callable[[], None]] = None,
    sleep: Optional[Callable[[float], None]] = None,
    player: Optional[MusicPlayer] = None,
) -> int:
    """Top-level loop: build a race, run it, ask for another. Returns the exit code."""
    out = out or sys.stdout
    clear_screen = clear_screen or partial(clear_console, out)
    player = player or MusicPlayer()

    catalog = HorseCatalog.load(settings.horses_csv)
    race_options = {
        'renderer': TrackRenderer(out=out, clear_screen=clear_screen),
        'tick_seconds': settings.tick_seconds,
        'out': out,
    }
    if sleep is not None:
        race_options['sleep'] = sleep
    factory = RaceFactory(catalog, random.Random(settings.seed), **race_options)

    playing = True
    while playing:
        clear_screen()
        race = factory.build_race(factory.pick_field_size(), settings.length_class, settings.terrain)
        race.display_info()
        pause_for(settings.grid_seconds, sleep or time.sleep)

        if settings.music:
            player.play_loop(settings.music)
        try:
            winner = race.start()
        finally:
            player.stop()

        if settings.finish_music:
            player.play_once_blocking(settings.finish_music)

        print("Race is Over", file=out)
        if winner is not None:
            print(f"Winner: #{winner.get_number()} {winner.name}", file=out)
        else:
            print("No winner: the field was empty.", file=out)

        playing = ask_play_again(input_fn)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = resolve_settings(args)
    try:
        return run_game(settings)
    except KeyboardInterrupt:
        print("\nRace abandoned.")
        return 0
    except OSError as e:
        print(f"FATAL ERROR: {e}")
        return 1
