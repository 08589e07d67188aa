import importlib.util
import os

from console_derby.catalog import HorseCatalog
from console_derby.engine import HorseProfile, LengthClass, Terrain

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "simulate_races.py")


def _load_script():
    spec = importlib.util.spec_from_file_location("simulate_races", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_headless_meeting_is_reproducible_and_favours_the_fit_horse():
    catalog = HorseCatalog([
        HorseProfile.from_ratings("Fast", 50, 50, 90, 5),
        HorseProfile.from_ratings("Slow", 50, 50, 10, 12),
    ])
    simulate = _load_script().simulate

    wins, starts, ticks = simulate(catalog, 50, LengthClass.SHORT, Terrain.DIRT, seed=12)

    assert starts == {"Fast": 50, "Slow": 50}
    assert sum(wins.values()) == 50
    assert wins["Fast"] >= 48
    assert ticks > 0
    assert simulate(catalog, 50, LengthClass.SHORT, Terrain.DIRT, seed=12) == (wins, starts, ticks)
