from __future__ import annotations

import random
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import get_config
from .data_models import HorseProfile, Terrain

# Reference distribution over steps {0, 1, 2} at the pivot fitness.
DEFAULT_BASE_PROBABILITIES = (0.3, 0.5, 0.2)
DEFAULT_PIVOT_FITNESS = 50.0
DEFAULT_SHIFT_PER_POINT = 0.01
DEFAULT_DISTANCE_PENALTY = 5.0


def distance_penalty_per_furlong() -> float:
    return float(get_config('race.distance_penalty_per_furlong', DEFAULT_DISTANCE_PENALTY))


def fitness(
    profile: HorseProfile,
    terrain: Terrain,
    length: float,
    penalty_per_furlong: Optional[float] = None,
) -> float:
    """
    F = rating on this terrain minus a penalty per furlong away from the
    horse's preferred length.
    """
    if penalty_per_furlong is None:
        penalty_per_furlong = distance_penalty_per_furlong()
    return profile.rating_for(terrain) - penalty_per_furlong * abs(profile.preferred_length - length)


def step_probabilities(
    fitness_score: float,
    base: Optional[Sequence[float]] = None,
    pivot: Optional[float] = None,
    shift: Optional[float] = None,
) -> Tuple[float, ...]:
    """
    Returns (p0, p1, p2) for a given fitness.

    Every point above the pivot moves `shift` of probability mass from a
    standing step (0) to a double step (2); below the pivot it moves back.
    Negative components are clipped to zero and the vector renormalised.
    """
    cfg = get_config('race.step_distribution', {}) or {}
    if base is None:
        base = cfg.get('base', DEFAULT_BASE_PROBABILITIES)
    if pivot is None:
        pivot = cfg.get('pivot_fitness', DEFAULT_PIVOT_FITNESS)
    if shift is None:
        shift = cfg.get('shift_per_point', DEFAULT_SHIFT_PER_POINT)

    offset = (fitness_score - pivot) * shift
    probs = np.array(base, dtype=float)
    probs[0] -= offset
    probs[-1] += offset
    probs = np.clip(probs, 0.0, None)

    total = probs.sum()
    if total <= 0:
        raise ValueError(f"Step distribution has no mass for fitness {fitness_score}")
    probs /= total
    return tuple(float(p) for p in probs)


def sample_step(rng: random.Random, probabilities: Sequence[float]) -> int:
    """Draws one step using a single uniform variate, walking the cumulative distribution."""
    u = rng.random()
    cumulative = 0.0
    for step, p in enumerate(probabilities):
        cumulative += p
        if u < cumulative:
            return step
    # Float rounding can leave the cumulative sum a hair under 1.0.
    return len(probabilities) - 1


def expected_step(probabilities: Sequence[float]) -> float:
    return float(np.dot(np.arange(len(probabilities)), probabilities))
