"""Bounded random draws shared by the resolvers.

All integer ranges are inclusive on both ends. Values are converted to plain
``int``/``float`` so they can be stored without numpy scalar types leaking out.
"""
import numpy as np


def roll(rng: np.random.Generator, low: int, high: int) -> int:
    return int(rng.integers(low, high, endpoint=True))


def uniform(rng: np.random.Generator, low: float, high: float) -> float:
    return float(rng.uniform(low, high))


def chance(rng: np.random.Generator, probability: float) -> bool:
    return bool(rng.random() < probability)


def pick(rng: np.random.Generator, items: list):
    return items[int(rng.integers(len(items)))]


def clamp(value: int, low: int, high: int | None = None) -> int:
    if value < low:
        return low
    if high is not None and value > high:
        return high
    return value
