"""Stat-delta resolvers for work, rest, practice and performance.

Each resolver takes a game state that already passed its gates, returns a new
state and an outcome summary, and never mutates its input. Every magnitude is
drawn here from the current state; nothing is taken from the caller except
the practice score and the venue choice.
"""
import math

import numpy as np

from bandsim.domain.clock import (
    PERFORMANCE_HOURS,
    PRACTICE_HOURS,
    REST_HOURS,
    WORK_HOURS,
    pass_time,
)
from bandsim.domain.dice import clamp, roll, uniform
from bandsim.domain.equipment import decay_equipment
from bandsim.domain.roster import compute_team_power, filled_members, member_key, refresh_derived
from bandsim.domain.venues import Venue, performance_multiplier, performance_verdict
from bandsim.models.schema_models import GameSchema

MENTAL_MIN = 0
MENTAL_MAX = 100

WORK_MONEY_RANGE = (30, 50)
WORK_MENTAL_COST_RANGE = (5, 15)
REST_MENTAL_GAIN_RANGE = (5, 15)
PERFORMANCE_MENTAL_COST_RANGE = (10, 25)

PRACTICE_SCORE_MIN = 0
PRACTICE_SCORE_MAX = 100


def clamp_mental(value: int) -> int:
    return clamp(value, MENTAL_MIN, MENTAL_MAX)


def resolve_work(game: GameSchema, rng: np.random.Generator) -> tuple[GameSchema, dict]:
    game = game.model_copy(deep=True)
    money_earned = roll(rng, *WORK_MONEY_RANGE)
    mental_cost = roll(rng, *WORK_MENTAL_COST_RANGE)

    game.money += money_earned
    game.mental = clamp_mental(game.mental - mental_cost)
    rolled_over = pass_time(game, WORK_HOURS)
    return game, {
        "money_earned": money_earned,
        "mental_lost": mental_cost,
        "day_rolled_over": rolled_over,
    }


def resolve_rest(game: GameSchema, rng: np.random.Generator) -> tuple[GameSchema, dict]:
    game = game.model_copy(deep=True)
    mental_gain = roll(rng, *REST_MENTAL_GAIN_RANGE)

    game.mental = clamp_mental(game.mental + mental_gain)
    rolled_over = pass_time(game, REST_HOURS)
    return game, {"mental_gained": mental_gain, "day_rolled_over": rolled_over}


def practice_gain_range(score: int) -> tuple[int, int]:
    return score // 20, score // 10


def practice_mental_cost_range(score: int) -> tuple[int, int]:
    """Better runs are less draining."""
    return max(20 - score // 5, 5), max(25 - score // 5, 10)


def resolve_practice(game: GameSchema, rng: np.random.Generator, score: float) -> tuple[GameSchema, dict]:
    """Apply a finished rhythm practice run.

    Args:
        game: current state
        rng: random source
        score: final mini-game score, 0-100

    Returns:
        tuple[GameSchema, dict]: new state and the practice report
    """
    if not PRACTICE_SCORE_MIN <= score <= PRACTICE_SCORE_MAX:
        raise ValueError(f"Practice score must be between {PRACTICE_SCORE_MIN} and {PRACTICE_SCORE_MAX}")
    game = game.model_copy(deep=True)
    score = int(math.floor(score))

    gain_low, gain_high = practice_gain_range(score)
    power_gains = {}
    for member in filled_members(game):
        if not member.power:
            continue
        gain = roll(rng, gain_low, gain_high)
        member.power += gain
        power_gains[member_key(member.slot)] = gain

    mental_cost = roll(rng, *practice_mental_cost_range(score))
    game.mental = clamp_mental(game.mental - mental_cost)

    wear = decay_equipment(game, rng)
    refresh_derived(game)
    rolled_over = pass_time(game, PRACTICE_HOURS)
    return game, {
        "score": score,
        "power_gains": power_gains,
        "mental_lost": mental_cost,
        "equipment_wear": wear,
        "day_rolled_over": rolled_over,
    }


def resolve_performance(game: GameSchema, rng: np.random.Generator, venue: Venue) -> tuple[GameSchema, dict]:
    game = game.model_copy(deep=True)
    multiplier = performance_multiplier(compute_team_power(game), game.mental, game.fame)

    money_earned = math.floor(uniform(rng, venue.base_money_min, venue.base_money_max) * multiplier)
    fame_gained = math.floor(venue.base_fame * multiplier)
    mental_cost = roll(rng, *PERFORMANCE_MENTAL_COST_RANGE)

    game.money += money_earned
    game.fame += fame_gained
    game.mental = clamp_mental(game.mental - mental_cost)

    wear = decay_equipment(game, rng)
    refresh_derived(game)
    rolled_over = pass_time(game, PERFORMANCE_HOURS)
    return game, {
        "venue": venue.name,
        "multiplier": round(multiplier, 4),
        "money_earned": money_earned,
        "fame_gained": fame_gained,
        "mental_lost": mental_cost,
        "message": performance_verdict(multiplier),
        "equipment_wear": wear,
        "day_rolled_over": rolled_over,
    }
