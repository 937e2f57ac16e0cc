import math

import numpy as np
import pytest

from bandsim.domain.stats import (
    PERFORMANCE_MENTAL_COST_RANGE,
    REST_MENTAL_GAIN_RANGE,
    WORK_MENTAL_COST_RANGE,
    WORK_MONEY_RANGE,
    practice_gain_range,
    practice_mental_cost_range,
    resolve_performance,
    resolve_practice,
    resolve_rest,
    resolve_work,
)
from bandsim.domain.venues import (
    VENUES,
    choose_venue,
    find_venue,
    performance_multiplier,
    performance_verdict,
    unlocked_venues,
)
from tests.conftest import make_game, make_member

SEEDS = range(25)


@pytest.mark.parametrize("seed", SEEDS)
def test_work_bounds(seed):
    game = make_game(money=0, mental=60, time=810)
    after, outcome = resolve_work(game, np.random.default_rng(seed))

    assert WORK_MONEY_RANGE[0] <= after.money <= WORK_MONEY_RANGE[1]
    assert 60 - WORK_MENTAL_COST_RANGE[1] <= after.mental <= 60 - WORK_MENTAL_COST_RANGE[0]
    assert after.time == 816
    assert outcome["money_earned"] == after.money


def test_work_never_takes_mental_below_zero():
    game = make_game(mental=3)
    after, _ = resolve_work(game, np.random.default_rng(1))
    assert after.mental == 0


@pytest.mark.parametrize("seed", SEEDS)
def test_rest_is_capped(seed):
    game = make_game(mental=95, time=812)
    after, outcome = resolve_rest(game, np.random.default_rng(seed))
    assert after.mental == 100
    assert REST_MENTAL_GAIN_RANGE[0] <= outcome["mental_gained"] <= REST_MENTAL_GAIN_RANGE[1]
    assert after.time == 818


def test_practice_ranges_follow_score():
    assert practice_gain_range(100) == (5, 10)
    assert practice_gain_range(0) == (0, 0)
    assert practice_mental_cost_range(0) == (20, 25)
    assert practice_mental_cost_range(100) == (5, 10)


@pytest.mark.parametrize("seed", SEEDS)
def test_practice_raises_every_member(seed):
    game = make_game(mental=100, time=810, mates={1: make_member(1, power=30)})
    after, outcome = resolve_practice(game, np.random.default_rng(seed), 87.5)

    assert outcome["score"] == 87
    low, high = practice_gain_range(87)
    for key, gain in outcome["power_gains"].items():
        assert low <= gain <= high
    assert set(outcome["power_gains"]) == {"main", "mate1"}
    cost_low, cost_high = practice_mental_cost_range(87)
    assert 100 - cost_high <= after.mental <= 100 - cost_low
    assert after.team_power == game.team_power + sum(outcome["power_gains"].values())
    assert after.time == 814


@pytest.mark.parametrize("score", [101, -1, float("nan")])
def test_practice_rejects_out_of_range_score(score):
    with pytest.raises(ValueError, match="Practice score"):
        resolve_practice(make_game(), np.random.default_rng(), score)


@pytest.mark.parametrize("seed", SEEDS)
def test_performance_bounds(seed):
    game = make_game(mental=80, fame=0, time=815, main=make_member(0, power=100))
    venue = find_venue("Street busking")
    after, outcome = resolve_performance(game, np.random.default_rng(seed), venue)

    multiplier = performance_multiplier(100, 80, 0)
    assert math.floor(venue.base_money_min * multiplier) <= after.money <= math.floor(venue.base_money_max * multiplier)
    assert after.fame == math.floor(venue.base_fame * multiplier)
    assert 80 - PERFORMANCE_MENTAL_COST_RANGE[1] <= after.mental <= 80 - PERFORMANCE_MENTAL_COST_RANGE[0]
    assert outcome["message"] == performance_verdict(multiplier)
    assert after.time == 821


def test_performance_wears_equipment():
    main = make_member(0, has_item=True, item_name="Mic", item_power=10, item_durability=100)
    game = make_game(mental=80, time=815, main=main)
    after, outcome = resolve_performance(game, np.random.default_rng(5), VENUES[0])
    assert len(outcome["equipment_wear"]) == 1
    assert after.main.item_durability < 100


def test_venues_unlock_with_fame():
    assert [venue.name for venue in unlocked_venues(0)] == ["Street busking"]
    assert len(unlocked_venues(1000)) == len(VENUES)


def test_choose_venue_rejects_locked_and_unknown():
    rng = np.random.default_rng()
    with pytest.raises(ValueError):
        choose_venue(rng, 0, "National arena tour")
    with pytest.raises(ValueError):
        choose_venue(rng, 0, "Moon base")
    assert choose_venue(rng, 0).name == "Street busking"


def test_verdict_tiers():
    assert performance_verdict(1.6).startswith("A smash hit")
    assert performance_verdict(0.1).startswith("The show went badly")
