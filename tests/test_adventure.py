from collections import Counter

import numpy as np
import pytest

from bandsim.domain import adventure
from bandsim.domain.adventure import (
    ACCIDENT,
    CONCERT,
    DONATION,
    DONATION_RANGE,
    EVENTS,
    HIT_SONG,
    INSTRUMENT_BREAK,
    NEW_MEMBER,
    AdventureEvent,
    apply_event,
    eligible_events,
    resolve_adventure,
    weighted_choice,
)
from bandsim.domain.roster import compute_team_power
from tests.conftest import make_game, make_member


def event(type_):
    return next(e for e in EVENTS if e.type == type_)


def test_weighted_choice_frequencies():
    catalog = [
        AdventureEvent("A", "A", "", 0.5),
        AdventureEvent("B", "B", "", 0.1),
        AdventureEvent("C", "C", "", 0.1, lambda game: False),
        AdventureEvent("D", "D", "", 0.1),
    ]
    candidates = eligible_events(make_game(), catalog)
    assert [e.type for e in candidates] == ["A", "B", "D"]

    rng = np.random.default_rng(42)
    draws = 20000
    counts = Counter(weighted_choice(rng, candidates).type for _ in range(draws))

    assert counts["A"] / draws == pytest.approx(0.5 / 0.7, abs=0.02)
    assert counts["B"] / draws == pytest.approx(0.1 / 0.7, abs=0.02)
    assert counts["D"] / draws == pytest.approx(0.1 / 0.7, abs=0.02)
    assert "C" not in counts


def test_weighted_choice_needs_candidates():
    with pytest.raises(ValueError):
        weighted_choice(np.random.default_rng(), [])


def test_eligibility_filters():
    solo = make_game(fame=0)
    types = {e.type for e in eligible_events(solo)}
    assert types == {NEW_MEMBER, DONATION, CONCERT}

    band = make_game(
        fame=250,
        main=make_member(0, has_item=True, item_name="Mic", item_power=5, item_durability=50),
        mates={1: make_member(1)},
    )
    assert {e.type for e in eligible_events(band)} == {e.type for e in EVENTS}


def test_new_member_joins_or_fails(monkeypatch):
    game = make_game(mental=50)
    monkeypatch.setattr(adventure, "chance", lambda rng, p: True)
    after, outcome = apply_event(game, event(NEW_MEMBER), np.random.default_rng(1))
    assert outcome["joined"] is True
    assert after.mates[0] is not None
    assert after.team_size == 2
    assert after.mental == 60
    assert after.adventure_done_today is True

    monkeypatch.setattr(adventure, "chance", lambda rng, p: False)
    after, outcome = apply_event(game, event(NEW_MEMBER), np.random.default_rng(1))
    assert outcome["joined"] is False
    assert after.team_size == 1
    assert after.mental == 40


def test_new_member_fails_when_band_full():
    mates = {slot: make_member(slot) for slot in (1, 2, 3, 4)}
    game = make_game(mental=50, mates=mates)
    after, outcome = apply_event(game, event(NEW_MEMBER), np.random.default_rng(1))
    assert outcome["joined"] is False
    assert after.team_size == 5


def test_accident_removes_a_teammate():
    game = make_game(mental=50, mates={2: make_member(2, power=40)})
    after, outcome = apply_event(game, event(ACCIDENT), np.random.default_rng(1))
    assert outcome["member"] == "mate2"
    assert after.mates[1] is None
    assert after.mental == 20
    assert after.team_power == compute_team_power(after) == game.main.power


def test_donation():
    game = make_game(money=10, mental=95)
    after, outcome = apply_event(game, event(DONATION), np.random.default_rng(1))
    assert DONATION_RANGE[0] <= outcome["amount"] <= DONATION_RANGE[1]
    assert after.money == 10 + outcome["amount"]
    assert after.mental == 100


def test_hit_song():
    game = make_game(fame=200, mental=10)
    after, _ = apply_event(game, event(HIT_SONG), np.random.default_rng(1))
    assert after.mental == 100
    assert after.fame == 300


def test_instrument_break_can_destroy_item():
    main = make_member(0, power=10, has_item=True, item_name="Mic", item_power=5, item_durability=30)
    game = make_game(mental=50, main=main)
    after, outcome = apply_event(game, event(INSTRUMENT_BREAK), np.random.default_rng(1))
    assert outcome["destroyed"] is True
    assert not after.main.has_item
    assert after.main.power == 30
    assert after.mental == 30
    assert after.team_power == 30


@pytest.mark.parametrize("seed", range(20))
def test_concert_keeps_stats_in_range(seed):
    game = make_game(fame=5, mental=95)
    after, outcome = apply_event(game, event(CONCERT), np.random.default_rng(seed))
    assert 0 <= after.mental <= 100
    assert after.fame >= 0
    assert after.fame == 5 + outcome["fame_change"]


def test_resolve_adventure_does_not_advance_clock():
    game = make_game(time=1012)
    after, outcome = resolve_adventure(game, np.random.default_rng(9))
    assert after.time == 1012
    assert after.adventure_done_today is True
    assert outcome["event"] in {NEW_MEMBER, DONATION, CONCERT}
