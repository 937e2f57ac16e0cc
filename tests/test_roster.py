import numpy as np
import pytest

from bandsim.domain.roster import (
    MAX_TEAM_SIZE,
    POSITIONS,
    RECRUIT_POWER_RANGE,
    compute_team_power,
    count_team,
    empty_mate_slots,
    generate_recruit,
    get_member,
    member_key,
    parse_member_key,
    set_member,
)
from tests.conftest import make_game, make_member


@pytest.mark.parametrize(
    "key, slot",
    [("main", 0), ("MAIN", 0), ("mate1", 1), ("mate4", 4), ("3", 3), (2, 2)],
)
def test_parse_member_key(key, slot):
    assert parse_member_key(key) == slot


@pytest.mark.parametrize("key", ["mate0", "mate5", "guitarist", "", 7])
def test_parse_member_key_rejects_unknown(key):
    with pytest.raises(ValueError):
        parse_member_key(key)


def test_member_key_roundtrip_names():
    assert member_key(0) == "main"
    assert member_key(3) == "mate3"


def test_team_power_counts_items_of_filled_slots():
    game = make_game(
        main=make_member(0, power=10, has_item=True, item_name="Mic", item_power=15, item_durability=80),
        mates={2: make_member(2, power=30), 4: make_member(4, power=25, has_item=True, item_name="Pick", item_power=5, item_durability=10)},
    )
    assert compute_team_power(game) == 10 + 15 + 30 + 25 + 5
    assert game.team_power == compute_team_power(game)
    assert count_team(game) == 3
    assert empty_mate_slots(game) == [1, 3]


def test_set_member_cannot_remove_main():
    game = make_game()
    with pytest.raises(ValueError):
        set_member(game, 0, None)


def test_set_and_get_mate():
    game = make_game()
    set_member(game, 2, make_member(2, name="Bassist"))
    assert get_member(game, 2).name == "Bassist"
    assert get_member(game, 1) is None


def test_generate_recruit():
    rng = np.random.default_rng(7)
    recruit = generate_recruit(rng, 3)
    assert recruit.slot == 3
    assert recruit.job in POSITIONS
    assert RECRUIT_POWER_RANGE[0] <= recruit.power <= RECRUIT_POWER_RANGE[1]
    assert not recruit.has_item


def test_max_team_size():
    assert MAX_TEAM_SIZE == 5
