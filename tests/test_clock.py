import pytest

from bandsim.domain.clock import (
    advance_time,
    crosses_day,
    day_of,
    format_game_time,
    hour_of,
    next_day_time,
    pass_time,
)
from tests.conftest import make_game


def test_time_components():
    assert day_of(817) == 8
    assert hour_of(817) == 17
    assert day_of(8) == 0
    assert hour_of(8) == 8


@pytest.mark.parametrize(
    "current, hours, expected",
    [
        (817, 6, 823),
        (823, 6, 908),
        (818, 6, 908),
        (8, 0, 8),
        (1420, 3, 1423),
        (1421, 3, 1508),
    ],
)
def test_advance_time(current, hours, expected):
    assert advance_time(current, hours) == expected


def test_rollover_discards_hours_past_midnight():
    assert advance_time(2222, 6) == next_day_time(2222) == 2308


def test_crosses_day():
    assert not crosses_day(817, 823)
    assert crosses_day(823, 908)


def test_format_game_time_is_one_based():
    assert format_game_time(8) == "Day 1, 08:00"
    assert format_game_time(817) == "Day 9, 17:00"


def test_pass_time_keeps_adventure_flag_within_day():
    game = make_game(time=817, adventure_done_today=True)
    assert pass_time(game, 6) is False
    assert game.time == 823
    assert game.adventure_done_today is True


def test_pass_time_resets_adventure_flag_on_new_day():
    game = make_game(time=823, adventure_done_today=True)
    assert pass_time(game, 6) is True
    assert game.time == 908
    assert game.adventure_done_today is False
