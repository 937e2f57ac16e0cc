"""In-game clock rules.

Time is stored as a single integer ``day * 100 + hour``.

Rule of thumb:
- OK: arithmetic on the encoded integer, rollover, formatting.
- Not OK: reading the wall clock.
"""

HOURS_PER_DAY = 24
MORNING_HOUR = 8

WORK_HOURS = 6
REST_HOURS = 6
PRACTICE_HOURS = 4
PERFORMANCE_HOURS = 6
SHOP_VISIT_HOURS = 3


def day_of(time: int) -> int:
    return time // 100


def hour_of(time: int) -> int:
    return time % 100


def next_day_time(time: int) -> int:
    """Return 08:00 of the day after ``time``."""
    return (day_of(time) + 1) * 100 + MORNING_HOUR


def advance_time(current: int, delta_hours: int) -> int:
    """Advance the clock by ``delta_hours``.

    When the hour reaches 24 the clock jumps to the next morning.
    Hours past midnight are discarded, not carried forward.
    """
    new_time = current + delta_hours
    if hour_of(new_time) >= HOURS_PER_DAY:
        new_time = next_day_time(new_time)
    return new_time


def crosses_day(old_time: int, new_time: int) -> bool:
    return day_of(new_time) > day_of(old_time)


def format_game_time(time: int) -> str:
    """Render the clock for display. Days are shown 1-based."""
    return f"Day {day_of(time) + 1}, {hour_of(time):02d}:00"


def pass_time(game, hours: int) -> bool:
    """Advance a game's clock in place.

    Returns True when a new day started; that also reopens the daily adventure.
    """
    old_time = game.time
    game.time = advance_time(old_time, hours)
    if crosses_day(old_time, game.time):
        game.adventure_done_today = False
        return True
    return False
