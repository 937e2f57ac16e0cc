"""Operating-hour and fatigue gates.

Every bound is inclusive. The 18:00 cutoffs differed between releases of the
game, so they are kept as policy values instead of hard-coded comparisons.
"""
from dataclasses import dataclass

from bandsim.domain.clock import hour_of


@dataclass(frozen=True)
class GatePolicy:
    work_last_hour: int = 18
    performance_open_hour: int = 13
    performance_close_hour: int = 18
    shop_open_hour: int = 9
    shop_close_hour: int = 18
    min_labor_mental: int = 30


DEFAULT_POLICY = GatePolicy()


def work_gate(time: int, mental: int, policy: GatePolicy = DEFAULT_POLICY) -> str | None:
    """Return the reason work is refused, or None when it is allowed."""
    if hour_of(time) > policy.work_last_hour:
        return "It is too late to work a part-time shift."
    if mental < policy.min_labor_mental:
        return "Mental is too low to work."
    return None


def performance_gate(time: int, mental: int, policy: GatePolicy = DEFAULT_POLICY) -> str | None:
    hour = hour_of(time)
    if hour < policy.performance_open_hour or hour > policy.performance_close_hour:
        return (
            f"Performances run only from {policy.performance_open_hour}:00 "
            f"to {policy.performance_close_hour}:00."
        )
    if mental < policy.min_labor_mental:
        return "Mental is too low to perform."
    return None


def shop_gate(time: int, policy: GatePolicy = DEFAULT_POLICY) -> str | None:
    hour = hour_of(time)
    if hour < policy.shop_open_hour or hour > policy.shop_close_hour:
        return (
            f"The shop is open only from {policy.shop_open_hour}:00 "
            f"to {policy.shop_close_hour}:00."
        )
    return None
