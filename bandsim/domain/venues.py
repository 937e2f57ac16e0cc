"""Venue catalog and performance multipliers.

The catalog is static configuration, not game state.
"""
from dataclasses import dataclass

import numpy as np

from bandsim.domain.dice import pick


@dataclass(frozen=True)
class Venue:
    name: str
    min_fame: int
    base_fame: int
    base_money_min: int
    base_money_max: int
    description: str


VENUES = [
    Venue("Street busking", 0, 10, 5, 15, "A street show for whoever happens to walk by."),
    Venue("Neighbourhood cafe", 20, 15, 15, 30, "A small set in a cosy cafe."),
    Venue("University festival", 30, 20, 30, 50, "A festival stage in front of a young crowd."),
    Venue("Local live club", 40, 25, 40, 70, "A live club packed with passionate fans."),
    Venue("Downtown concert hall", 60, 30, 60, 100, "A mid-sized hall in the city centre."),
    Venue("Local TV music show", 80, 40, 80, 150, "A slot on a regional TV music programme."),
    Venue("Open-air festival", 100, 50, 100, 200, "A huge outdoor festival crowd."),
    Venue("National music broadcast", 150, 70, 150, 300, "A nationwide TV music programme."),
    Venue("National arena tour", 200, 100, 200, 500, "A tour of the biggest arenas in the country."),
]

# (lowest multiplier, verdict), checked top to bottom
VERDICTS = [
    (1.5, "A smash hit! The crowd gave a standing ovation!"),
    (1.2, "A successful show!"),
    (0.8, "A decent show."),
    (0.5, "A disappointing show."),
]
POOR_VERDICT = "The show went badly. The band needs more practice."


def unlocked_venues(fame: int) -> list[Venue]:
    return [venue for venue in VENUES if venue.min_fame <= fame]


def find_venue(name: str) -> Venue | None:
    for venue in VENUES:
        if venue.name.lower() == name.strip().lower():
            return venue
    return None


def choose_venue(rng: np.random.Generator, fame: int, name: str | None = None) -> Venue:
    """Resolve the venue for a show.

    A named venue must exist and be unlocked at ``fame``; without a name one
    unlocked venue is drawn at random.

    Raises:
        ValueError: unknown or locked venue.
    """
    if name:
        venue = find_venue(name)
        if venue is None:
            raise ValueError(f"Unknown venue: {name!r}")
        if venue.min_fame > fame:
            raise ValueError(f"{venue.name} requires {venue.min_fame} fame.")
        return venue
    available = unlocked_venues(fame)
    if not available:
        raise ValueError("No venue is available yet.")
    return pick(rng, available)


def power_multiplier(team_power: int) -> float:
    return 0.5 + team_power / 200


def mental_multiplier(mental: int) -> float:
    return 0.3 + 0.9 * mental / 100


def fame_bonus(fame: int) -> float:
    return 1 + 0.3 * fame / 1000


def performance_multiplier(team_power: int, mental: int, fame: int) -> float:
    return power_multiplier(team_power) * mental_multiplier(mental) * fame_bonus(fame)


def performance_verdict(multiplier: float) -> str:
    for threshold, verdict in VERDICTS:
        if multiplier >= threshold:
            return verdict
    return POOR_VERDICT
