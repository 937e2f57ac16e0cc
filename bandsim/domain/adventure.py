"""Daily adventure: random narrative events.

One adventure resolves per in-game day. The candidate set is the catalog
filtered by each event's eligibility check, and one candidate is drawn by
weight. Weights are relative; they do not need to sum to 1.
"""
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from bandsim.domain.dice import chance, clamp, pick, roll
from bandsim.domain.equipment import damage_item
from bandsim.domain.roster import (
    MAX_TEAM_SIZE,
    count_team,
    empty_mate_slots,
    equipped_members,
    filled_mate_slots,
    generate_recruit,
    member_key,
    refresh_derived,
    set_member,
)
from bandsim.domain.stats import clamp_mental
from bandsim.models.schema_models import GameSchema

NEW_MEMBER = "NEW_MEMBER"
ACCIDENT = "ACCIDENT"
DONATION = "DONATION"
HIT_SONG = "HIT_SONG"
INSTRUMENT_BREAK = "INSTRUMENT_BREAK"
CONCERT = "CONCERT"

RECRUIT_SUCCESS_CHANCE = 0.5
RECRUIT_MENTAL_DELTA = 10
ACCIDENT_MENTAL_COST = 30
BREAK_POWER_GAIN = 20
BREAK_DURABILITY_LOSS = 40
BREAK_MENTAL_COST = 20
DONATION_RANGE = (50, 100)
DONATION_MENTAL_GAIN = 10
HIT_SONG_FAME_GAIN = 100
HIT_SONG_FAME_REQUIRED = 200
CONCERT_MENTAL_RANGE = (-20, 20)
CONCERT_FAME_RANGE = (-30, 30)


@dataclass(frozen=True)
class AdventureEvent:
    type: str
    title: str
    description: str
    weight: float
    condition: Callable[[GameSchema], bool] | None = None

    def is_eligible(self, game: GameSchema) -> bool:
        return self.condition is None or self.condition(game)


EVENTS = [
    AdventureEvent(
        NEW_MEMBER,
        "A new face",
        "Someone turned up asking to join the band. Will they make the cut?",
        0.5,
    ),
    AdventureEvent(
        ACCIDENT,
        "Traffic accident",
        "A bandmate called on the way home from practice. They hurt their hand in a crash.",
        0.05,
        lambda game: count_team(game) > 1,
    ),
    AdventureEvent(
        DONATION,
        "Donation",
        "An email from a fan who saw the last show and wants to back the band.",
        0.1,
    ),
    AdventureEvent(
        HIT_SONG,
        "Hit song",
        "The latest single is topping the charts all over the world!",
        0.1,
        lambda game: game.fame >= HIT_SONG_FAME_REQUIRED,
    ),
    AdventureEvent(
        INSTRUMENT_BREAK,
        "Broken instrument",
        "An instrument gave out in the middle of a hard rehearsal.",
        0.15,
        lambda game: len(equipped_members(game)) > 0,
    ),
    AdventureEvent(
        CONCERT,
        "Concert invitation",
        "The band has been invited to play an important concert. Good luck!",
        0.1,
    ),
]


def eligible_events(game: GameSchema, catalog: Sequence[AdventureEvent] = EVENTS) -> list[AdventureEvent]:
    return [event for event in catalog if event.is_eligible(game)]


def weighted_choice(rng: np.random.Generator, candidates: Sequence[AdventureEvent]) -> AdventureEvent:
    """Draw one candidate with probability proportional to its weight.

    Walks the list subtracting weights until the remainder is non-positive;
    falls back to the first candidate if rounding leaves a remainder.
    """
    if not candidates:
        raise ValueError("No adventure event is eligible")
    remainder = rng.random() * sum(event.weight for event in candidates)
    for event in candidates:
        remainder -= event.weight
        if remainder <= 0:
            return event
    return candidates[0]


def _new_member(game: GameSchema, rng: np.random.Generator) -> dict:
    if count_team(game) < MAX_TEAM_SIZE and chance(rng, RECRUIT_SUCCESS_CHANCE):
        slot = empty_mate_slots(game)[0]
        recruit = generate_recruit(rng, slot)
        set_member(game, slot, recruit)
        game.mental = clamp_mental(game.mental + RECRUIT_MENTAL_DELTA)
        return {
            "joined": True,
            "member": member_key(slot),
            "name": recruit.name,
            "job": recruit.job,
            "power": recruit.power,
            "message": f"{recruit.name} joined the band! (mental +{RECRUIT_MENTAL_DELTA})",
        }
    game.mental = clamp_mental(game.mental - RECRUIT_MENTAL_DELTA)
    return {"joined": False, "message": f"The audition fell through... (mental -{RECRUIT_MENTAL_DELTA})"}


def _accident(game: GameSchema, rng: np.random.Generator) -> dict:
    slots = filled_mate_slots(game)
    if not slots:
        raise ValueError("An accident needs at least one teammate")
    slot = pick(rng, slots)
    name = game.mates[slot - 1].name
    set_member(game, slot, None)
    game.mental = clamp_mental(game.mental - ACCIDENT_MENTAL_COST)
    return {
        "member": member_key(slot),
        "name": name,
        "message": f"{name} had to leave the band after the accident. (mental -{ACCIDENT_MENTAL_COST})",
    }


def _instrument_break(game: GameSchema, rng: np.random.Generator) -> dict:
    equipped = equipped_members(game)
    if not equipped:
        raise ValueError("An instrument break needs an equipped item")
    member = pick(rng, equipped)
    item_name = member.item_name
    member.power += BREAK_POWER_GAIN
    destroyed = damage_item(member, BREAK_DURABILITY_LOSS)
    game.mental = clamp_mental(game.mental - BREAK_MENTAL_COST)
    return {
        "member": member_key(member.slot),
        "item_name": item_name,
        "destroyed": destroyed,
        "message": (
            f"{item_name} was damaged, but {member.name} got better for it. "
            f"(mental -{BREAK_MENTAL_COST}, power +{BREAK_POWER_GAIN})"
        ),
    }


def _donation(game: GameSchema, rng: np.random.Generator) -> dict:
    amount = roll(rng, *DONATION_RANGE)
    game.money += amount
    game.mental = clamp_mental(game.mental + DONATION_MENTAL_GAIN)
    return {"amount": amount, "message": f"Received a donation of {amount}! (mental +{DONATION_MENTAL_GAIN})"}


def _hit_song(game: GameSchema, rng: np.random.Generator) -> dict:
    game.mental = clamp_mental(100)
    game.fame += HIT_SONG_FAME_GAIN
    return {"message": f"The song is a massive hit! (mental MAX, fame +{HIT_SONG_FAME_GAIN})"}


def _concert(game: GameSchema, rng: np.random.Generator) -> dict:
    old_mental, old_fame = game.mental, game.fame
    game.mental = clamp_mental(game.mental + roll(rng, *CONCERT_MENTAL_RANGE))
    game.fame = clamp(game.fame + roll(rng, *CONCERT_FAME_RANGE), 0)
    mental_change = game.mental - old_mental
    fame_change = game.fame - old_fame
    return {
        "mental_change": mental_change,
        "fame_change": fame_change,
        "message": f"The concert is over! (mental {mental_change:+d}, fame {fame_change:+d})",
    }


EFFECTS = {
    NEW_MEMBER: _new_member,
    ACCIDENT: _accident,
    DONATION: _donation,
    HIT_SONG: _hit_song,
    INSTRUMENT_BREAK: _instrument_break,
    CONCERT: _concert,
}


def apply_event(game: GameSchema, event: AdventureEvent, rng: np.random.Generator) -> tuple[GameSchema, dict]:
    game = game.model_copy(deep=True)
    result = EFFECTS[event.type](game, rng)
    refresh_derived(game)
    game.adventure_done_today = True
    return game, {"event": event.type, "title": event.title, "description": event.description, **result}


def resolve_adventure(
    game: GameSchema,
    rng: np.random.Generator,
    catalog: Sequence[AdventureEvent] = EVENTS,
) -> tuple[GameSchema, dict]:
    event = weighted_choice(rng, eligible_events(game, catalog))
    return apply_event(game, event, rng)
