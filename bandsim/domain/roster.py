"""Band roster rules: member addressing, team power, recruits.

Slot 0 is the main character, slots 1-4 are teammate slots. An empty
teammate slot is ``None``.
"""
import numpy as np

from bandsim.domain.dice import pick, roll
from bandsim.models.schema_models import MAIN_SLOT, MATE_SLOTS, GameSchema, MemberSchema

MAIN_KEY = "main"
MATE_KEY_PREFIX = "mate"
MAX_TEAM_SIZE = 1 + len(MATE_SLOTS)
DEFAULT_MAIN_POWER = 10
RECRUIT_POWER_RANGE = (20, 50)

POSITIONS = ["Main vocal", "Drums", "Electric guitar", "Bass", "Keyboard"]

# Short pools are enough for a five-piece band.
RECRUIT_FIRST_NAMES = [
    "Minjun", "Seoyeon", "Jiho", "Haeun", "Doyun", "Jiwoo", "Yuna", "Taeyang",
    "Oliver", "Charlie", "Marco", "Luca", "Diego", "Mateo", "Felix", "Jonas",
    "Pierre", "Hugo", "Aiko", "Kenji",
]
RECRUIT_LAST_NAMES = [
    "Kim", "Lee", "Park", "Choi", "Jung", "Kang", "Cho", "Yoon",
    "Walker", "Hughes", "Rossi", "Bianchi", "Garcia", "Lopez", "Becker",
    "Fischer", "Moreau", "Laurent", "Tanaka", "Sato",
]


def parse_member_key(key: str | int) -> int:
    """Resolve a member key to a slot index.

    Accepts ``"main"``, ``"mate1"``..``"mate4"`` or a bare teammate index
    1..4 (as int or str).

    Raises:
        ValueError: the key does not name a slot.
    """
    if isinstance(key, int) and not isinstance(key, bool):
        index = key
    else:
        text = str(key).strip().lower()
        if text == MAIN_KEY:
            return MAIN_SLOT
        if text.startswith(MATE_KEY_PREFIX):
            text = text[len(MATE_KEY_PREFIX):]
        if not text.isdigit():
            raise ValueError(f"Unknown member key: {key!r}")
        index = int(text)
    if index not in MATE_SLOTS:
        raise ValueError(f"Teammate slot must be between 1 and {len(MATE_SLOTS)}, got {key!r}")
    return index


def member_key(slot: int) -> str:
    return MAIN_KEY if slot == MAIN_SLOT else f"{MATE_KEY_PREFIX}{slot}"


def get_member(game: GameSchema, slot: int) -> MemberSchema | None:
    if slot == MAIN_SLOT:
        return game.main
    return game.mates[slot - 1]


def set_member(game: GameSchema, slot: int, member: MemberSchema | None) -> None:
    if slot == MAIN_SLOT:
        if member is None:
            raise ValueError("The main character cannot be removed")
        game.main = member
        return
    game.mates[slot - 1] = member


def filled_members(game: GameSchema) -> list[MemberSchema]:
    """Main character first, then filled teammate slots in slot order."""
    return [game.main] + [mate for mate in game.mates if mate is not None]


def equipped_members(game: GameSchema) -> list[MemberSchema]:
    return [member for member in filled_members(game) if member.has_item]


def filled_mate_slots(game: GameSchema) -> list[int]:
    return [slot for slot in MATE_SLOTS if game.mates[slot - 1] is not None]


def empty_mate_slots(game: GameSchema) -> list[int]:
    return [slot for slot in MATE_SLOTS if game.mates[slot - 1] is None]


def member_power(member: MemberSchema | None) -> int:
    if member is None or not member.power:
        return 0
    total = member.power
    if member.has_item:
        total += member.item_power or 0
    return total


def compute_team_power(game: GameSchema) -> int:
    """Sum of every filled slot's power plus its equipped item power.

    Always a full recomputation; never patch the cached value incrementally.
    """
    return member_power(game.main) + sum(member_power(mate) for mate in game.mates)


def count_team(game: GameSchema) -> int:
    return len(filled_members(game))


def refresh_derived(game: GameSchema) -> GameSchema:
    game.team_size = count_team(game)
    game.team_power = compute_team_power(game)
    return game


def generate_recruit(rng: np.random.Generator, slot: int) -> MemberSchema:
    name = f"{pick(rng, RECRUIT_FIRST_NAMES)} {pick(rng, RECRUIT_LAST_NAMES)}"
    return MemberSchema(
        slot=slot,
        name=name,
        job=pick(rng, POSITIONS),
        power=roll(rng, *RECRUIT_POWER_RANGE),
    )
