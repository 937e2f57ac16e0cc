"""Equipment rules: shop offers, purchase, repair and durability.

An item is held by one band member. Durability runs 0-100 and the item is
destroyed (all item fields cleared) in the same update that takes it to 0.
"""
import math

import numpy as np

from bandsim.domain.clock import SHOP_VISIT_HOURS, pass_time
from bandsim.domain.dice import roll
from bandsim.domain.roster import equipped_members, get_member, member_key, refresh_derived
from bandsim.models.schema_models import GameSchema, MemberSchema, ShopOfferSchema

FULL_DURABILITY = 100
PRICE_PER_POWER = 3
REPAIR_COST_DIVISOR = 12
DECAY_RANGE = (5, 15)

INSTRUMENT_KIND = "instrument"
ITEM_KIND = "item"
SHOP_KINDS = (INSTRUMENT_KIND, ITEM_KIND)

# kind -> (power min, power max)
OFFER_POWER_RANGES = {
    INSTRUMENT_KIND: (20, 49),
    ITEM_KIND: (10, 209),
}

INSTRUMENT_NAMES = {
    "Main vocal": ["Premium microphone", "Studio microphone", "Wireless microphone"],
    "Electric guitar": ["Electric guitar", "Acoustic guitar", "Bass guitar"],
    "Drums": ["Electronic drum kit", "Acoustic drum kit", "Premium drum kit"],
    "Keyboard": ["Synthesizer", "Digital piano", "Stage piano"],
    "Bass": ["Electric bass", "Acoustic bass", "Premium bass"],
}
DEFAULT_INSTRUMENT_NAMES = ["Starter instrument 1", "Starter instrument 2", "Starter instrument 3"]

ITEM_NAMES = {
    "Main vocal": [
        "Neumann U87 studio mic", "Shure SM7B broadcast mic", "Sennheiser e935 live mic",
        "Audio-Technica AT2020 USB mic", "AKG C414 condenser mic", "Rode NT1-A vocal mic",
        "Blue Yeti X Pro mic", "sE2200 studio mic", "Warm WA-47 tube mic", "Apogee HypeMiC",
    ],
    "Electric guitar": [
        "Gibson Les Paul Standard", "Fender Stratocaster Professional", "PRS Custom 24",
        "Ibanez RG Prestige", "Gibson SG Standard", "Jackson Soloist Pro",
        "Gus G. signature", "Carl Thompson CT624 custom", "ESP E-II Horizon", "Charvel Pro-Mod DK24",
    ],
    "Drums": [
        "Pearl Masters Maple Reserve", "Tama Starclassic Bubinga", "DW Collector's Maple",
        "Ludwig Classic Maple", "Gretsch Broadkaster", "Yamaha Recording Custom",
        "Sonor Martini vintage", "Mapleworks custom", "Adrian Drumworks special", "Canopus New Yorker",
    ],
    "Keyboard": [
        "Nord Stage 3 Compact", "Roland Fantom 8", "Yamaha Montage 8", "Korg Kronos 2",
        "Dave Smith Prophet Rev2", "Moog One", "Kurzweil PC4", "Arturia PolyBrute",
        "Novation Summit", "Roland Jupiter-X",
    ],
    "Bass": [
        "Fender Precision Elite", "Music Man StingRay 5 HH", "Warwick Streamer LX",
        "Spector Euro 5 LX", "Fodera Imperial Custom 5", "MTD Kingston Z5",
        "Lakland Skyline", "Dela Cruz USBL", "Sadowsky Vintage 5", "Alembic Essence",
    ],
}
DEFAULT_ITEM_NAMES = [
    "Yamaha starter guitar", "Roland digital piano", "Kala ukulele", "Pearl snare drum",
    "Shure SM58 mic", "Casio keyboard", "Kalimba 17-key", "Epiphone bass",
    "Alesis e-drum kit", "Korg mini synth",
]


def item_price(power: int) -> int:
    return power * PRICE_PER_POWER


def offer_names(job: str | None, kind: str) -> list[str]:
    if kind == INSTRUMENT_KIND:
        return INSTRUMENT_NAMES.get(job, DEFAULT_INSTRUMENT_NAMES)
    if kind == ITEM_KIND:
        return ITEM_NAMES.get(job, DEFAULT_ITEM_NAMES)
    raise ValueError(f"Unknown shop kind: {kind!r}")


def generate_offers(rng: np.random.Generator, job: str | None, kind: str) -> list[ShopOfferSchema]:
    """Roll a fresh set of offers for a member's position."""
    if kind not in SHOP_KINDS:
        raise ValueError(f"Unknown shop kind: {kind!r}")
    low, high = OFFER_POWER_RANGES[kind]
    offers = []
    for name in offer_names(job, kind):
        power = roll(rng, low, high)
        offers.append(ShopOfferSchema(name=name, power=power, price=item_price(power)))
    return offers


def repair_cost(item_power: int, durability: int, target: int = FULL_DURABILITY) -> int:
    """Cost scales with both the damage repaired and the item quality."""
    return math.floor((target - durability) * item_power / REPAIR_COST_DIVISOR)


def purchase_check(money: int, item_name: str, item_power: int, price: int) -> str | None:
    """Return the reason a purchase is refused, or None."""
    if not item_name or not item_name.strip():
        return "Item name is required."
    if item_power <= 0:
        return "Item power must be positive."
    if price < item_price(item_power):
        return f"Price {price} is below the shop price {item_price(item_power)} for power {item_power}."
    if money < price:
        return "Insufficient funds."
    return None


def repair_check(member: MemberSchema, money: int, target: int = FULL_DURABILITY) -> str | None:
    if not member.has_item:
        return "There is no item to repair."
    if member.item_durability >= FULL_DURABILITY:
        return "The item is already in perfect condition."
    if target <= member.item_durability or target > FULL_DURABILITY:
        return f"Target durability must be above {member.item_durability} and at most {FULL_DURABILITY}."
    if money < repair_cost(member.item_power, member.item_durability, target):
        return "Insufficient funds."
    return None


def equip_item(member: MemberSchema, name: str, power: int) -> None:
    member.has_item = True
    member.item_name = name
    member.item_power = power
    member.item_durability = FULL_DURABILITY


def clear_item(member: MemberSchema) -> None:
    member.has_item = False
    member.item_name = None
    member.item_power = 0
    member.item_durability = 0


def damage_item(member: MemberSchema, amount: int) -> bool:
    """Lower durability by ``amount``. Returns True when the item is destroyed."""
    durability = member.item_durability - amount
    if durability <= 0:
        clear_item(member)
        return True
    member.item_durability = durability
    return False


def decay_equipment(game: GameSchema, rng: np.random.Generator) -> list[dict]:
    """Wear down every equipped item by an independent draw from DECAY_RANGE."""
    report = []
    for member in equipped_members(game):
        item_name = member.item_name
        loss = roll(rng, *DECAY_RANGE)
        destroyed = damage_item(member, loss)
        report.append(
            {
                "member": member_key(member.slot),
                "item_name": item_name,
                "durability_loss": loss,
                "destroyed": destroyed,
            }
        )
    return report


def resolve_purchase(game: GameSchema, slot: int, item_name: str, item_power: int, price: int) -> tuple[GameSchema, dict]:
    """Equip a bought item on the member in ``slot``, replacing any held item.

    Checks are the caller's job (``purchase_check``); this only applies them.
    """
    game = game.model_copy(deep=True)
    member = get_member(game, slot)
    replaced = member.item_name if member.has_item else None

    game.money -= price
    equip_item(member, item_name.strip(), item_power)
    refresh_derived(game)
    rolled_over = pass_time(game, SHOP_VISIT_HOURS)
    return game, {
        "member": member_key(slot),
        "item_name": member.item_name,
        "item_power": item_power,
        "price": price,
        "replaced_item": replaced,
        "day_rolled_over": rolled_over,
    }


def resolve_repair(game: GameSchema, slot: int, target: int = FULL_DURABILITY) -> tuple[GameSchema, dict]:
    game = game.model_copy(deep=True)
    member = get_member(game, slot)
    cost = repair_cost(member.item_power, member.item_durability, target)
    previous = member.item_durability

    game.money -= cost
    member.item_durability = target
    rolled_over = pass_time(game, SHOP_VISIT_HOURS)
    return game, {
        "member": member_key(slot),
        "item_name": member.item_name,
        "cost": cost,
        "durability_before": previous,
        "durability_after": target,
        "day_rolled_over": rolled_over,
    }


def resolve_leave_shop(game: GameSchema) -> tuple[GameSchema, dict]:
    game = game.model_copy(deep=True)
    rolled_over = pass_time(game, SHOP_VISIT_HOURS)
    return game, {"day_rolled_over": rolled_over}
