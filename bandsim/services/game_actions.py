import logging
from datetime import datetime
from uuid import UUID

import numpy as np
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from uuid6 import uuid7

from bandsim.converter import DataConverter
from bandsim.crud import CreateData, ReadData, UpdateData
from bandsim.domain import equipment, policy, roster, stats, venues
from bandsim.domain.adventure import resolve_adventure
from bandsim.domain.clock import format_game_time
from bandsim.errors import GameNotFound, ValidationFailed
from bandsim.models.dc_models import (
    ActionResultModel,
    GameModel,
    GameSummaryModel,
    ShopKindModel,
    ShopModel,
)
from bandsim.models.schema_models import MAIN_SLOT, GameSchema, MemberSchema

data_converter = DataConverter()


class GameActions:
    """Action handlers for one band's game.

    Every handler re-reads the game, runs its gates before any roll, resolves
    the outcome from the stored state and writes once with a version check.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        rng: np.random.Generator | None = None,
        gate_policy: policy.GatePolicy = policy.DEFAULT_POLICY,
    ):
        self.Session = session_factory
        self.rng = rng if rng is not None else np.random.default_rng()
        self.policy = gate_policy

    # ==== Lifecycle ============================================================

    async def start_new_game(
        self,
        owner_id: str,
        name: str,
        job: str,
        image: str | None = None,
        power: int | None = None,
    ) -> GameModel:
        """Start a playthrough; the owner's running game, if any, is retired."""
        if not owner_id:
            raise ValidationFailed("Owner is required.")
        if not name or not name.strip():
            raise ValidationFailed("Name is required.")
        if job not in roster.POSITIONS:
            raise ValidationFailed(f"Position must be one of: {', '.join(roster.POSITIONS)}.")
        if power is not None and power <= 0:
            raise ValidationFailed("Power must be positive.")

        now = datetime.now()
        main = MemberSchema(
            slot=MAIN_SLOT,
            name=name.strip(),
            job=job,
            image=image,
            power=power or roster.DEFAULT_MAIN_POWER,
        )
        game = roster.refresh_derived(
            GameSchema(id=uuid7(), owner_id=owner_id, created_at=now, updated_at=now, main=main)
        )
        game = await CreateData.create_game(game, self.Session())
        logging.info(f"Owner {owner_id} started game {game.id} as {main.name} ({job})")
        return data_converter.convert_gameschema_to_gamemodel(game)

    async def get_current_game(self, owner_id: str) -> GameModel | None:
        game = await ReadData.read_active_game(owner_id, self.Session())
        if game is None:
            return None
        return data_converter.convert_gameschema_to_gamemodel(game)

    async def get_game(self, game_id: UUID) -> GameModel:
        game = await self._load(game_id)
        return data_converter.convert_gameschema_to_gamemodel(game)

    async def end_game(self, game_id: UUID) -> GameSummaryModel:
        """Retire a running game and report its final standing. The row is kept."""
        game = await self._load_running(game_id)
        ended = game.model_copy(deep=True)
        ended.is_active = False
        stored = await UpdateData.update_game(ended, self.Session())
        logging.info(f"Game {game_id} ended with money={stored.money} fame={stored.fame}")
        return data_converter.convert_to_summary(stored)

    # ==== Stat actions =========================================================

    async def work(self, game_id: UUID) -> ActionResultModel:
        game = await self._load_running(game_id)
        self._check(policy.work_gate(game.time, game.mental, self.policy))
        after, outcome = stats.resolve_work(game, self.rng)
        return await self._commit(game, after, outcome, "work")

    async def rest(self, game_id: UUID) -> ActionResultModel:
        game = await self._load_running(game_id)
        after, outcome = stats.resolve_rest(game, self.rng)
        return await self._commit(game, after, outcome, "rest")

    async def practice(self, game_id: UUID, score: float) -> ActionResultModel:
        game = await self._load_running(game_id)
        if not stats.PRACTICE_SCORE_MIN <= score <= stats.PRACTICE_SCORE_MAX:
            raise ValidationFailed(
                f"Practice score must be between {stats.PRACTICE_SCORE_MIN} and {stats.PRACTICE_SCORE_MAX}."
            )
        after, outcome = stats.resolve_practice(game, self.rng, score)
        return await self._commit(game, after, outcome, "practice")

    async def perform(self, game_id: UUID, venue_name: str | None = None) -> ActionResultModel:
        game = await self._load_running(game_id)
        self._check(policy.performance_gate(game.time, game.mental, self.policy))
        try:
            venue = venues.choose_venue(self.rng, game.fame, venue_name)
        except ValueError as e:
            raise ValidationFailed(str(e)) from e
        after, outcome = stats.resolve_performance(game, self.rng, venue)
        return await self._commit(game, after, outcome, "performance")

    # ==== Shop =================================================================

    async def browse_shop(self, game_id: UUID, member_key: str, kind: ShopKindModel = ShopKindModel.item) -> ShopModel:
        """List fresh offers for a member's position. Nothing is written."""
        game = await self._load_running(game_id)
        self._check(policy.shop_gate(game.time, self.policy))
        slot, member = self._resolve_member(game, member_key)
        try:
            kind = ShopKindModel(kind)
        except ValueError as e:
            raise ValidationFailed(f"Unknown shop kind: {kind!r}") from e
        offers = equipment.generate_offers(self.rng, member.job, kind.value)
        return ShopModel(member_key=roster.member_key(slot), kind=kind, offers=offers)

    async def purchase_item(
        self,
        game_id: UUID,
        member_key: str,
        item_name: str,
        item_power: int,
        price: int,
    ) -> ActionResultModel:
        game = await self._load_running(game_id)
        self._check(policy.shop_gate(game.time, self.policy))
        slot, _ = self._resolve_member(game, member_key)
        self._check(equipment.purchase_check(game.money, item_name, item_power, price))
        after, outcome = equipment.resolve_purchase(game, slot, item_name, item_power, price)
        return await self._commit(game, after, outcome, "purchase")

    async def repair_item(
        self,
        game_id: UUID,
        member_key: str,
        target_durability: int = equipment.FULL_DURABILITY,
    ) -> ActionResultModel:
        game = await self._load_running(game_id)
        self._check(policy.shop_gate(game.time, self.policy))
        slot, member = self._resolve_member(game, member_key)
        self._check(equipment.repair_check(member, game.money, target_durability))
        after, outcome = equipment.resolve_repair(game, slot, target_durability)
        return await self._commit(game, after, outcome, "repair")

    async def leave_shop(self, game_id: UUID) -> ActionResultModel:
        game = await self._load_running(game_id)
        after, outcome = equipment.resolve_leave_shop(game)
        return await self._commit(game, after, outcome, "leave shop")

    # ==== Adventure ============================================================

    async def adventure(self, game_id: UUID) -> ActionResultModel:
        game = await self._load_running(game_id)
        if game.adventure_done_today:
            raise ValidationFailed("Today's adventure is already done.")
        after, outcome = resolve_adventure(game, self.rng)
        return await self._commit(game, after, outcome, f"adventure {outcome['event']}")

    # ==== Helpers ==============================================================

    async def _load(self, game_id: UUID) -> GameSchema:
        game = await ReadData.read_game(game_id, self.Session())
        if game is None:
            raise GameNotFound(f"Game {game_id} not found")
        return game

    async def _load_running(self, game_id: UUID) -> GameSchema:
        game = await self._load(game_id)
        if not game.is_active:
            raise ValidationFailed("This game has ended.")
        return game

    @staticmethod
    def _check(reason: str | None) -> None:
        if reason is not None:
            raise ValidationFailed(reason)

    @staticmethod
    def _resolve_member(game: GameSchema, key: str) -> tuple[int, MemberSchema]:
        try:
            slot = roster.parse_member_key(key)
        except ValueError as e:
            raise ValidationFailed(str(e)) from e
        member = roster.get_member(game, slot)
        if member is None:
            raise ValidationFailed(f"Teammate slot {slot} is empty.")
        return slot, member

    async def _commit(self, before: GameSchema, after: GameSchema, outcome: dict, action: str) -> ActionResultModel:
        stored = await UpdateData.update_game(roster.refresh_derived(after), self.Session())
        logging.info(f"Game {before.id}: {action} resolved, now {format_game_time(stored.time)}")
        return data_converter.convert_to_action_result(before, stored, outcome)
