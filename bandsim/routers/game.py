import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from bandsim.db import Session
from bandsim.domain.venues import VENUES
from bandsim.load_settings import gate_policy
from bandsim.models.dc_models import (
    ActionResultModel,
    GameModel,
    GameSummaryModel,
    PerformanceModel,
    PracticeModel,
    PurchaseModel,
    RepairModel,
    ShopKindModel,
    ShopModel,
    StartGameModel,
    VenueModel,
)
from bandsim.services.game_actions import GameActions

game_router = APIRouter()
game_actions = GameActions(Session, gate_policy=gate_policy)


def get_game_actions() -> GameActions:
    return game_actions


class LifecycleAPI:
    @staticmethod
    @game_router.post("/games", response_model=GameModel)
    async def start_game(body: StartGameModel, actions: GameActions = Depends(get_game_actions)):
        return await actions.start_new_game(
            owner_id=body.owner_id,
            name=body.name,
            job=body.job,
            image=body.image,
            power=body.power,
        )

    @staticmethod
    @game_router.get("/games/current/{owner_id}", response_model=GameModel | None)
    async def get_current_game(owner_id: str, actions: GameActions = Depends(get_game_actions)):
        return await actions.get_current_game(owner_id)

    @staticmethod
    @game_router.get("/games/{game_id}", response_model=GameModel)
    async def get_game(game_id: UUID, actions: GameActions = Depends(get_game_actions)):
        return await actions.get_game(game_id)

    @staticmethod
    @game_router.post("/games/{game_id}/end", response_model=GameSummaryModel)
    async def end_game(game_id: UUID, actions: GameActions = Depends(get_game_actions)):
        return await actions.end_game(game_id)


class ActionAPI:
    @staticmethod
    @game_router.post("/games/{game_id}/work", response_model=ActionResultModel)
    async def work(game_id: UUID, actions: GameActions = Depends(get_game_actions)):
        return await actions.work(game_id)

    @staticmethod
    @game_router.post("/games/{game_id}/rest", response_model=ActionResultModel)
    async def rest(game_id: UUID, actions: GameActions = Depends(get_game_actions)):
        return await actions.rest(game_id)

    @staticmethod
    @game_router.post("/games/{game_id}/practice", response_model=ActionResultModel)
    async def practice(game_id: UUID, body: PracticeModel, actions: GameActions = Depends(get_game_actions)):
        return await actions.practice(game_id, body.score)

    @staticmethod
    @game_router.post("/games/{game_id}/perform", response_model=ActionResultModel)
    async def perform(game_id: UUID, body: PerformanceModel = PerformanceModel(), actions: GameActions = Depends(get_game_actions)):
        return await actions.perform(game_id, body.venue)

    @staticmethod
    @game_router.post("/games/{game_id}/adventure", response_model=ActionResultModel)
    async def adventure(game_id: UUID, actions: GameActions = Depends(get_game_actions)):
        return await actions.adventure(game_id)


class ShopAPI:
    @staticmethod
    @game_router.get("/games/{game_id}/shop/{member_key}", response_model=ShopModel)
    async def browse(
        game_id: UUID,
        member_key: str,
        kind: ShopKindModel = ShopKindModel.item,
        actions: GameActions = Depends(get_game_actions),
    ):
        return await actions.browse_shop(game_id, member_key, kind)

    @staticmethod
    @game_router.post("/games/{game_id}/shop/purchase", response_model=ActionResultModel)
    async def purchase(game_id: UUID, body: PurchaseModel, actions: GameActions = Depends(get_game_actions)):
        logging.info(f"Purchase request for game {game_id}: {body}")
        return await actions.purchase_item(
            game_id,
            body.member_key,
            body.item_name,
            body.item_power,
            body.price,
        )

    @staticmethod
    @game_router.post("/games/{game_id}/shop/repair", response_model=ActionResultModel)
    async def repair(game_id: UUID, body: RepairModel, actions: GameActions = Depends(get_game_actions)):
        return await actions.repair_item(game_id, body.member_key, body.target_durability)

    @staticmethod
    @game_router.post("/games/{game_id}/shop/leave", response_model=ActionResultModel)
    async def leave(game_id: UUID, actions: GameActions = Depends(get_game_actions)):
        return await actions.leave_shop(game_id)


class VenueAPI:
    @staticmethod
    @game_router.get("/venues", response_model=List[VenueModel])
    async def list_venues():
        return [VenueModel.model_validate(venue) for venue in VENUES]
