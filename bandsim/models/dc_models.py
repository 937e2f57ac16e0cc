from pydantic import BaseModel, Field
from enum import Enum
from uuid import UUID
from typing import Any, Dict, List, Optional

from bandsim.models.schema_models import ShopOfferSchema


class ShopKindModel(str, Enum):
    instrument = "instrument"
    item = "item"


class StartGameModel(BaseModel):
    owner_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    job: str
    image: str = "/characters/default.png"
    power: Optional[int] = Field(default=None, gt=0)


class PracticeModel(BaseModel):
    score: float = Field(ge=0, le=100)  # final rhythm mini-game score


class PerformanceModel(BaseModel):
    venue: Optional[str] = None  # None draws a random unlocked venue


class PurchaseModel(BaseModel):
    member_key: str
    item_name: str = Field(min_length=1)
    item_power: int = Field(gt=0)
    price: int = Field(ge=0)


class RepairModel(BaseModel):
    member_key: str
    target_durability: int = Field(default=100, gt=0, le=100)


class MemberModel(BaseModel):
    key: str
    name: str
    job: str | None
    image: str | None
    power: int
    has_item: bool
    item_name: str | None
    item_power: int
    item_durability: int


class GameModel(BaseModel):
    id: UUID
    owner_id: str
    money: int
    mental: int
    fame: int
    time: int
    day: int
    hour: int
    time_label: str
    team_size: int
    team_power: int
    adventure_done_today: bool
    is_active: bool
    version: int
    members: List[MemberModel]


class ActionResultModel(BaseModel):
    game: GameModel
    changes: Dict[str, Any]
    outcome: Dict[str, Any]


class ShopModel(BaseModel):
    member_key: str
    kind: ShopKindModel
    offers: List[ShopOfferSchema]


class VenueModel(BaseModel):
    name: str
    min_fame: int
    base_fame: int
    base_money_min: int
    base_money_max: int
    description: str

    class Config:
        from_attributes = True


class GameSummaryModel(BaseModel):
    game_id: UUID
    owner_id: str
    main_name: str
    money: int
    fame: int
    team_power: int
    team_size: int
    days_played: int
