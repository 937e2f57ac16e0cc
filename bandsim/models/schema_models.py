from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime


MAIN_SLOT = 0
MATE_SLOTS = (1, 2, 3, 4)


class MemberSchema(BaseModel):
    slot: int
    name: str
    job: str | None = None
    image: str | None = None
    power: int = 0
    has_item: bool = False
    item_name: str | None = None
    item_power: int = 0
    item_durability: int = 0

    class Config:
        from_attributes = True


class GameSchema(BaseModel):
    id: UUID
    owner_id: str
    money: int = 0
    mental: int = 100
    fame: int = 0
    time: int = 8
    team_size: int = 1
    team_power: int = 0
    adventure_done_today: bool = False
    is_active: bool = True
    version: int = 1
    created_at: datetime
    updated_at: datetime
    main: MemberSchema
    mates: list[Optional[MemberSchema]] = Field(default_factory=lambda: [None] * len(MATE_SLOTS))

    class Config:
        from_attributes = True


class ShopOfferSchema(BaseModel):
    name: str
    power: int
    price: int
