from sqlalchemy.orm import DeclarativeBase, relationship
from sqlalchemy.schema import Column, Index, UniqueConstraint
from sqlalchemy.types import Boolean, Integer, String, Uuid, DateTime
from uuid6 import uuid7
from datetime import datetime


class Base(DeclarativeBase):
    pass


class Game(Base):
    __tablename__ = "game"
    id = Column(Uuid, primary_key=True, default=uuid7)
    owner_id = Column(String, nullable=False, index=True)
    money = Column(Integer, nullable=False, default=0)
    mental = Column(Integer, nullable=False, default=100)
    fame = Column(Integer, nullable=False, default=0)
    time = Column(Integer, nullable=False, default=8)  # day * 100 + hour
    team_size = Column(Integer, nullable=False, default=1)
    team_power = Column(Integer, nullable=False, default=0)
    adventure_done_today = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now)

    members = relationship(
        "BandMember",
        primaryjoin="Game.id == foreign(BandMember.game_id)",
        back_populates="game",
        order_by="BandMember.slot",
    )


class BandMember(Base):
    __tablename__ = "band_member"
    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Uuid, nullable=False, index=True)
    slot = Column(Integer, nullable=False)  # 0 is the main character, 1-4 teammates
    name = Column(String, nullable=False)
    job = Column(String, nullable=True)
    image = Column(String, nullable=True)
    power = Column(Integer, nullable=False, default=0)
    has_item = Column(Boolean, nullable=False, default=False)
    item_name = Column(String, nullable=True)
    item_power = Column(Integer, nullable=False, default=0)
    item_durability = Column(Integer, nullable=False, default=0)

    __table_args__ = (UniqueConstraint("game_id", "slot", name="uq_band_member_slot"),)

    game = relationship(
        "Game",
        primaryjoin="foreign(BandMember.game_id) == Game.id",
        back_populates="members",
    )


# At most one running game per owner.
Index(
    "uq_game_active_owner",
    Game.owner_id,
    unique=True,
    sqlite_where=Game.is_active.is_(True),
    postgresql_where=Game.is_active.is_(True),
)
