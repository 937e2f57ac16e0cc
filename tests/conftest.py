import asyncio
from datetime import datetime

import numpy as np
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from uuid6 import uuid7

from bandsim.crud import CreateData
from bandsim.domain.roster import refresh_derived
from bandsim.models.schema_models import MAIN_SLOT, GameSchema, MemberSchema
from bandsim.services.game_actions import GameActions


@pytest.fixture
def engine(tmp_path):
    # NullPool: every asyncio.run gets fresh connections on its own loop
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}", poolclass=NullPool)
    asyncio.run(CreateData.create_table(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(autocommit=False, class_=AsyncSession, autoflush=True, bind=engine)


@pytest.fixture
def rng():
    return np.random.default_rng(20240917)


@pytest.fixture
def actions(session_factory, rng):
    return GameActions(session_factory, rng=rng)


def make_member(slot: int, **fields) -> MemberSchema:
    values = {"name": f"Member {slot}", "job": "Drums", "power": 10}
    values.update(fields)
    return MemberSchema(slot=slot, **values)


def make_game(mates=None, main=None, **fields) -> GameSchema:
    """Build an unsaved game; ``mates`` maps slot -> MemberSchema."""
    now = datetime.now()
    game = GameSchema(
        id=uuid7(),
        owner_id=fields.pop("owner_id", "owner-1"),
        created_at=now,
        updated_at=now,
        main=main or make_member(MAIN_SLOT, name="Hero", job="Main vocal"),
        **fields,
    )
    for slot, member in (mates or {}).items():
        game.mates[slot - 1] = member
    return refresh_derived(game)


@pytest.fixture
def store_game(session_factory):
    def store(game: GameSchema) -> GameSchema:
        return asyncio.run(CreateData.create_game(game, session_factory()))

    return store
