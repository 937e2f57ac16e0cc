from datetime import datetime
import logging
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import selectinload

from bandsim.converter import DataConverter
from bandsim.domain.roster import filled_members
from bandsim.errors import GameError, GameNotFound, PersistenceFailure, StaleGameState
from bandsim.models.schema_models import GameSchema, MemberSchema
from bandsim.models.schemas import Base, BandMember, Game

data_converter = DataConverter()


def _member_row(game_id: UUID, member: MemberSchema) -> BandMember:
    return BandMember(game_id=game_id, **member.model_dump())


def _game_values(game: GameSchema) -> dict:
    return {
        "money": game.money,
        "mental": game.mental,
        "fame": game.fame,
        "time": game.time,
        "team_size": game.team_size,
        "team_power": game.team_power,
        "adventure_done_today": game.adventure_done_today,
        "is_active": game.is_active,
    }


class CreateData:
    @staticmethod
    async def create_table(engine: AsyncEngine) -> None:
        """Create tables if they do not exist"""
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logging.error(f"Failed to create tables: {e}")
            raise PersistenceFailure("Failed to create tables") from e

    @staticmethod
    async def create_game(game: GameSchema, session: AsyncSession) -> GameSchema:
        """Insert a new game and retire the owner's running one in the same transaction

        Args:
            game (GameSchema): Fully seeded new game
            session (AsyncSession): AsyncSession object to interact with database

        Returns:
            GameSchema: The stored game
        """
        async with session:
            try:
                await session.execute(
                    update(Game)
                    .where(Game.owner_id == game.owner_id, Game.is_active.is_(True))
                    .values(is_active=False, version=Game.version + 1, updated_at=game.created_at)
                )
                new_game = Game(
                    id=game.id,
                    owner_id=game.owner_id,
                    version=game.version,
                    created_at=game.created_at,
                    updated_at=game.updated_at,
                    **_game_values(game),
                )
                session.add(new_game)
                session.add_all([_member_row(game.id, member) for member in filled_members(game)])
                await session.commit()
            except SQLAlchemyError as e:
                logging.error(f"Failed to create game data: {e}")
                raise PersistenceFailure("Failed to create game") from e
        return game


class ReadData:
    @staticmethod
    async def read_game(game_id: UUID, session: AsyncSession) -> GameSchema | None:
        """Read a game and its roster

        Args:
            game_id (UUID): To identify the game

        Returns:
            GameSchema | None: Game state, or None when the id is unknown
        """
        async with session:
            try:
                stmt = select(Game).options(selectinload(Game.members)).where(Game.id == game_id)
                result = await session.execute(stmt)
                result = result.scalars().first()

                if result is None:
                    return None

                return data_converter.convert_game_to_gameschema(result)
            except SQLAlchemyError as e:
                logging.error(f"Failed to read game data: {e}")
                raise PersistenceFailure("Failed to read game") from e

    @staticmethod
    async def read_active_game(owner_id: str, session: AsyncSession) -> GameSchema | None:
        """Read the owner's running game

        Args:
            owner_id (str): Player who owns the game

        Returns:
            GameSchema | None: Active game, or None when the owner has no running game
        """
        async with session:
            try:
                stmt = (
                    select(Game)
                    .options(selectinload(Game.members))
                    .where(Game.owner_id == owner_id, Game.is_active.is_(True))
                    .order_by(Game.created_at.desc())
                    .limit(1)
                )
                result = await session.execute(stmt)
                result = result.scalars().first()

                if result is None:
                    return None

                return data_converter.convert_game_to_gameschema(result)
            except SQLAlchemyError as e:
                logging.error(f"Failed to read active game data: {e}")
                raise PersistenceFailure("Failed to read active game") from e


class UpdateData:
    @staticmethod
    async def update_game(game: GameSchema, session: AsyncSession) -> GameSchema:
        """Write a resolved game state if nobody else wrote since it was read

        The write only applies when the stored version still equals
        ``game.version``; the version is then bumped by one. Member rows are
        rewritten in the same transaction.

        Args:
            game (GameSchema): New state, carrying the version it was read at
            session (AsyncSession): AsyncSession object to interact with database

        Raises:
            GameNotFound: The game does not exist
            StaleGameState: The game was written by another action after it was read
            PersistenceFailure: The database rejected the write

        Returns:
            GameSchema: The stored state with its new version
        """
        updated_at = datetime.now()
        async with session:
            try:
                stmt = (
                    update(Game)
                    .where(Game.id == game.id, Game.version == game.version)
                    .values(version=Game.version + 1, updated_at=updated_at, **_game_values(game))
                    .execution_options(synchronize_session=False)
                )
                result = await session.execute(stmt)

                if result.rowcount == 0:
                    await session.rollback()
                    exists = await session.scalar(select(Game.id).where(Game.id == game.id))
                    if exists is None:
                        raise GameNotFound(f"Game {game.id} not found")
                    logging.warning(f"Version conflict on game {game.id} at version {game.version}")
                    raise StaleGameState()

                await session.execute(
                    delete(BandMember)
                    .where(BandMember.game_id == game.id)
                    .execution_options(synchronize_session=False)
                )
                session.add_all([_member_row(game.id, member) for member in filled_members(game)])
                await session.commit()
            except GameError:
                raise
            except SQLAlchemyError as e:
                logging.error(f"Failed to update game data: {e}")
                raise PersistenceFailure("Failed to update game") from e
        return game.model_copy(update={"version": game.version + 1, "updated_at": updated_at})
