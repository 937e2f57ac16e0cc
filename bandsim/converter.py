from typing import Any, Dict

from bandsim.domain.clock import day_of, format_game_time, hour_of
from bandsim.domain.roster import filled_members, member_key
from bandsim.errors import PersistenceFailure
from bandsim.models.dc_models import ActionResultModel, GameModel, GameSummaryModel, MemberModel
from bandsim.models.schema_models import MAIN_SLOT, MATE_SLOTS, GameSchema, MemberSchema
from bandsim.models.schemas import Game

# Top-level fields reported in an action's change patch.
PATCH_FIELDS = (
    "money",
    "mental",
    "fame",
    "time",
    "team_size",
    "team_power",
    "adventure_done_today",
    "is_active",
)


class DataConverter:
    """This class is used to convert game data between storage, engine and client formats."""

    def convert_game_to_gameschema(self, game: Game) -> GameSchema:
        """Build the engine state from a game row and its member rows

        Args:
            game (Game): Game row with its members loaded

        Raises:
            PersistenceFailure: The stored roster has no main character

        Returns:
            GameSchema: Game state with the roster laid out by slot
        """
        members = {row.slot: MemberSchema.model_validate(row) for row in game.members}
        if MAIN_SLOT not in members:
            raise PersistenceFailure(f"Game {game.id} has no main character row")
        return GameSchema(
            id=game.id,
            owner_id=game.owner_id,
            money=game.money,
            mental=game.mental,
            fame=game.fame,
            time=game.time,
            team_size=game.team_size,
            team_power=game.team_power,
            adventure_done_today=game.adventure_done_today,
            is_active=game.is_active,
            version=game.version,
            created_at=game.created_at,
            updated_at=game.updated_at,
            main=members[MAIN_SLOT],
            mates=[members.get(slot) for slot in MATE_SLOTS],
        )

    def convert_gameschema_to_gamemodel(self, game: GameSchema) -> GameModel:
        """Convert the GameSchema to the GameModel to send client"""
        return GameModel(
            id=game.id,
            owner_id=game.owner_id,
            money=game.money,
            mental=game.mental,
            fame=game.fame,
            time=game.time,
            day=day_of(game.time),
            hour=hour_of(game.time),
            time_label=format_game_time(game.time),
            team_size=game.team_size,
            team_power=game.team_power,
            adventure_done_today=game.adventure_done_today,
            is_active=game.is_active,
            version=game.version,
            members=[
                MemberModel(key=member_key(member.slot), **member.model_dump(exclude={"slot"}))
                for member in filled_members(game)
            ],
        )

    def diff_game(self, before: GameSchema, after: GameSchema) -> Dict[str, Any]:
        """Return the patch of fields that differ between two states.

        Roster changes are reported per member key; an emptied slot maps to None.
        """
        changes = {
            field: getattr(after, field)
            for field in PATCH_FIELDS
            if getattr(before, field) != getattr(after, field)
        }
        if before.main != after.main:
            changes[member_key(MAIN_SLOT)] = after.main.model_dump(exclude={"slot"})
        for slot in MATE_SLOTS:
            old, new = before.mates[slot - 1], after.mates[slot - 1]
            if old != new:
                changes[member_key(slot)] = None if new is None else new.model_dump(exclude={"slot"})
        return changes

    def convert_to_action_result(self, before: GameSchema, after: GameSchema, outcome: Dict[str, Any]) -> ActionResultModel:
        return ActionResultModel(
            game=self.convert_gameschema_to_gamemodel(after),
            changes=self.diff_game(before, after),
            outcome=outcome,
        )

    def convert_to_summary(self, game: GameSchema) -> GameSummaryModel:
        return GameSummaryModel(
            game_id=game.id,
            owner_id=game.owner_id,
            main_name=game.main.name,
            money=game.money,
            fame=game.fame,
            team_power=game.team_power,
            team_size=game.team_size,
            days_played=day_of(game.time) + 1,
        )
