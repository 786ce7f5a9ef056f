# fantasy_squad/schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# -----------------------
# Shared / Enums
# -----------------------
class Position(str, Enum):
    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"


# -----------------------
# Auth / Users
# -----------------------
class User(BaseModel):
    id: str
    username: str
    full_name: str
    email: str
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    token: str
    user: User


class RegisterIn(BaseModel):
    username: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class LoginIn(BaseModel):
    email: str
    password: str


# -----------------------
# Players (catalog reference data)
# -----------------------
class Player(BaseModel):
    id: str
    name: str
    position: Position
    secondary_position: Position | None = None
    is_top_player: bool = False
    team_name: str = ""
    photo_url: str | None = None
    # API sends decimals as strings ("12.50"); Decimal keeps budget math exact
    price: Decimal = Decimal("0")
    total_points: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def is_goalkeeper(self) -> bool:
        """Goalkeeper by primary position only."""
        return self.position == Position.GK

    def playable_positions(self) -> list[Position]:
        if self.secondary_position is None or self.secondary_position == self.position:
            return [self.position]
        return [self.position, self.secondary_position]


class StarterPlayer(Player):
    assigned_position: Position


# -----------------------
# Teams
# -----------------------
class FantasyTeam(BaseModel):
    id: str
    user_id: str | None = None
    name: str
    captain_id: str | None = None
    created_at: datetime | None = None
    # POST /api/teams echoes the bare team, so both lists may be absent
    players: list[StarterPlayer] = Field(default_factory=list)
    bench: list[Player] = Field(default_factory=list)
    total_points: int = 0


class CreateTeamIn(BaseModel):
    name: str = Field(..., min_length=1)


class StarterAssignmentIn(BaseModel):
    player_id: str
    assigned_position: Position

    model_config = ConfigDict(use_enum_values=True)


class SetPlayersIn(BaseModel):
    starters: list[StarterAssignmentIn]
    bench_player_ids: list[str]
    captain_id: str


# -----------------------
# Leagues
# -----------------------
class League(BaseModel):
    id: str
    name: str
    invite_code: str
    created_by: str | None = None
    created_at: datetime | None = None


class LeagueMember(BaseModel):
    user_id: str
    username: str
    team_name: str | None = None
    # server aggregates with SUM(), which is NULL for members without a team
    total_points: int | None = 0


class LeagueDetail(BaseModel):
    league: League
    members: list[LeagueMember]


class CreateLeagueIn(BaseModel):
    name: str = Field(..., min_length=1)


class JoinLeagueIn(BaseModel):
    invite_code: str = Field(..., min_length=1)


# -----------------------
# Points
# -----------------------
class PlayerPointsDisplay(BaseModel):
    player_id: str
    player_name: str
    position: str
    goals: int = 0
    assists: int = 0
    clean_sheets: int = 0
    saves: int = 0
    tackles: int = 0
    total_points: int = 0
    week_number: int


# -----------------------
# Leaderboard rows (client-side ranking)
# -----------------------
class RankedRow(BaseModel):
    rank: int
    id: str
    name: str
    team_name: str | None = None
    total_points: int
