from decimal import Decimal

from pydantic import BaseModel, Field

from ..schemas import Position

# ---- Positions ----
GK = Position.GK
DEF = Position.DEF
MID = Position.MID
FWD = Position.FWD

POSITIONS: list[Position] = [GK, DEF, MID, FWD]

# Outfield positions shown in the formation label, in display order
OUTFIELD: list[Position] = [DEF, MID, FWD]

# ---- Fixed squad shape (6 starters + 3 bench) ----
STARTERS_TOTAL = 6
BENCH_SIZE = 3
SQUAD_SIZE = STARTERS_TOTAL + BENCH_SIZE
BENCH_GOALKEEPERS = 1
STARTER_GOALKEEPERS = 1
MAX_TOP_PLAYERS = 2

BUDGET = Decimal("70")

# Team name used when a squad is saved before a team exists
DEFAULT_TEAM_NAME = "My Squad"


class SquadRules(BaseModel):
    budget: Decimal = Field(BUDGET, description="Total price cap across starters + bench (inclusive).")
    starters_total: int = Field(STARTERS_TOTAL, description="Number of starters.")
    bench_size: int = Field(BENCH_SIZE, description="Number of bench players.")
    bench_goalkeepers: int = Field(BENCH_GOALKEEPERS, description="Goalkeepers required on a full bench.")
    starter_goalkeepers: int = Field(STARTER_GOALKEEPERS, description="Starters that must be assigned GK.")
    max_top_players: int = Field(MAX_TOP_PLAYERS, description="Top players allowed across the whole squad.")
    positions: list[Position] = Field(..., description="Positions every lineup must cover.")

    @property
    def squad_size(self) -> int:
        return self.starters_total + self.bench_size

    @classmethod
    def fixed(cls) -> "SquadRules":
        return cls(
            budget=BUDGET,
            starters_total=STARTERS_TOTAL,
            bench_size=BENCH_SIZE,
            bench_goalkeepers=BENCH_GOALKEEPERS,
            starter_goalkeepers=STARTER_GOALKEEPERS,
            max_top_players=MAX_TOP_PLAYERS,
            positions=POSITIONS.copy(),
        )


def get_fixed_rules() -> SquadRules:
    """Public accessor for the project-wide fixed squad rules."""
    return SquadRules.fixed()
