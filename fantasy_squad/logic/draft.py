# fantasy_squad/logic/draft.py
from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ..schemas import Player, Position
from .squad_rules import BUDGET, POSITIONS


class StarterAssignment(BaseModel):
    player: Player
    assigned_position: Position

    model_config = ConfigDict(frozen=True)

    @property
    def player_id(self) -> str:
        return self.player.id

    @property
    def is_flex(self) -> bool:
        """Playing the secondary rather than the primary position."""
        return self.assigned_position != self.player.position


class Draft(BaseModel):
    """
    The squad being edited. Immutable: every transition in `composer`
    returns a new Draft and leaves this one as it was.
    """

    starters: tuple[StarterAssignment, ...] = ()
    bench: tuple[Player, ...] = ()
    captain_id: Optional[str] = None

    # Saved team this draft was hydrated from (None until the first save)
    team_id: Optional[str] = None
    team_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls) -> "Draft":
        return cls()

    @property
    def starter_ids(self) -> List[str]:
        return [s.player.id for s in self.starters]

    @property
    def bench_ids(self) -> List[str]:
        return [p.id for p in self.bench]

    @property
    def players(self) -> List[Player]:
        """Starters followed by bench."""
        return [s.player for s in self.starters] + list(self.bench)

    def contains(self, player_id: str) -> bool:
        return player_id in self.starter_ids or player_id in self.bench_ids

    def find_starter(self, player_id: str) -> Optional[StarterAssignment]:
        for s in self.starters:
            if s.player.id == player_id:
                return s
        return None

    @property
    def captain(self) -> Optional[StarterAssignment]:
        if self.captain_id is None:
            return None
        return self.find_starter(self.captain_id)


# ---- Aggregations ----


def total_cost(draft: Draft) -> Decimal:
    return sum((p.price for p in draft.players), Decimal("0"))


def remaining_budget(draft: Draft) -> Decimal:
    return BUDGET - total_cost(draft)


def top_player_count(draft: Draft) -> int:
    return sum(1 for p in draft.players if p.is_top_player)


def bench_goalkeeper_count(draft: Draft) -> int:
    return sum(1 for p in draft.bench if p.is_goalkeeper)


def squad_size(draft: Draft) -> int:
    return len(draft.starters) + len(draft.bench)


def position_counts(draft: Draft) -> Dict[Position, int]:
    """Starters per assigned position; every position is present (zero if empty)."""
    out: Dict[Position, int] = {p: 0 for p in POSITIONS}
    for s in draft.starters:
        out[s.assigned_position] = out.get(s.assigned_position, 0) + 1
    return out
