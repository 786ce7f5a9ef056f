# fantasy_squad/services/catalog.py
from __future__ import annotations

from typing import Iterable, List

from ..logic.draft import Draft
from ..schemas import Player, Position

__all__ = ["filter_players", "available_players"]


def _matches_position(player: Player, position: Position | str | None) -> bool:
    if not position or str(position).upper() == "ALL":
        return True
    pos = Position(str(position).upper())
    return player.position == pos or player.secondary_position == pos


def _matches_search(player: Player, search: str | None) -> bool:
    needle = (search or "").strip().lower()
    if not needle:
        return True
    return needle in player.name.lower() or needle in player.team_name.lower()


def filter_players(
    players: Iterable[Player],
    position: Position | str | None = None,
    search: str | None = None,
) -> List[Player]:
    """
    Filter a catalog for display.
      - position: primary OR secondary position match; None/"ALL" keeps everyone
      - search: case-insensitive substring of player name or club name
    Catalog order is preserved.
    """
    return [p for p in players if _matches_position(p, position) and _matches_search(p, search)]


def available_players(players: Iterable[Player], draft: Draft) -> List[Player]:
    """Catalog entries not already in the draft (starters or bench)."""
    return [p for p in players if not draft.contains(p.id)]
