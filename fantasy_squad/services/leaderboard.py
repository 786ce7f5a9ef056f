# fantasy_squad/services/leaderboard.py
from __future__ import annotations

from typing import Iterable, List

from ..schemas import LeagueMember, Player, RankedRow


def _points(value: int | None) -> int:
    return int(value) if value is not None else 0


def rank_members(members: Iterable[LeagueMember]) -> List[RankedRow]:
    """League standings: points desc, ties keep server order and share a rank."""
    ordered = sorted(members, key=lambda m: _points(m.total_points), reverse=True)
    out: List[RankedRow] = []
    for i, m in enumerate(ordered):
        pts = _points(m.total_points)
        rank = out[-1].rank if out and out[-1].total_points == pts else i + 1
        out.append(RankedRow(rank=rank, id=m.user_id, name=m.username, team_name=m.team_name, total_points=pts))
    return out


def rank_players(players: Iterable[Player]) -> List[RankedRow]:
    """Player leaderboard by accumulated points."""
    ordered = sorted(players, key=lambda p: p.total_points, reverse=True)
    out: List[RankedRow] = []
    for i, p in enumerate(ordered):
        rank = out[-1].rank if out and out[-1].total_points == p.total_points else i + 1
        out.append(RankedRow(rank=rank, id=p.id, name=p.name, team_name=p.team_name, total_points=p.total_points))
    return out
