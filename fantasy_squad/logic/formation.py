# fantasy_squad/logic/formation.py
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..schemas import Position
from .draft import (
    Draft,
    bench_goalkeeper_count,
    position_counts,
    total_cost,
)
from .squad_rules import (
    BENCH_GOALKEEPERS,
    BENCH_SIZE,
    BUDGET,
    GK,
    OUTFIELD,
    POSITIONS,
    STARTER_GOALKEEPERS,
    STARTERS_TOTAL,
)


def names_match(a: str | None, b: str | None) -> bool:
    """Case-insensitive, whitespace-trimmed name comparison."""
    if not a or not b:
        return False
    return a.strip().casefold() == b.strip().casefold()


def formation_label(draft: Draft) -> Optional[str]:
    """
    Starters per outfield position rendered as "D-M-F" (e.g. "2-2-1").
    GK is implicit. Returns None while there are no starters.
    """
    if not draft.starters:
        return None
    counts = position_counts(draft)
    return "-".join(str(counts[p]) for p in OUTFIELD)


def missing_positions(draft: Draft) -> List[Position]:
    counts = position_counts(draft)
    return [p for p in POSITIONS if counts[p] == 0]


def validate_for_save(draft: Draft, user_full_name: str | None = None) -> Tuple[bool, Dict]:
    """
    Checks a draft against every save requirement.
    Returns: (ok, detail) where detail["explain"] names each unmet requirement.

    Drafts built through the composer can only fail on completeness; drafts
    hydrated from a stored team may also fail on budget or captaincy.
    """
    counts = position_counts(draft)
    cost = total_cost(draft)
    detail: Dict = {
        "counts": {p.value: n for p, n in counts.items()},
        "formation": formation_label(draft),
        "total_cost": str(cost),
        "explain": {},
    }
    explain = detail["explain"]

    if len(draft.starters) != STARTERS_TOTAL:
        explain["wrong_starter_count"] = {"need": STARTERS_TOTAL, "got": len(draft.starters)}

    if len(draft.bench) != BENCH_SIZE:
        explain["wrong_bench_count"] = {"need": BENCH_SIZE, "got": len(draft.bench)}

    bench_gks = bench_goalkeeper_count(draft)
    if bench_gks != BENCH_GOALKEEPERS:
        explain["bench_goalkeepers"] = {"need": BENCH_GOALKEEPERS, "got": bench_gks}

    missing = missing_positions(draft)
    if missing:
        explain["missing_positions"] = [p.value for p in missing]

    if counts[GK] != STARTER_GOALKEEPERS:
        explain["starter_goalkeepers"] = {"need": STARTER_GOALKEEPERS, "got": counts[GK]}

    if draft.captain_id is None:
        explain["captain_missing"] = True
    elif draft.captain is None:
        explain["captain_not_a_starter"] = {"captain_id": draft.captain_id}
    elif names_match(draft.captain.player.name, user_full_name):
        explain["self_captaincy"] = {"captain_id": draft.captain_id}

    if cost > BUDGET:
        explain["over_budget"] = {"budget": str(BUDGET), "total": str(cost), "over_by": str(cost - BUDGET)}

    return not explain, detail


def is_save_ready(draft: Draft) -> bool:
    ok, _ = validate_for_save(draft)
    return ok
