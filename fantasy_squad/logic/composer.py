# fantasy_squad/logic/composer.py
"""
Squad Composer: pure transitions over an immutable Draft.

Every function takes a Draft and returns a new one, or raises a
SquadRuleError subclass and leaves the input as it was. `SquadComposer`
at the bottom wraps them for callers that want to hold "the current draft".
"""
from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..schemas import FantasyTeam, Player, Position, SetPlayersIn, StarterAssignmentIn
from .draft import (
    Draft,
    StarterAssignment,
    bench_goalkeeper_count,
    remaining_budget,
    top_player_count,
    total_cost,
)
from .errors import (
    BenchFull,
    BenchGoalkeeperLimitExceeded,
    BenchNeedsGoalkeeper,
    BudgetExceeded,
    DuplicatePlayer,
    InvalidPosition,
    NotAStarter,
    PlayerNotFound,
    PositionChoiceRequired,
    SaveNotReady,
    SelfCaptaincyForbidden,
    SquadFull,
    SquadRuleError,
    TopPlayerLimitExceeded,
)
from .formation import names_match, validate_for_save
from .squad_rules import (
    BENCH_GOALKEEPERS,
    BENCH_SIZE,
    BUDGET,
    MAX_TOP_PLAYERS,
    STARTERS_TOTAL,
)

logger = logging.getLogger("fantasy_squad.composer")


class StarterProposal(BaseModel):
    """Result of the first phase of adding a starter."""

    player_id: str
    auto_assigned: Optional[Position] = None
    needs_choice: List[Position] = []

    model_config = ConfigDict(frozen=True)

    @property
    def is_automatic(self) -> bool:
        return self.auto_assigned is not None


def _reject(err: SquadRuleError) -> SquadRuleError:
    logger.debug("rejected %s %s", err.code.value, err.detail)
    return err


# ---- Shared admission checks (starters + bench use one pool) ----


def _check_not_duplicate(draft: Draft, player: Player) -> None:
    if draft.contains(player.id):
        where = "starters" if player.id in draft.starter_ids else "bench"
        raise _reject(DuplicatePlayer("Player already in your squad", {"player_id": player.id, "in": where}))


def _check_top_player(draft: Draft, player: Player) -> None:
    if not player.is_top_player:
        return
    current = top_player_count(draft)
    if current >= MAX_TOP_PLAYERS:
        raise _reject(
            TopPlayerLimitExceeded(
                f"Maximum {MAX_TOP_PLAYERS} top players allowed per team (starters + bench combined)",
                {"limit": MAX_TOP_PLAYERS, "current": current},
            )
        )


def _check_budget(draft: Draft, player: Player) -> None:
    new_cost = total_cost(draft) + player.price
    # equality with the budget is allowed
    if new_cost > BUDGET:
        remaining = remaining_budget(draft)
        raise _reject(
            BudgetExceeded(
                f"Adding {player.name} (${player.price}) would exceed the ${BUDGET} budget. "
                f"Remaining: ${remaining:.2f}",
                {
                    "price": str(player.price),
                    "remaining": str(remaining),
                    "over_by": str(new_cost - BUDGET),
                    "budget": str(BUDGET),
                },
            )
        )


# ---- Starters ----


def propose_add_starter(draft: Draft, player: Player) -> StarterProposal:
    """
    Phase one of adding a starter: run the admission checks, then either
    auto-assign the only playable position or ask the caller to choose.
    """
    _check_not_duplicate(draft, player)
    if len(draft.starters) >= STARTERS_TOTAL:
        raise _reject(
            SquadFull(
                f"Starting lineup is full ({STARTERS_TOTAL}/{STARTERS_TOTAL}). "
                "Add to the bench or remove a starter.",
                {"limit": STARTERS_TOTAL},
            )
        )
    _check_top_player(draft, player)
    _check_budget(draft, player)

    options = player.playable_positions()
    if len(options) == 1:
        return StarterProposal(player_id=player.id, auto_assigned=options[0])
    return StarterProposal(player_id=player.id, needs_choice=options)


def confirm_add_starter(draft: Draft, player: Player, position: Position | str) -> Draft:
    """Phase two: append the player as a starter at the chosen position."""
    propose_add_starter(draft, player)

    options = player.playable_positions()
    requested = position.value if isinstance(position, Position) else str(position)
    try:
        chosen = Position(position.strip().upper() if isinstance(position, str) else position)
    except ValueError:
        chosen = None
    if chosen not in options:
        raise _reject(
            InvalidPosition(
                f"{player.name} cannot play as {requested}. "
                f"Valid positions: {', '.join(p.value for p in options)}",
                {"player_id": player.id, "requested": requested, "valid": [p.value for p in options]},
            )
        )

    assignment = StarterAssignment(player=player, assigned_position=chosen)
    return draft.model_copy(update={"starters": draft.starters + (assignment,)})


def add_to_starters(draft: Draft, player: Player, position: Position | str | None = None) -> Draft:
    """
    One-call form of propose/confirm. Without an explicit `position`, a
    dual-position player raises PositionChoiceRequired listing the options.
    """
    proposal = propose_add_starter(draft, player)
    if position is None:
        if not proposal.is_automatic:
            raise _reject(
                PositionChoiceRequired(
                    f"Choose a position for {player.name}: "
                    f"{' or '.join(p.value for p in proposal.needs_choice)}",
                    {"player_id": player.id, "options": [p.value for p in proposal.needs_choice]},
                )
            )
        position = proposal.auto_assigned
    return confirm_add_starter(draft, player, position)


def remove_starter(draft: Draft, player_id: str) -> Draft:
    if draft.find_starter(player_id) is None:
        raise _reject(PlayerNotFound("Player is not in your starting lineup", {"player_id": player_id}))
    update = {"starters": tuple(s for s in draft.starters if s.player.id != player_id)}
    if draft.captain_id == player_id:
        update["captain_id"] = None
    return draft.model_copy(update=update)


# ---- Bench ----


def add_to_bench(draft: Draft, player: Player) -> Draft:
    _check_not_duplicate(draft, player)
    if len(draft.bench) >= BENCH_SIZE:
        raise _reject(
            BenchFull(
                f"Bench is full ({BENCH_SIZE}/{BENCH_SIZE}). Remove a bench player first.",
                {"limit": BENCH_SIZE},
            )
        )
    _check_top_player(draft, player)
    _check_budget(draft, player)

    gks = bench_goalkeeper_count(draft)
    open_slots = BENCH_SIZE - len(draft.bench)
    if not player.is_goalkeeper and gks < BENCH_GOALKEEPERS and open_slots <= BENCH_GOALKEEPERS - gks:
        raise _reject(
            BenchNeedsGoalkeeper(
                "Your last bench slot must be a GK. Bench requires exactly 1 goalkeeper.",
                {"bench_size": len(draft.bench), "goalkeepers": gks},
            )
        )
    if player.is_goalkeeper and gks >= BENCH_GOALKEEPERS:
        raise _reject(
            BenchGoalkeeperLimitExceeded(
                "Bench already has 1 GK. The other 2 bench slots must be DEF/MID/FWD.",
                {"goalkeepers": gks, "limit": BENCH_GOALKEEPERS},
            )
        )

    return draft.model_copy(update={"bench": draft.bench + (player,)})


def remove_bench(draft: Draft, player_id: str) -> Draft:
    if player_id not in draft.bench_ids:
        raise _reject(PlayerNotFound("Player is not on your bench", {"player_id": player_id}))
    return draft.model_copy(update={"bench": tuple(p for p in draft.bench if p.id != player_id)})


# ---- Captaincy ----


def set_captain(draft: Draft, player_id: str, user_full_name: str | None = None) -> Draft:
    starter = draft.find_starter(player_id)
    if starter is None:
        raise _reject(
            NotAStarter(
                f"Captain must be one of the {STARTERS_TOTAL} starting players",
                {"player_id": player_id},
            )
        )
    if names_match(starter.player.name, user_full_name):
        raise _reject(
            SelfCaptaincyForbidden(
                f"You cannot captain {starter.player.name} because they share your name. "
                "Choose a different captain.",
                {"player_id": player_id},
            )
        )
    return draft.model_copy(update={"captain_id": player_id})


def clear_captain(draft: Draft) -> Draft:
    return draft.model_copy(update={"captain_id": None})


# ---- Server boundary ----


def draft_from_team(team: FantasyTeam | None) -> Draft:
    """
    Hydrate a draft from a stored team exactly as the server returned it.
    No rules are enforced here; a legacy team simply is not save-ready.
    """
    if team is None:
        return Draft.empty()
    starters = tuple(
        StarterAssignment(
            player=Player.model_validate(sp.model_dump(exclude={"assigned_position"})),
            assigned_position=sp.assigned_position,
        )
        for sp in team.players
    )
    return Draft(
        starters=starters,
        bench=tuple(team.bench),
        captain_id=team.captain_id,
        team_id=team.id,
        team_name=team.name,
    )


def to_set_players_request(draft: Draft, user_full_name: str | None = None) -> SetPlayersIn:
    ok, detail = validate_for_save(draft, user_full_name)
    if not ok:
        raise _reject(SaveNotReady("Your squad is not ready to save", detail))
    return SetPlayersIn(
        starters=[
            StarterAssignmentIn(player_id=s.player.id, assigned_position=s.assigned_position)
            for s in draft.starters
        ],
        bench_player_ids=draft.bench_ids,
        captain_id=draft.captain_id,
    )


# ---- Stateful wrapper ----


class SquadComposer:
    """
    Holds the current Draft for one editing session. Methods delegate to the
    pure transitions and only replace `draft` when the transition succeeds.
    """

    def __init__(self, draft: Draft | None = None, user_full_name: str | None = None):
        self.draft = draft or Draft.empty()
        self.user_full_name = user_full_name

    def reset(self, draft: Draft | None = None) -> Draft:
        self.draft = draft or Draft.empty()
        return self.draft

    def propose_add_starter(self, player: Player) -> StarterProposal:
        return propose_add_starter(self.draft, player)

    def confirm_add_starter(self, player: Player, position: Position | str) -> Draft:
        self.draft = confirm_add_starter(self.draft, player, position)
        return self.draft

    def add_to_starters(self, player: Player, position: Position | str | None = None) -> Draft:
        self.draft = add_to_starters(self.draft, player, position)
        return self.draft

    def add_to_bench(self, player: Player) -> Draft:
        self.draft = add_to_bench(self.draft, player)
        return self.draft

    def remove_starter(self, player_id: str) -> Draft:
        self.draft = remove_starter(self.draft, player_id)
        return self.draft

    def remove_bench(self, player_id: str) -> Draft:
        self.draft = remove_bench(self.draft, player_id)
        return self.draft

    def set_captain(self, player_id: str) -> Draft:
        self.draft = set_captain(self.draft, player_id, self.user_full_name)
        return self.draft

    def clear_captain(self) -> Draft:
        self.draft = clear_captain(self.draft)
        return self.draft

    def save_request(self) -> SetPlayersIn:
        return to_set_players_request(self.draft, self.user_full_name)
