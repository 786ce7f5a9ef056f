# fantasy_squad/services/team_builder.py
from __future__ import annotations

import logging
from typing import List, Optional

from ..api import ApiClient
from ..logic.composer import SquadComposer, draft_from_team
from ..logic.draft import Draft
from ..logic.squad_rules import DEFAULT_TEAM_NAME
from ..schemas import FantasyTeam, Player, Position
from .catalog import filter_players

logger = logging.getLogger("fantasy_squad.team_builder")


class TeamBuilder:
    """
    Glue between the API and the composer for one squad-editing session.

    load()  -> fetch catalog + stored team, hydrate the draft as-is
    save()  -> create the team on first save, replace its players, then
               rebuild the draft from the server echo
    """

    def __init__(self, api: ApiClient):
        self.api = api
        self.catalog: List[Player] = []
        self.team: Optional[FantasyTeam] = None
        self.composer = SquadComposer(user_full_name=api.auth.full_name)

    @property
    def draft(self) -> Draft:
        return self.composer.draft

    def load(self) -> Draft:
        self.api.auth.require_token()
        self.catalog = self.api.get_players()
        self.team = self.api.get_my_team()
        self.composer = SquadComposer(draft_from_team(self.team), self.api.auth.full_name)
        logger.info(
            "loaded catalog=%d team=%s starters=%d bench=%d",
            len(self.catalog),
            self.team.id if self.team else None,
            len(self.draft.starters),
            len(self.draft.bench),
        )
        return self.draft

    def visible_players(self, position: Position | str | None = None, search: str | None = None) -> List[Player]:
        return filter_players(self.catalog, position=position, search=search)

    def save(self) -> FantasyTeam:
        """
        Raises SaveNotReady before any network call when the draft is
        incomplete; ApiError from the server propagates unchanged.
        """
        body = self.composer.save_request()

        if self.team is None:
            self.team = self.api.create_team(DEFAULT_TEAM_NAME)
            logger.info("created team %s", self.team.id)

        updated = self.api.set_team_players(self.team.id, body)
        self.team = updated
        self.composer.reset(draft_from_team(updated))
        logger.info("saved team %s captain=%s", updated.id, updated.captain_id)
        return updated
