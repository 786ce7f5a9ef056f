# fantasy_squad/api.py
"""
Thin client for the fantasy REST API.

Any object with a requests-style `.request(method, url, json=, params=,
headers=, timeout=)` works as the HTTP session: a `requests.Session` in
normal runs, a Starlette `TestClient` in tests.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, List, Optional

import requests

from .auth import AuthSession
from .config import Settings, get_settings
from .schemas import (
    AuthResponse,
    CreateLeagueIn,
    CreateTeamIn,
    FantasyTeam,
    JoinLeagueIn,
    League,
    LeagueDetail,
    LeagueMember,
    LoginIn,
    Player,
    PlayerPointsDisplay,
    Position,
    RegisterIn,
    SetPlayersIn,
)

logger = logging.getLogger("fantasy_squad.api")


class ApiError(Exception):
    """Non-2xx response (or transport failure, status 0) from the API."""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _error_message(res) -> tuple[str, Any]:
    try:
        payload = res.json()
    except ValueError:
        payload = {"error": "Unknown error"}
    msg = payload.get("error") if isinstance(payload, dict) else None
    return msg or f"Request failed with status {res.status_code}", payload


class ApiClient:
    def __init__(
        self,
        settings: Settings | None = None,
        http: Any = None,
        auth: AuthSession | None = None,
    ):
        self.settings = settings or get_settings()
        self.base_url = self.settings.api_url.rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.auth = auth or AuthSession()

    # ---------- Core ----------

    def _request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        params: Optional[dict] = None,
        auth_required: bool = False,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self.auth.require_token() if auth_required else self.auth.token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        start = time.perf_counter()
        try:
            res = self.http.request(
                method,
                f"{self.base_url}{endpoint}",
                json=body,
                params=params or None,
                headers=headers,
                timeout=self.settings.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("request failed: %s %s (%s)", method, endpoint, exc)
            raise ApiError(0, str(exc)) from exc

        duration_ms = (time.perf_counter() - start) * 1000.0
        log_obj = {
            "msg": "request",
            "method": method,
            "path": endpoint,
            "status": res.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        logger.info(json.dumps(log_obj, separators=(",", ":")))

        if res.status_code >= 400:
            message, payload = _error_message(res)
            raise ApiError(res.status_code, message, payload)
        return res.json()

    # ---------- Auth ----------

    def register(self, username: str, full_name: str, email: str, password: str) -> AuthResponse:
        body = RegisterIn(username=username, full_name=full_name, email=email, password=password)
        data = AuthResponse.model_validate(self._request("POST", "/api/auth/register", body.model_dump()))
        self.auth.save(data)
        return data

    def login(self, email: str, password: str) -> AuthResponse:
        body = LoginIn(email=email, password=password)
        data = AuthResponse.model_validate(self._request("POST", "/api/auth/login", body.model_dump()))
        self.auth.save(data)
        return data

    def logout(self) -> None:
        self.auth.clear()

    # ---------- Players ----------

    def get_players(self, position: Position | str | None = None, search: str | None = None) -> List[Player]:
        params: dict[str, str] = {}
        if position:
            params["position"] = Position(position).value
        if search:
            params["search"] = search
        rows = self._request("GET", "/api/players", params=params)
        return [Player.model_validate(r) for r in rows]

    def get_player(self, player_id: str) -> Player:
        return Player.model_validate(self._request("GET", f"/api/players/{player_id}"))

    # ---------- Teams ----------

    def create_team(self, name: str) -> FantasyTeam:
        body = CreateTeamIn(name=name)
        return FantasyTeam.model_validate(self._request("POST", "/api/teams", body.model_dump(), auth_required=True))

    def get_my_team(self) -> FantasyTeam | None:
        """The user's team, or None when they have not created one yet."""
        try:
            data = self._request("GET", "/api/teams/my", auth_required=True)
        except ApiError as exc:
            if exc.is_not_found:
                return None
            raise
        return FantasyTeam.model_validate(data)

    def set_team_players(self, team_id: str, body: SetPlayersIn) -> FantasyTeam:
        data = self._request(
            "PUT",
            f"/api/teams/{team_id}/players",
            body.model_dump(mode="json"),
            auth_required=True,
        )
        return FantasyTeam.model_validate(data)

    # ---------- Leagues ----------

    def create_league(self, name: str) -> League:
        body = CreateLeagueIn(name=name)
        return League.model_validate(self._request("POST", "/api/leagues", body.model_dump(), auth_required=True))

    def join_league(self, invite_code: str) -> League:
        body = JoinLeagueIn(invite_code=invite_code.strip().upper())
        return League.model_validate(
            self._request("POST", "/api/leagues/join", body.model_dump(), auth_required=True)
        )

    def get_league(self, league_id: str) -> LeagueDetail:
        return LeagueDetail.model_validate(self._request("GET", f"/api/leagues/{league_id}"))

    def get_leaderboard(self, league_id: str) -> List[LeagueMember]:
        rows = self._request("GET", f"/api/leagues/{league_id}/leaderboard")
        return [LeagueMember.model_validate(r) for r in rows]

    # ---------- Points ----------

    def get_week_points(self, week: int) -> List[PlayerPointsDisplay]:
        rows = self._request("GET", f"/api/points/week/{week}")
        return [PlayerPointsDisplay.model_validate(r) for r in rows]

    def get_player_points(self, player_id: str) -> List[PlayerPointsDisplay]:
        rows = self._request("GET", f"/api/points/player/{player_id}")
        return [PlayerPointsDisplay.model_validate(r) for r in rows]
