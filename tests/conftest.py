# tests/conftest.py
from decimal import Decimal
from typing import Optional

import pytest
from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse

from fantasy_squad.api import ApiClient
from fantasy_squad.auth import AuthSession
from fantasy_squad.config import Settings
from fantasy_squad.schemas import Player

# Shape of the catalog used across tests (id, name, position, secondary, top, price)
#   a valid 68.00 squad: starters g1 d1 d2 m1 m2 f2, bench g2 d3 f1
CATALOG_ROWS = [
    ("g1", "Gary Keeper", "GK", None, False, "8.00"),
    ("g2", "Gill Stopper", "GK", None, False, "5.00"),
    ("d1", "Dan Back", "DEF", None, False, "7.00"),
    ("d2", "Dave Wall", "DEF", None, False, "6.00"),
    ("d3", "Dual Def", "DEF", "MID", False, "7.00"),
    ("m1", "Mo Middle", "MID", None, True, "8.00"),
    ("m2", "Mike Link", "MID", None, False, "6.00"),
    ("f1", "Fred Striker", "FWD", None, True, "12.00"),
    ("f2", "Finn Goal", "FWD", None, False, "9.00"),
    ("f3", "Top Three", "FWD", "MID", True, "10.00"),
]


def _catalog_json() -> list[dict]:
    return [
        {
            "id": pid,
            "name": name,
            "position": pos,
            "secondary_position": sec,
            "is_top_player": top,
            "team_name": "Club " + pid.upper(),
            "photo_url": None,
            "price": price,
            "total_points": (i * 7) % 30,
        }
        for i, (pid, name, pos, sec, top, price) in enumerate(CATALOG_ROWS)
    ]


@pytest.fixture()
def catalog() -> dict[str, Player]:
    return {row["id"]: Player.model_validate(row) for row in _catalog_json()}


@pytest.fixture()
def make_player():
    counter = {"n": 0}

    def _make(
        position: str = "DEF",
        price: str = "5",
        secondary: Optional[str] = None,
        top: bool = False,
        name: Optional[str] = None,
        pid: Optional[str] = None,
    ) -> Player:
        counter["n"] += 1
        pid = pid or f"p{counter['n']}"
        return Player(
            id=pid,
            name=name or f"Player {pid}",
            position=position,
            secondary_position=secondary,
            is_top_player=top,
            team_name="Test FC",
            price=Decimal(price),
        )

    return _make


# ---------- Stub of the remote API ----------


def _err(status: int, msg: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": msg})


def build_stub_api(state: dict) -> FastAPI:
    app = FastAPI(title="Fantasy API stub")

    def _user_for(authorization: Optional[str]) -> Optional[dict]:
        if not authorization or not authorization.startswith("Bearer "):
            return None
        return state["tokens"].get(authorization[len("Bearer "):])

    def _player(pid: str) -> Optional[dict]:
        return next((p for p in state["players"] if p["id"] == pid), None)

    def _team_json(team: dict) -> dict:
        starters = [dict(_player(s["player_id"]), assigned_position=s["assigned_position"]) for s in team["starters"]]
        bench = [_player(pid) for pid in team["bench"]]
        return {
            "id": team["id"],
            "user_id": team["user_id"],
            "name": team["name"],
            "captain_id": team["captain_id"],
            "created_at": "2026-01-01T00:00:00Z",
            "players": starters,
            "bench": bench,
            "total_points": sum(p["total_points"] for p in starters),
        }

    @app.post("/api/auth/register")
    async def register(request: Request):
        body = await request.json()
        if any(u["email"] == body["email"] for u in state["users"].values()):
            return _err(409, "Email already registered")
        uid = f"u{len(state['users']) + 1}"
        user = {
            "id": uid,
            "username": body["username"],
            "full_name": body["full_name"],
            "email": body["email"],
            "created_at": "2026-01-01T00:00:00Z",
        }
        state["users"][uid] = dict(user, password=body["password"])
        token = f"tok-{uid}"
        state["tokens"][token] = uid
        return {"token": token, "user": user}

    @app.post("/api/auth/login")
    async def login(request: Request):
        body = await request.json()
        for uid, u in state["users"].items():
            if u["email"] == body["email"] and u["password"] == body["password"]:
                token = f"tok-{uid}"
                state["tokens"][token] = uid
                return {"token": token, "user": {k: v for k, v in u.items() if k != "password"}}
        return _err(401, "Invalid email or password")

    @app.get("/api/players")
    def list_players(position: Optional[str] = None, search: Optional[str] = None):
        rows = state["players"]
        if position:
            rows = [p for p in rows if p["position"] == position]
        if search:
            rows = [p for p in rows if search.lower() in p["name"].lower()]
        return rows

    @app.get("/api/players/{player_id}")
    def get_player(player_id: str):
        p = _player(player_id)
        return p if p else _err(404, "Player not found")

    @app.get("/api/teams/my")
    def my_team(authorization: Optional[str] = Header(default=None)):
        uid = _user_for(authorization)
        if uid is None:
            return _err(401, "Missing or invalid token")
        team = next((t for t in state["teams"].values() if t["user_id"] == uid), None)
        if team is None:
            return _err(404, "You don't have a fantasy team yet")
        return _team_json(team)

    @app.post("/api/teams")
    async def create_team(request: Request, authorization: Optional[str] = Header(default=None)):
        uid = _user_for(authorization)
        if uid is None:
            return _err(401, "Missing or invalid token")
        body = await request.json()
        tid = f"t{len(state['teams']) + 1}"
        state["teams"][tid] = {
            "id": tid,
            "user_id": uid,
            "name": body["name"],
            "captain_id": None,
            "starters": [],
            "bench": [],
        }
        return {"id": tid, "user_id": uid, "name": body["name"], "captain_id": None, "created_at": "2026-01-01T00:00:00Z"}

    @app.put("/api/teams/{team_id}/players")
    async def set_players(team_id: str, request: Request, authorization: Optional[str] = Header(default=None)):
        uid = _user_for(authorization)
        if uid is None:
            return _err(401, "Missing or invalid token")
        team = state["teams"].get(team_id)
        if team is None or team["user_id"] != uid:
            return _err(404, "Team not found or access denied")
        body = await request.json()
        state["put_bodies"].append(body)
        if state.get("reject_save"):
            return _err(400, state["reject_save"])
        if len(body["starters"]) != 6:
            return _err(400, "You must select exactly 6 starting players")
        if len(body["bench_player_ids"]) != 3:
            return _err(400, "You must select exactly 3 bench players")
        if body["captain_id"] not in [s["player_id"] for s in body["starters"]]:
            return _err(400, "Captain must be one of the 6 starting players")
        team["starters"] = body["starters"]
        team["bench"] = body["bench_player_ids"]
        team["captain_id"] = body["captain_id"]
        return _team_json(team)

    @app.post("/api/leagues")
    async def create_league(request: Request, authorization: Optional[str] = Header(default=None)):
        uid = _user_for(authorization)
        if uid is None:
            return _err(401, "Missing or invalid token")
        body = await request.json()
        lid = f"l{len(state['leagues']) + 1}"
        league = {"id": lid, "name": body["name"], "invite_code": f"CODE{lid.upper()}", "created_by": uid}
        state["leagues"][lid] = dict(league, members=[uid])
        return league

    @app.post("/api/leagues/join")
    async def join_league(request: Request, authorization: Optional[str] = Header(default=None)):
        uid = _user_for(authorization)
        if uid is None:
            return _err(401, "Missing or invalid token")
        body = await request.json()
        for lg in state["leagues"].values():
            if lg["invite_code"] == body["invite_code"]:
                if uid not in lg["members"]:
                    lg["members"].append(uid)
                return {k: v for k, v in lg.items() if k != "members"}
        return _err(404, "Invalid invite code")

    def _members(lg: dict) -> list[dict]:
        out = []
        for uid in lg["members"]:
            team = next((t for t in state["teams"].values() if t["user_id"] == uid), None)
            out.append(
                {
                    "user_id": uid,
                    "username": state["users"][uid]["username"],
                    "team_name": team["name"] if team else None,
                    "total_points": _team_json(team)["total_points"] if team else None,
                }
            )
        return out

    @app.get("/api/leagues/{league_id}")
    def get_league(league_id: str):
        lg = state["leagues"].get(league_id)
        if lg is None:
            return _err(404, "League not found")
        return {"league": {k: v for k, v in lg.items() if k != "members"}, "members": _members(lg)}

    @app.get("/api/leagues/{league_id}/leaderboard")
    def leaderboard(league_id: str):
        lg = state["leagues"].get(league_id)
        if lg is None:
            return _err(404, "League not found")
        return _members(lg)

    @app.get("/api/points/week/{week}")
    def week_points(week: int):
        return [r for r in state["points"] if r["week_number"] == week]

    @app.get("/api/points/player/{player_id}")
    def player_points(player_id: str):
        return [r for r in state["points"] if r["player_id"] == player_id]

    return app


@pytest.fixture()
def api_state() -> dict:
    return {
        "players": _catalog_json(),
        "users": {},
        "tokens": {},
        "teams": {},
        "leagues": {},
        "put_bodies": [],
        "points": [
            {"player_id": "f1", "player_name": "Fred Striker", "position": "FWD", "goals": 2, "assists": 0,
             "clean_sheets": 0, "saves": 0, "tackles": 1, "total_points": 11, "week_number": 1},
            {"player_id": "g1", "player_name": "Gary Keeper", "position": "GK", "goals": 0, "assists": 0,
             "clean_sheets": 1, "saves": 4, "tackles": 0, "total_points": 7, "week_number": 1},
            {"player_id": "f1", "player_name": "Fred Striker", "position": "FWD", "goals": 0, "assists": 1,
             "clean_sheets": 0, "saves": 0, "tackles": 0, "total_points": 3, "week_number": 2},
        ],
    }


@pytest.fixture()
def http(api_state):
    from starlette.testclient import TestClient

    with TestClient(build_stub_api(api_state)) as c:
        yield c


@pytest.fixture()
def api(http) -> ApiClient:
    settings = Settings(api_url="http://testserver", timeout=5)
    return ApiClient(settings=settings, http=http, auth=AuthSession())


@pytest.fixture()
def logged_in_api(api) -> ApiClient:
    api.register("pat", "Pat Owner", "pat@example.com", "secret")
    return api
