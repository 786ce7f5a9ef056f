# smoke.py — end-to-end run of the client against a live Fantasy API
import os
import uuid

from fantasy_squad.api import ApiClient
from fantasy_squad.config import configure_logging
from fantasy_squad.logic.errors import SquadRuleError
from fantasy_squad.logic.formation import formation_label, validate_for_save
from fantasy_squad.logic.draft import total_cost
from fantasy_squad.services.leaderboard import rank_members
from fantasy_squad.services.team_builder import TeamBuilder

configure_logging()

suffix = uuid.uuid4().hex[:6]
api = ApiClient()

print("=== 1) register ===")
auth = api.register(f"smoke_{suffix}", f"Smoke Tester {suffix}", f"smoke_{suffix}@example.com", "smoke-pass")
print("user", auth.user.id, auth.user.full_name)

print("=== 2) load catalog + team ===")
builder = TeamBuilder(api)
builder.load()
print("catalog", len(builder.catalog), "team", builder.team.id if builder.team else None)

print("=== 3) build squad (cheapest first) ===")
by_price = sorted(builder.catalog, key=lambda p: p.price)
c = builder.composer

# one starter per position, then cheapest fillers
for pos in ["GK", "DEF", "MID", "FWD"]:
    for p in by_price:
        if p.position.value != pos or builder.draft.contains(p.id):
            continue
        try:
            c.add_to_starters(p, pos)
            break
        except SquadRuleError as exc:
            print("skip", p.name, exc.code.value)

for p in by_price:
    if len(builder.draft.starters) >= 6:
        break
    if p.position.value == "GK" or builder.draft.contains(p.id):
        continue
    try:
        c.add_to_starters(p, p.position)
    except SquadRuleError as exc:
        print("skip", p.name, exc.code.value)

for p in by_price:
    if len(builder.draft.bench) >= 3:
        break
    if builder.draft.contains(p.id):
        continue
    try:
        c.add_to_bench(p)
    except SquadRuleError as exc:
        print("skip bench", p.name, exc.code.value)

for s in builder.draft.starters:
    if s.assigned_position.value != "GK":
        try:
            c.set_captain(s.player.id)
            break
        except SquadRuleError as exc:
            print("skip captain", s.player.name, exc.code.value)

print("formation", formation_label(builder.draft), "cost", total_cost(builder.draft))
ok, detail = validate_for_save(builder.draft, api.auth.full_name)
if not ok:
    raise SystemExit(f"squad not ready: {detail['explain']}")

print("=== 4) save ===")
team = builder.save()
print("team", team.id, "captain", team.captain_id, "points", team.total_points)

print("=== 5) league ===")
league = api.create_league(f"Smoke League {suffix}")
print("league", league.id, "invite", league.invite_code)
for row in rank_members(api.get_leaderboard(league.id)):
    print(row.rank, row.name, row.team_name, row.total_points)

print("✅ smoke OK against", os.getenv("FANTASY_API_URL", "http://localhost:8080"))
