"""
API integration tests.
Uses TestClient to avoid starting a server.
Requires: pip install httpx (for TestClient)
"""
from __future__ import annotations

import base64
import json

import pytest

try:
    from fastapi.testclient import TestClient
    HAS_HTTPX = True
except (ImportError, RuntimeError):
    HAS_HTTPX = False

pytestmark = pytest.mark.skipif(not HAS_HTTPX, reason="httpx required for TestClient")

from social_badminton import api
from social_badminton.api import app

EIGHT = ["Alice", "Bob", "Charlie", "David", "Eve", "Frank", "Grace", "Henry"]
TWELVE = EIGHT + ["Ivy", "Jack", "Kate", "Liam"]


@pytest.fixture(autouse=True)
def empty_registry():
    """Each test starts with no tournaments."""
    api._tournaments.clear()
    yield
    api._tournaments.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def eight(client):
    resp = client.post("/tournaments", json={"players": EIGHT, "seed": 1})
    assert resp.status_code == 200
    return resp.json()


def _score_all(client, tournament: dict) -> None:
    for rnd in tournament["schedule"]["rounds"]:
        for g in rnd["games"]:
            resp = client.put(
                f"/tournaments/{tournament['id']}/games/{g['id']}/score",
                json={"side1_score": 21, "side2_score": 10 + g["id"] % 9},
            )
            assert resp.status_code == 200


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_eight_player(eight):
    assert eight["format"] == "8-player"
    assert eight["stage"] == "playing"
    rounds = eight["schedule"]["rounds"]
    assert len(rounds) == 7
    assert all(len(r["games"]) == 2 for r in rounds)
    assert "teams" not in eight["schedule"]


def test_create_seeded_is_reproducible(client, eight):
    again = client.post("/tournaments", json={"players": EIGHT, "seed": 1}).json()
    assert again["schedule"] == eight["schedule"]
    assert again["id"] != eight["id"]


def test_create_wrong_count(client):
    resp = client.post("/tournaments", json={"players": EIGHT[:5]})
    assert resp.status_code == 400
    assert "exactly 8" in resp.json()["detail"]


def test_create_duplicate_names(client):
    resp = client.post("/tournaments", json={"players": EIGHT[:7] + ["Alice"]})
    assert resp.status_code == 400
    assert "Duplicate" in resp.json()["detail"]


def test_create_twelve_player_custom_teams(client):
    teams = [[TWELVE[2 * i], TWELVE[2 * i + 1]] for i in range(6)]
    resp = client.post(
        "/tournaments",
        json={"format": "12-player", "players": TWELVE, "custom_teams": teams},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["schedule"]["rounds"]) == 5
    assert [t["players"] for t in data["schedule"]["teams"]] == teams


def test_create_twelve_player_bad_partition(client):
    teams = [[TWELVE[2 * i], TWELVE[2 * i + 1]] for i in range(5)]
    resp = client.post(
        "/tournaments",
        json={"format": "12-player", "players": TWELVE, "custom_teams": teams},
    )
    assert resp.status_code == 400
    assert "6 teams" in resp.json()["detail"]


def test_unknown_tournament(client):
    assert client.get("/tournaments/nope").status_code == 404
    assert client.get("/tournaments/nope/payouts").status_code == 404


def test_record_score_and_standings(client, eight):
    tid = eight["id"]
    game = eight["schedule"]["rounds"][0]["games"][0]
    resp = client.put(f"/tournaments/{tid}/games/{game['id']}/score", json={"side1_score": 21, "side2_score": 15})
    assert resp.status_code == 200
    assert resp.json()["side2_score"] == 15
    standings = client.get(f"/tournaments/{tid}/standings").json()
    players = standings["players"]
    assert len(players) == 4
    assert players[0]["points_lost"] == 0
    assert players[0]["player"] in game["side1"]
    assert players[-1]["points_lost"] == 6


def test_record_score_validation(client, eight):
    tid = eight["id"]
    resp = client.put(f"/tournaments/{tid}/games/1/score", json={"side1_score": -1, "side2_score": 21})
    assert resp.status_code == 422
    resp = client.put(f"/tournaments/{tid}/games/99/score", json={"side1_score": 21, "side2_score": 3})
    assert resp.status_code == 404


def test_clear_score(client, eight):
    tid = eight["id"]
    client.put(f"/tournaments/{tid}/games/1/score", json={"side1_score": 21, "side2_score": 3})
    resp = client.delete(f"/tournaments/{tid}/games/1/score")
    assert resp.status_code == 200
    assert "side1_score" not in resp.json()
    assert client.get(f"/tournaments/{tid}/standings").json()["players"] == []


def test_full_payouts_net_to_zero(client, eight):
    _score_all(client, eight)
    data = client.get(f"/tournaments/{eight['id']}/payouts").json()
    assert data["total_collected"] == 16
    assert data["total_prizes"] == 16
    assert len(data["rows"]) == 8
    assert [r["prize"] for r in data["rows"][:4]] == [8, 6, 2, 0]
    assert sum(r["net"] for r in data["rows"]) == 0


def test_twelve_player_standings_and_payouts(client):
    data = client.post("/tournaments", json={"format": "12-player", "players": TWELVE, "seed": 3}).json()
    _score_all(client, data)
    standings = client.get(f"/tournaments/{data['id']}/standings").json()
    assert len(standings["teams"]) == 6
    wins = [t["wins"] for t in standings["teams"]]
    assert wins == sorted(wins, reverse=True)
    payouts = client.get(f"/tournaments/{data['id']}/payouts").json()
    assert len(payouts["rows"]) == 12
    assert sum(r["net"] for r in payouts["rows"]) == 0


def test_side_bet_flow(client, eight):
    tid = eight["id"]
    resp = client.post(
        f"/tournaments/{tid}/side-bets",
        json={"side1": ["Alice", "Bob"], "side2": ["Charlie", "David"], "amount": 5},
    )
    assert resp.status_code == 200
    bet = resp.json()
    assert bet["id"] == 1
    assert bet["winner"] is None

    rows = {r["player"]: r for r in client.get(f"/tournaments/{tid}/payouts").json()["rows"]}
    assert rows == {}

    resp = client.put(f"/tournaments/{tid}/side-bets/1", json={"winner": 1})
    assert resp.json()["winner"] == 1
    rows = {r["player"]: r for r in client.get(f"/tournaments/{tid}/payouts").json()["rows"]}
    assert rows["Alice"]["side_bets"] == 5
    assert rows["David"]["net"] == -5

    assert client.delete(f"/tournaments/{tid}/side-bets/1").status_code == 200
    assert client.get(f"/tournaments/{tid}").json()["side_bets"] == []
    assert client.delete(f"/tournaments/{tid}/side-bets/1").status_code == 404


def test_side_bet_validation(client, eight):
    tid = eight["id"]
    resp = client.post(
        f"/tournaments/{tid}/side-bets",
        json={"side1": ["Alice", "Bob"], "side2": ["Alice", "David"], "amount": 5},
    )
    assert resp.status_code == 400
    resp = client.post(
        f"/tournaments/{tid}/side-bets",
        json={"side1": ["Alice", "Bob"], "side2": ["Charlie", "David"], "amount": 0},
    )
    assert resp.status_code == 422


def test_side_bet_players_must_be_on_roster(client, eight):
    tid = eight["id"]
    resp = client.post(
        f"/tournaments/{tid}/side-bets",
        json={"side1": ["Alice", "Bob"], "side2": ["Charlie", "Zed"], "amount": 5},
    )
    assert resp.status_code == 400
    assert "Zed" in resp.json()["detail"]
    assert client.get(f"/tournaments/{tid}").json()["side_bets"] == []


def test_update_stage_and_round(client, eight):
    tid = eight["id"]
    resp = client.patch(f"/tournaments/{tid}", json={"current_round": 3})
    assert resp.json()["current_round"] == 3
    assert client.patch(f"/tournaments/{tid}", json={"current_round": 7}).status_code == 400
    assert client.patch(f"/tournaments/{tid}", json={"stage": "results"}).json()["stage"] == "results"
    assert client.patch(f"/tournaments/{tid}", json={"stage": "bogus"}).status_code == 400


def test_export_and_import_state(client, eight):
    tid = eight["id"]
    client.put(f"/tournaments/{tid}/games/1/score", json={"side1_score": 21, "side2_score": 9})
    token = client.get(f"/tournaments/{tid}/state").json()["state"]
    resp = client.post("/tournaments/import", json={"state": token})
    assert resp.status_code == 200
    imported = resp.json()
    assert imported["id"] != tid
    assert imported["schedule"] == client.get(f"/tournaments/{tid}").json()["schedule"]


def test_import_invalid_state(client):
    resp = client.post("/tournaments/import", json={"state": "garbage"})
    assert resp.status_code == 400


@pytest.mark.parametrize("bad_score", ["21", -50])
def test_import_rejects_bad_scores(client, eight, bad_score):
    token = client.get(f"/tournaments/{eight['id']}/state").json()["state"]
    d = json.loads(base64.urlsafe_b64decode(token))
    d["rounds"][0]["games"][0]["side1_score"] = bad_score
    d["rounds"][0]["games"][0]["side2_score"] = 15
    tampered = base64.urlsafe_b64encode(json.dumps(d).encode()).decode()
    resp = client.post("/tournaments/import", json={"state": tampered})
    assert resp.status_code == 400
    assert len(api._tournaments) == 1


def test_delete_tournament(client, eight):
    assert client.delete(f"/tournaments/{eight['id']}").status_code == 200
    assert client.get(f"/tournaments/{eight['id']}").status_code == 404
