"""
Tournament state codec: schedule, scores and side bets as plain JSON and as a
URL-safe token so a tournament can be shared as a link. No storage here.
"""
from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any

from social_badminton.models import (
    BetWinner,
    Game,
    Round,
    Schedule,
    SideBet,
    Team,
    TournamentFormat,
)

logger = logging.getLogger(__name__)

STAGES = ("input", "playing", "results")


@dataclass
class TournamentState:
    """Everything needed to resume a tournament."""
    stage: str
    format: TournamentFormat
    player_names: list[str]
    schedule: Schedule | None = None
    current_round: int = 0
    side_bets: list[SideBet] = field(default_factory=list)
    custom_teams: list[tuple[str, str]] | None = None


def _pair(value: Any, what: str) -> tuple[str, str]:
    if not isinstance(value, (list, tuple)) or len(value) != 2 or not all(isinstance(p, str) for p in value):
        raise ValueError(f"{what} must be two player names, got {value!r}")
    return value[0], value[1]


def _score(value: Any) -> int | None:
    # bool is an int subclass; true/false are not scores.
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Score must be a non-negative integer, got {value!r}")
    return value


def _amount(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValueError(f"Side bet amount must be a positive number, got {value!r}")
    return value


def game_from_dict(d: dict[str, Any]) -> Game:
    return Game(
        id=int(d["id"]),
        side1=_pair(d["side1"], "side1"),
        side2=_pair(d["side2"], "side2"),
        side1_score=_score(d.get("side1_score")),
        side2_score=_score(d.get("side2_score")),
    )


def schedule_from_dict(d: dict[str, Any]) -> Schedule:
    return Schedule(
        format=TournamentFormat(d["format"]),
        rounds=[
            Round(number=int(r["number"]), games=[game_from_dict(g) for g in r["games"]])
            for r in d["rounds"]
        ],
        teams=[Team.of(*t["players"]) for t in d.get("teams", [])],
    )


def side_bet_from_dict(d: dict[str, Any]) -> SideBet:
    winner = d.get("winner")
    return SideBet(
        id=int(d["id"]),
        side1=_pair(d["side1"], "side1"),
        side2=_pair(d["side2"], "side2"),
        amount=_amount(d["amount"]),
        winner=BetWinner(winner) if winner is not None else None,
    )


def state_to_dict(state: TournamentState) -> dict[str, Any]:
    d: dict[str, Any] = {
        "stage": state.stage,
        "format": state.format.value,
        "player_names": list(state.player_names),
        "rounds": state.schedule.to_dict()["rounds"] if state.schedule else [],
        "current_round": state.current_round,
        "side_bets": [b.to_dict() for b in state.side_bets],
    }
    if state.schedule is not None and state.schedule.teams:
        d["teams"] = [list(t.players) for t in state.schedule.teams]
    if state.custom_teams is not None:
        d["custom_teams"] = [list(t) for t in state.custom_teams]
    return d


def state_from_dict(d: dict[str, Any]) -> TournamentState:
    """
    Raises ValueError / KeyError / TypeError on malformed input, including
    scores that are not non-negative integers and non-numeric bet amounts.
    """
    if d.get("stage") not in STAGES:
        raise ValueError(f"Unknown stage: {d.get('stage')!r}")
    if not isinstance(d.get("player_names"), list) or not isinstance(d.get("rounds"), list):
        raise ValueError("player_names and rounds must be lists")
    if not isinstance(d.get("current_round"), int) or not isinstance(d.get("side_bets"), list):
        raise ValueError("current_round must be an int and side_bets a list")
    fmt = TournamentFormat(d["format"])
    schedule = None
    if d["rounds"]:
        schedule = schedule_from_dict({
            "format": fmt.value,
            "rounds": d["rounds"],
            "teams": [{"players": t} for t in d.get("teams", [])],
        })
    custom = d.get("custom_teams")
    return TournamentState(
        stage=d["stage"],
        format=fmt,
        player_names=list(d["player_names"]),
        schedule=schedule,
        current_round=d["current_round"],
        side_bets=[side_bet_from_dict(b) for b in d["side_bets"]],
        custom_teams=[(t[0], t[1]) for t in custom] if custom is not None else None,
    )


def serialize_state(state: TournamentState) -> str:
    raw = json.dumps(state_to_dict(state), separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def deserialize_state(token: str) -> TournamentState | None:
    """Decode a token from serialize_state. Returns None if it is not a valid state."""
    try:
        raw = base64.urlsafe_b64decode(token.encode("ascii"))
        return state_from_dict(json.loads(raw.decode("utf-8")))
    except (ValueError, KeyError, TypeError, IndexError, AttributeError) as exc:
        logger.warning("Failed to deserialize tournament state: %s", exc)
        return None
