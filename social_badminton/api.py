"""
REST API for social doubles tournaments.
Thin wrappers around scheduling, scoring and payouts. Tournaments live in
memory for the life of the process; share one via its state token.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from social_badminton import config
from social_badminton.models import GameNotFound, SideBet, TournamentFormat
from social_badminton.payouts import summarize_payouts
from social_badminton.rng import SeededRNG
from social_badminton.scoring import (
    compute_player_statistics,
    compute_team_statistics,
    rank_players,
)
from social_badminton.services.scheduling import (
    DuplicatePlayerName,
    InvalidPlayerCount,
    InvalidTeamPartition,
    generate_schedule,
    validate_custom_teams,
    validate_player_names,
)
from social_badminton.state import (
    STAGES,
    TournamentState,
    deserialize_state,
    serialize_state,
)

logger = logging.getLogger(__name__)


# ---------- FastAPI app ----------
app = FastAPI(
    title="Social Badminton API",
    description="Doubles round-robin schedules, standings and payouts",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# tournament id -> state
_tournaments: dict[str, TournamentState] = {}


# ---------- Request models ----------


class CreateTournamentRequest(BaseModel):
    format: TournamentFormat = TournamentFormat.EIGHT_PLAYER
    players: list[str]
    custom_teams: list[tuple[str, str]] | None = Field(
        None, description="12-player only: 6 disjoint pairs covering every player"
    )
    seed: int | None = Field(None, description="RNG seed for a reproducible draw")


class UpdateTournamentRequest(BaseModel):
    stage: str | None = None
    current_round: int | None = Field(None, ge=0)


class RecordScoreRequest(BaseModel):
    side1_score: int = Field(..., ge=0)
    side2_score: int = Field(..., ge=0)


class CreateSideBetRequest(BaseModel):
    side1: tuple[str, str]
    side2: tuple[str, str]
    amount: float = Field(..., gt=0)


class SettleSideBetRequest(BaseModel):
    winner: int | None = Field(None, ge=1, le=2, description="1, 2, or null to unsettle")


class ImportStateRequest(BaseModel):
    state: str = Field(..., min_length=1)


# ---------- Helpers ----------


def _get_state(tournament_id: str) -> TournamentState:
    state = _tournaments.get(tournament_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Tournament not found")
    return state


def _find_bet(state: TournamentState, bet_id: int) -> SideBet:
    for bet in state.side_bets:
        if bet.id == bet_id:
            return bet
    raise HTTPException(status_code=404, detail=f"Side bet not found: {bet_id}")


def _tournament_payload(tournament_id: str, state: TournamentState) -> dict[str, Any]:
    return {
        "id": tournament_id,
        "stage": state.stage,
        "format": state.format.value,
        "player_names": list(state.player_names),
        "current_round": state.current_round,
        "schedule": state.schedule.to_dict() if state.schedule else None,
        "side_bets": [b.to_dict() for b in state.side_bets],
    }


# ---------- Endpoints ----------


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/tournaments")
def create_tournament(req: CreateTournamentRequest) -> dict[str, Any]:
    """Validate names (and custom teams), then generate the schedule."""
    try:
        players = validate_player_names(req.players, req.format.player_count)
        custom = None
        if req.format is TournamentFormat.TWELVE_PLAYER and req.custom_teams:
            custom = [(a.strip(), b.strip()) for a, b in req.custom_teams]
            validate_custom_teams(players, custom)
        schedule = generate_schedule(req.format, players, custom_teams=custom, rng=SeededRNG(req.seed))
    except (InvalidPlayerCount, DuplicatePlayerName, InvalidTeamPartition) as e:
        raise HTTPException(status_code=400, detail=str(e))
    tournament_id = str(uuid.uuid4())
    state = TournamentState(
        stage="playing",
        format=req.format,
        player_names=players,
        schedule=schedule,
        custom_teams=custom,
    )
    _tournaments[tournament_id] = state
    logger.info("Created %s tournament %s", req.format.value, tournament_id)
    return _tournament_payload(tournament_id, state)


@app.get("/tournaments/{tournament_id}")
def get_tournament(tournament_id: str) -> dict[str, Any]:
    return _tournament_payload(tournament_id, _get_state(tournament_id))


@app.patch("/tournaments/{tournament_id}")
def update_tournament(tournament_id: str, req: UpdateTournamentRequest) -> dict[str, Any]:
    """Move between rounds or stages (playing -> results)."""
    state = _get_state(tournament_id)
    if req.stage is not None:
        if req.stage not in STAGES:
            raise HTTPException(status_code=400, detail=f"stage must be one of {', '.join(STAGES)}")
        state.stage = req.stage
    if req.current_round is not None:
        n_rounds = len(state.schedule.rounds) if state.schedule else 0
        if req.current_round >= n_rounds:
            raise HTTPException(status_code=400, detail=f"current_round must be below {n_rounds}")
        state.current_round = req.current_round
    return _tournament_payload(tournament_id, state)


@app.delete("/tournaments/{tournament_id}")
def delete_tournament(tournament_id: str) -> dict[str, Any]:
    _get_state(tournament_id)
    del _tournaments[tournament_id]
    return {"id": tournament_id, "deleted": True}


@app.put("/tournaments/{tournament_id}/games/{game_id}/score")
def record_score(tournament_id: str, game_id: int, req: RecordScoreRequest) -> dict[str, Any]:
    state = _get_state(tournament_id)
    try:
        game = state.schedule.record_score(game_id, req.side1_score, req.side2_score)
    except GameNotFound:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")
    return game.to_dict()


@app.delete("/tournaments/{tournament_id}/games/{game_id}/score")
def clear_score(tournament_id: str, game_id: int) -> dict[str, Any]:
    state = _get_state(tournament_id)
    try:
        game = state.schedule.clear_score(game_id)
    except GameNotFound:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")
    return game.to_dict()


@app.get("/tournaments/{tournament_id}/standings")
def get_standings(tournament_id: str) -> dict[str, Any]:
    """Players ranked by points lost (8-player) or teams by wins then differential (12-player)."""
    state = _get_state(tournament_id)
    if state.format is TournamentFormat.TWELVE_PLAYER:
        teams = compute_team_statistics(state.schedule)
        return {
            "format": state.format.value,
            "teams": [{"rank": i + 1, **t.to_dict()} for i, t in enumerate(teams)],
        }
    ranked = rank_players(compute_player_statistics(state.schedule))
    return {
        "format": state.format.value,
        "players": [
            {"rank": i + 1, "player": name, **s.to_dict()} for i, (name, s) in enumerate(ranked)
        ],
    }


@app.get("/tournaments/{tournament_id}/payouts")
def get_payouts(tournament_id: str) -> dict[str, Any]:
    state = _get_state(tournament_id)
    return summarize_payouts(state.schedule, config.ENTRY_FEE, state.side_bets).to_dict()


@app.post("/tournaments/{tournament_id}/side-bets")
def create_side_bet(tournament_id: str, req: CreateSideBetRequest) -> dict[str, Any]:
    state = _get_state(tournament_id)
    if len(set(req.side1 + req.side2)) != 4:
        raise HTTPException(status_code=400, detail="All four players must be different")
    unknown = [p for p in req.side1 + req.side2 if p not in state.player_names]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Not in this tournament: {', '.join(unknown)}")
    bet_id = max((b.id for b in state.side_bets), default=0) + 1
    bet = SideBet(id=bet_id, side1=req.side1, side2=req.side2, amount=req.amount)
    state.side_bets.append(bet)
    return bet.to_dict()


@app.put("/tournaments/{tournament_id}/side-bets/{bet_id}")
def settle_side_bet(tournament_id: str, bet_id: int, req: SettleSideBetRequest) -> dict[str, Any]:
    bet = _find_bet(_get_state(tournament_id), bet_id)
    bet.settle(req.winner)
    return bet.to_dict()


@app.delete("/tournaments/{tournament_id}/side-bets/{bet_id}")
def delete_side_bet(tournament_id: str, bet_id: int) -> dict[str, Any]:
    state = _get_state(tournament_id)
    bet = _find_bet(state, bet_id)
    state.side_bets.remove(bet)
    return {"id": bet_id, "deleted": True}


@app.get("/tournaments/{tournament_id}/state")
def export_state(tournament_id: str) -> dict[str, str]:
    """Shareable token holding the schedule, scores and side bets."""
    return {"state": serialize_state(_get_state(tournament_id))}


@app.post("/tournaments/import")
def import_state(req: ImportStateRequest) -> dict[str, Any]:
    state = deserialize_state(req.state)
    if state is None or state.schedule is None:
        raise HTTPException(status_code=400, detail="Invalid tournament state")
    tournament_id = str(uuid.uuid4())
    _tournaments[tournament_id] = state
    logger.info("Imported %s tournament %s", state.format.value, tournament_id)
    return _tournament_payload(tournament_id, state)


# ---------- Run with: uvicorn social_badminton.api:app --reload ----------
