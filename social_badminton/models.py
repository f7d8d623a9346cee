"""
Data models for social doubles tournaments.
Domain objects only — no scheduling, scoring or API logic.

A Schedule is generated once and afterwards only annotated with scores.
Statistics and payouts are derived views over it and own no state.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


# ---------- Tournament format ----------
class TournamentFormat(str, Enum):
    """8 players rotate partners; 12 players play as 6 fixed teams."""
    EIGHT_PLAYER = "8-player"
    TWELVE_PLAYER = "12-player"

    @property
    def player_count(self) -> int:
        return 8 if self is TournamentFormat.EIGHT_PLAYER else 12


class GameNotFound(KeyError):
    """No game with the given id in this schedule."""


# ---------- Team ----------
@dataclass(frozen=True)
class Team:
    """
    Unordered pair of players (12-player mode). Members are kept sorted so the
    same pair is the same team wherever it appears.
    """
    players: tuple[str, str]

    def __post_init__(self) -> None:
        a, b = self.players
        if a > b:
            object.__setattr__(self, "players", (b, a))

    @classmethod
    def of(cls, a: str, b: str) -> Team:
        return cls((a, b))

    @property
    def name(self) -> str:
        return f"{self.players[0]} & {self.players[1]}"

    def to_dict(self) -> dict[str, Any]:
        return {"players": list(self.players), "name": self.name}


# ---------- Game ----------
@dataclass
class Game:
    """
    One doubles game. Each side is a pair of player names.
    Scores are None until the caller records them.
    """
    id: int
    side1: tuple[str, str]
    side2: tuple[str, str]
    side1_score: int | None = None
    side2_score: int | None = None

    @property
    def is_scored(self) -> bool:
        return self.side1_score is not None and self.side2_score is not None

    @property
    def winner_side(self) -> int | None:
        """1 or 2 for a strict win; None when unscored or tied."""
        if not self.is_scored or self.side1_score == self.side2_score:
            return None
        return 1 if self.side1_score > self.side2_score else 2

    @property
    def players(self) -> tuple[str, ...]:
        return self.side1 + self.side2

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "side1": list(self.side1),
            "side2": list(self.side2),
        }
        if self.side1_score is not None:
            d["side1_score"] = self.side1_score
        if self.side2_score is not None:
            d["side2_score"] = self.side2_score
        return d


# ---------- Round ----------
@dataclass
class Round:
    """Games played in the same time slot; numbered from 1."""
    number: int
    games: list[Game] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number, "games": [g.to_dict() for g in self.games]}


# ---------- Schedule ----------
@dataclass
class Schedule:
    """
    Ordered rounds for one tournament. record_score is the only mutator;
    derived computations read it and never write.
    """
    format: TournamentFormat
    rounds: list[Round]
    teams: list[Team] = field(default_factory=list)  # 12-player mode only

    def games(self) -> Iterator[Game]:
        """All games in chronological (round, then game) order."""
        for rnd in self.rounds:
            yield from rnd.games

    def game(self, game_id: int) -> Game:
        for g in self.games():
            if g.id == game_id:
                return g
        raise GameNotFound(game_id)

    def record_score(self, game_id: int, side1_score: int, side2_score: int) -> Game:
        if side1_score < 0 or side2_score < 0:
            raise ValueError("Scores must be non-negative")
        g = self.game(game_id)
        g.side1_score = side1_score
        g.side2_score = side2_score
        return g

    def clear_score(self, game_id: int) -> Game:
        g = self.game(game_id)
        g.side1_score = None
        g.side2_score = None
        return g

    @property
    def players(self) -> list[str]:
        """Distinct players in order of first appearance."""
        seen: dict[str, None] = {}
        for g in self.games():
            for p in g.players:
                seen.setdefault(p, None)
        return list(seen)

    @property
    def is_complete(self) -> bool:
        return all(g.is_scored for g in self.games())

    def copy(self) -> Schedule:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "format": self.format.value,
            "rounds": [r.to_dict() for r in self.rounds],
        }
        if self.teams:
            d["teams"] = [t.to_dict() for t in self.teams]
        return d


# ---------- Side bets ----------
class BetWinner(int, Enum):
    SIDE1 = 1
    SIDE2 = 2


@dataclass
class SideBet:
    """
    Wager between two pairs of players, independent of the schedule.
    winner None means the bet is not settled yet.
    """
    id: int
    side1: tuple[str, str]
    side2: tuple[str, str]
    amount: float
    winner: BetWinner | None = None

    def settle(self, winner: BetWinner | int | None) -> None:
        self.winner = BetWinner(winner) if winner is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "side1": list(self.side1),
            "side2": list(self.side2),
            "amount": self.amount,
            "winner": int(self.winner) if self.winner is not None else None,
        }
