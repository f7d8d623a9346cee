"""
Tournament statistics folded from recorded game scores.

8-player mode ranks individuals by points lost (fewest wins).
12-player mode ranks teams by wins, then point differential.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from social_badminton.models import Game, Schedule, Team


# ---------- Game ceiling ----------
# Points lost per game = MAX_POINTS_PER_GAME - own score. Not clamped, so an
# extended game past 21 yields a negative value.
MAX_POINTS_PER_GAME = 21


@dataclass
class PlayerStats:
    """Aggregates for one player over their scored games."""
    total_points: int = 0
    points_lost: int = 0
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    game_scores: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_points": self.total_points,
            "points_lost": self.points_lost,
            "games_played": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "game_scores": list(self.game_scores),
        }


@dataclass
class TeamStats:
    """Aggregates for one fixed team (12-player mode)."""
    team: Team
    points_scored: int = 0
    points_conceded: int = 0
    point_differential: int = 0
    points_lost: int = 0
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    game_scores: list[int] = field(default_factory=list)

    @property
    def players(self) -> tuple[str, str]:
        return self.team.players

    def to_dict(self) -> dict[str, Any]:
        return {
            "team": self.team.name,
            "players": list(self.team.players),
            "points_scored": self.points_scored,
            "points_conceded": self.points_conceded,
            "point_differential": self.point_differential,
            "points_lost": self.points_lost,
            "games_played": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "game_scores": list(self.game_scores),
        }


def _scored_sides(games: Iterable[Game]):
    """Yield (side, own_score, opponent_score) for both sides of every scored game."""
    for g in games:
        if not g.is_scored:
            continue
        yield g.side1, g.side1_score, g.side2_score
        yield g.side2, g.side2_score, g.side1_score


def _apply_result(stats: PlayerStats | TeamStats, own: int, opp: int) -> None:
    stats.points_lost += MAX_POINTS_PER_GAME - own
    stats.games_played += 1
    stats.game_scores.append(own)
    # Ties count as neither a win nor a loss.
    if own > opp:
        stats.wins += 1
    elif own < opp:
        stats.losses += 1


def compute_player_statistics(schedule: Schedule) -> dict[str, PlayerStats]:
    """
    Per-player aggregates from scored games, in order of first appearance.
    Players with no scored game are absent.
    """
    stats: dict[str, PlayerStats] = {}
    for side, own, opp in _scored_sides(schedule.games()):
        for player in side:
            s = stats.setdefault(player, PlayerStats())
            s.total_points += own
            _apply_result(s, own, opp)
    return stats


def compute_team_statistics(schedule: Schedule) -> list[TeamStats]:
    """
    Per-team aggregates keyed by the unordered player pair, ranked by wins
    then point differential (both descending). Stable for further ties.
    """
    by_team: dict[Team, TeamStats] = {}
    for side, own, opp in _scored_sides(schedule.games()):
        team = Team(side)
        s = by_team.setdefault(team, TeamStats(team=team))
        s.points_scored += own
        s.points_conceded += opp
        s.point_differential = s.points_scored - s.points_conceded
        _apply_result(s, own, opp)
    return sorted(by_team.values(), key=lambda s: (-s.wins, -s.point_differential))


def rank_players(stats: dict[str, PlayerStats]) -> list[tuple[str, PlayerStats]]:
    """Fewest points lost first; equal totals keep encounter order."""
    return sorted(stats.items(), key=lambda item: item[1].points_lost)
