"""
Social doubles badminton: round-robin schedules for 8 or 12 players,
standings from recorded scores, prize payouts and side-bet settlement.
"""
from .models import (
    BetWinner,
    Game,
    GameNotFound,
    Round,
    Schedule,
    SideBet,
    Team,
    TournamentFormat,
)
from .rng import SeededRNG, shuffle
from .services.scheduling import (
    InvalidPlayerCount,
    generate_eight_player_schedule,
    generate_schedule,
    generate_twelve_player_schedule,
)
from .scoring import (
    MAX_POINTS_PER_GAME,
    PlayerStats,
    TeamStats,
    compute_player_statistics,
    compute_team_statistics,
)
from .payouts import (
    compute_payouts_with_side_bets,
    compute_player_payouts,
    compute_side_bet_totals,
    compute_team_payouts,
    compute_team_payouts_with_side_bets,
    summarize_payouts,
)

__all__ = [
    "BetWinner",
    "Game",
    "GameNotFound",
    "Round",
    "Schedule",
    "SideBet",
    "Team",
    "TournamentFormat",
    "SeededRNG",
    "shuffle",
    "InvalidPlayerCount",
    "generate_eight_player_schedule",
    "generate_schedule",
    "generate_twelve_player_schedule",
    "MAX_POINTS_PER_GAME",
    "PlayerStats",
    "TeamStats",
    "compute_player_statistics",
    "compute_team_statistics",
    "compute_payouts_with_side_bets",
    "compute_player_payouts",
    "compute_side_bet_totals",
    "compute_team_payouts",
    "compute_team_payouts_with_side_bets",
    "summarize_payouts",
]
