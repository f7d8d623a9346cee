"""
Service layer: schedule generation and boundary validation.
Statistics and payouts live in social_badminton.scoring / social_badminton.payouts.
"""
from .scheduling import (
    EIGHT_PLAYER_TEMPLATE,
    DuplicatePlayerName,
    InvalidPlayerCount,
    InvalidTeamPartition,
    generate_eight_player_schedule,
    generate_schedule,
    generate_twelve_player_schedule,
    round_robin_team_pairings,
    validate_custom_teams,
    validate_player_names,
)

__all__ = [
    "EIGHT_PLAYER_TEMPLATE",
    "DuplicatePlayerName",
    "InvalidPlayerCount",
    "InvalidTeamPartition",
    "generate_eight_player_schedule",
    "generate_schedule",
    "generate_twelve_player_schedule",
    "round_robin_team_pairings",
    "validate_custom_teams",
    "validate_player_names",
]
