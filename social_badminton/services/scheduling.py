"""
Schedule generation for social doubles nights.

8 players: every player partners every other player exactly once. A fixed
resolvable design over 8 slots is applied to a shuffled player list, giving
7 rounds of 2 games (all 28 partnerships).

12 players: players are paired into 6 fixed teams which then play a
round-robin with the circle method, giving 5 rounds of 3 games (all 15
matchups). Each team plays once per round.
"""
from __future__ import annotations

import logging
from typing import Sequence

from social_badminton.models import Game, Round, Schedule, Team, TournamentFormat
from social_badminton.rng import SeededRNG, shuffle

logger = logging.getLogger(__name__)


# ---------- Exceptions ----------


class InvalidPlayerCount(ValueError):
    """Player list length does not match the format (8 or 12)."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Please enter exactly {expected} player names (got {actual})")
        self.expected = expected
        self.actual = actual


class DuplicatePlayerName(ValueError):
    """Two players share a name."""


class InvalidTeamPartition(ValueError):
    """Custom teams are not 6 disjoint pairs covering every player."""


# ---------- 8-player template ----------

# Each round splits slots 0..7 into two games; a game [a, b, c, d] is a+b vs c+d.
# Across the 14 games every slot pair partners exactly once.
EIGHT_PLAYER_TEMPLATE: tuple[tuple[tuple[int, int, int, int], ...], ...] = (
    ((0, 1, 2, 3), (4, 5, 6, 7)),
    ((0, 2, 4, 6), (1, 3, 5, 7)),
    ((0, 3, 5, 6), (1, 2, 4, 7)),
    ((0, 4, 3, 7), (1, 5, 2, 6)),
    ((0, 5, 1, 4), (2, 7, 3, 6)),
    ((0, 6, 1, 7), (2, 4, 3, 5)),
    ((0, 7, 1, 6), (2, 5, 3, 4)),
)

TEAM_COUNT = 6


def round_robin_team_pairings(n_teams: int = TEAM_COUNT) -> list[list[tuple[int, int]]]:
    """
    Circle method over team indices (n_teams even). Team 0 stays put; the rest
    rotate. Each round pairs 0 with the first rotating entry and the remaining
    entries symmetrically from the ends. After a round the last entry moves to
    the front.
    """
    rotating = list(range(1, n_teams))
    rounds: list[list[tuple[int, int]]] = []
    for _ in range(n_teams - 1):
        pairs = [(0, rotating[0])]
        rest = rotating[1:]
        for i in range(len(rest) // 2):
            pairs.append((rest[i], rest[len(rest) - 1 - i]))
        rounds.append(pairs)
        rotating = [rotating[-1]] + rotating[:-1]
    return rounds


# ---------- Generators ----------


def generate_eight_player_schedule(
    players: Sequence[str], rng: SeededRNG | None = None
) -> Schedule:
    """Shuffle 8 players onto the fixed template. Raises InvalidPlayerCount."""
    if len(players) != 8:
        raise InvalidPlayerCount(8, len(players))
    slots = shuffle(players, rng)
    rounds: list[Round] = []
    game_id = 1
    for round_index, round_games in enumerate(EIGHT_PLAYER_TEMPLATE):
        games: list[Game] = []
        for a, b, c, d in round_games:
            games.append(Game(id=game_id, side1=(slots[a], slots[b]), side2=(slots[c], slots[d])))
            game_id += 1
        rounds.append(Round(number=round_index + 1, games=games))
    logger.info("Generated 8-player schedule: %d rounds, %d games", len(rounds), game_id - 1)
    return Schedule(format=TournamentFormat.EIGHT_PLAYER, rounds=rounds)


def make_random_teams(players: Sequence[str], rng: SeededRNG | None = None) -> list[Team]:
    """Shuffle and slice into consecutive pairs."""
    shuffled = shuffle(players, rng)
    return [Team.of(shuffled[i], shuffled[i + 1]) for i in range(0, len(shuffled), 2)]


def generate_twelve_player_schedule(
    players: Sequence[str],
    custom_teams: Sequence[Sequence[str]] | None = None,
    rng: SeededRNG | None = None,
) -> Schedule:
    """
    Pair 12 players into 6 teams (random unless custom_teams is given) and run
    a circle-method round-robin. Raises InvalidPlayerCount.
    custom_teams is not re-validated here; see validate_custom_teams.
    """
    if len(players) != 12:
        raise InvalidPlayerCount(12, len(players))
    if custom_teams:
        teams = [Team.of(t[0], t[1]) for t in list(custom_teams)[:TEAM_COUNT]]
    else:
        teams = make_random_teams(players, rng)
    rounds: list[Round] = []
    game_id = 1
    for round_index, pairs in enumerate(round_robin_team_pairings(TEAM_COUNT)):
        games: list[Game] = []
        for i, j in pairs:
            games.append(Game(id=game_id, side1=teams[i].players, side2=teams[j].players))
            game_id += 1
        rounds.append(Round(number=round_index + 1, games=games))
    logger.info(
        "Generated 12-player schedule: %d teams (%s), %d rounds, %d games",
        len(teams), "custom" if custom_teams else "random", len(rounds), game_id - 1,
    )
    return Schedule(format=TournamentFormat.TWELVE_PLAYER, rounds=rounds, teams=teams)


def generate_schedule(
    fmt: TournamentFormat | str,
    players: Sequence[str],
    custom_teams: Sequence[Sequence[str]] | None = None,
    rng: SeededRNG | None = None,
) -> Schedule:
    """Dispatch on format. custom_teams is ignored for 8 players."""
    fmt = TournamentFormat(fmt)
    if fmt is TournamentFormat.EIGHT_PLAYER:
        return generate_eight_player_schedule(players, rng=rng)
    return generate_twelve_player_schedule(players, custom_teams=custom_teams, rng=rng)


# ---------- Boundary validation ----------


def validate_player_names(players: Sequence[str], expected: int) -> list[str]:
    """
    Strip names, drop blanks, then check count and duplicates. Returns the
    cleaned list. Raises InvalidPlayerCount or DuplicatePlayerName.
    """
    names = [p.strip() for p in players if p.strip()]
    if len(names) != expected:
        raise InvalidPlayerCount(expected, len(names))
    seen: set[str] = set()
    for n in names:
        if n in seen:
            raise DuplicatePlayerName(f"Duplicate player name: {n}")
        seen.add(n)
    return names


def validate_custom_teams(players: Sequence[str], teams: Sequence[Sequence[str]]) -> None:
    """Require exactly 6 pairs, each of two different players, covering all players once."""
    if len(teams) != TEAM_COUNT:
        raise InvalidTeamPartition(f"Please create exactly {TEAM_COUNT} teams (got {len(teams)})")
    assigned: list[str] = []
    for t in teams:
        if len(t) != 2 or t[0] == t[1]:
            raise InvalidTeamPartition(f"Each team needs two different players: {list(t)}")
        assigned.extend(t)
    if len(set(assigned)) != len(assigned):
        raise InvalidTeamPartition("A player is assigned to more than one team")
    if set(assigned) != set(players):
        raise InvalidTeamPartition("All players must be assigned to a team")
