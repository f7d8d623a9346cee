"""
Run a social doubles night in the terminal: draw the schedule, optionally fill
in simulated scores, then print standings and the payout table.
"""
from __future__ import annotations

import argparse
import logging
import random

from social_badminton import config
from social_badminton.models import Schedule, TournamentFormat
from social_badminton.payouts import summarize_payouts
from social_badminton.rng import SeededRNG
from social_badminton.scoring import (
    MAX_POINTS_PER_GAME,
    compute_player_statistics,
    compute_team_statistics,
    rank_players,
)
from social_badminton.services.scheduling import InvalidPlayerCount, generate_schedule

DEFAULT_NAMES = [
    "Alice", "Bob", "Charlie", "David", "Eve", "Frank",
    "Grace", "Henry", "Ivy", "Jack", "Kate", "Liam",
]


def _simulate_scores(schedule: Schedule, rng: SeededRNG) -> None:
    """Winner takes 21; the loser gets 5-19."""
    for game in schedule.games():
        losing = rng.randint(5, MAX_POINTS_PER_GAME - 2)
        if rng.random() < 0.5:
            schedule.record_score(game.id, MAX_POINTS_PER_GAME, losing)
        else:
            schedule.record_score(game.id, losing, MAX_POINTS_PER_GAME)


def _print_schedule(schedule: Schedule) -> None:
    for rnd in schedule.rounds:
        print(f"\n  Round {rnd.number}")
        for g in rnd.games:
            score = f"{g.side1_score}-{g.side2_score}" if g.is_scored else "not played"
            print(f"    Game {g.id:>2}: {' & '.join(g.side1)}  vs  {' & '.join(g.side2)}   [{score}]")


def _print_standings(schedule: Schedule) -> None:
    print()
    print("=" * 60)
    print("  STANDINGS")
    print("=" * 60)
    if schedule.format is TournamentFormat.TWELVE_PLAYER:
        for i, t in enumerate(compute_team_statistics(schedule)):
            print(f"  {i + 1}. {t.team.name:<24} W{t.wins} L{t.losses}  diff {t.point_differential:+d}")
    else:
        for i, (name, s) in enumerate(rank_players(compute_player_statistics(schedule))):
            print(f"  {i + 1}. {name:<12} lost {s.points_lost:>3}  W{s.wins} L{s.losses}  {s.game_scores}")


def _print_payouts(schedule: Schedule, entry_fee: float) -> None:
    summary = summarize_payouts(schedule, entry_fee)
    print()
    print(f"  Entry fees collected: ${summary.total_collected:.2f}   Prizes: ${summary.total_prizes:.2f}")
    for row in summary.rows:
        print(f"  {row.player:<12} prize ${row.prize:.2f}   net {row.net:+.2f}")
    print()


def run(
    fmt: TournamentFormat = TournamentFormat.EIGHT_PLAYER,
    players: list[str] | None = None,
    seed: int | None = None,
    simulate: bool = False,
    entry_fee: float = config.ENTRY_FEE,
) -> Schedule:
    if seed is None:
        seed = random.randint(1, 2**31 - 1)
    players = players or DEFAULT_NAMES[: fmt.player_count]
    rng = SeededRNG(seed)
    try:
        schedule = generate_schedule(fmt, players, rng=rng)
    except InvalidPlayerCount as e:
        raise SystemExit(str(e))
    print(f"\n  {fmt.value} social doubles  [seed={seed}]")
    print("  " + "-" * 56)
    if simulate:
        _simulate_scores(schedule, rng)
    _print_schedule(schedule)
    if simulate:
        _print_standings(schedule)
        _print_payouts(schedule, entry_fee)
    return schedule


def main():
    parser = argparse.ArgumentParser(description="Draw a social doubles schedule and settle payouts.")
    parser.add_argument("--format", choices=[f.value for f in TournamentFormat], default="8-player")
    parser.add_argument("--players", nargs="+", default=None, help="Player names (8 or 12)")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--simulate", action="store_true", help="Fill in random scores and show payouts")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else config.LOG_LEVEL)
    run(
        fmt=TournamentFormat(args.format),
        players=args.players,
        seed=args.seed,
        simulate=args.simulate,
    )


if __name__ == "__main__":
    main()
