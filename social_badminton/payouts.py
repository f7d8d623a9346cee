"""
Prize payouts and side-bet settlement.

Every ranked player pays the entry fee; the top three (players, or every
member of the top three teams) collect a fixed prize. With the default fee
of 2 the tables net to zero:
  8 players:  8 * 2 = 16 = 8 + 6 + 2
  12 players: 12 * 2 = 24 = 2 * (6 + 4 + 2)
This is a property of the constants; nothing rebalances other fees.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from social_badminton.models import BetWinner, Schedule, SideBet, TournamentFormat
from social_badminton.scoring import (
    compute_player_statistics,
    compute_team_statistics,
    rank_players,
)

# ---------- Prize tables ----------
DEFAULT_ENTRY_FEE = 2
PLAYER_PRIZES = (8, 6, 2)  # 1st, 2nd, 3rd individual
TEAM_PRIZES_PER_PLAYER = (6, 4, 2)  # per player on the 1st, 2nd, 3rd team


def _prize_for_rank(prizes: tuple[int, ...], index: int) -> int:
    return prizes[index] if index < len(prizes) else 0


def compute_player_payouts(schedule: Schedule, entry_fee: float) -> dict[str, float]:
    """Net amount per ranked player: prize for the top three, minus the entry fee."""
    ranked = rank_players(compute_player_statistics(schedule))
    return {
        player: _prize_for_rank(PLAYER_PRIZES, i) - entry_fee
        for i, (player, _) in enumerate(ranked)
    }


def compute_team_payouts(schedule: Schedule, entry_fee: float) -> dict[str, float]:
    """Both members of a ranked team get the same prize and pay the same fee."""
    payouts: dict[str, float] = {}
    for i, team_stats in enumerate(compute_team_statistics(schedule)):
        for player in team_stats.players:
            payouts[player] = _prize_for_rank(TEAM_PRIZES_PER_PLAYER, i) - entry_fee
    return payouts


def compute_side_bet_totals(side_bets: Iterable[SideBet]) -> dict[str, float]:
    """Winners gain the stake, losers pay it. Unsettled bets are skipped."""
    totals: dict[str, float] = {}
    for bet in side_bets:
        if bet.winner is None:
            continue
        if bet.winner == BetWinner.SIDE1:
            winners, losers = bet.side1, bet.side2
        else:
            winners, losers = bet.side2, bet.side1
        for player in winners:
            totals[player] = totals.get(player, 0) + bet.amount
        for player in losers:
            totals[player] = totals.get(player, 0) - bet.amount
    return totals


def _overlay(payouts: dict[str, float], side_bets: Iterable[SideBet]) -> dict[str, float]:
    result = dict(payouts)
    for player, amount in compute_side_bet_totals(side_bets).items():
        result[player] = result.get(player, 0) + amount
    return result


def compute_payouts_with_side_bets(
    schedule: Schedule, entry_fee: float, side_bets: Iterable[SideBet]
) -> dict[str, float]:
    return _overlay(compute_player_payouts(schedule, entry_fee), side_bets)


def compute_team_payouts_with_side_bets(
    schedule: Schedule, entry_fee: float, side_bets: Iterable[SideBet]
) -> dict[str, float]:
    return _overlay(compute_team_payouts(schedule, entry_fee), side_bets)


# ---------- Settlement table ----------


@dataclass
class PayoutRow:
    player: str
    rank: int | None  # 1-based; None for players only seen in side bets
    prize: float
    side_bets: float
    net: float
    team: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "player": self.player,
            "rank": self.rank,
            "team": self.team,
            "prize": self.prize,
            "side_bets": self.side_bets,
            "net": self.net,
        }


@dataclass
class PayoutSummary:
    entry_fee: float
    total_collected: float
    total_prizes: float
    rows: list[PayoutRow] = field(default_factory=list)

    @property
    def net_total(self) -> float:
        return sum(r.net for r in self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_fee": self.entry_fee,
            "total_collected": self.total_collected,
            "total_prizes": self.total_prizes,
            "rows": [r.to_dict() for r in self.rows],
        }


def summarize_payouts(
    schedule: Schedule,
    entry_fee: float = DEFAULT_ENTRY_FEE,
    side_bets: Iterable[SideBet] = (),
) -> PayoutSummary:
    """
    Full settlement table for either format: one row per ranked player in rank
    order, then anyone who only appears in side bets.
    """
    side_bets = list(side_bets)
    bet_totals = compute_side_bet_totals(side_bets)
    rows: list[PayoutRow] = []
    if schedule.format is TournamentFormat.TWELVE_PLAYER:
        for i, team_stats in enumerate(compute_team_statistics(schedule)):
            prize = _prize_for_rank(TEAM_PRIZES_PER_PLAYER, i)
            for player in team_stats.players:
                bets = bet_totals.get(player, 0)
                rows.append(PayoutRow(
                    player=player, rank=i + 1, prize=prize, side_bets=bets,
                    net=prize - entry_fee + bets, team=team_stats.team.name,
                ))
    else:
        for i, (player, _) in enumerate(rank_players(compute_player_statistics(schedule))):
            prize = _prize_for_rank(PLAYER_PRIZES, i)
            bets = bet_totals.get(player, 0)
            rows.append(PayoutRow(
                player=player, rank=i + 1, prize=prize, side_bets=bets,
                net=prize - entry_fee + bets,
            ))
    ranked = {r.player for r in rows}
    for player, bets in bet_totals.items():
        if player not in ranked:
            rows.append(PayoutRow(player=player, rank=None, prize=0, side_bets=bets, net=bets))
    paying = sum(1 for r in rows if r.rank is not None)
    return PayoutSummary(
        entry_fee=entry_fee,
        total_collected=paying * entry_fee,
        total_prizes=sum(r.prize for r in rows),
        rows=rows,
    )
