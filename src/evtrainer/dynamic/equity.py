"""Closed-form equity heuristics.

Preflop equity comes from a fixed starting-hand table; postflop equity is the
"rule of 4 / rule of 2" applied to the outs count. Both return percentages
(0-100). No run-outs are simulated.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from .cards import Card, CardLike, parse_cards
from .outs import OutsReport, calculate_outs

__all__ = [
    "FLOP_FLOOR",
    "RIVER_EQUITY",
    "TURN_FLOOR",
    "estimate_equity",
    "postflop_equity",
    "preflop_equity",
]

EQUITY_CEILING: Final = 95.0
FLOP_FLOOR: Final = 12.0
TURN_FLOOR: Final = 9.0
# No cards to come; made-hand strength is deliberately not consulted here.
RIVER_EQUITY: Final = 5.0


def preflop_equity(hero: Sequence[Card]) -> float:
    """Bucketed starting-hand equity; 0 when fewer than two hole cards."""

    if len(hero) < 2:
        return 0.0
    first, second = sorted(hero[:2], key=lambda c: c.rank, reverse=True)
    high, low = first.rank, second.rank
    suited = first.same_suit(second)
    gap = high - low

    if high == low:
        if high >= 13:
            return 74.0
        if high >= 10:
            return 68.0
        if high >= 7:
            return 63.0
        return 58.0

    if suited and gap == 1 and high >= 11:
        return 58.0
    if high >= 14 and low >= 10:
        return 56.0 if suited else 52.0
    if high >= 13 and low >= 9:
        return 54.0 if suited else 49.0
    if suited and gap <= 2:
        return 51.0
    if high >= 14:
        return 50.0
    if gap == 1:
        return 47.0
    if high >= 12 and low >= 8:
        return 45.0
    return 41.0


def _clamp(value: float, low: float, high: float = EQUITY_CEILING) -> float:
    return min(max(value, low), high)


def postflop_equity(outs: int, board_count: int) -> float:
    if board_count == 3:
        if outs <= 0:
            return FLOP_FLOOR
        raw = outs * 4 - (outs - 8) if outs > 8 else outs * 4
        return _clamp(float(raw), FLOP_FLOOR)
    if board_count == 4:
        if outs <= 0:
            return TURN_FLOOR
        return _clamp(float(outs * 2), TURN_FLOOR)
    return RIVER_EQUITY


def estimate_equity(
    hero: Iterable[CardLike],
    board: Iterable[CardLike],
    outs: OutsReport | None = None,
) -> float:
    hero_cards = parse_cards(hero)
    board_cards = parse_cards(board)
    if not board_cards:
        return preflop_equity(hero_cards)
    report = outs if outs is not None else calculate_outs(hero_cards, board_cards)
    return postflop_equity(report.total, len(board_cards))
