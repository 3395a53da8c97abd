"""Best five-card hand out of hero + board, plus draw labelling."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import combinations
from typing import Final

import numpy as np

from ..core.errors import InsufficientCardsError
from .cards import Card, CardLike, parse_cards
from .hand_eval import EvaluatedHand, HandCategory, evaluate_five, suit_histogram

__all__ = [
    "BestHand",
    "FLUSH_DRAW",
    "STRAIGHT_DRAW",
    "best_hand",
    "has_flush_draw",
    "has_straight_draw",
]

FLUSH_DRAW: Final = "Flush Draw"
STRAIGHT_DRAW: Final = "Straight Draw"

MAX_CARDS: Final = 7


def _index_table(n: int) -> np.ndarray:
    table = np.array(list(combinations(range(n), 5)), dtype=np.int8)
    table.setflags(write=False)
    return table


# C(n, 5) subsets as index rows, built once for every pool size we accept.
_COMBO_INDEX: Final[dict[int, np.ndarray]] = {n: _index_table(n) for n in range(5, MAX_CARDS + 1)}


@dataclass(frozen=True)
class BestHand:
    hand: EvaluatedHand
    draws: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.hand.name

    @property
    def category(self) -> HandCategory:
        return self.hand.category

    @property
    def draw_label(self) -> str | None:
        return " & ".join(self.draws) if self.draws else None

    @property
    def codes(self) -> list[str]:
        return self.hand.codes


def has_flush_draw(cards: Sequence[Card]) -> bool:
    if not cards:
        return False
    return int(suit_histogram(cards).max()) >= 4


def has_straight_draw(cards: Sequence[Card]) -> bool:
    """Four distinct ranks inside some five-rank window (open-ended or gutshot)."""

    present = {c.rank for c in cards}
    if 14 in present:
        present.add(1)
    if len(present) < 4:
        return False
    for high in range(5, 15):
        window = range(high - 4, high + 1)
        if sum(1 for r in window if r in present) >= 4:
            return True
    return False


def _degenerate(cards: list[Card]) -> EvaluatedHand:
    ordered = sorted(cards, key=lambda c: c.rank, reverse=True)
    return EvaluatedHand(
        category=HandCategory.HIGH_CARD,
        tiebreak=tuple(c.rank for c in ordered),
        cards=tuple(ordered[:5]),
    )


def best_hand(cards: Iterable[CardLike]) -> BestHand:
    """Return the strongest five-card hand in a pool of 2..7 cards.

    Pools smaller than five report a High Card over whatever is available.
    Ties keep the first subset found in combination order.
    """

    pool = parse_cards(cards)
    if len(pool) < 2:
        raise InsufficientCardsError(2, len(pool))
    if len(pool) > MAX_CARDS:
        raise ValueError(f"best_hand accepts at most {MAX_CARDS} cards, got {len(pool)}")

    if len(pool) < 5:
        best = _degenerate(pool)
    else:
        best = None
        for row in _COMBO_INDEX[len(pool)]:
            candidate = evaluate_five([pool[i] for i in row])
            if best is None or candidate > best:
                best = candidate
        assert best is not None

    draws: list[str] = []
    if best.category < HandCategory.FLUSH and has_flush_draw(pool):
        draws.append(FLUSH_DRAW)
    if best.category < HandCategory.STRAIGHT and has_straight_draw(pool):
        draws.append(STRAIGHT_DRAW)
    return BestHand(hand=best, draws=tuple(draws))
