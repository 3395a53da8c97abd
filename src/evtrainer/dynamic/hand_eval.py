"""Five-card hand classification.

The classifier follows the trainer's feedback rules rather than full poker
ranking: a straight flush is reported as a Flush and four of a kind as Three
of a Kind unless the ``evaluator.full_categories`` flag is enabled.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Final

import numpy as np

from ..core import feature_flags
from .cards import SUITS, Card

__all__ = [
    "EvaluatedHand",
    "HandCategory",
    "evaluate_five",
    "rank_histogram",
    "straight_high",
    "suit_histogram",
]


class HandCategory(IntEnum):
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> HandCategory:
        wanted = label.strip().lower()
        for member, text in _LABELS.items():
            if text.lower() == wanted:
                return member
        raise ValueError(f"Unknown hand category: {label!r}")


_LABELS: Final[dict[HandCategory, str]] = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.PAIR: "Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
}


@dataclass(frozen=True, order=True)
class EvaluatedHand:
    """A classified hand. Ordering compares category, then tiebreak."""

    category: HandCategory
    tiebreak: tuple[int, ...]
    cards: tuple[Card, ...] = field(default=(), compare=False)

    @property
    def name(self) -> str:
        return self.category.label

    @property
    def codes(self) -> list[str]:
        return [c.code for c in self.cards]


def rank_histogram(cards: Sequence[Card]) -> np.ndarray:
    """Counts indexed by rank value (index 14 = Ace)."""

    ranks = np.fromiter((c.rank for c in cards), dtype=np.int64, count=len(cards))
    return np.bincount(ranks, minlength=15)


def suit_histogram(cards: Sequence[Card]) -> np.ndarray:
    suits = np.fromiter((SUITS.index(c.suit) for c in cards), dtype=np.int64, count=len(cards))
    return np.bincount(suits, minlength=len(SUITS))


def straight_high(ranks: Sequence[int] | set[int]) -> int | None:
    """Return the top of the highest five-rank run, with the wheel topping at 5."""

    present = set(int(r) for r in ranks)
    if 14 in present:
        present.add(1)
    for high in range(14, 4, -1):
        if all(r in present for r in range(high - 4, high + 1)):
            return high
    return None


def _straight_sequence(high: int) -> tuple[int, ...]:
    # Wheel reports [5, 4, 3, 2, 1]
    return tuple(range(high, high - 5, -1))


def evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    if len(cards) != 5:
        raise ValueError("evaluate_five expects exactly 5 cards")

    ranks = rank_histogram(cards)
    is_flush = int(suit_histogram(cards).max()) == 5
    high = straight_high(c.rank for c in cards)
    is_straight = high is not None

    pair_count = int(np.count_nonzero(ranks == 2))
    has_trips = bool(np.any(ranks == 3))
    has_four = bool(np.any(ranks == 4))

    strict = feature_flags.is_enabled(feature_flags.FULL_CATEGORIES)

    if strict and is_straight and is_flush:
        category = HandCategory.STRAIGHT_FLUSH
    elif strict and has_four:
        category = HandCategory.FOUR_OF_A_KIND
    elif has_trips and pair_count > 0:
        category = HandCategory.FULL_HOUSE
    elif is_flush:
        category = HandCategory.FLUSH
    elif is_straight:
        category = HandCategory.STRAIGHT
    elif has_four or has_trips:
        category = HandCategory.THREE_OF_A_KIND
    elif pair_count >= 2:
        category = HandCategory.TWO_PAIR
    elif pair_count == 1:
        category = HandCategory.PAIR
    else:
        category = HandCategory.HIGH_CARD

    if is_straight:
        assert high is not None
        tiebreak = _straight_sequence(high)
    elif category in (HandCategory.FLUSH, HandCategory.HIGH_CARD):
        tiebreak = tuple(sorted((c.rank for c in cards), reverse=True))
    else:
        present = np.flatnonzero(ranks)
        groups = sorted(((int(ranks[r]), int(r)) for r in present), reverse=True)
        tiebreak = tuple(rank for count, rank in groups for _ in range(count))

    return EvaluatedHand(category=category, tiebreak=tiebreak, cards=tuple(cards))
