"""Out counting: unseen cards that complete a flush, a straight, or add to a held rank."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .cards import Card, CardLike, parse_cards, remaining_deck

__all__ = [
    "OutsReport",
    "calculate_outs",
    "flush_outs",
    "rank_outs",
    "straight_out_ranks",
    "straight_outs",
]


def _sorted_codes(cards: Iterable[Card]) -> tuple[str, ...]:
    return tuple(sorted({c.code for c in cards}))


@dataclass(frozen=True)
class OutsReport:
    flush: tuple[str, ...] = ()
    straight: tuple[str, ...] = ()
    rank_improvement: tuple[str, ...] = ()
    cards: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        merged = sorted(set(self.flush) | set(self.straight) | set(self.rank_improvement))
        object.__setattr__(self, "cards", tuple(merged))

    @property
    def total(self) -> int:
        return len(self.cards)

    @classmethod
    def empty(cls) -> OutsReport:
        return cls()


def flush_outs(combined: Sequence[Card], available: Sequence[Card]) -> tuple[str, ...]:
    suit_counts = Counter(c.suit for c in combined)
    four_suits = {suit for suit, count in suit_counts.items() if count == 4}
    return _sorted_codes(c for c in available if c.suit in four_suits)


def straight_out_ranks(ranks: Iterable[int]) -> set[int]:
    """Ranks that fill the single gap of a five-rank window holding exactly four ranks."""

    present = set(ranks)
    if 14 in present:
        present.add(1)
    needed: set[int] = set()
    for high in range(5, 15):
        window = range(high - 4, high + 1)
        missing = [r for r in window if r not in present]
        if len(missing) == 1:
            rank = missing[0]
            needed.add(14 if rank == 1 else rank)
    return needed


def straight_outs(combined: Sequence[Card], available: Sequence[Card]) -> tuple[str, ...]:
    if len(combined) < 4:
        return ()
    needed = straight_out_ranks(c.rank for c in combined)
    return _sorted_codes(c for c in available if c.rank in needed)


def rank_outs(combined: Sequence[Card], available: Sequence[Card]) -> tuple[str, ...]:
    rank_counts = Counter(c.rank for c in combined)
    held = {rank for rank, count in rank_counts.items() if 1 <= count < 4}
    return _sorted_codes(c for c in available if c.rank in held)


def calculate_outs(hero: Iterable[CardLike], board: Iterable[CardLike]) -> OutsReport:
    """Return the outs report for hero + board against the unseen deck.

    No board cards (preflop) yields an empty report.
    """

    hero_cards = parse_cards(hero)
    board_cards = parse_cards(board)
    if not board_cards:
        return OutsReport.empty()

    combined = hero_cards + board_cards
    available = remaining_deck(combined)
    return OutsReport(
        flush=flush_outs(combined, available),
        straight=straight_outs(combined, available),
        rank_improvement=rank_outs(combined, available),
    )
