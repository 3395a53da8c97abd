from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, Union

from ..core.errors import ParseError

__all__ = [
    "Card",
    "RANK_CODES",
    "SUITS",
    "CardLike",
    "canonical_hand_abbrev",
    "format_cards_spaced",
    "fresh_deck",
    "parse_card",
    "parse_cards",
    "rank_value",
    "remaining_deck",
]

# Card identifier alphabet; "0" stands for Ten.
RANK_CODES: Final = "234567890JQKA"
SUITS: Final = "CDHS"

_RANK_TO_VAL: Final[dict[str, int]] = {r: i + 2 for i, r in enumerate(RANK_CODES)}
_RANK_TO_VAL["T"] = 10
_VAL_TO_RANK: Final[dict[int, str]] = {i + 2: r for i, r in enumerate(RANK_CODES)}

# Range notation ("AKs", "T9s") writes tens as "T".
_RANGE_RANKS: Final = "23456789TJQKA"


@dataclass(frozen=True, order=True)
class Card:
    rank: int
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in _VAL_TO_RANK:
            raise ParseError(self.rank, "rank must be 2..14")
        if self.suit not in SUITS:
            raise ParseError(self.suit, "suit must be one of C, D, H, S")

    @property
    def code(self) -> str:
        return _VAL_TO_RANK[self.rank] + self.suit

    def same_suit(self, other: Card) -> bool:
        return self.suit == other.suit

    def __str__(self) -> str:
        return self.code

    @staticmethod
    def parse(token: str) -> Card:
        return parse_card(token)


CardLike = Union[str, Card]


def rank_value(symbol: str) -> int:
    """Return the numeric value (Ace=14) of a rank symbol."""

    try:
        return _RANK_TO_VAL[symbol.upper()]
    except (KeyError, AttributeError):
        raise ParseError(symbol, "unknown rank") from None


def parse_card(token: CardLike) -> Card:
    if isinstance(token, Card):
        return token
    if not isinstance(token, str):
        raise ParseError(token, "expected a string")
    text = token.strip().upper()
    if len(text) != 2:
        raise ParseError(token, "expected two characters")
    r, s = text[0], text[1]
    if r not in _RANK_TO_VAL:
        raise ParseError(token, "unknown rank")
    if s not in SUITS:
        raise ParseError(token, "unknown suit")
    return Card(_RANK_TO_VAL[r], s)


def parse_cards(cards: Iterable[CardLike]) -> list[Card]:
    return [parse_card(c) for c in cards]


def fresh_deck() -> list[Card]:
    return [Card(rank, suit) for rank in range(2, 15) for suit in SUITS]


_DECK: Final[tuple[Card, ...]] = tuple(fresh_deck())


def remaining_deck(visible: Iterable[Card]) -> list[Card]:
    """Return the 52-card universe minus every visible card."""

    used = set(visible)
    return [c for c in _DECK if c not in used]


def format_cards_spaced(cards: Iterable[Card]) -> str:
    # Rank descending, suit order as a stable tiebreak
    ordered = sorted(cards, key=lambda c: (c.rank, SUITS.index(c.suit)), reverse=True)
    return " ".join(c.code for c in ordered)


def canonical_hand_abbrev(cards: Iterable[CardLike]) -> str:
    # Return like 'A5s', 'KQo', or '77'
    first, second = parse_cards(cards)
    if second.rank > first.rank:
        first, second = second, first
    r1 = _RANGE_RANKS[first.rank - 2]
    r2 = _RANGE_RANKS[second.rank - 2]
    if r1 == r2:
        return r1 + r2
    return f"{r1}{r2}{'s' if first.same_suit(second) else 'o'}"
