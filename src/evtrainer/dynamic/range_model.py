"""Opponent archetypes and their fixed hand ranges.

Ranges are static lookup tables, not inferred from betting action. Each
archetype also carries the fold rate used when pricing a raise; today every
archetype folds 30% of the time regardless of board texture.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from functools import lru_cache
from typing import Final

__all__ = [
    "BASELINE_FOLD_EQUITY",
    "OpponentArchetype",
    "expand_range",
    "hand_class_combos",
    "range_combo_count",
]

BASELINE_FOLD_EQUITY: Final = 0.30

_RANKS: Final = "23456789TJQKA"


class OpponentArchetype(Enum):
    NIT = ("Nit", ("77+", "AJs+", "KQs", "AQo+"))
    DEFAULT = ("Default", ("55+", "A9s+", "KTs+", "QTs+", "JTs", "T9s", "ATo+", "KQo"))
    LAG = (
        "LAG",
        ("22+", "A2s+", "K7s+", "Q9s+", "J9s+", "T8s+", "98s", "87s", "76s", "ATo+", "KTo+", "QTo+", "JTo"),
    )
    CALLING_STATION = (
        "Calling Station",
        ("22+", "A2s+", "K2s+", "Q5s+", "J7s+", "T7s+", "97s+", "A2o+", "K8o+", "Q9o+", "J9o+"),
    )

    def __init__(self, label: str, range_tokens: tuple[str, ...]) -> None:
        self.label = label
        self.range_tokens = range_tokens

    @property
    def fold_equity(self) -> float:
        return BASELINE_FOLD_EQUITY

    @property
    def range_summary(self) -> str:
        return ", ".join(self.range_tokens)

    @property
    def hand_classes(self) -> tuple[str, ...]:
        return expand_range(self.range_tokens)

    @property
    def combo_count(self) -> int:
        return range_combo_count(self.range_tokens)

    @classmethod
    def from_label(cls, label: str) -> OpponentArchetype:
        wanted = label.strip().lower().replace("_", " ")
        for member in cls:
            if member.label.lower() == wanted:
                return member
        raise ValueError(f"Unknown opponent archetype: {label!r}")


def _expand_token(token: str) -> list[str]:
    tok = token.strip()
    plus = tok.endswith("+")
    body = tok[:-1] if plus else tok
    if len(body) not in (2, 3):
        raise ValueError(f"Bad range token: {token!r}")
    hi, lo = body[0].upper(), body[1].upper()
    if hi not in _RANKS or lo not in _RANKS:
        raise ValueError(f"Bad range token: {token!r}")
    suffix = body[2].lower() if len(body) == 3 else ""
    if suffix not in ("", "s", "o"):
        raise ValueError(f"Bad range token: {token!r}")

    ih, il = _RANKS.index(hi), _RANKS.index(lo)
    if ih == il:
        if suffix:
            raise ValueError(f"Pairs take no suit marker: {token!r}")
        # "77+" climbs through every higher pair
        top = len(_RANKS) - 1 if plus else ih
        return [_RANKS[i] * 2 for i in range(ih, top + 1)]

    if il > ih:
        ih, il = il, ih
        hi, lo = lo, hi
    # "AJs+" raises the kicker up to one below the top card
    kickers = range(il, ih) if plus else (il,)
    suffixes = (suffix,) if suffix else ("s", "o")
    return [f"{hi}{_RANKS[k]}{s}" for k in kickers for s in suffixes]


@lru_cache(maxsize=64)
def _expand_cached(tokens: tuple[str, ...]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for token in tokens:
        for hand in _expand_token(token):
            seen.setdefault(hand, None)
    return tuple(seen)


def expand_range(tokens: Iterable[str]) -> tuple[str, ...]:
    """Expand range notation (``77+``, ``AJs+``, ``KQo``) into hand classes."""

    return _expand_cached(tuple(tokens))


def hand_class_combos(hand: str) -> int:
    if len(hand) == 2:
        return 6
    return 4 if hand.endswith("s") else 12


def range_combo_count(tokens: Iterable[str]) -> int:
    return sum(hand_class_combos(hand) for hand in expand_range(tokens))
