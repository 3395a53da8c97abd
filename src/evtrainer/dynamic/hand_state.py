"""Shared helpers for reading the per-street betting context.

Pot and bet figures arrive from an outer layer that may hand over blanks,
strings or NaN. Every numeric read goes through :func:`safe_amount` so the
engine stays total: malformed values become zero instead of raising.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any

__all__ = [
    "Street",
    "safe_amount",
    "street_for_board",
]

logger = logging.getLogger(__name__)


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


_BOARD_SIZES: dict[int, Street] = {
    0: Street.PREFLOP,
    3: Street.FLOP,
    4: Street.TURN,
    5: Street.RIVER,
}


def street_for_board(board_count: int) -> Street:
    try:
        return _BOARD_SIZES[board_count]
    except KeyError:
        raise ValueError(f"Board must hold 0, 3, 4 or 5 cards, got {board_count}") from None


def safe_amount(value: Any, default: float = 0.0) -> float:
    """Return a finite, non-negative float view of ``value``."""

    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug("Failed to coerce %r to an amount; falling back to %s", value, default)
        return default
    if not math.isfinite(number):
        logger.debug("Non-finite amount %r coerced to %s", value, default)
        return default
    if number < 0:
        logger.debug("Negative amount %r clamped to 0", value)
        return 0.0
    return number
