"""Exception taxonomy for the decision engine.

None of these derive from ``ValueError`` so they travel through pydantic
validators untouched instead of being folded into a ``ValidationError``.
"""

from __future__ import annotations

__all__ = [
    "DegenerateInputError",
    "InsufficientCardsError",
    "ParseError",
    "TrainerError",
]


class TrainerError(Exception):
    """Base class for every error raised by the evaluation pipeline."""


class ParseError(TrainerError):
    """A card identifier could not be parsed."""

    def __init__(self, token: object, detail: str = "") -> None:
        self.token = token
        message = f"Bad card identifier: {token!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InsufficientCardsError(TrainerError):
    """Fewer cards were supplied than the evaluation needs."""

    def __init__(self, needed: int, got: int) -> None:
        self.needed = needed
        self.got = got
        super().__init__(f"Need at least {needed} cards, got {got}")


class DegenerateInputError(TrainerError):
    """A price comparison was requested with nothing in the pot."""
