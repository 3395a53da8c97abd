from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ...dynamic.cards import Card, parse_card
from ...dynamic.hand_state import Street, safe_amount, street_for_board
from ...dynamic.range_model import OpponentArchetype

__all__ = [
    "ActionEVPayload",
    "AlternativePayload",
    "DecisionAnalysis",
    "DecisionInput",
    "FeedbackPayload",
    "FormulaComponentPayload",
    "HandPayload",
    "JudgementPayload",
    "OutsCategories",
    "OutsPayload",
]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, frozen=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def _card_codes(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        raise ValueError("cards must be given as a list of two-character identifiers")
    # Empty slots from a partially dealt board are skipped.
    return tuple(parse_card(item).code for item in value if item)


class DecisionInput(_APIModel):
    """One decision point: the betting context plus the visible cards."""

    pot_size: float = 0.0
    effective_stack: float = 0.0
    amount_to_call: float = 0.0
    bet_size: float | None = None
    num_opponents: int = 1
    opponent_archetype: OpponentArchetype = OpponentArchetype.DEFAULT
    opponent_action: str | None = None
    hero_hole_cards: tuple[str, ...] = ()
    board_cards: tuple[str, ...] = ()

    @field_validator("pot_size", "effective_stack", "amount_to_call", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return safe_amount(value)

    @field_validator("bet_size", mode="before")
    @classmethod
    def _coerce_bet(cls, value: Any) -> float | None:
        return None if value is None else safe_amount(value)

    @field_validator("num_opponents", mode="before")
    @classmethod
    def _coerce_opponents(cls, value: Any) -> int:
        return max(1, int(safe_amount(value, default=1.0)))

    @field_validator("opponent_archetype", mode="before")
    @classmethod
    def _parse_archetype(cls, value: Any) -> OpponentArchetype:
        if value is None:
            return OpponentArchetype.DEFAULT
        if isinstance(value, OpponentArchetype):
            return value
        return OpponentArchetype.from_label(str(value))

    @field_validator("hero_hole_cards", mode="before")
    @classmethod
    def _parse_hero(cls, value: Any) -> tuple[str, ...]:
        codes = _card_codes(value)
        if len(codes) > 2:
            raise ValueError(f"hero holds at most 2 cards, got {len(codes)}")
        return codes

    @field_validator("board_cards", mode="before")
    @classmethod
    def _parse_board(cls, value: Any) -> tuple[str, ...]:
        codes = _card_codes(value)
        street_for_board(len(codes))
        return codes

    @model_validator(mode="after")
    def _reject_duplicate_cards(self) -> DecisionInput:
        seen: set[str] = set()
        for code in self.hero_hole_cards + self.board_cards:
            if code in seen:
                raise ValueError(f"card {code} appears more than once")
            seen.add(code)
        return self

    @field_serializer("opponent_archetype")
    def _archetype_label(self, archetype: OpponentArchetype) -> str:
        return archetype.label

    @property
    def hero(self) -> list[Card]:
        return [parse_card(code) for code in self.hero_hole_cards]

    @property
    def board(self) -> list[Card]:
        return [parse_card(code) for code in self.board_cards]

    @property
    def street(self) -> Street:
        return street_for_board(len(self.board_cards))

    @property
    def effective_bet(self) -> float:
        return self.amount_to_call if self.bet_size is None else self.bet_size


class FormulaComponentPayload(_APIModel):
    label: str
    value: float
    kind: str


class ActionEVPayload(_APIModel):
    action: str
    ev: float
    explanation: str
    line: str
    components: list[FormulaComponentPayload] = Field(default_factory=list)
    note: str | None = None


class AlternativePayload(_APIModel):
    action: str
    ev: float


class OutsCategories(_APIModel):
    flush: list[str] = Field(default_factory=list)
    straight: list[str] = Field(default_factory=list)
    rank_improvement: list[str] = Field(default_factory=list)


class OutsPayload(_APIModel):
    total: int = 0
    cards: list[str] = Field(default_factory=list)
    categories: OutsCategories = Field(default_factory=OutsCategories)


class HandPayload(_APIModel):
    name: str
    draw: str | None = None
    cards: list[str] = Field(default_factory=list)
    display: str = ""


class DecisionAnalysis(_APIModel):
    street: Street
    starting_hand: str
    hand: HandPayload
    outs: OutsPayload
    ev_details: list[ActionEVPayload]
    evs: dict[str, float]
    required_equity: float
    hero_equity: float
    fold_equity: float
    pot_odds: float
    implied_odds: float
    total_pot_if_call: float
    pot_size: float
    opponent_bet: float
    amount_to_call: float
    optimal_action: str
    optimal_ev: float
    alternatives: list[AlternativePayload]
    range_summary: str
    range_combos: int
    concept: str
    user_action: str
    correct: bool
    explanation: str


class JudgementPayload(_APIModel):
    recommended: str
    user_action: str | None = None
    correct: bool
    reason: str
    ev_loss: float = 0.0


class FeedbackPayload(_APIModel):
    correct: bool
    message: str
    verdict: str
    rule_judgement: JudgementPayload
    ev_judgement: JudgementPayload | None = None
    analysis: DecisionAnalysis | None = None
