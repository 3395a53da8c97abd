from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Action(str, Enum):
    FOLD = "Fold"
    CHECK = "Check"
    CALL = "Call"
    RAISE = "Raise"

    @property
    def is_passive(self) -> bool:
        return self in (Action.CHECK, Action.CALL)


@dataclass(frozen=True)
class FormulaComponent:
    label: str
    value: float
    kind: str  # "percent" or "dollar"


@dataclass(frozen=True)
class ActionEV:
    action: Action
    ev: float
    explanation: str
    line: str
    components: tuple[FormulaComponent, ...] = ()
    note: str | None = None


@dataclass(frozen=True)
class EVResult:
    per_action: tuple[ActionEV, ...]
    optimal_action: Action
    required_equity: float
    hero_equity: float
    fold_equity: float
    pot_odds: float
    implied_odds: float
    total_pot_if_call: float
    raise_size: float

    def ev_of(self, action: Action) -> float | None:
        for entry in self.per_action:
            if entry.action is action:
                return entry.ev
        return None

    @property
    def evs(self) -> dict[Action, float]:
        return {entry.action: entry.ev for entry in self.per_action}

    @property
    def optimal_ev(self) -> float:
        value = self.ev_of(self.optimal_action)
        return 0.0 if value is None else value

    @property
    def alternatives(self) -> list[tuple[Action, float]]:
        return [(e.action, e.ev) for e in self.per_action if e.action is not self.optimal_action]


@dataclass(frozen=True)
class Judgement:
    recommended: Action
    user_action: Action | None
    correct: bool
    reason: str
    ev_loss: float = 0.0
