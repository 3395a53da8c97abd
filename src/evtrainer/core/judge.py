"""Grade a user's action.

Two independent verdicts are produced:

* the EV verdict compares the action with the EV engine's optimal action;
* the rule verdict consults a fixed table keyed on made-hand category, draws,
  bet size, table size and kicker. Rules are evaluated top to bottom and the
  first match wins, so the table order *is* the precedence.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..dynamic.best_hand import FLUSH_DRAW, STRAIGHT_DRAW
from ..dynamic.hand_eval import HandCategory
from ..dynamic.hand_state import safe_amount
from .formatting import concept_for
from .models import Action, EVResult, Judgement

__all__ = [
    "BetSize",
    "RULES",
    "Rule",
    "RuleContext",
    "classify_bet",
    "judge_ev_choice",
    "judge_rule_choice",
    "matching_rule",
    "normalize_action",
    "recommend_action",
    "same_bucket",
]


class BetSize(str, Enum):
    NONE = "none"
    SMALL = "small"
    LARGE = "large"


_LARGE_WORDS: Final = ("all in", "full pot", "shove")
_SMALL_WORDS: Final = ("half pot", "checks", "limp")


def classify_bet(
    *,
    amount_to_call: float,
    bet_size: float,
    pot: float,
    effective_stack: float = 0.0,
    description: str | None = None,
) -> BetSize:
    """Bucket the pressure the hero is facing.

    A textual description of the opponent's action wins when it contains a
    known keyword; otherwise a bet of at least the pot (or the whole stack)
    is large.
    """

    call = safe_amount(amount_to_call)
    if description:
        text = description.lower()
        if any(word in text for word in _LARGE_WORDS):
            return BetSize.LARGE
        if any(word in text for word in _SMALL_WORDS):
            return BetSize.SMALL if call > 0 else BetSize.NONE
    if call <= 0:
        return BetSize.NONE
    bet = safe_amount(bet_size)
    stack = safe_amount(effective_stack)
    if bet >= safe_amount(pot) or (stack > 0 and call >= stack):
        return BetSize.LARGE
    return BetSize.SMALL


@dataclass(frozen=True)
class RuleContext:
    category: HandCategory | None
    draws: tuple[str, ...] = ()
    bet_size: BetSize = BetSize.NONE
    num_opponents: int = 1
    top_hole_rank: int = 0

    @property
    def has_draw(self) -> bool:
        return bool(self.draws)

    @property
    def flush_draw(self) -> bool:
        return FLUSH_DRAW in self.draws

    @property
    def straight_draw(self) -> bool:
        return STRAIGHT_DRAW in self.draws

    @property
    def large_bet(self) -> bool:
        return self.bet_size is BetSize.LARGE

    @property
    def small_bet(self) -> bool:
        # A check-around counts as the cheapest possible "small" bet.
        return self.bet_size is not BetSize.LARGE

    @property
    def many_players(self) -> bool:
        return self.num_opponents >= 3

    @property
    def ace_kicker(self) -> bool:
        return self.top_hole_rank >= 14

    @property
    def king_kicker(self) -> bool:
        return self.top_hole_rank >= 13


@dataclass(frozen=True)
class Rule:
    name: str
    predicate: Callable[[RuleContext], bool]
    action: Action
    reason: str


_PREMIUM: Final = frozenset(
    {HandCategory.FULL_HOUSE, HandCategory.FLUSH, HandCategory.FOUR_OF_A_KIND, HandCategory.STRAIGHT_FLUSH}
)
_STRONG: Final = frozenset({HandCategory.STRAIGHT, HandCategory.THREE_OF_A_KIND, HandCategory.TWO_PAIR})


def _pair(ctx: RuleContext) -> bool:
    return ctx.category is HandCategory.PAIR


def _high_card(ctx: RuleContext) -> bool:
    return ctx.category is HandCategory.HIGH_CARD


RULES: Final[tuple[Rule, ...]] = (
    Rule(
        "premium_made_hand",
        lambda c: c.category in _PREMIUM,
        Action.RAISE,
        "Premium made hands should press for value.",
    ),
    Rule(
        "strong_hand_vs_large_bet",
        lambda c: c.category in _STRONG and c.large_bet,
        Action.CALL,
        "A strong hand can withstand pressure but pot control protects you.",
    ),
    Rule(
        "strong_hand",
        lambda c: c.category in _STRONG,
        Action.RAISE,
        "Strong holdings should build the pot against weaker ranges.",
    ),
    Rule(
        "pair_strong_kicker_vs_large_bet",
        lambda c: _pair(c) and c.large_bet and (c.ace_kicker or (c.king_kicker and c.num_opponents <= 2)),
        Action.CALL,
        "Top pair with strong kicker can withstand pressure.",
    ),
    Rule(
        "pair_vs_large_bet",
        lambda c: _pair(c) and c.large_bet,
        Action.FOLD,
        "A single pair rarely holds against heavy aggression without a strong kicker.",
    ),
    Rule(
        "pair_ace_kicker",
        lambda c: _pair(c) and c.ace_kicker,
        Action.RAISE,
        "Top pair with ace kicker should build the pot.",
    ),
    Rule(
        "pair",
        _pair,
        Action.CALL,
        "A small bet can be called to see the next card with a marginal hand.",
    ),
    Rule(
        "flush_draw_multiway",
        lambda c: c.flush_draw and c.many_players,
        Action.CALL,
        "Flush draws gain value multi-way thanks to better pot odds.",
    ),
    Rule(
        "draw_priced_in",
        lambda c: (c.flush_draw or c.straight_draw) and not c.large_bet,
        Action.CALL,
        "Reasonably priced bets justify chasing your draw.",
    ),
    Rule(
        "draw_too_expensive",
        lambda c: c.has_draw,
        Action.FOLD,
        "When the price is steep, folding draws preserves your stack.",
    ),
    Rule(
        "ace_high",
        lambda c: _high_card(c) and c.ace_kicker and not c.large_bet,
        Action.CALL,
        "Ace high can still be ahead when the pressure is modest.",
    ),
    Rule(
        "king_high_small_bet",
        lambda c: _high_card(c) and c.king_kicker and c.small_bet,
        Action.CALL,
        "High cards like kings can justify calling small bets.",
    ),
    Rule(
        "weak_holding",
        _high_card,
        Action.FOLD,
        "Weak holdings should usually be folded when facing action.",
    ),
    Rule(
        "small_bet_default",
        lambda c: c.small_bet,
        Action.CALL,
        "Inconsequential bets can be called with moderate strength.",
    ),
    Rule(
        "default",
        lambda c: True,
        Action.FOLD,
        "Without a made hand or draw, folding avoids marginal spots.",
    ),
)

_NO_INFO_REASON: Final = "Without enough information, calling keeps the pot manageable."


def matching_rule(ctx: RuleContext, rules: Sequence[Rule] = RULES) -> Rule:
    for rule in rules:
        if rule.predicate(ctx):
            return rule
    raise LookupError("Rule table has no catch-all entry")


def recommend_action(ctx: RuleContext | None) -> tuple[Action, str]:
    if ctx is None or ctx.category is None:
        return Action.CALL, _NO_INFO_REASON
    rule = matching_rule(ctx)
    return rule.action, rule.reason


_ALIASES: Final[dict[str, Action]] = {
    "fold": Action.FOLD,
    "check": Action.CHECK,
    "call": Action.CALL,
    "raise": Action.RAISE,
    "bet": Action.RAISE,
}


def normalize_action(text: str | Action | None, amount_to_call: float) -> Action:
    """Map a user's button label onto the action legal at this price.

    ``Check/Call`` resolves to whichever passive action is legal, ``Call``
    with nothing to call means Check, and an empty label means Fold.
    """

    call = safe_amount(amount_to_call)
    if isinstance(text, Action):
        key = text.value.lower()
    else:
        key = (text or "").strip().lower()
    if not key:
        return Action.FOLD
    if key in ("check/call", "check-call", "check or call"):
        return Action.CALL if call > 0 else Action.CHECK
    try:
        action = _ALIASES[key]
    except KeyError:
        raise ValueError(f"Unknown action: {text!r}") from None
    if action is Action.CALL and call <= 0:
        return Action.CHECK
    return action


def same_bucket(first: Action, second: Action, amount_to_call: float) -> bool:
    if first is second:
        return True
    return safe_amount(amount_to_call) <= 0 and first.is_passive and second.is_passive


def judge_ev_choice(user_action: str | Action, result: EVResult, amount_to_call: float) -> Judgement:
    chosen = normalize_action(user_action, amount_to_call)
    optimal = result.optimal_action
    correct = same_bucket(chosen, optimal, amount_to_call)
    chosen_ev = result.ev_of(chosen)
    if chosen_ev is None:
        # Checking into a bet gives up the pot like a fold.
        chosen_ev = 0.0
    ev_loss = 0.0 if correct else max(0.0, result.optimal_ev - chosen_ev)
    reason = f"The optimal play was to {optimal.value}, {concept_for(optimal)}."
    return Judgement(recommended=optimal, user_action=chosen, correct=correct, reason=reason, ev_loss=ev_loss)


def judge_rule_choice(user_action: str | Action, ctx: RuleContext | None, amount_to_call: float) -> Judgement:
    chosen = normalize_action(user_action, amount_to_call)
    recommended, reason = recommend_action(ctx)
    if recommended is Action.CALL and safe_amount(amount_to_call) <= 0:
        recommended = Action.CHECK
    correct = same_bucket(chosen, recommended, amount_to_call)
    return Judgement(recommended=recommended, user_action=chosen, correct=correct, reason=reason)
