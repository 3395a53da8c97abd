"""Text rendering for EV breakdowns and decision explanations.

Output uses light markdown (``**bold**``) so the presentation layer can
render emphasis without re-deriving any numbers.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from .models import Action, ActionEV, EVResult

__all__ = [
    "concept_for",
    "format_dollars",
    "format_explanation",
    "format_percent",
    "quick_check_explanation",
]

_CONCEPTS: dict[Action, str] = {
    Action.CALL: "using direct pot odds to make a profitable call",
    Action.FOLD: "avoiding negative-EV spots through disciplined folding",
    Action.RAISE: "creating fold equity and extracting value with aggression",
    Action.CHECK: "controlling pot size with marginal equity",
}
_DEFAULT_CONCEPT = "balancing pot odds and fold equity"


def _finite(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def format_dollars(value: Any) -> str:
    number = _finite(value)
    return "0.00" if number is None else f"{number:.2f}"


def format_percent(value: Any) -> str:
    number = _finite(value)
    return "0.00%" if number is None else f"{number:.2f}%"


def concept_for(action: Action | None) -> str:
    if action is None:
        return _DEFAULT_CONCEPT
    return _CONCEPTS.get(action, _DEFAULT_CONCEPT)


def _pot_odds_summary(result: EVResult, amount_to_call: float) -> str:
    if amount_to_call > 0:
        return (
            f"Pot odds: call ${format_dollars(amount_to_call)} to win "
            f"${format_dollars(result.total_pot_if_call)}, which requires "
            f"**{format_percent(result.pot_odds)}** equity."
        )
    return "No one has bet yet, so checking keeps your investment at $0."


def _ev_summary(per_action: Sequence[ActionEV]) -> str:
    return "\n".join(f"EV({entry.action.value}) = ${format_dollars(entry.ev)}" for entry in per_action)


def format_explanation(
    result: EVResult,
    *,
    user_action: str,
    correct: bool,
    amount_to_call: float,
    range_summary: str,
    hand: str | None = None,
) -> str:
    optimal = result.optimal_action.value
    comparison = "exceeds" if result.hero_equity > result.required_equity else "falls short of"
    detail_lines = "\n".join(f"- {entry.line}" for entry in result.per_action)
    verdict = "Optimal" if correct else "Incorrect"
    your_hand = f"your hand ({hand})" if hand else "your hand"

    return f"""
Your choice to **{user_action}** was **{verdict}**.

**Primary Justification:**
The optimal play was to **{optimal}**. {_pot_odds_summary(result, amount_to_call)}
Given the opponent's range ({range_summary}), {your_hand} has approximately \
**{result.hero_equity:.2f}%** equity versus the required **{result.required_equity:.2f}%** to continue, \
so your current equity {comparison} the threshold.

**EV Summary:**
{_ev_summary(result.per_action)}

**EV formulas by action:**
{detail_lines}

**Conceptual Takeaway:**
This hand illustrates the principle of **{concept_for(result.optimal_action)}**.
"""


def quick_check_explanation(*, equity: float, required_equity: float, outs: int, preflop: bool) -> str:
    """Short heuristic summary used when the full EV explanation is unavailable."""

    if preflop:
        return (
            f"Quick check: your starting hand rates around {equity:.2f}% equity before the flop. "
            f"Pot odds require {required_equity:.2f}% to continue."
        )
    return (
        f"Quick check: your draw has about {equity:.2f}% equity from roughly {outs} outs. "
        f"Pot odds require {required_equity:.2f}% to call."
    )
