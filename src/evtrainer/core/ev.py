"""Expected-value model for Fold / Check-or-Call / Raise.

The model is intentionally simple: calling and checking realise the hero's
equity share of the pot, and raising is priced purely on fold equity (the
opponent either folds now or the raise is treated as lost). All amounts are
in dollars; equities are percentages.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..dynamic.hand_state import safe_amount
from ..dynamic.range_model import BASELINE_FOLD_EQUITY
from .errors import DegenerateInputError
from .formatting import format_dollars, format_percent
from .models import Action, ActionEV, EVResult, FormulaComponent

__all__ = [
    "compute_ev",
    "implied_odds_needed",
    "pick_optimal",
    "pot_odds",
    "raise_size_for",
    "required_equity",
]

logger = logging.getLogger(__name__)

RAISE_POT_FRACTION = 0.75
MIN_RAISE = 1.0


def pot_odds(amount_to_call: float, total_pot_if_call: float) -> float:
    """Fraction of the final pot the hero must put in to call."""

    if total_pot_if_call <= 0:
        raise DegenerateInputError("No money in the pot to price a call against")
    return amount_to_call / total_pot_if_call


def required_equity(pot: float, bet_size: float, amount_to_call: float) -> float:
    """Break-even equity for calling, as a percentage (0 when nothing is owed)."""

    total = pot + bet_size + amount_to_call
    try:
        return pot_odds(amount_to_call, total) * 100.0
    except DegenerateInputError:
        logger.debug("Empty pot with nothing to call; required equity treated as 0")
        return 0.0


def raise_size_for(pot: float, bet_size: float, amount_to_call: float) -> float:
    if amount_to_call > 0:
        return bet_size
    return max(bet_size, RAISE_POT_FRACTION * pot, MIN_RAISE)


def implied_odds_needed(amount_to_call: float, win_prob: float, total_pot_if_call: float) -> float:
    """Extra future winnings needed for a call to break even."""

    if win_prob <= 0:
        return 0.0
    return max(0.0, amount_to_call / win_prob - total_pot_if_call)


def pick_optimal(per_action: Sequence[ActionEV]) -> Action:
    # Strictly greater only: on equal EV the earlier entry (Fold, Check/Call, Raise) wins.
    best = per_action[0]
    for entry in per_action[1:]:
        if entry.ev > best.ev:
            best = entry
    return best.action


def _fold() -> ActionEV:
    return ActionEV(
        action=Action.FOLD,
        ev=0.0,
        explanation="You give up the contested pot immediately, so EV = 0.",
        line="Fold: EV = 0 (you concede the pot).",
    )


def _call(win_prob: float, total_pot_if_call: float, amount_to_call: float) -> ActionEV:
    lose_prob = 1.0 - win_prob
    ev = win_prob * total_pot_if_call - lose_prob * amount_to_call
    line = (
        f"Call: EV = {format_percent(win_prob * 100)} × ${format_dollars(total_pot_if_call)} − "
        f"{format_percent(lose_prob * 100)} × ${format_dollars(amount_to_call)} = ${format_dollars(ev)}"
    )
    return ActionEV(
        action=Action.CALL,
        ev=ev,
        explanation="EV = win% × amount won − lose% × amount lost.",
        line=line,
        components=(
            FormulaComponent("Win %", win_prob * 100, "percent"),
            FormulaComponent("Amount won when you hit", total_pot_if_call, "dollar"),
            FormulaComponent("Lose %", lose_prob * 100, "percent"),
            FormulaComponent("Amount lost when you miss", amount_to_call, "dollar"),
        ),
    )


def _check(win_prob: float, pot: float) -> ActionEV:
    ev = win_prob * pot
    line = (
        f"Check: EV = {format_percent(win_prob * 100)} × ${format_dollars(pot)} − "
        f"{format_percent((1.0 - win_prob) * 100)} × $0.00 = ${format_dollars(ev)}"
    )
    return ActionEV(
        action=Action.CHECK,
        ev=ev,
        explanation="EV = win% × current pot; checking risks $0 on this street.",
        line=line,
        components=(
            FormulaComponent("Win %", win_prob * 100, "percent"),
            FormulaComponent("Pot awarded on showdown", pot, "dollar"),
        ),
    )


def _raise(fold_equity: float, pot: float, raise_size: float) -> ActionEV:
    continue_prob = 1.0 - fold_equity
    win_amount = pot + raise_size
    ev = fold_equity * win_amount - continue_prob * raise_size
    line = (
        f"Raise: EV = {format_percent(fold_equity * 100)} × ${format_dollars(win_amount)} − "
        f"{format_percent(continue_prob * 100)} × ${format_dollars(raise_size)} = ${format_dollars(ev)} (simplified)"
    )
    return ActionEV(
        action=Action.RAISE,
        ev=ev,
        explanation="EV ≈ fold% × pot won − (1 − fold%) × amount risked (simplified model).",
        line=line,
        components=(
            FormulaComponent("Fold % (estimated)", fold_equity * 100, "percent"),
            FormulaComponent("Pot captured when they fold", win_amount, "dollar"),
            FormulaComponent("Continue %", continue_prob * 100, "percent"),
            FormulaComponent("Amount risked", raise_size, "dollar"),
        ),
        note="Assumes opponents fold at the estimated rate and ignores post-raise runouts.",
    )


def compute_ev(
    *,
    pot: float,
    amount_to_call: float,
    bet_size: float | None,
    equity: float,
    fold_equity: float = BASELINE_FOLD_EQUITY,
) -> EVResult:
    """Price every legal action and pick the best one.

    ``equity`` is the hero's win chance in percent. ``bet_size`` defaults to
    ``amount_to_call`` when omitted; non-finite figures count as zero.
    """

    pot = safe_amount(pot)
    call = safe_amount(amount_to_call)
    bet = call if bet_size is None else safe_amount(bet_size)
    hero_equity = min(max(safe_amount(equity), 0.0), 100.0)
    fe = min(max(safe_amount(fold_equity), 0.0), 1.0)

    win_prob = hero_equity / 100.0
    total_pot_if_call = pot + bet + call
    raise_size = raise_size_for(pot, bet, call)

    per_action = [_fold()]
    if call > 0:
        per_action.append(_call(win_prob, total_pot_if_call, call))
    else:
        per_action.append(_check(win_prob, pot))
    per_action.append(_raise(fe, pot, raise_size))

    required = required_equity(pot, bet, call)
    return EVResult(
        per_action=tuple(per_action),
        optimal_action=pick_optimal(per_action),
        required_equity=required,
        hero_equity=hero_equity,
        fold_equity=fe * 100.0,
        pot_odds=required,
        implied_odds=implied_odds_needed(call, win_prob, total_pot_if_call),
        total_pot_if_call=total_pot_if_call,
        raise_size=raise_size,
    )
