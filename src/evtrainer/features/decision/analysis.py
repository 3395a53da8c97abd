from __future__ import annotations

import logging

from ...core.errors import InsufficientCardsError
from ...core.ev import compute_ev
from ...core.formatting import concept_for, format_explanation
from ...core.judge import RuleContext, classify_bet, judge_ev_choice
from ...core.models import Action, ActionEV, EVResult, Judgement
from ...dynamic.best_hand import BestHand, best_hand
from ...dynamic.cards import canonical_hand_abbrev, format_cards_spaced
from ...dynamic.equity import estimate_equity
from ...dynamic.outs import OutsReport, calculate_outs
from .schemas import (
    ActionEVPayload,
    AlternativePayload,
    DecisionAnalysis,
    DecisionInput,
    FormulaComponentPayload,
    HandPayload,
    OutsCategories,
    OutsPayload,
)

__all__ = [
    "analyze_decision",
    "analyze_with_judgement",
    "build_rule_context",
    "evaluate_decision_ev",
    "hand_payload",
    "outs_payload",
]

logger = logging.getLogger(__name__)


def hand_payload(best: BestHand) -> HandPayload:
    return HandPayload(
        name=best.name,
        draw=best.draw_label,
        cards=best.codes,
        display=format_cards_spaced(best.hand.cards),
    )


def outs_payload(report: OutsReport) -> OutsPayload:
    return OutsPayload(
        total=report.total,
        cards=list(report.cards),
        categories=OutsCategories(
            flush=list(report.flush),
            straight=list(report.straight),
            rank_improvement=list(report.rank_improvement),
        ),
    )


def _action_payload(entry: ActionEV) -> ActionEVPayload:
    return ActionEVPayload(
        action=entry.action.value,
        ev=entry.ev,
        explanation=entry.explanation,
        line=entry.line,
        components=[
            FormulaComponentPayload(label=c.label, value=c.value, kind=c.kind) for c in entry.components
        ],
        note=entry.note,
    )


def build_rule_context(decision: DecisionInput, best: BestHand | None) -> RuleContext:
    """Collect the facts the rule table keys on."""

    hero = decision.hero
    return RuleContext(
        category=best.category if best is not None else None,
        draws=best.draws if best is not None else (),
        bet_size=classify_bet(
            amount_to_call=decision.amount_to_call,
            bet_size=decision.effective_bet,
            pot=decision.pot_size,
            effective_stack=decision.effective_stack,
            description=decision.opponent_action,
        ),
        num_opponents=decision.num_opponents,
        top_hole_rank=max((c.rank for c in hero), default=0),
    )


def evaluate_decision_ev(decision: DecisionInput) -> tuple[BestHand, OutsReport, EVResult]:
    hero = decision.hero
    if len(hero) < 2:
        raise InsufficientCardsError(2, len(hero))
    board = decision.board
    best = best_hand(hero + board)
    outs = calculate_outs(hero, board)
    equity = estimate_equity(hero, board, outs=outs)
    result = compute_ev(
        pot=decision.pot_size,
        amount_to_call=decision.amount_to_call,
        bet_size=decision.effective_bet,
        equity=equity,
        fold_equity=decision.opponent_archetype.fold_equity,
    )
    logger.debug(
        "EV on %s: equity=%.2f required=%.2f optimal=%s",
        decision.street.value,
        result.hero_equity,
        result.required_equity,
        result.optimal_action.value,
    )
    return best, outs, result


def analyze_decision(decision: DecisionInput, user_action: str | Action = "Call") -> DecisionAnalysis:
    """Full EV breakdown for one decision point, graded against ``user_action``.

    The output depends only on the inputs; repeated calls return equal payloads.
    """

    analysis, _ = analyze_with_judgement(decision, user_action)
    return analysis


def analyze_with_judgement(
    decision: DecisionInput, user_action: str | Action = "Call"
) -> tuple[DecisionAnalysis, Judgement]:
    best, outs, result = evaluate_decision_ev(decision)
    judgement = judge_ev_choice(user_action, result, decision.amount_to_call)
    chosen = judgement.user_action.value if judgement.user_action is not None else str(user_action)
    archetype = decision.opponent_archetype
    starting_hand = canonical_hand_abbrev(decision.hero)
    explanation = format_explanation(
        result,
        user_action=chosen,
        correct=judgement.correct,
        amount_to_call=decision.amount_to_call,
        range_summary=archetype.range_summary,
        hand=starting_hand,
    )
    analysis = DecisionAnalysis(
        street=decision.street,
        starting_hand=starting_hand,
        hand=hand_payload(best),
        outs=outs_payload(outs),
        ev_details=[_action_payload(entry) for entry in result.per_action],
        evs={action.value: ev for action, ev in result.evs.items()},
        required_equity=result.required_equity,
        hero_equity=result.hero_equity,
        fold_equity=result.fold_equity,
        pot_odds=result.pot_odds,
        implied_odds=result.implied_odds,
        total_pot_if_call=result.total_pot_if_call,
        pot_size=decision.pot_size,
        opponent_bet=decision.effective_bet,
        amount_to_call=decision.amount_to_call,
        optimal_action=result.optimal_action.value,
        optimal_ev=result.optimal_ev,
        alternatives=[AlternativePayload(action=a.value, ev=ev) for a, ev in result.alternatives],
        range_summary=archetype.range_summary,
        range_combos=archetype.combo_count,
        concept=concept_for(result.optimal_action),
        user_action=chosen,
        correct=judgement.correct,
        explanation=explanation,
    )
    return analysis, judgement
