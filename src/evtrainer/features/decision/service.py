from __future__ import annotations

import logging

from ...core.errors import TrainerError
from ...core.ev import required_equity
from ...core.formatting import quick_check_explanation
from ...core.judge import judge_rule_choice
from ...core.models import Action, Judgement
from ...dynamic.best_hand import BestHand, best_hand
from ...dynamic.equity import estimate_equity
from ...dynamic.outs import calculate_outs
from .analysis import analyze_with_judgement, build_rule_context
from .schemas import DecisionInput, FeedbackPayload, JudgementPayload

__all__ = ["DecisionService", "display_action", "rule_verdict"]

logger = logging.getLogger(__name__)


def display_action(action: Action, amount_to_call: float) -> str:
    if action is Action.CALL and amount_to_call > 0:
        return "Check/Call"
    return action.value


def rule_verdict(judgement: Judgement, amount_to_call: float) -> str:
    if judgement.correct:
        return f"Correct! {judgement.reason}"
    best = display_action(judgement.recommended, amount_to_call)
    return f"Incorrect. The best move is to {best} because {judgement.reason}"


def _judgement_payload(judgement: Judgement) -> JudgementPayload:
    return JudgementPayload(
        recommended=judgement.recommended.value,
        user_action=judgement.user_action.value if judgement.user_action is not None else None,
        correct=judgement.correct,
        reason=judgement.reason,
        ev_loss=judgement.ev_loss,
    )


class DecisionService:
    """Grade one user action with both the EV model and the rule table.

    The EV explanation is the message whenever the full analysis can be built.
    Otherwise the rule verdict is shown together with a quick heuristic check.
    """

    def _best_hand(self, decision: DecisionInput) -> BestHand | None:
        try:
            return best_hand(decision.hero + decision.board)
        except TrainerError as exc:
            logger.debug("No made hand for rule lookup: %s", exc)
            return None

    def _quick_check(self, decision: DecisionInput) -> str:
        hero, board = decision.hero, decision.board
        outs = calculate_outs(hero, board)
        return quick_check_explanation(
            equity=estimate_equity(hero, board, outs=outs),
            required_equity=required_equity(
                decision.pot_size, decision.effective_bet, decision.amount_to_call
            ),
            outs=outs.total,
            preflop=not board,
        )

    def evaluate(self, decision: DecisionInput, user_action: str | Action) -> FeedbackPayload:
        ctx = build_rule_context(decision, self._best_hand(decision))
        rule = judge_rule_choice(user_action, ctx, decision.amount_to_call)
        verdict = rule_verdict(rule, decision.amount_to_call)

        try:
            analysis, ev = analyze_with_judgement(decision, user_action)
        except TrainerError as exc:
            logger.warning("EV analysis unavailable (%s); falling back to rule feedback", exc)
            return FeedbackPayload(
                correct=rule.correct,
                message=f"{verdict}\n\n{self._quick_check(decision)}",
                verdict=verdict,
                rule_judgement=_judgement_payload(rule),
            )

        return FeedbackPayload(
            correct=analysis.correct,
            message=analysis.explanation,
            verdict=verdict,
            rule_judgement=_judgement_payload(rule),
            ev_judgement=_judgement_payload(ev),
            analysis=analysis,
        )
