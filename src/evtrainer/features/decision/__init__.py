"""Decision feature: input contract, EV analysis pipeline, and feedback service."""

from .analysis import analyze_decision, analyze_with_judgement, build_rule_context
from .schemas import (
    ActionEVPayload,
    DecisionAnalysis,
    DecisionInput,
    FeedbackPayload,
    HandPayload,
    JudgementPayload,
    OutsPayload,
)
from .service import DecisionService

__all__ = [
    "ActionEVPayload",
    "DecisionAnalysis",
    "DecisionInput",
    "DecisionService",
    "FeedbackPayload",
    "HandPayload",
    "JudgementPayload",
    "OutsPayload",
    "analyze_decision",
    "analyze_with_judgement",
    "build_rule_context",
]
