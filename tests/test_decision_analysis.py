from __future__ import annotations

import pytest
from pydantic import ValidationError

from evtrainer.core.errors import InsufficientCardsError, ParseError
from evtrainer.dynamic.hand_state import Street
from evtrainer.dynamic.range_model import OpponentArchetype
from evtrainer.features.decision import DecisionInput, analyze_decision


def _flush_draw_spot(**overrides) -> DecisionInput:
    payload = {
        "potSize": 20,
        "amountToCall": 20,
        "betSize": 20,
        "heroHoleCards": ["AH", "KH"],
        "boardCards": ["QH", "7H", "2D"],
        "opponentArchetype": "Nit",
    }
    payload.update(overrides)
    return DecisionInput.model_validate(payload)


def test_flop_flush_draw_analysis():
    analysis = analyze_decision(_flush_draw_spot(), "Call")
    assert analysis.street is Street.FLOP
    assert analysis.hand.name == "High Card"
    assert analysis.hand.draw == "Flush Draw"
    assert analysis.hand.cards == ["AH", "KH", "QH", "7H", "2D"]
    assert analysis.outs.total == 23
    assert len(analysis.outs.categories.flush) == 9
    assert analysis.hero_equity == pytest.approx(77.0)
    assert analysis.required_equity == pytest.approx(33.3333, rel=1e-4)
    assert analysis.evs["Call"] == pytest.approx(0.77 * 60 - 0.23 * 20)
    assert analysis.optimal_action == "Call"
    assert analysis.correct is True
    assert analysis.range_combos == 88
    assert analysis.starting_hand == "AKs"
    assert analysis.hand.display == "AH KH QH 7H 2D"
    assert [entry.action for entry in analysis.ev_details] == ["Fold", "Call", "Raise"]


def test_explanation_layout():
    analysis = analyze_decision(_flush_draw_spot(), "Raise")
    text = analysis.explanation
    assert "Your choice to **Raise** was **Incorrect**." in text
    assert "The optimal play was to **Call**." in text
    assert "Pot odds: call $20.00 to win $60.00, which requires **33.33%** equity." in text
    assert "(77+, AJs+, KQs, AQo+)" in text
    assert "your hand (AKs) has approximately **77.00%** equity" in text
    assert "so your current equity exceeds the threshold." in text
    assert "EV(Fold) = $0.00" in text
    assert "- Call: EV = 77.00% × $60.00 − 23.00% × $20.00 = $41.60" in text
    assert "**using direct pot odds to make a profitable call**" in text


def test_analysis_is_deterministic():
    decision = _flush_draw_spot()
    first = analyze_decision(decision, "Fold")
    second = analyze_decision(decision, "Fold")
    assert first.model_dump_json() == second.model_dump_json()


def test_to_dict_uses_camel_case_and_drops_none():
    data = analyze_decision(_flush_draw_spot()).to_dict()
    assert {"requiredEquity", "heroEquity", "evDetails", "totalPotIfCall", "rangeSummary"} <= set(data)
    assert "rankImprovement" in data["outs"]["categories"]
    fold = data["evDetails"][0]
    assert "note" not in fold
    assert data["evDetails"][2]["note"].startswith("Assumes opponents fold")


def test_preflop_pocket_aces():
    decision = DecisionInput(
        pot_size=3, amount_to_call=2, hero_hole_cards=["AS", "AH"], opponent_archetype=OpponentArchetype.LAG
    )
    analysis = analyze_decision(decision, "Check/Call")
    assert analysis.street is Street.PREFLOP
    assert analysis.hero_equity == 74.0
    assert analysis.outs.total == 0
    assert analysis.opponent_bet == 2
    assert analysis.optimal_action == "Call"
    assert analysis.user_action == "Call"
    assert analysis.correct


def test_check_spot_offers_check_not_call():
    decision = DecisionInput(pot_size=10, hero_hole_cards=["9D", "3C"], board_cards=["AS", "KD", "7C", "2H"])
    analysis = analyze_decision(decision, "Call")
    assert set(analysis.evs) == {"Fold", "Check", "Raise"}
    assert analysis.user_action == "Check"
    assert analysis.required_equity == 0.0
    assert "No one has bet yet" in analysis.explanation


def test_river_uses_flat_equity():
    decision = _flush_draw_spot(boardCards=["QH", "7H", "2D", "3C", "9S"])
    assert analyze_decision(decision).hero_equity == 5.0


def test_input_coercion():
    decision = DecisionInput.model_validate(
        {"potSize": "abc", "effectiveStack": float("nan"), "amountToCall": 5, "numOpponents": None}
    )
    assert decision.pot_size == 0.0
    assert decision.effective_stack == 0.0
    assert decision.bet_size is None
    assert decision.effective_bet == 5
    assert decision.num_opponents == 1
    assert decision.opponent_archetype is OpponentArchetype.DEFAULT


def test_cards_are_canonicalised():
    decision = DecisionInput(hero_hole_cards=["th", "as"], board_cards=["2c", "", "3d", "4s"])
    assert decision.hero_hole_cards == ("0H", "AS")
    assert decision.board_cards == ("2C", "3D", "4S")


@pytest.mark.parametrize(
    "payload",
    [
        {"boardCards": ["2C", "3D"]},
        {"heroHoleCards": ["AS", "KS", "QS"]},
        {"heroHoleCards": "ASKS"},
        {"opponentArchetype": "Maniac"},
    ],
)
def test_schema_rejects_bad_shapes(payload):
    with pytest.raises(ValidationError):
        DecisionInput.model_validate(payload)


def test_bad_card_identifier_raises_parse_error():
    with pytest.raises(ParseError):
        DecisionInput.model_validate({"heroHoleCards": ["ZZ", "AS"]})


def test_analysis_needs_two_hole_cards():
    with pytest.raises(InsufficientCardsError):
        analyze_decision(DecisionInput(hero_hole_cards=["AS"], board_cards=["2C", "3D", "4S"]))


def test_archetype_serialises_as_label():
    decision = _flush_draw_spot(opponentArchetype="calling station")
    assert decision.to_dict()["opponentArchetype"] == "Calling Station"


@pytest.mark.parametrize(
    "hero, board",
    [
        (["AH", "AH"], ["AS", "7C", "2D"]),
        (["AH", "KD"], ["AH", "7C", "2D"]),
        (["TH", "KD"], ["0H", "7C", "2D"]),
        (["AS", "KD"], ["7C", "2D", "9H", "7C"]),
    ],
)
def test_repeated_card_is_rejected(hero, board):
    with pytest.raises(ValidationError):
        DecisionInput(pot_size=10, hero_hole_cards=hero, board_cards=board)


def test_preflop_hand_is_named_in_explanation():
    decision = DecisionInput(pot_size=3, amount_to_call=2, hero_hole_cards=["7H", "7C"])
    analysis = analyze_decision(decision)
    assert analysis.starting_hand == "77"
    assert analysis.hand.display == "7H 7C"
    assert "your hand (77) has approximately" in analysis.explanation
