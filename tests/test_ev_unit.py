from __future__ import annotations

import math

import pytest

from evtrainer.core.errors import DegenerateInputError
from evtrainer.core.ev import compute_ev, implied_odds_needed, pick_optimal, pot_odds, raise_size_for, required_equity
from evtrainer.core.models import Action, ActionEV


def test_required_equity_is_call_share_of_final_pot():
    assert required_equity(20, 20, 20) == pytest.approx(33.3333, rel=1e-4)
    assert required_equity(100, 0, 0) == 0.0


def test_required_equity_with_empty_pot_is_zero():
    assert required_equity(0, 0, 0) == 0.0
    with pytest.raises(DegenerateInputError):
        pot_odds(0, 0)


def test_call_spot_matches_worked_example():
    result = compute_ev(pot=20, amount_to_call=20, bet_size=20, equity=45)
    assert [entry.action for entry in result.per_action] == [Action.FOLD, Action.CALL, Action.RAISE]
    assert result.ev_of(Action.CALL) == pytest.approx(16.0)
    assert result.ev_of(Action.RAISE) == pytest.approx(0.3 * 40 - 0.7 * 20)
    assert result.optimal_action is Action.CALL
    assert result.total_pot_if_call == 60
    assert result.raise_size == 20
    call = result.per_action[1]
    assert call.line == "Call: EV = 45.00% × $60.00 − 55.00% × $20.00 = $16.00"
    assert [c.kind for c in call.components] == ["percent", "dollar", "percent", "dollar"]


def test_check_spot_has_no_call_entry():
    result = compute_ev(pot=10, amount_to_call=0, bet_size=None, equity=40)
    assert set(result.evs) == {Action.FOLD, Action.CHECK, Action.RAISE}
    assert result.ev_of(Action.CALL) is None
    assert result.ev_of(Action.CHECK) == pytest.approx(4.0)
    assert result.raise_size == pytest.approx(7.5)
    assert result.required_equity == 0.0
    assert result.optimal_action is Action.CHECK


@pytest.mark.parametrize(
    "pot, call, bet, equity",
    [(20, 20, 20, 45), (10, 0, None, 40), (0, 0, 0, 0), (150, 40, 40, 12)],
)
def test_fold_is_always_zero(pot, call, bet, equity):
    result = compute_ev(pot=pot, amount_to_call=call, bet_size=bet, equity=equity)
    assert result.per_action[0].action is Action.FOLD
    assert result.per_action[0].ev == 0.0


def test_ties_go_to_the_earlier_action():
    # Empty pot: Fold and Check both return 0 and the raise loses money.
    result = compute_ev(pot=0, amount_to_call=0, bet_size=0, equity=0)
    assert result.ev_of(Action.CHECK) == 0.0
    assert result.optimal_action is Action.FOLD
    entries = [
        ActionEV(Action.FOLD, 0.0, "", ""),
        ActionEV(Action.CALL, 5.0, "", ""),
        ActionEV(Action.RAISE, 5.0, "", ""),
    ]
    assert pick_optimal(entries) is Action.CALL


def test_raise_size_rules():
    assert raise_size_for(pot=100, bet_size=30, amount_to_call=30) == 30
    assert raise_size_for(pot=100, bet_size=0, amount_to_call=0) == 75
    assert raise_size_for(pot=0, bet_size=0, amount_to_call=0) == 1.0


def test_missing_bet_defaults_to_call_and_bad_numbers_become_zero():
    result = compute_ev(pot=float("nan"), amount_to_call=10, bet_size=None, equity=50)
    assert result.total_pot_if_call == 20
    result = compute_ev(pot="abc", amount_to_call=-5, bet_size=math.inf, equity=150)
    assert result.total_pot_if_call == 0
    assert result.hero_equity == 100.0


def test_implied_odds_needed():
    assert implied_odds_needed(20, 0.45, 60) == 0.0
    assert implied_odds_needed(20, 0.1, 60) == pytest.approx(140.0)
    assert implied_odds_needed(20, 0.0, 60) == 0.0


def test_optimal_ev_and_alternatives():
    result = compute_ev(pot=20, amount_to_call=20, bet_size=20, equity=45)
    assert result.optimal_ev == pytest.approx(16.0)
    assert [action for action, _ in result.alternatives] == [Action.FOLD, Action.RAISE]
    assert result.fold_equity == pytest.approx(30.0)
