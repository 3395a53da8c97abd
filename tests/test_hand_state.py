from __future__ import annotations

import math

import pytest

from evtrainer.dynamic.hand_state import Street, safe_amount, street_for_board


@pytest.mark.parametrize(
    "count, street",
    [(0, Street.PREFLOP), (3, Street.FLOP), (4, Street.TURN), (5, Street.RIVER)],
)
def test_street_for_board(count, street):
    assert street_for_board(count) is street


@pytest.mark.parametrize("count", [1, 2, 6])
def test_street_for_board_rejects_partial_boards(count):
    with pytest.raises(ValueError):
        street_for_board(count)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0.0),
        ("abc", 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        (-5, 0.0),
        ("12.5", 12.5),
        (7, 7.0),
    ],
)
def test_safe_amount(value, expected):
    assert safe_amount(value) == expected


def test_safe_amount_default_and_logging(caplog):
    with caplog.at_level("DEBUG", logger="evtrainer.dynamic.hand_state"):
        assert safe_amount("n/a", default=1.0) == 1.0
    assert "Failed to coerce" in caplog.text
