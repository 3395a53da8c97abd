from __future__ import annotations

import random

from evtrainer.dynamic.cards import fresh_deck, parse_cards
from evtrainer.dynamic.outs import OutsReport, calculate_outs, straight_out_ranks


def test_flush_draw_on_flop_counts_every_category():
    report = calculate_outs(["AH", "KH"], ["QH", "7H", "2D"])
    assert report.flush == ("0H", "2H", "3H", "4H", "5H", "6H", "8H", "9H", "JH")
    assert report.straight == ()
    # Every unseen card of a held rank: A, K, Q, 7 and 2.
    assert len(report.rank_improvement) == 15
    assert "2H" in report.flush and "2H" in report.rank_improvement
    assert report.total == 23
    assert report.total == len(report.cards)
    assert list(report.cards) == sorted(report.cards)


def test_open_ended_straight_draw():
    report = calculate_outs(["8S", "9D"], ["0C", "JH", "2S"])
    assert report.straight == ("7C", "7D", "7H", "7S", "QC", "QD", "QH", "QS")
    assert report.flush == ()


def test_wheel_draw_needs_a_five():
    report = calculate_outs(["AS", "2D"], ["3C", "4H", "KS"])
    assert report.straight == ("5C", "5D", "5H", "5S")


def test_five_of_a_suit_has_no_flush_outs():
    report = calculate_outs(["AH", "KH"], ["QH", "7H", "2H"])
    assert report.flush == ()


def test_preflop_has_no_outs():
    report = calculate_outs(["AH", "KH"], [])
    assert report == OutsReport.empty()
    assert report.total == 0
    assert report.cards == ()


def test_outs_never_include_visible_cards():
    rng = random.Random(3)
    deck = fresh_deck()
    for board_size in (3, 4, 5):
        for _ in range(40):
            dealt = rng.sample(deck, 2 + board_size)
            hero, board = dealt[:2], dealt[2:]
            report = calculate_outs(hero, board)
            visible = {c.code for c in dealt}
            assert not visible & set(report.cards)
            assert set(report.flush) | set(report.straight) | set(report.rank_improvement) == set(report.cards)
            assert len(set(report.cards)) == report.total


def test_straight_out_ranks_maps_low_ace_to_fourteen():
    assert straight_out_ranks([2, 3, 4, 5]) == {14, 6}
    assert straight_out_ranks([10, 11, 12, 13]) == {9, 14}


def test_quads_rank_adds_no_rank_outs():
    report = calculate_outs(parse_cards(["AH", "AS"]), parse_cards(["AD", "AC", "2D"]))
    assert not any(code.startswith("A") for code in report.rank_improvement)
    assert report.rank_improvement == ("2C", "2H", "2S")
