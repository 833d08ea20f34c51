from __future__ import annotations

from block_blast.game import ScoringRules


def test_line_bonus_formula() -> None:
    rules = ScoringRules()
    assert rules.score_for_lines(0) == 0
    assert rules.score_for_lines(1) == 10
    assert rules.score_for_lines(2) == 25
    assert rules.score_for_lines(3) == 40
    assert rules.score_for_lines(4) == 55


def test_placement_score_adds_cells() -> None:
    rules = ScoringRules()
    assert rules.score_for_placement(5, 0) == 5
    assert rules.score_for_placement(1, 2) == 26
