from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 10
    combo_points: int = 5

    def score_for_lines(self, lines: int) -> int:
        """Bonus for clearing `lines` rows/columns in a single placement."""
        if lines <= 0:
            return 0
        bonus = self.line_clear_points * lines
        if lines > 1:
            bonus += self.combo_points * (lines - 1)
        return bonus

    def score_for_placement(self, cells_placed: int, lines: int) -> int:
        return cells_placed + self.score_for_lines(lines)
