from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    points_per_row: int = 100

    def score_for_rows(self, rows: int) -> int:
        # Linear: clearing several rows at once earns no bonus.
        if rows <= 0:
            return 0
        return rows * self.points_per_row
