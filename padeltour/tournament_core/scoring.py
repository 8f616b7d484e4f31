"""
Configurable scoring systems for tournaments.

This module defines how match outcomes are converted to tournament points,
the primary key of every leaderboard.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringSystem:
    """Defines how many tournament points a win, draw or loss is worth."""

    match_win_points: float = 3
    match_draw_points: float = 1
    match_loss_points: float = 0

    def __post_init__(self):
        if not (
            self.match_win_points > self.match_draw_points > self.match_loss_points
        ):
            raise ValueError(
                "Scoring must reward a win over a draw and a draw over a loss "
                f"(got {self.match_win_points}/{self.match_draw_points}/"
                f"{self.match_loss_points})"
            )

    def tournament_points(self, won: int, drawn: int, lost: int) -> float:
        """
        Weighted sum of match outcomes.

        Args:
            won: Matches won
            drawn: Matches drawn
            lost: Matches lost

        Returns:
            Tournament points for the given record
        """
        return (
            won * self.match_win_points
            + drawn * self.match_draw_points
            + lost * self.match_loss_points
        )


# Pre-defined scoring systems
DEFAULT_SCORING = ScoringSystem()

TWO_ONE_ZERO_SCORING = ScoringSystem(
    match_win_points=2,
    match_draw_points=1,
    match_loss_points=0,
)
