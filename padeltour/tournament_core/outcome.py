"""
Winner resolution for validated match results.
"""

from typing import Optional

from padeltour.tournament_core.structure import MatchResult, MatchOutcome


def determine_winner(result: MatchResult) -> int:
    """Return 1 or 2, the team with the strictly higher score.

    Only valid where ties are impossible; raises ValueError on equal scores.
    """
    if result.is_tie:
        raise ValueError(
            f"Cannot determine a winner for a tied result {result.team1_score}-"
            f"{result.team2_score}; use determine_winner_with_ties"
        )
    return 1 if result.team1_score > result.team2_score else 2


def determine_winner_with_ties(result: MatchResult) -> Optional[int]:
    """Return 1 or 2 for the winning team, or None for a tie."""
    if result.is_tie:
        return None
    return determine_winner(result)


def outcome_for_team(winner: Optional[int], team: int) -> MatchOutcome:
    """Translate a winning team number into the outcome for ``team``."""
    if winner is None:
        return MatchOutcome.DRAW
    return MatchOutcome.WIN if winner == team else MatchOutcome.LOSS
