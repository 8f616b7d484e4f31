"""
Validation of submitted match scores.

A score is checked for well-formedness first (whole, non-negative numbers)
and then against the tie policy of the tournament and phase it belongs to.
"""

import logging
from typing import Optional

from padeltour.tournament_core.exceptions import InvalidResult, InvalidResultReason
from padeltour.tournament_core.structure import (
    MatchResult,
    TournamentConfig,
    MatchContext,
)

logger = logging.getLogger(__name__)


def _check_score(score, team: int) -> None:
    # bool is an int subclass but never a valid score
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidResult(
            InvalidResultReason.NON_INTEGER_SCORE,
            f"Team {team} score must be a whole number, got {score!r}",
        )
    if score < 0:
        raise InvalidResult(
            InvalidResultReason.NEGATIVE_SCORE,
            f"Team {team} score cannot be negative, got {score}",
        )


def _validate(result: MatchResult, ties_allowed: bool) -> None:
    try:
        _check_score(result.team1_score, 1)
        _check_score(result.team2_score, 2)
        if result.is_tie and not ties_allowed:
            raise InvalidResult(
                InvalidResultReason.DISALLOWED_TIE,
                f"Match cannot end in a tie ({result.team1_score}-{result.team2_score})",
            )
    except InvalidResult as e:
        logger.debug("Rejected match result %r: %s", result, e)
        raise


def validate_match_result(result: MatchResult) -> None:
    """
    Validate a result in strict two-outcome mode.

    Used before the tournament context is known, so ties are always rejected.

    Raises:
        InvalidResult: if a score is not a non-negative integer or the
            scores are equal
    """
    _validate(result, ties_allowed=False)


def validate_match_result_with_config(
    result: MatchResult,
    config: TournamentConfig,
    context: Optional[MatchContext] = None,
) -> None:
    """
    Validate a result against the rules of its tournament.

    Ties follow ``config.allow_ties`` except in knockout phases, where a
    winner is always required. A missing context is treated as the group
    phase.

    Args:
        result: The submitted score
        config: Tournament format and tie policy
        context: Phase the match belongs to

    Raises:
        InvalidResult: if the score is malformed or the tie is not allowed
    """
    context = context or MatchContext()
    _validate(result, ties_allowed=config.ties_allowed(context.phase))
