"""
Scoring a doubles match for every player on court.

These functions run the full validate, resolve and aggregate pipeline for both
teams of a match, and handle corrections by reversing the stored result
before applying the new one.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from padeltour.tournament_core.outcome import (
    determine_winner_with_ties,
    outcome_for_team,
)
from padeltour.tournament_core.scoring import DEFAULT_SCORING
from padeltour.tournament_core.stats import apply_outcome
from padeltour.tournament_core.structure import (
    MatchContext,
    MatchResult,
    PlayerStats,
    TournamentConfig,
)
from padeltour.tournament_core.validation import (
    validate_match_result,
    validate_match_result_with_config,
)

logger = logging.getLogger(__name__)

StatsByPlayer = Mapping[str, Optional[PlayerStats]]


@dataclass(frozen=True)
class TeamLineup:
    """The players on one side of a match."""

    player_ids: Tuple[str, ...]

    def __post_init__(self):
        if not self.player_ids:
            raise ValueError("A team needs at least one player")
        if len(set(self.player_ids)) != len(self.player_ids):
            raise ValueError(f"Duplicate player in lineup {self.player_ids}")


def _validate(
    result: MatchResult,
    config: Optional[TournamentConfig],
    context: Optional[MatchContext],
) -> None:
    if config is None:
        validate_match_result(result)
    else:
        validate_match_result_with_config(result, config, context)


def _fold(
    stats_by_player: StatsByPlayer,
    team1: TeamLineup,
    team2: TeamLineup,
    result: MatchResult,
    config: Optional[TournamentConfig],
    reverse: bool,
) -> Dict[str, Optional[PlayerStats]]:
    overlap = set(team1.player_ids) & set(team2.player_ids)
    if overlap:
        raise ValueError(f"Players {sorted(overlap)} appear on both teams")

    winner = determine_winner_with_ties(result)
    scoring = config.scoring if config is not None else DEFAULT_SCORING
    updated = dict(stats_by_player)

    sides = (
        (team1, 1, result.team1_score, result.team2_score),
        (team2, 2, result.team2_score, result.team1_score),
    )
    for lineup, team, games_for, games_against in sides:
        outcome = outcome_for_team(winner, team)
        for player_id in lineup.player_ids:
            updated[player_id] = apply_outcome(
                updated.get(player_id),
                outcome,
                games_for,
                games_against,
                reverse=reverse,
                player_id=player_id,
                scoring=scoring,
            )
    return updated


def apply_match_result(
    stats_by_player: StatsByPlayer,
    team1: TeamLineup,
    team2: TeamLineup,
    result: MatchResult,
    config: Optional[TournamentConfig] = None,
    context: Optional[MatchContext] = None,
    reverse: bool = False,
) -> Dict[str, Optional[PlayerStats]]:
    """
    Fold a match result into the stats of all players of both teams.

    Team 1 players are credited with ``team1_score`` games for and
    ``team2_score`` against; team 2 players get the mirror image. Players
    missing from ``stats_by_player`` start from empty stats.

    When applying forward the result is validated first: strictly (no ties)
    without a config, or against the config and phase otherwise. Reversal
    trusts the stored result, which was validated when it was recorded.

    Args:
        stats_by_player: Current snapshot per player ID (None for no stats)
        team1: Lineup of team 1
        team2: Lineup of team 2
        result: The match score
        config: Tournament rules, or None for strict two-outcome mode
        context: Phase of the match
        reverse: Undo a previously applied result

    Returns:
        A new mapping with updated stats for every player on court

    Raises:
        InvalidResult: if the result does not pass validation
        StatsUnderflow: if a reversal would make a counter negative
    """
    if not reverse:
        _validate(result, config, context)
    updated = _fold(stats_by_player, team1, team2, result, config, reverse)
    logger.debug(
        "%s result %d-%d for %s vs %s",
        "Reversed" if reverse else "Applied",
        result.team1_score,
        result.team2_score,
        team1.player_ids,
        team2.player_ids,
    )
    return updated


def correct_match_result(
    stats_by_player: StatsByPlayer,
    team1: TeamLineup,
    team2: TeamLineup,
    old_result: MatchResult,
    new_result: MatchResult,
    config: Optional[TournamentConfig] = None,
    context: Optional[MatchContext] = None,
) -> Dict[str, Optional[PlayerStats]]:
    """
    Replace a previously applied result with a corrected one.

    The new result is validated before anything is reversed, so an invalid
    correction leaves the stats untouched.
    """
    _validate(new_result, config, context)
    reverted = _fold(stats_by_player, team1, team2, old_result, config, reverse=True)
    return _fold(reverted, team1, team2, new_result, config, reverse=False)
