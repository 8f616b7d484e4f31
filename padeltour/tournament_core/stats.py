"""
Folding match outcomes into player statistics.

Every update produces a new PlayerStats snapshot from the previous one. An
update can be applied forward or reversed; reversing exactly undoes a
previous forward application with the same arguments, which is how a
recorded match is corrected or deleted.
"""

import dataclasses
import logging
from typing import Dict, Optional

from padeltour.tournament_core.exceptions import (
    InvalidResult,
    InvalidResultReason,
    StatsUnderflow,
)
from padeltour.tournament_core.scoring import ScoringSystem, DEFAULT_SCORING
from padeltour.tournament_core.structure import (
    COUNT_FIELDS,
    MatchOutcome,
    PlayerStats,
    calculate_win_percentage,
)

logger = logging.getLogger(__name__)

__all__ = [
    "create_empty_stats",
    "calculate_updated_stats",
    "calculate_updated_stats_for_tie",
    "calculate_win_percentage",
    "apply_outcome",
    "record_tournament_finish",
]


def create_empty_stats(
    player_id: str, scoring: ScoringSystem = DEFAULT_SCORING
) -> PlayerStats:
    """Zero-valued stats for a player with no recorded matches."""
    return PlayerStats(player_id=player_id, scoring=scoring)


def _resolve_stats(
    current_stats: Optional[PlayerStats],
    player_id: Optional[str],
    scoring: Optional[ScoringSystem],
) -> PlayerStats:
    if current_stats is not None:
        return current_stats
    if player_id is None:
        raise ValueError("player_id is required when current_stats is None")
    return create_empty_stats(player_id, scoring or DEFAULT_SCORING)


def _check_games(games_for, games_against) -> None:
    for games in (games_for, games_against):
        if isinstance(games, bool) or not isinstance(games, int):
            raise InvalidResult(
                InvalidResultReason.NON_INTEGER_SCORE,
                f"Games must be a whole number, got {games!r}",
            )
        if games < 0:
            raise InvalidResult(
                InvalidResultReason.NEGATIVE_SCORE,
                f"Games cannot be negative, got {games}",
            )


def _apply_delta(
    stats: PlayerStats, delta: Dict[str, int], reverse: bool
) -> PlayerStats:
    """Add (or subtract, when reversing) ``delta`` to the counters of ``stats``."""
    sign = -1 if reverse else 1
    updated = {}
    for name in COUNT_FIELDS:
        if name not in delta:
            continue
        value = getattr(stats, name) + sign * delta[name]
        if value < 0:
            logger.error(
                "Stats underflow for player %s: %s would become %d (reverse=%s)",
                stats.player_id,
                name,
                value,
                reverse,
            )
            raise StatsUnderflow(stats.player_id, name, value)
        updated[name] = value

    # A title can only be reversed together with the participation it came with
    won = updated.get("tournaments_won", stats.tournaments_won)
    played = updated.get("tournaments_played", stats.tournaments_played)
    if won > played:
        logger.error(
            "Stats underflow for player %s: %d tournaments won but only %d played "
            "(reverse=%s)",
            stats.player_id,
            won,
            played,
            reverse,
        )
        raise StatsUnderflow(stats.player_id, "tournaments_won", won)
    return dataclasses.replace(stats, **updated)


def calculate_updated_stats(
    current_stats: Optional[PlayerStats],
    is_winner: bool,
    games_for: int,
    games_against: int,
    reverse: bool = False,
    player_id: Optional[str] = None,
    scoring: Optional[ScoringSystem] = None,
) -> PlayerStats:
    """
    Apply a decisive match to a player's stats.

    The match counts as exactly one set, won or lost. Games are added
    as-is to the games tally.

    Args:
        current_stats: Current snapshot, or None if the player has none yet
        is_winner: Whether this player's team won
        games_for: Games won by this player's team
        games_against: Games won by the opposing team
        reverse: Undo a previous application instead of applying
        player_id: Required when ``current_stats`` is None
        scoring: Scoring policy for a freshly created record

    Returns:
        The next PlayerStats snapshot

    Raises:
        StatsUnderflow: if reversing would make any counter negative
    """
    _check_games(games_for, games_against)
    stats = _resolve_stats(current_stats, player_id, scoring)
    delta = {
        "total_matches": 1,
        "matches_won": 1 if is_winner else 0,
        "matches_lost": 0 if is_winner else 1,
        "sets_won": 1 if is_winner else 0,
        "sets_lost": 0 if is_winner else 1,
        "games_won": games_for,
        "games_lost": games_against,
    }
    return _apply_delta(stats, delta, reverse)


def calculate_updated_stats_for_tie(
    current_stats: Optional[PlayerStats],
    games_for: int,
    games_against: int,
    reverse: bool = False,
    player_id: Optional[str] = None,
    scoring: Optional[ScoringSystem] = None,
) -> PlayerStats:
    """
    Apply a drawn match to a player's stats.

    A draw has no set winner, so the set tally is left alone.

    Raises:
        StatsUnderflow: if reversing would make any counter negative
    """
    _check_games(games_for, games_against)
    stats = _resolve_stats(current_stats, player_id, scoring)
    delta = {
        "total_matches": 1,
        "matches_drawn": 1,
        "games_won": games_for,
        "games_lost": games_against,
    }
    return _apply_delta(stats, delta, reverse)


def apply_outcome(
    current_stats: Optional[PlayerStats],
    outcome: MatchOutcome,
    games_for: int,
    games_against: int,
    reverse: bool = False,
    player_id: Optional[str] = None,
    scoring: Optional[ScoringSystem] = None,
) -> PlayerStats:
    """Dispatch to the win/loss or tie update depending on ``outcome``."""
    if outcome == MatchOutcome.DRAW:
        return calculate_updated_stats_for_tie(
            current_stats, games_for, games_against, reverse, player_id, scoring
        )
    return calculate_updated_stats(
        current_stats,
        outcome == MatchOutcome.WIN,
        games_for,
        games_against,
        reverse,
        player_id,
        scoring,
    )


def record_tournament_finish(
    current_stats: Optional[PlayerStats],
    won: bool,
    reverse: bool = False,
    player_id: Optional[str] = None,
    scoring: Optional[ScoringSystem] = None,
) -> PlayerStats:
    """Count a finished tournament (and a title, if ``won``) for the player."""
    stats = _resolve_stats(current_stats, player_id, scoring)
    delta = {"tournaments_played": 1, "tournaments_won": 1 if won else 0}
    return _apply_delta(stats, delta, reverse)
