"""
Transform database models to tournament_core structure representation.

This module provides functions to convert Django ORM models from
padeltour.tournament into the plain tournament_core structures the scoring
engine works with.
"""

from typing import Dict, List, Optional, Tuple

from padeltour.tournament_core.match_results import TeamLineup
from padeltour.tournament_core.scoring import ScoringSystem
from padeltour.tournament_core.structure import (
    MatchContext,
    Player,
    PlayerStats,
    TournamentConfig,
    TournamentType,
)


def player_key(player) -> str:
    """Engine-side identifier for a Player model instance."""
    return str(player.pk)


def tournament_config(tournament) -> TournamentConfig:
    """Build the scoring rules of a Tournament model instance."""
    return TournamentConfig(
        type=TournamentType(tournament.type),
        allow_ties=tournament.allow_ties,
        scoring=tournament.scoring(),
    )


def match_context(match) -> MatchContext:
    return MatchContext(phase=match.phase)


def match_lineups(match) -> Tuple[TeamLineup, TeamLineup]:
    """Return (team1, team2) lineups of a Match model instance."""
    return (
        TeamLineup(tuple(player_key(p) for p in match.team1_players())),
        TeamLineup(tuple(player_key(p) for p in match.team2_players())),
    )


def stats_to_structure(
    row, scoring: Optional[ScoringSystem] = None
) -> PlayerStats:
    """Convert a PlayerStats row into an engine snapshot."""
    return PlayerStats(
        player_id=player_key(row.player),
        scoring=scoring or row.tournament.scoring(),
        **row.counts(),
    )


def leaderboard_players(tournament) -> List[Player]:
    """
    Collect the players of a tournament with their current stats.

    Every player that appears in a match of the tournament is included, in
    primary key order; players without a stats row get ``stats=None``.
    """
    from padeltour.tournament.models import PlayerStats as PlayerStatsModel

    scoring = tournament.scoring()
    rows = {
        row.player_id: row
        for row in PlayerStatsModel.objects.filter(
            tournament=tournament
        ).select_related("player")
    }
    players = list(tournament.players())
    # Stats may outlive the matches that produced them (e.g. a deleted result)
    seen = {p.pk for p in players}
    players.extend(row.player for pk, row in sorted(rows.items()) if pk not in seen)

    return [
        Player(
            id=player_key(player),
            name=player.name,
            stats=(
                stats_to_structure(rows[player.pk], scoring)
                if player.pk in rows
                else None
            ),
        )
        for player in players
    ]


def stored_final_positions(tournament) -> Dict[str, int]:
    """Stored final position per player key of a finished tournament."""
    return {
        str(player_id): position
        for player_id, position in tournament.results.values_list(
            "player_id", "final_position"
        )
    }
