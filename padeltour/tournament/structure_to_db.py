"""
Write tournament_core structures back to the database.
"""

from typing import Dict, Optional

from padeltour.tournament.models import PlayerStats as PlayerStatsModel
from padeltour.tournament.models import TournamentResult
from padeltour.tournament_core.ranking_points import RankingAward
from padeltour.tournament_core.structure import PlayerStats


def save_stats(stats: PlayerStats, tournament) -> PlayerStatsModel:
    """Store a stats snapshot for ``stats.player_id`` in ``tournament``.

    Callers are expected to hold a lock on the row (see match_results).
    """
    row, _ = PlayerStatsModel.objects.update_or_create(
        player_id=int(stats.player_id),
        tournament=tournament,
        defaults=stats.counts(),
    )
    return row


def save_all_stats(
    stats_by_player: Dict[str, Optional[PlayerStats]], tournament
) -> None:
    for stats in stats_by_player.values():
        if stats is not None:
            save_stats(stats, tournament)


def save_ranking_awards(awards: Dict[str, RankingAward], tournament) -> None:
    """Replace the stored final positions and ranking points of ``tournament``."""
    TournamentResult.objects.filter(tournament=tournament).delete()
    TournamentResult.objects.bulk_create(
        TournamentResult(
            tournament=tournament,
            player_id=int(award.player_id),
            final_position=award.position,
            points_awarded=award.base_points,
            bonus_points=award.bonus_points,
            category=tournament.category,
        )
        for award in awards.values()
    )
