"""
Recording match results in the database.

Each operation reads the current stats of the affected players, runs them
through the scoring engine and writes the next snapshot back, all inside one
transaction. Stats rows are created if missing and then locked with
SELECT ... FOR UPDATE, so concurrent submissions touching the same player are
serialized.

A player that has taken part in a recorded result keeps a stats row for the
tournament even after that result is deleted; recalculation preserves those
rows as empty records.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from django.db import transaction
from django.utils import timezone

from padeltour.tournament.db_to_structure import (
    leaderboard_players,
    match_context,
    match_lineups,
    player_key,
    stats_to_structure,
    stored_final_positions,
    tournament_config,
)
from padeltour.tournament.models import Match, Player, Tournament
from padeltour.tournament.models import PlayerStats as PlayerStatsModel
from padeltour.tournament.structure_to_db import save_all_stats, save_ranking_awards
from padeltour.tournament_core.exceptions import StatsUnderflow
from padeltour.tournament_core.leaderboard import LeaderboardEntry, rank_leaderboard
from padeltour.tournament_core.match_results import (
    apply_match_result,
    correct_match_result,
)
from padeltour.tournament_core.outcome import determine_winner_with_ties
from padeltour.tournament_core.ranking_points import (
    RankingAward,
    TournamentCategory,
    award_ranking_points,
)
from padeltour.tournament_core.stats import create_empty_stats, record_tournament_finish
from padeltour.tournament_core.structure import MatchResult, PlayerStats


logger = logging.getLogger(__name__)


def _lock_stats(
    tournament: Tournament, player_pks: Iterable[int]
) -> Dict[str, PlayerStats]:
    """Lock and load the stats rows of the given players.

    Missing rows are created first so that every returned record is backed
    by a locked row. They only persist if the surrounding transaction commits.
    """
    scoring = tournament.scoring()
    player_pks = sorted(set(player_pks))
    existing = set(
        PlayerStatsModel.objects.filter(
            tournament=tournament, player_id__in=player_pks
        ).values_list("player_id", flat=True)
    )
    for pk in player_pks:
        if pk not in existing:
            PlayerStatsModel.objects.get_or_create(tournament=tournament, player_id=pk)

    stats: Dict[str, PlayerStats] = {}
    rows = (
        PlayerStatsModel.objects.select_for_update()
        .filter(tournament=tournament, player_id__in=player_pks)
        .select_related("player")
        .order_by("pk")
    )
    for row in rows:
        stats[player_key(row.player)] = stats_to_structure(row, scoring)
    return stats


def _match_player_pks(match: Match) -> List[int]:
    return [p.pk for p in match.team1_players() + match.team2_players()]


def _lock_match(match: Match) -> Match:
    return (
        Match.objects.select_for_update()
        .select_related(
            "tournament",
            "team1_player1",
            "team1_player2",
            "team2_player1",
            "team2_player2",
        )
        .get(pk=match.pk)
    )


def submit_match_result(match: Match, team1_score: int, team2_score: int) -> Match:
    """
    Record (or correct) the result of a match and update player stats.

    If the match already has a result, that result is reversed from every
    player's stats before the new one is applied.

    Raises:
        InvalidResult: if the score is malformed or not allowed for the
            tournament and phase; nothing is written
        StatsUnderflow: if stored stats are inconsistent with the stored
            result; the transaction is rolled back
    """
    result = MatchResult(team1_score, team2_score)
    with transaction.atomic():
        match = _lock_match(match)
        tournament = match.tournament
        config = tournament_config(tournament)
        context = match_context(match)
        team1, team2 = match_lineups(match)
        stats = _lock_stats(tournament, _match_player_pks(match))

        old_result = match.result()
        try:
            if old_result is not None:
                updated = correct_match_result(
                    stats, team1, team2, old_result, result, config, context
                )
            else:
                updated = apply_match_result(
                    stats, team1, team2, result, config, context
                )
        except StatsUnderflow:
            logger.error(
                "Stats for match %s are inconsistent with its recorded result %r",
                match.pk,
                old_result,
            )
            raise

        save_all_stats(updated, tournament)

        match.team1_score = team1_score
        match.team2_score = team2_score
        match.winner_team = determine_winner_with_ties(result)
        match.status = "completed"
        match.played_at = timezone.now()
        match.save()

        if tournament.status == "created":
            tournament.status = "in_progress"
            tournament.save(update_fields=["status", "date_modified"])

    logger.info(
        "%s result %d-%d for match %s",
        "Corrected" if old_result is not None else "Recorded",
        team1_score,
        team2_score,
        match.pk,
    )
    return match


def delete_match_result(match: Match) -> Match:
    """
    Remove the recorded result of a match and reverse its effect on stats.

    Raises:
        ValueError: if the match has no recorded result
        StatsUnderflow: if stored stats are inconsistent with the result
    """
    with transaction.atomic():
        match = _lock_match(match)
        old_result = match.result()
        if old_result is None:
            raise ValueError(f"Match {match.pk} has no recorded result")

        tournament = match.tournament
        team1, team2 = match_lineups(match)
        stats = _lock_stats(tournament, _match_player_pks(match))
        try:
            updated = apply_match_result(
                stats,
                team1,
                team2,
                old_result,
                tournament_config(tournament),
                match_context(match),
                reverse=True,
            )
        except StatsUnderflow:
            logger.error(
                "Cannot reverse result %r of match %s: stats underflow",
                old_result,
                match.pk,
            )
            raise

        save_all_stats(updated, tournament)

        match.team1_score = None
        match.team2_score = None
        match.winner_team = None
        match.status = "pending"
        match.played_at = None
        match.save()

    logger.info("Deleted result %r of match %s", old_result, match.pk)
    return match


def _award_ranking_points(
    tournament: Tournament,
    positions: Dict[str, int],
    stats: Dict[str, Optional[PlayerStats]],
) -> Dict[str, RankingAward]:
    matches_won = {
        key: player_stats.matches_won
        for key, player_stats in stats.items()
        if player_stats is not None
    }
    awards = award_ranking_points(
        TournamentCategory(tournament.category),
        positions,
        matches_won,
        tournament.point_overrides(),
    )
    save_ranking_awards(awards, tournament)
    return awards


def finish_tournament(
    tournament: Tournament,
    champion_pks: Optional[Iterable[int]] = None,
    final_positions: Optional[Mapping[int, int]] = None,
) -> Dict[str, RankingAward]:
    """
    Close a tournament and credit participation, titles and ranking points.

    Every player of the tournament gets one tournament played; each champion
    also gets one tournament won. Players given a final position are awarded
    the category points for that position plus one bonus point per match won.

    Args:
        tournament: The tournament to close
        champion_pks: Primary keys of the winners. Defaults to the players
            placed first in ``final_positions``
        final_positions: Final position per player primary key

    Returns:
        The ranking awards, keyed by player key

    Raises:
        ValueError: if the tournament is already finished, a champion or a
            placed player did not play in it, or a champion is placed
            anywhere but first
    """
    final_positions = dict(final_positions or {})
    if champion_pks is None:
        champion_pks = [
            pk for pk, position in final_positions.items() if position == 1
        ]
    champion_pks = set(champion_pks)

    with transaction.atomic():
        tournament = Tournament.objects.select_for_update().get(pk=tournament.pk)
        if tournament.is_finished():
            raise ValueError(f"Tournament {tournament.pk} is already finished")

        player_pks = [p.pk for p in tournament.players()]
        unknown = (champion_pks | set(final_positions)) - set(player_pks)
        if unknown:
            raise ValueError(
                f"Players {sorted(unknown)} did not play in tournament {tournament.pk}"
            )
        misplaced = sorted(
            pk for pk in champion_pks if final_positions.get(pk, 1) != 1
        )
        if misplaced:
            raise ValueError(f"Champions {misplaced} are not placed first")

        stats = _lock_stats(tournament, player_pks)
        scoring = tournament.scoring()
        for pk in player_pks:
            key = str(pk)
            stats[key] = record_tournament_finish(
                stats[key], pk in champion_pks, player_id=key, scoring=scoring
            )
        save_all_stats(stats, tournament)
        awards = _award_ranking_points(
            tournament,
            {str(pk): position for pk, position in final_positions.items()},
            stats,
        )

        tournament.champions.set(Player.objects.filter(pk__in=champion_pks))
        tournament.status = "finished"
        tournament.save(update_fields=["status", "date_modified"])

    logger.info(
        "Finished tournament %s with champions %s, %d players placed",
        tournament.pk,
        sorted(champion_pks),
        len(awards),
    )
    return awards


def recalculate_tournament_stats(tournament: Tournament) -> Dict[str, PlayerStats]:
    """
    Rebuild every stats row of a tournament from its completed matches.

    Matches are replayed in phase and round order through the same engine
    used for live submissions, so the result matches what incremental
    updates produce. Players whose results were all deleted keep an empty
    record. Ranking points of a finished tournament are recomputed from the
    stored final positions and the current point table.
    """
    with transaction.atomic():
        tournament = Tournament.objects.select_for_update().get(pk=tournament.pk)
        config = tournament_config(tournament)
        matches = (
            Match.objects.filter(tournament=tournament, status="completed")
            .select_related(
                "team1_player1", "team1_player2", "team2_player1", "team2_player2"
            )
            .order_by("phase", "round_number", "pk")
        )

        stats: Dict[str, Optional[PlayerStats]] = {}
        for match in matches:
            team1, team2 = match_lineups(match)
            stats = apply_match_result(
                stats, team1, team2, match.result(), config, match_context(match)
            )

        rows = PlayerStatsModel.objects.filter(tournament=tournament)
        for player_id in rows.values_list("player_id", flat=True):
            key = str(player_id)
            if stats.get(key) is None:
                stats[key] = create_empty_stats(key, config.scoring)

        if tournament.is_finished():
            champion_pks = set(tournament.champions.values_list("pk", flat=True))
            for player in tournament.players():
                key = player_key(player)
                stats[key] = record_tournament_finish(
                    stats.get(key),
                    player.pk in champion_pks,
                    player_id=key,
                    scoring=config.scoring,
                )
            positions = stored_final_positions(tournament)
            _award_ranking_points(tournament, positions, stats)

        rows.delete()
        save_all_stats(stats, tournament)

    logger.info(
        "Recalculated stats for %d players in tournament %s",
        len(stats),
        tournament.pk,
    )
    return stats


def player_ranking_points(player: Player) -> float:
    """Ranking points a player has collected over all finished tournaments."""
    return sum(result.total_points() for result in player.tournament_results.all())


def tournament_leaderboard(tournament: Tournament) -> List[LeaderboardEntry]:
    """Ranked leaderboard of a tournament."""
    return rank_leaderboard(leaderboard_players(tournament))
