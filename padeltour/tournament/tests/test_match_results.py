"""
Tests for recording match results against the database.
"""

from django.db import transaction
from django.test import TestCase

from padeltour.tournament.match_results import (
    _lock_stats,
    delete_match_result,
    finish_tournament,
    player_ranking_points,
    recalculate_tournament_stats,
    submit_match_result,
    tournament_leaderboard,
)
from padeltour.tournament.models import (
    Match,
    PlayerStats,
    TournamentPointConfig,
    TournamentResult,
)
from padeltour.tournament.tests.testutils import (
    counts_for,
    create_match,
    create_tournament,
    get_player,
    stats_for,
)
from padeltour.tournament_core.exceptions import (
    InvalidResult,
    InvalidResultReason,
    StatsUnderflow,
)


class SubmitMatchResultTest(TestCase):
    def setUp(self):
        self.tournament = create_tournament(allow_ties=True)
        self.match = create_match(
            self.tournament, ("Alice", "Bob"), ("Carol", "Dave")
        )

    def test_records_result_for_all_players(self):
        match = submit_match_result(self.match, 6, 3)

        self.assertEqual(match.status, "completed")
        self.assertEqual(match.winner_team, 1)
        self.assertIsNotNone(match.played_at)

        for name in ("Alice", "Bob"):
            row = stats_for(self.tournament, name)
            self.assertEqual((row.matches_won, row.matches_lost), (1, 0))
            self.assertEqual((row.sets_won, row.sets_lost), (1, 0))
            self.assertEqual((row.games_won, row.games_lost), (6, 3))
        for name in ("Carol", "Dave"):
            row = stats_for(self.tournament, name)
            self.assertEqual((row.matches_won, row.matches_lost), (0, 1))
            self.assertEqual((row.games_won, row.games_lost), (3, 6))

        self.tournament.refresh_from_db()
        self.assertEqual(self.tournament.status, "in_progress")

    def test_tie_in_round_robin(self):
        match = submit_match_result(self.match, 4, 4)
        self.assertIsNone(match.winner_team)
        row = stats_for(self.tournament, "Carol")
        self.assertEqual((row.total_matches, row.matches_drawn), (1, 1))
        self.assertEqual((row.sets_won, row.sets_lost), (0, 0))

    def test_resubmission_replaces_previous_result(self):
        submit_match_result(self.match, 6, 3)
        submit_match_result(self.match, 2, 6)

        alice = stats_for(self.tournament, "Alice")
        self.assertEqual(alice.total_matches, 1)
        self.assertEqual((alice.matches_won, alice.matches_lost), (0, 1))
        self.assertEqual((alice.games_won, alice.games_lost), (2, 6))
        carol = stats_for(self.tournament, "Carol")
        self.assertEqual((carol.matches_won, carol.matches_lost), (1, 0))

        self.match.refresh_from_db()
        self.assertEqual(self.match.winner_team, 2)

    def test_win_corrected_to_tie(self):
        submit_match_result(self.match, 6, 3)
        submit_match_result(self.match, 5, 5)
        counts = counts_for(self.tournament, "Bob")
        self.assertEqual(counts["matches_won"], 0)
        self.assertEqual(counts["matches_drawn"], 1)
        self.assertEqual(counts["sets_won"], 0)
        self.assertEqual(counts["games_won"], 5)

    def test_invalid_result_writes_nothing(self):
        with self.assertRaises(InvalidResult) as cm:
            submit_match_result(self.match, -1, 6)
        self.assertEqual(cm.exception.reason, InvalidResultReason.NEGATIVE_SCORE)

        self.assertFalse(PlayerStats.objects.exists())
        self.match.refresh_from_db()
        self.assertEqual(self.match.status, "pending")

    def test_missing_stats_rows_are_created_before_locking(self):
        alice = get_player("Alice")
        with transaction.atomic():
            stats = _lock_stats(self.tournament, [alice.pk])
            self.assertTrue(
                PlayerStats.objects.filter(
                    tournament=self.tournament, player=alice
                ).exists()
            )
        self.assertEqual(stats[str(alice.pk)].total_matches, 0)

    def test_invalid_correction_keeps_previous_result(self):
        submit_match_result(self.match, 6, 3)
        knockout = create_tournament("Cup", type="KNOCKOUT", allow_ties=True)
        Match.objects.filter(pk=self.match.pk).update(tournament=knockout)
        PlayerStats.objects.filter(tournament=self.tournament).update(
            tournament=knockout
        )

        with self.assertRaises(InvalidResult):
            submit_match_result(self.match, 3, 3)

        self.assertEqual(stats_for(knockout, "Alice").matches_won, 1)
        self.match.refresh_from_db()
        self.assertEqual((self.match.team1_score, self.match.team2_score), (6, 3))


class TiePolicyTest(TestCase):
    def test_knockout_rejects_tie(self):
        tournament = create_tournament(type="KNOCKOUT", allow_ties=True)
        match = create_match(tournament, ("Alice", "Bob"), ("Carol", "Dave"))
        with self.assertRaises(InvalidResult) as cm:
            submit_match_result(match, 3, 3)
        self.assertEqual(cm.exception.reason, InvalidResultReason.DISALLOWED_TIE)

    def test_group_stage_tie_only_in_group_phase(self):
        tournament = create_tournament(type="GROUP_STAGE_KNOCKOUT", allow_ties=True)
        group = create_match(tournament, ("Alice", "Bob"), ("Carol", "Dave"), phase=1)
        final = create_match(tournament, ("Alice", "Bob"), ("Carol", "Dave"), phase=2)

        submit_match_result(group, 2, 2)
        with self.assertRaises(InvalidResult):
            submit_match_result(final, 2, 2)
        submit_match_result(final, 3, 2)

        self.assertEqual(stats_for(tournament, "Alice").total_matches, 2)

    def test_round_robin_without_ties(self):
        tournament = create_tournament(allow_ties=False)
        match = create_match(tournament, ("Alice", "Bob"), ("Carol", "Dave"))
        with self.assertRaises(InvalidResult):
            submit_match_result(match, 1, 1)


class DeleteMatchResultTest(TestCase):
    def setUp(self):
        self.tournament = create_tournament()
        self.first = create_match(self.tournament, ("Alice", "Bob"), ("Carol", "Dave"))
        self.second = create_match(
            self.tournament, ("Alice", "Carol"), ("Bob", "Dave"), round_number=2
        )
        submit_match_result(self.first, 6, 1)

    def test_delete_restores_previous_stats(self):
        before = {n: counts_for(self.tournament, n) for n in ("Alice", "Bob", "Carol", "Dave")}
        submit_match_result(self.second, 6, 4)
        delete_match_result(self.second)

        after = {n: counts_for(self.tournament, n) for n in before}
        self.assertEqual(after, before)

        self.second.refresh_from_db()
        self.assertEqual(self.second.status, "pending")
        self.assertIsNone(self.second.team1_score)
        self.assertIsNone(self.second.winner_team)

    def test_delete_pending_match(self):
        with self.assertRaises(ValueError):
            delete_match_result(self.second)

    def test_inconsistent_stats_underflow(self):
        PlayerStats.objects.filter(player=get_player("Dave")).update(
            total_matches=0, matches_lost=0, sets_lost=0, games_won=0, games_lost=0
        )
        with self.assertLogs("padeltour.tournament.match_results", level="ERROR"):
            with self.assertRaises(StatsUnderflow):
                delete_match_result(self.first)

        # Nothing was written: the match keeps its result and the others their stats
        self.first.refresh_from_db()
        self.assertEqual(self.first.status, "completed")
        self.assertEqual(stats_for(self.tournament, "Alice").matches_won, 1)


class LeaderboardTest(TestCase):
    def setUp(self):
        self.tournament = create_tournament(allow_ties=True)
        submit_match_result(
            create_match(self.tournament, ("Alice", "Bob"), ("Carol", "Dave")), 6, 3
        )
        submit_match_result(
            create_match(
                self.tournament, ("Alice", "Carol"), ("Bob", "Dave"), round_number=2
            ),
            4,
            4,
        )
        submit_match_result(
            create_match(
                self.tournament, ("Alice", "Dave"), ("Bob", "Carol"), round_number=3
            ),
            6,
            5,
        )
        create_match(self.tournament, ("Eve", "Alice"), ("Bob", "Carol"), round_number=4)

    def test_ranked_order(self):
        entries = tournament_leaderboard(self.tournament)
        self.assertEqual(
            [e.player.name for e in entries], ["Alice", "Bob", "Dave", "Carol", "Eve"]
        )
        self.assertEqual([e.position for e in entries], [1, 2, 3, 4, 5])
        self.assertEqual(entries[0].player.stats.tournament_points, 7)
        self.assertIsNone(entries[-1].player.stats)

    def test_tournament_scoring_policy(self):
        self.tournament.win_points = 2
        self.tournament.save()
        entries = tournament_leaderboard(self.tournament)
        self.assertEqual(entries[0].player.stats.tournament_points, 5)


class FinishTournamentTest(TestCase):
    def setUp(self):
        self.tournament = create_tournament()
        submit_match_result(
            create_match(self.tournament, ("Alice", "Bob"), ("Carol", "Dave")), 6, 3
        )

    def test_titles_and_participation(self):
        finish_tournament(
            self.tournament, [get_player("Alice").pk, get_player("Bob").pk]
        )

        self.tournament.refresh_from_db()
        self.assertTrue(self.tournament.is_finished())
        self.assertEqual(
            sorted(p.name for p in self.tournament.champions.all()), ["Alice", "Bob"]
        )
        alice = stats_for(self.tournament, "Alice")
        self.assertEqual((alice.tournaments_played, alice.tournaments_won), (1, 1))
        carol = stats_for(self.tournament, "Carol")
        self.assertEqual((carol.tournaments_played, carol.tournaments_won), (1, 0))

    def test_cannot_finish_twice(self):
        finish_tournament(self.tournament, [get_player("Alice").pk])
        with self.assertRaises(ValueError):
            finish_tournament(self.tournament, [get_player("Alice").pk])

    def test_champion_must_have_played(self):
        outsider = get_player("Zed")
        with self.assertRaises(ValueError):
            finish_tournament(self.tournament, [outsider.pk])
        self.tournament.refresh_from_db()
        self.assertFalse(self.tournament.is_finished())


class RankingPointsTest(TestCase):
    def setUp(self):
        self.tournament = create_tournament()
        submit_match_result(
            create_match(self.tournament, ("Alice", "Bob"), ("Carol", "Dave")), 6, 3
        )
        self.positions = {
            get_player("Alice").pk: 1,
            get_player("Bob").pk: 1,
            get_player("Carol").pk: 3,
            get_player("Dave").pk: 3,
        }

    def test_positions_award_category_points_and_win_bonus(self):
        awards = finish_tournament(self.tournament, final_positions=self.positions)

        alice = get_player("Alice")
        award = awards[str(alice.pk)]
        self.assertEqual((award.base_points, award.bonus_points), (7.5, 1))
        self.assertEqual(awards[str(get_player("Carol").pk)].total_points, 3)
        self.assertEqual(TournamentResult.objects.count(), 4)
        self.assertEqual(player_ranking_points(alice), 8.5)

        # Champions default to the players placed first
        self.tournament.refresh_from_db()
        self.assertEqual(
            sorted(p.name for p in self.tournament.champions.all()), ["Alice", "Bob"]
        )
        # Match-derived points are unaffected by ranking points
        self.assertEqual(stats_for(self.tournament, "Alice").tournaments_won, 1)
        self.assertEqual(
            tournament_leaderboard(self.tournament)[0].player.stats.tournament_points, 3
        )

    def test_category_table(self):
        self.tournament.category = "MASTERS"
        self.tournament.save()
        awards = finish_tournament(self.tournament, final_positions=self.positions)
        self.assertEqual(awards[str(get_player("Dave").pk)].base_points, 19)

    def test_configured_points_replace_defaults(self):
        TournamentPointConfig.objects.create(category="OPEN_250", position=1, points=10)
        finish_tournament(self.tournament, final_positions=self.positions)
        self.assertEqual(player_ranking_points(get_player("Bob")), 11)
        self.assertEqual(player_ranking_points(get_player("Dave")), 3)

    def test_champion_must_be_placed_first(self):
        with self.assertRaises(ValueError):
            finish_tournament(
                self.tournament,
                [get_player("Carol").pk],
                final_positions=self.positions,
            )
        self.assertFalse(TournamentResult.objects.exists())

    def test_placed_player_must_have_played(self):
        self.positions[get_player("Zed").pk] = 5
        with self.assertRaises(ValueError):
            finish_tournament(self.tournament, final_positions=self.positions)

    def test_recalculation_applies_current_point_table(self):
        finish_tournament(self.tournament, final_positions=self.positions)
        TournamentPointConfig.objects.create(category="OPEN_250", position=3, points=4)

        recalculate_tournament_stats(self.tournament)

        carol = TournamentResult.objects.get(player=get_player("Carol"))
        self.assertEqual((carol.final_position, carol.points_awarded), (3, 4))
        self.assertEqual(player_ranking_points(get_player("Alice")), 8.5)


class RecalculateStatsTest(TestCase):
    def test_matches_incremental_stats(self):
        tournament = create_tournament(allow_ties=True)
        first = create_match(tournament, ("Alice", "Bob"), ("Carol", "Dave"))
        second = create_match(
            tournament, ("Alice", "Carol"), ("Bob", "Dave"), round_number=2
        )
        third = create_match(
            tournament, ("Alice", "Dave"), ("Bob", "Carol"), round_number=3
        )
        submit_match_result(first, 6, 3)
        submit_match_result(second, 4, 4)
        submit_match_result(third, 1, 6)
        submit_match_result(first, 5, 7)
        delete_match_result(second)
        finish_tournament(tournament, [get_player("Bob").pk])

        names = ("Alice", "Bob", "Carol", "Dave")
        incremental = {n: counts_for(tournament, n) for n in names}

        PlayerStats.objects.filter(tournament=tournament).update(games_won=99)
        stats = recalculate_tournament_stats(tournament)

        self.assertEqual(len(stats), 4)
        self.assertEqual({n: counts_for(tournament, n) for n in names}, incremental)

    def test_player_whose_only_result_was_deleted(self):
        tournament = create_tournament()
        match = create_match(tournament, ("Alice",), ("Bob",))
        create_match(tournament, ("Zed",), ("Yan",), round_number=2)
        submit_match_result(match, 6, 2)
        delete_match_result(match)

        def standings():
            return [
                (e.player.name, e.player.stats)
                for e in tournament_leaderboard(tournament)
            ]

        incremental = standings()
        recalculate_tournament_stats(tournament)

        self.assertEqual(standings(), incremental)
        self.assertEqual(
            [(name, stats is None) for name, stats in incremental],
            [("Alice", False), ("Bob", False), ("Zed", True), ("Yan", True)],
        )
        self.assertEqual(counts_for(tournament, "Alice")["total_matches"], 0)
