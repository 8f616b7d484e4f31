from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from padeltour.tournament.management.commands.generate_random_results import (
    simulate_match_score,
)
from padeltour.tournament.match_results import submit_match_result
from padeltour.tournament.models import Match, Player, PlayerStats
from padeltour.tournament.tests.testutils import (
    counts_for,
    create_match,
    create_tournament,
)


class SeedPlayersCommandTest(TestCase):
    def test_creates_players(self):
        out = StringIO()
        call_command("seed_players", "--count", "5", stdout=out)
        self.assertEqual(Player.objects.count(), 5)
        self.assertIn("Created 5 players", out.getvalue())
        names = list(Player.objects.values_list("name", flat=True))
        self.assertEqual(len(set(names)), 5)


class SimulateMatchScoreTest(TestCase):
    def test_no_ties_when_not_allowed(self):
        for _ in range(200):
            team1_score, team2_score = simulate_match_score(False, tie_rate=1.0)
            self.assertNotEqual(team1_score, team2_score)
            self.assertIn(max(team1_score, team2_score), (6, 7))

    def test_tie_when_allowed(self):
        team1_score, team2_score = simulate_match_score(True, tie_rate=1.0)
        self.assertEqual(team1_score, team2_score)


class GenerateRandomResultsCommandTest(TestCase):
    def setUp(self):
        self.tournament = create_tournament(allow_ties=True)
        create_match(self.tournament, ("Alice", "Bob"), ("Carol", "Dave"))
        create_match(
            self.tournament, ("Alice", "Carol"), ("Bob", "Dave"), round_number=2
        )
        create_match(
            self.tournament, ("Alice", "Bob"), ("Carol", "Dave"), phase=2
        )

    def test_fills_pending_matches_of_phase(self):
        out = StringIO()
        call_command("generate_random_results", str(self.tournament.pk), stdout=out)

        self.assertIn("Generated 2 random results", out.getvalue())
        self.assertEqual(
            Match.objects.filter(phase=1, status="completed").count(), 2
        )
        self.assertEqual(Match.objects.filter(phase=2, status="pending").count(), 1)
        self.assertEqual(counts_for(self.tournament, "Alice")["total_matches"], 2)

    def test_dry_run_writes_nothing(self):
        out = StringIO()
        call_command(
            "generate_random_results",
            str(self.tournament.pk),
            "--dry-run",
            stdout=out,
        )
        self.assertIn("DRY RUN: Would generate 2 results", out.getvalue())
        self.assertFalse(Match.objects.filter(status="completed").exists())
        self.assertFalse(PlayerStats.objects.exists())

    def test_skips_completed_matches(self):
        match = Match.objects.filter(phase=1).order_by("pk").first()
        submit_match_result(match, 6, 0)

        with mock.patch(
            "padeltour.tournament.management.commands.generate_random_results."
            "simulate_match_score",
            return_value=(6, 4),
        ):
            call_command(
                "generate_random_results", str(self.tournament.pk), stdout=StringIO()
            )

        match.refresh_from_db()
        self.assertEqual((match.team1_score, match.team2_score), (6, 0))
        self.assertEqual(counts_for(self.tournament, "Alice")["games_won"], 12)

    def test_overwrite_replaces_results(self):
        match = Match.objects.filter(phase=1).order_by("pk").first()
        submit_match_result(match, 6, 0)

        with mock.patch(
            "padeltour.tournament.management.commands.generate_random_results."
            "simulate_match_score",
            return_value=(3, 6),
        ):
            call_command(
                "generate_random_results",
                str(self.tournament.pk),
                "--overwrite",
                stdout=StringIO(),
            )

        counts = counts_for(self.tournament, "Alice")
        self.assertEqual(counts["total_matches"], 2)
        self.assertEqual(counts["matches_lost"], 2)
        self.assertEqual(counts["games_won"], 6)

    def test_selected_phase(self):
        call_command(
            "generate_random_results",
            str(self.tournament.pk),
            "--phase",
            "2",
            stdout=StringIO(),
        )
        self.assertEqual(Match.objects.filter(phase=2, status="completed").count(), 1)
        self.assertEqual(Match.objects.filter(phase=1, status="pending").count(), 2)

    def test_unknown_tournament(self):
        with self.assertRaises(CommandError):
            call_command("generate_random_results", "9999", stdout=StringIO())


class RecalculateStatsCommandTest(TestCase):
    def test_rebuilds_stats(self):
        tournament = create_tournament()
        match = create_match(tournament, ("Alice", "Bob"), ("Carol", "Dave"))
        submit_match_result(match, 6, 2)
        expected = counts_for(tournament, "Carol")
        PlayerStats.objects.filter(tournament=tournament).delete()

        out = StringIO()
        call_command(
            "recalculate_stats", str(tournament.pk), "--show-leaderboard", stdout=out
        )

        self.assertEqual(counts_for(tournament, "Carol"), expected)
        output = out.getvalue()
        self.assertIn("Recalculated stats for 4 players", output)
        self.assertIn("1. Alice: 3 pts, 1W 0D 0L, 100.0%", output)

    def test_unknown_tournament(self):
        with self.assertRaises(CommandError):
            call_command("recalculate_stats", "9999", stdout=StringIO())
