"""
Management command to rebuild the player stats of a tournament from its
completed matches.
"""

from django.core.management.base import BaseCommand, CommandError

from padeltour.tournament.match_results import (
    recalculate_tournament_stats,
    tournament_leaderboard,
)
from padeltour.tournament.models import Tournament
from padeltour.tournament_core.exceptions import PadelTourException


class Command(BaseCommand):
    help = "Recalculate player stats for a tournament from its match results"

    def add_arguments(self, parser):
        parser.add_argument(
            "tournament_id",
            type=int,
            help="Tournament ID to recalculate",
        )
        parser.add_argument(
            "--show-leaderboard",
            action="store_true",
            help="Print the leaderboard after recalculating",
        )

    def handle(self, *args, **options):
        tournament_id = options["tournament_id"]

        try:
            tournament = Tournament.objects.get(id=tournament_id)
        except Tournament.DoesNotExist:
            raise CommandError(f"Tournament with ID {tournament_id} does not exist")

        try:
            stats = recalculate_tournament_stats(tournament)
        except PadelTourException as e:
            raise CommandError(f"Could not recalculate {tournament.name}: {e}")

        self.stdout.write(
            self.style.SUCCESS(
                f"✓ Recalculated stats for {len(stats)} players in {tournament.name}"
            )
        )

        if options["show_leaderboard"]:
            for entry in tournament_leaderboard(tournament):
                stats = entry.player.stats
                if stats is None:
                    self.stdout.write(f"{entry.position:>3}. {entry.player.name} (no matches)")
                    continue
                self.stdout.write(
                    f"{entry.position:>3}. {entry.player.name}: "
                    f"{stats.tournament_points:g} pts, "
                    f"{stats.matches_won}W {stats.matches_drawn}D {stats.matches_lost}L, "
                    f"{stats.win_percentage:.1f}%"
                )
