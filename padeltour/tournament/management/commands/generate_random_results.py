"""
Management command to generate random results for the pending matches of a
tournament phase.

Padel matches are played as a single time-limited set, so a result is the
number of games each team won.
"""

import random
from django.core.management.base import BaseCommand, CommandError

from padeltour.tournament.db_to_structure import match_context, tournament_config
from padeltour.tournament.match_results import submit_match_result
from padeltour.tournament.models import Match, Tournament
from padeltour.tournament_core.exceptions import PadelTourException


def simulate_match_score(ties_allowed: bool, tie_rate: float = 0.1):
    """Return a random (team1_score, team2_score) for a single set."""
    if ties_allowed and random.random() < tie_rate:
        games = random.randint(2, 5)
        return (games, games)

    loser_games = random.randint(0, 5)
    winner_games = 6 if loser_games < 5 else 7
    if random.random() < 0.5:
        return (winner_games, loser_games)
    return (loser_games, winner_games)


class Command(BaseCommand):
    help = "Generate random results for pending matches in a tournament"

    def add_arguments(self, parser):
        parser.add_argument(
            "tournament_id",
            type=int,
            help="Tournament ID to generate results for",
        )
        parser.add_argument(
            "--phase",
            type=int,
            help="Specific phase (default: the tournament's current phase)",
        )
        parser.add_argument(
            "--tie-rate",
            type=float,
            default=0.1,
            help="Probability of a drawn match where ties are allowed (default: 0.1)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be done without making changes",
        )
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Overwrite existing results (default: skip completed matches)",
        )

    def handle(self, *args, **options):
        tournament_id = options["tournament_id"]
        tie_rate = options["tie_rate"]
        dry_run = options["dry_run"]
        overwrite = options["overwrite"]

        try:
            tournament = Tournament.objects.get(id=tournament_id)
        except Tournament.DoesNotExist:
            raise CommandError(f"Tournament with ID {tournament_id} does not exist")

        if tournament.is_finished():
            raise CommandError(f"Tournament {tournament.name} is already finished")

        phase = options.get("phase") or tournament.current_phase
        self.stdout.write(f"Processing tournament: {tournament.name} (phase {phase})")

        matches = Match.objects.filter(tournament=tournament, phase=phase)
        if not overwrite:
            matches = matches.filter(status="pending")

        config = tournament_config(tournament)
        results_generated = 0
        for match in matches:
            ties_allowed = config.ties_allowed(match_context(match).phase)
            team1_score, team2_score = simulate_match_score(ties_allowed, tie_rate)

            if dry_run:
                self.stdout.write(f"  {match}: {team1_score}-{team2_score}")
            else:
                try:
                    submit_match_result(match, team1_score, team2_score)
                except PadelTourException as e:
                    raise CommandError(f"Could not record result for {match}: {e}")
            results_generated += 1

        if dry_run:
            self.stdout.write(
                self.style.WARNING(
                    f"DRY RUN: Would generate {results_generated} results"
                )
            )
        elif results_generated > 0:
            self.stdout.write(
                self.style.SUCCESS(f"✓ Generated {results_generated} random results")
            )
        else:
            self.stdout.write("No results generated (all matches already have results)")
