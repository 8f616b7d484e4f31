"""
Management command to seed the database with fake players.
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from faker import Faker

from padeltour.tournament.seeders import PlayerSeeder


class Command(BaseCommand):
    help = "Create fake players for development and testing"

    def add_arguments(self, parser):
        parser.add_argument(
            "--count",
            type=int,
            default=16,
            help="Number of players to create (default: 16)",
        )
        parser.add_argument(
            "--locale",
            type=str,
            default="en_US",
            help="Faker locale for data generation (default: en_US)",
        )

    def handle(self, *args, **options):
        fake = Faker(options["locale"])

        with transaction.atomic():
            players = PlayerSeeder(fake).seed(options["count"])

        self.stdout.write(self.style.SUCCESS(f"✓ Created {len(players)} players"))
