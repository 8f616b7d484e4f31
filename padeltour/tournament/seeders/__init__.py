"""
Database seeders for generating test data.
"""

from .base import BaseSeeder
from .player_seeder import PlayerSeeder

__all__ = [
    "BaseSeeder",
    "PlayerSeeder",
]
