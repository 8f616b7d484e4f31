"""
Player seeder for creating test players.
"""

from typing import List

from padeltour.tournament.models import Player

from .base import BaseSeeder


class PlayerSeeder(BaseSeeder):
    """Seeder for creating Player objects."""

    def seed(self, count: int = 1, **kwargs) -> List[Player]:
        """Create players with unique fake names."""
        players = []
        existing = set(Player.objects.values_list("name", flat=True))

        while len(players) < count:
            name = self.fake.unique.name()
            if name in existing:
                continue
            existing.add(name)

            player_data = {
                "name": name,
                "email": self.fake.unique.email() if self.weighted_bool(0.8) else "",
                "is_active": self.weighted_bool(0.9),
            }
            player_data.update(kwargs)  # Allow overrides

            players.append(self._track_object(Player.objects.create(**player_data)))

        return players
