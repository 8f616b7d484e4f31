"""
Base class for database seeders.
"""

import random
from typing import Any, List, Sequence

from faker import Faker


class BaseSeeder:
    """Common helpers for seeders that create objects with fake data."""

    def __init__(self, fake: Faker = None):
        self.fake = fake or Faker()
        self.created_objects: List[Any] = []

    def seed(self, count: int = 1, **kwargs) -> List[Any]:
        raise NotImplementedError

    def weighted_bool(self, probability: float) -> bool:
        """Return True with the given probability."""
        return random.random() < probability

    def random_choice(self, items: Sequence[Any]) -> Any:
        return random.choice(items)

    def _track_object(self, obj: Any) -> Any:
        self.created_objects.append(obj)
        return obj
