"""
Fluent assertion interface for testing leaderboards.

This module provides a clean, fluent way to assert player statistics and
leaderboard positions for testing purposes. It works with the pure Python
tournament_core structures.
"""

from typing import List, Optional, Sequence, Union
from dataclasses import dataclass

from padeltour.tournament_core.leaderboard import (
    DEFAULT_TIEBREAK_ORDER,
    sort_leaderboard,
)
from padeltour.tournament_core.structure import Player, PlayerStats


# Use the built-in AssertionError for proper test framework integration


@dataclass
class LeaderboardAssertion:
    """Fluent interface for asserting a leaderboard."""

    players: Sequence[Player]
    tiebreak_order: Sequence[str] = DEFAULT_TIEBREAK_ORDER
    selected: Optional[Player] = None
    _standings: Optional[List[Player]] = None

    def __post_init__(self):
        """Rank the players once on initialization."""
        if self._standings is None:
            self._standings = sort_leaderboard(self.players, self.tiebreak_order)

    def _find_player(self, name: str) -> Player:
        for player in self.players:
            if player.name == name:
                return player
        raise AssertionError(f"Player '{name}' not found in leaderboard")

    def player(self, name: str) -> "PlayerAssertion":
        """Select a player by name for assertions."""
        return PlayerAssertion(
            players=self.players,
            tiebreak_order=self.tiebreak_order,
            selected=self._find_player(name),
            _standings=self._standings,
        )

    def order(self, *names: str) -> "LeaderboardAssertion":
        """Assert the full leaderboard order by player name."""
        actual = [p.name for p in self._standings]
        if actual != list(names):
            raise AssertionError(f"Expected leaderboard {list(names)}, got {actual}")
        return self


class PlayerAssertion(LeaderboardAssertion):
    """Assertions for a specific player."""

    def assert_(self) -> "PlayerStatsAssertion":
        """Start a chain of assertions for this player."""
        return PlayerStatsAssertion(
            players=self.players,
            tiebreak_order=self.tiebreak_order,
            selected=self.selected,
            _standings=self._standings,
        )


class PlayerStatsAssertion(LeaderboardAssertion):
    """Fluent interface for asserting a player's statistics."""

    def _stats(self) -> PlayerStats:
        if self.selected.stats is None:
            raise AssertionError(f"{self.selected.name} has no recorded stats")
        return self.selected.stats

    def _check(self, label: str, expected, actual) -> "PlayerStatsAssertion":
        if actual != expected:
            raise AssertionError(
                f"{self.selected.name} expected {expected} {label}, got {actual}"
            )
        return self

    def wins(self, expected: int) -> "PlayerStatsAssertion":
        """Assert the number of matches won."""
        return self._check("wins", expected, self._stats().matches_won)

    def losses(self, expected: int) -> "PlayerStatsAssertion":
        """Assert the number of matches lost."""
        return self._check("losses", expected, self._stats().matches_lost)

    def draws(self, expected: int) -> "PlayerStatsAssertion":
        """Assert the number of matches drawn."""
        return self._check("draws", expected, self._stats().matches_drawn)

    def matches(self, expected: int) -> "PlayerStatsAssertion":
        """Assert the total number of matches."""
        return self._check("matches", expected, self._stats().total_matches)

    def sets(self, won: int, lost: int) -> "PlayerStatsAssertion":
        """Assert the set tally."""
        stats = self._stats()
        return self._check("sets", (won, lost), (stats.sets_won, stats.sets_lost))

    def games(self, won: int, lost: int) -> "PlayerStatsAssertion":
        """Assert the games tally."""
        stats = self._stats()
        return self._check(
            "games", (won, lost), (stats.games_won, stats.games_lost)
        )

    def tournaments(self, played: int, won: int = 0) -> "PlayerStatsAssertion":
        """Assert tournaments played and won."""
        stats = self._stats()
        return self._check(
            "tournaments",
            (played, won),
            (stats.tournaments_played, stats.tournaments_won),
        )

    def tournament_points(
        self, expected: Union[int, float]
    ) -> "PlayerStatsAssertion":
        """Assert the tournament points."""
        actual = self._stats().tournament_points
        # Allow small floating point differences
        if abs(actual - expected) > 0.0001:
            raise AssertionError(
                f"{self.selected.name} expected {expected} tournament points, got {actual}"
            )
        return self

    def win_percentage(self, expected: float) -> "PlayerStatsAssertion":
        """Assert the win percentage."""
        actual = self._stats().win_percentage
        if abs(actual - expected) > 0.01:
            raise AssertionError(
                f"{self.selected.name} expected {expected}% wins, got {actual}%"
            )
        return self

    def no_stats(self) -> "PlayerStatsAssertion":
        """Assert the player has not played yet."""
        if self.selected.stats is not None:
            raise AssertionError(f"{self.selected.name} has recorded stats")
        return self

    def position(self, expected: int) -> "PlayerStatsAssertion":
        """Assert the 1-based leaderboard position."""
        actual = self._standings.index(self.selected) + 1
        return self._check("position", expected, actual)


def assert_leaderboard(
    players: Sequence[Player],
    tiebreak_order: Sequence[str] = DEFAULT_TIEBREAK_ORDER,
) -> LeaderboardAssertion:
    """Entry point for leaderboard assertions."""
    return LeaderboardAssertion(players, tiebreak_order)
