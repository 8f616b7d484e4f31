"""
Core structures for scoring padel matches and keeping standings.

This module provides the plain data the engine works with:
- Match scores and the tournament rules they are checked against
- Per-player, per-tournament statistics with derived metrics
- Players as seen by the leaderboard
"""

from typing import Optional
from dataclasses import dataclass, field
from enum import Enum

from padeltour.tournament_core.scoring import ScoringSystem, DEFAULT_SCORING


# Phase numbering is owned by the scheduler; the group stage is always phase 1.
GROUP_PHASE = 1


class TournamentType(Enum):
    """Format of a tournament."""

    ROUND_ROBIN = "ROUND_ROBIN"
    KNOCKOUT = "KNOCKOUT"
    GROUP_STAGE_KNOCKOUT = "GROUP_STAGE_KNOCKOUT"


class MatchOutcome(Enum):
    """Outcome of a match from one player's point of view."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


@dataclass(frozen=True)
class MatchResult:
    """Sets won by each team in a single match."""

    team1_score: int
    team2_score: int

    @property
    def is_tie(self) -> bool:
        return self.team1_score == self.team2_score


@dataclass(frozen=True)
class TournamentConfig:
    """Rules of a tournament that affect how a result is scored."""

    type: TournamentType = TournamentType.ROUND_ROBIN
    allow_ties: bool = False
    scoring: ScoringSystem = field(default_factory=lambda: DEFAULT_SCORING)

    def is_knockout_phase(self, phase: int) -> bool:
        """Return True if matches in ``phase`` must produce a winner."""
        if self.type == TournamentType.KNOCKOUT:
            return True
        elif self.type == TournamentType.GROUP_STAGE_KNOCKOUT:
            return phase != GROUP_PHASE
        elif self.type == TournamentType.ROUND_ROBIN:
            return False
        raise ValueError(f"Unknown tournament type: {self.type!r}")

    def ties_allowed(self, phase: int) -> bool:
        """Effective tie policy for a match in ``phase``."""
        return self.allow_ties and not self.is_knockout_phase(phase)


@dataclass(frozen=True)
class MatchContext:
    """Where in the tournament a match is played."""

    phase: int = GROUP_PHASE


def calculate_win_percentage(matches_won: int, total_matches: int) -> float:
    """Percentage of matches won, 0 when nothing has been played."""
    if total_matches == 0:
        return 0.0
    return 100 * matches_won / total_matches


COUNT_FIELDS = (
    "total_matches",
    "matches_won",
    "matches_lost",
    "matches_drawn",
    "sets_won",
    "sets_lost",
    "games_won",
    "games_lost",
    "tournaments_played",
    "tournaments_won",
)


@dataclass(frozen=True)
class PlayerStats:
    """Aggregate statistics for one player in one tournament.

    Only raw counts are stored. Win percentage and tournament points are
    computed from them on every read, so they can never disagree with the
    counts.
    """

    player_id: str
    total_matches: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    matches_drawn: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    games_won: int = 0
    games_lost: int = 0
    tournaments_played: int = 0
    tournaments_won: int = 0
    scoring: ScoringSystem = field(default_factory=lambda: DEFAULT_SCORING)

    def __post_init__(self):
        for name in COUNT_FIELDS:
            if getattr(self, name) < 0:
                raise ValueError(
                    f"PlayerStats.{name} must be non-negative, got {getattr(self, name)}"
                )
        if (
            self.matches_won + self.matches_lost + self.matches_drawn
            != self.total_matches
        ):
            raise ValueError(
                "matches_won + matches_lost + matches_drawn must equal total_matches "
                f"for player {self.player_id}"
            )
        if self.tournaments_won > self.tournaments_played:
            raise ValueError(
                f"Player {self.player_id} cannot win more tournaments than played"
            )

    @property
    def win_percentage(self) -> float:
        return calculate_win_percentage(self.matches_won, self.total_matches)

    @property
    def tournament_points(self) -> float:
        return self.scoring.tournament_points(
            self.matches_won, self.matches_drawn, self.matches_lost
        )

    @property
    def set_difference(self) -> int:
        return self.sets_won - self.sets_lost

    @property
    def game_difference(self) -> int:
        return self.games_won - self.games_lost

    def counts(self) -> dict:
        """Return the raw counters as a dictionary."""
        return {name: getattr(self, name) for name in COUNT_FIELDS}


@dataclass(frozen=True)
class Player:
    """A player as seen by the leaderboard.

    ``stats`` is None until the player's first recorded match.
    """

    id: str
    name: str
    stats: Optional[PlayerStats] = None

    @property
    def has_stats(self) -> bool:
        return self.stats is not None

    def stats_or_empty(self, scoring: ScoringSystem = DEFAULT_SCORING) -> PlayerStats:
        """Return the player's stats, or a zero-valued record if there are none."""
        if self.stats is None:
            return PlayerStats(player_id=self.id, scoring=scoring)
        return self.stats
