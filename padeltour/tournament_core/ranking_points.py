"""
Ranking points awarded when a tournament finishes.

Each tournament belongs to a category. The category's point table maps a
final position to base points; every player also earns one bonus point per
match won in the tournament. Ranking points are kept apart from the
match-derived ``PlayerStats.tournament_points``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional


class TournamentCategory(str, Enum):
    OPEN_250 = "OPEN_250"
    OPEN_500 = "OPEN_500"
    OPEN_1000 = "OPEN_1000"
    MASTERS = "MASTERS"


DEFAULT_POINT_TABLES: Dict[TournamentCategory, Dict[int, float]] = {
    TournamentCategory.OPEN_250: {1: 7.5, 2: 5, 3: 3, 4: 1},
    TournamentCategory.OPEN_500: {1: 15, 2: 12, 3: 9, 4: 6, 5: 3, 6: 1},
    TournamentCategory.OPEN_1000: {
        1: 16.5,
        2: 13,
        3: 11,
        4: 9,
        5: 7,
        6: 5,
        7: 3,
        8: 1,
    },
    TournamentCategory.MASTERS: {
        1: 24.5,
        2: 21,
        3: 19,
        4: 17,
        5: 15,
        6: 13,
        7: 11,
        8: 9,
        9: 7,
        10: 5,
        11: 3,
        12: 1,
    },
}

BONUS_POINTS_PER_WIN = 1


def point_table(
    category: TournamentCategory, overrides: Optional[Mapping[int, float]] = None
) -> Dict[int, float]:
    """The category's default table with ``overrides`` applied per position."""
    table = dict(DEFAULT_POINT_TABLES[TournamentCategory(category)])
    if overrides:
        for position, points in overrides.items():
            _check_position(position)
            table[position] = points
    return table


def points_for_position(
    category: TournamentCategory,
    position: int,
    overrides: Optional[Mapping[int, float]] = None,
) -> float:
    """Base points for finishing at ``position``; 0 beyond the table."""
    _check_position(position)
    return point_table(category, overrides).get(position, 0)


def _check_position(position) -> None:
    if isinstance(position, bool) or not isinstance(position, int) or position < 1:
        raise ValueError(f"Final position must be a positive integer, got {position!r}")


@dataclass(frozen=True)
class RankingAward:
    player_id: str
    position: int
    base_points: float
    bonus_points: float

    @property
    def total_points(self) -> float:
        return self.base_points + self.bonus_points


def award_ranking_points(
    category: TournamentCategory,
    final_positions: Mapping[str, int],
    matches_won: Mapping[str, int],
    overrides: Optional[Mapping[int, float]] = None,
) -> Dict[str, RankingAward]:
    """
    Compute the ranking award of every placed player.

    Args:
        category: Category of the finished tournament
        final_positions: Final position per player id, 1 for the winners
        matches_won: Matches won in the tournament per player id; players
            missing here earn no bonus
        overrides: Per-position replacements for the default point table

    Returns:
        Awards keyed by player id, for the players in ``final_positions``
    """
    table = point_table(category, overrides)
    awards = {}
    for player_id, position in final_positions.items():
        _check_position(position)
        wins = matches_won.get(player_id, 0)
        if wins < 0:
            raise ValueError(f"matches_won for {player_id} cannot be negative")
        awards[player_id] = RankingAward(
            player_id=player_id,
            position=position,
            base_points=table.get(position, 0),
            bonus_points=wins * BONUS_POINTS_PER_WIN,
        )
    return awards
