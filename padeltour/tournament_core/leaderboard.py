"""
Leaderboard ranking.

Players are ordered by tournament points and then by a chain of tiebreaks,
with the player's name as the final deterministic tiebreak. Players that have
not played yet are listed after everyone else.
"""

from typing import Callable, Dict, List, NamedTuple, Sequence, Tuple

from padeltour.tournament_core.structure import Player, PlayerStats


# Tiebreaks are all "higher is better"
TIEBREAKS: Dict[str, Callable[[PlayerStats], float]] = {
    "tournament_points": lambda s: s.tournament_points,
    "win_percentage": lambda s: s.win_percentage,
    "set_difference": lambda s: s.set_difference,
    "game_difference": lambda s: s.game_difference,
    "tournaments_won": lambda s: s.tournaments_won,
}

DEFAULT_TIEBREAK_ORDER: Tuple[str, ...] = (
    "tournament_points",
    "win_percentage",
    "set_difference",
    "game_difference",
    "tournaments_won",
)


class LeaderboardEntry(NamedTuple):
    position: int
    player: Player


def _check_tiebreak_order(tiebreak_order: Sequence[str]) -> None:
    unknown = [name for name in tiebreak_order if name not in TIEBREAKS]
    if unknown:
        raise ValueError(f"Unknown tiebreak(s): {', '.join(unknown)}")


def _ranking_key(player: Player, tiebreak_order: Sequence[str]) -> tuple:
    if player.stats is None:
        # Unplayed players sort last; the stable sort keeps their input order
        return (1,)
    values = tuple(-TIEBREAKS[name](player.stats) for name in tiebreak_order)
    return (0,) + values + (player.name,)


def sort_leaderboard(
    players: Sequence[Player],
    tiebreak_order: Sequence[str] = DEFAULT_TIEBREAK_ORDER,
) -> List[Player]:
    """
    Return the players in leaderboard order.

    Args:
        players: Players to rank; the input is not modified
        tiebreak_order: Names from TIEBREAKS, applied in order; the player
            name is always the last tiebreak

    Returns:
        A new list, best player first. Players whose full ranking key is
        identical keep their input order.
    """
    _check_tiebreak_order(tiebreak_order)
    return sorted(players, key=lambda p: _ranking_key(p, tiebreak_order))


def rank_leaderboard(
    players: Sequence[Player],
    tiebreak_order: Sequence[str] = DEFAULT_TIEBREAK_ORDER,
) -> List[LeaderboardEntry]:
    """Sort the players and attach 1-based positions."""
    return [
        LeaderboardEntry(position, player)
        for position, player in enumerate(
            sort_leaderboard(players, tiebreak_order), start=1
        )
    ]
