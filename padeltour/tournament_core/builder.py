"""
Builder for replaying matches into leaderboard players with a fluent API.

This module provides a builder that registers players by name, feeds match
results through the scoring engine and produces Player records ready for
ranking, without any database dependencies.
"""

from typing import Dict, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass

from padeltour.tournament_core.match_results import (
    TeamLineup,
    apply_match_result,
    correct_match_result,
)
from padeltour.tournament_core.stats import record_tournament_finish
from padeltour.tournament_core.structure import (
    GROUP_PHASE,
    MatchContext,
    MatchResult,
    Player,
    PlayerStats,
    TournamentConfig,
)

Team = Union[str, Sequence[str]]


@dataclass
class RecordedMatch:
    """A match that has been applied to the stats."""

    team1: TeamLineup
    team2: TeamLineup
    result: MatchResult
    context: MatchContext
    deleted: bool = False


class LeaderboardBuilder:
    """Builder for creating scored players easily."""

    def __init__(self, config: Optional[TournamentConfig] = None):
        self.config = config or TournamentConfig()
        self.players: Dict[str, str] = {}  # name -> player id
        self.stats: Dict[str, Optional[PlayerStats]] = {}
        self.matches: List[RecordedMatch] = []
        self._next_player_id = 1

    def _get_or_create_player_id(self, name: str) -> str:
        if name not in self.players:
            player_id = str(self._next_player_id)
            self._next_player_id += 1
            self.players[name] = player_id
            self.stats[player_id] = None
        return self.players[name]

    def _lineup(self, team: Team) -> TeamLineup:
        names = (team,) if isinstance(team, str) else tuple(team)
        return TeamLineup(tuple(self._get_or_create_player_id(n) for n in names))

    def _get_match(self, index: int) -> RecordedMatch:
        match = self.matches[index]
        if match.deleted:
            raise ValueError(f"Match {index} has been deleted")
        return match

    def player(self, name: str) -> "LeaderboardBuilder":
        """Register a player without recording any match for them."""
        self._get_or_create_player_id(name)
        return self

    def match(
        self,
        team1: Team,
        team2: Team,
        team1_score: int,
        team2_score: int,
        phase: int = GROUP_PHASE,
    ) -> "LeaderboardBuilder":
        """Record a match. A team is a player name or a sequence of names."""
        lineup1 = self._lineup(team1)
        lineup2 = self._lineup(team2)
        result = MatchResult(team1_score, team2_score)
        context = MatchContext(phase)
        self.stats = apply_match_result(
            self.stats, lineup1, lineup2, result, self.config, context
        )
        self.matches.append(RecordedMatch(lineup1, lineup2, result, context))
        return self

    def correct(
        self, index: int, team1_score: int, team2_score: int
    ) -> "LeaderboardBuilder":
        """Replace the score of the ``index``-th recorded match."""
        match = self._get_match(index)
        new_result = MatchResult(team1_score, team2_score)
        self.stats = correct_match_result(
            self.stats,
            match.team1,
            match.team2,
            match.result,
            new_result,
            self.config,
            match.context,
        )
        match.result = new_result
        return self

    def delete(self, index: int) -> "LeaderboardBuilder":
        """Remove the ``index``-th recorded match from the stats."""
        match = self._get_match(index)
        self.stats = apply_match_result(
            self.stats,
            match.team1,
            match.team2,
            match.result,
            self.config,
            match.context,
            reverse=True,
        )
        match.deleted = True
        return self

    def finish(self, *champions: str) -> "LeaderboardBuilder":
        """Close the tournament, crediting a title to each champion."""
        champion_ids = {self.players[name] for name in champions}
        for player_id in self.stats:
            self.stats[player_id] = record_tournament_finish(
                self.stats[player_id],
                player_id in champion_ids,
                player_id=player_id,
                scoring=self.config.scoring,
            )
        return self

    def build(self) -> List[Player]:
        """Return the players in registration order."""
        return [
            Player(id=player_id, name=name, stats=self.stats[player_id])
            for name, player_id in self.players.items()
        ]

    def results(self) -> List[Tuple[str, str, MatchResult]]:
        """Live matches as (team1, team2, result), players joined by '/'."""
        names = {player_id: name for name, player_id in self.players.items()}

        def label(lineup: TeamLineup) -> str:
            return "/".join(names[p] for p in lineup.player_ids)

        return [
            (label(m.team1), label(m.team2), m.result)
            for m in self.matches
            if not m.deleted
        ]
