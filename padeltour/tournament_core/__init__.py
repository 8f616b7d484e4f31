"""
Match-result validation and standings engine.

Pure Python, no database: validate a score, resolve the winner, fold the
outcome into player statistics and rank the leaderboard.
"""

from padeltour.tournament_core.exceptions import (
    InvalidResult,
    InvalidResultReason,
    PadelTourException,
    StatsUnderflow,
)
from padeltour.tournament_core.leaderboard import (
    DEFAULT_TIEBREAK_ORDER,
    LeaderboardEntry,
    rank_leaderboard,
    sort_leaderboard,
)
from padeltour.tournament_core.match_results import (
    TeamLineup,
    apply_match_result,
    correct_match_result,
)
from padeltour.tournament_core.outcome import (
    determine_winner,
    determine_winner_with_ties,
)
from padeltour.tournament_core.ranking_points import (
    DEFAULT_POINT_TABLES,
    RankingAward,
    TournamentCategory,
    award_ranking_points,
    points_for_position,
)
from padeltour.tournament_core.scoring import (
    DEFAULT_SCORING,
    TWO_ONE_ZERO_SCORING,
    ScoringSystem,
)
from padeltour.tournament_core.stats import (
    apply_outcome,
    calculate_updated_stats,
    calculate_updated_stats_for_tie,
    calculate_win_percentage,
    create_empty_stats,
    record_tournament_finish,
)
from padeltour.tournament_core.structure import (
    GROUP_PHASE,
    MatchContext,
    MatchOutcome,
    MatchResult,
    Player,
    PlayerStats,
    TournamentConfig,
    TournamentType,
)
from padeltour.tournament_core.validation import (
    validate_match_result,
    validate_match_result_with_config,
)
