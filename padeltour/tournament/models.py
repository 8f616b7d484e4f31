from typing import Optional, Tuple

from django.core.validators import MinValueValidator
from django.db import models

from padeltour.tournament_core.ranking_points import TournamentCategory
from padeltour.tournament_core.scoring import ScoringSystem
from padeltour.tournament_core.structure import COUNT_FIELDS, MatchResult


class _BaseModel(models.Model):
    date_created = models.DateTimeField(auto_now_add=True)
    date_modified = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# -------------------------------------------------------------------------------
class Player(_BaseModel):
    name = models.CharField(max_length=255, unique=True)
    email = models.EmailField(blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


TOURNAMENT_TYPE_OPTIONS = (
    ("ROUND_ROBIN", "Round Robin"),
    ("KNOCKOUT", "Knockout"),
    ("GROUP_STAGE_KNOCKOUT", "Group Stage + Knockout"),
)

TOURNAMENT_STATUS_OPTIONS = (
    ("created", "Created"),
    ("in_progress", "In Progress"),
    ("finished", "Finished"),
)

TOURNAMENT_CATEGORY_OPTIONS = (
    ("OPEN_250", "Open 250"),
    ("OPEN_500", "Open 500"),
    ("OPEN_1000", "Open 1000"),
    ("MASTERS", "Masters"),
)


# -------------------------------------------------------------------------------
class Tournament(_BaseModel):
    name = models.CharField(max_length=255)
    type = models.CharField(
        max_length=32, choices=TOURNAMENT_TYPE_OPTIONS, default="ROUND_ROBIN"
    )
    allow_ties = models.BooleanField(default=False)
    category = models.CharField(
        max_length=32, choices=TOURNAMENT_CATEGORY_OPTIONS, default="OPEN_250"
    )
    current_phase = models.PositiveIntegerField(default=1)
    status = models.CharField(
        max_length=32, choices=TOURNAMENT_STATUS_OPTIONS, default="created"
    )
    win_points = models.FloatField(default=3)
    draw_points = models.FloatField(default=1)
    loss_points = models.FloatField(default=0)
    champions = models.ManyToManyField(Player, blank=True, related_name="titles")

    def __str__(self):
        return self.name

    def scoring(self) -> ScoringSystem:
        return ScoringSystem(
            match_win_points=self.win_points,
            match_draw_points=self.draw_points,
            match_loss_points=self.loss_points,
        )

    def is_finished(self) -> bool:
        return self.status == "finished"

    def point_overrides(self) -> dict:
        """Configured ranking points per position for this tournament's category."""
        return dict(
            TournamentPointConfig.objects.filter(category=self.category).values_list(
                "position", "points"
            )
        )

    def players(self):
        """Players that appear in any match of this tournament."""
        return (
            Player.objects.filter(
                models.Q(team1_player1_matches__tournament=self)
                | models.Q(team1_player2_matches__tournament=self)
                | models.Q(team2_player1_matches__tournament=self)
                | models.Q(team2_player2_matches__tournament=self)
            )
            .distinct()
            .order_by("pk")
        )


MATCH_STATUS_OPTIONS = (
    ("pending", "Pending"),
    ("completed", "Completed"),
)


# -------------------------------------------------------------------------------
class Match(_BaseModel):
    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="matches"
    )
    phase = models.PositiveIntegerField(default=1)
    round_number = models.PositiveIntegerField(default=1)
    team1_player1 = models.ForeignKey(
        Player, on_delete=models.PROTECT, related_name="team1_player1_matches"
    )
    team1_player2 = models.ForeignKey(
        Player,
        on_delete=models.PROTECT,
        related_name="team1_player2_matches",
        null=True,
        blank=True,
    )
    team2_player1 = models.ForeignKey(
        Player, on_delete=models.PROTECT, related_name="team2_player1_matches"
    )
    team2_player2 = models.ForeignKey(
        Player,
        on_delete=models.PROTECT,
        related_name="team2_player2_matches",
        null=True,
        blank=True,
    )
    team1_score = models.PositiveIntegerField(null=True, blank=True)
    team2_score = models.PositiveIntegerField(null=True, blank=True)
    winner_team = models.PositiveSmallIntegerField(null=True, blank=True)
    status = models.CharField(
        max_length=32, choices=MATCH_STATUS_OPTIONS, default="pending"
    )
    played_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["phase", "round_number", "pk"]
        verbose_name_plural = "matches"

    def __str__(self):
        return "%s - phase %d round %d: %s vs %s" % (
            self.tournament,
            self.phase,
            self.round_number,
            " / ".join(str(p) for p in self.team1_players()),
            " / ".join(str(p) for p in self.team2_players()),
        )

    def team1_players(self) -> Tuple[Player, ...]:
        return tuple(p for p in (self.team1_player1, self.team1_player2) if p)

    def team2_players(self) -> Tuple[Player, ...]:
        return tuple(p for p in (self.team2_player1, self.team2_player2) if p)

    def is_completed(self) -> bool:
        return self.status == "completed"

    def result(self) -> Optional[MatchResult]:
        """The recorded score, or None if the match has not been played."""
        if not self.is_completed():
            return None
        return MatchResult(self.team1_score, self.team2_score)


# -------------------------------------------------------------------------------
class PlayerStats(_BaseModel):
    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name="stats")
    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="player_stats"
    )
    total_matches = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    matches_won = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    matches_lost = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    matches_drawn = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    sets_won = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    sets_lost = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    games_won = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    games_lost = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    tournaments_played = models.IntegerField(
        default=0, validators=[MinValueValidator(0)]
    )
    tournaments_won = models.IntegerField(default=0, validators=[MinValueValidator(0)])

    class Meta:
        unique_together = ("player", "tournament")
        verbose_name_plural = "player stats"

    def __str__(self):
        return "%s - %s" % (self.player, self.tournament)

    def counts(self) -> dict:
        return {name: getattr(self, name) for name in COUNT_FIELDS}


# -------------------------------------------------------------------------------
class TournamentResult(_BaseModel):
    """Final position and ranking points of a player in a finished tournament."""

    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="results"
    )
    player = models.ForeignKey(
        Player, on_delete=models.CASCADE, related_name="tournament_results"
    )
    final_position = models.PositiveIntegerField()
    points_awarded = models.FloatField(default=0)
    bonus_points = models.FloatField(default=0)
    category = models.CharField(max_length=32, choices=TOURNAMENT_CATEGORY_OPTIONS)

    class Meta:
        unique_together = ("tournament", "player")
        ordering = ["tournament", "final_position", "player"]

    def __str__(self):
        return "%s - %s (#%d)" % (self.tournament, self.player, self.final_position)

    def total_points(self) -> float:
        return self.points_awarded + self.bonus_points


# -------------------------------------------------------------------------------
class TournamentPointConfig(_BaseModel):
    """Replaces the default ranking points of one position in one category."""

    category = models.CharField(max_length=32, choices=TOURNAMENT_CATEGORY_OPTIONS)
    position = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    points = models.FloatField(validators=[MinValueValidator(0)])

    class Meta:
        unique_together = ("category", "position")
        ordering = ["category", "position"]

    def __str__(self):
        return "%s #%d: %g" % (
            TournamentCategory(self.category).value,
            self.position,
            self.points,
        )
