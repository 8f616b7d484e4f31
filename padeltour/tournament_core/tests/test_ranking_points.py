"""
Unit tests for category ranking points.
"""

import unittest

from padeltour.tournament_core.ranking_points import (
    TournamentCategory,
    award_ranking_points,
    point_table,
    points_for_position,
)


class PointTableTests(unittest.TestCase):
    def test_default_tables(self):
        self.assertEqual(points_for_position(TournamentCategory.OPEN_250, 1), 7.5)
        self.assertEqual(points_for_position(TournamentCategory.OPEN_500, 6), 1)
        self.assertEqual(points_for_position(TournamentCategory.OPEN_1000, 2), 13)
        self.assertEqual(points_for_position(TournamentCategory.MASTERS, 12), 1)

    def test_position_beyond_table_scores_zero(self):
        self.assertEqual(points_for_position(TournamentCategory.OPEN_250, 5), 0)
        self.assertEqual(points_for_position(TournamentCategory.MASTERS, 13), 0)

    def test_category_by_value(self):
        self.assertEqual(points_for_position("OPEN_500", 1), 15)

    def test_overrides_replace_single_positions(self):
        table = point_table(TournamentCategory.OPEN_250, {1: 10, 5: 0.5})
        self.assertEqual(table, {1: 10, 2: 5, 3: 3, 4: 1, 5: 0.5})

    def test_overrides_do_not_change_defaults(self):
        point_table(TournamentCategory.OPEN_250, {1: 10})
        self.assertEqual(points_for_position(TournamentCategory.OPEN_250, 1), 7.5)

    def test_invalid_position(self):
        for position in (0, -1, 1.5, True):
            with self.subTest(position=position):
                with self.assertRaises(ValueError):
                    points_for_position(TournamentCategory.OPEN_250, position)


class AwardRankingPointsTests(unittest.TestCase):
    def test_base_and_bonus(self):
        awards = award_ranking_points(
            TournamentCategory.OPEN_500,
            {"a": 1, "b": 2, "c": 7},
            {"a": 4, "b": 3, "c": 0},
        )
        self.assertEqual(
            (awards["a"].base_points, awards["a"].bonus_points), (15, 4)
        )
        self.assertEqual(awards["a"].total_points, 19)
        self.assertEqual(awards["b"].total_points, 15)
        self.assertEqual(awards["c"].total_points, 0)

    def test_only_placed_players_are_awarded(self):
        awards = award_ranking_points(
            TournamentCategory.OPEN_250, {"a": 1}, {"a": 2, "b": 5}
        )
        self.assertEqual(list(awards), ["a"])

    def test_shared_positions(self):
        awards = award_ranking_points(
            TournamentCategory.OPEN_250, {"a": 1, "b": 1}, {}
        )
        self.assertEqual(awards["a"].base_points, awards["b"].base_points)
        self.assertEqual(awards["b"].bonus_points, 0)

    def test_overrides(self):
        awards = award_ranking_points(
            TournamentCategory.MASTERS, {"a": 3}, {"a": 1}, overrides={3: 20}
        )
        self.assertEqual(awards["a"].total_points, 21)

    def test_negative_wins_rejected(self):
        with self.assertRaises(ValueError):
            award_ranking_points(TournamentCategory.OPEN_250, {"a": 1}, {"a": -1})
