"""Tests for team score aggregation."""

import logging

import pytest

from src.match_engine.models import PlayerMatchStat, Position
from src.match_engine.score_aggregator import ScoreAggregator


def _make_stats(goals_behinds, team_id="home"):
    return [
        PlayerMatchStat(
            match_id="m1",
            player_id=f"{team_id}-{i}",
            team_id=team_id,
            assigned_position=Position.KFWD,
            effective_rating=80,
            goals=goals,
            behinds=behinds,
        )
        for i, (goals, behinds) in enumerate(goals_behinds)
    ]


class TestStrengthModifier:
    @pytest.mark.parametrize("overall,expected", [
        (75, 0.85),
        (90, 0.95),
        (60, 0.75),
    ])
    def test_formula(self, overall, expected):
        assert ScoreAggregator.strength_modifier(overall) == pytest.approx(expected)


class TestAggregate:
    def test_ten_goals_strong_team(self, scripted_rng):
        """10.0 (60) x 0.95 strength x 1.0 variance."""
        stats = _make_stats([(4, 0), (3, 0), (2, 0), (1, 0)])
        score = ScoreAggregator().aggregate("home", stats, 90, scripted_rng([1.0]))

        assert score.goals == 10
        assert score.behinds == 0
        assert score.raw_points == 60
        assert score.strength_modifier == pytest.approx(0.95)
        assert score.match_variance == 1.0
        assert score.final_score == 57

    def test_raw_points_count_behinds(self, scripted_rng):
        stats = _make_stats([(2, 3), (1, 4)])
        score = ScoreAggregator().aggregate("home", stats, 75, scripted_rng([1.0]))
        assert score.raw_points == 25
        assert score.final_score == 21  # 21.25

    def test_missing_overall_defaults_to_75(self, scripted_rng, caplog):
        stats = _make_stats([(10, 0)])
        with caplog.at_level(logging.WARNING):
            score = ScoreAggregator().aggregate("home", stats, None, scripted_rng([1.0]))

        assert score.strength_modifier == pytest.approx(0.85)
        assert score.final_score == 51
        assert "No team overall" in caplog.text

    def test_scoreless_team(self, scripted_rng):
        score = ScoreAggregator().aggregate("home", _make_stats([]), 75, scripted_rng([1.2]))
        assert score.raw_points == 0
        assert score.final_score == 0

    def test_never_negative_for_weak_team(self, scripted_rng):
        """A very low overall gives a negative modifier; the score floors at 0."""
        stats = _make_stats([(5, 5)])
        score = ScoreAggregator().aggregate("home", stats, -100, scripted_rng([1.0]))
        assert score.strength_modifier < 0
        assert score.final_score == 0

    def test_one_draw_per_team(self, scripted_rng):
        rng = scripted_rng([0.9, 1.1])
        aggregator = ScoreAggregator()
        first = aggregator.aggregate("home", _make_stats([(5, 0)]), 75, rng)
        second = aggregator.aggregate("away", _make_stats([(5, 0)], "away"), 75, rng)

        assert first.match_variance == 0.9
        assert second.match_variance == 1.1
        assert rng.calls == 2
