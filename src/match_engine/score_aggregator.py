"""Team score aggregation."""

import logging
from typing import List, Optional

from src.match_engine.config import (
    BEHIND_POINTS,
    DEFAULT_TEAM_OVERALL,
    GOAL_POINTS,
    MATCH_VARIANCE_RANGE,
    TEAM_STRENGTH_BASE,
    TEAM_STRENGTH_DIVISOR,
)
from src.match_engine.models import PlayerMatchStat, TeamScore
from src.match_engine.randomness import RandomSource
from src.match_engine.rating_model import round_half_up

logger = logging.getLogger(__name__)


class ScoreAggregator:
    """Reduce a team's box scores to a final score.

    Formula::

        raw      = goals * 6 + behinds
        strength = 0.85 + (team_overall - 75) / 150
        final    = round(raw * strength * U[0.8, 1.2)), floored at 0
    """

    @staticmethod
    def strength_modifier(team_overall: int) -> float:
        return TEAM_STRENGTH_BASE + (team_overall - DEFAULT_TEAM_OVERALL) / TEAM_STRENGTH_DIVISOR

    def aggregate(
        self,
        team_id: str,
        stats: List[PlayerMatchStat],
        team_overall: Optional[int],
        rng: RandomSource,
    ) -> TeamScore:
        """Final score for one team. Draws one match variance per call."""
        if team_overall is None:
            logger.warning(
                "No team overall for %s, using default %d",
                team_id, DEFAULT_TEAM_OVERALL,
            )
            team_overall = DEFAULT_TEAM_OVERALL

        goals = sum(s.goals for s in stats)
        behinds = sum(s.behinds for s in stats)
        raw_points = goals * GOAL_POINTS + behinds * BEHIND_POINTS

        strength = self.strength_modifier(team_overall)
        variance = rng.uniform(*MATCH_VARIANCE_RANGE)
        final_score = max(0, round_half_up(raw_points * strength * variance))

        logger.debug(
            "Team %s: %d.%d (%d) x %.3f strength x %.3f variance -> %d",
            team_id, goals, behinds, raw_points, strength, variance, final_score,
        )

        return TeamScore(
            team_id=team_id,
            goals=goals,
            behinds=behinds,
            raw_points=raw_points,
            strength_modifier=strength,
            match_variance=variance,
            final_score=final_score,
        )
