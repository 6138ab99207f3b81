"""Match simulator - runs the whole engine for one match."""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Union

from src.match_engine.config import DEFAULT_BROWNLOW_FORMAT
from src.match_engine.lineup_validator import LineupValidator
from src.match_engine.models import (
    BrownlowFormat,
    MatchResult,
    MatchStatus,
    Player,
    PlayerAssignment,
    PlayerMatchStat,
    Position,
    TeamLineup,
    TeamScore,
    Vote,
)
from src.match_engine.performance_generator import PerformanceGenerator
from src.match_engine.randomness import RandomSource, SeededRandom
from src.match_engine.ruck_contest import RuckAssignment, resolve_ruck_contest
from src.match_engine.score_aggregator import ScoreAggregator
from src.match_engine.vote_allocator import VoteAllocator, parse_brownlow_format

logger = logging.getLogger(__name__)


@dataclass
class MatchSimulationResult:
    """Everything one simulation run produces, ready to be persisted."""

    result: MatchResult
    home_score: TeamScore
    away_score: TeamScore
    home_lineup: TeamLineup  # Copies with effective ratings filled in
    away_lineup: TeamLineup
    player_stats: List[PlayerMatchStat]
    coaches_votes: List[Vote]
    brownlow_votes: List[Vote]
    brownlow_format: BrownlowFormat


class MatchSimulator:
    """Main entry point of the match engine.

    Coordinates LineupValidator (input checks), PerformanceGenerator and
    the ruck contest (box scores), ScoreAggregator (final scores) and
    VoteAllocator (award votes).

    The simulator holds no per-match state; a result depends only on the
    inputs and the random source.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        validator: Optional[LineupValidator] = None,
        generator: Optional[PerformanceGenerator] = None,
        aggregator: Optional[ScoreAggregator] = None,
        allocator: Optional[VoteAllocator] = None,
    ):
        self.rng = rng or SeededRandom()
        self.validator = validator or LineupValidator()
        self.generator = generator or PerformanceGenerator()
        self.aggregator = aggregator or ScoreAggregator()
        self.allocator = allocator or VoteAllocator()

    def simulate(
        self,
        match_id: str,
        home_lineup: TeamLineup,
        away_lineup: TeamLineup,
        home_roster: List[Player],
        away_roster: List[Player],
        home_overall: Optional[int] = None,
        away_overall: Optional[int] = None,
        brownlow_format: Union[str, BrownlowFormat] = DEFAULT_BROWNLOW_FORMAT,
    ) -> MatchSimulationResult:
        """Simulate one match.

        All validation happens before the first random draw, so a rejected
        simulation consumes no randomness.

        Raises:
            InvalidFormatError: If *brownlow_format* is not recognised.
            LineupError: If either lineup fails validation.
        """
        fmt = parse_brownlow_format(brownlow_format)
        self.validator.validate(home_lineup, away_lineup, home_roster, away_roster)

        home_assignments = self._assign_players(home_lineup, home_roster)
        away_assignments = self._assign_players(away_lineup, away_roster)

        hitouts = resolve_ruck_contest(
            self._ruck_assignments(home_assignments),
            self._ruck_assignments(away_assignments),
            self.rng,
        )

        home_stats = self._generate_stats(match_id, home_assignments, hitouts)
        away_stats = self._generate_stats(match_id, away_assignments, hitouts)

        home_score = self.aggregator.aggregate(
            home_lineup.team_id, home_stats, home_overall, self.rng
        )
        away_score = self.aggregator.aggregate(
            away_lineup.team_id, away_stats, away_overall, self.rng
        )

        player_stats = home_stats + away_stats
        coaches_votes, brownlow_votes = self.allocator.allocate(
            match_id, player_stats, fmt
        )

        result = MatchResult(
            match_id=match_id,
            home_team_id=home_lineup.team_id,
            away_team_id=away_lineup.team_id,
            home_score=home_score.final_score,
            away_score=away_score.final_score,
            status=MatchStatus.COMPLETED,
        )

        logger.info(
            "Match %s: %s %d.%d (%d) vs %s %d.%d (%d) - %s",
            match_id,
            home_lineup.team_id, home_score.goals, home_score.behinds, result.home_score,
            away_lineup.team_id, away_score.goals, away_score.behinds, result.away_score,
            f"{result.winner} wins" if result.winner else "draw",
        )

        return MatchSimulationResult(
            result=result,
            home_score=home_score,
            away_score=away_score,
            home_lineup=self._rated_lineup(home_lineup, home_assignments),
            away_lineup=self._rated_lineup(away_lineup, away_assignments),
            player_stats=player_stats,
            coaches_votes=coaches_votes,
            brownlow_votes=brownlow_votes,
            brownlow_format=fmt,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _assign_players(
        self, lineup: TeamLineup, roster: List[Player]
    ) -> List[PlayerAssignment]:
        players = {player.player_id: player for player in roster}
        return [
            self.generator.assign(slot, players[slot.player_id])
            for slot in lineup.slots
        ]

    @staticmethod
    def _ruck_assignments(assignments: List[PlayerAssignment]) -> List[RuckAssignment]:
        return [
            RuckAssignment(a.player.player_id, a.effective_rating)
            for a in assignments
            if a.assigned_position is Position.RUC
        ]

    def _generate_stats(
        self,
        match_id: str,
        assignments: List[PlayerAssignment],
        hitouts: Dict[str, int],
    ) -> List[PlayerMatchStat]:
        return [
            self.generator.generate(
                match_id, a, self.rng, hitouts.get(a.player.player_id, 0)
            )
            for a in assignments
        ]

    @staticmethod
    def _rated_lineup(
        lineup: TeamLineup, assignments: List[PlayerAssignment]
    ) -> TeamLineup:
        """Copy of *lineup* with each slot's effective rating recorded."""
        slots = [
            replace(slot, effective_rating=a.effective_rating)
            for slot, a in zip(lineup.slots, assignments)
        ]
        return TeamLineup(team_id=lineup.team_id, slots=slots)
