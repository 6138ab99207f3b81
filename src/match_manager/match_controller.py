"""Match controller - orchestrates fetch, simulate and persist for a match."""

import logging
from typing import Dict, List, Optional, Union

import pandas as pd

from src.match_engine.box_score import build_box_score
from src.match_engine.lineup_builder import LineupBuilder
from src.match_engine.lineup_validator import LineupValidator
from src.match_engine.match_simulator import MatchSimulationResult, MatchSimulator
from src.match_engine.models import BrownlowFormat, MatchResult, TeamLineup, Vote, VoteCategory
from src.match_engine.randomness import RandomSource
from src.match_engine.vote_allocator import VoteAllocator, parse_brownlow_format
from src.match_manager.config import DEFAULT_BROWNLOW_FORMAT
from src.match_manager.match_store import MatchStore, PersistenceError

logger = logging.getLogger(__name__)


class MatchController:
    """Main controller for match orchestration.

    Reads rosters, lineups and team overalls from the MatchStore, runs the
    MatchSimulator and writes the full result back in one atomic save.
    Nothing is written when validation or simulation fails.
    """

    def __init__(self, store: MatchStore, rng: Optional[RandomSource] = None):
        self.store = store
        self.validator = LineupValidator()
        self.builder = LineupBuilder()
        self.allocator = VoteAllocator()
        self.simulator = MatchSimulator(
            rng=rng, validator=self.validator, allocator=self.allocator
        )

    def create_match(
        self,
        home_team_id: str,
        away_team_id: str,
        match_id: Optional[str] = None,
    ) -> MatchResult:
        """Create a match between two teams.

        Raises:
            ValueError: If both sides are the same team.
            InsufficientRosterError: If either roster has fewer than 21
                players.
            PersistenceError: If either team does not exist.
        """
        if home_team_id == away_team_id:
            raise ValueError("Home and away teams must be different")

        self.validator.check_roster_size(home_team_id, self.store.get_roster(home_team_id))
        self.validator.check_roster_size(away_team_id, self.store.get_roster(away_team_id))

        return self.store.create_match(home_team_id, away_team_id, match_id)

    def set_lineup(self, match_id: str, home: TeamLineup, away: TeamLineup) -> None:
        """Validate and store both lineups for a match.

        Raises:
            LineupError: If the lineups fail validation.
        """
        match = self._get_match(match_id)
        self._check_teams(match, home, away)
        self.validator.validate(
            home,
            away,
            self.store.get_roster(match.home_team_id),
            self.store.get_roster(match.away_team_id),
        )
        self.store.save_lineup(match_id, home, away)

    def auto_lineup(self, match_id: str) -> Dict[str, TeamLineup]:
        """Pick both lineups automatically, best players first, and store them."""
        match = self._get_match(match_id)
        home = self.builder.build(
            match.home_team_id, self.store.get_roster(match.home_team_id)
        )
        away = self.builder.build(
            match.away_team_id, self.store.get_roster(match.away_team_id)
        )
        self.set_lineup(match_id, home, away)
        return {"home": home, "away": away}

    def simulate_match(
        self,
        match_id: str,
        brownlow_format: Union[str, BrownlowFormat] = DEFAULT_BROWNLOW_FORMAT,
    ) -> MatchSimulationResult:
        """Simulate a match from its stored lineups and persist the result.

        Running it again for the same match replaces the previous scores,
        stats and votes.

        Raises:
            InvalidFormatError: If *brownlow_format* is not recognised.
            LineupError: If the stored lineups fail validation.
            PersistenceError: If reading inputs or saving the result fails.
        """
        fmt = parse_brownlow_format(brownlow_format)
        match = self._get_match(match_id)
        lineups = self.store.get_lineup(match_id)

        simulation = self.simulator.simulate(
            match_id,
            lineups["home"],
            lineups["away"],
            self.store.get_roster(match.home_team_id),
            self.store.get_roster(match.away_team_id),
            home_overall=self.store.get_team_overall(match.home_team_id),
            away_overall=self.store.get_team_overall(match.away_team_id),
            brownlow_format=fmt,
        )

        self.store.save_simulation(simulation)
        return simulation

    def regenerate_votes(
        self,
        match_id: str,
        brownlow_format: Union[str, BrownlowFormat] = DEFAULT_BROWNLOW_FORMAT,
    ) -> Dict[VoteCategory, List[Vote]]:
        """Re-allocate votes from the stored player stats.

        Existing votes for the match are deleted and replaced, so running
        this twice leaves the same vote set.

        Raises:
            InvalidFormatError: If *brownlow_format* is not recognised.
            PersistenceError: If the match has no stored stats.
        """
        fmt = parse_brownlow_format(brownlow_format)
        stats = self.store.get_player_stats(match_id)
        if not stats:
            raise PersistenceError(
                f"Match {match_id} has no player stats. Simulate it first."
            )

        coaches, brownlow = self.allocator.allocate(match_id, stats, fmt)
        self.store.replace_votes(match_id, coaches, brownlow)
        return {VoteCategory.COACHES: coaches, VoteCategory.BROWNLOW: brownlow}

    def box_score(self, match_id: str) -> pd.DataFrame:
        """Box score of a simulated match with player names."""
        match = self._get_match(match_id)
        players = {
            p.player_id: p
            for team_id in (match.home_team_id, match.away_team_id)
            for p in self.store.get_roster(team_id)
        }
        return build_box_score(self.store.get_player_stats(match_id), players)

    def get_votes(self, match_id: str, category: VoteCategory) -> List[Vote]:
        """Stored votes, most votes first."""
        votes = self.store.get_votes(match_id, category)
        return sorted(votes, key=lambda v: v.votes, reverse=True)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _get_match(self, match_id: str) -> MatchResult:
        match = self.store.get_match(match_id)
        if match is None:
            raise PersistenceError(f"Match not found: {match_id}")
        return match

    @staticmethod
    def _check_teams(match: MatchResult, home: TeamLineup, away: TeamLineup) -> None:
        if (home.team_id, away.team_id) != (match.home_team_id, match.away_team_id):
            raise ValueError(
                f"Lineups are for {home.team_id} vs {away.team_id}, "
                f"match {match.match_id} is "
                f"{match.home_team_id} vs {match.away_team_id}"
            )
