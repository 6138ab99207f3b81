"""Match store - save and load teams, lineups and match results as JSON files.

Layout under the storage directory::

    teams/team_{team_id}.json      roster and team overall
    matches/match_{match_id}.json  result, lineups, player stats and votes

Every write goes to a temporary file that is then moved over the target,
so readers never see a half-written match.
"""

import json
import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from src.match_engine.config import DEFAULT_TEAM_OVERALL
from src.match_engine.match_simulator import MatchSimulationResult
from src.match_engine.models import (
    BrownlowFormat,
    LineupSlot,
    MatchResult,
    MatchStatus,
    Player,
    PlayerMatchStat,
    Position,
    SlotGroup,
    TeamLineup,
    Vote,
    VoteCategory,
)
from src.match_manager.config import MATCHES_SUBDIR, MATCH_STORAGE_DIR, TEAMS_SUBDIR

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the store cannot read or write a record."""


class MatchStore:
    """Handles saving and loading teams and matches to/from JSON files."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = Path(storage_dir or MATCH_STORAGE_DIR)
        self.teams_dir = self.storage_dir / TEAMS_SUBDIR
        self.matches_dir = self.storage_dir / MATCHES_SUBDIR
        try:
            self.teams_dir.mkdir(parents=True, exist_ok=True)
            self.matches_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(
                f"Cannot create storage directory {self.storage_dir}: {e}"
            ) from e

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    def save_team(
        self,
        team_id: str,
        name: str,
        players: List[Player],
        team_overall: Optional[int] = None,
    ) -> Path:
        """Save a team and its roster, replacing any previous version.

        Returns:
            Path to the saved file.
        """
        filepath = self._team_path(team_id)
        self._write_json(
            filepath,
            {
                "team_id": team_id,
                "name": name,
                "team_overall": team_overall,
                "players": [self._player_to_dict(p) for p in players],
                "updated_at": datetime.now().isoformat(),
            },
        )
        logger.info("Saved team %s (%d players) to %s", team_id, len(players), filepath)
        return filepath

    def get_team(self, team_id: str) -> Optional[Dict]:
        """Load a team record, or None if the team does not exist.

        The ``players`` entry holds :class:`Player` objects.
        """
        filepath = self._team_path(team_id)
        if not filepath.exists():
            return None

        data = self._read_json(filepath)
        data["players"] = [self._dict_to_player(p) for p in data.get("players", [])]
        return data

    def get_roster(self, team_id: str) -> List[Player]:
        """Load a team's roster.

        Raises:
            PersistenceError: If the team does not exist.
        """
        team = self.get_team(team_id)
        if team is None:
            raise PersistenceError(f"Team not found: {team_id}")
        return team["players"]

    def get_team_overall(self, team_id: str) -> int:
        """Team overall rating, defaulting to 75 when none is recorded."""
        team = self.get_team(team_id)
        overall = team.get("team_overall") if team else None
        if overall is None:
            logger.warning(
                "Team %s has no overall rating, defaulting to %d",
                team_id, DEFAULT_TEAM_OVERALL,
            )
            return DEFAULT_TEAM_OVERALL
        return int(overall)

    def list_teams(self) -> List[Dict]:
        """List saved teams as ``{team_id, name, team_overall, players}``
        dicts (``players`` is the roster size), sorted by name."""
        teams = []
        for filepath in self.teams_dir.glob("team_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)
                teams.append(
                    {
                        "team_id": data["team_id"],
                        "name": data.get("name", data["team_id"]),
                        "team_overall": data.get("team_overall"),
                        "players": len(data.get("players", [])),
                    }
                )
            except (json.JSONDecodeError, OSError, KeyError) as e:
                logger.warning("Skipping corrupt team file %s: %s", filepath, e)
                continue

        return sorted(teams, key=lambda t: t["name"])

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    def create_match(
        self,
        home_team_id: str,
        away_team_id: str,
        match_id: Optional[str] = None,
    ) -> MatchResult:
        """Create a new match record in ``setup`` status."""
        result = MatchResult(
            match_id=match_id or str(uuid.uuid4()),
            home_team_id=home_team_id,
            away_team_id=away_team_id,
        )
        record = {
            "result": self._result_to_dict(result),
            "created_at": datetime.now().isoformat(),
            "completed_at": None,
            "lineups": None,
            "player_stats": [],
            "coaches_votes": [],
            "brownlow_votes": [],
        }
        self._write_json(self._match_path(result.match_id), record)
        logger.info(
            "Created match %s: %s vs %s", result.match_id, home_team_id, away_team_id
        )
        return result

    def get_match(self, match_id: str) -> Optional[MatchResult]:
        """Load a match result, or None if the match does not exist."""
        filepath = self._match_path(match_id)
        if not filepath.exists():
            logger.warning("Match file not found: %s", filepath)
            return None
        return self._dict_to_result(self._read_json(filepath)["result"])

    def list_matches(self) -> List[Dict]:
        """List saved matches with scores and status, most recent first."""
        matches = []
        for filepath in self.matches_dir.glob("match_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)
                matches.append(dict(data["result"], created_at=data["created_at"]))
            except (json.JSONDecodeError, OSError, KeyError) as e:
                logger.warning("Skipping corrupt match file %s: %s", filepath, e)
                continue

        return sorted(matches, key=lambda m: m["created_at"], reverse=True)

    def delete_match(self, match_id: str) -> bool:
        """Delete a match file. Returns False if it did not exist."""
        filepath = self._match_path(match_id)
        if not filepath.exists():
            return False

        try:
            filepath.unlink()
        except OSError as e:
            raise PersistenceError(f"Cannot delete {filepath}: {e}") from e
        logger.info("Deleted match %s", match_id)
        return True

    def save_lineup(self, match_id: str, home: TeamLineup, away: TeamLineup) -> Path:
        """Store the lineups for a match, replacing any previous lineups."""
        record = self._load_match_record(match_id)
        record["lineups"] = {
            "home": self._lineup_to_dict(home),
            "away": self._lineup_to_dict(away),
        }
        filepath = self._write_json(self._match_path(match_id), record)
        logger.info("Saved lineups for match %s", match_id)
        return filepath

    def get_lineup(self, match_id: str) -> Dict[str, TeamLineup]:
        """Load a match's lineups as ``{"home": ..., "away": ...}``.

        Raises:
            PersistenceError: If the match or its lineups do not exist.
        """
        lineups = self._load_match_record(match_id).get("lineups")
        if not lineups:
            raise PersistenceError(f"No lineup saved for match {match_id}")
        return {
            side: self._dict_to_lineup(data) for side, data in lineups.items()
        }

    def get_player_stats(self, match_id: str) -> List[PlayerMatchStat]:
        """Stored player stats in generation order."""
        record = self._load_match_record(match_id)
        return [self._dict_to_stat(s) for s in record.get("player_stats", [])]

    def get_votes(self, match_id: str, category: VoteCategory) -> List[Vote]:
        key = f"{VoteCategory(category).value}_votes"
        record = self._load_match_record(match_id)
        return [self._dict_to_vote(v) for v in record.get(key, [])]

    def save_simulation(self, simulation: MatchSimulationResult) -> Path:
        """Store a complete simulation result as one atomic write.

        Scores, lineups, player stats and both vote sets replace whatever
        the match held before, and the match becomes ``completed`` in the
        same write.

        Raises:
            PersistenceError: If the match does not exist or the write fails.
        """
        result = simulation.result
        record = self._load_match_record(result.match_id)

        record["result"] = self._result_to_dict(result)
        record["completed_at"] = datetime.now().isoformat()
        record["lineups"] = {
            "home": self._lineup_to_dict(simulation.home_lineup),
            "away": self._lineup_to_dict(simulation.away_lineup),
        }
        record["player_stats"] = [self._stat_to_dict(s) for s in simulation.player_stats]
        record["coaches_votes"] = [self._vote_to_dict(v) for v in simulation.coaches_votes]
        record["brownlow_votes"] = [self._vote_to_dict(v) for v in simulation.brownlow_votes]

        filepath = self._write_json(self._match_path(result.match_id), record)
        logger.info(
            "Saved simulation for match %s (%d player stats) to %s",
            result.match_id, len(simulation.player_stats), filepath,
        )
        return filepath

    def replace_votes(
        self,
        match_id: str,
        coaches_votes: List[Vote],
        brownlow_votes: List[Vote],
    ) -> Path:
        """Delete a match's stored votes and insert the given ones.

        Both categories are replaced in a single write.
        """
        record = self._load_match_record(match_id)
        record["coaches_votes"] = [self._vote_to_dict(v) for v in coaches_votes]
        record["brownlow_votes"] = [self._vote_to_dict(v) for v in brownlow_votes]

        filepath = self._write_json(self._match_path(match_id), record)
        logger.info(
            "Replaced votes for match %s (%d coaches, %d Brownlow)",
            match_id, len(coaches_votes), len(brownlow_votes),
        )
        return filepath

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def _team_path(self, team_id: str) -> Path:
        return self.teams_dir / f"team_{team_id}.json"

    def _match_path(self, match_id: str) -> Path:
        return self.matches_dir / f"match_{match_id}.json"

    def _load_match_record(self, match_id: str) -> Dict:
        filepath = self._match_path(match_id)
        if not filepath.exists():
            raise PersistenceError(f"Match not found: {match_id}")
        return self._read_json(filepath)

    @staticmethod
    def _read_json(filepath: Path) -> Dict:
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read {filepath}: {e}") from e

    @staticmethod
    def _write_json(filepath: Path, data: Dict) -> Path:
        """Write *data* to a temp file, then move it over *filepath*."""
        tmp_path = filepath.with_name(filepath.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, filepath)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise PersistenceError(f"Cannot write {filepath}: {e}") from e
        return filepath

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    @staticmethod
    def _player_to_dict(player: Player) -> Dict:
        return {
            "player_id": player.player_id,
            "name": player.name,
            "position": player.position.value,
            "overall_rating": player.overall_rating,
            "team_id": player.team_id,
        }

    @staticmethod
    def _dict_to_player(data: Dict) -> Player:
        return Player(
            player_id=data["player_id"],
            name=data["name"],
            position=Position(data["position"]),
            overall_rating=data["overall_rating"],
            team_id=data.get("team_id"),
        )

    @staticmethod
    def _result_to_dict(result: MatchResult) -> Dict:
        return {
            "match_id": result.match_id,
            "home_team_id": result.home_team_id,
            "away_team_id": result.away_team_id,
            "home_score": result.home_score,
            "away_score": result.away_score,
            "status": result.status.value,
        }

    @staticmethod
    def _dict_to_result(data: Dict) -> MatchResult:
        return MatchResult(
            match_id=data["match_id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            home_score=data.get("home_score", 0),
            away_score=data.get("away_score", 0),
            status=MatchStatus(data.get("status", "setup")),
        )

    @staticmethod
    def _lineup_to_dict(lineup: TeamLineup) -> Dict:
        return {
            "team_id": lineup.team_id,
            "slots": [
                {
                    "group": slot.group.value,
                    "index": slot.index,
                    "player_id": slot.player_id,
                    "effective_rating": slot.effective_rating,
                }
                for slot in lineup.slots
            ],
        }

    @staticmethod
    def _dict_to_lineup(data: Dict) -> TeamLineup:
        team_id = data["team_id"]
        return TeamLineup(
            team_id=team_id,
            slots=[
                LineupSlot(
                    team_id=team_id,
                    group=SlotGroup(sd["group"]),
                    index=sd["index"],
                    player_id=sd.get("player_id"),
                    effective_rating=sd.get("effective_rating"),
                )
                for sd in data["slots"]
            ],
        )

    @staticmethod
    def _stat_to_dict(stat: PlayerMatchStat) -> Dict:
        return {
            "match_id": stat.match_id,
            "player_id": stat.player_id,
            "team_id": stat.team_id,
            "assigned_position": stat.assigned_position.value,
            "effective_rating": stat.effective_rating,
            "disposals": stat.disposals,
            "goals": stat.goals,
            "behinds": stat.behinds,
            "tackles": stat.tackles,
            "marks": stat.marks,
            "intercepts": stat.intercepts,
            "hitouts": stat.hitouts,
            "fantasy_score": stat.fantasy_score,
            "impact_score": stat.impact_score,
        }

    @staticmethod
    def _dict_to_stat(data: Dict) -> PlayerMatchStat:
        return PlayerMatchStat(
            match_id=data["match_id"],
            player_id=data["player_id"],
            team_id=data["team_id"],
            assigned_position=Position(data["assigned_position"]),
            effective_rating=data["effective_rating"],
            disposals=data["disposals"],
            goals=data["goals"],
            behinds=data["behinds"],
            tackles=data["tackles"],
            marks=data["marks"],
            intercepts=data["intercepts"],
            hitouts=data["hitouts"],
            fantasy_score=data["fantasy_score"],
            impact_score=data["impact_score"],
        )

    @staticmethod
    def _vote_to_dict(vote: Vote) -> Dict:
        return {
            "match_id": vote.match_id,
            "player_id": vote.player_id,
            "team_id": vote.team_id,
            "votes": vote.votes,
            "category": vote.category.value,
            "format": vote.format.value if vote.format else None,
        }

    @staticmethod
    def _dict_to_vote(data: Dict) -> Vote:
        return Vote(
            match_id=data["match_id"],
            player_id=data["player_id"],
            team_id=data["team_id"],
            votes=data["votes"],
            category=VoteCategory(data["category"]),
            format=BrownlowFormat(data["format"]) if data.get("format") else None,
        )
