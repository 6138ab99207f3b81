"""Lineup validation - slot quotas, completeness and uniqueness."""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from src.match_engine.models import LINEUP_SIZE, SLOT_COUNTS, Player, SlotGroup, TeamLineup

logger = logging.getLogger(__name__)


class LineupError(Exception):
    """Base class for lineups that cannot be simulated."""


class IncompleteLineupError(LineupError):
    """Raised when one or more lineup slots are empty."""

    def __init__(self, missing_slots: List[str]):
        self.missing_slots = missing_slots
        super().__init__(
            f"Lineup incomplete: {len(missing_slots)} empty slot(s): "
            + ", ".join(missing_slots)
        )


class DuplicateAssignmentError(LineupError):
    """Raised when a player occupies more than one slot."""

    def __init__(self, player_ids: List[str]):
        self.player_ids = player_ids
        super().__init__(
            "Players assigned to more than one slot: " + ", ".join(player_ids)
        )


class InsufficientRosterError(LineupError):
    """Raised when a roster cannot fill a full lineup."""

    def __init__(self, team_id: str, available: int, required: int = LINEUP_SIZE):
        self.team_id = team_id
        self.available = available
        self.required = required
        super().__init__(
            f"Team {team_id} needs at least {required} players "
            f"(has {available})"
        )


class SlotQuotaError(LineupError):
    """Raised when a lineup has slots beyond its group quotas."""

    def __init__(self, invalid_slots: List[str]):
        self.invalid_slots = invalid_slots
        super().__init__(
            "Lineup slots outside the position quotas: " + ", ".join(invalid_slots)
        )


class UnknownPlayerError(LineupError):
    """Raised when a slot holds a player who is not on that team's roster."""


class LineupValidator:
    """Validates submitted lineups before any simulation work happens."""

    def __init__(self, slot_counts: Optional[Dict[SlotGroup, int]] = None):
        self.slot_counts = slot_counts or SLOT_COUNTS
        self.lineup_size = sum(self.slot_counts.values())

    def validate(
        self,
        home: TeamLineup,
        away: TeamLineup,
        home_roster: List[Player],
        away_roster: List[Player],
    ) -> Tuple[TeamLineup, TeamLineup]:
        """Validate both lineups of a match.

        Checks, in order: roster size, slots outside the group quotas,
        empty slots, players in more than one slot (across both teams)
        and players missing from their team's roster.

        Returns:
            The ``(home, away)`` lineups, unchanged.

        Raises:
            InsufficientRosterError, SlotQuotaError, IncompleteLineupError,
            DuplicateAssignmentError, UnknownPlayerError
        """
        self.check_roster_size(home.team_id, home_roster)
        self.check_roster_size(away.team_id, away_roster)

        invalid = self.find_invalid_slots(home) + self.find_invalid_slots(away)
        if invalid:
            logger.warning("Rejected lineup with %d slots over quota", len(invalid))
            raise SlotQuotaError(invalid)

        missing = self.find_missing_slots(home) + self.find_missing_slots(away)
        if missing:
            logger.warning("Rejected lineup with %d empty slots", len(missing))
            raise IncompleteLineupError(missing)

        counts = Counter(home.player_ids() + away.player_ids())
        duplicates = sorted(pid for pid, n in counts.items() if n > 1)
        if duplicates:
            logger.warning("Rejected lineup with duplicate players: %s", duplicates)
            raise DuplicateAssignmentError(duplicates)

        self._check_players_on_roster(home, home_roster)
        self._check_players_on_roster(away, away_roster)

        return home, away

    def check_roster_size(self, team_id: str, roster: Iterable[Player]) -> None:
        """Raise InsufficientRosterError if *roster* cannot fill a lineup."""
        available = len({player.player_id for player in roster})
        if available < self.lineup_size:
            raise InsufficientRosterError(team_id, available, self.lineup_size)

    def find_invalid_slots(self, lineup: TeamLineup) -> List[str]:
        """Labels of slots a lineup may not have.

        A slot is invalid when its group has no quota, its index is at or
        past the quota, or an earlier slot already holds the same index.
        """
        invalid = []
        seen = set()
        for slot in lineup.slots:
            required = self.slot_counts.get(slot.group, 0)
            key = (slot.group, slot.index)
            if not 0 <= slot.index < required or key in seen:
                invalid.append(slot.label)
            seen.add(key)
        return invalid

    def find_missing_slots(self, lineup: TeamLineup) -> List[str]:
        """Labels of every required slot that has no player."""
        missing = []
        for group, required in self.slot_counts.items():
            filled = {
                slot.index for slot in lineup.get_slots(group) if slot.is_filled
            }
            for index in range(required):
                if index not in filled:
                    missing.append(f"{lineup.team_id} {group.value} #{index + 1}")
        return missing

    def get_lineup_summary(self, lineup: TeamLineup) -> Dict[str, Dict]:
        """Generate summary of a lineup's fill status per slot group."""
        summary = {}

        for group, required in self.slot_counts.items():
            filled = lineup.get_filled_count(group)
            summary[group.value] = {
                "filled": filled,
                "required": required,
                "remaining": max(0, required - filled),
            }

        return summary

    @staticmethod
    def _check_players_on_roster(lineup: TeamLineup, roster: List[Player]) -> None:
        roster_ids = {player.player_id for player in roster}
        unknown = [pid for pid in lineup.player_ids() if pid not in roster_ids]
        if unknown:
            raise UnknownPlayerError(
                f"Players not on team {lineup.team_id}'s roster: "
                + ", ".join(unknown)
            )
