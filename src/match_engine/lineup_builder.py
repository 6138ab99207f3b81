"""Automatic lineup selection from a roster."""

import logging
from typing import Dict, List, Optional

from src.match_engine.lineup_validator import InsufficientRosterError
from src.match_engine.models import SLOT_COUNTS, LineupSlot, Player, Position, SlotGroup, TeamLineup
from src.match_engine.rating_model import same_line

logger = logging.getLogger(__name__)


class LineupBuilder:
    """Picks a team's 21 from its roster, best players first."""

    def __init__(self, slot_counts: Optional[Dict[SlotGroup, int]] = None):
        self.slot_counts = slot_counts or SLOT_COUNTS
        self.lineup_size = sum(self.slot_counts.values())

    def determine_lineup_slot(
        self, lineup: TeamLineup, position: Position
    ) -> Optional[SlotGroup]:
        """
        Determine which slot group a player should fill.

        Priority: primary position -> INTERCHANGE -> none (``None``).
        """
        group = SlotGroup(position.value)
        if lineup.get_filled_count(group) < self.slot_counts.get(group, 0):
            return group

        bench = SlotGroup.INTERCHANGE
        if lineup.get_filled_count(bench) < self.slot_counts.get(bench, 0):
            return bench

        return None

    def build(self, team_id: str, roster: List[Player]) -> TeamLineup:
        """Build a complete lineup for *team_id*.

        Players are placed highest rating first. Slots still empty once
        every player has been considered (a position the roster is thin
        at) are filled with the best leftover player, preferring one from
        the same line.

        Raises:
            InsufficientRosterError: If the roster has fewer than 21 players.
        """
        players = list({player.player_id: player for player in roster}.values())
        if len(players) < self.lineup_size:
            raise InsufficientRosterError(team_id, len(players), self.lineup_size)

        ranked = sorted(players, key=lambda p: p.overall_rating, reverse=True)
        lineup = TeamLineup.empty(team_id, self.slot_counts)
        leftovers: List[Player] = []

        for player in ranked:
            group = self.determine_lineup_slot(lineup, player.position)
            if group is None:
                leftovers.append(player)
                continue
            lineup.assign(player.player_id, group)

        for slot in lineup.empty_slots():
            player = self._best_leftover(slot, leftovers)
            leftovers.remove(player)
            slot.player_id = player.player_id
            logger.debug(
                "Team %s: %s (%s) fills %s out of position",
                team_id, player.name, player.position.value, slot.label,
            )

        logger.info(
            "Built lineup for team %s from %d rostered players",
            team_id, len(players),
        )
        return lineup

    @staticmethod
    def _best_leftover(slot: LineupSlot, leftovers: List[Player]) -> Player:
        """Highest rated leftover, same-line players first."""
        position = slot.group.position
        if position is not None:
            for player in leftovers:
                if same_line(player.position, position):
                    return player
        return leftovers[0]
