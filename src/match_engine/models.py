"""Data models for the match simulation engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Line(str, Enum):
    """Groups of positions considered adjacent in role."""

    DEFENSE = "defense"
    MIDFIELD = "midfield"
    FORWARD = "forward"


class Position(str, Enum):
    """Playing positions a player can be listed at or fielded in."""

    KDEF = "KDEF"
    DEF = "DEF"
    MID = "MID"
    RUC = "RUC"
    FWD = "FWD"
    KFWD = "KFWD"

    @property
    def line(self) -> Line:
        return _POSITION_LINES[self]


_POSITION_LINES = {
    Position.KDEF: Line.DEFENSE,
    Position.DEF: Line.DEFENSE,
    Position.MID: Line.MIDFIELD,
    Position.RUC: Line.MIDFIELD,
    Position.FWD: Line.FORWARD,
    Position.KFWD: Line.FORWARD,
}


class SlotGroup(str, Enum):
    """Lineup slot groups: one per position plus the interchange bench."""

    KDEF = "KDEF"
    DEF = "DEF"
    MID = "MID"
    RUC = "RUC"
    FWD = "FWD"
    KFWD = "KFWD"
    INTERCHANGE = "INTERCHANGE"

    @property
    def position(self) -> Optional[Position]:
        """Position fielded by this group (``None`` for interchange)."""
        if self is SlotGroup.INTERCHANGE:
            return None
        return Position(self.value)


# Required slots per group (21 per team)
SLOT_COUNTS = {
    SlotGroup.KDEF: 3,
    SlotGroup.DEF: 3,
    SlotGroup.MID: 5,
    SlotGroup.RUC: 1,
    SlotGroup.FWD: 3,
    SlotGroup.KFWD: 3,
    SlotGroup.INTERCHANGE: 3,
}

LINEUP_SIZE = sum(SLOT_COUNTS.values())


class MatchStatus(str, Enum):
    SETUP = "setup"
    COMPLETED = "completed"


class VoteCategory(str, Enum):
    COACHES = "coaches"
    BROWNLOW = "brownlow"


class BrownlowFormat(str, Enum):
    THREE_TWO_ONE = "3-2-1"
    FIVE_TO_ONE = "5-4-3-2-1"


@dataclass(frozen=True)
class Player:
    """A rostered player. Never modified during a simulation."""

    player_id: str
    name: str
    position: Position  # Primary position
    overall_rating: int  # 60-99
    team_id: Optional[str] = None


@dataclass
class LineupSlot:
    """One slot of a team's 21-player lineup."""

    team_id: str
    group: SlotGroup
    index: int  # 0-based within the group
    player_id: Optional[str] = None
    effective_rating: Optional[int] = None  # Filled in by the simulator

    @property
    def is_filled(self) -> bool:
        return self.player_id is not None

    @property
    def label(self) -> str:
        """Human readable slot name, e.g. ``"blues MID #3"``."""
        return f"{self.team_id} {self.group.value} #{self.index + 1}"


@dataclass
class TeamLineup:
    """A team's lineup: an ordered list of slots grouped by SlotGroup."""

    team_id: str
    slots: List[LineupSlot] = field(default_factory=list)

    @classmethod
    def empty(cls, team_id: str, slot_counts: Optional[Dict[SlotGroup, int]] = None) -> "TeamLineup":
        """Factory method to create a lineup with every slot unfilled."""
        slot_counts = slot_counts or SLOT_COUNTS
        slots = [
            LineupSlot(team_id=team_id, group=group, index=i)
            for group, count in slot_counts.items()
            for i in range(count)
        ]
        return cls(team_id=team_id, slots=slots)

    def get_slots(self, group: SlotGroup) -> List[LineupSlot]:
        return [slot for slot in self.slots if slot.group is group]

    def get_filled_count(self, group: SlotGroup) -> int:
        return sum(1 for slot in self.get_slots(group) if slot.is_filled)

    def empty_slots(self) -> List[LineupSlot]:
        return [slot for slot in self.slots if not slot.is_filled]

    def player_ids(self) -> List[str]:
        """Player ids in slot order (empty slots skipped)."""
        return [slot.player_id for slot in self.slots if slot.is_filled]

    def is_complete(self) -> bool:
        return not self.empty_slots()

    def assign(self, player_id: str, group: SlotGroup) -> LineupSlot:
        """Put a player in the first empty slot of *group*.

        Raises:
            ValueError: If every slot in the group is already filled.
        """
        for slot in self.get_slots(group):
            if not slot.is_filled:
                slot.player_id = player_id
                return slot
        raise ValueError(f"No empty {group.value} slot for team {self.team_id}")


@dataclass(frozen=True)
class PlayerAssignment:
    """A player fielded in a concrete position for one match."""

    player: Player
    team_id: str
    slot_group: SlotGroup
    assigned_position: Position
    effective_rating: int


@dataclass
class PlayerMatchStat:
    """Box score line for one player in one match."""

    match_id: str
    player_id: str
    team_id: str
    assigned_position: Position
    effective_rating: int
    disposals: int = 0
    goals: int = 0
    behinds: int = 0
    tackles: int = 0
    marks: int = 0
    intercepts: int = 0
    hitouts: int = 0
    fantasy_score: int = 0
    impact_score: float = 0.0


@dataclass
class TeamScore:
    """How a team's final score was reached."""

    team_id: str
    goals: int
    behinds: int
    raw_points: int
    strength_modifier: float
    match_variance: float
    final_score: int


@dataclass
class MatchResult:
    match_id: str
    home_team_id: str
    away_team_id: str
    home_score: int = 0
    away_score: int = 0
    status: MatchStatus = MatchStatus.SETUP

    @property
    def is_draw(self) -> bool:
        return self.home_score == self.away_score

    @property
    def winner(self) -> Optional[str]:
        """Team id with the strictly higher score, ``None`` for a draw."""
        if self.home_score > self.away_score:
            return self.home_team_id
        if self.away_score > self.home_score:
            return self.away_team_id
        return None


@dataclass
class Vote:
    match_id: str
    player_id: str
    team_id: str
    votes: int
    category: VoteCategory
    format: Optional[BrownlowFormat] = None  # Brownlow votes only
