from src.match_engine.lineup_builder import LineupBuilder
from src.match_engine.lineup_validator import (
    DuplicateAssignmentError,
    IncompleteLineupError,
    InsufficientRosterError,
    LineupError,
    LineupValidator,
    SlotQuotaError,
    UnknownPlayerError,
)
from src.match_engine.match_simulator import MatchSimulationResult, MatchSimulator
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
    TeamScore,
    Vote,
    VoteCategory,
)
from src.match_engine.performance_generator import PerformanceGenerator
from src.match_engine.randomness import RandomSource, SeededRandom
from src.match_engine.score_aggregator import ScoreAggregator
from src.match_engine.vote_allocator import InvalidFormatError, VoteAllocator

__all__ = [
    "BrownlowFormat",
    "DuplicateAssignmentError",
    "IncompleteLineupError",
    "InsufficientRosterError",
    "InvalidFormatError",
    "LineupBuilder",
    "LineupError",
    "LineupSlot",
    "LineupValidator",
    "MatchResult",
    "MatchSimulationResult",
    "MatchSimulator",
    "MatchStatus",
    "PerformanceGenerator",
    "Player",
    "PlayerMatchStat",
    "Position",
    "RandomSource",
    "ScoreAggregator",
    "SeededRandom",
    "SlotGroup",
    "SlotQuotaError",
    "TeamLineup",
    "TeamScore",
    "UnknownPlayerError",
    "Vote",
    "VoteAllocator",
    "VoteCategory",
]
