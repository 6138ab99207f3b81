"""Post-match award votes: coaches votes and Brownlow votes."""

import logging
from typing import List, Tuple, Union

from src.match_engine.config import (
    BROWNLOW_VOTE_VECTORS,
    COACHES_MAX_RECIPIENTS,
    COACHES_MIN_RECIPIENTS,
    COACHES_RECIPIENT_DIVISOR,
    COACHES_VOTE_VECTOR,
)
from src.match_engine.models import BrownlowFormat, PlayerMatchStat, Vote, VoteCategory

logger = logging.getLogger(__name__)


class InvalidFormatError(ValueError):
    """Raised for a Brownlow format other than "3-2-1" or "5-4-3-2-1"."""


def parse_brownlow_format(value: Union[str, BrownlowFormat]) -> BrownlowFormat:
    """Coerce *value* to a :class:`BrownlowFormat`.

    Raises:
        InvalidFormatError: If *value* is not one of the two formats.
    """
    try:
        return BrownlowFormat(value)
    except ValueError:
        valid = ", ".join(repr(f.value) for f in BrownlowFormat)
        raise InvalidFormatError(
            f"Invalid Brownlow format {value!r}. Must be one of: {valid}"
        ) from None


class VoteAllocator:
    """Allocate both vote pools from a match's box scores.

    Players are ranked by ``impact_score`` (highest first). Ties keep the
    order the stats were generated in.
    """

    @staticmethod
    def rank_players(stats: List[PlayerMatchStat]) -> List[PlayerMatchStat]:
        return sorted(stats, key=lambda s: s.impact_score, reverse=True)

    @staticmethod
    def coaches_recipient_count(total_players: int) -> int:
        count = total_players // COACHES_RECIPIENT_DIVISOR
        return max(COACHES_MIN_RECIPIENTS, min(count, COACHES_MAX_RECIPIENTS))

    def allocate_coaches_votes(
        self, match_id: str, ranked: List[PlayerMatchStat]
    ) -> List[Vote]:
        """Coaches votes from ``[10, 8, 7, 3, 2, 2, 2, 1, 1, 1]`` by rank.

        Ranks past the end of the vector receive 1 vote each.
        """
        count = self.coaches_recipient_count(len(ranked))
        return [
            Vote(
                match_id=match_id,
                player_id=stat.player_id,
                team_id=stat.team_id,
                votes=COACHES_VOTE_VECTOR[rank] if rank < len(COACHES_VOTE_VECTOR) else 1,
                category=VoteCategory.COACHES,
            )
            for rank, stat in enumerate(ranked[:count])
        ]

    def allocate_brownlow_votes(
        self,
        match_id: str,
        ranked: List[PlayerMatchStat],
        brownlow_format: Union[str, BrownlowFormat],
    ) -> List[Vote]:
        fmt = parse_brownlow_format(brownlow_format)
        vector = BROWNLOW_VOTE_VECTORS[fmt]
        return [
            Vote(
                match_id=match_id,
                player_id=stat.player_id,
                team_id=stat.team_id,
                votes=votes,
                category=VoteCategory.BROWNLOW,
                format=fmt,
            )
            for stat, votes in zip(ranked, vector)
        ]

    def allocate(
        self,
        match_id: str,
        stats: List[PlayerMatchStat],
        brownlow_format: Union[str, BrownlowFormat],
    ) -> Tuple[List[Vote], List[Vote]]:
        """Allocate both vote pools for a match.

        Returns:
            ``(coaches_votes, brownlow_votes)`` tuple.

        Raises:
            InvalidFormatError: If *brownlow_format* is not recognised.
        """
        fmt = parse_brownlow_format(brownlow_format)
        ranked = self.rank_players(stats)

        coaches = self.allocate_coaches_votes(match_id, ranked)
        brownlow = self.allocate_brownlow_votes(match_id, ranked, fmt)

        logger.info(
            "Match %s votes: %d coaches votes to %d players, Brownlow %s to %d players",
            match_id,
            sum(v.votes for v in coaches),
            len(coaches),
            fmt.value,
            len(brownlow),
        )
        return coaches, brownlow
