"""Rating and position model.

Maps a player's rating onto the 8 rating buckets used by every lookup
table, applies the out-of-position penalty, and computes the derived
fantasy and impact scores of a box score line.
"""

import math
from typing import Sequence

from src.match_engine.config import (
    BUCKET_COUNT,
    BUCKET_WIDTH,
    CROSS_LINE_PENALTY,
    FANTASY_WEIGHTS,
    IMPACT_BONUSES,
    IMPACT_WEIGHTS,
    INTRA_BUCKET_STEP,
    RATING_FLOOR,
    SAME_LINE_PENALTY,
)
from src.match_engine.models import PlayerMatchStat, Position


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` uses banker's rounding (``round(20.5) == 20``).
    """
    return int(math.floor(value + 0.5))


def rating_bucket(rating: int) -> int:
    """Bucket index for *rating*, clamped to ``[0, BUCKET_COUNT - 1]``."""
    bucket = (rating - RATING_FLOOR) // BUCKET_WIDTH
    return max(0, min(bucket, BUCKET_COUNT - 1))


def same_line(a: Position, b: Position) -> bool:
    return a.line is b.line


def effective_rating(rating: int, primary: Position, assigned: Position) -> int:
    """Rating after the position-fit adjustment.

    No penalty in the primary position, ``SAME_LINE_PENALTY`` for another
    position on the same line and ``CROSS_LINE_PENALTY`` otherwise. The
    result is not re-clamped to 60-99.
    """
    if primary is assigned:
        return rating
    if same_line(primary, assigned):
        return rating - SAME_LINE_PENALTY
    return rating - CROSS_LINE_PENALTY


def adjusted_base(table: Sequence[float], rating: int) -> float:
    """Bucket lookup plus the small intra-bucket adjustment."""
    base = table[rating_bucket(rating)]
    return base * (1 + (rating % BUCKET_WIDTH) * INTRA_BUCKET_STEP)


# ------------------------------------------------------------------
# Derived scores
# ------------------------------------------------------------------

def fantasy_score(stat: PlayerMatchStat) -> int:
    return sum(
        getattr(stat, category) * weight
        for category, weight in FANTASY_WEIGHTS.items()
    )


def impact_score(stat: PlayerMatchStat) -> float:
    """Weighted impact metric used to rank players for award votes.

    Adds flat bonuses for exceptional output and rounds to 2 decimals.
    """
    score = sum(
        getattr(stat, category) * weight
        for category, weight in IMPACT_WEIGHTS.items()
    )
    for category, threshold, bonus in IMPACT_BONUSES:
        if getattr(stat, category) >= threshold:
            score += bonus
    return round(score, 2)
