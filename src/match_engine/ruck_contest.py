"""Ruck contest resolution - hitouts for ruck-assigned players.

A ruck's hitouts depend on who they are contesting against, so hitouts
are resolved here from both teams' ruck lists before the per-player box
scores are generated.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from src.match_engine.config import (
    RUCK_CONTEST_BOUNDS,
    RUCK_CONTEST_NOISE,
    RUCK_HITOUT_BASE,
    RUCK_RATING_DIFF_WEIGHT,
    RUCK_SOLO_FLOOR,
    RUCK_SOLO_NOISE,
    RUCK_SOLO_SCALE,
)
from src.match_engine.randomness import RandomSource
from src.match_engine.rating_model import rating_bucket, round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuckAssignment:
    """A player fielded at RUC, with their position-adjusted rating."""

    player_id: str
    effective_rating: int


def resolve_hitouts(
    ruck: RuckAssignment,
    opponent: Optional[RuckAssignment],
    rng: RandomSource,
) -> int:
    """Hitouts for *ruck* contesting against *opponent*.

    Contested::

        hitouts = base + (own - opponent) * 0.25 + U[-3, 3), clamped [6, 52]

    Uncontested (``opponent is None``)::

        hitouts = base * 1.3 + U[0, 7), floored at 25
    """
    base = RUCK_HITOUT_BASE[rating_bucket(ruck.effective_rating)]

    if opponent is None:
        value = base * RUCK_SOLO_SCALE + rng.uniform(*RUCK_SOLO_NOISE)
        return max(RUCK_SOLO_FLOOR, round_half_up(value))

    rating_diff = ruck.effective_rating - opponent.effective_rating
    value = (
        base
        + rating_diff * RUCK_RATING_DIFF_WEIGHT
        + rng.uniform(*RUCK_CONTEST_NOISE)
    )
    low, high = RUCK_CONTEST_BOUNDS
    return min(high, max(low, round_half_up(value)))


def resolve_ruck_contest(
    home_rucks: List[RuckAssignment],
    away_rucks: List[RuckAssignment],
    rng: RandomSource,
) -> Dict[str, int]:
    """Resolve hitouts for every ruck-assigned player in a match.

    Rucks are paired with the opposition's rucks in lineup order; when one
    side fields more rucks, the extras contest the opposition's last ruck.
    Each ruck gets exactly one independent draw.

    Returns:
        Dict mapping ``player_id`` to hitouts.
    """
    hitouts: Dict[str, int] = {}
    for own, opposition in ((home_rucks, away_rucks), (away_rucks, home_rucks)):
        for i, ruck in enumerate(own):
            opponent = opposition[min(i, len(opposition) - 1)] if opposition else None
            hitouts[ruck.player_id] = resolve_hitouts(ruck, opponent, rng)
            logger.debug(
                "Ruck %s (%d) vs %s: %d hitouts",
                ruck.player_id,
                ruck.effective_rating,
                opponent.player_id if opponent else "no opponent",
                hitouts[ruck.player_id],
            )
    return hitouts
