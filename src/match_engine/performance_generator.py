"""Per-player performance generation.

Turns one fielded player into a box score line using the bucketed
category tables and goal-kicking profiles in ``config``.
"""

import logging
from typing import Dict, Optional, Tuple

from src.match_engine.config import (
    CATEGORY_TABLES,
    FORM_FACTOR_RANGE,
    PLAYER_VARIANCE_RANGE,
    SCORING_PROFILES,
)
from src.match_engine.models import (
    LineupSlot,
    Player,
    PlayerAssignment,
    PlayerMatchStat,
    Position,
)
from src.match_engine.randomness import RandomSource
from src.match_engine.rating_model import (
    adjusted_base,
    effective_rating,
    fantasy_score,
    impact_score,
    round_half_up,
)

logger = logging.getLogger(__name__)


class PerformanceGenerator:
    """Generate a player's box score for one match.

    The algorithm per player:

    1. **Position fit** - the rating is reduced when the player is fielded
       away from their primary position (see
       :func:`~src.match_engine.rating_model.effective_rating`).
    2. **Multiplier** - ``form * variance`` with
       ``form ~ U[0.5, 1.5)`` and ``variance ~ U[0.7, 1.3)``.
    3. **Categories** - each category the position produces is a bucketed
       base value times the multiplier, rounded half-up, never negative.
    4. **Scoring** - goals use the position's scoring profile: a chance of
       kicking any goal, then a base count plus noise capped at the
       position's ceiling. Behinds follow goals loosely plus noise.

    Hitouts are resolved beforehand by the ruck contest and only apply to
    players fielded at RUC.

    The generator is stateless: all randomness comes from the
    :class:`RandomSource` passed to :meth:`generate`.
    """

    def __init__(
        self,
        category_tables: Optional[Dict[Position, Dict]] = None,
        scoring_profiles: Optional[Dict[Position, Dict]] = None,
    ):
        self.category_tables = category_tables or CATEGORY_TABLES
        self.scoring_profiles = scoring_profiles or SCORING_PROFILES

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def assign(slot: LineupSlot, player: Player) -> PlayerAssignment:
        """Resolve the position a slot fields *player* in.

        Interchange players play their primary position, so no penalty
        applies to them.
        """
        assigned = slot.group.position or player.position
        return PlayerAssignment(
            player=player,
            team_id=slot.team_id,
            slot_group=slot.group,
            assigned_position=assigned,
            effective_rating=effective_rating(
                player.overall_rating, player.position, assigned
            ),
        )

    def generate(
        self,
        match_id: str,
        assignment: PlayerAssignment,
        rng: RandomSource,
        hitouts: int = 0,
    ) -> PlayerMatchStat:
        """Generate the box score for one fielded player.

        Args:
            match_id: Match the stat line belongs to.
            assignment: Player, team and assigned position.
            rng: Source of every random draw made for this player.
            hitouts: Hitouts from the ruck contest. Ignored unless the
                player is fielded at RUC.

        Returns:
            A :class:`PlayerMatchStat` with derived scores filled in.
        """
        position = assignment.assigned_position
        rating = assignment.effective_rating

        form = rng.uniform(*FORM_FACTOR_RANGE)
        variance = rng.uniform(*PLAYER_VARIANCE_RANGE)
        multiplier = form * variance

        counts = {
            category: max(0, round_half_up(adjusted_base(table, rating) * multiplier))
            for category, table in self.category_tables[position].items()
        }
        goals, behinds = self._generate_scoring(position, rating, multiplier, rng)

        stat = PlayerMatchStat(
            match_id=match_id,
            player_id=assignment.player.player_id,
            team_id=assignment.team_id,
            assigned_position=position,
            effective_rating=rating,
            disposals=counts.get("disposals", 0),
            goals=goals,
            behinds=behinds,
            tackles=counts.get("tackles", 0),
            marks=counts.get("marks", 0),
            intercepts=counts.get("intercepts", 0),
            hitouts=max(0, hitouts) if position is Position.RUC else 0,
        )
        stat.fantasy_score = fantasy_score(stat)
        stat.impact_score = impact_score(stat)

        logger.debug(
            "%s (%s, eff %d, x%.2f): %dD %d.%d %dT %dM %dI %dH -> %d fantasy",
            assignment.player.name,
            position.value,
            rating,
            multiplier,
            stat.disposals,
            stat.goals,
            stat.behinds,
            stat.tackles,
            stat.marks,
            stat.intercepts,
            stat.hitouts,
            stat.fantasy_score,
        )
        return stat

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _generate_scoring(
        self,
        position: Position,
        rating: int,
        multiplier: float,
        rng: RandomSource,
    ) -> Tuple[int, int]:
        """Goals and behinds for one player.

        Draw order is fixed (chance, goal noise when scoring, behind
        noise) so a seeded source reproduces the same line.

        Returns:
            ``(goals, behinds)`` tuple.
        """
        profile = self.scoring_profiles[position]

        goals = 0
        if rng.random() < adjusted_base(profile["chance"], rating):
            spread = profile["spread"]
            expected = adjusted_base(profile["base"], rating) * multiplier
            goals = round_half_up(expected + rng.uniform(-spread, spread))
            goals = min(profile["ceiling"], max(1, goals))

        behinds = round_half_up(
            goals * profile["behind_ratio"]
            + rng.uniform(0.0, profile["behind_noise"])
        )
        return goals, max(0, behinds)
