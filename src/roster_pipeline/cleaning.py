"""Roster cleaning and conversion to Player models.

Handles standardization of raw roster rows:
- Canonical position tags (upper-case, aliases like "RUCK" -> "RUC")
- Numeric ratings, rejecting anything outside 60-99
- Dropping rows with no player name
"""

import logging
from typing import List, Optional

import pandas as pd

from src.match_engine.models import Player, Position
from src.roster_pipeline.config import POSITION_ALIASES, RATING_MAX, RATING_MIN

logger = logging.getLogger(__name__)

_VALID_POSITIONS = {p.value for p in Position}


class RosterCleaner:
    """Cleans raw roster rows and turns them into players."""

    @staticmethod
    def standardize_position(pos_str: str) -> Optional[str]:
        """Canonical position tag, or None if unrecognised.

        Examples:
            "kfwd"  -> "KFWD"
            "Ruck"  -> "RUC"
            "WING"  -> None
        """
        if pd.isna(pos_str):
            return None

        tag = " ".join(str(pos_str).upper().split())
        tag = POSITION_ALIASES.get(tag, tag)
        return tag if tag in _VALID_POSITIONS else None

    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean a raw roster DataFrame.

        Rows with a blank name are dropped silently; rows with an unknown
        position or an out-of-range rating are dropped with a warning.

        Returns:
            DataFrame with columns ``name`` (str), ``position`` (str tag)
            and ``rating`` (int).
        """
        out = df.copy()
        out["name"] = out["name"].fillna("").astype(str).str.strip()
        out = out[out["name"] != ""].copy()

        out["position"] = out["position"].apply(self.standardize_position)
        bad_pos = out["position"].isna()
        if bad_pos.any():
            logger.warning(
                "Dropping %d players with unrecognized position: %s",
                bad_pos.sum(),
                out.loc[bad_pos, "name"].tolist(),
            )
            out = out[~bad_pos].copy()

        out["rating"] = pd.to_numeric(out["rating"], errors="coerce")
        bad_rating = (
            out["rating"].isna()
            | (out["rating"] < RATING_MIN)
            | (out["rating"] > RATING_MAX)
            | (out["rating"] % 1 != 0)
        )
        if bad_rating.any():
            logger.warning(
                "Dropping %d players with rating outside %d-%d: %s",
                bad_rating.sum(),
                RATING_MIN,
                RATING_MAX,
                out.loc[bad_rating, "name"].tolist(),
            )
            out = out[~bad_rating].copy()

        out["rating"] = out["rating"].astype(int)
        out = out.reset_index(drop=True)

        logger.info("Cleaned roster: %d valid players", len(out))
        return out

    @staticmethod
    def to_players(df: pd.DataFrame, team_id: str) -> List[Player]:
        """Convert a cleaned roster into players with ids ``{team_id}-NN``."""
        return [
            Player(
                player_id=f"{team_id}-{i:02d}",
                name=row["name"],
                position=Position(row["position"]),
                overall_rating=int(row["rating"]),
                team_id=team_id,
            )
            for i, (_, row) in enumerate(df.iterrows(), start=1)
        ]
