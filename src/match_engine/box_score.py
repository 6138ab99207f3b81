"""Tabular box scores built with pandas."""

from typing import Dict, Iterable, Optional

import pandas as pd

from src.match_engine.config import STAT_CATEGORIES
from src.match_engine.models import Player, PlayerMatchStat

COUNT_COLUMNS = list(STAT_CATEGORIES)

BOX_SCORE_COLUMNS = (
    ["team_id", "player_id", "name", "position"]
    + COUNT_COLUMNS
    + ["fantasy_score", "impact_score"]
)


def build_box_score(
    stats: Iterable[PlayerMatchStat],
    players: Optional[Dict[str, Player]] = None,
) -> pd.DataFrame:
    """Build a match box score.

    Rows are grouped by team (in the order teams first appear in *stats*)
    and sorted by fantasy score, highest first, within each team.

    Args:
        stats: Player stat lines for the match.
        players: Optional ``player_id -> Player`` lookup for names. Player
            ids are used as names when absent.
    """
    players = players or {}
    rows = []
    for stat in stats:
        player = players.get(stat.player_id)
        row = {
            "team_id": stat.team_id,
            "player_id": stat.player_id,
            "name": player.name if player else stat.player_id,
            "position": stat.assigned_position.value,
            "fantasy_score": stat.fantasy_score,
            "impact_score": stat.impact_score,
        }
        row.update({col: getattr(stat, col) for col in COUNT_COLUMNS})
        rows.append(row)

    df = pd.DataFrame(rows, columns=BOX_SCORE_COLUMNS)
    if df.empty:
        return df

    team_order = {team: i for i, team in enumerate(df["team_id"].unique())}
    df = (
        df.assign(_team_order=df["team_id"].map(team_order))
        .sort_values(
            ["_team_order", "fantasy_score"],
            ascending=[True, False],
            kind="stable",
        )
        .drop(columns="_team_order")
        .reset_index(drop=True)
    )
    return df


def team_totals(box_score: pd.DataFrame) -> pd.DataFrame:
    """Sum each count column per team, indexed by ``team_id``."""
    return box_score.groupby("team_id", sort=False)[COUNT_COLUMNS + ["fantasy_score"]].sum()
