"""Import a team roster from CSV into the match store.

Usage:
    python -m src.roster_pipeline.run_import CSV_PATH TEAM_ID [TEAM_NAME] [TEAM_OVERALL]

Examples:
    python -m src.roster_pipeline.run_import data/rosters/blues.csv blues
    python -m src.roster_pipeline.run_import data/rosters/cats.csv cats "Geelong" 82
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

from src.logging_config import setup_logging
from src.match_engine.models import Player
from src.match_manager.match_store import MatchStore
from src.roster_pipeline.cleaning import RosterCleaner
from src.roster_pipeline.ingestion import RosterIngester

logger = logging.getLogger(__name__)


def import_roster(
    csv_path: Union[str, Path],
    team_id: str,
    team_name: Optional[str] = None,
    team_overall: Optional[int] = None,
    store: Optional[MatchStore] = None,
) -> List[Player]:
    """Read, clean and save a team roster.

    Args:
        csv_path: Roster CSV with ``Name, Position, Rating`` lines.
        team_id: Id to store the team under; player ids derive from it.
        team_name: Display name. Defaults to *team_id*.
        team_overall: Team overall rating (60-99). ``None`` leaves it
            unset, which the engine treats as 75.
        store: Target store. Defaults to the project's data directory.

    Returns:
        The imported players.

    Raises:
        IngestionError: If the CSV cannot be read.
        PersistenceError: If the team cannot be saved.
    """
    store = store or MatchStore()

    logger.info("Importing roster for %s from %s", team_id, csv_path)
    raw = RosterIngester().read_roster(csv_path)

    cleaner = RosterCleaner()
    cleaned = cleaner.clean(raw)
    players = cleaner.to_players(cleaned, team_id)

    if len(players) < len(raw):
        logger.warning(
            "Imported %d of %d roster rows for %s",
            len(players), len(raw), team_id,
        )

    store.save_team(team_id, team_name or team_id, players, team_overall)
    return players


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)

    csv_path = Path(sys.argv[1])
    team_id = sys.argv[2]
    team_name = sys.argv[3] if len(sys.argv) > 3 else None
    team_overall = int(sys.argv[4]) if len(sys.argv) > 4 else None

    try:
        players = import_roster(csv_path, team_id, team_name, team_overall)
        print(f"Imported {len(players)} players for {team_id}")
    except Exception:
        logger.exception("Roster import failed")
        sys.exit(1)
