"""Simulate a match between two teams stored in the match store.

Usage:
    python -m src.match_manager.run_simulation HOME_TEAM_ID AWAY_TEAM_ID [seed] [format]

Examples:
    python -m src.match_manager.run_simulation blues cats
    python -m src.match_manager.run_simulation blues cats 42 5-4-3-2-1

Teams are imported beforehand with ``src.roster_pipeline.run_import``.
Lineups are picked automatically, best players first.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from src.logging_config import setup_logging
from src.match_engine.box_score import team_totals
from src.match_engine.models import VoteCategory
from src.match_engine.randomness import SeededRandom
from src.match_manager.config import DEFAULT_BROWNLOW_FORMAT, DEFAULT_SEED
from src.match_manager.match_controller import MatchController
from src.match_manager.match_store import MatchStore

logger = logging.getLogger(__name__)


def run_simulation(
    home_team_id: str,
    away_team_id: str,
    seed: Optional[int] = DEFAULT_SEED,
    brownlow_format: str = DEFAULT_BROWNLOW_FORMAT,
    storage_dir: Optional[Path] = None,
) -> str:
    """Create, line up and simulate a match, then print the results.

    Returns:
        The new match id.
    """
    store = MatchStore(storage_dir)
    controller = MatchController(store, rng=SeededRandom(seed))

    match = controller.create_match(home_team_id, away_team_id)
    controller.auto_lineup(match.match_id)
    simulation = controller.simulate_match(match.match_id, brownlow_format)

    result = simulation.result
    home, away = simulation.home_score, simulation.away_score
    print(
        f"{home.team_id} {home.goals}.{home.behinds} ({result.home_score}) - "
        f"{away.team_id} {away.goals}.{away.behinds} ({result.away_score})"
    )
    print(f"Result: {result.winner + ' win' if result.winner else 'Draw'}")

    box = controller.box_score(match.match_id)
    with pd.option_context("display.max_rows", None, "display.width", 160):
        print()
        print(box.drop(columns=["player_id"]).to_string(index=False))
        print()
        print(team_totals(box).to_string())

    names = {row.player_id: row.name for row in box.itertuples()}
    for category in (VoteCategory.BROWNLOW, VoteCategory.COACHES):
        print(f"\n{category.value.title()} votes:")
        for vote in controller.get_votes(match.match_id, category):
            print(f"  {vote.votes:>2}  {names.get(vote.player_id, vote.player_id)}")

    return match.match_id


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)

    home_team_id = sys.argv[1]
    away_team_id = sys.argv[2]
    seed = int(sys.argv[3]) if len(sys.argv) > 3 else DEFAULT_SEED
    brownlow_format = sys.argv[4] if len(sys.argv) > 4 else DEFAULT_BROWNLOW_FORMAT

    try:
        match_id = run_simulation(home_team_id, away_team_id, seed, brownlow_format)
        print(f"\nSaved match {match_id}")
    except Exception:
        logger.exception("Simulation failed")
        sys.exit(1)
