from pathlib import Path

from src.match_engine.config import DEFAULT_BROWNLOW_FORMAT as ENGINE_DEFAULT_BROWNLOW_FORMAT

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
MATCH_STORAGE_DIR = DATA_DIR / "league"

# Subdirectories under the storage dir
TEAMS_SUBDIR = "teams"
MATCHES_SUBDIR = "matches"

# Default match settings
DEFAULT_BROWNLOW_FORMAT = ENGINE_DEFAULT_BROWNLOW_FORMAT.value
DEFAULT_SEED = None  # None -> fresh entropy for every run
