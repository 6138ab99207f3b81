from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_ROSTER_DIR = DATA_DIR / "rosters"

# Roster CSV columns, in file order: "Name, Position, Rating"
ROSTER_COLUMNS = ["name", "position", "rating"]

# Valid player rating range (inclusive)
RATING_MIN = 60
RATING_MAX = 99

# Aliases that map to canonical position tags
POSITION_ALIASES = {
    "KEY DEF": "KDEF",
    "KEYDEF": "KDEF",
    "KB": "KDEF",
    "BACK": "DEF",
    "MIDFIELD": "MID",
    "RUCK": "RUC",
    "FWD POCKET": "FWD",
    "KEY FWD": "KFWD",
    "KEYFWD": "KFWD",
    "KF": "KFWD",
}
