from src.match_manager.match_controller import MatchController
from src.match_manager.match_store import MatchStore, PersistenceError

__all__ = [
    "MatchController",
    "MatchStore",
    "PersistenceError",
]
