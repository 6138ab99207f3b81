"""Shared fixtures for the match simulator test suite."""

from typing import List

import pytest

from src.match_engine.models import Player, Position
from src.match_engine.randomness import RandomSource


class ScriptedRandom(RandomSource):
    """RandomSource that replays a fixed sequence.

    ``random()`` and ``uniform()`` both return the next value as-is, so a
    test states the exact draws the engine will see.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of values")
        self.calls += 1
        return self.values.pop(0)

    def uniform(self, low: float, high: float) -> float:
        return self.random()


class MidpointRandom(RandomSource):
    """Deterministic source: ``uniform()`` returns the middle of the range.

    That makes form, player variance and match variance exactly 1.0 and
    ruck noise 0.
    """

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value

    def uniform(self, low: float, high: float) -> float:
        return (low + high) / 2


class ExplodingRandom(RandomSource):
    """Fails the test if the engine draws any randomness."""

    def random(self) -> float:
        raise AssertionError("randomness drawn")


# ------------------------------------------------------------------
# Random sources
# ------------------------------------------------------------------

@pytest.fixture
def scripted_rng():
    """Factory: ``scripted_rng([1.0, 1.0, ...])``."""
    return ScriptedRandom


@pytest.fixture
def midpoint_rng():
    return MidpointRandom()


@pytest.fixture
def exploding_rng():
    return ExplodingRandom()


# ------------------------------------------------------------------
# Rosters
# ------------------------------------------------------------------

# 24 players: enough for a lineup plus a few spares
ROSTER_SHAPE = [
    (Position.KDEF, 4),
    (Position.DEF, 4),
    (Position.MID, 6),
    (Position.RUC, 2),
    (Position.FWD, 4),
    (Position.KFWD, 4),
]


def build_roster(team_id: str, shape=ROSTER_SHAPE) -> List[Player]:
    """Deterministic roster with ratings spread across every bucket."""
    players = []
    for position, count in shape:
        for _ in range(count):
            n = len(players) + 1
            players.append(
                Player(
                    player_id=f"{team_id}-{n:02d}",
                    name=f"{team_id.title()} Player {n}",
                    position=position,
                    overall_rating=60 + (n * 7) % 40,
                    team_id=team_id,
                )
            )
    return players


@pytest.fixture
def home_roster():
    return build_roster("home")


@pytest.fixture
def away_roster():
    return build_roster("away")
