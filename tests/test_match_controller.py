"""Tests for match orchestration."""

import pytest

from src.match_engine.lineup_validator import (
    DuplicateAssignmentError,
    IncompleteLineupError,
    InsufficientRosterError,
)
from src.match_engine.models import MatchStatus, SlotGroup, TeamLineup, VoteCategory
from src.match_engine.randomness import SeededRandom
from src.match_engine.vote_allocator import InvalidFormatError
from src.match_manager.match_controller import MatchController
from src.match_manager.match_store import MatchStore, PersistenceError
from src.match_manager.run_simulation import run_simulation


@pytest.fixture
def store(tmp_path, home_roster, away_roster):
    store = MatchStore(tmp_path)
    store.save_team("home", "Home FC", home_roster, team_overall=85)
    store.save_team("away", "Away FC", away_roster, team_overall=70)
    return store


@pytest.fixture
def controller(store):
    return MatchController(store, rng=SeededRandom(42))


@pytest.fixture
def match_id(controller):
    match = controller.create_match("home", "away", match_id="m1")
    controller.auto_lineup(match.match_id)
    return match.match_id


# ── Match creation ───────────────────────────────────────────────────

class TestCreateMatch:
    def test_creates_setup_match(self, controller, store):
        match = controller.create_match("home", "away")
        assert store.get_match(match.match_id).status is MatchStatus.SETUP

    def test_same_team_rejected(self, controller):
        with pytest.raises(ValueError, match="different"):
            controller.create_match("home", "home")

    def test_unknown_team(self, controller):
        with pytest.raises(PersistenceError):
            controller.create_match("home", "nobody")

    def test_short_roster_rejected(self, controller, store, away_roster):
        store.save_team("thin", "Thin FC", away_roster[:15])
        with pytest.raises(InsufficientRosterError):
            controller.create_match("home", "thin")
        assert store.list_matches() == []


# ── Lineups ──────────────────────────────────────────────────────────

class TestLineups:
    def test_auto_lineup_stored(self, controller, store):
        controller.create_match("home", "away", match_id="m1")
        lineups = controller.auto_lineup("m1")

        assert lineups["home"].is_complete()
        assert store.get_lineup("m1") == lineups

    def test_set_lineup_rejects_incomplete(self, controller, store):
        controller.create_match("home", "away", match_id="m1")
        with pytest.raises(IncompleteLineupError):
            controller.set_lineup("m1", TeamLineup.empty("home"), TeamLineup.empty("away"))
        with pytest.raises(PersistenceError, match="No lineup"):
            store.get_lineup("m1")

    def test_set_lineup_rejects_wrong_teams(self, controller, match_id, store):
        lineups = store.get_lineup(match_id)
        with pytest.raises(ValueError, match="match m1"):
            controller.set_lineup(match_id, lineups["away"], lineups["home"])

    def test_set_lineup_rejects_duplicates(self, controller, match_id, store):
        lineups = store.get_lineup(match_id)
        home = lineups["home"]
        home.slots[1].player_id = home.slots[0].player_id
        with pytest.raises(DuplicateAssignmentError):
            controller.set_lineup(match_id, home, lineups["away"])


# ── Simulation ───────────────────────────────────────────────────────

class TestSimulateMatch:
    def test_result_persisted(self, controller, store, match_id):
        sim = controller.simulate_match(match_id)

        match = store.get_match(match_id)
        assert match.status is MatchStatus.COMPLETED
        assert (match.home_score, match.away_score) == (
            sim.result.home_score, sim.result.away_score,
        )
        assert len(store.get_player_stats(match_id)) == 42

    def test_team_overalls_used(self, controller, match_id):
        sim = controller.simulate_match(match_id)
        assert sim.home_score.strength_modifier == pytest.approx(0.85 + 10 / 150)
        assert sim.away_score.strength_modifier == pytest.approx(0.85 - 5 / 150)

    def test_brownlow_format(self, controller, store, match_id):
        controller.simulate_match(match_id, "5-4-3-2-1")
        votes = store.get_votes(match_id, VoteCategory.BROWNLOW)
        assert [v.votes for v in votes] == [5, 4, 3, 2, 1]

    def test_invalid_format_writes_nothing(self, controller, store, match_id):
        with pytest.raises(InvalidFormatError):
            controller.simulate_match(match_id, "3-2")
        assert store.get_match(match_id).status is MatchStatus.SETUP
        assert store.get_player_stats(match_id) == []

    def test_invalid_stored_lineup_writes_nothing(self, controller, store, match_id):
        lineups = store.get_lineup(match_id)
        lineups["home"].get_slots(SlotGroup.MID)[0].player_id = None
        store.save_lineup(match_id, lineups["home"], lineups["away"])

        with pytest.raises(IncompleteLineupError):
            controller.simulate_match(match_id)
        assert store.get_match(match_id).status is MatchStatus.SETUP

    def test_no_lineup(self, controller):
        controller.create_match("home", "away", match_id="bare")
        with pytest.raises(PersistenceError):
            controller.simulate_match("bare")

    def test_unknown_match(self, controller):
        with pytest.raises(PersistenceError, match="Match not found"):
            controller.simulate_match("ghost")

    def test_seeded_controllers_agree(self, store, match_id):
        first = MatchController(store, rng=SeededRandom(7)).simulate_match(match_id)
        second = MatchController(store, rng=SeededRandom(7)).simulate_match(match_id)
        assert first.player_stats == second.player_stats
        assert first.result == second.result


# ── Votes ────────────────────────────────────────────────────────────

class TestRegenerateVotes:
    def test_regenerate_is_idempotent(self, controller, store, match_id):
        controller.simulate_match(match_id)
        first = controller.regenerate_votes(match_id)
        second = controller.regenerate_votes(match_id)

        assert first == second
        assert store.get_votes(match_id, VoteCategory.COACHES) == second[VoteCategory.COACHES]
        assert len(store.get_votes(match_id, VoteCategory.BROWNLOW)) == 3

    def test_regenerate_matches_simulation_votes(self, controller, match_id):
        sim = controller.simulate_match(match_id)
        votes = controller.regenerate_votes(match_id)
        assert votes[VoteCategory.COACHES] == sim.coaches_votes
        assert votes[VoteCategory.BROWNLOW] == sim.brownlow_votes

    def test_regenerate_switches_format(self, controller, store, match_id):
        controller.simulate_match(match_id, "3-2-1")
        controller.regenerate_votes(match_id, "5-4-3-2-1")
        assert len(store.get_votes(match_id, VoteCategory.BROWNLOW)) == 5

    def test_regenerate_needs_stats(self, controller, match_id):
        with pytest.raises(PersistenceError, match="Simulate it first"):
            controller.regenerate_votes(match_id)

    def test_get_votes_sorted(self, controller, match_id):
        controller.simulate_match(match_id)
        votes = controller.get_votes(match_id, VoteCategory.COACHES)
        assert [v.votes for v in votes] == sorted((v.votes for v in votes), reverse=True)


# ── Box score ────────────────────────────────────────────────────────

class TestBoxScore:
    def test_names_filled_in(self, controller, match_id, home_roster):
        controller.simulate_match(match_id)
        box = controller.box_score(match_id)

        assert len(box) == 42
        names = {p.name for p in home_roster}
        assert set(box[box["team_id"] == "home"]["name"]) <= names

    def test_empty_before_simulation(self, controller, match_id):
        assert controller.box_score(match_id).empty


# ── Command line runner ──────────────────────────────────────────────

class TestRunSimulation:
    def test_prints_and_saves(self, store, tmp_path, capsys):
        match_id = run_simulation("home", "away", seed=3, storage_dir=tmp_path)

        out = capsys.readouterr().out
        assert "Brownlow votes" in out
        assert "Coaches votes" in out
        assert store.get_match(match_id).status is MatchStatus.COMPLETED

    def test_same_seed_same_score(self, store, tmp_path):
        first = run_simulation("home", "away", seed=11, storage_dir=tmp_path)
        second = run_simulation("home", "away", seed=11, storage_dir=tmp_path)
        a, b = store.get_match(first), store.get_match(second)
        assert (a.home_score, a.away_score) == (b.home_score, b.away_score)
