"""Tests for roster cleaning and Player conversion."""

import logging

import pandas as pd
import pytest

from src.match_engine.models import Position
from src.roster_pipeline.cleaning import RosterCleaner


def _make_raw(rows):
    return pd.DataFrame(rows, columns=["name", "position", "rating"], dtype=object)


class TestStandardizePosition:
    @pytest.mark.parametrize("raw,expected", [
        ("KFWD", "KFWD"),
        ("kfwd", "KFWD"),
        (" mid ", "MID"),
        ("Ruck", "RUC"),
        ("key  def", "KDEF"),
        ("Key Fwd", "KFWD"),
        ("WING", None),
        ("", None),
        (None, None),
    ])
    def test_standardize(self, raw, expected):
        assert RosterCleaner.standardize_position(raw) == expected


class TestClean:
    def test_valid_rows_kept(self):
        df = RosterCleaner().clean(_make_raw([
            ["John Smith", "KFWD", "85"],
            ["Tom Brown", "ruck", "78"],
        ]))

        assert list(df["name"]) == ["John Smith", "Tom Brown"]
        assert list(df["position"]) == ["KFWD", "RUC"]
        assert list(df["rating"]) == [85, 78]
        assert df["rating"].dtype.kind == "i"

    def test_blank_names_dropped(self):
        df = RosterCleaner().clean(_make_raw([
            ["", "MID", "70"],
            [None, "MID", "70"],
            ["Tom Brown", "MID", "70"],
        ]))
        assert list(df["name"]) == ["Tom Brown"]

    def test_unknown_position_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            df = RosterCleaner().clean(_make_raw([
                ["John Smith", "WING", "85"],
                ["Tom Brown", "MID", "70"],
            ]))

        assert list(df["name"]) == ["Tom Brown"]
        assert "John Smith" in caplog.text

    @pytest.mark.parametrize("rating", ["59", "100", "eighty", "", "72.5"])
    def test_bad_rating_dropped(self, rating):
        df = RosterCleaner().clean(_make_raw([
            ["John Smith", "MID", rating],
            ["Tom Brown", "MID", "70"],
        ]))
        assert list(df["name"]) == ["Tom Brown"]

    @pytest.mark.parametrize("rating", ["60", "99"])
    def test_rating_bounds_inclusive(self, rating):
        df = RosterCleaner().clean(_make_raw([["John Smith", "MID", rating]]))
        assert len(df) == 1

    def test_index_reset(self):
        df = RosterCleaner().clean(_make_raw([
            ["Bad", "WING", "70"],
            ["Tom Brown", "MID", "70"],
        ]))
        assert list(df.index) == [0]

    def test_input_not_modified(self):
        raw = _make_raw([["Tom Brown", "ruck", "70"]])
        RosterCleaner().clean(raw)
        assert raw.loc[0, "position"] == "ruck"


class TestToPlayers:
    def test_ids_and_fields(self):
        cleaned = RosterCleaner().clean(_make_raw([
            ["John Smith", "KFWD", "85"],
            ["Tom Brown", "RUC", "78"],
        ]))
        players = RosterCleaner.to_players(cleaned, "blues")

        assert [p.player_id for p in players] == ["blues-01", "blues-02"]
        assert players[0].name == "John Smith"
        assert players[0].position is Position.KFWD
        assert players[1].overall_rating == 78
        assert all(p.team_id == "blues" for p in players)

    def test_empty(self):
        cleaned = RosterCleaner().clean(_make_raw([]))
        assert RosterCleaner.to_players(cleaned, "blues") == []
