"""Tests for roster CSV ingestion."""

import pytest

from src.roster_pipeline.config import ROSTER_COLUMNS
from src.roster_pipeline.ingestion import IngestionError, RosterIngester


def _write_csv(tmp_path, text, name="roster.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestReadRoster:
    def test_without_header(self, tmp_path):
        path = _write_csv(tmp_path, "John Smith,KFWD,85\nTom Brown,MID,78\n")
        df = RosterIngester().read_roster(path)

        assert list(df.columns) == ROSTER_COLUMNS
        assert len(df) == 2
        assert df.loc[0, "name"] == "John Smith"
        assert df.loc[1, "rating"] == "78"

    def test_with_header(self, tmp_path):
        path = _write_csv(tmp_path, "Name,Position,Rating\nJohn Smith,KFWD,85\n")
        df = RosterIngester().read_roster(path)

        assert len(df) == 1
        assert df.loc[0, "position"] == "KFWD"

    def test_padding_stripped(self, tmp_path):
        path = _write_csv(tmp_path, "  John Smith ,  KFWD , 85 \n")
        df = RosterIngester().read_roster(path)

        assert df.loc[0, "name"] == "John Smith"
        assert df.loc[0, "position"] == "KFWD"
        assert df.loc[0, "rating"] == "85"

    def test_comments_and_blank_lines(self, tmp_path):
        text = "# Blues 2024\nJohn Smith,KFWD,85\n\n# bench\nTom Brown,MID,78\n"
        df = RosterIngester().read_roster(_write_csv(tmp_path, text))
        assert list(df["name"]) == ["John Smith", "Tom Brown"]

    def test_values_stay_strings(self, tmp_path):
        path = _write_csv(tmp_path, "John Smith,KFWD,eighty\n")
        df = RosterIngester().read_roster(path)
        assert df.loc[0, "rating"] == "eighty"

    def test_empty_file(self, tmp_path):
        df = RosterIngester().read_roster(_write_csv(tmp_path, ""))
        assert df.empty
        assert list(df.columns) == ROSTER_COLUMNS

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestionError, match="not found"):
            RosterIngester().read_roster(tmp_path / "nope.csv")


class TestReadRosterText:
    def test_pasted_lines(self):
        df = RosterIngester().read_roster_text(
            "John Smith, KFWD, 85\nTom Brown, RUCK, 80"
        )
        assert list(df["name"]) == ["John Smith", "Tom Brown"]
        assert list(df["position"]) == ["KFWD", "RUCK"]

    def test_empty_text(self):
        assert RosterIngester().read_roster_text("").empty
