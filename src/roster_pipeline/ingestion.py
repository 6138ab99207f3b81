"""CSV ingestion for team rosters.

Rosters are plain ``Name, Position, Rating`` lines, optionally with a
header row. Handles:
- Files with or without a header
- Padding around values ("John Smith,  KFWD , 85")
- ``#`` comment lines and blank lines
"""

import io
import logging
from pathlib import Path
from typing import Union

import pandas as pd

from src.roster_pipeline.config import ROSTER_COLUMNS

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when roster ingestion fails."""


class RosterIngester:
    """Reads roster CSVs into a raw DataFrame.

    Every value is read as a string; type coercion and validation are the
    cleaner's job. The returned DataFrame always has exactly the columns
    ``name``, ``position``, ``rating``.
    """

    def read_roster(self, path: Union[str, Path]) -> pd.DataFrame:
        """Read a roster CSV file.

        Raises:
            IngestionError: If the file is missing or cannot be parsed.
        """
        filepath = Path(path)
        if not filepath.exists():
            raise IngestionError(f"Roster file not found: {filepath}")

        logger.info("Reading roster: %s", filepath.name)
        try:
            df = self._read_csv(filepath)
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            raise IngestionError(f"Failed to read roster {filepath}: {e}") from e

        logger.info("Loaded %d roster rows from %s", len(df), filepath.name)
        return df

    def read_roster_text(self, text: str) -> pd.DataFrame:
        """Read roster lines pasted as text (one player per line).

        Raises:
            IngestionError: If the text cannot be parsed.
        """
        try:
            return self._read_csv(io.StringIO(text))
        except pd.errors.ParserError as e:
            raise IngestionError(f"Failed to parse roster text: {e}") from e

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _read_csv(self, source) -> pd.DataFrame:
        try:
            df = pd.read_csv(
                source,
                header=None,
                names=ROSTER_COLUMNS,
                index_col=False,
                dtype=str,
                skipinitialspace=True,
                skip_blank_lines=True,
                comment="#",
            )
        except pd.errors.EmptyDataError:
            return pd.DataFrame(columns=ROSTER_COLUMNS, dtype=str)

        # Strip padding from every value
        for col in ROSTER_COLUMNS:
            df[col] = df[col].str.strip()

        # Drop a header row if present
        if not df.empty and str(df.iloc[0]["name"]).lower() == "name":
            df = df.iloc[1:]

        return df.reset_index(drop=True)
