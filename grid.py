import logging

import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)

ROW_NUMBER_HEADER = "#"


def _row_number_key(values):
    # row numbers are always integers; anything else is a bug upstream
    return values.map(int)


class Grid:
    """
    Header row plus data rows, all of equal length.
    Column 0 is the synthetic row-number column ("#", "1", "2", ...).
    Rows are kept in a DataFrame with positional column labels, so repeated
    header names are harmless.
    """

    def __init__(self, header, rows):
        self.header = [str(h) for h in header]
        if not self.header:
            raise ValueError("Grid needs at least one column")
        width = len(self.header)
        if isinstance(rows, pd.DataFrame):
            frame = rows.copy()
            frame.columns = range(frame.shape[1])
        else:
            frame = pd.DataFrame(list(rows), columns=range(width), dtype=object)
        if frame.shape[1] != width:
            raise ValueError(
                f"Rows have {frame.shape[1]} columns, header has {width}"
            )
        self.frame = frame.reset_index(drop=True)

    @classmethod
    def from_records(cls, header, records):
        """Build a grid from raw header/records, prepending the row-number column."""
        header = [ROW_NUMBER_HEADER] + [str(h) for h in header]
        rows = [[str(i + 1)] + [str(v) for v in rec] for i, rec in enumerate(records)]
        return cls(header, rows)

    @property
    def row_count(self) -> int:
        return len(self.frame)

    @property
    def column_count(self) -> int:
        return len(self.header)

    def rows(self, start: int = 0, stop: int | None = None) -> list[list[str]]:
        return self.frame.iloc[start:stop].values.tolist()

    def row(self, idx: int) -> list[str]:
        return self.frame.iloc[idx].tolist()

    def column_values(self, col: int) -> pd.Series:
        return self.frame[col]

    # ---------- sort ----------
    def sort(self, col: int, descending: bool = False):
        if self.row_count == 0:
            return
        key = _row_number_key if col == 0 else None
        self.frame = self.frame.sort_values(
            by=col, ascending=not descending, kind="stable", key=key
        ).reset_index(drop=True)
        logger.debug("sorted %d rows by column %d descending=%s", self.row_count, col, descending)

    # ---------- search ----------
    def find(self, col: int, pattern: str, start: int = 0) -> int | None:
        """First row index >= start (wrapping to 0) whose cell contains pattern."""
        if self.row_count == 0:
            return None
        mask = self.frame[col].str.contains(pattern, regex=False).to_numpy(dtype=bool)
        hits = np.flatnonzero(mask)
        if len(hits) == 0:
            return None
        pos = int(np.searchsorted(hits, start))
        if pos < len(hits):
            return int(hits[pos])
        return int(hits[0])
