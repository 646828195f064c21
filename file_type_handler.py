import logging
import os
import sys

import pandas as pd

from grid import Grid, ROW_NUMBER_HEADER


logger = logging.getLogger(__name__)

DEFAULT_QUOTE = '"'


class GridLoadError(Exception):
    """Reading or parsing the delimited input failed."""

    def __init__(self, source, reason):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


def parse_char_option(text: str) -> str:
    """Single-character option value; "\\t" and "tab" spell a tab."""
    if text in ("\\t", "tab"):
        return "\t"
    if not isinstance(text, str) or len(text) != 1:
        raise ValueError(f"expected a single character, got {text!r}")
    return text


class FileTypeHandler:
    """Picks the delimiter for a path and loads it (or stdin) into a Grid."""

    TSV_EXTENSIONS = {".tsv"}

    def __init__(self, path: str | None = None, delimiter: str | None = None, quote: str | None = None):
        self.path = path
        if path:
            _, ext = os.path.splitext(path)
            self.ext = ext.lower()
        else:
            self.ext = ""
        self.delimiter = delimiter if delimiter is not None else self.default_delimiter()
        self.quote = quote if quote is not None else DEFAULT_QUOTE

    def default_delimiter(self) -> str:
        return "\t" if self.ext in self.TSV_EXTENSIONS else ","

    @property
    def source_name(self) -> str:
        return self.path if self.path else "<stdin>"

    def load(self) -> Grid:
        try:
            if self.path:
                frame = self._read(self.path)
            else:
                frame = self._read(sys.stdin.buffer)
        except pd.errors.EmptyDataError:
            logger.info("%s is empty", self.source_name)
            return Grid([ROW_NUMBER_HEADER], [])
        except (OSError, ValueError) as exc:
            # ValueError covers pandas ParserError and UnicodeDecodeError
            logger.error("failed to load %s: %s", self.source_name, exc)
            raise GridLoadError(self.source_name, exc) from exc

        grid = self._to_grid(frame)
        logger.info(
            "loaded %s: %d rows x %d columns",
            self.source_name,
            grid.row_count,
            grid.column_count,
        )
        return grid

    def _read(self, source) -> pd.DataFrame:
        return pd.read_csv(
            source,
            sep=self.delimiter,
            quotechar=self.quote,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            encoding="utf-8",
            engine="c",
        )

    @staticmethod
    def _to_grid(frame: pd.DataFrame) -> Grid:
        # short records are padded, the first record is the header
        frame = frame.fillna("")
        header = [ROW_NUMBER_HEADER] + frame.iloc[0].tolist()
        body = frame.iloc[1:].reset_index(drop=True)
        body.insert(0, "__row__", pd.Series(range(1, len(body) + 1), dtype=int).astype(str))
        return Grid(header, body)
