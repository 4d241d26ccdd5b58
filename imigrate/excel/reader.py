from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from imigrate.models.table import Cell, Table

"""Spreadsheet decoding boundary.

Reads .xlsx / .xls / .csv uploads into plain tables (list of rows of
str | int | float | None). Nothing downstream touches pandas objects.

- every row is returned, the first one being the header as found in the file
- fully blank rows are dropped
- NaN / NaT become None, numpy scalars become Python numbers, dates become
  ISO strings
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "TableReadError",
    "SheetData",
    "choose_sheet",
    "read_workbook",
    "read_table",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xls", ".csv")
CSV_SHEET_NAME = "Sheet1"
_SHEET_HINTS = ("mix", "material", "data")


class TableReadError(Exception):
    """Raised when a file cannot be decoded into a table."""


@dataclass
class SheetData:
    sheet_name: str
    rows: Table

    @property
    def header(self) -> list[Cell]:
        return self.rows[0] if self.rows else []


def _na_options(keep_na_strings: list[str] | None) -> tuple[bool, list[str] | None]:
    # pandas default NA strings minus the ones the user wants kept verbatim
    if not keep_na_strings:
        return True, None
    import pandas._libs.parsers as parsers

    custom_na = parsers.STR_NA_VALUES.copy() - set(keep_na_strings)
    return False, list(custom_na)


def choose_sheet(sheet_names: list[str]) -> str:
    """Pick the data sheet of a workbook.

    First sheet whose name mentions mix / material / data, else the second
    sheet when there are several (exports often start with a cover sheet),
    else the only one.
    """
    if not sheet_names:
        raise TableReadError("workbook has no sheets")
    for name in sheet_names:
        lowered = name.lower()
        if any(hint in lowered for hint in _SHEET_HINTS):
            return name
    return sheet_names[1] if len(sheet_names) > 1 else sheet_names[0]


def read_workbook(
    path: Path, target_sheets: Iterable[str] | None = None, keep_na_strings: list[str] | None = None
) -> dict[str, pd.DataFrame]:
    """Read raw DataFrames (no header applied) keyed by sheet name."""
    keep_default_na, na_values = _na_options(keep_na_strings)
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(
            path, header=None, dtype=object, keep_default_na=keep_default_na, na_values=na_values
        )
        return {CSV_SHEET_NAME: df}

    dfs: dict[str, pd.DataFrame] = {}
    with pd.ExcelFile(path) as xls:
        for name in xls.sheet_names:
            if target_sheets is not None and str(name) not in target_sheets:
                continue
            dfs[str(name)] = xls.parse(
                name, header=None, keep_default_na=keep_default_na, na_values=na_values
            )
    return dfs


def read_table(path: Path, keep_na_strings: list[str] | None = None) -> SheetData:
    """Decode the data sheet of ``path`` into a table.

    Raises:
        TableReadError: unsupported extension, missing file or undecodable content
    """
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise TableReadError(f"unsupported file type: {path.name} (expected .xlsx, .xls or .csv)")
    if not path.exists():
        raise TableReadError(f"file not found: {path}")

    try:
        if path.suffix.lower() == ".csv":
            sheets = read_workbook(path, keep_na_strings=keep_na_strings)
            sheet_name = CSV_SHEET_NAME
        else:
            with pd.ExcelFile(path) as xls:
                sheet_name = choose_sheet([str(n) for n in xls.sheet_names])
            sheets = read_workbook(path, target_sheets=[sheet_name], keep_na_strings=keep_na_strings)
    except pd.errors.EmptyDataError:
        return SheetData(sheet_name=CSV_SHEET_NAME, rows=[])
    except (OSError, ValueError) as e:
        raise TableReadError(f"cannot read {path.name}: {e}") from e

    return SheetData(sheet_name=sheet_name, rows=dataframe_to_table(sheets[sheet_name]))


def dataframe_to_table(df: pd.DataFrame) -> Table:
    rows: Table = []
    for raw in df.itertuples(index=False, name=None):
        cells = [to_cell(v) for v in raw]
        if all(c is None for c in cells):
            continue
        rows.append(cells)
    return rows


def to_cell(value: Any) -> Cell:
    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT or value is pd.NA:
        return None
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, (str, int, float)):
        return value
    return str(value)
