from __future__ import annotations

from typing import Union

"""Tabular value model shared by every converter.

A table is an ordered list of rows; a row is an ordered list of cells.
Nothing past the codec boundary (imigrate.excel) sees a workbook object.
"""

__all__ = [
    "Cell",
    "Row",
    "Table",
    "header_index",
]

Cell = Union[str, int, float, None]
Row = list[Cell]
Table = list[Row]


def header_index(header: Row) -> dict[str, int]:
    """Map header text -> column position (last occurrence wins).

    Header cells are compared as strings with surrounding whitespace removed;
    empty header cells are not indexed.
    """
    index: dict[str, int] = {}
    for pos, cell in enumerate(header):
        if cell is None:
            continue
        name = str(cell).strip()
        if name:
            index[name] = pos
    return index
