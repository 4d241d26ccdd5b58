from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from imigrate.models.config_models import TransformStep
from imigrate.models.table import Cell, Row, Table

"""Table transformation DSL.

Post-conversion edits are expressed as a list of named steps from the run
configuration and interpreted here by a fixed evaluator:

    set_column     column, value                      -> overwrite every data cell
    map_column     column, mapping | function         -> rewrite cells (upper/lower/strip)
    filter_rows    column, equals | not_equals | contains [, keep: false]
    rename_header  column, to

Column names are matched exactly against the header row.
"""

__all__ = [
    "TransformError",
    "TransformResult",
    "apply_transforms",
    "OPERATIONS",
]

logger = logging.getLogger(__name__)

_FUNCTIONS: dict[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
    "strip": str.strip,
}


class TransformError(Exception):
    """Raised for an unknown operation or a column missing from the header."""


@dataclass(frozen=True)
class TransformResult:
    rows: Table  # header + data rows after every step
    original_rows: int
    new_rows: int
    original_columns: int
    new_columns: int
    rows_modified: int
    cells_modified: int


def _column(header: Row, name: str) -> int:
    try:
        return header.index(name)
    except ValueError:
        raise TransformError(f"column not found: {name!r}") from None


def _pad(row: Row, width: int) -> Row:
    if len(row) < width:
        row.extend([""] * (width - len(row)))
    return row


def _set_column(header: Row, rows: Table, step: TransformStep) -> Table:
    idx = _column(header, step.column)
    value = step.params.get("value")
    for row in rows:
        _pad(row, idx + 1)[idx] = value
    return rows


def _map_column(header: Row, rows: Table, step: TransformStep) -> Table:
    idx = _column(header, step.column)
    mapping: dict[Any, Any] | None = step.params.get("mapping")
    func_name = step.params.get("function")
    if mapping is None and func_name not in _FUNCTIONS:
        raise TransformError(f"map_column needs a mapping or one of {sorted(_FUNCTIONS)}")

    for row in rows:
        _pad(row, idx + 1)
        cell = row[idx]
        if mapping is not None:
            if cell in mapping:
                row[idx] = mapping[cell]
            elif cell is not None and str(cell) in mapping:
                row[idx] = mapping[str(cell)]
        elif isinstance(cell, str):
            row[idx] = _FUNCTIONS[func_name](cell)
    return rows


def _cell_equals(cell: Cell, value: Any) -> bool:
    if cell == value:
        return True
    if cell is None or value is None:
        return False
    return str(cell).strip() == str(value).strip()


def _filter_rows(header: Row, rows: Table, step: TransformStep) -> Table:
    idx = _column(header, step.column)
    params = step.params
    keep = params.get("keep", True)

    def get(row: Row) -> Cell:
        return row[idx] if idx < len(row) else None

    if "equals" in params:
        pred = lambda row: _cell_equals(get(row), params["equals"])  # noqa: E731
    elif "not_equals" in params:
        pred = lambda row: not _cell_equals(get(row), params["not_equals"])  # noqa: E731
    elif "contains" in params:
        needle = str(params["contains"])
        pred = lambda row: needle in ("" if get(row) is None else str(get(row)))  # noqa: E731
    else:
        raise TransformError("filter_rows needs one of equals / not_equals / contains")
    return [row for row in rows if pred(row) == keep]


def _rename_header(header: Row, rows: Table, step: TransformStep) -> Table:
    idx = _column(header, step.column)
    header[idx] = step.params["to"]
    return rows


OPERATIONS: dict[str, Callable[[Row, Table, TransformStep], Table]] = {
    "set_column": _set_column,
    "map_column": _map_column,
    "filter_rows": _filter_rows,
    "rename_header": _rename_header,
}


def _change_stats(old: Table, new: Table, width: int) -> tuple[int, int]:
    rows_modified = 0
    cells_modified = 0
    for old_row, new_row in zip(old, new):
        changed = False
        for j in range(max(len(old_row), len(new_row))):
            a = old_row[j] if j < len(old_row) else None
            b = new_row[j] if j < len(new_row) else None
            if a != b:
                cells_modified += 1
                changed = True
        if changed:
            rows_modified += 1
    if len(new) > len(old):
        rows_modified += len(new) - len(old)
        cells_modified += (len(new) - len(old)) * width
    elif len(new) < len(old):
        rows_modified += len(old) - len(new)
    return rows_modified, cells_modified


def apply_transforms(table: Table, steps: Sequence[TransformStep]) -> TransformResult:
    """Apply ``steps`` in order to a copy of ``table`` (row 0 = header).

    Raises:
        TransformError: empty table, unknown operation or unknown column
    """
    if not table:
        raise TransformError("cannot transform an empty table")
    header = list(table[0])
    original = [list(r) for r in table[1:]]
    rows = [list(r) for r in original]

    for step in steps:
        operation = OPERATIONS.get(step.op)
        if operation is None:
            raise TransformError(f"unknown operation: {step.op}")
        before = len(rows)
        rows = operation(header, rows, step)
        logger.info(f"transform {step.op} {step.column!r}: {before} -> {len(rows)} rows")

    rows_modified, cells_modified = _change_stats(original, rows, len(header))
    return TransformResult(
        rows=[header, *rows],
        original_rows=len(original),
        new_rows=len(rows),
        original_columns=len(table[0]),
        new_columns=len(header),
        rows_modified=rows_modified,
        cells_modified=cells_modified,
    )
