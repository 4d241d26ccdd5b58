from __future__ import annotations

from pathlib import Path

import pandas as pd

from imigrate.models.table import Table

"""Spreadsheet encoding boundary: table -> single-sheet .xlsx."""

__all__ = [
    "output_file_name",
    "write_table",
]


def output_file_name(entity_label: str, customer_prefix: str = "") -> str:
    """``Acme-MixImport-Converted.xlsx`` (prefix omitted when blank)."""
    prefix = f"{customer_prefix}-" if customer_prefix else ""
    return f"{prefix}{entity_label}Import-Converted.xlsx"


def write_table(rows: Table, path: Path, sheet_name: str) -> Path:
    """Write header + data rows to ``path`` as one worksheet.

    Empty-string cells are written as truly blank cells.
    """
    if not rows:
        raise ValueError("nothing to write: table has no header row")
    header = [str(c) if c is not None else "" for c in rows[0]]
    body = [[None if c == "" else c for c in row] for row in rows[1:]]
    df = pd.DataFrame(body, columns=header, dtype=object)

    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
    return path
