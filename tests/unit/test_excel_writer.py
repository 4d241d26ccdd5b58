from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from openpyxl import load_workbook

from imigrate.excel.writer import output_file_name, write_table


@pytest.mark.parametrize(
    "label, prefix, expected",
    [
        ("Mix", "", "MixImport-Converted.xlsx"),
        ("Mix", "Acme Concrete", "Acme Concrete-MixImport-Converted.xlsx"),
        ("Material", "Acme", "Acme-MaterialImport-Converted.xlsx"),
    ],
)
def test_output_file_name(label, prefix, expected):
    assert output_file_name(label, prefix) == expected


def test_write_table_single_sheet(temp_workdir: Path):
    rows = [
        ["Plant Code", "Mix Name", "Quantity"],
        ["01", "M1", 1000],
        ["02", "M1", ""],
    ]
    path = write_table(rows, temp_workdir / "out" / "nested" / "MixImport-Converted.xlsx", "Mix Import")
    assert path.exists()

    wb = load_workbook(path)
    assert wb.sheetnames == ["Mix Import"]
    ws = wb["Mix Import"]
    assert [c.value for c in ws[1]] == ["Plant Code", "Mix Name", "Quantity"]
    assert [c.value for c in ws[2]] == ["01", "M1", 1000]
    # empty strings are written as truly blank cells
    assert ws.cell(row=3, column=3).value is None


def test_write_table_header_only(temp_workdir: Path):
    path = write_table([["A", "B"]], temp_workdir / "empty.xlsx", "Mix Import")
    df = pd.read_excel(path, sheet_name="Mix Import")
    assert list(df.columns) == ["A", "B"]
    assert len(df) == 0


def test_write_table_requires_header(temp_workdir: Path):
    with pytest.raises(ValueError, match="no header row"):
        write_table([], temp_workdir / "x.xlsx", "Mix Import")
