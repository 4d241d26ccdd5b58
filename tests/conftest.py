# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from imigrate.logging.init import LOGGER_NAME, reset_logging

MIX_HEADER = [
    "MixId", "Name", "ExternalId", "AirFactor", "Slump", "WaterTarget",
    "Agg1Id", "Agg1Name", "Agg1Target",
    "Agg2Id", "Agg2Name", "Agg2Target",
    "Cem1Id", "Cem1Name", "Cem1Target",
    "Adm1Id", "Adm1Name", "Adm1Target",
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()
    # drop handlers bound to the captured stdout of the finished test
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture()
def mix_table() -> list[list[object]]:
    """Three mixes: M1 (4 materials + water), M2 (no water, filtered), M3 (2 materials + water)."""
    return [
        list(MIX_HEADER),
        ["M1", "25 MPA 20mm", "CAT-A", 6.5, "Slump '80'mm", 160,
         "A10", "Stone 20mm", 1000, "A20", "Sand", 800,
         "C1", "GU Cement", 350, "AD1", "Air Entrainer", 45],
        ["M2", "Special Mix", None, None, "Slump 100mm", "0",
         "A10", "Stone 20mm", 900, None, None, None,
         "C1", "GU Cement", 300, None, None, None],
        ["M3", "32.5 MPA", None, None, "75", "150",
         "A10", "Stone 20mm", "1100", None, None, None,
         "C1", "GU Cement", "400", "AD2", "Fly Ash", 0],
    ]


@pytest.fixture()
def materials_table() -> list[list[object]]:
    return [
        ["Item Code", "Material Type (Required)", "Description", "Production Item Code"],
        ["1", "Stone 20mm", "20mm stone", "P-STONE20"],
        ["2", " GU Cement ", "cement", " P-GU "],
        ["3", "GU Cement", "duplicate", "P-GU-DUP"],
        ["4", "Sand", "no code yet", None],
    ]


def write_xlsx(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


def write_csv(path: Path, rows: list[list[object]]) -> Path:
    pd.DataFrame(rows).to_csv(path, header=False, index=False)
    return path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """dispatch_system: MPAQ
entity_type: mixes
input_files:
  - ./data/mix-list.csv
  - ./data/materials.xlsx
output_directory: ./output
customer_name: Acme Concrete
keep_na_strings: [NA]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "imigrate.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def input_files(temp_workdir: Path, mix_table, materials_table) -> list[Path]:
    """The mix list as CSV and the materials lookup as a two-sheet workbook."""
    mix = write_csv(temp_workdir / "data" / "mix-list.csv", mix_table)
    materials = write_xlsx(
        temp_workdir / "data" / "materials.xlsx",
        {"Instructions": [["fill in the next sheet"]], "Materials": materials_table},
    )
    return [mix, materials]
