from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .table import Cell, Table

"""Conversion output and run result models.

ConversionOutput is what a converter returns (pure data, no I/O).
ConversionResult aggregates a whole CLI run for the SUMMARY line.
"""


@dataclass(frozen=True)
class UnresolvedMaterial:
    """A constituent whose name had no entry in the materials lookup.

    Non-fatal: the raw material id was written instead.
    """
    material_name: str
    material_id: Cell
    mix_id: Cell  # first mix that referenced it
    row_number: int  # source data row of that mix


@dataclass(frozen=True)
class ConversionOutput:
    """Destination table plus the diagnostics gathered while producing it."""
    rows: Table  # header row included
    source_records: int = 0  # data rows read from the primary table
    valid_records: int = 0  # rows that survived the filter
    unresolved: list[UnresolvedMaterial] = field(default_factory=list)
    lookup_size: int = 0

    @property
    def data_rows(self) -> int:
        return max(len(self.rows) - 1, 0)


@dataclass(frozen=True)
class ConversionResult:
    """Aggregated result of one run (input files -> one output workbook)."""
    dispatch_system: str
    entity_type: str
    input_files: int
    output: ConversionOutput
    output_path: Path | None
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    rows_modified: int = 0  # by the transformation DSL
    cells_modified: int = 0

    @property
    def degraded(self) -> bool:
        return bool(self.output.unresolved)
