from __future__ import annotations

import logging
from collections.abc import Sequence

from imigrate.models.conversion_result import ConversionOutput
from imigrate.models.profile import ProjectionProfile
from imigrate.models.table import Cell, Row, Table, header_index

from .errors import EmptyInputError
from .extractors import is_empty_value, split_range
from .registry import EntityType

"""Single-pass column projection.

For vendors whose export already has one row per output line: copy named
source columns into destination positions, split "low-high" range cells,
and drop excluded rows. No row expansion, no auxiliary tables.
"""

__all__ = [
    "ProjectionConverter",
]

logger = logging.getLogger(__name__)


class ProjectionConverter:
    def __init__(self, dispatch_system: str, entity_type: EntityType, profile: ProjectionProfile) -> None:
        self.dispatch_system = dispatch_system
        self.entity_type = entity_type
        self.profile = profile

    def convert(self, primary_table: Table, auxiliary_tables: Sequence[Table] = ()) -> ConversionOutput:
        profile = self.profile
        if not primary_table:
            raise EmptyInputError(f"{profile.name}: input data is empty")
        if auxiliary_tables:
            logger.info(f"{profile.name}: {len(auxiliary_tables)} extra file(s) ignored")

        index = header_index(primary_table[0])
        wanted = set(profile.field_map.values()) | {r.source for r in profile.ranges}
        absent = sorted(c for c in wanted if c not in index)
        if absent:
            logger.warning(f"{profile.name}: source columns not found, written empty: {absent}")

        out: Table = [list(profile.columns)]
        excluded = 0
        for row in primary_table[1:]:
            if self._excluded(row, index):
                excluded += 1
                continue
            cells = self._project(row, index)
            out.append([cells.get(col, "") for col in profile.columns])

        source_rows = len(primary_table) - 1
        logger.info(f"{profile.name}: {len(out) - 1}/{source_rows} rows projected, {excluded} excluded")
        return ConversionOutput(rows=out, source_records=source_rows, valid_records=len(out) - 1)

    def _project(self, row: Row, index: dict[str, int]) -> dict[str, Cell]:
        cells: dict[str, Cell] = {}
        for dest, source in self.profile.field_map.items():
            value = _get(row, index, source)
            if is_empty_value(value):
                value = self.profile.defaults.get(dest, "")
            cells[dest] = value
        for split in self.profile.ranges:
            low, high = split_range(_get(row, index, split.source))
            cells[split.min_column] = low
            cells[split.max_column] = high
        return cells

    def _excluded(self, row: Row, index: dict[str, int]) -> bool:
        columns = self.profile.exclude_when
        if not columns:
            return False
        token = self.profile.exclude_token.upper()
        for column in columns:
            value = _get(row, index, column)
            if is_empty_value(value) or str(value).strip().upper() != token:
                return False
        return True


def _get(row: Row, index: dict[str, int], column: str) -> Cell:
    pos = index.get(column)
    if pos is None or pos >= len(row):
        return None
    return row[pos]
