from __future__ import annotations

import logging
from collections.abc import Sequence

from imigrate.models.conversion_result import ConversionOutput, UnresolvedMaterial
from imigrate.models.mix_record import Constituent, MaterialSlot, SourceMixRecord
from imigrate.models.profile import MPAQ_MIX_PROFILE, MaterialType, MixProfile
from imigrate.models.table import Cell, Row, Table, header_index

from .errors import EmptyInputError, MissingRequiredColumnsError, NoValidRowsError
from .extractors import (
    coerce_quantity,
    extract_slump,
    extract_strength,
    is_empty_value,
    is_zero_or_empty,
    leading_number,
    unit_for_material_type,
)
from .lookup import build_materials_lookup
from .registry import EntityType, register

"""MPAQ mix export -> destination mix import.

Inputs:
  1. the MPAQ mix list (one row per mix, material blocks Agg1..6, Cem1..4,
     Adm1..8 spread over columns)
  2. optionally, a completed materials import file used to turn material
     names into production item codes

Pipeline: parse records -> keep mixes with WaterTarget > 0 -> derive
constituents (+ one Water line) -> fan out over every plant code ->
resolve item codes. One output row per (mix, plant, constituent).
"""

__all__ = [
    "MpaqMixConverter",
    "convert_mpaq_mixes",
    "parse_mix_records",
    "derive_constituents",
]

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50


def _cell(row: Row, index: dict[str, int], column: str) -> Cell:
    pos = index.get(column)
    if pos is None or pos >= len(row):
        return None
    return row[pos]


def _blank(value: Cell) -> Cell:
    return "" if is_empty_value(value) else value


def parse_mix_records(mix_table: Table, profile: MixProfile = MPAQ_MIX_PROFILE) -> list[SourceMixRecord]:
    """Turn header + data rows into SourceMixRecords.

    Raises:
        EmptyInputError: table has no rows
        MissingRequiredColumnsError: header lacks a required column (MixId, Name)
    """
    if not mix_table:
        raise EmptyInputError("Mix data is empty")

    index = header_index(mix_table[0])
    missing = [c for c in profile.required_columns if c not in index]
    if missing:
        raise MissingRequiredColumnsError(missing)

    records: list[SourceMixRecord] = []
    for row_number, row in enumerate(mix_table[1:], start=1):
        slots: list[MaterialSlot] = []
        for block in profile.material_blocks:
            for slot in range(1, block.count + 1):
                id_col, name_col, target_col = block.slot_columns(slot)
                slots.append(
                    MaterialSlot(
                        material_type=block.material_type,
                        slot=slot,
                        material_id=_cell(row, index, id_col),
                        material_name=_cell(row, index, name_col),
                        target=_cell(row, index, target_col),
                    )
                )
        records.append(
            SourceMixRecord(
                row_number=row_number,
                mix_id=_cell(row, index, "MixId"),
                name=_cell(row, index, "Name"),
                water_target=_cell(row, index, profile.water_column),
                external_id=_cell(row, index, "ExternalId"),
                air_factor=_cell(row, index, "AirFactor"),
                slump=_cell(row, index, "Slump"),
                slots=tuple(slots),
            )
        )
    return records


def has_water(record: SourceMixRecord) -> bool:
    """A mix is valid only when WaterTarget starts with a number strictly above zero."""
    if is_zero_or_empty(record.water_target):
        return False
    number = leading_number(record.water_target)
    return number is not None and number > 0


def derive_constituents(record: SourceMixRecord, profile: MixProfile = MPAQ_MIX_PROFILE) -> list[Constituent]:
    """Material lines of a mix, in slot order, followed by Water."""
    constituents = [
        Constituent(s.material_type, s.material_id, s.material_name, s.target)
        for s in record.slots
        if not is_empty_value(s.material_id) and not is_zero_or_empty(s.target)
    ]
    if not is_zero_or_empty(record.water_target):
        constituents.append(
            Constituent(
                MaterialType.WATER,
                profile.water_material_id,
                profile.water_material_name,
                record.water_target,
            )
        )
    return constituents


class MpaqMixConverter:
    """Row-expanding converter driven by a MixProfile."""

    dispatch_system = "MPAQ"
    entity_type = EntityType.MIXES

    def __init__(self, profile: MixProfile = MPAQ_MIX_PROFILE) -> None:
        self.profile = profile

    def convert(self, primary_table: Table, auxiliary_tables: Sequence[Table] = ()) -> ConversionOutput:
        """Convert an MPAQ mix table; auxiliary_tables[0], if given, is the materials file."""
        profile = self.profile
        logger.info(f"{profile.name}: {len(primary_table)} mix rows (header included)")

        if not primary_table:
            raise EmptyInputError("Mix data is empty")

        materials_table = auxiliary_tables[0] if auxiliary_tables else None
        lookup = build_materials_lookup(materials_table)
        if not lookup:
            logger.warning("no materials lookup available -> using raw material IDs")

        records = parse_mix_records(primary_table, profile)
        valid = [r for r in records if has_water(r)]
        logger.info(f"filtered to {len(valid)}/{len(records)} valid mixes ({profile.water_column} > 0)")
        if not valid:
            raise NoValidRowsError(f"No valid mixes found with {profile.water_column} > 0")

        out: Table = [list(profile.columns)]
        unresolved: dict[str, UnresolvedMaterial] = {}

        for n, record in enumerate(valid, start=1):
            base = self._base_cells(record)
            constituents = derive_constituents(record, profile)
            lines = [self._constituent_cells(record, c, lookup, unresolved) for c in constituents]
            # plant codes outer, constituents inner: a plant's lines stay contiguous
            for plant in profile.plant_codes:
                for line in lines:
                    cells = {"Plant Code": plant, **base, **line}
                    out.append([cells.get(col, "") for col in profile.columns])
            if n % PROGRESS_EVERY == 0:
                logger.debug(f"processed {n}/{len(valid)} valid mixes")

        logger.info(f"conversion complete: {len(out) - 1} output rows")
        return ConversionOutput(
            rows=out,
            source_records=len(records),
            valid_records=len(valid),
            unresolved=list(unresolved.values()),
            lookup_size=len(lookup),
        )

    def _base_cells(self, record: SourceMixRecord) -> dict[str, Cell]:
        strength = extract_strength(record.name)
        slump = extract_slump(record.slump)
        return {
            "Mix Name": _blank(record.mix_id),
            "Description": _blank(record.name),
            "Short Description": _blank(record.mix_id),
            "Item Category": _blank(record.external_id),
            "Strength Age (Default 28)": self.profile.strength_age,
            "Strength (MPA)": _blank(strength),
            "Design Air Content (%)": coerce_quantity(record.air_factor),
            # millimetres, despite the "(in)" header
            "Design Slump (in)": _blank(slump),
            "Max Water Gallons": coerce_quantity(record.water_target),
        }

    def _constituent_cells(
        self,
        record: SourceMixRecord,
        constituent: Constituent,
        lookup: dict[str, str],
        unresolved: dict[str, UnresolvedMaterial],
    ) -> dict[str, Cell]:
        name = "" if is_empty_value(constituent.material_name) else str(constituent.material_name).strip()
        code: Cell = constituent.material_id
        if name and name in lookup:
            code = lookup[name]
            logger.debug(f"mapped {name} ({constituent.material_id}) -> {code}")
        elif name and constituent.material_type is not MaterialType.WATER and name not in unresolved:
            logger.warning(f"no lookup found for material: {name} (ID: {constituent.material_id})")
            unresolved[name] = UnresolvedMaterial(
                material_name=name,
                material_id=constituent.material_id,
                mix_id=record.mix_id,
                row_number=record.row_number,
            )
        return {
            "Constituent Item Code": code,
            "Constituent Item Description": _blank(constituent.material_name),
            "Quantity": coerce_quantity(constituent.quantity),
            "Unit Name": unit_for_material_type(constituent.material_type),
        }


register(MpaqMixConverter())


def convert_mpaq_mixes(mix_table: Table, materials_table: Table | None = None) -> Table:
    """Convert an MPAQ mix table to the destination schema (header row included)."""
    auxiliary = [materials_table] if materials_table is not None else []
    return MpaqMixConverter().convert(mix_table, auxiliary).rows
