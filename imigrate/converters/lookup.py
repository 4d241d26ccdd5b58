from __future__ import annotations

import logging

from imigrate.models.table import Row, Table

from .extractors import is_empty_value

"""Materials lookup builder.

The second uploaded file of an MPAQ mix conversion is a completed
materials import sheet. Its column positions vary between customers, so
the two columns needed are found by substring match on the header text.
"""

__all__ = [
    "MATERIAL_TYPE_MARKERS",
    "PRODUCTION_CODE_MARKER",
    "find_lookup_columns",
    "build_materials_lookup",
]

logger = logging.getLogger(__name__)

MATERIAL_TYPE_MARKERS = ("Material Type", "Required")
PRODUCTION_CODE_MARKER = "Production Item Code"


def _find_header(header: Row, *markers: str) -> int | None:
    for pos, cell in enumerate(header):
        text = str(cell) if cell is not None else ""
        if all(m in text for m in markers):
            return pos
    return None


def find_lookup_columns(header: Row) -> tuple[int, int] | None:
    """Locate (material type, production item code) column indexes.

    Matching is case-sensitive substring search. Returns None when either
    column is missing.
    """
    type_idx = _find_header(header, *MATERIAL_TYPE_MARKERS)
    code_idx = _find_header(header, PRODUCTION_CODE_MARKER)
    logger.debug(f"materials lookup columns: material_type={type_idx} production_code={code_idx}")
    if type_idx is None or code_idx is None:
        return None
    return type_idx, code_idx


def build_materials_lookup(materials_table: Table | None) -> dict[str, str]:
    """Build material name -> production item code from a materials table.

    Row 0 is the header. Names and codes are trimmed strings; the first row
    naming a material wins and later duplicates are ignored. A missing table
    or missing columns yield an empty lookup, never an error.
    """
    lookup: dict[str, str] = {}
    if not materials_table:
        return lookup

    columns = find_lookup_columns(materials_table[0])
    if columns is None:
        logger.warning(
            "materials file lacks 'Material Type (Required)' / 'Production Item Code' columns"
            " -> raw material IDs will be used"
        )
        return lookup
    type_idx, code_idx = columns

    for row in materials_table[1:]:
        material_type = row[type_idx] if type_idx < len(row) else None
        code = row[code_idx] if code_idx < len(row) else None
        if _is_blank(material_type) or _is_blank(code):
            continue
        name = str(material_type).strip()
        if name not in lookup:
            lookup[name] = str(code).strip()

    logger.info(f"materials lookup built: {len(lookup)} entries")
    return lookup


def _is_blank(value: object) -> bool:
    # numeric 0 counts as blank, like any other falsy cell
    return is_empty_value(value) or value == 0
