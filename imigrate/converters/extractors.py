from __future__ import annotations

import math
import re
from typing import Any

from imigrate.models.profile import MaterialType
from imigrate.models.table import Cell

"""Field extractors: pull typed values out of messy vendor cells.

All functions here are pure. "Empty" results are returned as None and only
become blank destination cells when a row is assembled.
"""

__all__ = [
    "extract_strength",
    "extract_slump",
    "unit_for_material_type",
    "is_empty_value",
    "is_zero_or_empty",
    "to_number",
    "leading_number",
    "coerce_quantity",
    "split_range",
]

_STRENGTH_RE = re.compile(r"^(\d+\.?\d*)")
# 'NN'mm, optionally inside "Slump 'NN'mm"
_SLUMP_QUOTED_RE = re.compile(r"'(\d+)'mm")
_SLUMP_WORD_RE = re.compile(r"Slump\s+(\d+)mm", re.IGNORECASE)
_RANGE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)\s*$")
# leading numeric prefix, as a lenient float parse reads it ("180 L" -> 180)
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

MATERIAL_UNITS = {
    MaterialType.AGGREGATE.value: "kg/m^3",
    MaterialType.CEMENT.value: "kg/m^3",
    MaterialType.ADMIXTURE.value: "mL/100kg CM",
    MaterialType.WATER.value: "L",
}


def is_empty_value(value: Any) -> bool:
    """None, empty string or NaN."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def is_zero_or_empty(value: Any) -> bool:
    """Empty, numeric zero, or the string "0"."""
    if is_empty_value(value):
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    return value == "0"


def to_number(value: Any) -> float | int | None:
    """Return a finite number for ``value`` or None.

    Numbers pass through unchanged; strings are parsed as a whole after
    trimming ("180" -> 180.0, "180 L" -> None).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def leading_number(value: Any) -> float | int | None:
    """Number at the start of ``value`` ("180 L" -> 180.0, "L 180" -> None).

    Numbers pass through like to_number; trailing text after the number is
    ignored.
    """
    if isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value)
        if match is None:
            return None
        number = float(match.group(1))
        return number if math.isfinite(number) else None
    return to_number(value)


def coerce_quantity(value: Cell) -> Cell:
    """Parsed number if possible, otherwise the original value ("" for empty).

    No rounding and no unit conversion.
    """
    if is_empty_value(value):
        return ""
    number = to_number(value)
    return value if number is None else number


def extract_strength(name: Any) -> float | None:
    """Leading decimal number of a mix name ("25 MPA Mix" -> 25.0)."""
    if name is None:
        return None
    match = _STRENGTH_RE.match(str(name))
    if match:
        return float(match.group(1))
    return None


def extract_slump(value: Any) -> float | None:
    """Slump in millimetres from a free-text slump cell.

    Tried in order, first hit wins:
      1. 'NN'mm anywhere in the text
      2. "Slump NNmm" (case-insensitive)
      3. the whole trimmed text as a bare number
    A bare-number parse must come last: it would otherwise accept cells the
    two patterns are meant to isolate.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if math.isfinite(value) else None

    text = str(value)
    match = _SLUMP_QUOTED_RE.search(text)
    if match:
        return float(match.group(1))
    match = _SLUMP_WORD_RE.search(text)
    if match:
        return float(match.group(1))
    number = to_number(text)
    return float(number) if number is not None else None


def unit_for_material_type(material_type: MaterialType | str) -> str:
    """Destination unit name for a constituent type ("" when unknown)."""
    key = material_type.value if isinstance(material_type, MaterialType) else material_type
    return MATERIAL_UNITS.get(key, "")


def split_range(value: Any) -> tuple[Cell, Cell]:
    """Split "10-20" into (10.0, 20.0); anything else gives ("", "")."""
    if is_empty_value(value):
        return ("", "")
    match = _RANGE_RE.match(str(value))
    if not match:
        return ("", "")
    return (float(match.group(1)), float(match.group(2)))
