from __future__ import annotations

from dataclasses import dataclass

from .profile import MaterialType
from .table import Cell

"""Source mix records and derived constituents.

A SourceMixRecord is built once per source row at parse time, so the
converter never probes a loose dict for optional keys. Absent source
columns are stored as None.
"""

__all__ = [
    "MaterialSlot",
    "SourceMixRecord",
    "Constituent",
]


@dataclass(frozen=True)
class MaterialSlot:
    """One numbered material block of a mix row (e.g. Agg3)."""
    material_type: MaterialType
    slot: int  # 1-based slot number within its block
    material_id: Cell
    material_name: Cell
    target: Cell


@dataclass(frozen=True)
class SourceMixRecord:
    """A single mix design row from a vendor export."""
    row_number: int  # 1-based data row number (header excluded)
    mix_id: Cell
    name: Cell
    water_target: Cell
    external_id: Cell = None
    air_factor: Cell = None
    slump: Cell = None
    slots: tuple[MaterialSlot, ...] = ()


@dataclass(frozen=True)
class Constituent:
    """A material line of a mix, after slot filtering."""
    material_type: MaterialType
    material_id: Cell
    material_name: Cell
    quantity: Cell
