from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Static conversion profiles.

Plant codes, material block counts and the destination column order are
business constants of the target import system. They live here as frozen
configuration objects that are handed to the converters, so another vendor
profile only needs a new instance, not a new pipeline.
"""

__all__ = [
    "DESTINATION_COLUMNS",
    "MaterialType",
    "MaterialBlock",
    "MixProfile",
    "ProjectionProfile",
    "RangeSplit",
    "MPAQ_MIX_PROFILE",
    "COMMAND_SERIES_MIX_PROFILE",
]


# Column order and header text are a contract with the downstream import system.
DESTINATION_COLUMNS: tuple[str, ...] = (
    "Plant Code",
    "Mix Name",
    "Description",
    "Short Description",
    "Item Category",
    "Strength Age (Default 28)",
    "Strength (MPA)",
    "Design Air Content (%)",
    "Min Air Content (%)",
    "Max Air Content (%)",
    "Design Slump (in)",
    "Min Slump (in)",
    "Max Slump (in)",
    "Max Batch Size",
    "Max Water Gallons",
    "Max W/C+P",
    "Max W/C",
    "Mix Class Names, separate with semicolon",
    "Mix Usage",
    "Dispatch Slump Range",
    "Dispatch",
    "Constituent Item Code",
    "Constituent Item Description",
    "Quantity",
    "Unit Name",
)


class MaterialType(Enum):
    """Constituent material families known to the destination system."""
    AGGREGATE = "Aggregate"
    CEMENT = "Cement"
    ADMIXTURE = "Admixture"
    WATER = "Water"


@dataclass(frozen=True)
class MaterialBlock:
    """A numbered group of material slots in a source mix row.

    ``prefix="Agg", count=6`` describes the columns Agg1Id/Agg1Name/Agg1Target
    through Agg6Id/Agg6Name/Agg6Target.
    """
    material_type: MaterialType
    prefix: str
    count: int

    def slot_columns(self, slot: int) -> tuple[str, str, str]:
        return (f"{self.prefix}{slot}Id", f"{self.prefix}{slot}Name", f"{self.prefix}{slot}Target")


@dataclass(frozen=True)
class MixProfile:
    """Configuration for a row-expanding mix converter."""
    name: str
    plant_codes: tuple[str, ...]
    material_blocks: tuple[MaterialBlock, ...]
    columns: tuple[str, ...] = DESTINATION_COLUMNS
    required_columns: tuple[str, ...] = ("MixId", "Name")
    water_column: str = "WaterTarget"
    water_material_id: str = "WATER"
    water_material_name: str = "Water"
    strength_age: int = 28


@dataclass(frozen=True)
class RangeSplit:
    """Split a ``"low-high"`` source cell into two destination columns."""
    source: str
    min_column: str
    max_column: str


@dataclass(frozen=True)
class ProjectionProfile:
    """Configuration for a single-pass column projection converter.

    ``field_map`` maps destination column -> source column. Destination columns
    not mentioned anywhere are written empty.
    """
    name: str
    field_map: dict[str, str]
    ranges: tuple[RangeSplit, ...] = ()
    exclude_when: tuple[str, ...] = ()  # drop row when all of these equal exclude_token
    exclude_token: str = "AIR"
    columns: tuple[str, ...] = DESTINATION_COLUMNS
    defaults: dict[str, object] = field(default_factory=dict)  # used when the source cell is empty


MPAQ_MIX_PROFILE = MixProfile(
    name="MPAQ mixes",
    plant_codes=("01", "02", "03", "05", "06"),
    material_blocks=(
        MaterialBlock(MaterialType.AGGREGATE, "Agg", 6),
        MaterialBlock(MaterialType.CEMENT, "Cem", 4),
        MaterialBlock(MaterialType.ADMIXTURE, "Adm", 8),
    ),
)


COMMAND_SERIES_MIX_PROFILE = ProjectionProfile(
    name="Command Series mixes",
    field_map={
        "Plant Code": "Plant",
        "Mix Name": "Mix Code",
        "Description": "Description",
        "Short Description": "Short Description",
        "Item Category": "Item Category",
        "Strength Age (Default 28)": "Strength Age",
        "Strength (MPA)": "Strength",
        "Design Air Content (%)": "Air Content",
        "Design Slump (in)": "Slump",
        "Max Batch Size": "Max Batch Size",
        "Max Water Gallons": "Max Water",
        "Max W/C+P": "Max W/C+P",
        "Max W/C": "Max W/C",
        "Mix Class Names, separate with semicolon": "Mix Class",
        "Mix Usage": "Mix Usage",
        "Dispatch Slump Range": "Slump Range",
        "Dispatch": "Dispatch",
        "Constituent Item Code": "Material Code",
        "Constituent Item Description": "Material Description",
        "Quantity": "Quantity",
        "Unit Name": "Unit",
    },
    ranges=(
        RangeSplit("Air Range", "Min Air Content (%)", "Max Air Content (%)"),
        RangeSplit("Slump Range", "Min Slump (in)", "Max Slump (in)"),
    ),
    exclude_when=("Material Code", "Material Description"),
    defaults={"Strength Age (Default 28)": 28},
)
