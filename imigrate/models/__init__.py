"""Domain models for the iMigrate spreadsheet converter.

Tables, static conversion profiles, parsed source records and run results.
"""

from .config_models import ConvertConfig, TransformStep
from .conversion_result import ConversionOutput, ConversionResult, UnresolvedMaterial
from .mix_record import Constituent, MaterialSlot, SourceMixRecord
from .profile import (
    DESTINATION_COLUMNS,
    MaterialBlock,
    MaterialType,
    MixProfile,
    ProjectionProfile,
    RangeSplit,
)
from .table import Cell, Row, Table

__all__ = [
    # Configuration models
    "ConvertConfig",
    "TransformStep",
    # Tabular model
    "Cell",
    "Row",
    "Table",
    # Profiles
    "DESTINATION_COLUMNS",
    "MaterialBlock",
    "MaterialType",
    "MixProfile",
    "ProjectionProfile",
    "RangeSplit",
    # Records
    "Constituent",
    "MaterialSlot",
    "SourceMixRecord",
    # Results
    "ConversionOutput",
    "ConversionResult",
    "UnresolvedMaterial",
]
