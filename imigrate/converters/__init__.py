"""Vendor export converters.

Importing this package registers every built-in converter with the registry.
"""

from . import command_series_mixes, mpaq_mixes  # noqa: F401  (registration side effect)
from .errors import (
    ConversionError,
    EmptyInputError,
    MissingRequiredColumnsError,
    NoValidRowsError,
    UnimplementedFormatError,
)
from .registry import DISPATCH_SYSTEMS, EntityType, get_converter, output_sheet_name

__all__ = [
    "ConversionError",
    "EmptyInputError",
    "MissingRequiredColumnsError",
    "NoValidRowsError",
    "UnimplementedFormatError",
    "DISPATCH_SYSTEMS",
    "EntityType",
    "get_converter",
    "output_sheet_name",
]
