from __future__ import annotations

"""Conversion failure taxonomy.

All fatal conditions derive from ConversionError and carry an UPPER_SNAKE
``error_type`` used for the diagnostic trail. An unresolved material lookup
is not an exception: see models.conversion_result.UnresolvedMaterial.
"""

__all__ = [
    "ConversionError",
    "EmptyInputError",
    "MissingRequiredColumnsError",
    "NoValidRowsError",
    "UnimplementedFormatError",
]


class ConversionError(Exception):
    """Base exception for fatal conversion errors."""
    error_type = "CONVERSION_ERROR"


class EmptyInputError(ConversionError):
    """Raised when the primary table has no rows at all."""
    error_type = "EMPTY_INPUT"


class MissingRequiredColumnsError(ConversionError):
    """Raised when the primary table header lacks identifying columns."""
    error_type = "MISSING_REQUIRED_COLUMNS"

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        cols = " and ".join(f"'{c}'" for c in missing)
        super().__init__(f"Input file must contain {cols} column{'s' if len(missing) > 1 else ''}.")


class NoValidRowsError(ConversionError):
    """Raised when the row filter admits nothing."""
    error_type = "NO_VALID_ROWS"


class UnimplementedFormatError(ConversionError):
    """Raised by the registry for a (dispatch system, entity type) pair without converter."""
    error_type = "UNIMPLEMENTED_FORMAT"
