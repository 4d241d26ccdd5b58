from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Config dataclasses for the iMigrate converter.

The YAML run configuration is validated by imigrate.config.loader and then
turned into these frozen objects. Business constants (plant codes, columns)
are deliberately absent: they belong to the profiles in models.profile.
"""

CUSTOMER_NAME_MAX = 16


@dataclass(frozen=True)
class TransformStep:
    """One operation of the table transformation DSL.

    ``op`` is one of set_column / map_column / filter_rows / rename_header;
    ``params`` holds the remaining keys of the YAML mapping as given.
    """
    op: str
    column: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ConvertConfig:
    """Root configuration object for one conversion run."""
    dispatch_system: str  # e.g. "MPAQ"
    entity_type: str  # "mixes" | "materials"
    input_files: list[str]  # primary file first, auxiliary files after
    output_directory: str = "./output"
    customer_name: str = ""
    keep_na_strings: list[str] | None = None  # strings pandas must not turn into NaN
    transforms: list[TransformStep] = field(default_factory=list)

    @property
    def customer_prefix(self) -> str:
        """Customer name as used in the output file name (trimmed, max 16 chars)."""
        return self.customer_name.strip()[:CUSTOMER_NAME_MAX].strip()
