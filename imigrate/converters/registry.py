from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Protocol

from imigrate.models.conversion_result import ConversionOutput
from imigrate.models.table import Table

from .errors import UnimplementedFormatError

"""Converter registry.

A converter is selected by (dispatch system, entity type). Converters
register themselves at import time; see imigrate.converters.__init__.
"""

__all__ = [
    "DISPATCH_SYSTEMS",
    "EntityType",
    "Converter",
    "register",
    "get_converter",
    "registered_pairs",
    "output_sheet_name",
]

logger = logging.getLogger(__name__)

DISPATCH_SYSTEMS: tuple[str, ...] = (
    "BCMI",
    "Command Cloud",
    "Command Series",
    "Integra",
    "Jonel",
    "MPAQ",
    "Simma",
    "SysDyne",
    "WMC",
)


class EntityType(Enum):
    MATERIALS = "materials"
    MIXES = "mixes"

    @property
    def label(self) -> str:
        return "Material" if self is EntityType.MATERIALS else "Mix"

    @property
    def max_files(self) -> int:
        # upload limits: mix file + materials lookup, or up to five material files
        return 5 if self is EntityType.MATERIALS else 2


class Converter(Protocol):
    dispatch_system: str
    entity_type: EntityType

    def convert(self, primary_table: Table, auxiliary_tables: Sequence[Table] = ()) -> ConversionOutput:
        ...


_REGISTRY: dict[tuple[str, EntityType], Converter] = {}


def _entity(entity_type: EntityType | str) -> EntityType:
    if isinstance(entity_type, EntityType):
        return entity_type
    try:
        return EntityType(str(entity_type).strip().lower())
    except ValueError as e:
        raise UnimplementedFormatError(f"Unknown entity type: {entity_type}") from e


def register(converter: Converter) -> Converter:
    key = (converter.dispatch_system, converter.entity_type)
    if converter.dispatch_system not in DISPATCH_SYSTEMS:
        raise ValueError(f"unknown dispatch system: {converter.dispatch_system}")
    _REGISTRY[key] = converter
    return converter


def get_converter(dispatch_system: str, entity_type: EntityType | str) -> Converter:
    """Return the converter for a (dispatch system, entity type) pair.

    Raises:
        UnimplementedFormatError: unknown dispatch system / entity type, or a
            known pair that has no converter yet
    """
    entity = _entity(entity_type)
    if dispatch_system not in DISPATCH_SYSTEMS:
        raise UnimplementedFormatError(f"Unknown dispatch system: {dispatch_system}")
    converter = _REGISTRY.get((dispatch_system, entity))
    if converter is None:
        raise UnimplementedFormatError(
            f"{entity.label} conversion for {dispatch_system} is not yet implemented."
        )
    logger.debug(f"converter selected: {dispatch_system}/{entity.value} -> {type(converter).__name__}")
    return converter


def registered_pairs() -> list[tuple[str, str]]:
    return sorted((system, entity.value) for system, entity in _REGISTRY)


def output_sheet_name(entity_type: EntityType | str) -> str:
    """Sheet name of the output workbook: Mix Import or Material Import."""
    return f"{_entity(entity_type).label} Import"
