from __future__ import annotations

from imigrate.models.profile import COMMAND_SERIES_MIX_PROFILE

from .projection import ProjectionConverter
from .registry import EntityType, register

"""Command Series mix export -> destination mix import (one-shot remap)."""

converter = register(ProjectionConverter("Command Series", EntityType.MIXES, COMMAND_SERIES_MIX_PROFILE))
