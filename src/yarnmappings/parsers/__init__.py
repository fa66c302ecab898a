"""Mapping artifact parsers and on-disk format detection."""

from __future__ import annotations

import os
from typing import Optional, Tuple

from ..models import ArtifactGeneration, VersionDescriptor
from .base import MappingParser
from .tiny_v1 import TinyV1Parser
from .tiny_v2 import TinyV2Parser

_PARSERS = {
    ArtifactGeneration.V2: TinyV2Parser(),
    ArtifactGeneration.V1: TinyV1Parser(),
}


def parser_for(generation: ArtifactGeneration) -> MappingParser:
    """Return the parser reading artifacts of ``generation``."""
    return _PARSERS[generation]


def detect_format(directory: str, descriptor: VersionDescriptor) -> Optional[Tuple[MappingParser, str]]:
    """Find the artifact of ``descriptor`` in ``directory``.

    The mergedv2 jar wins over the tiny v1 file when both are present.
    Returns None when neither exists.
    """
    for generation in ArtifactGeneration:
        path = os.path.join(directory, descriptor.artifact_filename(generation))
        if os.path.isfile(path):
            return _PARSERS[generation], path
    return None


__all__ = [
    "MappingParser",
    "TinyV1Parser",
    "TinyV2Parser",
    "parser_for",
    "detect_format",
]
