"""Version-aware download, cache and query layer for Fabric Yarn mappings."""

from .errors import (
    MappingFormatError,
    NoSuchVersionError,
    PersistenceError,
    TransportError,
    YarnMappingsError,
)
from .handler import YarnMappingHandler
from .models import (
    ArtifactGeneration,
    EntryKind,
    MappingEntry,
    MatchMode,
    NamingScheme,
    VersionDescriptor,
)

__all__ = [
    "YarnMappingHandler",
    "EntryKind",
    "NamingScheme",
    "MatchMode",
    "MappingEntry",
    "VersionDescriptor",
    "ArtifactGeneration",
    "YarnMappingsError",
    "NoSuchVersionError",
    "TransportError",
    "PersistenceError",
    "MappingFormatError",
]
