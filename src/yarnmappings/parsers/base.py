"""Abstract base for mapping artifact parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from ..models import ArtifactGeneration, EntryKind, MappingEntry, NamingScheme


class MappingParser(ABC):
    """Turns one downloaded artifact into an ordered list of mapping entries."""

    @property
    @abstractmethod
    def generation(self) -> ArtifactGeneration:
        """Artifact generation this parser reads."""

    @abstractmethod
    def parse(self, path: str, version: str) -> List[MappingEntry]:
        """Parse the artifact at ``path`` published for product ``version``.

        Raises:
            MappingFormatError: If the artifact is not valid mapping data.
            PersistenceError: If the file cannot be read.
        """


def scheme_columns(namespaces: Sequence[str]) -> List[Optional[NamingScheme]]:
    """Map header namespace columns to schemes, None for unknown columns."""
    return [NamingScheme.from_namespace(ns) for ns in namespaces]


def build_entry(
    kind: EntryKind,
    columns: Sequence[Optional[NamingScheme]],
    names: Sequence[str],
    owner: Optional[str] = None,
    descriptor: Optional[str] = None,
) -> MappingEntry:
    """Create an entry from per-namespace names; missing or empty names are absent."""
    by_scheme: Dict[str, Optional[str]] = {}
    for scheme, name in zip(columns, names):
        if scheme is not None and name:
            by_scheme[scheme.name.lower()] = name
    return MappingEntry(
        kind=kind,
        obfuscated=by_scheme.get("obfuscated"),
        intermediary=by_scheme.get("intermediary"),
        named=by_scheme.get("named"),
        owner=owner,
        descriptor=descriptor,
    )
