"""Parser for gzip-compressed tiny v1 mapping files (``*-tiny.gz``)."""

from __future__ import annotations

import gzip
import logging
from typing import List

from ..errors import MappingFormatError, PersistenceError
from ..models import ArtifactGeneration, EntryKind, MappingEntry
from .base import MappingParser, build_entry, scheme_columns

logger = logging.getLogger(__name__)

_KINDS = {
    "CLASS": EntryKind.CLASS,
    "METHOD": EntryKind.METHOD,
    "FIELD": EntryKind.FIELD,
}


class TinyV1Parser(MappingParser):
    """Reads ``v1\\t<namespaces...>`` files.

    Rows are ``CLASS\\t<names>`` or ``METHOD|FIELD\\t<owner>\\t<desc>\\t<names>``.
    """

    @property
    def generation(self) -> ArtifactGeneration:
        return ArtifactGeneration.V1

    def parse(self, path: str, version: str) -> List[MappingEntry]:
        try:
            with gzip.open(path, "rt", encoding="utf-8") as fh:
                return self.parse_lines(fh, path)
        except (OSError, EOFError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Could not read tiny v1 mappings for {version}: {exc}", path=path) from exc

    def parse_lines(self, lines, path: str = "<memory>") -> List[MappingEntry]:
        """Parse an iterable of text lines."""
        lines = iter(lines)
        header = next(lines, "").rstrip("\r\n").split("\t")
        if not header or header[0] != "v1" or len(header) < 2:
            raise MappingFormatError("Missing tiny v1 header", path=path)
        columns = scheme_columns(header[1:])

        entries: List[MappingEntry] = []
        for lineno, line in enumerate(lines, start=2):
            line = line.rstrip("\r\n")
            if not line or line.startswith("#"):
                continue
            parts = line.split("\t")
            kind = _KINDS.get(parts[0])
            if kind is None:
                # other row types (e.g. comments) carry no symbol names
                continue
            if kind is EntryKind.CLASS:
                entries.append(build_entry(kind, columns, parts[1:]))
            else:
                if len(parts) < 4:
                    raise MappingFormatError(f"Truncated {parts[0]} row at line {lineno}", path=path)
                entries.append(
                    build_entry(kind, columns, parts[3:], owner=parts[1], descriptor=parts[2])
                )
        logger.debug("Parsed %d tiny v1 entries from %s", len(entries), path)
        return entries
