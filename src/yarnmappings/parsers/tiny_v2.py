"""Parser for tiny v2 mappings shipped inside ``*-mergedv2.jar``."""

from __future__ import annotations

import io
import logging
import zipfile
from typing import List, Optional

from ..errors import MappingFormatError, PersistenceError
from ..models import ArtifactGeneration, EntryKind, MappingEntry
from .base import MappingParser, build_entry, scheme_columns

logger = logging.getLogger(__name__)

MAPPINGS_ENTRY = "mappings/mappings.tiny"

_ESCAPES = {"\\": "\\", "n": "\n", "r": "\r", "t": "\t", "0": "\0"}


def unescape(name: str) -> str:
    """Undo tiny v2 name escaping (``\\\\``, ``\\n``, ``\\r``, ``\\t``, ``\\0``)."""
    if "\\" not in name:
        return name
    out = []
    chars = iter(name)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            out.append(_ESCAPES.get(nxt, nxt))
        else:
            out.append(ch)
    return "".join(out)


class TinyV2Parser(MappingParser):
    """Reads ``tiny\\t2\\t<minor>\\t<namespaces...>`` files.

    Classes are ``c`` rows at depth 0; methods (``m``) and fields (``f``) are
    rows at depth 1 carrying a descriptor. Parameters, locals and comments
    are skipped.
    """

    @property
    def generation(self) -> ArtifactGeneration:
        return ArtifactGeneration.V2

    def parse(self, path: str, version: str) -> List[MappingEntry]:
        try:
            with zipfile.ZipFile(path) as jar:
                try:
                    raw = jar.read(MAPPINGS_ENTRY)
                except KeyError as exc:
                    raise MappingFormatError(f"{MAPPINGS_ENTRY} missing from jar", path=path) from exc
        except zipfile.BadZipFile as exc:
            raise MappingFormatError(f"Not a valid jar: {exc}", path=path) from exc
        except OSError as exc:
            raise PersistenceError(f"Could not read mergedv2 jar for {version}: {exc}", path=path) from exc
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MappingFormatError(f"Mappings are not UTF-8: {exc}", path=path) from exc
        return self.parse_lines(io.StringIO(text), path)

    def parse_lines(self, lines, path: str = "<memory>") -> List[MappingEntry]:
        """Parse an iterable of text lines."""
        lines = iter(lines)
        header = next(lines, "").rstrip("\r\n").split("\t")
        if len(header) < 4 or header[0] != "tiny" or header[1] != "2":
            raise MappingFormatError("Missing tiny v2 header", path=path)
        columns = scheme_columns(header[3:])
        width = len(columns)

        escaped = False
        in_header = True
        owner: Optional[str] = None
        entries: List[MappingEntry] = []
        for lineno, line in enumerate(lines, start=2):
            line = line.rstrip("\r\n")
            if not line:
                continue
            depth = len(line) - len(line.lstrip("\t"))
            parts = line[depth:].split("\t")
            if in_header and depth == 1:
                if parts[0] == "escaped-names":
                    escaped = True
                continue
            in_header = False

            if depth == 0:
                if parts[0] != "c":
                    raise MappingFormatError(f"Unexpected row {parts[0]!r} at line {lineno}", path=path)
                names = self._names(parts[1:1 + width], escaped)
                owner = names[0] if names else None
                entries.append(build_entry(EntryKind.CLASS, columns, names))
            elif depth == 1 and parts[0] in ("m", "f"):
                if owner is None or len(parts) < 3:
                    raise MappingFormatError(f"Malformed member row at line {lineno}", path=path)
                kind = EntryKind.METHOD if parts[0] == "m" else EntryKind.FIELD
                descriptor = unescape(parts[1]) if escaped else parts[1]
                names = self._names(parts[2:2 + width], escaped)
                entries.append(build_entry(kind, columns, names, owner=owner, descriptor=descriptor))
            # class comments, parameters and locals carry nothing we index
        logger.debug("Parsed %d tiny v2 entries from %s", len(entries), path)
        return entries

    @staticmethod
    def _names(raw: List[str], escaped: bool) -> List[str]:
        return [unescape(n) for n in raw] if escaped else list(raw)
