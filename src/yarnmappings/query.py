"""Filtering of cached mapping lists by kind, naming scheme and match mode."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cache import MappingCache
from .errors import NoSuchVersionError
from .models import EntryKind, MappingEntry, MatchMode, NamingScheme, matches


class QueryEngine:
    """Reads from a MappingCache; never triggers a refresh itself."""

    def __init__(self, cache: MappingCache):
        self._cache = cache

    def query(
        self,
        scheme: Optional[NamingScheme],
        kind: EntryKind,
        version: str,
        text: str,
        mode: MatchMode,
    ) -> List[MappingEntry]:
        """Return the cached entries of ``version`` matching the filter.

        Raises:
            NoSuchVersionError: If nothing is cached for ``version``.
        """
        entries = self._cache.get(version)
        if entries is None:
            raise NoSuchVersionError(version)
        return self.filter(entries, scheme, kind, text, mode)

    @staticmethod
    def filter(
        entries: Iterable[MappingEntry],
        scheme: Optional[NamingScheme],
        kind: EntryKind,
        text: str,
        mode: MatchMode,
    ) -> List[MappingEntry]:
        """Apply the kind / scheme / match filter to a mapping list.

        With ``scheme`` None every scheme is tried and an entry is returned
        once per scheme that matches, so a hit through two schemes appears
        twice. Results keep the input order.
        """
        schemes = list(NamingScheme) if scheme is None else [scheme]
        results: List[MappingEntry] = []
        for entry in entries:
            if entry.kind is not kind:
                continue
            for candidate in schemes:
                value = candidate.get(entry)
                if value is not None and matches(mode, value, text):
                    results.append(entry)
        return results
