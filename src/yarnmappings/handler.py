"""Public lookup surface for Yarn mappings."""

from __future__ import annotations

import logging
import os
import time
from typing import Callable, List, Optional

from .cache import MappingCache
from .constants import Constants
from .coordinator import RefreshCoordinator
from .fetcher import ArtifactFetcher
from .models import EntryKind, MappingEntry, MatchMode, NamingScheme
from .query import QueryEngine
from .resolver import RemoteVersionResolver
from .store import VersionStore

logger = logging.getLogger(__name__)


class YarnMappingHandler:
    """Answers mapping lookups, refreshing downloaded data when it is stale.

    Safe to share between threads.
    """

    def __init__(
        self,
        data_dir: Optional[str] = None,
        *,
        resolver: Optional[RemoteVersionResolver] = None,
        fetcher: Optional[ArtifactFetcher] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.data_dir = data_dir or Constants.DATA_DIR
        self.cache = MappingCache(clock=clock)
        self.store = VersionStore(self.data_dir)
        self.coordinator = RefreshCoordinator(
            self.cache,
            self.store,
            resolver=resolver,
            fetcher=fetcher,
            clock=clock,
        )
        self.engine = QueryEngine(self.cache)

    def refresh(self, version: str, force: bool = False) -> None:
        """Download or reload mappings for ``version`` if needed."""
        os.makedirs(self.data_dir, exist_ok=True)
        self.coordinator.ensure_fresh(version, force=force)

    def lookup(
        self,
        kind: EntryKind,
        version: str,
        text: str,
        scheme: Optional[NamingScheme] = None,
    ) -> List[MappingEntry]:
        """Entries of ``kind`` whose name ends with ``text`` (case-sensitive).

        Without ``scheme`` every naming scheme is searched.

        Raises:
            NoSuchVersionError: If ``version`` has no mappings.
        """
        return self._lookup(scheme, kind, version, text, MatchMode.SUFFIX)

    def lookup_exact(
        self,
        scheme: Optional[NamingScheme],
        kind: EntryKind,
        version: str,
        text: str,
    ) -> List[MappingEntry]:
        """Entries of ``kind`` whose name equals ``text``, ignoring case."""
        return self._lookup(scheme, kind, version, text, MatchMode.EXACT)

    def _lookup(self, scheme, kind, version, text, mode) -> List[MappingEntry]:
        os.makedirs(self.data_dir, exist_ok=True)
        # Filter the list read under the refresh lock, not a fresh cache read,
        # so a concurrent redownload cannot make the version look missing.
        entries = self.coordinator.snapshot(version)
        results = self.engine.filter(entries, scheme, kind, text, mode)
        logger.debug(
            "%s %s lookup for %r in %s: %d hits",
            mode.value, kind.value, text, version, len(results),
        )
        return results
