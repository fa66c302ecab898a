"""Keeps the mapping cache of each product version in step with the latest Yarn build.

``ensure_fresh`` decides, per product version, between doing nothing,
reparsing the artifact already on disk, and downloading a newer build. Remote
checks are throttled per version, and the whole sequence runs under a
per-version lock so two callers never recreate the same directory at once.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional, Sequence

from .cache import MappingCache
from .common.logging_utils import extra_context, is_debug_enabled, Timer
from .constants import Constants
from .errors import NoSuchVersionError
from .fetcher import ArtifactFetcher
from .models import MappingEntry, VersionDescriptor
from .parsers import detect_format, parser_for
from .resolver import RemoteVersionResolver
from .store import VersionStore

logger = logging.getLogger(__name__)


class RefreshCoordinator:
    """Download-if-needed logic shared by every query path."""

    def __init__(
        self,
        cache: MappingCache,
        store: VersionStore,
        resolver: Optional[RemoteVersionResolver] = None,
        fetcher: Optional[ArtifactFetcher] = None,
        refresh_interval: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._cache = cache
        self._store = store
        self._resolver = resolver or RemoteVersionResolver()
        self._fetcher = fetcher or ArtifactFetcher()
        self._interval = (
            refresh_interval if refresh_interval is not None else Constants.REFRESH_INTERVAL_SEC
        )
        self._clock = clock
        self._last_checked: Dict[str, float] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, version: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(version)
            if lock is None:
                lock = self._locks[version] = threading.Lock()
            return lock

    def last_checked(self, version: str) -> Optional[float]:
        """When ``version`` last completed a refresh pass, or None."""
        return self._last_checked.get(version)

    def ensure_fresh(self, version: str, force: bool = False) -> None:
        """Make sure the cache holds the latest build's mappings for ``version``.

        Concurrent callers for the same version wait for the refresh in
        flight and then usually find nothing left to do.

        Args:
            version: Product version, e.g. "1.20.1".
            force: Skip the per-version throttle and check the remote build.

        Raises:
            NoSuchVersionError: If no Yarn builds exist for ``version``.
            TransportError: On network failure.
            PersistenceError: On filesystem failure or an unreadable artifact.
        """
        with self._lock_for(version):
            self._ensure_locked(version, force)

    def snapshot(self, version: str, force: bool = False) -> Sequence[MappingEntry]:
        """Refresh ``version`` if needed and return its cached mappings.

        The cache is read while the version's lock is still held, so a
        caller never sees the gap between invalidation and repopulation of
        a concurrent refresh.

        Raises:
            NoSuchVersionError: If no mappings are available for ``version``.
            TransportError: On network failure.
            PersistenceError: On filesystem failure or an unreadable artifact.
        """
        with self._lock_for(version):
            self._ensure_locked(version, force)
            entries = self._cache.get(version)
        if entries is None:
            raise NoSuchVersionError(version)
        return entries

    def _ensure_locked(self, version: str, force: bool) -> None:
        with Timer() as t:
            action = self._refresh(version, force)
        self._last_checked[version] = self._clock()
        if is_debug_enabled(logger):
            logger.debug(
                "Refresh pass complete",
                extra=extra_context(
                    event="refresh",
                    component="coordinator",
                    action=action,
                    outcome="success",
                    duration_ms=t.duration_ms(),
                    target=version,
                )
            )

    def _refresh(self, version: str, force: bool) -> str:
        last = self._last_checked.get(version)
        if not force and last is not None and self._clock() - last < self._interval:
            if version in self._cache:
                return "throttled"
            record = self._store.load(version)
            if record is not None and self._load_local(version, record):
                return "throttled_reload"

        current = self._store.load(version)
        remote = self._resolver.latest(version)
        if remote.same_build(current):
            if version in self._cache:
                return "up_to_date"
            if self._load_local(version, current):
                return "reload"
            logger.warning("Artifact for %s build %s missing on disk, downloading again", version, remote.build)
        elif current is not None:
            logger.info("New Yarn build for %s: %s -> %s", version, current.build, remote.build)
        self._redownload(version, remote)
        return "download"

    def _load_local(self, version: str, record: VersionDescriptor) -> bool:
        """Parse the artifact already on disk into the cache; False if none is there."""
        found = detect_format(self._store.directory(version), record)
        if found is None:
            return False
        parser, path = found
        entries = parser.parse(path, version)
        self._cache.put(version, entries)
        logger.info("Loaded %d mappings for %s from %s", len(entries), version, path)
        return True

    def _redownload(self, version: str, remote: VersionDescriptor) -> None:
        # fetch deletes the directory, and the record file with it, before it
        # writes anything, so the in-memory record must not outlive that.
        self._store.forget(version)
        generation, path = self._fetcher.fetch(remote, self._store.directory(version))
        self._cache.invalidate(version)
        entries = parser_for(generation).parse(path, version)
        self._cache.put(version, entries)
        self._store.save(version, remote)
        logger.info(
            "Cached %d mappings for %s (build %s, %s)",
            len(entries), version, remote.build, generation.classifier,
        )
