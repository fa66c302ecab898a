"""Persisted "last downloaded build" records, one per product version."""

from __future__ import annotations

import json
import logging
import os
import threading
from typing import Dict, Optional

from .constants import Constants
from .errors import PersistenceError
from .models import VersionDescriptor

logger = logging.getLogger(__name__)


class VersionStore:
    """Remembers which build's artifact is on disk for each product version.

    Records are kept in memory and mirrored to
    ``<data_dir>/<version>/.dataversion`` as JSON so a restarted process does
    not redownload artifacts it already has.
    """

    def __init__(self, data_dir: str):
        self._data_dir = data_dir
        self._records: Dict[str, VersionDescriptor] = {}
        self._lock = threading.Lock()

    def directory(self, version: str) -> str:
        """Directory holding the artifact and record of ``version``."""
        return os.path.join(self._data_dir, version)

    def record_path(self, version: str) -> str:
        return os.path.join(self.directory(version), Constants.VERSION_FILE)

    def get(self, version: str) -> Optional[VersionDescriptor]:
        """Return the in-memory record, without touching disk."""
        with self._lock:
            return self._records.get(version)

    def load(self, version: str) -> Optional[VersionDescriptor]:
        """Return the record for ``version``, reading it from disk if not in memory.

        Raises:
            PersistenceError: If the record file exists but cannot be read.
        """
        with self._lock:
            current = self._records.get(version)
            if current is not None:
                return current
            path = self.record_path(version)
            if not os.path.isfile(path):
                return None
            try:
                with open(path, "r", encoding="utf-8") as fh:
                    record = VersionDescriptor.from_dict(json.load(fh))
            except (OSError, ValueError) as exc:
                raise PersistenceError(f"Could not read version record: {exc}", path=path) from exc
            logger.debug("Loaded build %s for %s from %s", record.build, version, path)
            self._records[version] = record
            return record

    def save(self, version: str, record: VersionDescriptor) -> None:
        """Replace the persisted record, then the in-memory one."""
        path = self.record_path(version)
        with self._lock:
            try:
                if os.path.exists(path):
                    os.remove(path)
                with open(path, "x", encoding="utf-8") as fh:
                    json.dump(record.to_dict(), fh)
            except OSError as exc:
                raise PersistenceError(f"Could not write version record: {exc}", path=path) from exc
            self._records[version] = record

    def forget(self, version: str) -> None:
        """Drop the in-memory record; the file on disk is left alone."""
        with self._lock:
            self._records.pop(version, None)
