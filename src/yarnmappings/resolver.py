"""Remote lookup of the newest Yarn build published for a product version."""

from __future__ import annotations

import logging
import urllib.parse
from typing import List, Optional

from .common.http_client import safe_get
from .common.logging_utils import extra_context, is_debug_enabled, safe_url
from .constants import Constants
from .errors import NoSuchVersionError, TransportError
from .models import VersionDescriptor

logger = logging.getLogger(__name__)


class RemoteVersionResolver:
    """Client for the Fabric metadata service."""

    def __init__(self, meta_url: Optional[str] = None):
        self._meta_url = (meta_url or Constants.META_URL).rstrip("/")

    def versions_url(self, version: str) -> str:
        return f"{self._meta_url}/versions/mappings/{urllib.parse.quote(version, safe='')}/"

    def fetch_all(self, version: str) -> List[VersionDescriptor]:
        """Return every published build for ``version``, newest first.

        Raises:
            TransportError: On network failure, non-200 status or invalid JSON.
        """
        url = self.versions_url(version)
        res = safe_get(url, context="meta", headers={"Accept": "application/json"})
        if res.status_code != 200:
            logger.warning(
                "HTTP non-2xx from metadata service",
                extra=extra_context(
                    event="http_response",
                    component="resolver",
                    outcome="handled_non_2xx",
                    status_code=res.status_code,
                    target=safe_url(url),
                )
            )
            raise TransportError(
                f"Metadata service returned HTTP {res.status_code}",
                url=safe_url(url),
                status_code=res.status_code,
            )
        try:
            payload = res.json()
            if not isinstance(payload, list):
                raise ValueError("expected a JSON array")
            return [VersionDescriptor.from_dict(item) for item in payload]
        except ValueError as exc:
            raise TransportError(
                f"Invalid metadata response: {exc}", url=safe_url(url), status_code=res.status_code
            ) from exc

    def latest(self, version: str) -> VersionDescriptor:
        """Return the newest published build for ``version``.

        Raises:
            NoSuchVersionError: If no builds exist for ``version``.
            TransportError: If the metadata service cannot be queried.
        """
        builds = self.fetch_all(version)
        if not builds:
            raise NoSuchVersionError(version)
        newest = builds[0]
        if is_debug_enabled(logger):
            logger.debug(
                "Resolved latest build",
                extra=extra_context(
                    event="function_exit",
                    component="resolver",
                    action="latest",
                    outcome="success",
                    target=version,
                    build=newest.build,
                )
            )
        return newest
