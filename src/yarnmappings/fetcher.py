"""Download of Yarn artifacts, preferring the mergedv2 jar over tiny v1."""

from __future__ import annotations

import logging
import os
import shutil
from typing import Optional, Tuple

import requests

from .common.http_client import safe_get
from .common.logging_utils import extra_context, safe_url, Timer
from .constants import Constants
from .errors import FormatUnavailableError, PersistenceError, TransportError
from .models import ArtifactGeneration, VersionDescriptor

logger = logging.getLogger(__name__)


def _discard(path: str) -> None:
    """Remove a partial download; a failure here must not mask the original error."""
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError as exc:
        logger.warning("Could not remove partial download %s: %s", path, exc)


class ArtifactFetcher:
    """Fetches one build's artifact into a freshly recreated directory."""

    def __init__(self, maven_url: Optional[str] = None):
        self._maven_url = maven_url or Constants.MAVEN_URL

    def _open(self, url: str, generation: ArtifactGeneration) -> requests.Response:
        res = safe_get(url, context="maven", stream=True)
        if 200 <= res.status_code < 300:
            return res
        res.close()
        if generation is ArtifactGeneration.V2 and res.status_code in Constants.FORMAT_UNAVAILABLE_CODES:
            raise FormatUnavailableError(
                f"No {generation.classifier} artifact (HTTP {res.status_code})",
                url=safe_url(url),
                status_code=res.status_code,
            )
        raise TransportError(
            f"Artifact download failed with HTTP {res.status_code}",
            url=safe_url(url),
            status_code=res.status_code,
        )

    def fetch(self, descriptor: VersionDescriptor, target_dir: str) -> Tuple[ArtifactGeneration, str]:
        """Download the artifact of ``descriptor`` into ``target_dir``.

        The directory is deleted and recreated once a download has started, so
        only the new artifact remains in it.

        Returns:
            The generation downloaded and the path of the written file.

        Raises:
            TransportError: On network failure or an unexpected status code.
            PersistenceError: If the directory or file cannot be written.
        """
        generation = ArtifactGeneration.V2
        url = descriptor.maven_url(self._maven_url, generation)
        try:
            res = self._open(url, generation)
        except FormatUnavailableError as exc:
            logger.info(
                "mergedv2 mappings unavailable for %s (HTTP %s), falling back to tiny v1",
                descriptor.maven,
                exc.status_code,
            )
            generation = ArtifactGeneration.V1
            url = descriptor.maven_url(self._maven_url, generation)
            res = self._open(url, generation)

        file_name = url.rsplit("/", 1)[-1]
        path = os.path.join(target_dir, file_name)
        # Written under a temporary name so a broken stream never leaves a
        # file that format detection would pick up.
        partial = path + ".part"
        with Timer() as t, res:
            try:
                if os.path.exists(target_dir):
                    shutil.rmtree(target_dir)
                os.makedirs(target_dir)
                with open(partial, "wb") as out:
                    for chunk in res.iter_content(chunk_size=Constants.DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            out.write(chunk)
                os.replace(partial, path)
            # requests exceptions subclass OSError, so they must be caught first
            except requests.RequestException as exc:
                _discard(partial)
                raise TransportError(f"Artifact download interrupted: {exc}", url=safe_url(url)) from exc
            except OSError as exc:
                _discard(partial)
                raise PersistenceError(f"Could not store artifact: {exc}", path=path) from exc
        logger.info(
            "Downloaded %s",
            file_name,
            extra=extra_context(
                event="download",
                component="fetcher",
                outcome="success",
                duration_ms=t.duration_ms(),
                target=safe_url(url),
            )
        )
        return generation, path
