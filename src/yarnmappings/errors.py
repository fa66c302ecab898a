"""Exception types raised by the mapping resolver and its collaborators."""

from __future__ import annotations

from typing import Optional


class YarnMappingsError(Exception):
    """Base class for all errors raised by this package."""


class NoSuchVersionError(YarnMappingsError):
    """No mapping data is published or cached for a product version."""

    def __init__(self, version: str):
        super().__init__(f"No mappings available for version {version!r}")
        self.version = version


class TransportError(YarnMappingsError):
    """Network failure talking to the metadata service or artifact repository."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FormatUnavailableError(TransportError):
    """The repository has no artifact of the requested generation for a build.

    Only raised for the fixed set of status codes in
    ``Constants.FORMAT_UNAVAILABLE_CODES`` and handled by the fetcher, which
    falls back to the older artifact generation.
    """


class PersistenceError(YarnMappingsError):
    """Filesystem failure reading or writing version records or artifacts."""

    def __init__(self, message: str, *, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MappingFormatError(PersistenceError):
    """An artifact on disk could not be parsed as mapping data."""
