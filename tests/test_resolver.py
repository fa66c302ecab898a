"""Tests for the metadata service client."""

from unittest.mock import patch

import pytest

from conftest import MockResponse, build_record
from yarnmappings.errors import NoSuchVersionError, TransportError
from yarnmappings.resolver import RemoteVersionResolver


@pytest.fixture
def resolver():
    return RemoteVersionResolver("https://meta.example.org/v1/")


class TestRemoteVersionResolver:
    """Test RemoteVersionResolver.latest."""

    def test_versions_url(self, resolver):
        assert resolver.versions_url("1.20.1") == "https://meta.example.org/v1/versions/mappings/1.20.1/"
        assert resolver.versions_url("1.14 Pre-Release 5") == (
            "https://meta.example.org/v1/versions/mappings/1.14%20Pre-Release%205/"
        )

    @patch("yarnmappings.resolver.safe_get")
    def test_latest_is_first_entry(self, mock_get, resolver):
        mock_get.return_value = MockResponse(200, data=[build_record("1.20.1", 7), build_record("1.20.1", 6)])

        latest = resolver.latest("1.20.1")

        assert latest.build == 7
        assert latest.maven == "net.fabricmc:yarn:1.20.1+build.7"
        mock_get.assert_called_once()
        assert mock_get.call_args.kwargs["context"] == "meta"

    @patch("yarnmappings.resolver.safe_get")
    def test_empty_list_means_no_such_version(self, mock_get, resolver):
        mock_get.return_value = MockResponse(200, data=[])
        with pytest.raises(NoSuchVersionError):
            resolver.latest("0.0.0")

    @patch("yarnmappings.resolver.safe_get")
    def test_non_200(self, mock_get, resolver):
        mock_get.return_value = MockResponse(502, content=b"bad gateway")
        with pytest.raises(TransportError) as excinfo:
            resolver.latest("1.20.1")
        assert excinfo.value.status_code == 502

    @patch("yarnmappings.resolver.safe_get")
    def test_invalid_json(self, mock_get, resolver):
        mock_get.return_value = MockResponse(200, content=b"<html>")
        with pytest.raises(TransportError):
            resolver.latest("1.20.1")

    @patch("yarnmappings.resolver.safe_get")
    def test_not_a_list(self, mock_get, resolver):
        mock_get.return_value = MockResponse(200, data={"build": 7})
        with pytest.raises(TransportError):
            resolver.fetch_all("1.20.1")

    @patch("yarnmappings.resolver.safe_get")
    def test_transport_error_propagates(self, mock_get, resolver):
        mock_get.side_effect = TransportError("meta connection error")
        with pytest.raises(TransportError):
            resolver.latest("1.20.1")
