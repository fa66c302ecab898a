"""Tests for the shared HTTP helper."""

from unittest.mock import patch

import pytest
import requests

from yarnmappings.common import http_client
from yarnmappings.common.logging_utils import Timer, extra_context, safe_url
from yarnmappings.constants import Constants
from yarnmappings.errors import TransportError


class TestSafeGet:
    """Test error wrapping and default headers."""

    @patch("yarnmappings.common.http_client.requests.get")
    def test_sends_user_agent_and_timeout(self, mock_get):
        mock_get.return_value.status_code = 200

        http_client.safe_get("https://meta.example.org/", context="meta", headers={"Accept": "application/json"})

        kwargs = mock_get.call_args.kwargs
        assert kwargs["timeout"] == Constants.REQUEST_TIMEOUT
        assert kwargs["headers"]["User-Agent"] == Constants.USER_AGENT
        assert kwargs["headers"]["Accept"] == "application/json"

    @patch("yarnmappings.common.http_client.requests.get")
    def test_returns_non_2xx_responses(self, mock_get):
        mock_get.return_value.status_code = 404
        res = http_client.safe_get("https://maven.example.org/x.jar", context="maven")
        assert res.status_code == 404

    @patch("yarnmappings.common.http_client.requests.get")
    def test_timeout_raises_transport_error(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        with pytest.raises(TransportError):
            http_client.safe_get("https://meta.example.org/", context="meta")

    @patch("yarnmappings.common.http_client.requests.get")
    def test_connection_error_raises_transport_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(TransportError) as excinfo:
            http_client.safe_get("https://user:pw@meta.example.org/?token=abc", context="meta")
        assert "pw" not in excinfo.value.url
        assert "abc" not in excinfo.value.url


class TestLoggingUtils:
    """Test logging helpers."""

    def test_safe_url_redacts(self):
        assert safe_url("https://u:p@host.example:8080/p?token=t&q=1") == (
            "https://host.example:8080/p?token=REDACTED&q=1"
        )

    def test_extra_context_drops_none(self):
        assert extra_context(event="x", target=None) == {"event": "x"}

    def test_timer(self):
        with Timer() as t:
            pass
        assert t.duration_ms() >= 0
