"""Tests for the requests transport and token sources."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from hashtag_scraper.admin.service import update_config
from hashtag_scraper.auth import (
    EnvTokenSource,
    FileTokenSource,
    StaticTokenSource,
    TokenUnavailableError,
    token_source_from_env,
)
from hashtag_scraper.providers import RequestsTransport, TransportError, TransportResponse

ENDPOINT = "http://scraper.local:5000/scrape_instagram"
PAYLOAD = {"email": "user@example.com", "password": "hunter2", "hashtag": "sunset"}


async def mock_executor(executor, func):
    return func()


def mock_response(status_code: int = 200, text: str = "[]") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.elapsed.total_seconds.return_value = 0.25
    return response


class TestRequestsTransport:
    """Tests for RequestsTransport."""

    @pytest.fixture
    def transport(self) -> RequestsTransport:
        """Create a RequestsTransport with an explicit endpoint."""
        return RequestsTransport(endpoint_url=ENDPOINT)

    def test_supports_http_urls(self, transport: RequestsTransport) -> None:
        """Test that the transport supports HTTP endpoints."""
        assert transport.supports_url("http://localhost:5000/scrape_instagram")
        assert transport.supports_url("https://scraper.example.com/api")

    def test_rejects_other_urls(self, transport: RequestsTransport) -> None:
        """Test that the transport rejects non-HTTP and invalid URLs."""
        assert not transport.supports_url("ftp://example.com")
        assert not transport.supports_url("not a url")
        assert not transport.supports_url("")

    @pytest.mark.asyncio
    async def test_send_success(self, transport: RequestsTransport) -> None:
        """Test a POST with JSON body and token header."""
        with patch.object(transport.session, "post", return_value=mock_response(text='[{"a": 1}]')) as mock_post:
            with patch("asyncio.get_event_loop") as mock_loop:
                mock_loop.return_value.run_in_executor = mock_executor
                result = await transport.send(PAYLOAD, "session-token")

        mock_post.assert_called_once()
        call_args = mock_post.call_args
        assert call_args[0][0] == ENDPOINT
        assert call_args[1]["json"] == PAYLOAD
        assert call_args[1]["headers"]["x-access-token"] == "session-token"
        assert call_args[1]["headers"]["Content-Type"] == "application/json"
        assert call_args[1]["timeout"] is None
        assert call_args[1]["verify"] is True

        assert isinstance(result, TransportResponse)
        assert result.status_code == 200
        assert result.text == '[{"a": 1}]'
        assert result.elapsed_ms == 250.0

    @pytest.mark.asyncio
    async def test_error_status_returned(self, transport: RequestsTransport) -> None:
        """Test that a non-2xx response is returned, not raised."""
        with patch.object(transport.session, "post", return_value=mock_response(status_code=500, text="")):
            with patch("asyncio.get_event_loop") as mock_loop:
                mock_loop.return_value.run_in_executor = mock_executor
                result = await transport.send(PAYLOAD, "session-token")

        assert result.status_code == 500
        assert not result.ok

    @pytest.mark.asyncio
    async def test_missing_token_omits_header(self, transport: RequestsTransport) -> None:
        """Test that no token header is sent without a token."""
        with patch.object(transport.session, "post", return_value=mock_response()) as mock_post:
            with patch("asyncio.get_event_loop") as mock_loop:
                mock_loop.return_value.run_in_executor = mock_executor
                await transport.send(PAYLOAD, None)

        assert "x-access-token" not in mock_post.call_args[1]["headers"]

    @pytest.mark.asyncio
    async def test_config_applies_per_call(self) -> None:
        """Test that unset settings follow the runtime config."""
        transport = RequestsTransport()
        update_config({
            "endpoint_url": "https://other.example.com/scrape",
            "token_header": "Authorization",
            "request_timeout": 12.5,
            "verify_ssl": False,
        })

        with patch.object(transport.session, "post", return_value=mock_response()) as mock_post:
            with patch("asyncio.get_event_loop") as mock_loop:
                mock_loop.return_value.run_in_executor = mock_executor
                await transport.send(PAYLOAD, "t")

        call_args = mock_post.call_args
        assert call_args[0][0] == "https://other.example.com/scrape"
        assert call_args[1]["headers"]["Authorization"] == "t"
        assert call_args[1]["timeout"] == 12.5
        assert call_args[1]["verify"] is False

    @pytest.mark.asyncio
    async def test_connection_error(self, transport: RequestsTransport) -> None:
        """Test that connection errors become TransportError."""
        with patch.object(
            transport.session,
            "post",
            side_effect=requests.ConnectionError("Connection refused"),
        ):
            with pytest.raises(TransportError):
                await transport.send(PAYLOAD, "session-token")

    @pytest.mark.asyncio
    async def test_timeout_error_not_retried(self, transport: RequestsTransport) -> None:
        """Test that a timeout raises after a single attempt."""
        with patch.object(
            transport.session,
            "post",
            side_effect=requests.Timeout("Request timed out"),
        ) as mock_post:
            with pytest.raises(TransportError):
                await transport.send(PAYLOAD, "session-token")

        assert mock_post.call_count == 1

    @pytest.mark.asyncio
    async def test_unsupported_endpoint(self) -> None:
        """Test that a non-HTTP endpoint fails without sending."""
        transport = RequestsTransport(endpoint_url="file:///etc/passwd")

        with patch.object(transport.session, "post") as mock_post:
            with pytest.raises(TransportError):
                await transport.send(PAYLOAD, "session-token")

        mock_post.assert_not_called()


class TestTokenSources:
    """Tests for token sources."""

    def test_static(self) -> None:
        """Test the fixed token source."""
        assert StaticTokenSource("abc").get_token() == "abc"
        assert StaticTokenSource(None).get_token() is None

    def test_env_read_on_each_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the env source picks up changes."""
        source = EnvTokenSource("TEST_SCRAPER_TOKEN")
        monkeypatch.delenv("TEST_SCRAPER_TOKEN", raising=False)
        assert source.get_token() is None

        monkeypatch.setenv("TEST_SCRAPER_TOKEN", "fresh")
        assert source.get_token() == "fresh"

    def test_file(self, tmp_path: Path) -> None:
        """Test reading and refreshing a session file."""
        session_file = tmp_path / "session"
        source = FileTokenSource(session_file)
        assert source.get_token() is None

        session_file.write_text("abc\n")
        assert source.get_token() == "abc"

        session_file.write_text("")
        assert source.get_token() is None

    def test_file_unreadable(self, tmp_path: Path) -> None:
        """Test that an unreadable session store raises TokenUnavailableError."""
        source = FileTokenSource(tmp_path)  # a directory cannot be read as a file

        with pytest.raises(TokenUnavailableError):
            source.get_token()

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test token source selection."""
        monkeypatch.delenv("SCRAPER_TOKEN_FILE", raising=False)
        assert isinstance(token_source_from_env(), EnvTokenSource)

        monkeypatch.setenv("SCRAPER_TOKEN_FILE", str(tmp_path / "session"))
        assert isinstance(token_source_from_env(), FileTokenSource)
