"""Tests for open_rtm_connection()."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from websockets.exceptions import InvalidStatus, InvalidURI

from slack_api_core import (
    CancelToken,
    RTMEndpoint,
    SlackCancelledError,
    SlackConnectionError,
    SlackDecodeError,
    SlackHandshakeError,
    SlackTimeout,
    open_rtm_connection,
)

WSS_URL = "wss://cerberus.slack.com/websocket/abc"


class TestOpenRTMConnection:
    """Opening a bootstrapped endpoint."""

    async def test_connects_to_endpoint_url(self):
        mock_ws = AsyncMock()

        with patch(
            "slack_api_core.ws.connect", new=AsyncMock(return_value=mock_ws)
        ) as mock_connect:
            ws = await open_rtm_connection(None, RTMEndpoint(url=WSS_URL))

        assert ws is mock_ws
        mock_connect.assert_called_once_with(
            WSS_URL,
            open_timeout=10.0,
            ping_interval=20,
            max_size=None,
        )

    async def test_accepts_plain_url_and_options(self):
        with patch("slack_api_core.ws.connect", new=AsyncMock()) as mock_connect:
            await open_rtm_connection(
                CancelToken(timeout=5), WSS_URL, ping_interval=None, open_timeout=3.0
            )

        assert mock_connect.call_args.args[0] == WSS_URL
        assert mock_connect.call_args.kwargs["ping_interval"] is None
        assert mock_connect.call_args.kwargs["open_timeout"] == 3.0

    @pytest.mark.parametrize(
        "url", ["ws://cerberus.slack.com/websocket/abc", "https://slack.com/", ""]
    )
    async def test_non_wss_url_rejected(self, url):
        with patch("slack_api_core.ws.connect", new=AsyncMock()) as mock_connect:
            with pytest.raises(SlackDecodeError, match="wss"):
                await open_rtm_connection(None, url)

        mock_connect.assert_not_called()


class TestOpenRTMConnectionFailures:
    """Handshake and network failures map to transport errors."""

    async def test_timeout(self):
        with patch(
            "slack_api_core.ws.connect", new=AsyncMock(side_effect=TimeoutError())
        ):
            with pytest.raises(SlackTimeout, match="bootstrap a new endpoint"):
                await open_rtm_connection(None, WSS_URL)

    async def test_rejected_endpoint(self):
        rejection = InvalidStatus(MagicMock(status_code=403))

        with patch(
            "slack_api_core.ws.connect", new=AsyncMock(side_effect=rejection)
        ):
            with pytest.raises(SlackHandshakeError, match="HTTP 403"):
                await open_rtm_connection(None, WSS_URL)

    async def test_invalid_uri(self):
        with patch(
            "slack_api_core.ws.connect",
            new=AsyncMock(side_effect=InvalidURI(WSS_URL, "bad uri")),
        ):
            with pytest.raises(SlackHandshakeError, match="handshake failed"):
                await open_rtm_connection(None, WSS_URL)

    async def test_os_error(self):
        with patch(
            "slack_api_core.ws.connect",
            new=AsyncMock(side_effect=OSError("unreachable")),
        ):
            with pytest.raises(SlackConnectionError, match="connection failed"):
                await open_rtm_connection(None, WSS_URL)

    async def test_single_attempt(self):
        with patch(
            "slack_api_core.ws.connect",
            new=AsyncMock(side_effect=OSError("unreachable")),
        ) as mock_connect:
            with pytest.raises(SlackConnectionError):
                await open_rtm_connection(None, WSS_URL)

        assert mock_connect.call_count == 1


class TestOpenRTMConnectionCancellation:
    """Cancel tokens abort the handshake and close late connections."""

    async def test_cancelled_token_does_not_connect(self):
        cancel = CancelToken()
        cancel.cancel()

        with patch("slack_api_core.ws.connect", new=AsyncMock()) as mock_connect:
            with pytest.raises(SlackCancelledError):
                await open_rtm_connection(cancel, WSS_URL)

        mock_connect.assert_not_called()

    async def test_deadline_aborts_handshake(self):
        aborted = []

        async def hang(*args, **kwargs):
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                aborted.append(True)
                raise

        with patch("slack_api_core.ws.connect", new=AsyncMock(side_effect=hang)):
            with pytest.raises(SlackCancelledError, match="deadline exceeded"):
                await open_rtm_connection(CancelToken(timeout=0.05), WSS_URL)

        assert aborted == [True]

    async def test_late_connection_is_closed(self):
        cancel = CancelToken()
        mock_ws = AsyncMock()

        async def connect_then_cancel(*args, **kwargs):
            cancel.cancel("caller gave up")
            return mock_ws

        with patch(
            "slack_api_core.ws.connect", new=AsyncMock(side_effect=connect_then_cancel)
        ):
            with pytest.raises(SlackCancelledError, match="caller gave up"):
                await open_rtm_connection(cancel, WSS_URL)

        mock_ws.close.assert_awaited_once()
