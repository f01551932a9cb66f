"""Open the WebSocket behind a bootstrapped RTM endpoint.

RTM URLs are single-use and expire within seconds, so an endpoint is opened
at most once: a rejected or timed-out handshake means the caller must
bootstrap a fresh endpoint, never retry the same URL. Reading events off the
returned connection is left to the stream consumer.
"""

from __future__ import annotations

import logging

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import (
    InvalidHandshake,
    InvalidStatus,
    InvalidURI,
    WebSocketException,
)

from .cancellation import CancelToken, run_cancellable
from .errors import (
    SlackCancelledError,
    SlackConnectionError,
    SlackDecodeError,
    SlackHandshakeError,
    SlackTimeout,
)
from .protocol import WEBSOCKET_SCHEME, RTMEndpoint

_LOGGER = logging.getLogger(__name__)

DEFAULT_OPEN_TIMEOUT = 10.0


async def open_rtm_connection(
    cancel: CancelToken | None,
    endpoint: RTMEndpoint | str,
    *,
    ping_interval: float | None = 20,
    open_timeout: float = DEFAULT_OPEN_TIMEOUT,
) -> ClientConnection:
    """Open the streaming connection for an RTM endpoint.

    Args:
        cancel: Cancellation signal, or None for none
        endpoint: Endpoint from an RTM bootstrap, or its ``wss://`` URL
        ping_interval: Keepalive ping interval (seconds), None to disable
        open_timeout: Handshake timeout (seconds)

    Raises:
        SlackDecodeError: The URL does not use the wss scheme.
        SlackHandshakeError: The server refused the upgrade, typically
            because the endpoint was already used or has expired.
        SlackTimeout: The handshake did not finish within ``open_timeout``.
        SlackConnectionError: The network connection failed.
        SlackCancelledError: ``cancel`` fired first. A connection that
            completed alongside the cancellation is closed, not returned.
    """
    url = endpoint.url if isinstance(endpoint, RTMEndpoint) else endpoint
    if not url.startswith(WEBSOCKET_SCHEME):
        raise SlackDecodeError("RTM endpoint URL does not use the wss scheme")

    if cancel is None:
        cancel = CancelToken()
    cancel.raise_if_cancelled()

    try:
        return await run_cancellable(
            cancel,
            _open(url, ping_interval, open_timeout),
            discard=_close_unused,
        )
    except SlackCancelledError as err:
        _LOGGER.debug("Opening RTM connection cancelled: %s", err)
        raise


async def _open(
    url: str, ping_interval: float | None, open_timeout: float
) -> ClientConnection:
    try:
        return await connect(
            url,
            open_timeout=open_timeout,
            ping_interval=ping_interval,
            max_size=None,
        )
    except TimeoutError as err:
        raise SlackTimeout("RTM handshake timed out; bootstrap a new endpoint") from err
    except InvalidStatus as err:
        status = err.response.status_code
        raise SlackHandshakeError(
            f"RTM endpoint rejected the handshake with HTTP {status}; "
            "bootstrap a new endpoint"
        ) from err
    except (InvalidHandshake, InvalidURI) as err:
        raise SlackHandshakeError("RTM handshake failed") from err
    except (OSError, WebSocketException) as err:
        raise SlackConnectionError("RTM connection failed") from err


async def _close_unused(connection: ClientConnection) -> None:
    # Single-use endpoint: a connection nobody receives is closed.
    await connection.close()
