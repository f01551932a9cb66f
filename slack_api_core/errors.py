"""Client error types for Slack Web API interactions.

Every failure of a remote call surfaces as exactly one of four disjoint kinds:
transport, decode, application (``ok=false``) and cancellation.
"""

from __future__ import annotations

from typing import Any


class SlackClientError(Exception):
    """Base error for Slack client failures."""


class SlackTransportError(SlackClientError):
    """Network, IO or TLS failure unrelated to cancellation."""


class SlackConnectionError(SlackTransportError):
    """Network connection to the API failed."""


class SlackTimeout(SlackTransportError):
    """Transport timeout while communicating with the API."""


class SlackHandshakeError(SlackTransportError):
    """WebSocket handshake failed."""


class SlackResponseError(SlackTransportError):
    """HTTP response with an unexpected status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status


class SlackDecodeError(SlackClientError):
    """Response body does not match the expected envelope or payload shape."""


class SlackApiError(SlackClientError):
    """The API answered with ``ok=false``.

    ``str(err)`` is the remote error code verbatim, e.g. ``"invalid_auth"``.
    """

    def __init__(self, error: str, response: dict[str, Any] | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.response = response or {}


class SlackCancelledError(SlackClientError):
    """The caller's cancel token fired or its deadline expired."""
