"""Authenticated session for the Slack Web API.

The session owns the credentials, the request executor and the debug tracer.
Many coroutines may share one session: the token never changes after
construction, and the tracer guards its own lazy state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from .cancellation import CancelToken
from .config import DEFAULT_TIMEOUT, SLACK_API, Credentials
from .debug import DebugTracer
from .http import SlackHttpClient
from .protocol import AuthIdentity, RTMEndpoint
from .rtm import RTMMode, bootstrap_rtm


class SlackSession:
    """Entry point for authenticated Slack calls.

    Usage:
        async with aiohttp.ClientSession() as http:
            session = SlackSession(http, "xoxb-...")
            identity = await session.auth_test()
            endpoint = await session.connect_rtm(CancelToken(timeout=10))
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str,
        *,
        api_url: str = SLACK_API,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize session.

        Args:
            session: aiohttp session used for every request
            token: Slack access token
            api_url: Web API base URL
            timeout: Per-request transport timeout (seconds)
            debug: Start with debug tracing enabled
            logger: External sink for debug traces
        """
        self._credentials = Credentials(token)
        self._tracer = DebugTracer(logger)
        self._client = SlackHttpClient(
            session,
            self._credentials,
            api_url=api_url,
            timeout=timeout,
            tracer=self._tracer,
        )
        if debug:
            self.set_debug(True)

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def client(self) -> SlackHttpClient:
        return self._client

    @property
    def tracer(self) -> DebugTracer:
        return self._tracer

    @property
    def debug(self) -> bool:
        return self._tracer.enabled

    # -------------------------------------------------------------------------
    # Debugging
    # -------------------------------------------------------------------------

    def set_debug(self, debug: bool) -> None:
        """Switch debug tracing on or off. Do not enable in production."""
        self._tracer.set_debug(debug)

    def set_logger(self, logger: logging.Logger) -> None:
        """Trace into an application logger instead of stderr."""
        self._tracer.set_logger(logger)

    def debugf(self, fmt: str, *args: object) -> None:
        self._tracer.debugf(fmt, *args, stacklevel=2)

    def debugln(self, *values: object) -> None:
        self._tracer.debugln(*values, stacklevel=2)

    # -------------------------------------------------------------------------
    # Remote calls
    # -------------------------------------------------------------------------

    async def execute(
        self,
        cancel: CancelToken | None,
        method: str,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Call any Web API method; see ``SlackHttpClient.execute``."""
        return await self._client.execute(cancel, method, params)

    async def auth_test(self, cancel: CancelToken | None = None) -> AuthIdentity:
        """Check that the token is accepted and return its identity.

        Raises:
            SlackApiError: The token is invalid or revoked.
        """
        payload = await self._client.execute(cancel, "auth.test")
        return AuthIdentity.from_payload(payload)

    async def bootstrap_rtm(
        self,
        cancel: CancelToken | None,
        mode: RTMMode,
        params: Mapping[str, str] | None = None,
    ) -> RTMEndpoint:
        return await bootstrap_rtm(self._client, cancel, mode, params)

    async def start_rtm(self, cancel: CancelToken | None = None) -> RTMEndpoint:
        """Bootstrap RTM with a full workspace snapshot (``rtm.start``)."""
        return await bootstrap_rtm(self._client, cancel, RTMMode.FULL)

    async def connect_rtm(self, cancel: CancelToken | None = None) -> RTMEndpoint:
        """Bootstrap RTM with the URL only (``rtm.connect``)."""
        return await bootstrap_rtm(self._client, cancel, RTMMode.LIGHTWEIGHT)
