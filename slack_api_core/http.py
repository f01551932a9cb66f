"""HTTP request executor for Slack Web API methods."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from .cancellation import CancelToken, run_cancellable
from .config import DEFAULT_TIMEOUT, SLACK_API, Credentials
from .debug import DebugTracer
from .errors import (
    SlackCancelledError,
    SlackConnectionError,
    SlackResponseError,
    SlackTimeout,
)
from .protocol import decode_envelope

_LOGGER = logging.getLogger(__name__)


class SlackHttpClient:
    """Authenticated executor for Slack Web API calls.

    Every remote method goes through ``execute``: one form-encoded POST to
    ``<api_url><method>`` with the token injected, one envelope decode, and no
    retries.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        credentials: Credentials,
        *,
        api_url: str = SLACK_API,
        timeout: float = DEFAULT_TIMEOUT,
        tracer: DebugTracer | None = None,
    ) -> None:
        self._session = session
        self._credentials = credentials
        self._api_url = api_url if api_url.endswith("/") else f"{api_url}/"
        self._timeout = timeout
        self._tracer = tracer or DebugTracer()

    @property
    def api_url(self) -> str:
        return self._api_url

    def _url(self, method: str) -> str:
        return f"{self._api_url}{method}"

    def _form(self, params: Mapping[str, str] | None) -> dict[str, str]:
        form = dict(params or {})
        form["token"] = self._credentials.token
        return form

    async def execute(
        self,
        cancel: CancelToken | None,
        method: str,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Call a Web API method and return its decoded payload.

        Args:
            cancel: Cancellation signal for this call, or None for none.
            method: Remote method name, e.g. ``"auth.test"``.
            params: Method parameters; the token is added automatically.

        Returns:
            The flat response object (envelope and payload fields together).

        Raises:
            SlackApiError: The envelope reported ``ok=false``.
            SlackDecodeError: The body is not a valid envelope.
            SlackTransportError: The request failed on the network.
            SlackCancelledError: ``cancel`` fired before the response arrived.
        """
        if not method:
            raise ValueError("Slack API method name must not be empty")

        if cancel is None:
            cancel = CancelToken()
        cancel.raise_if_cancelled()

        self._tracer.debugf("Sending request for %s", method)
        try:
            body = await run_cancellable(cancel, self._post(method, self._form(params)))
        except SlackCancelledError as err:
            _LOGGER.debug("Request for %s cancelled: %s", method, err)
            raise
        if self._tracer.enabled:
            self._tracer.debugf(
                "%s response: %s", method, body.decode("utf-8", errors="replace")
            )

        return decode_envelope(body)

    async def _post(self, method: str, form: dict[str, str]) -> bytes:
        url = self._url(method)
        try:
            async with self._session.post(
                url,
                data=form,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as resp:
                if resp.status != 200:
                    raise SlackResponseError(
                        resp.status,
                        f"{method} failed with HTTP status {resp.status}",
                    )
                return await resp.read()
        except TimeoutError as err:
            _LOGGER.debug("Request for %s timed out", method)
            raise SlackTimeout(f"{method} request timed out") from err
        except aiohttp.ClientError as err:
            _LOGGER.debug("Request for %s failed: %s", method, err)
            raise SlackConnectionError(f"{method} request failed") from err
