"""Real Time Messaging bootstrap.

Trades the session token for a single-use ``wss://`` endpoint. Connecting to
that endpoint and consuming events belongs to the stream reader, not here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING

from .protocol import RTMEndpoint

if TYPE_CHECKING:
    from .cancellation import CancelToken
    from .http import SlackHttpClient

_LOGGER = logging.getLogger(__name__)


class RTMMode(Enum):
    """Bootstrap variants, valued by the Web API method they call."""

    FULL = "rtm.start"
    LIGHTWEIGHT = "rtm.connect"


async def bootstrap_rtm(
    client: SlackHttpClient,
    cancel: CancelToken | None,
    mode: RTMMode = RTMMode.LIGHTWEIGHT,
    params: Mapping[str, str] | None = None,
) -> RTMEndpoint:
    """Request a streaming endpoint.

    ``FULL`` also returns the initial workspace snapshot; ``LIGHTWEIGHT``
    returns only the URL and is the faster call.

    Raises:
        SlackApiError: The token was rejected, e.g. ``invalid_auth``.
        SlackDecodeError: The URL is missing or not ``wss://``, or a full
            snapshot lacks its ``self``/``team`` objects.
    """
    payload = await client.execute(cancel, mode.value, params)
    endpoint = RTMEndpoint.from_payload(payload, with_snapshot=mode is RTMMode.FULL)
    _LOGGER.debug("RTM bootstrap via %s returned an endpoint", mode.value)
    return endpoint
