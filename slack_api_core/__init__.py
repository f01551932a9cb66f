"""Core request layer for the Slack Web API and RTM bootstrap."""

__version__ = "0.1.0"

from .api import SlackWebAPI
from .cancellation import CancelToken
from .config import SLACK_API, Credentials
from .debug import DebugTracer
from .errors import (
    SlackApiError,
    SlackCancelledError,
    SlackClientError,
    SlackConnectionError,
    SlackDecodeError,
    SlackHandshakeError,
    SlackResponseError,
    SlackTimeout,
    SlackTransportError,
)
from .http import SlackHttpClient
from .protocol import AuthIdentity, RTMEndpoint, decode_envelope
from .rtm import RTMMode, bootstrap_rtm
from .session import SlackSession
from .ws import open_rtm_connection

__all__ = [
    "SLACK_API",
    "AuthIdentity",
    "CancelToken",
    "Credentials",
    "DebugTracer",
    "RTMEndpoint",
    "RTMMode",
    "SlackApiError",
    "SlackCancelledError",
    "SlackClientError",
    "SlackConnectionError",
    "SlackDecodeError",
    "SlackHandshakeError",
    "SlackHttpClient",
    "SlackResponseError",
    "SlackSession",
    "SlackTimeout",
    "SlackTransportError",
    "SlackWebAPI",
    "__version__",
    "bootstrap_rtm",
    "decode_envelope",
    "open_rtm_connection",
]
