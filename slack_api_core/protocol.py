"""Response envelope and payload decoding for Slack Web API calls.

Every response is a single flat JSON object. The generic envelope fields
(``ok``, ``error``) sit at the top level next to the call-specific payload:

    {"ok": true, "url": "https://acme.slack.com/", "team": "Acme", ...}
    {"ok": false, "error": "invalid_auth"}

Decoding is two-phase. ``decode_envelope`` checks the envelope and raises the
application error for ``ok=false`` before any payload field is looked at; the
typed ``from_payload`` constructors then read the payload from the same
document.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import SlackApiError, SlackDecodeError

ENVELOPE_FIELDS: tuple[str, ...] = ("ok", "error")

WEBSOCKET_SCHEME = "wss://"


def decode_envelope(body: str | bytes) -> dict[str, Any]:
    """Decode a response body and enforce the ``ok``/``error`` contract.

    Returns:
        The whole decoded object when ``ok`` is true.

    Raises:
        SlackApiError: ``ok`` is false; carries the remote error code.
        SlackDecodeError: the body is not a JSON object with a boolean ``ok``,
            or ``ok`` is false without a non-empty ``error`` string.
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as err:
        raise SlackDecodeError("Response body is not valid JSON") from err

    if not isinstance(data, dict):
        raise SlackDecodeError("Response body is not a JSON object")

    ok = data.get("ok")
    if not isinstance(ok, bool):
        raise SlackDecodeError("Response envelope is missing a boolean 'ok'")

    if not ok:
        error = data.get("error")
        if not isinstance(error, str) or not error:
            raise SlackDecodeError("Response envelope has ok=false without an error")
        raise SlackApiError(error, data)

    return data


def require_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise SlackDecodeError(f"Response payload field '{key}' is missing or not a string")
    return value


def require_object(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    if not isinstance(value, dict):
        raise SlackDecodeError(f"Response payload field '{key}' is missing or not an object")
    return value


@dataclass(frozen=True, slots=True)
class AuthIdentity:
    """Identity bound to a token, as reported by ``auth.test``."""

    url: str
    team: str
    user: str
    team_id: str
    user_id: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AuthIdentity:
        return cls(
            url=require_str(payload, "url"),
            team=require_str(payload, "team"),
            user=require_str(payload, "user"),
            team_id=require_str(payload, "team_id"),
            user_id=require_str(payload, "user_id"),
        )


@dataclass(frozen=True, slots=True)
class RTMEndpoint:
    """Single-use streaming endpoint returned by an RTM bootstrap call.

    The URL is only valid for a short time and must be connected to promptly.
    ``snapshot`` holds the initial workspace state for full bootstraps and is
    ``None`` for lightweight ones. Its schema belongs to the stream consumer.
    """

    url: str
    snapshot: dict[str, Any] | None = None

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], *, with_snapshot: bool
    ) -> RTMEndpoint:
        url = require_str(payload, "url")
        if not url.startswith(WEBSOCKET_SCHEME):
            raise SlackDecodeError("RTM endpoint URL does not use the wss scheme")

        if not with_snapshot:
            return cls(url=url)

        require_object(payload, "self")
        require_object(payload, "team")
        snapshot = {
            key: value
            for key, value in payload.items()
            if key not in ENVELOPE_FIELDS and key != "url"
        }
        return cls(url=url, snapshot=snapshot)
