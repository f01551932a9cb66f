"""Thin per-method wrappers over ``SlackSession.execute``.

Each wrapper only turns its arguments into the string form parameters the Web
API expects and picks fields out of the response. Methods not covered here
can be reached with ``api_call``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .protocol import require_object, require_str

if TYPE_CHECKING:
    from .cancellation import CancelToken
    from .session import SlackSession


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_params(**kwargs: Any) -> dict[str, str]:
    """Build form parameters, dropping ``None`` values."""
    return {key: _form_value(value) for key, value in kwargs.items() if value is not None}


class SlackWebAPI:
    """Typed convenience calls for a few common Web API methods."""

    def __init__(self, session: SlackSession) -> None:
        self._session = session

    async def api_call(
        self, cancel: CancelToken | None, method: str, **params: Any
    ) -> dict[str, Any]:
        return await self._session.execute(cancel, method, build_params(**params))

    async def get_user_info(self, cancel: CancelToken | None, user: str) -> dict[str, Any]:
        payload = await self._session.execute(cancel, "users.info", build_params(user=user))
        return require_object(payload, "user")

    async def get_team_info(self, cancel: CancelToken | None) -> dict[str, Any]:
        payload = await self._session.execute(cancel, "team.info")
        return require_object(payload, "team")

    async def get_bot_info(self, cancel: CancelToken | None, bot: str) -> dict[str, Any]:
        payload = await self._session.execute(cancel, "bots.info", build_params(bot=bot))
        return require_object(payload, "bot")

    async def get_emoji(self, cancel: CancelToken | None) -> dict[str, str]:
        payload = await self._session.execute(cancel, "emoji.list")
        return require_object(payload, "emoji")

    async def post_message(
        self,
        cancel: CancelToken | None,
        channel: str,
        text: str,
        *,
        thread_ts: str | None = None,
        as_user: bool | None = None,
        unfurl_links: bool | None = None,
    ) -> tuple[str, str]:
        """Post a message; returns ``(channel, ts)``."""
        payload = await self._session.execute(
            cancel,
            "chat.postMessage",
            build_params(
                channel=channel,
                text=text,
                thread_ts=thread_ts,
                as_user=as_user,
                unfurl_links=unfurl_links,
            ),
        )
        return require_str(payload, "channel"), require_str(payload, "ts")

    async def delete_message(
        self, cancel: CancelToken | None, channel: str, ts: str
    ) -> tuple[str, str]:
        """Delete a message; returns ``(channel, ts)``."""
        payload = await self._session.execute(
            cancel, "chat.delete", build_params(channel=channel, ts=ts)
        )
        return require_str(payload, "channel"), require_str(payload, "ts")

    async def set_user_presence(self, cancel: CancelToken | None, presence: str) -> None:
        await self._session.execute(
            cancel, "users.setPresence", build_params(presence=presence)
        )
