"""Session configuration for the Slack client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

SLACK_API: Final = "https://slack.com/api/"

DEFAULT_TIMEOUT: Final = 30.0


@dataclass(frozen=True, slots=True)
class Credentials:
    """Immutable holder of the caller's access token.

    The token is kept out of ``repr()`` so it never lands in logs or traces.
    """

    token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.token, str) or not self.token:
            raise ValueError("Slack token must be a non-empty string")
