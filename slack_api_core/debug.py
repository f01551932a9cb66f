"""Opt-in debug tracing for Slack API calls.

Tracing is off by default. When off, trace calls return before formatting
anything and nothing is written. Never enable it in production: response
bodies are traced verbatim.

Concurrency:
- ``enabled`` is a single attribute assignment, atomic under the interpreter
  lock, so concurrent toggles and trace calls never observe a torn state.
- The default sink is created under a lock with a double check, so two
  threads enabling tracing at once still create exactly one sink.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import TextIO

DEBUG_LABEL = "slack-api-core"

DEBUG_FORMAT = f"%(asctime)s {DEBUG_LABEL} %(filename)s:%(lineno)d: %(message)s"


class DebugTracer:
    """Session-owned debug switch and trace sink."""

    def __init__(
        self,
        sink: logging.Logger | None = None,
        *,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize tracer.

        Args:
            sink: External logger to trace into. When given, no default sink
                is ever created.
            stream: Stream for the default sink (default: sys.stderr at the
                time the sink is created).
        """
        self._enabled = False
        self._sink = sink
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def sink(self) -> logging.Logger | None:
        return self._sink

    def set_debug(self, enabled: bool) -> None:
        """Toggle tracing, creating the default sink on first enable."""
        if enabled and self._sink is None:
            with self._lock:
                if self._sink is None:
                    self._sink = self._create_default_sink()
        self._enabled = enabled

    def set_logger(self, sink: logging.Logger) -> None:
        """Trace into an application-supplied logger."""
        with self._lock:
            self._sink = sink

    def debugf(self, fmt: str, *args: object, stacklevel: int = 1) -> None:
        """Trace a %-style formatted message while enabled.

        ``stacklevel`` counts frames above the caller, as in ``logging``, so
        wrappers can report their own caller as the call site.
        """
        if not self._enabled or self._sink is None:
            return
        self._sink.debug(fmt, *args, stacklevel=stacklevel + 1)

    def debugln(self, *values: object, stacklevel: int = 1) -> None:
        """Trace values joined by spaces while enabled."""
        if not self._enabled or self._sink is None:
            return
        self._sink.debug(
            "%s", " ".join(str(value) for value in values), stacklevel=stacklevel + 1
        )

    def _create_default_sink(self) -> logging.Logger:
        # Private logger instance: not registered with the logging manager, so
        # each tracer owns its handler and nothing propagates to the root.
        sink = logging.Logger(DEBUG_LABEL, level=logging.DEBUG)
        sink.propagate = False
        handler = logging.StreamHandler(self._stream or sys.stderr)
        handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
        sink.addHandler(handler)
        return sink
