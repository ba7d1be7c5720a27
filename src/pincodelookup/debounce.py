"""Single-timer debouncing on the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional


class Debouncer:
    """Coalesce rapid calls and run the last one once after *delay* seconds."""

    def __init__(self, delay: float):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, func: Callable[..., Any], *args: Any) -> None:
        """
        Run ``func(*args)`` once the delay passes without another call.

        Must be called from inside a running event loop; any callback
        still waiting is dropped.
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, func, args)

    def cancel(self) -> None:
        """Drop the waiting callback, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, func: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        func(*args)
