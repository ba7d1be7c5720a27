"""
PincodeLookupController: turns keystrokes into debounced, single-flight lookups.

Everything runs on one asyncio loop. Three kinds of events change state:
``set_query`` calls, the debounce timer firing and a lookup task
finishing. Each lookup carries a token; a finishing lookup only touches
state if its token is still the current one, so a superseded or cleared
request can never overwrite newer state.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Callable, List, Optional, Protocol, Sequence

from pincodelookup import pincode
from pincodelookup.config import DEBOUNCE_DELAY
from pincodelookup.debounce import Debouncer
from pincodelookup.exceptions import NoDataFound, PincodeLookupError
from pincodelookup.models import (
    ControllerState,
    Empty,
    Failure,
    LookupOutcome,
    PostOffice,
    Success,
)

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data found for this pincode."
NETWORK_ERROR_MESSAGE = "Something went wrong. Please try again."
NETWORK_ERROR_REASON = "network error"

_IDLE_POLL = 0.01  # seconds

Listener = Callable[[ControllerState], None]


class LookupSource(Protocol):
    async def fetch(self, code: str) -> Sequence[PostOffice]: ...


class PincodeLookupController:
    """
    Debounced, cancellable lookup controller for one input field.

    The controller does not own *client*; close it separately.
    """

    def __init__(
        self,
        client: LookupSource,
        debounce_delay: float = DEBOUNCE_DELAY,
    ):
        self._client = client
        self._debouncer = Debouncer(debounce_delay)
        self._state = ControllerState()
        self._listeners: List[Listener] = []
        self._token = 0
        self._inflight: Optional[asyncio.Task] = None
        self._settled: Optional[str] = None

    # ── Public API ────────────────────────────────────────────────

    @property
    def state(self) -> ControllerState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new state; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_query(self, raw: str) -> None:
        """Store the digits of *raw* and restart the debounce timer."""
        query = pincode.sanitise(raw)
        self._debouncer.schedule(self._on_settle, query)
        self._update(current_query=query)

    def submit_now(self) -> bool:
        """
        Look up the current query without waiting for it to settle.

        Returns False, doing nothing, if the query is incomplete.
        """
        query = self._state.current_query
        if not pincode.validate(query):
            return False
        self._debouncer.cancel()
        self._settled = query
        self._start_lookup(query)
        return True

    def cancel_and_clear(self) -> None:
        """Drop the pending settle and any outstanding lookup; reset to idle."""
        self._debouncer.cancel()
        self._cancel_inflight()
        self._settled = None
        self._set_state(ControllerState())

    async def wait_idle(self) -> None:
        """Return once no settle is pending and no lookup is outstanding."""
        while True:
            task = self._inflight
            if task is not None and not task.done():
                await asyncio.wait({task})
            elif self._debouncer.pending:
                await asyncio.sleep(_IDLE_POLL)
            else:
                return

    async def aclose(self) -> None:
        """Cancel everything still running. The controller stays usable."""
        self._debouncer.cancel()
        self._settled = None
        task = self._inflight
        self._cancel_inflight()
        if task is not None:
            await asyncio.wait({task})
        self._update(is_loading=False)

    async def __aenter__(self) -> PincodeLookupController:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # ── Private helpers ───────────────────────────────────────────

    def _on_settle(self, value: str) -> None:
        if value == self._settled:
            logger.debug("Query settled on unchanged value %r", value)
            return
        self._settled = value

        if pincode.validate(value):
            self._start_lookup(value)
            return

        logger.debug("Query settled on incomplete value %r", value)
        self._cancel_inflight()
        self._update(result=None, is_loading=False, last_error="", last_queried="")

    def _start_lookup(self, code: str) -> None:
        self._cancel_inflight()
        self._token += 1
        token = self._token
        logger.debug("Starting lookup #%d for %s", token, code)
        self._update(result=None, is_loading=True, last_error="", last_queried=code)
        loop = asyncio.get_running_loop()
        self._inflight = loop.create_task(self._run_lookup(token, code))

    def _cancel_inflight(self) -> None:
        # Invalidate the token first: a lookup that ignores cancellation
        # and finishes anyway must still be discarded.
        self._token += 1
        task, self._inflight = self._inflight, None
        if task is not None and not task.done():
            logger.debug("Cancelling outstanding lookup")
            task.cancel()

    async def _run_lookup(self, token: int, code: str) -> None:
        outcome: LookupOutcome
        try:
            offices = await self._client.fetch(code)
        except asyncio.CancelledError:
            logger.debug("Lookup #%d for %s cancelled", token, code)
            raise
        except NoDataFound:
            outcome, error = Empty(), NO_DATA_MESSAGE
        except PincodeLookupError as exc:
            logger.warning("Lookup #%d for %s failed: %s", token, code, exc)
            outcome, error = Failure(NETWORK_ERROR_REASON), NETWORK_ERROR_MESSAGE
        except Exception:
            logger.exception("Unexpected error in lookup #%d for %s", token, code)
            outcome, error = Failure(NETWORK_ERROR_REASON), NETWORK_ERROR_MESSAGE
        else:
            if offices:
                outcome, error = Success(tuple(offices)), ""
            else:
                outcome, error = Empty(), ""

        if token != self._token:
            logger.debug("Discarding stale result of lookup #%d for %s", token, code)
            return
        self._inflight = None
        self._update(result=outcome, is_loading=False, last_error=error)

    def _update(self, **changes: object) -> None:
        self._set_state(replace(self._state, **changes))

    def _set_state(self, state: ControllerState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)
