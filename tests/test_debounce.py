"""Tests for pincodelookup.debounce module."""

import asyncio

from pincodelookup.debounce import Debouncer

DEBOUNCE = 0.05  # seconds


class TestDebouncer:
    def test_rapid_calls_fire_once_with_last_value(self):
        fired = []

        async def scenario():
            debouncer = Debouncer(DEBOUNCE)
            for value in ["1", "11", "110", "1100", "11000", "110001"]:
                debouncer.schedule(fired.append, value)
                await asyncio.sleep(DEBOUNCE / 5)
            assert fired == []
            await asyncio.sleep(DEBOUNCE * 3)

        asyncio.run(scenario())
        assert fired == ["110001"]

    def test_separate_pauses_fire_separately(self):
        fired = []

        async def scenario():
            debouncer = Debouncer(DEBOUNCE)
            debouncer.schedule(fired.append, "a")
            await asyncio.sleep(DEBOUNCE * 3)
            debouncer.schedule(fired.append, "b")
            await asyncio.sleep(DEBOUNCE * 3)

        asyncio.run(scenario())
        assert fired == ["a", "b"]

    def test_cancel_drops_waiting_callback(self):
        fired = []

        async def scenario():
            debouncer = Debouncer(DEBOUNCE)
            debouncer.schedule(fired.append, "a")
            assert debouncer.pending is True
            debouncer.cancel()
            assert debouncer.pending is False
            await asyncio.sleep(DEBOUNCE * 3)

        asyncio.run(scenario())
        assert fired == []

    def test_not_pending_after_firing(self):
        async def scenario():
            debouncer = Debouncer(DEBOUNCE)
            debouncer.schedule(lambda: None)
            await asyncio.sleep(DEBOUNCE * 3)
            return debouncer.pending

        assert asyncio.run(scenario()) is False
