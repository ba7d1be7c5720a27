"""Shared test fixtures — directory payloads, fake transports and lookup sources."""

import asyncio
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from pincodelookup.models import PostOffice



def office_record(name: str, pincode: str = "110001", **extra) -> dict:
    record = {
        "Name": name,
        "Description": None,
        "BranchType": "Sub Post Office",
        "DeliveryStatus": "Non-Delivery",
        "Circle": "Delhi",
        "District": "Central Delhi",
        "Division": "New Delhi Central",
        "Region": "Delhi",
        "Block": "New Delhi",
        "State": "Delhi",
        "Country": "India",
        "Pincode": pincode,
    }
    record.update(extra)
    return record


@pytest.fixture()
def success_payload() -> list:
    """A realistic successful directory response for 110001."""
    return [
        {
            "Message": "Number of pincode(s) found:2",
            "Status": "Success",
            "PostOffice": [
                office_record("Baroda House"),
                office_record("Connaught Place", DeliveryStatus="Delivery"),
            ],
        }
    ]


@pytest.fixture()
def error_payload() -> list:
    return [{"Message": "No records found", "Status": "Error", "PostOffice": None}]


@pytest.fixture()
def mock_http() -> Callable[[Callable], httpx.AsyncClient]:
    """Build an httpx.AsyncClient whose requests are answered by *handler*."""

    def factory(handler: Callable) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


class FakeSource:
    """
    Stand-in for PincodeClient used by controller tests.

    With ``hold=True`` every fetch waits until ``release(code)`` is called.
    With ``ignore_cancel=True`` a cancelled fetch keeps waiting and still
    returns its response afterwards, like a transport that cannot abort.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, object]] = None,
        hold: bool = False,
        ignore_cancel: bool = False,
    ):
        self.responses = responses or {}
        self.hold = hold
        self.ignore_cancel = ignore_cancel
        self.calls: List[str] = []
        self.cancelled: List[str] = []
        self._gates: Dict[str, asyncio.Event] = {}

    def release(self, code: str) -> None:
        self._gate(code).set()

    def _gate(self, code: str) -> asyncio.Event:
        if code not in self._gates:
            self._gates[code] = asyncio.Event()
        return self._gates[code]

    async def fetch(self, code: str) -> List[PostOffice]:
        self.calls.append(code)
        if self.hold:
            try:
                await self._gate(code).wait()
            except asyncio.CancelledError:
                self.cancelled.append(code)
                if not self.ignore_cancel:
                    raise
                await self._gate(code).wait()
        response = self.responses.get(code, [])
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture()
def make_source() -> Callable[..., FakeSource]:
    return FakeSource
