"""Typed result and state models for pincodelookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union

from pincodelookup.config import PINCODE_LENGTH


@dataclass(frozen=True)
class PostOffice:
    """One post office record as returned by the PIN code directory."""

    name: str
    branch_type: str
    delivery_status: str
    district: str
    state: str
    pincode: str
    raw: Mapping[str, Any] = field(
        default_factory=dict, repr=False, compare=False, hash=False
    )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> PostOffice:
        """Build from an API record; missing or null fields become ''."""

        def text(key: str) -> str:
            value = record.get(key)
            return "" if value is None else str(value)

        return cls(
            name=text("Name"),
            branch_type=text("BranchType"),
            delivery_status=text("DeliveryStatus"),
            district=text("District"),
            state=text("State"),
            pincode=text("Pincode"),
            raw=dict(record),
        )

    def to_dict(self) -> dict:
        """Convert to a plain dictionary (useful for JSON serialisation)."""
        return {
            "name": self.name,
            "branch_type": self.branch_type,
            "delivery_status": self.delivery_status,
            "district": self.district,
            "state": self.state,
            "pincode": self.pincode,
        }


@dataclass(frozen=True)
class Success:
    """The lookup returned at least one post office."""

    offices: Tuple[PostOffice, ...]


@dataclass(frozen=True)
class Empty:
    """The lookup completed but the directory had nothing usable."""


@dataclass(frozen=True)
class Failure:
    """The lookup could not be completed."""

    reason: str


LookupOutcome = Union[Success, Empty, Failure]


@dataclass(frozen=True)
class ControllerState:
    """
    Snapshot of the lookup controller, handed to the presentation layer.

    ``is_loading`` is True exactly while a lookup is outstanding.
    ``result`` is None while idle, while loading and after the query
    becomes incomplete.
    """

    current_query: str = ""
    result: Optional[LookupOutcome] = None
    is_loading: bool = False
    last_error: str = ""
    last_queried: str = ""

    @property
    def is_complete(self) -> bool:
        return len(self.current_query) == PINCODE_LENGTH

    @property
    def offices(self) -> Tuple[PostOffice, ...]:
        if isinstance(self.result, Success):
            return self.result.offices
        return ()
