"""pincodelookup — Debounced, single-flight lookups of Indian postal PIN codes."""

from pincodelookup.client import PincodeClient, parse_payload
from pincodelookup.controller import PincodeLookupController
from pincodelookup.exceptions import (
    LookupFailed,
    NoDataFound,
    PincodeInvalid,
    PincodeLookupError,
)
from pincodelookup.models import (
    ControllerState,
    Empty,
    Failure,
    PostOffice,
    Success,
)

__all__ = [
    "PincodeClient",
    "PincodeLookupController",
    "parse_payload",
    "ControllerState",
    "PostOffice",
    "Success",
    "Empty",
    "Failure",
    "PincodeLookupError",
    "PincodeInvalid",
    "LookupFailed",
    "NoDataFound",
]
