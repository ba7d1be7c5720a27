"""PIN code sanitising and validation."""

import re

from pincodelookup.config import PINCODE_LENGTH
from pincodelookup.exceptions import PincodeInvalid

_NON_DIGIT_RE = re.compile(r"[^0-9]")


def sanitise(raw: str, length: int = PINCODE_LENGTH) -> str:
    """Drop every non-digit from *raw* and cap it at *length* characters."""
    return _NON_DIGIT_RE.sub("", raw)[:length]


def validate(raw: str, length: int = PINCODE_LENGTH) -> bool:
    """Return True if *raw* is exactly *length* ASCII digits."""
    return len(raw) == length and not _NON_DIGIT_RE.search(raw)


def normalise(raw: str, length: int = PINCODE_LENGTH) -> str:
    """
    Strip surrounding whitespace and inner spaces, e.g. ' 110 001 ' -> '110001'.

    Raises PincodeInvalid if what remains is not a complete PIN code.
    """
    stripped = raw.strip().replace(" ", "")
    if not validate(stripped, length):
        raise PincodeInvalid(raw)
    return stripped
