"""Custom exception hierarchy for pincodelookup."""


class PincodeLookupError(Exception):
    """Base exception for all pincodelookup errors."""


class PincodeInvalid(PincodeLookupError):
    """The provided string is not a complete 6-digit PIN code."""

    def __init__(self, pincode: str):
        self.pincode = pincode
        super().__init__(f"Invalid PIN code: '{pincode}'")


class LookupFailed(PincodeLookupError):
    """The directory could not be reached or answered with an HTTP error."""

    def __init__(self, pincode: str, reason: str):
        self.pincode = pincode
        self.reason = reason
        super().__init__(f"Lookup for '{pincode}' failed: {reason}")


class NoDataFound(PincodeLookupError):
    """The directory answered, but without any post office records."""

    def __init__(self, pincode: str):
        self.pincode = pincode
        super().__init__(f"No data found for PIN code '{pincode}'")
