"""PincodeClient: async access to the postal PIN code directory."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from pincodelookup import pincode
from pincodelookup.config import API_URL_TEMPLATE
from pincodelookup.exceptions import LookupFailed, NoDataFound
from pincodelookup.models import PostOffice

logger = logging.getLogger(__name__)

_SUCCESS_STATUS = "Success"


def parse_payload(payload: Any, code: str = "") -> List[PostOffice]:
    """
    Turn a decoded directory response into post office records.

    The directory answers with a list whose first element carries a
    ``Status`` marker and a ``PostOffice`` list. A present but empty list
    means the code is known with no offices and yields []; anything else
    raises NoDataFound.
    """
    if not isinstance(payload, list) or not payload:
        raise NoDataFound(code)
    first = payload[0]
    if not isinstance(first, dict) or first.get("Status") != _SUCCESS_STATUS:
        raise NoDataFound(code)
    records = first.get("PostOffice")
    if not isinstance(records, list):
        raise NoDataFound(code)
    if not records:
        return []
    offices = [PostOffice.from_record(r) for r in records if isinstance(r, dict)]
    if not offices:
        raise NoDataFound(code)
    return offices


class PincodeClient:
    """
    Thin async client for ``/pincode/{code}``.

    Pass an existing ``httpx.AsyncClient`` to share a connection pool;
    otherwise one is created and closed with this client.
    """

    def __init__(
        self,
        url_template: str = API_URL_TEMPLATE,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._url_template = url_template
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient()

    # ── Public API ────────────────────────────────────────────────

    async def fetch(self, code: str) -> List[PostOffice]:
        """
        Look up every post office for *code*.

        Raises PincodeInvalid before any request if *code* is incomplete,
        LookupFailed on transport or HTTP errors and NoDataFound when the
        response does not have the expected shape. A known code without
        any offices returns []. Cancelling the awaiting task aborts
        the underlying request.
        """
        code = pincode.normalise(code)
        url = self._url_template.format(pincode=code)

        logger.debug("GET %s", url)
        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("Directory returned %s for %s", exc.response.status_code, code)
            raise LookupFailed(code, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Transport error for %s: %s", code, exc)
            raise LookupFailed(code, str(exc) or type(exc).__name__) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.debug("Undecodable body for %s", code)
            raise NoDataFound(code) from exc

        return parse_payload(payload, code)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> PincodeClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
