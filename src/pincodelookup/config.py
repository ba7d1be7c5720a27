"""Constants and environment-driven defaults for pincodelookup.

Environment variables (read by :func:`load_settings`):
    PINCODE_API_URL       URL template containing ``{pincode}``
    PINCODE_DEBOUNCE_MS   Quiet interval before a query settles
    PINCODE_LOG_LEVEL     Level for the CLI's log handler
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

PINCODE_LENGTH = 6
DEBOUNCE_DELAY = 0.5  # seconds
API_URL_TEMPLATE = "https://api.postalpincode.in/pincode/{pincode}"
LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Runtime settings, usually built from the environment."""

    api_url: str = API_URL_TEMPLATE
    debounce_delay: float = DEBOUNCE_DELAY
    log_level: str = LOG_LEVEL


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ

    api_url = env.get("PINCODE_API_URL") or API_URL_TEMPLATE
    if "{pincode}" not in api_url:
        logger.warning(
            "PINCODE_API_URL has no {pincode} placeholder; using %s",
            API_URL_TEMPLATE,
        )
        api_url = API_URL_TEMPLATE

    debounce_delay = DEBOUNCE_DELAY
    raw_ms = env.get("PINCODE_DEBOUNCE_MS")
    if raw_ms:
        try:
            ms = int(raw_ms)
        except ValueError:
            ms = -1
        if ms >= 0:
            debounce_delay = ms / 1000
        else:
            logger.warning("Ignoring invalid PINCODE_DEBOUNCE_MS=%r", raw_ms)

    log_level = (env.get("PINCODE_LOG_LEVEL") or LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = LOG_LEVEL

    return Settings(
        api_url=api_url,
        debounce_delay=debounce_delay,
        log_level=log_level,
    )
