"""
PIN Code Lookup — Interactive CLI
=================================
Terminal front end for the pincodelookup controller.

Usage:
    pincodelookup            # interactive mode
    pincodelookup 110001     # single lookup

Settings are read from environment variables:
    PINCODE_API_URL       Directory URL template (must contain {pincode})
    PINCODE_DEBOUNCE_MS   Quiet interval before a typed query settles
    PINCODE_LOG_LEVEL     Log level for messages on stderr (default WARNING)
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

from pincodelookup.client import PincodeClient
from pincodelookup.config import PINCODE_LENGTH, Settings, load_settings
from pincodelookup.controller import PincodeLookupController
from pincodelookup.exceptions import PincodeInvalid
from pincodelookup.models import ControllerState, PostOffice, Success
from pincodelookup.pincode import normalise

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_BANNER = """\
╔══════════════════════════════════════╗
║          PIN Code Lookup             ║
║    6-digit PIN → Post Offices        ║
╚══════════════════════════════════════╝
Type 'c' to clear, 'q' to quit.
"""


def configure_logging(level: str) -> None:
    """Send the package's log records to stderr at *level*."""
    pkg_logger = logging.getLogger("pincodelookup")
    pkg_logger.setLevel(getattr(logging, level, logging.WARNING))
    if not pkg_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        pkg_logger.addHandler(handler)


# ── Rendering ─────────────────────────────────────────────────

def _card(office: PostOffice) -> str:
    rows = [
        ("Name", office.name),
        ("Branch Type", office.branch_type),
        ("Delivery Status", office.delivery_status),
        ("District", office.district),
        ("State", office.state),
        ("Pincode", office.pincode),
    ]
    lines = ["  ┌──────────────────────────────────────────────────────┐"]
    lines += [f"  │  {label:<18}{value:<35}│" for label, value in rows]
    lines.append("  └──────────────────────────────────────────────────────┘")
    return "\n".join(lines)


def render(state: ControllerState) -> str:
    """Text shown for *state*; one branch per screen state."""
    if state.is_loading:
        return f"  ⏳ Fetching details for {state.last_queried} …"
    if state.last_error:
        return f"  ✗ {state.last_error}"
    if not state.is_complete:
        return f"  Enter full {PINCODE_LENGTH}-digit pincode to see results."
    if not state.offices:
        return f"  No results found for {state.current_query}."

    count = len(state.offices)
    noun = "post office" if count == 1 else "post offices"
    header = f"  ✓ {count} {noun} for {state.last_queried}"
    return "\n".join([header] + [_card(o) for o in state.offices])


# ── Modes ─────────────────────────────────────────────────────

def _show_progress(state: ControllerState) -> None:
    if state.is_loading:
        print(render(state), flush=True)


async def _run_interactive(controller: PincodeLookupController) -> None:
    print(_BANNER)
    unsubscribe = controller.subscribe(_show_progress)
    try:
        while True:
            try:
                raw = await asyncio.to_thread(input, "\nPincode:  ")
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                break

            raw = raw.strip()
            if raw.lower() in ("q", "quit", "exit"):
                print("Bye!")
                break
            if raw.lower() in ("c", "clear"):
                controller.cancel_and_clear()
                print("  Cleared.")
                continue

            controller.set_query(raw)
            controller.submit_now()
            await controller.wait_idle()
            print(render(controller.state))
    finally:
        unsubscribe()


async def _lookup_once(controller: PincodeLookupController, raw: str) -> int:
    """Run one lookup for *raw*, print it and return the exit status."""
    try:
        code = normalise(raw)
    except PincodeInvalid as exc:
        print(f"Invalid pincode: {exc.pincode}", file=sys.stderr)
        return 1

    controller.set_query(code)
    controller.submit_now()
    await controller.wait_idle()

    state = controller.state
    if not isinstance(state.result, Success):
        print(render(state).strip(), file=sys.stderr)
        return 1
    print(render(state))
    return 0


async def _run(argv: List[str], settings: Settings) -> int:
    async with PincodeClient(url_template=settings.api_url) as client:
        async with PincodeLookupController(
            client, debounce_delay=settings.debounce_delay
        ) as controller:
            if len(argv) == 1:
                return await _lookup_once(controller, argv[0])
            await _run_interactive(controller)
            return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point — supports both a CLI argument and interactive mode."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print("Usage: pincodelookup [PINCODE]", file=sys.stderr)
        sys.exit(2)

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.debug("Using %s", settings)

    try:
        status = asyncio.run(_run(args, settings))
    except KeyboardInterrupt:
        print("\nBye!")
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    main()
