"""
walletdns/core/time.py

THE ONLY CLOCK IN WALLETDNS.

Wire format: Unix seconds as a base-10 string ("1700000000").

Every module that needs "now" imports unix_now() from here.
Verification takes an explicit `now` so tests can pin the clock.
"""

import time
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def unix_now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


def unix_timestamp(now: Optional[int] = None) -> str:
    """Return `now` (default: current time) in wire format."""
    return str(unix_now() if now is None else int(now))


def expiration_after(days: int, now: Optional[int] = None) -> str:
    """Wire-format timestamp `days` days after `now`."""
    base = unix_now() if now is None else int(now)
    return str(base + int(days) * SECONDS_PER_DAY)
