"""
Identifier and timestamp capabilities injected into the engine.

Alerts and recommendations carry a fresh id and creation time on every run.
Keeping the generators injectable lets tests pin both and compare runs
field by field.
"""

from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4


# prefix -> identifier, e.g. 'alert' -> 'alert_3f2a...'
IdFactory = Callable[[str], str]

Clock = Callable[[], datetime]


def generate_id(prefix: str) -> str:
    """Return a random identifier such as 'rec_9b1deb4d3b7d4bad9bdd2b0d7b3dcb6d'."""
    return f"{prefix}_{uuid4().hex}"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
