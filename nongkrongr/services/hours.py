"""Opening-hours parsing for "HH:MM - HH:MM" strings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

BUFFER_MINUTES = 60
LATE_THRESHOLD = 23 * 60
DAY_MINUTES = 24 * 60


@dataclass(frozen=True)
class OpeningStatus:
    is_open: bool
    status: str  # open, closed, opening_soon, closing_soon, unknown
    message: str


UNKNOWN = OpeningStatus(False, "unknown", "")


def parse_time(value: str) -> int | None:
    """Return minutes since midnight, or None when the value is not HH:MM."""
    parts = value.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return hours * 60 + minutes


def _parse_range(opening_hours: str) -> tuple[int, int] | None:
    parts = opening_hours.split(" - ")
    if len(parts) != 2:
        return None
    open_time, close_time = parse_time(parts[0]), parse_time(parts[1])
    if open_time is None or close_time is None:
        return None
    return open_time, close_time


def opening_status(opening_hours: str | None, now: datetime | None = None) -> OpeningStatus:
    """Detailed status with a one-hour "opening soon" / "closing soon" window.

    Ranges whose closing time is earlier than the opening time run past
    midnight, e.g. "18:00 - 02:00".
    """
    if not opening_hours:
        return OpeningStatus(False, "unknown", "Jam tidak tersedia")
    if "24" in opening_hours.lower():
        return OpeningStatus(True, "open", "Buka 24 Jam")

    parsed = _parse_range(opening_hours)
    if parsed is None:
        return UNKNOWN
    open_time, close_time = parsed

    now = now or datetime.now()
    current = now.hour * 60 + now.minute

    effective_close = close_time
    if close_time < open_time:
        effective_close += DAY_MINUTES
    effective_current = current
    if close_time < open_time and current < close_time:
        effective_current += DAY_MINUTES

    is_open = open_time <= effective_current < effective_close

    if not is_open and effective_current < open_time and open_time - effective_current <= BUFFER_MINUTES:
        diff = open_time - effective_current
        return OpeningStatus(False, "opening_soon", f"Buka sebentar lagi ({diff} mnt)")

    if is_open and effective_close - effective_current <= BUFFER_MINUTES:
        diff = effective_close - effective_current
        return OpeningStatus(True, "closing_soon", f"Segera Tutup ({diff} mnt)")

    if is_open:
        return OpeningStatus(True, "open", "Sedang Buka")
    return OpeningStatus(False, "closed", "Tutup")


def is_open_now(opening_hours: str | None, now: datetime | None = None) -> bool:
    return opening_status(opening_hours, now).is_open


def is_open_late(opening_hours: str | None) -> bool:
    """True for 24h cafes, overnight ranges, or closing at 23:00 or later."""
    if not opening_hours:
        return False
    if "24" in opening_hours.lower():
        return True
    parsed = _parse_range(opening_hours)
    if parsed is None:
        return False
    open_time, close_time = parsed
    if close_time < open_time:
        return True
    return close_time >= LATE_THRESHOLD
