"""Centralised timestamp handling.

All timestamp parsing and conversion goes through this module.
Internal representation: UTC-aware ``datetime``.
Milliseconds-since-epoch is the journal's ``createdAt`` format and the
canonical ordering key for trades.
"""

from datetime import datetime, timezone


# ---------------------------------------------------------------------------
# Core conversions
# ---------------------------------------------------------------------------


def parse_timestamp(ts: str | int | float) -> datetime:
    """Parse any timestamp representation to a UTC-aware datetime.

    Accepted inputs:
      * ISO 8601 string (``T`` or space separator, with or without ``Z``)
      * ``YYYY/MM/DD`` date prefix (normalised to dashes)
      * Integer or float milliseconds since epoch
      * String containing a numeric value (e.g. ``"1640995200000"``)
    """
    if isinstance(ts, (int, float)):
        return datetime.fromtimestamp(ts / 1000, tz=timezone.utc)

    s = (ts or "").strip()
    if not s:
        raise ValueError("empty timestamp")

    # String that looks like a number → treat as milliseconds
    if s.replace(".", "", 1).lstrip("-").isdigit():
        return datetime.fromtimestamp(int(float(s)) / 1000, tz=timezone.utc)

    # Normalise YYYY/MM/DD → YYYY-MM-DD
    if len(s) >= 10 and s[4] == "/" and s[7] == "/":
        s = f"{s[:4]}-{s[5:7]}-{s[8:]}"

    s = s.replace("Z", "+00:00")
    s = s.replace(" ", "T", 1)

    dt = datetime.fromisoformat(s)
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def to_ms(dt: datetime) -> int:
    """Milliseconds since epoch for *dt* (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def now_utc_iso() -> str:
    """Current UTC time as an ISO string."""
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Journal helpers
# ---------------------------------------------------------------------------


def trade_timestamp_ms(date: str, time: str = "") -> int:
    """Combine a journal ``date`` (``YYYY-MM-DD``) and ``time`` (``HH:MM[:SS]``).

    A blank time means midnight.
    """
    t = (time or "").strip() or "00:00"
    return to_ms(parse_timestamp(f"{date.strip()}T{t}"))


def short_date_label(date: str) -> str:
    """Chart label for an ISO date, e.g. ``"2023-12-01"`` → ``"Dec 1"``."""
    d = parse_timestamp(date)
    return f"{d.strftime('%b')} {d.day}"
