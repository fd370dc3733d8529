"""Trade repository backing the analytics.

The engines are stateless; callers load trades here and pass plain lists.
"""

import json
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterable

from tradejournal.time_utils import now_utc_iso
from tradejournal.trade import Trade
from tradejournal.types import TimelineWindow

log = logging.getLogger(__name__)


__all__ = [
    "TradeStore",
    "TradeStoreError",
    "filter_by_timeline",
]


class TradeStoreError(RuntimeError):
    """The journal file could not be read or written."""


class TradeStore:
    """
    Persists journal trades to a JSON file.

    Write pattern:
      Every mutation (:meth:`add`, :meth:`update`, :meth:`delete`) saves the
      full list. The file is written atomically (write to ``.tmp``, then
      rename).

    Read pattern:
      :meth:`load` replaces the in-memory list with the file contents. A
      missing file is a fresh journal.
    """

    FILENAME = "trades.json"
    VERSION = 1

    def __init__(self, journal_dir: Path):
        self._dir = journal_dir
        self._path = journal_dir / self.FILENAME
        self._tmp_path = journal_dir / f".{self.FILENAME}.tmp"
        self._trades: list[Trade] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def trades(self) -> tuple[Trade, ...]:
        """Snapshot of the current trades, newest first."""
        return tuple(self._trades)

    def load(self) -> list[Trade]:
        """Load trades from disk; an absent file yields an empty journal."""
        if not self._path.exists():
            self._trades = []
            return []

        try:
            data = json.loads(self._path.read_text())
            # Older journals stored a bare list of trades.
            rows = data if isinstance(data, list) else data.get("trades", [])
            trades = [Trade.from_dict(row) for row in rows]
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            log.exception("Failed to load trade journal from %s", self._path)
            raise TradeStoreError(f"cannot load trade journal {self._path}") from exc

        self._trades = trades
        log.debug("Trade journal loaded: %d trades", len(trades))
        return list(trades)

    def save(self) -> None:
        """Atomically write the current trades."""
        self._dir.mkdir(parents=True, exist_ok=True)

        data: dict[str, Any] = {
            "version": self.VERSION,
            "saved_at": now_utc_iso(),
            "trades": [t.to_dict() for t in self._trades],
        }
        try:
            self._tmp_path.write_text(json.dumps(data, indent=2))
            self._tmp_path.replace(self._path)
        except OSError as exc:
            log.exception("Failed to save trade journal to %s", self._path)
            raise TradeStoreError(f"cannot save trade journal {self._path}") from exc
        log.debug("Trade journal saved: %d trades", len(self._trades))

    def add(self, trade: Trade) -> None:
        self._trades.insert(0, trade)
        self.save()

    def update(self, trade_id: str, trade: Trade) -> None:
        """Replace the trade with *trade_id*, keeping the stored id."""
        for i, existing in enumerate(self._trades):
            if existing.id == trade_id:
                self._trades[i] = replace(trade, id=trade_id)
                self.save()
                return
        raise KeyError(trade_id)

    def delete(self, trade_id: str) -> None:
        before = len(self._trades)
        self._trades = [t for t in self._trades if t.id != trade_id]
        if len(self._trades) == before:
            raise KeyError(trade_id)
        self.save()

    def for_account(self, account_id: str) -> list[Trade]:
        return [t for t in self._trades if t.account_id == account_id]


_TRAILING_DAYS = {
    TimelineWindow.TRAILING_1M: 30,
    TimelineWindow.TRAILING_3M: 90,
    TimelineWindow.TRAILING_6M: 180,
    TimelineWindow.TRAILING_12M: 365,
}


def filter_by_timeline(
    trades: Iterable[Trade],
    window: TimelineWindow | str,
    *,
    now: datetime | None = None,
) -> list[Trade]:
    """Keep trades dated strictly after the start of *window*.

    Trailing windows count back from *now*; ``ytd`` starts on 1 January.
    Trade dates are compared at midnight UTC. Trades without a parseable
    ``YYYY-MM-DD`` date are dropped from every window except ``all_time``.
    """
    window = TimelineWindow(window)
    trades = list(trades)
    if window is TimelineWindow.ALL_TIME:
        return trades

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if window is TimelineWindow.YTD:
        start = datetime(now.year, 1, 1, tzinfo=now.tzinfo)
    else:
        start = now - timedelta(days=_TRAILING_DAYS[window])

    def trade_dt(t: Trade) -> datetime | None:
        try:
            d = date.fromisoformat(t.date)
        except (TypeError, ValueError):
            log.debug("Trade %s has no usable date (%r); skipped", t.id, t.date)
            return None
        return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)

    kept = []
    for t in trades:
        dt = trade_dt(t)
        if dt is not None and dt > start:
            kept.append(t)
    return kept
