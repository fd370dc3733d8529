"""Numeric primitives shared by the analytics engines.

Everything here is a pure function over trades or plain floats.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from tradejournal.time_utils import short_date_label
from tradejournal.trade import Trade


__all__ = [
    "EquityPoint",
    "StreakSummary",
    "chronological",
    "compute_streaks",
    "cumulative_pnl",
    "daily_pnl",
    "downside_deviation",
    "equity_curve",
    "max_drawdown",
    "mean_and_pstdev",
    "normalize_series",
]


@dataclass(frozen=True)
class EquityPoint:
    """One step of the cumulative realised PnL curve."""
    date: str       # chart label, e.g. "Dec 1"
    raw_date: str
    value: float
    trade_id: str


def chronological(trades: Iterable[Trade]) -> list[Trade]:
    """Return a new list sorted ascending by ``created_at`` (stable)."""
    return sorted(trades, key=lambda t: t.created_at)


def cumulative_pnl(trades: Sequence[Trade]) -> list[float]:
    """Running PnL total, in the order given."""
    out: list[float] = []
    running = 0.0
    for t in trades:
        running += t.pnl
        out.append(running)
    return out


@dataclass(frozen=True)
class StreakSummary:
    current: int         # > 0 winning run, < 0 losing run
    longest_win: int
    longest_lose: int


def compute_streaks(ordered: Sequence[Trade]) -> StreakSummary:
    """Walk trades in the given order tracking signed and longest runs.

    A trade with ``pnl <= 0`` counts towards a losing run.
    """
    current = 0
    win_run = lose_run = 0
    longest_win = longest_lose = 0

    for t in ordered:
        if t.pnl > 0:
            win_run += 1
            lose_run = 0
            current = 1 if current < 0 else current + 1
        else:
            lose_run += 1
            win_run = 0
            current = -1 if current > 0 else current - 1
        longest_win = max(longest_win, win_run)
        longest_lose = max(longest_lose, lose_run)

    return StreakSummary(current=current, longest_win=longest_win, longest_lose=longest_lose)


def equity_curve(trades: Iterable[Trade]) -> list[EquityPoint]:
    """Cumulative realised PnL per trade in chronological order.

    No starting capital is assumed; the curve starts from the first trade's PnL.
    """
    ordered = chronological(trades)
    return [
        EquityPoint(
            date=short_date_label(t.date),
            raw_date=t.date,
            value=value,
            trade_id=t.id,
        )
        for t, value in zip(ordered, cumulative_pnl(ordered))
    ]


def max_drawdown(values: Iterable[float], *, baseline: float | None = None) -> float:
    """Largest decline from a running peak, as a positive magnitude.

    The peak starts at the first value, or at *baseline* when given (an
    account that starts flat uses ``baseline=0.0``).
    """
    peak = float("-inf") if baseline is None else float(baseline)
    mdd = 0.0
    for x in values:
        peak = max(peak, x)
        mdd = max(mdd, peak - x)
    return float(mdd)


def daily_pnl(trades: Iterable[Trade]) -> dict[str, float]:
    """Sum PnL per literal ``date`` string.

    Keys are inserted in chronological order of each day's first trade.
    """
    days: dict[str, float] = {}
    for t in chronological(trades):
        days[t.date] = days.get(t.date, 0.0) + t.pnl
    return days


def mean_and_pstdev(values: Sequence[float]) -> tuple[float, float]:
    """Mean and population standard deviation; ``(0.0, 0.0)`` when empty."""
    if not values:
        return 0.0, 0.0
    arr = np.asarray(values, dtype=float)
    return float(arr.mean()), float(arr.std(ddof=0))


def downside_deviation(values: Sequence[float]) -> float:
    """Root mean square of the negative values (target return of zero)."""
    arr = np.asarray(values, dtype=float)
    negative = arr[arr < 0]
    if negative.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(negative ** 2)))


def normalize_series(values: Sequence[float]) -> list[float]:
    """Min-max scale to 0..100 for overlay charts; a flat series maps to 50."""
    if not values:
        return []
    arr = np.asarray(values, dtype=float)
    lo, hi = float(arr.min()), float(arr.max())
    if hi == lo:
        return [50.0] * len(values)
    return [float(v) for v in (arr - lo) / (hi - lo) * 100]
