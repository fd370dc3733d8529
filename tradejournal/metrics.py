"""Performance metrics over an arbitrary set of journal trades."""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from tradejournal.config import DEFAULT_CONFIG, AnalyticsConfig
from tradejournal.series import (
    chronological,
    compute_streaks,
    cumulative_pnl,
    daily_pnl,
    max_drawdown,
    mean_and_pstdev,
)
from tradejournal.trade import Trade, ensure_finite


log = logging.getLogger(__name__)


__all__ = [
    "DayPnL",
    "GroupPnL",
    "Stats",
    "compute_stats",
    "performance_by_instrument",
    "performance_by_session",
    "sharpe_ratio",
]


@dataclass(frozen=True)
class DayPnL:
    date: str
    pnl: float


@dataclass(frozen=True)
class GroupPnL:
    name: str
    value: float


@dataclass(frozen=True)
class Stats:
    """Aggregate statistics for a set of trades.

    ``avg_loss`` is a positive magnitude. Break-even trades count as losses
    for the win/loss split and extend losing streaks.
    """
    total_trades: int
    win_rate: float
    profit_factor: float
    total_pnl: float
    net_pnl: float
    avg_win: float
    avg_loss: float
    best_trade: float
    worst_trade: float
    current_streak: int
    longest_win_streak: int
    longest_lose_streak: int
    avg_risk_reward: float
    max_drawdown: float
    sharpe_ratio: float
    expectancy: float
    daily_average: float
    best_day: DayPnL
    worst_day: DayPnL
    avg_payout: float

    @classmethod
    def empty(cls) -> "Stats":
        return cls(
            total_trades=0,
            win_rate=0.0,
            profit_factor=0.0,
            total_pnl=0.0,
            net_pnl=0.0,
            avg_win=0.0,
            avg_loss=0.0,
            best_trade=0.0,
            worst_trade=0.0,
            current_streak=0,
            longest_win_streak=0,
            longest_lose_streak=0,
            avg_risk_reward=0.0,
            max_drawdown=0.0,
            sharpe_ratio=0.0,
            expectancy=0.0,
            daily_average=0.0,
            best_day=DayPnL("", 0.0),
            worst_day=DayPnL("", 0.0),
            avg_payout=0.0,
        )


def sharpe_ratio(daily_values: Sequence[float], *, annualization_days: int = 252) -> float:
    """Mean / population std of daily PnL, annualised by ``sqrt(days)``.

    Zero when there are fewer than two days or the std is zero.
    """
    if len(daily_values) < 2:
        return 0.0
    mean, std = mean_and_pstdev(daily_values)
    if std == 0:
        return 0.0
    return mean / std * math.sqrt(annualization_days)


def _best_and_worst_day(days: dict[str, float]) -> tuple[DayPnL, DayPnL]:
    best = DayPnL("", float("-inf"))
    worst = DayPnL("", float("inf"))
    # Strict comparisons: the earliest day wins a tie.
    for date, pnl in days.items():
        if pnl > best.pnl:
            best = DayPnL(date, pnl)
        if pnl < worst.pnl:
            worst = DayPnL(date, pnl)
    if not best.date:
        best = DayPnL("-", 0.0)
    if not worst.date:
        worst = DayPnL("-", 0.0)
    return best, worst


def compute_stats(trades: Sequence[Trade], *, config: AnalyticsConfig | None = None) -> Stats:
    """Compute aggregate statistics for *trades*.

    Order-insensitive except for streaks and drawdown, which follow
    ``created_at``. The input list is never modified.

    Args:
        trades: Trades to analyse, possibly empty.
        config: Tunables; ``DEFAULT_CONFIG`` when omitted.

    Returns:
        Stats record; :meth:`Stats.empty` for no trades.

    Raises:
        InvalidTradeError: A trade carries a non-finite number and
            ``config.reject_non_finite`` is set.
    """
    cfg = config or DEFAULT_CONFIG
    if cfg.reject_non_finite:
        ensure_finite(trades)

    n = len(trades)
    if n == 0:
        return Stats.empty()

    wins = [t.pnl for t in trades if t.pnl > 0]
    losses = [t.pnl for t in trades if t.pnl <= 0]

    gross_win = sum(wins)
    gross_loss = abs(sum(losses))
    total_pnl = sum(t.pnl for t in trades)

    # No losses: the gross win is reported as-is rather than infinity.
    profit_factor = gross_win if gross_loss == 0 else gross_win / gross_loss

    ordered = chronological(trades)
    streaks = compute_streaks(ordered)

    days = daily_pnl(ordered)
    best_day, worst_day = _best_and_worst_day(days)
    daily_average = total_pnl / len(days) if days else 0.0

    mdd = max_drawdown(cumulative_pnl(ordered))

    avg_win = gross_win / len(wins) if wins else 0.0
    avg_loss = gross_loss / len(losses) if losses else 0.0
    avg_risk_reward = avg_win / avg_loss if avg_loss != 0 else 0.0

    win_frac = len(wins) / n
    loss_frac = len(losses) / n
    expectancy = win_frac * avg_win - loss_frac * avg_loss

    sharpe = sharpe_ratio(list(days.values()), annualization_days=cfg.annualization_days)

    log.debug(
        "Stats computed: %d trades over %d days, pnl %.2f", n, len(days), total_pnl
    )

    return Stats(
        total_trades=n,
        win_rate=win_frac * 100,
        profit_factor=float(profit_factor),
        total_pnl=float(total_pnl),
        net_pnl=float(total_pnl),
        avg_win=float(avg_win),
        avg_loss=float(avg_loss),
        best_trade=max(t.pnl for t in trades),
        worst_trade=min(t.pnl for t in trades),
        current_streak=streaks.current,
        longest_win_streak=streaks.longest_win,
        longest_lose_streak=streaks.longest_lose,
        avg_risk_reward=float(avg_risk_reward),
        max_drawdown=mdd,
        sharpe_ratio=float(sharpe),
        expectancy=float(expectancy),
        daily_average=float(daily_average),
        best_day=best_day,
        worst_day=worst_day,
        avg_payout=float(avg_win),
    )


def _sum_by(trades: Sequence[Trade], key) -> list[GroupPnL]:
    groups: dict[str, float] = {}
    for t in trades:
        name = key(t)
        groups[name] = groups.get(name, 0.0) + t.pnl
    return [GroupPnL(name, value) for name, value in groups.items()]


def performance_by_instrument(trades: Sequence[Trade]) -> list[GroupPnL]:
    """Total PnL per instrument, in first-seen order."""
    return _sum_by(trades, lambda t: t.instrument)


def performance_by_session(trades: Sequence[Trade]) -> list[GroupPnL]:
    """Total PnL per session; trades without a session group as ``"Unknown"``."""
    return _sum_by(trades, lambda t: t.session or "Unknown")
