"""Per-account performance and risk ratios."""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from tradejournal.config import DEFAULT_CONFIG, AnalyticsConfig
from tradejournal.series import (
    chronological,
    compute_streaks,
    cumulative_pnl,
    downside_deviation,
    max_drawdown,
    mean_and_pstdev,
)
from tradejournal.trade import Trade, ensure_finite
from tradejournal.types import Direction


log = logging.getLogger(__name__)


__all__ = [
    "AccountMetrics",
    "compute_account_metrics",
    "compute_all_account_metrics",
    "hit_take_profit",
]


# Reported when a ratio's denominator is zero but the numerator is positive.
RATIO_SENTINEL = 2.0

# Profit factor reported when there are wins but no losses.
PROFIT_FACTOR_CAP = 999.0


@dataclass(frozen=True)
class AccountMetrics:
    """Statistics for the trades of a single account.

    Unlike :class:`tradejournal.metrics.Stats`, trades are split three ways
    (win ``> 0``, loss ``< 0``, break-even ``== 0``) and the Sharpe ratio is
    computed per trade without annualisation.
    """
    account_id: str
    total_trades: int = 0
    win_rate: float = 0.0
    break_even_rate: float = 0.0
    break_even_count: int = 0
    avg_r_multiple: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    total_pnl: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    mar_ratio: float = 0.0
    calmar_ratio: float = 0.0
    trades_hit_tp: int = 0
    current_streak: int = 0
    longest_win_streak: int = 0
    longest_lose_streak: int = 0

    @classmethod
    def empty(cls, account_id: str) -> "AccountMetrics":
        return cls(account_id=account_id)

    def rounded(self) -> "AccountMetrics":
        """Copy rounded for display: ratios to 2 dp, rates to 1 dp."""
        return replace(
            self,
            win_rate=round(self.win_rate, 1),
            break_even_rate=round(self.break_even_rate, 1),
            avg_r_multiple=round(self.avg_r_multiple, 2),
            profit_factor=round(self.profit_factor, 2),
            expectancy=round(self.expectancy, 2),
            total_pnl=round(self.total_pnl, 2),
            avg_win=round(self.avg_win, 2),
            avg_loss=round(self.avg_loss, 2),
            max_drawdown=round(self.max_drawdown, 2),
            sharpe_ratio=round(self.sharpe_ratio, 2),
            sortino_ratio=round(self.sortino_ratio, 2),
            mar_ratio=round(self.mar_ratio, 2),
            calmar_ratio=round(self.calmar_ratio, 2),
        )


def hit_take_profit(trade: Trade) -> bool | None:
    """Whether the exit reached the take-profit in the trade's direction.

    ``None`` when either price is missing (unset prices are stored as 0).
    """
    if not trade.take_profit or not trade.exit_price:
        return None
    if trade.direction is Direction.LONG:
        return trade.exit_price >= trade.take_profit
    return trade.exit_price <= trade.take_profit


def _ratio_or_sentinel(numerator: float, denominator: float) -> float:
    if denominator > 0:
        return numerator / denominator
    return RATIO_SENTINEL if numerator > 0 else 0.0


def compute_account_metrics(
    account_id: str,
    trades: Sequence[Trade],
    *,
    config: AnalyticsConfig | None = None,
) -> AccountMetrics:
    """Compute metrics for the trades whose ``account_id`` matches.

    Args:
        account_id: Account to scope to.
        trades: The full trade list; filtered here, never modified.
        config: Tunables; ``DEFAULT_CONFIG`` when omitted.

    Returns:
        AccountMetrics tagged with *account_id*; all zero when the account
        has no trades.
    """
    cfg = config or DEFAULT_CONFIG

    account_trades = [t for t in trades if t.account_id == account_id]
    if cfg.reject_non_finite:
        ensure_finite(account_trades)

    total = len(account_trades)
    if total == 0:
        return AccountMetrics.empty(account_id)

    wins = [t.pnl for t in account_trades if t.pnl > 0]
    losses = [t.pnl for t in account_trades if t.pnl < 0]
    break_evens = sum(1 for t in account_trades if t.pnl == 0)

    gross_win = sum(wins)
    gross_loss = abs(sum(losses))
    if gross_loss > 0:
        profit_factor = gross_win / gross_loss
    else:
        profit_factor = PROFIT_FACTOR_CAP if gross_win > 0 else 0.0

    avg_win = gross_win / len(wins) if wins else 0.0
    avg_loss = gross_loss / len(losses) if losses else 0.0
    expectancy = len(wins) / total * avg_win - len(losses) / total * avg_loss

    r_multiples = [t.risk_reward for t in account_trades if t.risk_reward is not None]
    avg_r = sum(r_multiples) / len(r_multiples) if r_multiples else 0.0

    ordered = chronological(account_trades)
    pnls = [t.pnl for t in ordered]
    mdd = max_drawdown(cumulative_pnl(ordered), baseline=0.0)

    mean, std = mean_and_pstdev(pnls)
    sharpe = mean / std if std > 0 else 0.0
    sortino = _ratio_or_sentinel(mean, downside_deviation(pnls))

    total_pnl = sum(pnls)
    mar = _ratio_or_sentinel(total_pnl, mdd)

    tp_hits = sum(1 for t in account_trades if hit_take_profit(t))
    streaks = compute_streaks(ordered)

    log.debug("Account %s: %d trades, pnl %.2f", account_id, total, total_pnl)

    return AccountMetrics(
        account_id=account_id,
        total_trades=total,
        win_rate=len(wins) / total * 100,
        break_even_rate=break_evens / total * 100,
        break_even_count=break_evens,
        avg_r_multiple=float(avg_r),
        profit_factor=float(profit_factor),
        expectancy=float(expectancy),
        total_pnl=float(total_pnl),
        avg_win=float(avg_win),
        avg_loss=float(avg_loss),
        max_drawdown=mdd,
        sharpe_ratio=float(sharpe),
        sortino_ratio=float(sortino),
        mar_ratio=float(mar),
        calmar_ratio=float(mar),
        trades_hit_tp=tp_hits,
        current_streak=streaks.current,
        longest_win_streak=streaks.longest_win,
        longest_lose_streak=streaks.longest_lose,
    )


def compute_all_account_metrics(
    account_ids: Iterable[str],
    trades: Sequence[Trade],
    *,
    config: AnalyticsConfig | None = None,
) -> dict[str, AccountMetrics]:
    """Metrics for each account id, keyed by id."""
    return {
        account_id: compute_account_metrics(account_id, trades, config=config)
        for account_id in account_ids
    }
