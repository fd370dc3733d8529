"""
Journal report assembly and command-line entry point.
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from tradejournal.account import AccountMetrics, compute_account_metrics
from tradejournal.config import AnalyticsConfig
from tradejournal.demons import BehavioralDemon, classify_psych_level, detect_demons
from tradejournal.metrics import Stats, compute_stats
from tradejournal.store import TradeStore, TradeStoreError, filter_by_timeline
from tradejournal.trade import InvalidTradeError, Trade
from tradejournal.types import PsychLevel, TimelineWindow


log = logging.getLogger(__name__)


__all__ = [
    "JournalReport",
    "build_report",
    "configure_logging",
    "main",
]


def configure_logging(level: str = "INFO", force: bool = False) -> None:
    """
    Configure root logger with console output.

    By default, this is non-destructive: if the root logger already has handlers,
    it will do nothing (assuming the application has configured logging).

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        force: If True, clear existing handlers and force this configuration
    """
    root_logger = logging.getLogger()

    if root_logger.hasHandlers() and not force:
        return

    root_logger.setLevel(level.upper())

    if force:
        root_logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


@dataclass(frozen=True)
class JournalReport:
    stats: Stats
    demons: list[BehavioralDemon]
    psych_level: PsychLevel
    account: AccountMetrics | None = None


def build_report(
    trades: Sequence[Trade],
    *,
    account_id: str | None = None,
    config: AnalyticsConfig | None = None,
) -> JournalReport:
    """Run all engines over *trades*.

    Stats and demons cover the whole list; account metrics are added when
    *account_id* is given.
    """
    demons = detect_demons(trades, config=config)
    return JournalReport(
        stats=compute_stats(trades, config=config),
        demons=demons,
        psych_level=classify_psych_level(demons),
        account=(
            compute_account_metrics(account_id, trades, config=config)
            if account_id is not None
            else None
        ),
    )


def _log_report(report: JournalReport) -> None:
    s = report.stats
    log.info(
        "Trades %d | win rate %.1f%% | PF %.2f | PnL %.2f | expectancy %.2f",
        s.total_trades, s.win_rate, s.profit_factor, s.total_pnl, s.expectancy,
    )
    log.info(
        "Max drawdown %.2f | Sharpe %.2f | streak %d (best %d, worst %d)",
        s.max_drawdown, s.sharpe_ratio, s.current_streak,
        s.longest_win_streak, s.longest_lose_streak,
    )
    log.info(
        "Best day %s %.2f | worst day %s %.2f | daily avg %.2f",
        s.best_day.date, s.best_day.pnl, s.worst_day.date, s.worst_day.pnl, s.daily_average,
    )
    if report.account is not None:
        a = report.account.rounded()
        log.info(
            "Account %s: trades %d | BE %.1f%% | avg R %.2f | Sortino %.2f | MAR %.2f | TP hits %d",
            a.account_id, a.total_trades, a.break_even_rate, a.avg_r_multiple,
            a.sortino_ratio, a.mar_ratio, a.trades_hit_tp,
        )
    for d in report.demons:
        log.info(
            "Demon %-16s %-8s count %d (%.1f%%) impact %.2f",
            d.name, d.severity.value, d.detected_count, d.frequency, d.impact,
        )
    log.info("Psych level: %s", report.psych_level.value)


def _load_config(path: Path | None) -> AnalyticsConfig | None:
    if path is None:
        return None
    raw = json.loads(path.read_text())
    return AnalyticsConfig.from_raw(raw.get("analytics", raw))


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Summarise a trade journal.")
    parser.add_argument("journal_dir", type=Path, help="directory holding trades.json")
    parser.add_argument("--account", help="also report metrics for this account id")
    parser.add_argument(
        "--window",
        choices=[w.value for w in TimelineWindow],
        default=TimelineWindow.ALL_TIME.value,
    )
    parser.add_argument("--config", type=Path, help="JSON file with analytics settings")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        config = _load_config(args.config)
        trades = TradeStore(args.journal_dir).load()
        trades = filter_by_timeline(trades, args.window)
        report = build_report(trades, account_id=args.account, config=config)
    except (TradeStoreError, InvalidTradeError, ValueError, OSError) as exc:
        log.error("%s", exc)
        return 1

    _log_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
