# examples/account_dashboard.py
"""Print per-account metrics and demon warnings for a journal directory."""
import logging
import sys
from pathlib import Path

from tradejournal import classify_psych_level, compute_account_metrics, detect_demons
from tradejournal.demons import active_demons
from tradejournal.runner import configure_logging
from tradejournal.store import TradeStore, filter_by_timeline

log = logging.getLogger(__name__)


def main(journal_dir: Path) -> None:
    store = TradeStore(journal_dir)
    trades = filter_by_timeline(store.load(), "trailing_3m")

    account_ids = sorted({t.account_id for t in trades if t.account_id})
    for account_id in account_ids:
        m = compute_account_metrics(account_id, trades).rounded()
        log.info(
            "%s: %d trades, win %.1f%%, PF %.2f, Sortino %.2f, MAR %.2f",
            account_id, m.total_trades, m.win_rate, m.profit_factor,
            m.sortino_ratio, m.mar_ratio,
        )

    demons = detect_demons(trades)
    for d in active_demons(demons):
        log.warning("%s detected %d times (impact %.2f)", d.name, d.detected_count, d.impact)
    log.info("Psych level: %s", classify_psych_level(demons).value)


if __name__ == "__main__":
    configure_logging("INFO")
    main(Path(sys.argv[1] if len(sys.argv) > 1 else "journal"))
