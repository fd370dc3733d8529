"""Tests for tradejournal.runner – report assembly and CLI."""

import json
import logging

from tradejournal.runner import build_report, configure_logging, main
from tradejournal.store import TradeStore
from tradejournal.time_utils import trade_timestamp_ms
from tradejournal.trade import Trade
from tradejournal.types import Direction, PsychLevel


def _trade(id, pnl, time, account_id="acc-1"):
    return Trade(
        id=id,
        date="2024-01-01",
        time=time,
        instrument="NQ",
        direction=Direction.LONG,
        pnl=pnl,
        created_at=trade_timestamp_ms("2024-01-01", time),
        account_id=account_id,
    )


TRADES = [
    _trade("a", 100.0, "09:30"),
    _trade("b", -50.0, "10:00"),
    _trade("c", 20.0, "10:10", account_id="acc-2"),
]


class TestBuildReport:

    def test_bundles_all_engines(self):
        report = build_report(TRADES, account_id="acc-1")
        assert report.stats.total_trades == 3
        assert report.account is not None
        assert report.account.total_trades == 2
        assert [d.id for d in report.demons] == ["oversizing", "revenge"]
        assert report.psych_level is PsychLevel.CAUTION

    def test_account_optional(self):
        assert build_report(TRADES).account is None

    def test_empty(self):
        report = build_report([])
        assert report.demons == []
        assert report.psych_level is PsychLevel.OPTIMAL


class TestConfigureLogging:

    def test_force_installs_handler(self):
        configure_logging("DEBUG", force=True)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_non_destructive_when_configured(self):
        configure_logging("DEBUG", force=True)
        handler = logging.getLogger().handlers[0]
        configure_logging("ERROR")
        assert logging.getLogger().handlers == [handler]


class TestMain:

    def test_reports_journal(self, journal_dir, caplog):
        store = TradeStore(journal_dir)
        for t in TRADES:
            store.add(t)

        with caplog.at_level(logging.INFO, logger="tradejournal.runner"):
            assert main([str(journal_dir), "--account", "acc-1"]) == 0

        assert "Trades 3" in caplog.text
        assert "Account acc-1" in caplog.text
        assert "Psych level: CAUTION" in caplog.text

    def test_config_file(self, journal_dir, tmp_path, caplog):
        store = TradeStore(journal_dir)
        for t in TRADES:
            store.add(t)
        cfg = tmp_path / "analytics.json"
        cfg.write_text(json.dumps({"analytics": {"include_placeholder_demons": True}}))

        with caplog.at_level(logging.INFO, logger="tradejournal.runner"):
            assert main([str(journal_dir), "--config", str(cfg)]) == 0

        assert "FOMO" in caplog.text
        assert "Psych level: UNSTABLE" in caplog.text

    def test_window_skips_undated_rows(self, journal_dir, caplog):
        store = TradeStore(journal_dir)
        for t in TRADES:
            store.add(t)
        store.add(Trade(
            id="undated",
            date="",
            time="",
            instrument="NQ",
            direction=Direction.LONG,
            pnl=10.0,
            created_at=0,
        ))

        with caplog.at_level(logging.INFO, logger="tradejournal.runner"):
            assert main([str(journal_dir), "--window", "ytd"]) == 0

        assert "Trades 0" in caplog.text

    def test_bad_journal_returns_error(self, journal_dir):
        journal_dir.mkdir(parents=True)
        (journal_dir / "trades.json").write_text("{broken")
        assert main([str(journal_dir)]) == 1
