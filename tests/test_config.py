"""Tests for tradejournal.config – analytics settings."""

import pytest

from tradejournal.config import DEFAULT_CONFIG, AnalyticsConfig


class TestAnalyticsConfig:

    def test_defaults(self):
        assert DEFAULT_CONFIG.annualization_days == 252
        assert DEFAULT_CONFIG.oversize_multiple == 2.0
        assert DEFAULT_CONFIG.revenge_window_minutes == 30
        assert DEFAULT_CONFIG.revenge_window_ms == 30 * 60 * 1000
        assert DEFAULT_CONFIG.critical_count_threshold == 3
        assert DEFAULT_CONFIG.include_placeholder_demons is False
        assert DEFAULT_CONFIG.reject_non_finite is True

    def test_from_raw_empty_is_default(self):
        assert AnalyticsConfig.from_raw({}) == DEFAULT_CONFIG
        assert AnalyticsConfig.from_raw(None) == DEFAULT_CONFIG

    def test_from_raw_overrides(self):
        cfg = AnalyticsConfig.from_raw(
            {"annualization_days": "365", "revenge_window_minutes": 45, "include_placeholder_demons": True}
        )
        assert cfg.annualization_days == 365
        assert cfg.revenge_window_minutes == 45.0
        assert cfg.include_placeholder_demons is True

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="unknown keys"):
            AnalyticsConfig.from_raw({"sharpe_days": 252})

    def test_non_numeric_rejected(self):
        with pytest.raises(ValueError, match="oversize_multiple is not numeric"):
            AnalyticsConfig.from_raw({"oversize_multiple": "big"})

    @pytest.mark.parametrize(
        "raw",
        [
            {"annualization_days": 0},
            {"oversize_multiple": -1},
            {"revenge_window_minutes": 0},
            {"critical_count_threshold": -1},
        ],
    )
    def test_out_of_range_rejected(self, raw):
        with pytest.raises(ValueError, match="must be"):
            AnalyticsConfig.from_raw(raw)
