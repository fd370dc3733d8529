"""Tests for tradejournal.trade – journal trade records."""

import math

import pytest

from tradejournal.time_utils import trade_timestamp_ms
from tradejournal.trade import InvalidTradeError, Trade, ensure_finite
from tradejournal.types import Direction


def _raw(**overrides):
    raw = {
        "id": "abc",
        "tradeType": "LIVE",
        "date": "2023-12-01",
        "time": "09:30",
        "instrument": "NQ",
        "direction": "long",
        "session": "NY AM",
        "pnl": 125.5,
        "riskReward": 2.5,
        "accountId": "acc-1",
        "takeProfit": 17000.0,
        "exitPrice": 17010.0,
        "followedRules": True,
        "setup": ["Breakout"],
        "screenshots": [],
        "createdAt": 1701423000000,
        "updatedAt": 1701423000000,
    }
    raw.update(overrides)
    return raw


class TestFromDict:

    def test_full_record(self):
        t = Trade.from_dict(_raw())
        assert t.id == "abc"
        assert t.direction is Direction.LONG
        assert t.pnl == 125.5
        assert t.risk_reward == 2.5
        assert t.account_id == "acc-1"
        assert t.take_profit == 17000.0
        assert t.exit_price == 17010.0
        assert t.created_at == 1701423000000
        assert t.setups == ("Breakout",)

    def test_missing_numbers_coerce(self):
        raw = _raw()
        for key in ("pnl", "riskReward", "takeProfit", "exitPrice", "accountId"):
            raw.pop(key)
        t = Trade.from_dict(raw)
        assert t.pnl == 0.0
        assert t.risk_reward is None
        assert t.take_profit is None
        assert t.exit_price is None
        assert t.account_id is None

    def test_created_at_falls_back_to_date_and_time(self):
        raw = _raw()
        raw.pop("createdAt")
        t = Trade.from_dict(raw)
        assert t.created_at == trade_timestamp_ms("2023-12-01", "09:30")

    def test_unknown_direction_rejected(self):
        with pytest.raises(InvalidTradeError, match="direction"):
            Trade.from_dict(_raw(direction="sideways"))

    def test_round_trip(self):
        t = Trade.from_dict(_raw())
        assert Trade.from_dict(t.to_dict()) == t

    def test_to_dict_omits_unset_optionals(self):
        raw = _raw()
        raw.pop("riskReward")
        d = Trade.from_dict(raw).to_dict()
        assert "riskReward" not in d
        assert d["direction"] == "long"

    def test_frozen(self):
        t = Trade.from_dict(_raw())
        with pytest.raises(AttributeError):
            t.pnl = 0.0


class TestEnsureFinite:

    def test_finite_passes(self):
        ensure_finite([Trade.from_dict(_raw())])

    @pytest.mark.parametrize("key", ["pnl", "riskReward", "takeProfit", "exitPrice"])
    def test_non_finite_fields_rejected(self, key):
        t = Trade.from_dict(_raw(**{key: math.nan}))
        with pytest.raises(InvalidTradeError, match="abc"):
            ensure_finite([t])

    def test_infinity_rejected(self):
        t = Trade.from_dict(_raw(pnl=math.inf))
        with pytest.raises(InvalidTradeError):
            ensure_finite([t])
