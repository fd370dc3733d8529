"""Journal trade record, the sole input to the analytics engines."""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from tradejournal.time_utils import trade_timestamp_ms
from tradejournal.types import Direction


__all__ = [
    "InvalidTradeError",
    "Trade",
    "ensure_finite",
]


class InvalidTradeError(ValueError):
    """A trade violates the input contract (bad direction, non-finite number)."""


def _opt_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class Trade:
    """A closed trade as recorded in the journal.

    ``date`` is kept as the literal ``YYYY-MM-DD`` string; daily grouping
    never parses it. ``created_at`` (ms since epoch) is the chronological
    sort key and breaks ties between trades on the same day.
    """
    id: str
    date: str
    time: str
    instrument: str
    direction: Direction
    pnl: float
    created_at: int
    session: str = ""
    risk_reward: float | None = None
    account_id: str | None = None
    take_profit: float | None = None
    exit_price: float | None = None
    entry_price: float | None = None
    stop_loss: float | None = None
    followed_rules: bool = True
    setups: tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Trade":
        """Build a trade from a stored JSON blob (camelCase keys).

        Missing ``pnl`` coerces to ``0.0``; missing optional numbers become
        ``None``. ``createdAt`` falls back to ``date`` + ``time``.
        """
        try:
            direction = Direction(str(raw.get("direction", "long")).lower())
        except ValueError as exc:
            raise InvalidTradeError(
                f"trade {raw.get('id')!r} has unknown direction {raw.get('direction')!r}"
            ) from exc

        date = str(raw.get("date", ""))
        time = str(raw.get("time", ""))
        created_at = raw.get("createdAt")
        if created_at in (None, ""):
            created_at = trade_timestamp_ms(date, time) if date else 0

        return cls(
            id=str(raw.get("id", "")),
            date=date,
            time=time,
            instrument=str(raw.get("instrument", "")),
            direction=direction,
            pnl=float(raw.get("pnl") or 0.0),
            created_at=int(created_at),
            session=str(raw.get("session") or ""),
            risk_reward=_opt_float(raw.get("riskReward")),
            account_id=raw.get("accountId") or None,
            take_profit=_opt_float(raw.get("takeProfit")),
            exit_price=_opt_float(raw.get("exitPrice")),
            entry_price=_opt_float(raw.get("entryPrice")),
            stop_loss=_opt_float(raw.get("stopLoss")),
            followed_rules=bool(raw.get("followedRules", True)),
            setups=tuple(raw.get("setup") or ()),
            notes=str(raw.get("notes") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Inverse of :meth:`from_dict`; ``None`` fields are omitted."""
        out: dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "instrument": self.instrument,
            "direction": self.direction.value,
            "session": self.session,
            "pnl": self.pnl,
            "createdAt": self.created_at,
            "followedRules": self.followed_rules,
            "setup": list(self.setups),
            "notes": self.notes,
        }
        optional = {
            "riskReward": self.risk_reward,
            "accountId": self.account_id,
            "takeProfit": self.take_profit,
            "exitPrice": self.exit_price,
            "entryPrice": self.entry_price,
            "stopLoss": self.stop_loss,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        return out


_CHECKED_FIELDS = ("pnl", "risk_reward", "take_profit", "exit_price")


def ensure_finite(trades: Iterable[Trade]) -> None:
    """Raise :class:`InvalidTradeError` if any numeric field is NaN or infinite."""
    for t in trades:
        for name in _CHECKED_FIELDS:
            value = getattr(t, name)
            if value is not None and not math.isfinite(value):
                raise InvalidTradeError(f"trade {t.id!r} has non-finite {name}: {value!r}")
