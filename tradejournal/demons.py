"""Rule-based detection of behavioural trading anti-patterns ("demons").

Each :class:`~tradejournal.types.DemonKind` has one evaluator registered in
``_EVALUATORS``. Evaluators receive the trades in chronological order and
return a :class:`BehavioralDemon`; the revenge rule depends on that order.

Hesitation and FOMO have no detection heuristic. They are reported only as
the fixed legacy placeholder entries, and only when
``AnalyticsConfig.include_placeholder_demons`` is set.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

from tradejournal.config import DEFAULT_CONFIG, AnalyticsConfig
from tradejournal.series import chronological
from tradejournal.trade import Trade, ensure_finite
from tradejournal.types import DemonKind, PsychLevel, Severity


log = logging.getLogger(__name__)


__all__ = [
    "BehavioralDemon",
    "active_demons",
    "classify_psych_level",
    "detect_demons",
    "detect_oversizing",
    "detect_revenge",
]


@dataclass(frozen=True)
class BehavioralDemon:
    """One detected (or placeholder) behavioural pattern.

    ``frequency`` is the share of all analysed trades, in percent;
    ``impact`` is in currency units.
    """
    kind: DemonKind
    name: str
    description: str
    severity: Severity
    frequency: float
    impact: float
    detected_count: int
    trade_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def id(self) -> str:
        return self.kind.value


Evaluator = Callable[[Sequence[Trade], AnalyticsConfig], BehavioralDemon]


def _frequency(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def detect_oversizing(ordered: Sequence[Trade], config: AnalyticsConfig) -> BehavioralDemon:
    """Flag losses larger than ``oversize_multiple`` times the average loss."""
    losses = [t for t in ordered if t.pnl < 0]
    avg_loss = abs(sum(t.pnl for t in losses) / len(losses)) if losses else 0.0
    threshold = avg_loss * config.oversize_multiple

    flagged = [t for t in losses if abs(t.pnl) > threshold]
    count = len(flagged)

    return BehavioralDemon(
        kind=DemonKind.OVERSIZING,
        name="Oversizing",
        description=f"Position size exceeds risk tolerance (>{config.oversize_multiple:g}x Avg Loss)",
        severity=Severity.CRITICAL if count > config.critical_count_threshold else Severity.MEDIUM,
        frequency=_frequency(count, len(ordered)),
        impact=float(sum(t.pnl for t in flagged)),
        detected_count=count,
        trade_ids=tuple(t.id for t in flagged),
    )


def detect_revenge(ordered: Sequence[Trade], config: AnalyticsConfig) -> BehavioralDemon:
    """Flag trades opened within the revenge window after a loss.

    Only the trade immediately following each loss is examined. The impact
    is the PnL of the following trade, not of the loss.
    """
    window_ms = config.revenge_window_ms
    flagged: list[Trade] = []

    for current, nxt in zip(ordered, ordered[1:]):
        if current.pnl < 0 and nxt.created_at - current.created_at < window_ms:
            flagged.append(nxt)

    count = len(flagged)
    return BehavioralDemon(
        kind=DemonKind.REVENGE,
        name="Revenge Trading",
        description=f"Entering trades within {config.revenge_window_minutes:g}m of a loss",
        severity=Severity.CRITICAL if count > config.critical_count_threshold else Severity.HIGH,
        frequency=_frequency(count, len(ordered)),
        impact=float(sum(t.pnl for t in flagged)),
        detected_count=count,
        trade_ids=tuple(t.id for t in flagged),
    )


def _placeholder_hesitation(ordered: Sequence[Trade], config: AnalyticsConfig) -> BehavioralDemon:
    return BehavioralDemon(
        kind=DemonKind.HESITATION,
        name="Hesitation",
        description="Late entries resulting in poor R:R",
        severity=Severity.MEDIUM,
        frequency=10.6,
        impact=-1800.0,
        detected_count=5,
    )


def _placeholder_fomo(ordered: Sequence[Trade], config: AnalyticsConfig) -> BehavioralDemon:
    return BehavioralDemon(
        kind=DemonKind.FOMO,
        name="FOMO",
        description="Chasing moves outside of setup criteria",
        severity=Severity.CRITICAL,
        frequency=19.7,
        impact=-8500.0,
        detected_count=12,
    )


_EVALUATORS: dict[DemonKind, Evaluator] = {
    DemonKind.OVERSIZING: detect_oversizing,
    DemonKind.REVENGE: detect_revenge,
    DemonKind.HESITATION: _placeholder_hesitation,
    DemonKind.FOMO: _placeholder_fomo,
}

_PLACEHOLDER_KINDS = frozenset({DemonKind.HESITATION, DemonKind.FOMO})


def detect_demons(
    trades: Sequence[Trade], *, config: AnalyticsConfig | None = None
) -> list[BehavioralDemon]:
    """Run every enabled rule over *trades*.

    Returns ``[]`` for no trades. Otherwise the oversizing and revenge
    entries are always present, even with zero detections, followed by the
    placeholder entries when enabled.
    """
    cfg = config or DEFAULT_CONFIG
    if cfg.reject_non_finite:
        ensure_finite(trades)

    if not trades:
        return []

    ordered = chronological(trades)
    demons = [
        evaluate(ordered, cfg)
        for kind, evaluate in _EVALUATORS.items()
        if kind not in _PLACEHOLDER_KINDS or cfg.include_placeholder_demons
    ]

    log.debug(
        "Demon scan over %d trades: %s",
        len(ordered),
        ", ".join(f"{d.id}={d.detected_count}" for d in demons),
    )
    return demons


def active_demons(demons: Iterable[BehavioralDemon]) -> list[BehavioralDemon]:
    """Only the demons with at least one detection."""
    return [d for d in demons if d.detected_count > 0]


def classify_psych_level(demons: Iterable[BehavioralDemon]) -> PsychLevel:
    """Map the severities of *demons* to an overall psych level.

    Thresholds are checked in order, most severe first. Only the multiset
    of severities matters.
    """
    counts = Counter(Severity(d.severity) for d in demons)
    critical = counts[Severity.CRITICAL]
    high = counts[Severity.HIGH]
    medium = counts[Severity.MEDIUM]

    if critical >= 2:
        return PsychLevel.CRITICAL
    if critical >= 1 or high >= 2:
        return PsychLevel.UNSTABLE
    if high >= 1 or medium >= 2:
        return PsychLevel.CAUTION
    return PsychLevel.OPTIMAL
