# tradejournal/__init__.py
"""
Tradejournal - performance analytics for a personal trading journal.

Turns a list of recorded trades into risk/performance statistics, per-account
risk ratios and behavioural-pattern ("demon") detections.
"""

from .account import AccountMetrics, compute_account_metrics
from .config import AnalyticsConfig
from .demons import BehavioralDemon, classify_psych_level, detect_demons
from .metrics import Stats, compute_stats
from .trade import InvalidTradeError, Trade
from .types import DemonKind, Direction, PsychLevel, Severity

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AccountMetrics",
    "AnalyticsConfig",
    "BehavioralDemon",
    "DemonKind",
    "Direction",
    "InvalidTradeError",
    "PsychLevel",
    "Severity",
    "Stats",
    "Trade",
    "classify_psych_level",
    "compute_account_metrics",
    "compute_stats",
    "detect_demons",
]
