"""Shared enumerations for the journal analytics."""

from enum import Enum


class Direction(str, Enum):
    """Trading direction recorded on a journal entry."""
    LONG = "long"
    SHORT = "short"


class Severity(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class PsychLevel(str, Enum):
    """Overall behavioural state derived from detected demons."""
    OPTIMAL = "OPTIMAL"
    CAUTION = "CAUTION"
    UNSTABLE = "UNSTABLE"
    CRITICAL = "CRITICAL"


class DemonKind(str, Enum):
    """Behavioural anti-patterns the detector knows about."""
    OVERSIZING = "oversizing"
    REVENGE = "revenge"
    HESITATION = "hesitation"
    FOMO = "fomo"


class TimelineWindow(str, Enum):
    TRAILING_1M = "trailing_1m"
    TRAILING_3M = "trailing_3m"
    TRAILING_6M = "trailing_6m"
    TRAILING_12M = "trailing_12m"
    YTD = "ytd"
    ALL_TIME = "all_time"
