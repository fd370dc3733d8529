from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AnalyticsConfig:
    annualization_days: int = 252
    oversize_multiple: float = 2.0
    revenge_window_minutes: float = 30.0
    critical_count_threshold: int = 3
    include_placeholder_demons: bool = False
    reject_non_finite: bool = True

    @property
    def revenge_window_ms(self) -> float:
        return self.revenge_window_minutes * 60 * 1000

    @classmethod
    def from_raw(cls, raw: dict[str, Any] | None) -> AnalyticsConfig:
        """Validate and construct from a raw config dict.

        Missing keys take the defaults. Raises ``ValueError`` with a clear
        message on bad values instead of letting ``TypeError`` propagate.
        """
        raw = dict(raw or {})
        unknown = set(raw) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"analytics config has unknown keys: {sorted(unknown)}")

        defaults = cls()
        try:
            annualization_days = int(raw.get("annualization_days", defaults.annualization_days))
        except (TypeError, ValueError) as exc:
            raise ValueError("analytics.annualization_days is not an integer") from exc
        try:
            oversize_multiple = float(raw.get("oversize_multiple", defaults.oversize_multiple))
        except (TypeError, ValueError) as exc:
            raise ValueError("analytics.oversize_multiple is not numeric") from exc
        try:
            revenge_window = float(
                raw.get("revenge_window_minutes", defaults.revenge_window_minutes)
            )
        except (TypeError, ValueError) as exc:
            raise ValueError("analytics.revenge_window_minutes is not numeric") from exc
        try:
            critical_threshold = int(
                raw.get("critical_count_threshold", defaults.critical_count_threshold)
            )
        except (TypeError, ValueError) as exc:
            raise ValueError("analytics.critical_count_threshold is not an integer") from exc

        if annualization_days <= 0:
            raise ValueError("analytics.annualization_days must be > 0")
        if oversize_multiple <= 0:
            raise ValueError("analytics.oversize_multiple must be > 0")
        if revenge_window <= 0:
            raise ValueError("analytics.revenge_window_minutes must be > 0")
        if critical_threshold < 0:
            raise ValueError("analytics.critical_count_threshold must be >= 0")

        return cls(
            annualization_days=annualization_days,
            oversize_multiple=oversize_multiple,
            revenge_window_minutes=revenge_window,
            critical_count_threshold=critical_threshold,
            include_placeholder_demons=bool(
                raw.get("include_placeholder_demons", defaults.include_placeholder_demons)
            ),
            reject_non_finite=bool(raw.get("reject_non_finite", defaults.reject_non_finite)),
        )


DEFAULT_CONFIG = AnalyticsConfig()
