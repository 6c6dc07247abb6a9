"""
Metrics Policy (``inventory_kernel.domain.policy``).

Responsibility
--------------
Typed, frozen definition of every tunable number the metrics and
aggregation engines use: risk-category thresholds, the risk-score clamp,
the lead-time ceiling, the loss-projection multiplier and the dashboard
recent-item limit. Keeping them here means tuning never touches the
calculation code.

Invariants enforced
-------------------
* ``risk_score_floor < warning_threshold < critical_threshold <= risk_score_ceiling``.
* ``max_lead_time_days``, ``loss_projection_days`` and
  ``dashboard_recent_limit`` are positive.
* Numeric settings are ``Decimal`` (limits that count things are ``int``).

Failure modes
-------------
* Any violated bound raises ``PolicyConfigurationError`` naming the setting.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Self

from inventory_kernel.domain.values import to_decimal
from inventory_kernel.exceptions import PolicyConfigurationError, ValidationError
from inventory_kernel.logging_config import get_logger

logger = get_logger("domain.policy")


_DECIMAL_SETTINGS = (
    "critical_threshold",
    "warning_threshold",
    "risk_score_floor",
    "risk_score_ceiling",
    "max_lead_time_days",
    "loss_projection_days",
)
_INT_SETTINGS = ("dashboard_recent_limit",)


@dataclass(frozen=True)
class MetricsPolicy:
    """
    Thresholds and multipliers for inventory metrics.

    Defaults reproduce the long-standing production behaviour:

        critical:  risk score  > 70
        warning:   risk score >= 40
        safe:      otherwise
        score clamped to [0, 100]
        lead time at most 365 days
        projected monthly loss = positive total variance * 30

    The 30-day multiplier is a business-rule assumption (variance accrues
    daily over a 30-day month), not a derived quantity.
    """

    critical_threshold: Decimal = Decimal("70")
    warning_threshold: Decimal = Decimal("40")
    risk_score_floor: Decimal = Decimal("0")
    risk_score_ceiling: Decimal = Decimal("100")
    max_lead_time_days: Decimal = Decimal("365")
    loss_projection_days: Decimal = Decimal("30")
    dashboard_recent_limit: int = 10

    def __post_init__(self) -> None:
        for name in _DECIMAL_SETTINGS:
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                try:
                    object.__setattr__(self, name, to_decimal(name, value))
                except ValidationError as e:
                    raise PolicyConfigurationError(name, e.reason) from e

        if isinstance(self.dashboard_recent_limit, bool) or not isinstance(
            self.dashboard_recent_limit, int
        ):
            raise PolicyConfigurationError(
                "dashboard_recent_limit", "must be an integer"
            )

        if self.risk_score_floor >= self.risk_score_ceiling:
            raise PolicyConfigurationError(
                "risk_score_floor", "must be below risk_score_ceiling"
            )
        if not self.risk_score_floor < self.warning_threshold:
            raise PolicyConfigurationError(
                "warning_threshold", "must be above risk_score_floor"
            )
        if not self.warning_threshold < self.critical_threshold:
            raise PolicyConfigurationError(
                "critical_threshold", "must be above warning_threshold"
            )
        if self.critical_threshold > self.risk_score_ceiling:
            raise PolicyConfigurationError(
                "critical_threshold", "cannot exceed risk_score_ceiling"
            )
        if self.max_lead_time_days <= 0:
            raise PolicyConfigurationError("max_lead_time_days", "must be positive")
        if self.loss_projection_days <= 0:
            raise PolicyConfigurationError("loss_projection_days", "must be positive")
        if self.dashboard_recent_limit <= 0:
            raise PolicyConfigurationError("dashboard_recent_limit", "must be positive")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create a policy with the production defaults."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a policy from a mapping (e.g. a parsed YAML fragment)."""
        unknown = set(data) - set(_DECIMAL_SETTINGS) - set(_INT_SETTINGS)
        if unknown:
            raise PolicyConfigurationError(
                ", ".join(sorted(unknown)), "unknown setting"
            )
        logger.info(
            "metrics_policy_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
