"""
inventory_config -- single public entrypoint for metrics configuration.

Responsibility:
    ``get_active_policy()`` is the only way engines and callers obtain the
    thresholds and multipliers used by the metrics and aggregation engines.
    YAML loading is internal tooling.

Invariants enforced:
    - Single entrypoint: runtime policy flows through ``get_active_policy()``.
    - The returned ``MetricsPolicy`` has passed schema validation.
    - Same file contents always produce the same checksum.

Audit relevance:
    Every successful call emits an ``INVENTORY_CONFIG_TRACE`` log record
    carrying the source path and checksum, so a dashboard figure can be tied
    to the exact thresholds that produced it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from inventory_config.loader import (
    compute_checksum,
    load_policy,
    load_yaml_file,
    parse_metrics_policy,
)
from inventory_kernel.domain.policy import MetricsPolicy

_logger = logging.getLogger("inventory_kernel.config")

_DEFAULT_POLICY_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_policy(path: Path | None = None) -> MetricsPolicy:
    """The public configuration entrypoint.

    Args:
        path: YAML policy file. Defaults to the bundled
            ``sets/default.yaml``.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        PolicyConfigurationError: if the policy fails validation.
    """
    source = path or _DEFAULT_POLICY_PATH
    data = load_yaml_file(source)
    policy = parse_metrics_policy(data)

    _logger.info(
        "INVENTORY_CONFIG_TRACE",
        extra={
            "trace_type": "INVENTORY_CONFIG_TRACE",
            "source": str(source),
            "checksum": compute_checksum(data),
            "critical_threshold": str(policy.critical_threshold),
            "warning_threshold": str(policy.warning_threshold),
        },
    )
    return policy


__all__ = [
    "MetricsPolicy",
    "compute_checksum",
    "get_active_policy",
    "load_policy",
]
