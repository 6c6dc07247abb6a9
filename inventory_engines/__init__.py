"""
Module: inventory_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines. This is the canonical import surface for callers.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import inventory_kernel (and sibling engine modules).
    MUST NOT import inventory_config or inventory_services.

Invariants enforced:
    - Purity: engines never read the clock, files or the network.
    - Decimal-only arithmetic.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    Every engine invocation is traced via ``@traced_engine`` (see
    ``inventory_engines.tracer``), emitting INVENTORY_ENGINE_TRACE records.

Usage:
    from inventory_engines import MetricsEngine, AggregationService
"""

from inventory_engines.aggregation import AggregationService, summarize
from inventory_engines.metrics import MetricsEngine, compute_metrics

__all__ = [
    "AggregationService",
    "MetricsEngine",
    "compute_metrics",
    "summarize",
]
