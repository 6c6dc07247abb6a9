"""
Inventory Kernel

Domain core for tracked inventory items:
- Immutable item and summary value objects
- Decimal-only numeric handling
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
