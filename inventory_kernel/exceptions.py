"""
Typed Exception Hierarchy for the Inventory Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the metrics and aggregation engines must tell a rejected user
submission apart from an integration bug without parsing message strings.
Every error therefore has:
  1. A TYPED exception class (catch by type, not message)
  2. A CODE class attribute (machine-readable, API-safe)
  3. Structured DATA attributes (field, value, position, ...)

Example - RIGHT way:
    try:
        item = compute_metrics(raw)
    except ValidationError as e:
        api_response(status=400, code=e.code, field=e.field, message=e.reason)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    InventoryKernelError (base)
    |
    +-- ValidationError           raw input violates a precondition
    +-- InvariantError            an item bypassed the metrics engine
    +-- ItemNotFoundError         identifier absent from an ItemIndex
    +-- PolicyConfigurationError  metrics policy fails validation

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Code                         | When Raised
-----------------------------|----------------------------------------------
VALIDATION_ERROR             | Blank name, negative value, lead time > limit
INVARIANT_VIOLATION          | Aggregation received a non-computed item
ITEM_NOT_FOUND               | ItemIndex.require() on an unknown identifier
POLICY_CONFIGURATION_ERROR   | Threshold ordering or limits are invalid

===============================================================================
HANDLING PATTERNS
===============================================================================

ValidationError is user-facing and recoverable by re-submitting corrected
input. InvariantError signals a caller bug: surface it as an internal error
and do not retry.
"""


class InventoryKernelError(Exception):
    """
    Base exception for all inventory kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVENTORY_KERNEL_ERROR"


class ValidationError(InventoryKernelError):
    """
    Raw item input violates a precondition of the metrics engine.

    The message is the human-readable reason (e.g. "Item name is required");
    ``field`` names the first offending attribute.
    """

    code: str = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str, value: object = None):
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(reason)


class InvariantError(InventoryKernelError):
    """
    An item handed to the aggregation service was never fully computed.

    This is a programming-contract violation, not a user-facing condition.
    """

    code: str = "INVARIANT_VIOLATION"

    def __init__(self, position: int, field: str, detail: str | None = None):
        self.position = position
        self.field = field
        message = f"Item at position {position} is not fully computed: missing {field}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ItemNotFoundError(InventoryKernelError):
    """Identifier is not present in the item index."""

    code: str = "ITEM_NOT_FOUND"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Item not found: {identifier}")


class PolicyConfigurationError(InventoryKernelError):
    """Metrics policy settings are inconsistent or out of range."""

    code: str = "POLICY_CONFIGURATION_ERROR"

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid metrics policy setting {setting}: {reason}")
