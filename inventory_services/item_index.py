"""
Item index (``inventory_services.item_index``).

Responsibility
--------------
Caller-owned lookup of computed items by an opaque identifier, used by
edit and delete flows that need the item a user picked from the last
listing. The index is rebuilt from every fetch and handed around
explicitly; there is no module-level cache.

Architecture
------------
Layer: **Services** -- sits above the engines. The identifier is whatever
the storage collaborator uses (a document id, a UUID); the index never
interprets it and the engines never see it.

Invariants
----------
- Identifiers are unique; a rebuild with duplicates raises ``ValueError``.
- Insertion order is the fetch order, so ``items()`` can be passed straight
  to ``AggregationService.dashboard_summary`` as the recent list.
- Instances are never mutated; ``replace`` and ``discard`` return a new index.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from inventory_kernel.domain.item import InventoryItem
from inventory_kernel.exceptions import ItemNotFoundError
from inventory_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.item_index")


class ItemIndex:
    """Identifier -> InventoryItem mapping for one fetch result."""

    __slots__ = ("_items",)

    def __init__(self, items: dict[str, InventoryItem] | None = None):
        self._items: dict[str, InventoryItem] = dict(items or {})

    @classmethod
    def rebuild(cls, pairs: Iterable[tuple[str, InventoryItem]]) -> ItemIndex:
        """
        Build a fresh index from ``(identifier, item)`` pairs.

        Raises:
            ValueError: If an identifier appears twice.
        """
        items: dict[str, InventoryItem] = {}
        for identifier, item in pairs:
            if identifier in items:
                raise ValueError(f"Duplicate item identifier: {identifier}")
            items[identifier] = item
        logger.debug("item_index_rebuilt", extra={"item_count": len(items)})
        return cls(items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def get(self, identifier: str) -> InventoryItem | None:
        return self._items.get(identifier)

    def require(self, identifier: str) -> InventoryItem:
        """Return the item or raise ``ItemNotFoundError``."""
        try:
            return self._items[identifier]
        except KeyError:
            logger.warning("item_index_miss", extra={"identifier": identifier})
            raise ItemNotFoundError(identifier) from None

    def items(self) -> tuple[InventoryItem, ...]:
        """Indexed items in fetch order."""
        return tuple(self._items.values())

    def replace(self, identifier: str, item: InventoryItem) -> ItemIndex:
        """New index with ``identifier`` mapped to ``item`` (after an edit)."""
        with LogContext.bind(item_id=identifier):
            self.require(identifier)
            items = dict(self._items)
            items[identifier] = item
            logger.debug("item_index_replaced", extra={"item_name": item.item_name})
        return ItemIndex(items)

    def discard(self, identifier: str) -> ItemIndex:
        """New index without ``identifier`` (after a removal)."""
        with LogContext.bind(item_id=identifier):
            self.require(identifier)
            items = dict(self._items)
            removed = items.pop(identifier)
            logger.debug("item_index_discarded", extra={"item_name": removed.item_name})
        return ItemIndex(items)
