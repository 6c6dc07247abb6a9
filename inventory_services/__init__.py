"""
inventory_services -- caller-side helpers built on the engines.
"""

from inventory_services.item_index import ItemIndex

__all__ = ["ItemIndex"]
