"""
Configuration adapters
"""
from .loader import InventoryLoader

__all__ = ["InventoryLoader"]
