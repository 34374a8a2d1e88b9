# directory_app/store_client/__init__.py
from .store_client import StoreClient
from .memory_table import MemoryTable

__all__ = ["StoreClient", "MemoryTable"]
