"""
Persistent key-value storage backends for the reward balance.
"""
from .file_storage import FileStorage
from .storage import InMemoryStorage

__all__ = ["FileStorage", "InMemoryStorage"]
