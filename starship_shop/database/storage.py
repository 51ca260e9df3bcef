"""
Lightweight in-memory key-value storage for local development and tests.

Implements the same interface as the file and Redis backends:
``get_item`` / ``set_item`` / ``remove_item`` on string keys and values.
Nothing survives a restart.
"""

from __future__ import annotations

from typing import Dict, Optional


class InMemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def ping(self) -> bool:
        return True
