# alchemy/core/cache.py
from __future__ import annotations
import threading
from typing import Dict, Optional

from .types import Element


class ResultCache:
    """
    Process-local memo of pair key -> resolved Element.

    No eviction and no TTL: recipes never change once stored, so an entry
    can't go stale. Owned by whoever builds the resolver (the Flask app keeps
    one in app.extensions), never a module global.
    """
    def __init__(self):
        self._entries: Dict[str, Element] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Element]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, element: Element) -> Element:
        """Write-once: the first writer wins and its value is returned to everyone."""
        with self._lock:
            return self._entries.setdefault(key, element)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
