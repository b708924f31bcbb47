# Copyright (c) 2026 Swatchglow
# SPDX-License-Identifier: MIT

"""
Per-URL result cache.

Entries are keyed by (url, color_count) and hold the final CSS colors.
Only successful extractions are stored. Unbounded by default; pass
``max_entries`` to get least-recently-used eviction.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Iterable, Optional


class ColorCache:
    """Thread-safe mapping from (url, color_count) to extracted colors."""

    def __init__(self, max_entries: Optional[int] = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be >= 1 or None, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict[tuple[str, int], tuple[str, ...]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, url: str, color_count: int) -> Optional[tuple[str, ...]]:
        """Cached colors, or None. A hit marks the entry as recently used."""
        key = (url, color_count)
        with self._lock:
            colors = self._entries.get(key)
            if colors is not None:
                self._entries.move_to_end(key)
            return colors

    def put(self, url: str, color_count: int, colors: Iterable[str]) -> None:
        """Store colors for a URL. Last write wins."""
        key = (url, color_count)
        with self._lock:
            self._entries[key] = tuple(colors)
            self._entries.move_to_end(key)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        """
        Membership by ``(url, color_count)`` key, or by bare URL.

        A bare URL is contained when it is cached for any color count.
        """
        with self._lock:
            if isinstance(key, str):
                return any(url == key for url, _ in self._entries)
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
