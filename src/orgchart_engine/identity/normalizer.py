"""GUID-like identity token normalization.

Hosts hand out the signed-in user's id as ``{3F2504E0-4F89-11D3-9A0C-0305E82C3301}``
while the person records may store ``3f2504e04f8911d39a0c0305e82c3301``.
Both normalize to the same lowercase, brace-free, hyphen-free string.

Normalization runs once per person per render, so results are memoized in a
bounded GuidCache.
"""

from __future__ import annotations

import re
import threading

from orgchart_engine.config import DEFAULT_GUID_CACHE_SIZE

_STRIP = re.compile(r"[{}-]")
_GUID = re.compile(
    r"^[{(]?[0-9a-f]{8}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{12}[)}]?$",
    re.IGNORECASE,
)


class GuidCache:
    """Bounded memo of raw token -> normalized token.

    When full, the older half of the entries is dropped. Entries are immutable
    strings, so the lock only protects the dict itself.
    """

    def __init__(self, capacity: int = DEFAULT_GUID_CACHE_SIZE) -> None:
        if capacity < 2:
            raise ValueError("GuidCache capacity must be at least 2")
        self._capacity = capacity
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def normalize(self, token: str | None) -> str:
        if not token:
            return ""
        cached = self._entries.get(token)
        if cached is not None:
            return cached

        normalized = _STRIP.sub("", token).lower()
        with self._lock:
            if len(self._entries) >= self._capacity:
                self._evict_oldest_half()
            self._entries[token] = normalized
        return normalized

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _evict_oldest_half(self) -> None:
        # dicts keep insertion order, so the first half is the oldest
        keep = list(self._entries.items())[len(self._entries) // 2 :]
        self._entries = dict(keep)


default_cache = GuidCache()


def normalize_guid(token: str | None, cache: GuidCache | None = None) -> str:
    """Strip braces and hyphens and lowercase. Missing tokens become ``""``."""
    return (default_cache if cache is None else cache).normalize(token)


def compare_guids(a: str | None, b: str | None, cache: GuidCache | None = None) -> bool:
    """Tolerant identity comparison.

    Missing tokens never match anything, including each other: a record
    without an identity must not be mistaken for the viewer. The comparison
    is therefore reflexive only for non-empty tokens;
    ``compare_guids(None, None)`` and ``compare_guids("", "")`` are False.
    """
    if not a or not b:
        return False
    if a == b:
        return True
    return normalize_guid(a, cache) == normalize_guid(b, cache)


def is_valid_guid(value: str | None) -> bool:
    """True for 8-4-4-4-12 hex GUIDs, braces and hyphens optional."""
    return bool(value) and _GUID.match(value) is not None
