"""
Read cache keyed by resource path.

Reads are cached under ``(path, params)``. A mutation invalidates a path,
which drops every cached read of that path whatever its params, so
``invalidate("/api/jobs")`` clears both the full job list and the
``status=pending`` view, but leaves ``/api/jobs/my`` alone.
"""

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

CacheKey = Tuple[str, str]


def _make_key(path: str, params: Optional[Dict[str, Any]] = None) -> CacheKey:
    return path, json.dumps(params or {}, sort_keys=True, default=str)


class QueryCache:
    """In-process cache of backend reads."""

    def __init__(self):
        self._entries: Dict[CacheKey, Any] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def contains(self, path: str, params: Optional[Dict[str, Any]] = None) -> bool:
        return _make_key(path, params) in self._entries

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, default: Any = None) -> Any:
        return self._entries.get(_make_key(path, params), default)

    def set(self, path: str, value: Any, params: Optional[Dict[str, Any]] = None) -> None:
        self._entries[_make_key(path, params)] = value

    def fetch(
        self,
        path: str,
        loader: Callable[[], T],
        params: Optional[Dict[str, Any]] = None,
    ) -> T:
        """Return the cached read for ``(path, params)``, loading it on a miss."""
        key = _make_key(path, params)
        if key in self._entries:
            return self._entries[key]
        value = loader()
        self._entries[key] = value
        return value

    def invalidate(self, path: str) -> int:
        """Drop every cached read of ``path``; returns how many were dropped."""
        stale = [key for key in self._entries if key[0] == path]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Invalidated %d cached read(s) of %s", len(stale), path)
        return len(stale)

    def invalidate_paths(self, paths: Iterable[str]) -> List[str]:
        """Invalidate several paths; returns them in order for reporting."""
        invalidated = []
        for path in paths:
            self.invalidate(path)
            invalidated.append(path)
        return invalidated

    def clear(self) -> None:
        self._entries.clear()


def invalidate_after_mutation(cache: Optional[QueryCache], paths: Iterable[str]) -> List[str]:
    """Invalidate ``paths`` in ``cache`` (if any) and return the paths for the response."""
    if cache is None:
        return list(paths)
    return cache.invalidate_paths(paths)
