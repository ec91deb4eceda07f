"""Route Cache — in-process cache of rendered dashboard views, keyed by route path.

Invariants:
    - Entries are grouped by normalized path (no trailing slash)
    - revalidate_path(path) drops every cached variant (query string) of that path
    - Revalidating a path with nothing cached is a no-op

Design Decisions:
    - Module-level route_cache singleton: single-process uvicorn, cache lost on
      restart is acceptable (the next request re-renders from the database)
    - Plain dicts, no TTL: staleness is driven only by mutations revalidating
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    return path.rstrip("/") or "/"


class RouteCache:
    """Rendered payloads per (path, variant). Implements CacheInvalidator."""

    def __init__(self):
        self._entries: dict[str, dict[str, Any]] = {}

    def get(self, path: str, variant: str = "") -> Any | None:
        return self._entries.get(normalize_path(path), {}).get(variant)

    def put(self, path: str, payload: Any, variant: str = "") -> None:
        self._entries.setdefault(normalize_path(path), {})[variant] = payload

    def is_cached(self, path: str, variant: str = "") -> bool:
        return variant in self._entries.get(normalize_path(path), {})

    def revalidate_path(self, path: str) -> None:
        dropped = self._entries.pop(normalize_path(path), {})
        logger.info(
            f"Revalidated {normalize_path(path)} ({len(dropped)} cached variant(s) dropped)",
            extra={"path": normalize_path(path)},
        )

    def clear(self) -> None:
        self._entries.clear()


route_cache = RouteCache()
