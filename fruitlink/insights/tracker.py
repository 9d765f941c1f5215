"""
Keyed insight results with stale-reply protection.

Several insight requests can be in flight at once (one explanation per
fruit, a compliance check, a certification lookup). Each request calls
``begin(key)`` and receives a generation token; when it finishes it calls
``resolve(key, token, value)``. The value is applied only if no newer request
for the same key has started since, so a slow, stale reply can never
overwrite a fresher one. ``reset()`` invalidates everything in flight, which
is what a view does when it is torn down or switches entity.
"""

from __future__ import annotations

import logging
from typing import Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class InsightTracker(Generic[K, V]):
    """Latest resolved value per key plus in-flight bookkeeping."""

    def __init__(self) -> None:
        self._generation: dict[K, int] = {}
        self._values: dict[K, V] = {}
        self._loading: set[K] = set()
        self._epoch = 0

    def begin(self, key: K) -> int:
        """Mark ``key`` as loading and return the token for this request."""
        token = self._generation.get(key, self._epoch) + 1
        self._generation[key] = token
        self._loading.add(key)
        return token

    def resolve(self, key: K, token: int, value: V) -> bool:
        """Apply ``value`` if ``token`` is still current for ``key``.

        Returns:
            ``True`` if applied, ``False`` if the result was stale.
        """
        if self._generation.get(key) != token:
            logger.debug("Discarding stale insight for %r (token %d)", key, token)
            return False
        self._values[key] = value
        self._loading.discard(key)
        return True

    def get(self, key: K) -> Optional[V]:
        return self._values.get(key)

    def is_loading(self, key: K) -> bool:
        return key in self._loading

    def items(self) -> list[tuple[K, V]]:
        return list(self._values.items())

    def reset(self) -> None:
        """Forget all values and invalidate every outstanding token."""
        self._epoch = max(self._generation.values(), default=self._epoch) + 1
        self._generation.clear()
        self._values.clear()
        self._loading.clear()
