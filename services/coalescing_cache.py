"""
BaseLine Academy - Request Coalescing Cache
Keyed cache whose entries are either resolved values or one shared pending fetch
"""

import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Hashable, Optional

from api.exceptions import AcademyError

logger = logging.getLogger(__name__)


class CoalescingCache:
    """key -> pending-or-resolved value.

    Concurrent `get` calls for a key that is not cached share one call to
    `loader`; every caller receives the same result object. A failed load
    (an AcademyError) is cached as `fallback()` and is retried only after
    `invalidate`.
    """

    def __init__(self, loader: Callable[[Hashable], Any],
                 fallback: Optional[Callable[[], Any]] = None,
                 name: str = "cache"):
        self._loader = loader
        self._fallback = fallback
        self._name = name
        self._values: Dict[Hashable, Any] = {}
        self._pending: Dict[Hashable, Future] = {}
        # Bumped on invalidate so a load started before it is not cached
        self._generation: Dict[Hashable, int] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Any:
        with self._lock:
            if key in self._values:
                return self._values[key]
            future = self._pending.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._pending[key] = future
                generation = self._generation.get(key, 0)

        if not owner:
            return future.result()

        try:
            value = self._loader(key)
        except AcademyError as e:
            if self._fallback is None:
                self._settle(key, future)
                future.set_exception(e)
                raise
            logger.error("%s: load for %r failed, caching fallback: %s", self._name, key, e)
            value = self._fallback()
        except BaseException as e:
            self._settle(key, future)
            future.set_exception(e)
            raise

        with self._lock:
            if self._generation.get(key, 0) == generation:
                self._values[key] = value
            if self._pending.get(key) is future:
                del self._pending[key]
        future.set_result(value)
        return value

    def _settle(self, key: Hashable, future: Future) -> None:
        with self._lock:
            if self._pending.get(key) is future:
                del self._pending[key]

    def peek(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def is_pending(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._pending

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._values.pop(key, None)
            self._pending.pop(key, None)
            self._generation[key] = self._generation.get(key, 0) + 1

    def clear(self) -> None:
        with self._lock:
            for key in set(self._values) | set(self._pending):
                self._generation[key] = self._generation.get(key, 0) + 1
            self._values.clear()
            self._pending.clear()
