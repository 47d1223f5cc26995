"""Thread-safe projection cache keyed by (schema name, operation mode)."""
import threading
from typing import Optional

from entity_shapes.models.computed import ComputedModel, OperationMode

CacheKey = tuple[str, OperationMode]


class ProjectionCache:
    """
    Schemas never change once a graph is built, so entries are never invalidated;
    they are only evicted, oldest first, once ``max_entries`` is exceeded.
    """

    def __init__(self, max_entries: int = 256):
        self.max_entries = max_entries
        self._store: dict[CacheKey, ComputedModel] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def enabled(self) -> bool:
        return self.max_entries > 0

    def get(self, key: CacheKey) -> Optional[ComputedModel]:
        with self._lock:
            model = self._store.get(key)
            if model is None:
                self.misses += 1
            else:
                self.hits += 1
            return model

    def set(self, key: CacheKey, model: ComputedModel) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._store[key] = model
            while len(self._store) > self.max_entries:
                self._store.pop(next(iter(self._store)))

    def stats(self) -> dict:
        with self._lock:
            return {"entries": len(self._store), "hits": self.hits, "misses": self.misses}
