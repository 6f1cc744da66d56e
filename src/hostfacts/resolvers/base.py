"""Base resolver with a process-lifetime cache."""

import threading
from abc import ABC, abstractmethod
from typing import Any


class Resolver(ABC):
    """Base interface for platform probes.

    A resolver answers ``resolve(key)``. The first request runs the
    underlying operation, which stores every key it can answer; later
    requests for any of those keys are served from the cache. Entries are
    never expired, so a fresh value needs a fresh resolver.
    """

    #: Keys one run of the underlying operation answers
    keys: tuple[str, ...] = ()

    def __init__(self) -> None:
        self._fact_list: dict[str, Any] = {}
        self._lock = threading.RLock()

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique resolver name."""
        ...

    @abstractmethod
    def _post_resolve(self, key: str) -> None:
        """Run the underlying operation and fill ``self._fact_list``."""
        ...

    def resolve(self, key: str) -> Any:
        """Return the value for ``key``, or None if it does not apply."""
        with self._lock:
            if key not in self._fact_list:
                self._post_resolve(key)
                # A failed or partial run still settles its whole batch
                for batch_key in (key, *self.keys):
                    self._fact_list.setdefault(batch_key, None)
            return self._fact_list[key]

    def is_cached(self, key: str) -> bool:
        """Check if ``key`` has already been resolved."""
        with self._lock:
            return key in self._fact_list
