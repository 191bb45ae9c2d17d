import time
from collections import OrderedDict
from threading import Lock
from typing import Callable, Optional, Tuple

from togglerollout.evaluation import Decision
from togglerollout.impl.util import log


class _CacheEntry:
    __slots__ = ['decision', 'expires_at']

    def __init__(self, decision: Decision, expires_at: float):
        self.decision = decision
        self.expires_at = expires_at


class EvaluationCache:
    """A thread-safe cache of decisions keyed by toggle name and assignment key.

    Each entry expires a fixed time after it was written. When the number of entries would exceed
    the capacity, the least recently used entry is discarded; reading an entry counts as a use.
    """

    DEFAULT_CAPACITY = 10000
    DEFAULT_TTL = 60.0

    def __init__(self, capacity: int = DEFAULT_CAPACITY, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        """
        :param capacity: the maximum number of entries
        :param ttl: the default lifetime of an entry, in seconds; zero or less disables caching
        :param clock: the time source, in seconds; only differences between its values matter
        """
        if capacity <= 0:
            raise ValueError("cache capacity must be greater than zero, was %d" % capacity)
        self.__capacity = capacity
        self.__ttl = ttl
        self.__clock = clock
        self.__entries = OrderedDict()  # type: OrderedDict[Tuple[str, str], _CacheEntry]
        self.__lock = Lock()

    @property
    def capacity(self) -> int:
        return self.__capacity

    @property
    def ttl(self) -> float:
        return self.__ttl

    def get(self, toggle_name: str, key: str) -> Optional[Decision]:
        """Returns the cached decision, or None if there is none or it has expired.
        """
        cache_key = (toggle_name, key)
        with self.__lock:
            entry = self.__entries.get(cache_key)
            if entry is None:
                return None
            if self.__clock() >= entry.expires_at:
                del self.__entries[cache_key]
                return None
            self.__entries.move_to_end(cache_key)
            return entry.decision

    def put(self, toggle_name: str, key: str, decision: Decision, ttl: Optional[float] = None):
        """Stores a decision, replacing any existing entry for the same toggle name and key.

        :param ttl: lifetime of this entry in seconds; defaults to the cache's ttl
        """
        if ttl is None:
            ttl = self.__ttl
        if ttl <= 0:
            return
        cache_key = (toggle_name, key)
        with self.__lock:
            self.__entries[cache_key] = _CacheEntry(decision, self.__clock() + ttl)
            self.__entries.move_to_end(cache_key)
            if len(self.__entries) > self.__capacity:
                evicted, _ = self.__entries.popitem(last=False)
                log.debug("Evicted cached decision for toggle %s and key %s", evicted[0], evicted[1])

    def clear(self):
        with self.__lock:
            self.__entries.clear()

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__entries)
