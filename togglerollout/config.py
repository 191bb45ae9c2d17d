"""
This submodule contains the :class:`Config` class for custom configuration of the rollout engine.
"""

from typing import Optional

from togglerollout.impl.util import log


class Config:
    """Configuration options for :class:`togglerollout.engine.RolloutEngine` and the components it
    builds for itself.

    The library never reads configuration from files or the environment; create an instance and
    pass it to the engine constructor.
    """

    def __init__(
        self,
        cache_capacity: int = 10000,
        cache_ttl: float = 60,
        hash_seed: Optional[int] = None,
        poll_interval: float = 15,
    ):
        """
        :param cache_capacity: The maximum number of decisions held in the evaluation cache. When it
          is full, the least recently used decision is discarded.
        :param cache_ttl: The number of seconds a decision stays in the evaluation cache. A decision
          may therefore lag behind a toggle change by up to this long. Zero disables caching.
        :param hash_seed: If set, this integer is mixed into the hash used to assign keys to variants,
          giving a different but still deterministic assignment. Intended for tests; leave unset in
          production so that assignments agree with other implementations.
        :param poll_interval: The number of seconds between refreshes done by
          :class:`togglerollout.impl.datasource.polling.PollingToggleUpdater`.
        """
        if cache_capacity <= 0:
            raise ValueError("cache_capacity must be greater than zero, was %s" % cache_capacity)
        if cache_ttl < 0:
            raise ValueError("cache_ttl must not be negative, was %s" % cache_ttl)
        if poll_interval <= 0:
            raise ValueError("poll_interval must be greater than zero, was %s" % poll_interval)
        if hash_seed is not None and (isinstance(hash_seed, bool) or not isinstance(hash_seed, int)):
            raise ValueError("hash_seed must be an integer, was %r" % (hash_seed,))
        if cache_ttl == 0:
            log.info("Evaluation cache is disabled since cache_ttl is zero")
        self.__cache_capacity = cache_capacity
        self.__cache_ttl = cache_ttl
        self.__hash_seed = hash_seed
        self.__poll_interval = poll_interval

    @staticmethod
    def default() -> 'Config':
        """Returns an instance of Config with default properties. This is the same as calling the
        constructor with no parameters.
        """
        return Config()

    def copy_with_hash_seed(self, hash_seed: Optional[int]) -> 'Config':
        """Returns a new ``Config`` instance that is the same as this one, except for having a
        different hash seed.

        :param hash_seed: the new hash seed, or None for the standard assignment
        """
        return Config(
            cache_capacity=self.__cache_capacity,
            cache_ttl=self.__cache_ttl,
            hash_seed=hash_seed,
            poll_interval=self.__poll_interval,
        )

    @property
    def cache_capacity(self) -> int:
        return self.__cache_capacity

    @property
    def cache_ttl(self) -> float:
        return self.__cache_ttl

    @property
    def hash_seed(self) -> Optional[int]:
        return self.__hash_seed

    @property
    def poll_interval(self) -> float:
        return self.__poll_interval
