"""
This submodule contains the :class:`RolloutEngine`, the main entry point of the library.
"""

from typing import Any, Callable, Dict, Iterable, Optional, Union

from togglerollout.config import Config
from togglerollout.evaluation import Decision, DecisionSource
from togglerollout.impl.evaluation_cache import EvaluationCache
from togglerollout.impl.listeners import ToggleChangeListeners
from togglerollout.impl.model import Toggle
from togglerollout.impl.selector import VariantSelector
from togglerollout.impl.util import log
from togglerollout.interfaces import Evaluator, ToggleChange
from togglerollout.toggle_store import ToggleStore


class RolloutEngine(Evaluator):
    """Evaluates feature toggles locally, against the last toggle definitions received from the
    rollout service.

    Evaluation never performs I/O and never raises because of the state of a toggle: a toggle
    that is missing, inactive or has no variants produces a disabled :class:`Decision` whose
    ``source`` says why. Every decision, including those, is cached for ``config.cache_ttl``
    seconds, so a toggle change can take up to that long to be reflected for a key that was
    already evaluated.

    Applications should normally create a single engine and share it. The engine is safe for
    concurrent use by any number of threads.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        store: Optional[ToggleStore] = None,
        cache: Optional[EvaluationCache] = None,
        selector: Optional[VariantSelector] = None,
    ):
        """Constructs a new engine. Collaborators that are not provided are created from the
        configuration and owned by this engine alone.

        :param config: the engine configuration; defaults to ``Config.default()``
        :param store: holds the current toggle definitions
        :param cache: holds recent decisions
        :param selector: assigns keys to variants
        """
        self._config = config or Config.default()
        self._store = store if store is not None else ToggleStore()
        self._cache = cache if cache is not None else EvaluationCache(self._config.cache_capacity, self._config.cache_ttl)
        self._selector = selector if selector is not None else VariantSelector(self._config.hash_seed)
        self._change_listeners = ToggleChangeListeners()

    @property
    def config(self) -> Config:
        return self._config

    def is_initialized(self) -> bool:
        """Returns true if toggle definitions have been received at least once.
        """
        return self._store.initialized

    def evaluate(self, toggle_name: str, key: str) -> Decision:
        """Determines the variant of a toggle for an assignment key.

        :param toggle_name: the unique name of the toggle
        :param key: the stable assignment key, such as a user or session identifier
        :return: the decision; its ``enabled`` property is true only if a variant was selected
        """
        cached = self._cache.get(toggle_name, key)
        if cached is not None:
            return cached

        decision = self._decide(toggle_name, key)
        self._cache.put(toggle_name, key, decision, self._config.cache_ttl)
        return decision

    def _decide(self, toggle_name: str, key: str) -> Decision:
        toggle = self._store.get(toggle_name)
        if toggle is None:
            if not self._store.initialized:
                log.warning("Toggle evaluation attempted before any toggle definitions were received; toggle %s is treated as missing", toggle_name)
            return Decision.fallback(toggle_name, DecisionSource.FALLBACK_MISSING)
        if not toggle.active:
            return Decision.fallback(toggle_name, DecisionSource.FALLBACK_INACTIVE)
        variant = self._selector.select(toggle, key)
        if variant is None:
            log.debug("Toggle %s is active but has no variants", toggle_name)
            return Decision.fallback(toggle_name, DecisionSource.FALLBACK_NO_VARIANTS)
        return Decision.resolved(toggle_name, variant.name, variant.payload)

    def evaluate_all(self, key: str) -> Dict[str, Decision]:
        """Evaluates every known toggle for an assignment key.

        :return: a dictionary of toggle names to decisions
        """
        return dict((name, self.evaluate(name, key)) for name in self._store.all())

    def toggle(self, name: str) -> Optional[Toggle]:
        """Returns the current definition of a toggle, or None if it is not known.
        """
        return self._store.get(name)

    def on_toggle_definitions_updated(self, toggles: Iterable[Union[Toggle, Dict[str, Any]]]):
        """Replaces all toggle definitions. This is called by whatever component retrieves toggle
        definitions from the rollout service.

        Cached decisions are left in place and expire normally.

        :param toggles: the complete new set of toggles, as ``Toggle`` instances or dicts
        :raises togglerollout.interfaces.ValidationError: if the batch is malformed; the previous
          definitions remain in effect
        """
        changed = self._store.replace_all(toggles)
        if changed:
            log.debug("Toggle definitions changed: %s", ", ".join(sorted(changed)))
        self._change_listeners.notify(changed)

    def add_change_listener(self, listener: Callable[[ToggleChange], None]):
        """Registers a listener to be called with a :class:`togglerollout.interfaces.ToggleChange`
        for each toggle whose definition changes. Listeners run on the thread that delivered the
        new definitions.
        """
        self._change_listeners.add(listener)

    def remove_change_listener(self, listener: Callable[[ToggleChange], None]):
        self._change_listeners.remove(listener)
