"""
This submodule contains the :class:`ToggleStore` class.

The toggle store is the component that holds the last known state of all feature toggles, as
received from the rollout service. It lives entirely in memory.
"""

from threading import Lock
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Set, Union

from togglerollout.impl.model import Toggle
from togglerollout.impl.util import log
from togglerollout.interfaces import ValidationError


def _decode(item: Union[Toggle, dict]) -> Toggle:
    if isinstance(item, Toggle):
        return item
    if isinstance(item, dict):
        return Toggle(item)
    raise ValidationError("error in toggle data: expected a Toggle or a dict but got %s" % item.__class__)


class ToggleStore:
    """A thread-safe, in-memory snapshot of all known toggles.

    The snapshot is never modified in place: :func:`replace_all` builds a complete new snapshot and
    then swaps it in with a single reference assignment. Readers never take a lock, and a reader
    always sees either the whole old snapshot or the whole new one.
    """

    def __init__(self):
        self._write_lock = Lock()
        self._initialized = False
        self._toggles = MappingProxyType({})  # type: Mapping[str, Toggle]

    def get(self, name: str) -> Optional[Toggle]:
        """Returns the toggle with this name, or None if it is not in the current snapshot.
        """
        toggle = self._toggles.get(name)
        if toggle is None:
            log.debug("Attempted to get missing toggle %s, returning None", name)
        return toggle

    def all(self) -> Mapping[str, Toggle]:
        """Returns a read-only view of the current snapshot, keyed by toggle name.

        The view is not affected by later calls to :func:`replace_all`.
        """
        return self._toggles

    def replace_all(self, toggles: Iterable[Union[Toggle, Dict[str, Any]]]) -> Set[str]:
        """Replaces the entire set of toggles.

        The batch is validated first; if any item is malformed, or if a toggle name appears more
        than once, :class:`togglerollout.interfaces.ValidationError` is raised and the current
        snapshot is left exactly as it was.

        :param toggles: the new toggles, as ``Toggle`` instances or as dicts to be decoded
        :return: the names of toggles that were added, removed or redefined
        """
        new_toggles = {}  # type: Dict[str, Toggle]
        for item in toggles:
            toggle = _decode(item)
            if toggle.name in new_toggles:
                raise ValidationError('toggle "%s" is defined more than once' % toggle.name)
            new_toggles[toggle.name] = toggle

        with self._write_lock:
            old_toggles = self._toggles
            self._toggles = MappingProxyType(new_toggles)
            self._initialized = True

        log.debug("Initialized toggle store with %d items", len(new_toggles))
        return _changed_names(old_toggles, new_toggles)

    @property
    def initialized(self) -> bool:
        """True once a set of toggles has been stored, even if it was empty.
        """
        return self._initialized

    def __len__(self) -> int:
        return len(self._toggles)


def _changed_names(old: Mapping[str, Toggle], new: Mapping[str, Toggle]) -> Set[str]:
    changed = set(old.keys()) ^ set(new.keys())
    for name in set(old.keys()) & set(new.keys()):
        if old[name] != new[name]:
            changed.add(name)
    return changed
