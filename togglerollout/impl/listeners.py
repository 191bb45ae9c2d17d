from threading import RLock
from typing import Callable, Iterable

from togglerollout.impl.util import log
from togglerollout.interfaces import ToggleChange


class ToggleChangeListeners:
    """
    The registered callbacks interested in toggle definition changes. Callbacks are invoked
    synchronously on the thread that applied the change, once per changed toggle.
    """

    def __init__(self):
        self.__listeners = []
        self.__lock = RLock()

    def has_listeners(self) -> bool:
        with self.__lock:
            return len(self.__listeners) > 0

    def add(self, listener: Callable[[ToggleChange], None]):
        with self.__lock:
            self.__listeners.append(listener)

    def remove(self, listener: Callable[[ToggleChange], None]):
        with self.__lock:
            try:
                self.__listeners.remove(listener)
            except ValueError:
                pass  # removing a listener that wasn't in the list is a no-op

    def notify(self, changed_names: Iterable[str]):
        with self.__lock:
            listeners_copy = self.__listeners.copy()
        if not listeners_copy:
            return
        for name in sorted(changed_names):
            change = ToggleChange(name)
            for listener in listeners_copy:
                try:
                    listener(change)
                except Exception as e:
                    log.exception("Unexpected error in listener for toggle %s: %s" % (name, e))
