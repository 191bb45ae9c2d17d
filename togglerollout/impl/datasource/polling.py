"""
Polling implementation of the toggle updater.
"""

import time
from threading import Event, Thread

from togglerollout.config import Config
from togglerollout.engine import RolloutEngine
from togglerollout.impl.util import log
from togglerollout.interfaces import ToggleRequester, ValidationError


class PollingToggleUpdater:
    """Periodically fetches all toggle definitions and hands them to the engine.

    A failed fetch, or a batch that the engine rejects, is logged and the engine keeps the toggles
    it already had; the next poll tries again.
    """

    def __init__(self, config: Config, requester: ToggleRequester, engine: RolloutEngine, ready: Event):
        self._config = config
        self._requester = requester
        self._engine = engine
        self._ready = ready
        self._stop = Event()
        self._thread = Thread(target=self._run, name="togglerollout.datasource.polling")
        self._thread.daemon = True

    def start(self):
        log.info("Starting PollingToggleUpdater with request interval: " + str(self._config.poll_interval))
        self._thread.start()

    def initialized(self) -> bool:
        return self._ready.is_set() is True and self._engine.is_initialized()

    def stop(self):
        """Stops polling. The updater cannot be restarted after this.
        """
        log.info("Stopping PollingToggleUpdater")
        self._stop.set()

    def _run(self):
        stopped = self._stop.is_set()
        while not stopped:
            next_time = time.time() + self._config.poll_interval
            self._poll()
            delay = next_time - time.time()
            stopped = self._stop.wait(delay) if delay > 0 else self._stop.is_set()

    def _poll(self):
        try:
            toggles = self._requester.get_all_toggles()
            self._engine.on_toggle_definitions_updated(toggles)
            if not self._ready.is_set():
                log.info("PollingToggleUpdater initialized ok")
                self._ready.set()
        except ValidationError as e:
            log.warning("Rejected toggle definitions; keeping the previous ones: %s" % e)
        except Exception as e:
            log.exception('Error: Exception encountered when updating toggles. %s' % e)
