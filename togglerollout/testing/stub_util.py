from threading import Event
from typing import List, Optional

from togglerollout.interfaces import ToggleRequester


class MockToggleRequester(ToggleRequester):
    def __init__(self):
        self.toggles = []  # type: List[dict]
        self.exception = None  # type: Optional[Exception]
        self.request_count = 0
        self.requested = Event()

    def get_all_toggles(self):
        self.request_count += 1
        self.requested.set()
        if self.exception is not None:
            raise self.exception
        return self.toggles


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds
