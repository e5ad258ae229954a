import logging
import threading
import time
from dataclasses import dataclass, field

log = logging.getLogger(__name__)


@dataclass
class Statistics:
    """Per-run counters. Only ever incremented."""
    comparisons: int = 0
    accesses:    int = 0
    start_time:  float = field(default_factory=time.monotonic)

    def count_comparison(self, n=1):
        self.comparisons += n

    def count_access(self, n=1):
        self.accesses += n

    def restart_clock(self):
        self.start_time = time.monotonic()

    def elapsed(self) -> float:
        return time.monotonic() - self.start_time


class Ticker:
    """
    Calls `callback` every `interval` seconds on a daemon thread until stopped.
    Independent of frame pacing; used for the elapsed-time display.
    """

    def __init__(self, interval, callback, name="ticker"):
        self.interval = interval
        self.callback = callback
        self._halt    = threading.Event()
        self._thread  = threading.Thread(target=self._loop, name=name, daemon=True)

    def start(self):
        self._thread.start()

    def stop(self):
        self._halt.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def _loop(self):
        while not self._halt.wait(self.interval):
            try:
                self.callback()
            except Exception:
                log.exception("ticker callback failed")
