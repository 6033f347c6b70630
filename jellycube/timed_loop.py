"""Runs a function periodically on a background thread."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

_NS_PER_MS = 1_000_000


class TimedLoop:
    """Calls ``fun`` once every period until ended.

    Calls are scheduled against a fixed clock, so a slow call shortens the
    following wait instead of shifting the whole schedule.
    """

    def __init__(self, period_ms: int, fun: Callable[[], None]) -> None:
        self._fun = fun
        self._period_ns = int(period_ms) * _NS_PER_MS
        self._stop = threading.Event()
        self._running = False
        self._thread: threading.Thread | None = None

    def change_period(self, period_ms: int) -> None:
        self._period_ns = int(period_ms) * _NS_PER_MS

    @property
    def period_ms(self) -> int:
        return self._period_ns // _NS_PER_MS

    def start(self) -> None:
        if self._running:
            raise RuntimeError("TimedLoop already started")
        self._running = True
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def end(self) -> None:
        if not self._running:
            raise RuntimeError("TimedLoop not started")
        self._running = False
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def is_running(self) -> bool:
        return self._running

    def __enter__(self) -> TimedLoop:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._running:
            self.end()

    def _run(self) -> None:
        next_clock = time.monotonic_ns()
        while not self._stop.is_set():
            self._fun()
            next_clock += self._period_ns
            wait_ns = next_clock - time.monotonic_ns()
            if wait_ns > 0:
                self._stop.wait(wait_ns / 1e9)