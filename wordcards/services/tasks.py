"""Runners that execute backend calls and hand results back to the caller.

``on_result(result, err)`` is always invoked with exactly one of the two set.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Any, Optional[BaseException]], None]


class ImmediateRunner:
    """Runs calls inline. Used by tests and by headless callers."""

    def __init__(self):
        self._closed = False

    def submit(self, call: Callable[[], Any], on_result: ResultCallback):
        if self._closed:
            return
        try:
            result = call()
        except Exception as e:
            on_result(None, e)
            return
        on_result(result, None)

    def post(self, fn: Callable[[], None]):
        if not self._closed:
            fn()

    def shutdown(self):
        self._closed = True


class BackgroundRunner:
    """One daemon thread per call; results come back on the Kivy main loop."""

    def __init__(self):
        self._closed = False

    def submit(self, call: Callable[[], Any], on_result: ResultCallback):
        from kivy.clock import Clock
        if self._closed:
            return

        def worker():
            result, err = None, None
            try:
                result = call()
            except Exception as e:
                err = e
            Clock.schedule_once(lambda dt: self._deliver(on_result, result, err), 0)

        threading.Thread(target=worker, daemon=True).start()

    def post(self, fn: Callable[[], None]):
        from kivy.clock import Clock
        Clock.schedule_once(lambda dt: self._run(fn), 0)

    def shutdown(self):
        self._closed = True

    def _deliver(self, on_result: ResultCallback, result, err):
        if self._closed:
            logger.debug("Dropping result delivered after shutdown")
            return
        on_result(result, err)

    def _run(self, fn: Callable[[], None]):
        if self._closed:
            return
        fn()
