"""
Debounced write-back of the canvas.

The controller is either clean or dirty.  A paint makes it dirty; ticks
accumulate elapsed time while dirty, and once more than ``write_interval``
seconds have passed the flush callback runs and the controller is clean
again.  A flush that raises ``OSError`` leaves it dirty so the next tick
retries.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from .config import WRITE_INTERVAL

logger = logging.getLogger(__name__)

FlushCallback = Callable[[], None]

# Repeated write failures are logged at warning level once per this many attempts
WARN_EVERY_FAILURES = 60


class PersistenceController:
    def __init__(self, write_interval: float = WRITE_INTERVAL):
        self.write_interval = write_interval
        self.dirty = False
        self.time_since_flush = 0.0
        self.failed_writes = 0

    @property
    def state(self) -> str:
        return "dirty" if self.dirty else "clean"

    def mark_dirty(self) -> None:
        """Record an unsaved change.  Additional paints keep the running time."""
        if not self.dirty:
            self.dirty = True
            self.time_since_flush = 0.0

    def tick(self, elapsed: float, flush: FlushCallback) -> bool:
        """Advance time by ``elapsed`` seconds, flushing when due.

        Returns:
            True if a flush ran and succeeded.
        """
        if not self.dirty:
            return False
        self.time_since_flush += elapsed
        if not self._interval_passed():
            return False
        return self._flush(flush)

    def _interval_passed(self) -> bool:
        # Summed frame times drift, e.g. three ticks of 0.1 exceed 0.3.
        return self.time_since_flush > self.write_interval and not math.isclose(
            self.time_since_flush, self.write_interval, rel_tol=1e-9, abs_tol=1e-9
        )

    def flush_now(self, flush: FlushCallback) -> bool:
        """Flush immediately if there are unsaved changes."""
        if not self.dirty:
            return False
        return self._flush(flush)

    def _flush(self, flush: FlushCallback) -> bool:
        try:
            flush()
        except OSError as exc:
            self.failed_writes += 1
            first_of_run = (self.failed_writes - 1) % WARN_EVERY_FAILURES == 0
            log = logger.warning if first_of_run else logger.debug
            log("Could not save image (attempt %d), will retry: %s", self.failed_writes, exc)
            return False
        self.failed_writes = 0
        self.dirty = False
        self.time_since_flush = 0.0
        return True
