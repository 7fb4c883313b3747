from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional


class ThrottledLogger:
    """Logger that emits at most one message per ``max_interval_s``.

    Messages arriving inside the interval are dropped; the next message that
    does get through is preceded by a line reporting how many were skipped.
    """

    def __init__(
        self,
        name: str,
        max_interval_s: float,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.max_interval_s = max_interval_s
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._lock = threading.Lock()
        self._last_log: Optional[float] = None
        self._skipped = 0

    @property
    def skipped(self) -> int:
        with self._lock:
            return self._skipped

    def info(self, msg: str, *args: Any) -> bool:
        return self._log(logging.INFO, msg, args)

    def warning(self, msg: str, *args: Any) -> bool:
        return self._log(logging.WARNING, msg, args)

    def error(self, msg: str, *args: Any) -> bool:
        return self._log(logging.ERROR, msg, args)

    def _log(self, level: int, msg: str, args: tuple[Any, ...]) -> bool:
        now = self._clock()
        with self._lock:
            if self._last_log is not None and now - self._last_log < self.max_interval_s:
                self._skipped += 1
                return False
            self._last_log = now
            skipped, self._skipped = self._skipped, 0

        if skipped:
            self._logger.log(level, "%s: skipped %d log messages", self.name, skipped)
        self._logger.log(level, "%s: " + msg, self.name, *args)
        return True
