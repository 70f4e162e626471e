"""Microphone level readings and simple beat detection."""

from __future__ import annotations

import time
from collections.abc import Callable

DEFAULT_THRESHOLD = 800
BEAT_HOLDOFF_MS = 150


def _millis() -> int:
    return int(time.monotonic() * 1000)


class MicInput:
    """Reads an analogue level and flags beats above a threshold."""

    def __init__(
        self,
        read_analog: Callable[[], int],
        clock: Callable[[], int] | None = None,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        self._read = read_analog
        self._clock = clock or _millis
        self.threshold = threshold
        self._last_trigger = 0

    def detect_beat(self) -> bool:
        """Return True when the level exceeds the threshold outside the hold-off window."""
        value = self._read()
        now = self._clock()
        if value > self.threshold and now - self._last_trigger > BEAT_HOLDOFF_MS:
            self._last_trigger = now
            return True
        return False

    def read_level(self) -> int:
        """Return the raw analogue level."""
        return self._read()