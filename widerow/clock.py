"""Write timestamp source."""

import time


class MonotonicClock:
    """
    Issues strictly increasing microsecond timestamps.

    Wall-clock microseconds are used while they move forward; otherwise the
    previous value plus one. A delete issued before a write on the same clock
    is therefore always ordered before it.
    """

    def __init__(self):
        self._last = 0

    def next(self) -> int:
        now = time.time_ns() // 1000
        self._last = now if now > self._last else self._last + 1
        return self._last
