"""Clock implementations."""

import time


class SystemClock:
    """Monotonic clock backed by time.perf_counter."""

    def now(self) -> float:
        return time.perf_counter()
