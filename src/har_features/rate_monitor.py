"""Measure the effective sampling rate of a sensor from its event timestamps."""

from har_features.constants import RATE_MONITOR_INTERVALS


class SampleRateMonitor:
    """
    Averages timestamp intervals and reports the rate in Hz.

    A new rate is published once more than `intervals` intervals have
    been seen; the accumulator then restarts so the value follows drift.
    The pipeline itself counts samples and never uses this value.
    """

    def __init__(self, intervals: int = RATE_MONITOR_INTERVALS):
        if intervals <= 0:
            raise ValueError(f"intervals must be > 0, got {intervals}")
        self.intervals = intervals
        self.rate_hz = 0.0
        self._last_ns = None
        self._count = 0
        self._total_ns = 0

    def update(self, timestamp_ns: int) -> float:
        """Record one event timestamp (nanoseconds); returns the current rate."""
        if self._last_ns is not None:
            delta = timestamp_ns - self._last_ns
            if delta > 0:
                self._total_ns += delta
                self._count += 1
        self._last_ns = timestamp_ns

        if self._count > self.intervals:
            self.rate_hz = 1e9 / (self._total_ns / self._count)
            self._count = 0
            self._total_ns = 0
        return self.rate_hz

    def reset(self) -> None:
        self.rate_hz = 0.0
        self._last_ns = None
        self._count = 0
        self._total_ns = 0
