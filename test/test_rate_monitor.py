import pytest

from har_features.rate_monitor import SampleRateMonitor


def test_reports_zero_until_enough_intervals():
    monitor = SampleRateMonitor(intervals=100)
    for i in range(101):
        assert monitor.update(i * 20_000_000) == 0.0


def test_measures_fifty_hertz():
    monitor = SampleRateMonitor(intervals=100)
    for i in range(102):
        monitor.update(i * 20_000_000)
    assert monitor.rate_hz == pytest.approx(50.0)


def test_follows_rate_changes():
    monitor = SampleRateMonitor(intervals=10)
    t = 0
    for _ in range(12):
        t += 20_000_000
        monitor.update(t)
    for _ in range(12):
        t += 10_000_000
        monitor.update(t)
    assert monitor.rate_hz == pytest.approx(100.0)


def test_non_increasing_timestamps_ignored():
    monitor = SampleRateMonitor(intervals=2)
    for t in [0, 10, 10, 20, 30, 30]:
        monitor.update(t * 1_000_000)
    assert monitor.rate_hz == pytest.approx(100.0)


def test_reset():
    monitor = SampleRateMonitor(intervals=1)
    monitor.update(0)
    monitor.update(10_000_000)
    monitor.update(20_000_000)
    monitor.reset()
    assert monitor.rate_hz == 0.0
