import pytest

from har_features.exceptions import ConfigurationError
from har_features.preprocessing import ProcessedSample, RawSample
from har_features.windowing import WindowBuffer


def _sample(i):
    return ProcessedSample(RawSample(float(i), 0, 0, 0, 0, 0), float(i), 0, 0, 0, 0, 0)


def test_not_ready_below_window_size():
    buf = WindowBuffer(window_size=128, overlap=64)
    for i in range(127):
        buf.push(_sample(i))
        assert not buf.is_ready()
    assert len(buf) == 127


def test_ready_at_window_size_and_snapshot_in_order():
    buf = WindowBuffer(window_size=8, overlap=4)
    for i in range(8):
        buf.push(_sample(i))

    assert buf.is_ready()
    window = buf.snapshot()
    assert len(window) == 8
    assert [s.body_acc_x for s in window] == [float(i) for i in range(8)]


def test_slide_leaves_window_minus_overlap():
    buf = WindowBuffer(window_size=128, overlap=64)
    for i in range(128):
        buf.push(_sample(i))
    buf.slide()

    assert len(buf) == 64
    assert not buf.is_ready()
    assert buf.buffer[0].body_acc_x == 64.0


@pytest.mark.parametrize("n_pushes", [128, 129, 200, 1000])
def test_slide_invariant_after_many_pushes(n_pushes):
    buf = WindowBuffer(window_size=128, overlap=64)
    for i in range(n_pushes):
        buf.push(_sample(i))
    assert len(buf) == 128
    buf.slide()
    assert len(buf) == 64
    # the newest samples are kept
    assert buf.buffer[-1].body_acc_x == float(n_pushes - 1)


def test_refills_to_next_window_after_step():
    buf = WindowBuffer(window_size=10, overlap=4)
    for i in range(10):
        buf.push(_sample(i))
    buf.slide()
    for i in range(10, 13):
        buf.push(_sample(i))
        assert not buf.is_ready()
    buf.push(_sample(13))
    assert buf.is_ready()
    assert buf.snapshot()[0].body_acc_x == 4.0


def test_snapshot_before_ready_raises():
    buf = WindowBuffer(window_size=4, overlap=2)
    buf.push(_sample(0))
    with pytest.raises(RuntimeError):
        buf.snapshot()


def test_reset_clears_everything():
    buf = WindowBuffer(window_size=4, overlap=2)
    for i in range(6):
        buf.push(_sample(i))
    buf.reset()
    assert len(buf) == 0
    assert buf.samples_processed == 0


@pytest.mark.parametrize("window_size, overlap", [(1, 0), (0, 0), (8, 0), (8, 8), (8, -1)])
def test_invalid_sizes_rejected(window_size, overlap):
    with pytest.raises(ConfigurationError):
        WindowBuffer(window_size, overlap)


def test_snapshot_survives_slide_and_shares_samples():
    buf = WindowBuffer(window_size=4, overlap=2)
    for i in range(4):
        buf.push(_sample(i))
    snap = buf.snapshot()
    resident = list(buf.buffer)
    buf.slide()
    buf.push(_sample(4))

    assert [s.body_acc_x for s in snap] == [0.0, 1.0, 2.0, 3.0]
    assert all(a is b for a, b in zip(snap, resident))
