import math

import numpy as np
import pytest

from har_features import statistics as st


def test_basic_descriptors():
    x = [1.0, 2.0, 3.0, 4.0]
    assert st.mean(x) == pytest.approx(2.5)
    assert st.std(x) == pytest.approx(math.sqrt(1.25))  # population, not sample
    assert st.minimum(x) == 1.0
    assert st.maximum(x) == 4.0
    assert st.value_range(x) == 3.0
    assert st.energy(x) == pytest.approx(7.5)
    assert st.rms(x) == pytest.approx(math.sqrt(7.5))
    assert st.mad(x) == pytest.approx(1.0)


def test_percentiles_use_linear_interpolation():
    x = [1.0, 2.0, 3.0, 4.0]
    assert st.percentile(x, 25) == pytest.approx(1.75)
    assert st.percentile(x, 75) == pytest.approx(3.25)
    assert st.iqr(x) == pytest.approx(1.5)
    assert st.percentiles(x) == {
        "p10": pytest.approx(1.3),
        "p25": pytest.approx(1.75),
        "p50": pytest.approx(2.5),
        "p75": pytest.approx(3.25),
        "p90": pytest.approx(3.7),
    }


def test_skewness_and_kurtosis():
    x = [1.0, 2.0, 3.0, 4.0]
    assert st.skewness(x) == pytest.approx(0.0, abs=1e-12)
    # fourth standardized moment 1.64, minus 3
    assert st.kurtosis(x) == pytest.approx(-1.36)

    right_tail = [0.0, 0.0, 0.0, 0.0, 10.0]
    assert st.skewness(right_tail) > 0


def test_small_samples_degenerate_to_zero():
    assert st.skewness([1.0, 5.0]) == 0.0
    assert st.kurtosis([1.0, 5.0, 9.0]) == 0.0


@pytest.mark.parametrize("signal", [[], [7.0]])
def test_empty_and_single_sample_dispersion_is_zero(signal):
    feats = st.describe(signal)
    for name in ("std", "mad", "rms", "skewness", "kurtosis", "iqr", "range"):
        assert feats[name] == 0.0


def test_empty_signal_gives_all_zero_description():
    assert all(v == 0.0 for v in st.describe([]).values())


def test_single_sample_keeps_location():
    feats = st.describe([7.0])
    assert feats["mean"] == 7.0
    assert feats["max"] == 7.0
    assert feats["energy"] == 49.0


def test_constant_signal_has_no_shape_statistics():
    x = np.full(128, 9.8)
    assert st.std(x) == pytest.approx(0.0, abs=1e-12)
    assert st.skewness(x) == 0.0
    assert st.kurtosis(x) == 0.0


def test_nans_are_ignored():
    assert st.mean([1.0, np.nan, 3.0]) == pytest.approx(2.0)


def test_describe_contains_every_descriptor(rng):
    feats = st.describe(rng.normal(size=128))
    assert set(feats) == {
        "mean", "std", "min", "max", "range", "energy", "rms", "mad",
        "iqr", "skewness", "kurtosis", "p10", "p25", "p50", "p75", "p90",
    }
    assert all(np.isfinite(v) for v in feats.values())
