import pytest

from har_features.config import DEFAULT_CONFIG, PipelineConfig
from har_features.exceptions import ConfigurationError


def test_default_sizes():
    assert DEFAULT_CONFIG.window_size == 128
    assert DEFAULT_CONFIG.overlap == 64
    assert DEFAULT_CONFIG.step_size == 64
    assert DEFAULT_CONFIG.sample_interval_s == pytest.approx(0.02)
    assert DEFAULT_CONFIG.feature_dim == 561


@pytest.mark.parametrize("overrides", [
    {"sample_rate_hz": 0.0},
    {"window_duration_s": 0.01},
    {"overlap_ratio": 0.0},
    {"overlap_ratio": 1.0},
    {"overlap_ratio": 1.5},
    {"alpha": 1.0},
    {"alpha": -0.1},
    {"feature_dim": 0},
])
def test_invalid_values_rejected(overrides):
    with pytest.raises(ConfigurationError):
        DEFAULT_CONFIG.with_overrides(**overrides)


def test_tiny_overlap_rejected():
    # 0.1 of a 4-sample window rounds down to nothing to slide
    with pytest.raises(ConfigurationError):
        PipelineConfig(sample_rate_hz=4.0, window_duration_s=1.0, overlap_ratio=0.1).validate()


def test_none_overrides_are_ignored():
    config = DEFAULT_CONFIG.with_overrides(sample_rate_hz=None, alpha=0.9)
    assert config.sample_rate_hz == 50.0
    assert config.alpha == 0.9
    assert DEFAULT_CONFIG.alpha == 0.8


@pytest.mark.parametrize("ratio, overlap", [(0.5, 64), (0.25, 32), (0.75, 96)])
def test_step_size_is_samples_dropped_by_slide(ratio, overlap):
    config = DEFAULT_CONFIG.with_overrides(overlap_ratio=ratio)
    assert config.overlap == overlap
    assert config.step_size == overlap
