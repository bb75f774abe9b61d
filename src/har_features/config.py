"""
config.py

Construction-time configuration of the feature pipeline.

All values are fixed once a pipeline is built; derived sizes
(window_size, overlap, step) are computed from the configured
durations and ratios.
"""

from dataclasses import dataclass, replace

from har_features.constants import (
    FEATURE_DIM,
    FILTER_ALPHA,
    OVERLAP_RATIO,
    SAMPLE_RATE_HZ,
    WINDOW_DURATION_S,
)
from har_features.exceptions import ConfigurationError


@dataclass(frozen=True)
class PipelineConfig:
    """
    Parameters:
        sample_rate_hz : float
            Nominal sensor rate. Used for jerk and FFT bin frequencies.
        window_duration_s : float
            Window length in seconds (2.56 s -> 128 samples at 50 Hz).
        overlap_ratio : float
            Fraction of a window shared with the next one, in (0, 1).
        alpha : float
            Smoothing constant of the gravity filter, in [0, 1).
        feature_dim : int
            Length of every produced feature vector.
    """

    sample_rate_hz: float = SAMPLE_RATE_HZ
    window_duration_s: float = WINDOW_DURATION_S
    overlap_ratio: float = OVERLAP_RATIO
    alpha: float = FILTER_ALPHA
    feature_dim: int = FEATURE_DIM

    @property
    def window_size(self) -> int:
        # round() first so 2.56 * 50 = 127.99999... still gives 128
        return int(round(self.window_duration_s * self.sample_rate_hz, 6))

    @property
    def overlap(self) -> int:
        return int(self.window_size * self.overlap_ratio)

    @property
    def step_size(self) -> int:
        """Samples between consecutive windows; slide() drops `overlap` of them."""
        return self.overlap

    @property
    def sample_interval_s(self) -> float:
        return 1.0 / self.sample_rate_hz

    def validate(self) -> "PipelineConfig":
        """Raise ConfigurationError if the configuration is unusable."""
        if self.sample_rate_hz <= 0:
            raise ConfigurationError(
                f"sample_rate_hz must be > 0, got {self.sample_rate_hz}"
            )
        if self.window_size < 2:
            raise ConfigurationError(
                f"window_size must be >= 2 (jerk needs two samples), got "
                f"{self.window_size} from {self.window_duration_s} s at "
                f"{self.sample_rate_hz} Hz"
            )
        if not 0.0 < self.overlap_ratio < 1.0 or self.overlap < 1:
            raise ConfigurationError(
                f"overlap_ratio must leave 1..window_size-1 samples to slide, "
                f"got {self.overlap_ratio} ({self.overlap} of {self.window_size})"
            )
        if not 0.0 <= self.alpha < 1.0:
            raise ConfigurationError(f"alpha must be in [0, 1), got {self.alpha}")
        if self.feature_dim <= 0:
            raise ConfigurationError(
                f"feature_dim must be > 0, got {self.feature_dim}"
            )
        return self

    def with_overrides(self, **overrides) -> "PipelineConfig":
        """Copy with the given non-None fields replaced, then validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes).validate()


DEFAULT_CONFIG = PipelineConfig()
