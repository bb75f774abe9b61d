"""
Assemble the per-window feature vector consumed by the activity classifier.

The order of the vector is fixed, because the classifier was trained
against one ordering:

1. TIME block        descriptor x three-axis group x axis
2. SMA               mean of each magnitude signal
3. AR reserved       autoregressive coefficients (constant 0)
4. CORRELATION       fixed axis pairs, see correlation.CORRELATION_PAIRS
5. FREQUENCY block   descriptor x spectral signal (x axis)
6. ANGLE             mean-vector angles against gravity and the world axes
7. PADDING           zeros up to feature_dim (or truncation when longer)

Reserved slots are explicit zero entries. Filling them with real
estimators changes what the classifier sees and needs a retrained model.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from har_features import statistics
from har_features.config import DEFAULT_CONFIG, PipelineConfig
from har_features.constants import N_AR_COEFFS, N_SPECTRAL_BANDS
from har_features.correlation import CORRELATION_PAIRS, UNIT_X, UNIT_Y, UNIT_Z, angle, correlation
from har_features.preprocessing import ProcessedSample
from har_features.signals import (
    AXES,
    GROUP_AXES,
    GROUP_MAGNITUDE,
    GROUP_NAMES,
    SIGNAL_NAMES,
    SignalGroup,
    SignalId,
    SignalSet,
    build_signal_set,
)
from har_features.spectral import SpectrumFeatures, spectrum

LOGGER = logging.getLogger(__name__)

# (name, statistic) pairs; None marks a reserved slot
TIME_DESCRIPTORS: Tuple[Tuple[str, Optional[Callable[[np.ndarray], float]]], ...] = (
    ("mean()", statistics.mean),
    ("std()", statistics.std),
    ("mad()", statistics.mad),
    ("max()", statistics.maximum),
    ("min()", statistics.minimum),
    ("energy()", statistics.energy),
    ("iqr()", statistics.iqr),
    ("entropy()", None),
    ("skewness()", statistics.skewness),
    ("kurtosis()", statistics.kurtosis),
)

# (name, SpectrumFeatures attribute); None marks a reserved slot
SPECTRAL_DESCRIPTORS: Tuple[Tuple[str, Optional[str]], ...] = (
    ("meanFreq()", "mean_freq"),
    ("maxInds()", "dom_freq"),
    *((f"bandsEnergy()-{i + 1}", None) for i in range(N_SPECTRAL_BANDS)),
    ("energy()", "spectral_energy"),
    ("entropy()", "spectral_entropy"),
)

# Signals transformed to the frequency domain, with the suffix of each
# member in the feature name ("" for magnitude signals)
SPECTRAL_SIGNALS: Tuple[Tuple[str, Tuple[Tuple[SignalId, str], ...]], ...] = (
    ("fBodyAcc", tuple(zip(GROUP_AXES[SignalGroup.T_BODY_ACC], AXES))),
    ("fBodyAccJerk", tuple(zip(GROUP_AXES[SignalGroup.T_BODY_ACC_JERK], AXES))),
    ("fBodyGyro", tuple(zip(GROUP_AXES[SignalGroup.T_BODY_GYRO], AXES))),
    ("fBodyAccMag", ((SignalId.T_BODY_ACC_MAG, ""),)),
    ("fBodyAccJerkMag", ((SignalId.T_BODY_ACC_JERK_MAG, ""),)),
    ("fBodyGyroMag", ((SignalId.T_BODY_GYRO_MAG, ""),)),
    ("fBodyGyroJerkMag", ((SignalId.T_BODY_GYRO_JERK_MAG, ""),)),
)

# Groups whose autoregressive coefficients are reserved
AR_GROUPS = (SignalGroup.T_BODY_ACC, SignalGroup.T_BODY_GYRO)

# Mean-vector groups compared against the mean gravity vector
ANGLE_GROUPS = (
    SignalGroup.T_BODY_ACC,
    SignalGroup.T_BODY_ACC_JERK,
    SignalGroup.T_BODY_GYRO,
    SignalGroup.T_BODY_GYRO_JERK,
)
WORLD_AXES = (("X", UNIT_X), ("Y", UNIT_Y), ("Z", UNIT_Z))


def _time_names() -> List[str]:
    names = []
    for desc, fn in TIME_DESCRIPTORS:
        for group in SignalGroup:
            for axis in AXES:
                name = f"{GROUP_NAMES[group]}-{desc}-{axis}"
                names.append(name if fn is not None else f"reserved-{name}")
    return names


def _frequency_names() -> List[str]:
    names = []
    for desc, attr in SPECTRAL_DESCRIPTORS:
        for prefix, members in SPECTRAL_SIGNALS:
            for _, suffix in members:
                name = f"{prefix}-{desc}" + (f"-{suffix}" if suffix else "")
                names.append(name if attr is not None else f"reserved-{name}")
    return names


def _natural_blocks() -> Dict[str, List[str]]:
    """Feature names of every block before padding/truncation."""
    blocks = {
        "time": _time_names(),
        "sma": [f"{GROUP_NAMES[g]}-sma()" for g in SignalGroup],
        "ar_reserved": [
            f"reserved-{GROUP_NAMES[g]}-arCoeff()-{axis},{k + 1}"
            for g in AR_GROUPS
            for axis in AXES
            for k in range(N_AR_COEFFS)
        ],
        "correlation": [
            f"correlation({SIGNAL_NAMES[a]},{SIGNAL_NAMES[b]})"
            for a, b in CORRELATION_PAIRS
        ],
        "frequency": _frequency_names(),
        "angle": [f"angle({GROUP_NAMES[g]}Mean,gravityMean)" for g in ANGLE_GROUPS]
        + [f"angle({axis},gravityMean)" for axis, _ in WORLD_AXES],
    }
    return blocks


class FeatureLayout:
    """
    Index map of the feature vector for a given dimension.

    Attributes:
        dim : int
            Vector length.
        names : list of str
            One name per index. Padding slots are named "pad-<i>".
        natural_size : int
            Number of computed (and reserved) entries before padding or
            truncation.
    """

    def __init__(self, dim: int):
        self.dim = dim
        natural = _natural_blocks()
        self.natural_size = sum(len(v) for v in natural.values())

        self.blocks: Dict[str, slice] = {}
        self.names: List[str] = []
        start = 0
        for block, block_names in natural.items():
            kept = block_names[: max(0, dim - start)]
            self.blocks[block] = slice(start, start + len(kept))
            self.names.extend(kept)
            start += len(kept)

        n_pad = dim - start
        self.blocks["padding"] = slice(start, start + n_pad)
        self.names.extend(f"pad-{i}" for i in range(n_pad))

    def block(self, name: str) -> slice:
        return self.blocks[name]

    def index_of(self, feature_name: str) -> int:
        return self.names.index(feature_name)

    @property
    def reserved_indices(self) -> List[int]:
        """Indices held at 0 by contract (reserved and padding slots)."""
        return [
            i for i, name in enumerate(self.names)
            if name.startswith("reserved-") or name.startswith("pad-")
        ]

    def __len__(self) -> int:
        return self.dim

    def __repr__(self) -> str:
        spans = ", ".join(f"{k}={v.start}:{v.stop}" for k, v in self.blocks.items())
        return f"FeatureLayout(dim={self.dim}, {spans})"


def feature_names(config: PipelineConfig = DEFAULT_CONFIG) -> List[str]:
    return FeatureLayout(config.feature_dim).names


def fit_to_dimension(values: Sequence[float], dim: int) -> np.ndarray:
    """Right-pad with zeros or truncate to exactly `dim` float32 entries."""
    out = np.zeros(dim, dtype=np.float32)
    n = min(len(values), dim)
    out[:n] = np.asarray(values[:n], dtype=np.float32)
    return out


def _time_block(signals: SignalSet) -> List[float]:
    feats = []
    for _, fn in TIME_DESCRIPTORS:
        for group in SignalGroup:
            for signal_id in GROUP_AXES[group]:
                feats.append(fn(signals[signal_id]) if fn is not None else 0.0)
    return feats


def _sma_block(signals: SignalSet) -> List[float]:
    return [statistics.mean(signals[GROUP_MAGNITUDE[g]]) for g in SignalGroup]


def _ar_block() -> List[float]:
    return [0.0] * (len(AR_GROUPS) * len(AXES) * N_AR_COEFFS)


def _correlation_block(signals: SignalSet) -> List[float]:
    return [correlation(signals[a], signals[b]) for a, b in CORRELATION_PAIRS]


def _frequency_block(signals: SignalSet, sample_rate_hz: float) -> List[float]:
    spectra: Dict[SignalId, SpectrumFeatures] = {}
    for _, members in SPECTRAL_SIGNALS:
        for signal_id, _ in members:
            spectra[signal_id] = spectrum(signals[signal_id], sample_rate_hz)

    feats = []
    for _, attr in SPECTRAL_DESCRIPTORS:
        for _, members in SPECTRAL_SIGNALS:
            for signal_id, _ in members:
                feats.append(getattr(spectra[signal_id], attr) if attr is not None else 0.0)
    return feats


def _angle_block(signals: SignalSet) -> List[float]:
    gravity = signals.mean_vector(SignalGroup.T_GRAVITY_ACC)
    feats = [angle(signals.mean_vector(g), gravity) for g in ANGLE_GROUPS]
    feats.extend(angle(unit, gravity) for _, unit in WORLD_AXES)
    return feats


class FeatureVectorAssembler:
    """
    Turns one window of processed samples into a read-only float32
    vector of exactly config.feature_dim entries.
    """

    def __init__(self, config: PipelineConfig = DEFAULT_CONFIG):
        self.config = config.validate()
        self.layout = FeatureLayout(config.feature_dim)
        if self.layout.natural_size > config.feature_dim:
            LOGGER.warning(
                "Feature vector truncated from %d to %d entries",
                self.layout.natural_size,
                config.feature_dim,
            )

    def assemble(self, window: Sequence[ProcessedSample]) -> np.ndarray:
        signals = build_signal_set(window, self.config.sample_rate_hz)
        return self.assemble_signals(signals)

    def assemble_signals(self, signals: SignalSet) -> np.ndarray:
        values: List[float] = []
        values.extend(_time_block(signals))
        values.extend(_sma_block(signals))
        values.extend(_ar_block())
        values.extend(_correlation_block(signals))
        values.extend(_frequency_block(signals, self.config.sample_rate_hz))
        values.extend(_angle_block(signals))

        vector = fit_to_dimension(values, self.config.feature_dim)
        vector.flags.writeable = False
        return vector

    def __repr__(self) -> str:
        return f"FeatureVectorAssembler(dim={self.config.feature_dim})"
