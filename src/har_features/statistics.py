"""
Time-domain statistics of a single windowed signal.

Every function here is total: empty, single-sample and constant signals
give 0 for any statistic that would otherwise be undefined, because the
classifier needs a fixed-shape vector even for degenerate windows.

For each signal we compute:
- mean, std (population), min, max, range
- energy (mean of squares), RMS
- MAD (mean absolute deviation from the mean)
- percentiles (linear interpolation) and IQR
- skewness and excess kurtosis
"""

from typing import Dict, Sequence

import numpy as np
from scipy import stats

from har_features.constants import PERCENTILES


def _prepare_signal(signal: Sequence[float]) -> np.ndarray:
    """Cast to a flat float array, dropping NaNs."""
    x = np.asarray(signal, dtype=float).ravel()
    return x[~np.isnan(x)]


def _is_degenerate(x: np.ndarray) -> bool:
    # Same "nearly identical values" test scipy applies before returning
    # NaN for higher moments.
    if x.size == 0:
        return True
    m2 = np.mean((x - x.mean()) ** 2)
    return bool(m2 <= (np.finfo(float).resolution * x.mean()) ** 2)


def mean(signal: Sequence[float]) -> float:
    x = _prepare_signal(signal)
    return float(np.mean(x)) if x.size else 0.0


def std(signal: Sequence[float]) -> float:
    """Population standard deviation (divide by N)."""
    x = _prepare_signal(signal)
    return float(np.std(x, ddof=0)) if x.size > 1 else 0.0


def minimum(signal: Sequence[float]) -> float:
    x = _prepare_signal(signal)
    return float(np.min(x)) if x.size else 0.0


def maximum(signal: Sequence[float]) -> float:
    x = _prepare_signal(signal)
    return float(np.max(x)) if x.size else 0.0


def value_range(signal: Sequence[float]) -> float:
    x = _prepare_signal(signal)
    return float(np.ptp(x)) if x.size else 0.0


def energy(signal: Sequence[float]) -> float:
    """Mean of squared values."""
    x = _prepare_signal(signal)
    return float(np.sum(x**2) / x.size) if x.size else 0.0


def rms(signal: Sequence[float]) -> float:
    x = _prepare_signal(signal)
    return float(np.sqrt(np.mean(x**2))) if x.size > 1 else 0.0


def mad(signal: Sequence[float]) -> float:
    """Mean absolute deviation from the mean."""
    x = _prepare_signal(signal)
    if x.size < 2:
        return 0.0
    return float(np.mean(np.abs(x - x.mean())))


def percentile(signal: Sequence[float], q: float) -> float:
    """q-th percentile (0..100) with linear interpolation between ranks."""
    x = _prepare_signal(signal)
    if x.size == 0:
        return 0.0
    return float(np.percentile(x, q, method="linear"))


def iqr(signal: Sequence[float]) -> float:
    """Interquartile range, 75th minus 25th percentile."""
    return percentile(signal, 75) - percentile(signal, 25)


def skewness(signal: Sequence[float]) -> float:
    """Third standardized moment; 0 below 3 samples or for zero variance."""
    x = _prepare_signal(signal)
    if x.size < 3 or _is_degenerate(x):
        return 0.0
    value = float(stats.skew(x, bias=True))
    return value if np.isfinite(value) else 0.0


def kurtosis(signal: Sequence[float]) -> float:
    """
    Excess (Fisher) kurtosis, fourth standardized moment minus 3.
    0 below 4 samples or for zero variance.
    """
    x = _prepare_signal(signal)
    if x.size < 4 or _is_degenerate(x):
        return 0.0
    value = float(stats.kurtosis(x, fisher=True, bias=True))
    return value if np.isfinite(value) else 0.0


def percentiles(signal: Sequence[float], qs: Sequence[float] = PERCENTILES) -> Dict[str, float]:
    return {f"p{q:g}": percentile(signal, q) for q in qs}


def describe(signal: Sequence[float]) -> Dict[str, float]:
    """All time-domain descriptors of one signal, keyed by name."""
    feats = {
        "mean": mean(signal),
        "std": std(signal),
        "min": minimum(signal),
        "max": maximum(signal),
        "range": value_range(signal),
        "energy": energy(signal),
        "rms": rms(signal),
        "mad": mad(signal),
        "iqr": iqr(signal),
        "skewness": skewness(signal),
        "kurtosis": kurtosis(signal),
    }
    feats.update(percentiles(signal))
    return feats
