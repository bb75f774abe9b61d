"""
Cross-axis Pearson correlation and orientation angles.
"""

from typing import Sequence, Tuple

import numpy as np

from har_features.exceptions import SignalShapeError
from har_features.signals import SignalId

# Axis pairs correlated within each triple, in vector order
CORRELATION_PAIRS: Tuple[Tuple[SignalId, SignalId], ...] = (
    (SignalId.T_BODY_ACC_X, SignalId.T_BODY_ACC_Y),
    (SignalId.T_BODY_ACC_X, SignalId.T_BODY_ACC_Z),
    (SignalId.T_BODY_ACC_Y, SignalId.T_BODY_ACC_Z),
    (SignalId.T_BODY_ACC_JERK_X, SignalId.T_BODY_ACC_JERK_Y),
    (SignalId.T_BODY_ACC_JERK_X, SignalId.T_BODY_ACC_JERK_Z),
    (SignalId.T_BODY_ACC_JERK_Y, SignalId.T_BODY_ACC_JERK_Z),
    (SignalId.T_BODY_GYRO_X, SignalId.T_BODY_GYRO_Y),
    (SignalId.T_BODY_GYRO_X, SignalId.T_BODY_GYRO_Z),
    (SignalId.T_BODY_GYRO_Y, SignalId.T_BODY_GYRO_Z),
    (SignalId.T_BODY_GYRO_JERK_X, SignalId.T_BODY_GYRO_JERK_Y),
    (SignalId.T_BODY_GYRO_JERK_X, SignalId.T_BODY_GYRO_JERK_Z),
    (SignalId.T_BODY_GYRO_JERK_Y, SignalId.T_BODY_GYRO_JERK_Z),
)

UNIT_X = np.array([1.0, 0.0, 0.0])
UNIT_Y = np.array([0.0, 1.0, 0.0])
UNIT_Z = np.array([0.0, 0.0, 1.0])


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation of two equal-length signals.

    0 when fewer than two samples are present or either signal has
    zero variance.
    """
    a = np.asarray(x, dtype=float).ravel()
    b = np.asarray(y, dtype=float).ravel()
    if a.size != b.size:
        raise SignalShapeError(
            f"correlation needs equal-length signals, got {a.size} and {b.size}"
        )
    if a.size < 2:
        return 0.0

    da = a - a.mean()
    db = b - b.mean()
    denom = np.sqrt(np.sum(da * da) * np.sum(db * db))
    if denom == 0 or not np.isfinite(denom):
        return 0.0
    c = float(np.sum(da * db) / denom)
    # rounding can push |c| a hair past 1
    return float(np.clip(c, -1.0, 1.0))


def angle(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Angle in radians between two 3-vectors.

    A zero-length vector has no direction; the angle is 0 by convention.
    """
    u = np.asarray(a, dtype=float).ravel()
    v = np.asarray(b, dtype=float).ravel()
    if u.shape != v.shape:
        raise SignalShapeError(f"angle needs equal-size vectors, got {u.shape} and {v.shape}")

    norm_u = float(np.linalg.norm(u))
    norm_v = float(np.linalg.norm(v))
    if norm_u == 0.0 or norm_v == 0.0:
        return 0.0
    cos_theta = np.clip(np.dot(u, v) / (norm_u * norm_v), -1.0, 1.0)
    return float(np.arccos(cos_theta))
