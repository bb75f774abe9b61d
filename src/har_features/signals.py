"""
signals.py

Derived time-domain signals of one window: jerk (discrete derivative)
and Euclidean magnitude, assembled with the filtered axes into the
20-signal set consumed by the statistics and spectral stages.

Signals are addressed through the closed SignalId enumeration, never by
string lookup:

    5 three-axis groups x 3 axes = 15 signals
        tBodyAcc, tGravityAcc, tBodyAccJerk, tBodyGyro, tBodyGyroJerk
    5 magnitude signals, one per group
"""

from enum import IntEnum
from typing import Dict, Sequence, Tuple

import numpy as np

from har_features.constants import SAMPLE_RATE_HZ
from har_features.exceptions import SignalShapeError
from har_features.preprocessing import ProcessedSample


class SignalId(IntEnum):
    T_BODY_ACC_X = 0
    T_BODY_ACC_Y = 1
    T_BODY_ACC_Z = 2
    T_GRAVITY_ACC_X = 3
    T_GRAVITY_ACC_Y = 4
    T_GRAVITY_ACC_Z = 5
    T_BODY_ACC_JERK_X = 6
    T_BODY_ACC_JERK_Y = 7
    T_BODY_ACC_JERK_Z = 8
    T_BODY_GYRO_X = 9
    T_BODY_GYRO_Y = 10
    T_BODY_GYRO_Z = 11
    T_BODY_GYRO_JERK_X = 12
    T_BODY_GYRO_JERK_Y = 13
    T_BODY_GYRO_JERK_Z = 14
    T_BODY_ACC_MAG = 15
    T_GRAVITY_ACC_MAG = 16
    T_BODY_ACC_JERK_MAG = 17
    T_BODY_GYRO_MAG = 18
    T_BODY_GYRO_JERK_MAG = 19


N_SIGNALS = len(SignalId)

# UCI-HAR style names, index-aligned with SignalId
SIGNAL_NAMES: Dict[SignalId, str] = {
    SignalId.T_BODY_ACC_X: "tBodyAccX",
    SignalId.T_BODY_ACC_Y: "tBodyAccY",
    SignalId.T_BODY_ACC_Z: "tBodyAccZ",
    SignalId.T_GRAVITY_ACC_X: "tGravityAccX",
    SignalId.T_GRAVITY_ACC_Y: "tGravityAccY",
    SignalId.T_GRAVITY_ACC_Z: "tGravityAccZ",
    SignalId.T_BODY_ACC_JERK_X: "tBodyAccJerkX",
    SignalId.T_BODY_ACC_JERK_Y: "tBodyAccJerkY",
    SignalId.T_BODY_ACC_JERK_Z: "tBodyAccJerkZ",
    SignalId.T_BODY_GYRO_X: "tBodyGyroX",
    SignalId.T_BODY_GYRO_Y: "tBodyGyroY",
    SignalId.T_BODY_GYRO_Z: "tBodyGyroZ",
    SignalId.T_BODY_GYRO_JERK_X: "tBodyGyroJerkX",
    SignalId.T_BODY_GYRO_JERK_Y: "tBodyGyroJerkY",
    SignalId.T_BODY_GYRO_JERK_Z: "tBodyGyroJerkZ",
    SignalId.T_BODY_ACC_MAG: "tBodyAccMag",
    SignalId.T_GRAVITY_ACC_MAG: "tGravityAccMag",
    SignalId.T_BODY_ACC_JERK_MAG: "tBodyAccJerkMag",
    SignalId.T_BODY_GYRO_MAG: "tBodyGyroMag",
    SignalId.T_BODY_GYRO_JERK_MAG: "tBodyGyroJerkMag",
}


class SignalGroup(IntEnum):
    T_BODY_ACC = 0
    T_GRAVITY_ACC = 1
    T_BODY_ACC_JERK = 2
    T_BODY_GYRO = 3
    T_BODY_GYRO_JERK = 4


GROUP_NAMES: Dict[SignalGroup, str] = {
    SignalGroup.T_BODY_ACC: "tBodyAcc",
    SignalGroup.T_GRAVITY_ACC: "tGravityAcc",
    SignalGroup.T_BODY_ACC_JERK: "tBodyAccJerk",
    SignalGroup.T_BODY_GYRO: "tBodyGyro",
    SignalGroup.T_BODY_GYRO_JERK: "tBodyGyroJerk",
}

AXES = ("X", "Y", "Z")

# (x, y, z) signals of every three-axis group
GROUP_AXES: Dict[SignalGroup, Tuple[SignalId, SignalId, SignalId]] = {
    group: (
        SignalId(group * 3),
        SignalId(group * 3 + 1),
        SignalId(group * 3 + 2),
    )
    for group in SignalGroup
}

# magnitude signal of every three-axis group
GROUP_MAGNITUDE: Dict[SignalGroup, SignalId] = {
    group: SignalId(SignalId.T_BODY_ACC_MAG + group) for group in SignalGroup
}


def jerk(signal: Sequence[float], sample_rate_hz: float = SAMPLE_RATE_HZ) -> np.ndarray:
    """
    Discrete time derivative: jerk[i] = (s[i] - s[i-1]) / dt.

    jerk[0] has no previous sample and is 0. Signals shorter than two
    samples give an all-zero result of the same length.
    """
    x = np.asarray(signal, dtype=float)
    out = np.zeros(x.shape, dtype=float)
    if x.size < 2:
        return out
    out[1:] = np.diff(x) * sample_rate_hz
    return out


def magnitude(x: Sequence[float], y: Sequence[float], z: Sequence[float]) -> np.ndarray:
    """Per-sample Euclidean norm sqrt(x^2 + y^2 + z^2)."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    z = np.asarray(z, dtype=float)
    if not (x.shape == y.shape == z.shape):
        raise SignalShapeError(
            f"magnitude needs equal-length axes, got {x.shape}, {y.shape}, {z.shape}"
        )
    return np.sqrt(x * x + y * y + z * z)


class SignalSet:
    """
    Read-only (N_SIGNALS, window_length) matrix of derived signals.

    Index with a SignalId to get one signal, or with a SignalGroup via
    axes() to get its (3, window_length) block.
    """

    def __init__(self, data: np.ndarray):
        data = np.array(data, dtype=float)
        if data.ndim != 2 or data.shape[0] != N_SIGNALS:
            raise SignalShapeError(
                f"SignalSet needs shape ({N_SIGNALS}, n), got {data.shape}"
            )
        data.flags.writeable = False
        self._data = data

    def __getitem__(self, signal_id: SignalId) -> np.ndarray:
        return self._data[SignalId(signal_id)]

    def axes(self, group: SignalGroup) -> np.ndarray:
        first = GROUP_AXES[group][0]
        return self._data[first:first + 3]

    def mean_vector(self, group: SignalGroup) -> np.ndarray:
        """Mean of each axis of a group, as a 3-vector."""
        block = self.axes(group)
        if block.shape[1] == 0:
            return np.zeros(3, dtype=float)
        return block.mean(axis=1)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def window_length(self) -> int:
        return self._data.shape[1]

    def __len__(self) -> int:
        return N_SIGNALS

    def __repr__(self) -> str:
        return f"SignalSet(signals={N_SIGNALS}, window_length={self.window_length})"


def build_signal_set(
    window: Sequence[ProcessedSample],
    sample_rate_hz: float = SAMPLE_RATE_HZ,
) -> SignalSet:
    """
    Derive all 20 signals from a window of processed samples.

    An empty window is treated as a single all-zero sample so that
    downstream statistics still see a well-shaped input.
    """
    if len(window) == 0:
        window = [ProcessedSample.zeros()]

    n = len(window)
    data = np.empty((N_SIGNALS, n), dtype=float)

    data[SignalId.T_BODY_ACC_X] = [s.body_acc_x for s in window]
    data[SignalId.T_BODY_ACC_Y] = [s.body_acc_y for s in window]
    data[SignalId.T_BODY_ACC_Z] = [s.body_acc_z for s in window]
    data[SignalId.T_GRAVITY_ACC_X] = [s.gravity_acc_x for s in window]
    data[SignalId.T_GRAVITY_ACC_Y] = [s.gravity_acc_y for s in window]
    data[SignalId.T_GRAVITY_ACC_Z] = [s.gravity_acc_z for s in window]
    # gyroscope has no gravity component; raw rates are the body signal
    data[SignalId.T_BODY_GYRO_X] = [s.raw.gyro_x for s in window]
    data[SignalId.T_BODY_GYRO_Y] = [s.raw.gyro_y for s in window]
    data[SignalId.T_BODY_GYRO_Z] = [s.raw.gyro_z for s in window]

    for axis in range(3):
        data[SignalId.T_BODY_ACC_JERK_X + axis] = jerk(
            data[SignalId.T_BODY_ACC_X + axis], sample_rate_hz
        )
        data[SignalId.T_BODY_GYRO_JERK_X + axis] = jerk(
            data[SignalId.T_BODY_GYRO_X + axis], sample_rate_hz
        )

    for group in SignalGroup:
        x, y, z = GROUP_AXES[group]
        data[GROUP_MAGNITUDE[group]] = magnitude(data[x], data[y], data[z])

    return SignalSet(data)
