"""
Signal preprocessing for raw accelerometer/gyroscope streams:
- Separate gravity from body acceleration with a single-pole low-pass filter
- Handle missing values in recorded data before it is replayed
"""

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np
import pandas as pd

from har_features.constants import FILTER_ALPHA


@dataclass(frozen=True)
class RawSample:
    acc_x: float
    acc_y: float
    acc_z: float
    gyro_x: float
    gyro_y: float
    gyro_z: float

    def __post_init__(self):
        # Sensor values arrive as float32; store them that way so
        # replaying a recording gives the same numbers as the live path.
        for name in ("acc_x", "acc_y", "acc_z", "gyro_x", "gyro_y", "gyro_z"):
            object.__setattr__(self, name, float(np.float32(getattr(self, name))))

    @classmethod
    def zeros(cls) -> "RawSample":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ProcessedSample:
    raw: RawSample
    body_acc_x: float
    body_acc_y: float
    body_acc_z: float
    gravity_acc_x: float
    gravity_acc_y: float
    gravity_acc_z: float

    @classmethod
    def zeros(cls) -> "ProcessedSample":
        return cls(RawSample.zeros(), 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass
class FilterState:
    """Running gravity estimate, one value per axis."""
    gravity_x: float = 0.0
    gravity_y: float = 0.0
    gravity_z: float = 0.0


class GravitySeparationFilter:
    """
    First-order IIR low-pass filter isolating gravity from raw acceleration.

        gravity = alpha * gravity + (1 - alpha) * raw
        body    = raw - gravity

    The recurrence is order dependent: samples must be applied one at a
    time, in arrival order, against the same FilterState.
    """

    def __init__(self, alpha: float = FILTER_ALPHA):
        if not 0.0 <= alpha < 1.0:
            raise ValueError(f"alpha must be in [0, 1), got {alpha}")
        self.alpha = alpha

    def apply(self, raw: RawSample, state: FilterState) -> ProcessedSample:
        a = self.alpha
        state.gravity_x = a * state.gravity_x + (1.0 - a) * raw.acc_x
        state.gravity_y = a * state.gravity_y + (1.0 - a) * raw.acc_y
        state.gravity_z = a * state.gravity_z + (1.0 - a) * raw.acc_z

        return ProcessedSample(
            raw=raw,
            body_acc_x=raw.acc_x - state.gravity_x,
            body_acc_y=raw.acc_y - state.gravity_y,
            body_acc_z=raw.acc_z - state.gravity_z,
            gravity_acc_x=state.gravity_x,
            gravity_acc_y=state.gravity_y,
            gravity_acc_z=state.gravity_z,
        )

    def apply_many(
        self, raws: Iterable[RawSample], state: FilterState
    ) -> List[ProcessedSample]:
        return [self.apply(raw, state) for raw in raws]

    def __repr__(self) -> str:
        return f"GravitySeparationFilter(alpha={self.alpha})"


# Linearly interpolate missing values in a recorded data frame
def interpolate_missing(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    # Linear interpolation along the time axis (rows)
    out = out.interpolate(method="linear", axis=0, limit_direction="both")
    # columns that are entirely NaN have no neighbours to interpolate from
    out = out.fillna(0.0)
    return out
