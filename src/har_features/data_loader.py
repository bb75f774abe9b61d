# Load recorded sensor sessions (CSV files written by recorder.export_csv)

import os
from typing import Iterator

import pandas as pd

from har_features.constants import RAW_SENSOR_COLUMNS, RECORDING_COLUMNS
from har_features.preprocessing import RawSample, interpolate_missing


# returns the recording with sensor columns as float32 and gaps interpolated
def load_recording(csv_path: str) -> pd.DataFrame:
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Recording not found: {csv_path}")

    df = pd.read_csv(csv_path)
    missing = [c for c in RAW_SENSOR_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(
            f"Recording {csv_path} is missing columns {missing}. "
            f"Expected header: {','.join(RECORDING_COLUMNS)}"
        )

    df[RAW_SENSOR_COLUMNS] = interpolate_missing(
        df[RAW_SENSOR_COLUMNS].astype(float)
    ).astype("float32")
    return df


# yields one RawSample per row, in file order
def iter_raw_samples(df: pd.DataFrame) -> Iterator[RawSample]:
    values = df[RAW_SENSOR_COLUMNS].to_numpy(dtype="float32")
    for acc_x, acc_y, acc_z, gyro_x, gyro_y, gyro_z in values:
        yield RawSample(acc_x, acc_y, acc_z, gyro_x, gyro_y, gyro_z)
