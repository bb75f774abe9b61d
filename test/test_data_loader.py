import numpy as np
import pandas as pd
import pytest

from har_features.data_loader import iter_raw_samples, load_recording


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_recording(str(tmp_path / "nope.csv"))


def test_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"accX": [1.0], "accY": [2.0]}).to_csv(path, index=False)
    with pytest.raises(ValueError):
        load_recording(str(path))


def test_gaps_are_interpolated(tmp_path):
    path = tmp_path / "gaps.csv"
    pd.DataFrame({
        "timestamp_ms": [0, 20, 40],
        "accX": [1.0, np.nan, 3.0],
        "accY": [0.0, 0.0, 0.0],
        "accZ": [9.8, 9.8, 9.8],
        "gyroX": [0.0, 0.0, 0.0],
        "gyroY": [0.0, 0.0, 0.0],
        "gyroZ": [np.nan, np.nan, np.nan],
    }).to_csv(path, index=False)

    df = load_recording(str(path))
    assert df["accX"].tolist() == [1.0, 2.0, 3.0]
    assert df["accX"].dtype == np.float32
    samples = list(iter_raw_samples(df))
    assert samples[1].acc_x == 2.0
    assert samples[2].gyro_z == 0.0
