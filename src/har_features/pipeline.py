"""
pipeline.py

Per-sample driver of the feature extraction stages:

    raw sample -> gravity filter -> window buffer -> (when ready)
    signal set -> feature vector -> slide

Everything runs synchronously on the caller's thread. Samples must be
pushed by a single writer in arrival order; the filter state depends on it.
"""

import logging
from collections import Counter
from typing import Optional

import numpy as np
import pandas as pd

from har_features.config import DEFAULT_CONFIG, PipelineConfig
from har_features.data_loader import iter_raw_samples
from har_features.features import FeatureVectorAssembler
from har_features.preprocessing import FilterState, GravitySeparationFilter, RawSample
from har_features.signals import SignalSet, build_signal_set
from har_features.windowing import WindowBuffer

LOGGER = logging.getLogger(__name__)


class FeaturePipeline:
    """
    Streams raw samples into feature vectors.

    Attributes:
        windows_emitted : int
            Number of feature vectors produced so far.
        last_window_start : int
            Sample index (since reset) of the first sample in the most
            recently extracted window, or -1.
        last_signals : SignalSet or None
            Derived signals of the most recently extracted window.
    """

    def __init__(self, config: PipelineConfig = DEFAULT_CONFIG):
        self.config = config.validate()
        self.filter = GravitySeparationFilter(config.alpha)
        self.state = FilterState()
        self.buffer = WindowBuffer(config.window_size, config.overlap)
        self.assembler = FeatureVectorAssembler(config)
        self.windows_emitted = 0
        self.last_window_start = -1
        self.last_signals: Optional[SignalSet] = None

    def push(self, raw: RawSample) -> Optional[np.ndarray]:
        """
        Feed one raw sample.

        Returns the feature vector when this sample completes a window,
        otherwise None.
        """
        self.buffer.push(self.filter.apply(raw, self.state))
        if not self.buffer.is_ready():
            return None

        window = self.buffer.snapshot()
        self.last_signals = build_signal_set(window, self.config.sample_rate_hz)
        vector = self.assembler.assemble_signals(self.last_signals)
        self.last_window_start = self.buffer.samples_processed - len(window)
        self.buffer.slide()
        self.windows_emitted += 1
        LOGGER.debug(
            "Window %d extracted (samples %d..%d)",
            self.windows_emitted,
            self.last_window_start,
            self.buffer.samples_processed - 1,
        )
        return vector

    def reset(self) -> None:
        """Start over with an empty buffer and a fresh gravity estimate."""
        self.state = FilterState()
        self.buffer.reset()
        self.windows_emitted = 0
        self.last_window_start = -1
        self.last_signals = None

    def __repr__(self) -> str:
        return f"FeaturePipeline({self.config}, windows_emitted={self.windows_emitted})"


def build_feature_dataset(
    recording_df: pd.DataFrame,
    config: PipelineConfig = DEFAULT_CONFIG,
) -> pd.DataFrame:
    """
    Replay a recording through a fresh pipeline, one row per window.

    recording_df must contain the raw sensor columns (accX..gyroZ).
    Output columns: window_index, start_sample, [activity_label,]
    then one column per feature name.
    """
    pipeline = FeaturePipeline(config)
    names = pipeline.assembler.layout.names
    has_labels = "activity_label" in recording_df.columns
    labels = recording_df["activity_label"].astype(str).tolist() if has_labels else None

    records = []
    for raw in iter_raw_samples(recording_df):
        vector = pipeline.push(raw)
        if vector is None:
            continue

        start = pipeline.last_window_start
        row = {"window_index": pipeline.windows_emitted - 1, "start_sample": start}
        if labels is not None:
            # majority label of the samples in the window
            window_labels = labels[start:start + config.window_size]
            row["activity_label"] = Counter(window_labels).most_common(1)[0][0]
        row.update(zip(names, vector.tolist()))
        records.append(row)

    LOGGER.info("Built %d feature rows from %d samples", len(records), len(recording_df))
    meta_cols = ["window_index", "start_sample"] + (["activity_label"] if has_labels else [])
    return pd.DataFrame(records, columns=meta_cols + names)
