"""
recorder.py

Recording of raw sensor samples for later export.

The caller owns the RecordingBuffer (there is no process-wide list); it
is bounded by `capacity` and emptied by flush(). export_csv() writes the
flushed records to a timestamped CSV file that data_loader can read back.
"""

import os
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

import pandas as pd

from har_features.constants import (
    EXPORT_FILE_PATTERN,
    EXPORT_TIMESTAMP_FORMAT,
    RECORDING_COLUMNS,
)
from har_features.exceptions import BufferFullError, ExportError
from har_features.preprocessing import RawSample

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedSample:
    timestamp_ms: int
    raw: RawSample
    activity_label: str


class RecordingBuffer:
    """
    Bounded list of recorded samples.

    Parameters:
        capacity : int
            Maximum number of samples held before flush() is required.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        self.capacity = capacity
        self._records: List[RecordedSample] = []

    def append(self, record: RecordedSample) -> None:
        """
        Raises:
            BufferFullError
                If the buffer already holds `capacity` records.
        """
        if self.is_full:
            raise BufferFullError(
                f"Recording buffer full ({self.capacity} samples); flush before appending"
            )
        self._records.append(record)

    def record(self, timestamp_ms: int, raw: RawSample, activity_label: str) -> None:
        self.append(RecordedSample(timestamp_ms, raw, activity_label))

    def flush(self) -> List[RecordedSample]:
        """Return all records in order and empty the buffer."""
        records, self._records = self._records, []
        return records

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self.capacity

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"RecordingBuffer({len(self._records)}/{self.capacity} samples)"


def records_to_frame(records: Sequence[RecordedSample]) -> pd.DataFrame:
    rows = [
        (
            r.timestamp_ms,
            r.raw.acc_x, r.raw.acc_y, r.raw.acc_z,
            r.raw.gyro_x, r.raw.gyro_y, r.raw.gyro_z,
            r.activity_label,
        )
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORDING_COLUMNS)


def export_csv(
    records: Sequence[RecordedSample],
    directory: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Write records to <directory>/HAR_Data_<YYYYmmdd_HHMMSS>.csv.

    Returns the absolute path of the written file.

    Raises:
        ExportError
            If there is nothing to write or the file cannot be written.
    """
    if len(records) == 0:
        raise ExportError("No recorded samples to export")

    stamp = (now or datetime.now()).strftime(EXPORT_TIMESTAMP_FORMAT)
    path = os.path.abspath(os.path.join(directory, EXPORT_FILE_PATTERN.format(timestamp=stamp)))

    try:
        os.makedirs(directory, exist_ok=True)
        records_to_frame(records).to_csv(path, index=False, float_format="%.6f")
    except OSError as e:
        raise ExportError(f"Error writing recording to {path}: {e}") from e

    LOGGER.info("Exported %d samples to %s", len(records), path)
    return path
