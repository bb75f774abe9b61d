"""
windowing.py

Sliding window management for a continuous stream of processed samples.

This module provides a WindowBuffer class to:
- Buffer incoming processed samples
- Report when a full window is available (purely by sample count)
- Slide forward by the configured overlap after each extraction
"""

from collections import deque
import logging
from typing import Tuple

from har_features.exceptions import ConfigurationError
from har_features.preprocessing import ProcessedSample

LOGGER = logging.getLogger(__name__)


class WindowBuffer:
    """
    Overlap-aware sliding buffer driving when feature extraction runs.

    Parameters:
        window_size : int
            Number of samples per window (e.g. 128). Must be >= 2.
        overlap : int
            Number of oldest samples removed by slide(). With the
            default 50% overlap on 128 samples this is 64, leaving
            window_size - overlap samples to refill toward the next window.

    Attributes:
        buffer : deque
            Resident samples, oldest first. Never longer than window_size.
        samples_processed : int
            Total number of samples pushed since construction or reset().
    """

    def __init__(self, window_size: int, overlap: int):
        if window_size < 2:
            raise ConfigurationError(f"window_size must be >= 2, got {window_size}")
        if not 0 < overlap < window_size:
            raise ConfigurationError(
                f"overlap ({overlap}) must be in [1, window_size={window_size})"
            )

        self.window_size = window_size
        self.overlap = overlap

        # pushing past window_size without slide() drops the oldest samples
        self.buffer: deque = deque(maxlen=window_size)
        self.samples_processed = 0

    def push(self, sample: ProcessedSample) -> None:
        """Append one processed sample."""
        if len(self.buffer) == self.window_size:
            LOGGER.debug("Window buffer full, dropping oldest sample")
        self.buffer.append(sample)
        self.samples_processed += 1

    def is_ready(self) -> bool:
        """True once a full window of samples is resident."""
        return len(self.buffer) >= self.window_size

    def snapshot(self) -> Tuple[ProcessedSample, ...]:
        """
        The last window_size samples, oldest first.

        Returns a tuple holding references to the resident (immutable)
        samples, so it stays valid after slide() and later pushes. The
        samples themselves are not copied.

        Raises:
            RuntimeError
                If is_ready() is False.
        """
        if not self.is_ready():
            raise RuntimeError(
                f"Window not ready. Buffer has {len(self.buffer)} samples, "
                f"need {self.window_size}."
            )
        return tuple(self.buffer)

    def slide(self) -> None:
        """
        Remove the oldest `overlap` samples.

        Call this right after extracting features from snapshot().
        """
        for _ in range(min(self.overlap, len(self.buffer))):
            self.buffer.popleft()

    def reset(self) -> None:
        """Clear the buffer, e.g. when starting a new recording."""
        self.buffer.clear()
        self.samples_processed = 0

    def __len__(self) -> int:
        return len(self.buffer)

    def __repr__(self) -> str:
        return (
            f"WindowBuffer(window_size={self.window_size}, "
            f"overlap={self.overlap}, "
            f"buffer={len(self.buffer)}/{self.window_size} samples, "
            f"ready={self.is_ready()})"
        )
