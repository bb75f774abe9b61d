"""
Frequency-domain features of a single windowed signal.

The signal is zero-padded to the next power of two, transformed with a
real FFT and described through its one-sided magnitude spectrum M with
bin frequencies F = i * fs / n_padded:

- spectral energy     sum(M^2)
- spectral centroid   sum(F*M) / sum(M)   (also reported as mean frequency)
- spectral spread     sqrt(sum((F - centroid)^2 * M) / sum(M))
- spectral entropy    -sum(p * ln p), p = M^2 / energy over nonzero bins
- dominant frequency  strongest non-DC bin, and its power M^2
"""

from dataclasses import dataclass, fields
from typing import Dict, Sequence

import numpy as np

from har_features.constants import SAMPLE_RATE_HZ


@dataclass(frozen=True)
class SpectrumFeatures:
    mean_freq: float = 0.0
    spectral_entropy: float = 0.0
    dom_freq: float = 0.0
    dom_freq_power: float = 0.0
    spectral_energy: float = 0.0
    spectral_centroid: float = 0.0
    spectral_spread: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def next_power_of_two(n: int) -> int:
    v = 1
    while v < n:
        v <<= 1
    return v


def one_sided_spectrum(signal: Sequence[float], sample_rate_hz: float = SAMPLE_RATE_HZ):
    """
    Zero-padded real FFT of a signal.

    Returns (freqs, mags), both of length n_padded // 2 + 1.
    """
    x = np.asarray(signal, dtype=float).ravel()
    x = x[~np.isnan(x)]
    n = next_power_of_two(max(x.size, 1))
    padded = np.zeros(n, dtype=float)
    padded[:x.size] = x

    mags = np.abs(np.fft.rfft(padded))
    freqs = np.fft.rfftfreq(n, d=1.0 / sample_rate_hz)
    return freqs, mags


def spectrum(signal: Sequence[float], sample_rate_hz: float = SAMPLE_RATE_HZ) -> SpectrumFeatures:
    freqs, mags = one_sided_spectrum(signal, sample_rate_hz)

    power = mags**2
    total_energy = float(np.sum(power))
    sum_mag = float(np.sum(mags))

    # Avoid all-zero spectrum: every descriptor is defined as 0
    if total_energy <= 0 or sum_mag <= 0:
        return SpectrumFeatures()

    centroid = float(np.sum(freqs * mags) / sum_mag)
    spread = float(np.sqrt(np.sum((freqs - centroid) ** 2 * mags) / sum_mag))

    # Spectral entropy of the normalized power distribution
    p = power / total_energy
    # Avoid log(0)
    p_nonzero = p[p > 0]
    entropy = float(-np.sum(p_nonzero * np.log(p_nonzero)))

    # Dominant frequency: peak in magnitude spectrum, skipping the DC bin
    # unless the signal is constant (non-DC bins at FFT round-off level)
    if mags.size > 1 and np.max(mags[1:]) > 1e-9 * sum_mag:
        idx = int(np.argmax(mags[1:])) + 1
    else:
        idx = 0

    return SpectrumFeatures(
        mean_freq=centroid,
        spectral_entropy=entropy,
        dom_freq=float(freqs[idx]),
        dom_freq_power=float(power[idx]),
        spectral_energy=total_energy,
        spectral_centroid=centroid,
        spectral_spread=spread,
    )
