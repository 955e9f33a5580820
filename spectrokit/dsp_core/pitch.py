"""
Autocorrelation pitch detection and harmonic series.
"""

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np
from numba import jit

logger = logging.getLogger(__name__)

MAX_HARMONIC = 10


@dataclass(frozen=True)
class PitchEstimate:
    """Fundamental frequency (0.0 = undetected) and its harmonics in ascending order."""
    fundamental: float
    harmonics: List[float] = field(default_factory=list)

    @property
    def detected(self) -> bool:
        return self.fundamental > 0


@jit(nopython=True, cache=True)
def _best_lag(x: np.ndarray, min_lag: int, max_lag: int) -> int:
    """
    Lag in [min_lag, max_lag] with the strictly greatest autocorrelation sum.

    Ties keep the first (lowest) lag. Returns -1 if no lag beats -inf.
    """
    n = len(x)
    best_lag = -1
    best_sum = -np.inf

    for lag in range(min_lag, max_lag + 1):
        acc = 0.0
        for i in range(n - lag):
            acc += x[i] * x[i + lag]
        if acc > best_sum:
            best_sum = acc
            best_lag = lag

    return best_lag


def lag_range(sample_rate: float, f_min: float, f_max: float):
    """
    Autocorrelation lags [floor(sr / f_max), floor(sr / f_min)] searched for a fundamental.

    The lower bound is at least 1. Lags past the end of the buffer stay in the
    range and score the empty sum 0. An empty range comes back with
    min_lag > max_lag.
    """
    min_lag = max(1, int(np.floor(sample_rate / f_max)))
    max_lag = int(np.floor(sample_rate / f_min))
    return min_lag, max_lag


def detect_pitch(y: np.ndarray, sample_rate: float, f_min: float, f_max: float) -> float:
    """
    Estimate the fundamental frequency by autocorrelation.

    Args:
        y: Mono audio time series
        sample_rate: Sampling rate in Hz
        f_min: Lowest candidate fundamental in Hz
        f_max: Highest candidate fundamental in Hz

    Returns:
        Fundamental in Hz, or 0.0 when nothing could be detected
    """
    y = np.ascontiguousarray(y, dtype=np.float64)
    if f_min <= 0 or f_max <= 0:
        return 0.0

    min_lag, max_lag = lag_range(sample_rate, f_min, f_max)
    if min_lag > max_lag:
        logger.debug("Empty lag range [%d, %d]", min_lag, max_lag)
        return 0.0

    lag = _best_lag(y, min_lag, max_lag)
    if lag <= 0:
        return 0.0
    return sample_rate / lag


def harmonic_series(fundamental: float, f_max: float, max_harmonic: int = MAX_HARMONIC) -> List[float]:
    """
    Integer multiples 2..max_harmonic of the fundamental, stopping at the
    first multiple above f_max (a multiple equal to f_max is kept).
    """
    if fundamental <= 0:
        return []

    harmonics = []
    for n in range(2, max_harmonic + 1):
        freq = fundamental * n
        if freq > f_max:
            break
        harmonics.append(freq)
    return harmonics


def estimate_harmonics(y: np.ndarray, sample_rate: float, f_min: float, f_max: float) -> PitchEstimate:
    fundamental = detect_pitch(y, sample_rate, f_min, f_max)
    return PitchEstimate(fundamental, harmonic_series(fundamental, f_max))
