"""
FIR filter design (windowed-sinc) and time-domain convolution.

Kernels are 101 taps long and Hamming-windowed. Highpass and notch responses
are derived by spectral inversion (unit impulse minus the complementary
kernel); bandpass is the difference of two lowpass kernels.
"""

import logging
from functools import lru_cache
from typing import Optional, Sequence

import numpy as np
from numba import jit

logger = logging.getLogger(__name__)

NUM_TAPS = 101

FILTER_TYPES = ('none', 'lowpass', 'highpass', 'bandpass', 'notch')

# Cutoff frequencies needed by each filter type
REQUIRED_CUTOFFS = {
    'lowpass': 1,
    'highpass': 1,
    'bandpass': 2,
    'notch': 2,
}


def normalize_filter_type(filter_type: Optional[str]) -> str:
    key = 'none' if filter_type is None else str(filter_type).lower()
    if key not in FILTER_TYPES:
        raise ValueError(f"Unknown filter type: {filter_type}")
    return key


def unit_impulse(num_taps: int = NUM_TAPS) -> np.ndarray:
    """Kernel that passes the signal through unchanged (1 at the centre tap)."""
    delta = np.zeros(num_taps)
    delta[num_taps // 2] = 1.0
    return delta


def lowpass_kernel(cutoff: float, sample_rate: float, num_taps: int = NUM_TAPS) -> np.ndarray:
    """
    Windowed-sinc lowpass kernel.

    Parameters
    ----------
    cutoff : float
        Cutoff frequency in Hz
    sample_rate : float
        Sampling rate in Hz
    num_taps : int
        Kernel length (odd, so that the kernel is symmetric about its centre)

    Returns
    -------
    np.ndarray
        Filter taps, length num_taps
    """
    fc = cutoff / sample_rate
    n = np.arange(num_taps) - num_taps // 2

    sinc = np.empty(num_taps)
    centre = n == 0
    sinc[centre] = 2 * fc
    sinc[~centre] = np.sin(2 * np.pi * fc * n[~centre]) / (np.pi * n[~centre])

    # symmetric Hamming: 0.54 - 0.46 * cos(2*pi*i / (M - 1))
    return sinc * np.hamming(num_taps)


def highpass_kernel(cutoff: float, sample_rate: float, num_taps: int = NUM_TAPS) -> np.ndarray:
    return unit_impulse(num_taps) - lowpass_kernel(cutoff, sample_rate, num_taps)


def bandpass_kernel(low: float, high: float, sample_rate: float, num_taps: int = NUM_TAPS) -> np.ndarray:
    return lowpass_kernel(high, sample_rate, num_taps) - lowpass_kernel(low, sample_rate, num_taps)


def notch_kernel(low: float, high: float, sample_rate: float, num_taps: int = NUM_TAPS) -> np.ndarray:
    return unit_impulse(num_taps) - bandpass_kernel(low, high, sample_rate, num_taps)


@lru_cache(maxsize=32)
def _cached_kernel(filter_type: str, cutoffs: tuple, sample_rate: float) -> np.ndarray:
    if filter_type == 'lowpass':
        kernel = lowpass_kernel(cutoffs[0], sample_rate)
    elif filter_type == 'highpass':
        kernel = highpass_kernel(cutoffs[0], sample_rate)
    else:
        low, high = min(cutoffs), max(cutoffs)
        if filter_type == 'bandpass':
            kernel = bandpass_kernel(low, high, sample_rate)
        else:
            kernel = notch_kernel(low, high, sample_rate)

    # Shared between callers through the cache
    kernel.flags.writeable = False
    return kernel


def design_kernel(
    filter_type: Optional[str],
    cutoffs: Sequence[float],
    sample_rate: float
) -> Optional[np.ndarray]:
    """
    Design the FIR kernel for a filter configuration.

    Returns None when no filtering should happen: filter_type is 'none', or
    fewer cutoffs were supplied than the filter type needs (1 for
    lowpass/highpass, 2 for bandpass/notch). Surplus cutoffs are ignored.
    The returned array is read-only.
    """
    filter_type = normalize_filter_type(filter_type)
    if filter_type == 'none':
        return None

    cutoffs = tuple(float(c) for c in (cutoffs or ()))
    required = REQUIRED_CUTOFFS[filter_type]
    if len(cutoffs) < required:
        logger.debug(
            "%s filter needs %d cutoff(s), got %d; passing signal through",
            filter_type, required, len(cutoffs)
        )
        return None

    return _cached_kernel(filter_type, cutoffs[:required], float(sample_rate))


@jit(nopython=True, cache=True)
def _convolve_same(x: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    n = len(x)
    m = len(kernel)
    half = m // 2
    out = np.zeros(n)

    for i in range(n):
        acc = 0.0
        for k in range(m):
            j = i + half - k
            if 0 <= j < n:
                acc += kernel[k] * x[j]
        out[i] = acc

    return out


def convolve(y: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Direct time-domain convolution with the kernel centred on each output sample.

    Samples outside the buffer count as zero, and the output has the same
    length as the input even when the buffer is shorter than the kernel.
    """
    y = np.ascontiguousarray(y, dtype=np.float64)
    kernel = np.ascontiguousarray(kernel, dtype=np.float64)
    if len(kernel) % 2 == 0:
        raise ValueError(f"Kernel length must be odd, got {len(kernel)}")
    return _convolve_same(y, kernel)


def apply_filter(
    y: np.ndarray,
    filter_type: Optional[str],
    cutoffs: Sequence[float],
    sample_rate: float
) -> np.ndarray:
    """
    Band-limit a signal with the configured FIR filter.

    Without a usable filter configuration the input is returned unchanged.
    """
    y = np.asarray(y, dtype=np.float64)
    kernel = design_kernel(filter_type, cutoffs, sample_rate)
    if kernel is None:
        return y
    return convolve(y, kernel)
