import logging
from typing import Tuple

import numpy as np

from .fft import is_power_of_two, rfft_frames
from .window import get_window, normalize_window_type

logger = logging.getLogger(__name__)

# Added to magnitudes before log10 so that silent bins stay finite
MAGNITUDE_EPS = 1e-12


def frame_count(length: int, fft_size: int) -> int:
    """Number of half-overlapping frames that fit in a buffer (0 if it is too short)."""
    if length < fft_size:
        return 0
    hop_length = fft_size // 2
    return (length - fft_size) // hop_length + 1


def amplitude_to_db(magnitude: np.ndarray) -> np.ndarray:
    """dB = 20 * log10(|S| + eps)"""
    return 20.0 * np.log10(np.abs(magnitude) + MAGNITUDE_EPS)


def compute_spectrogram(
    y: np.ndarray,
    fft_size: int = 8192,
    window: str = 'bh7'
) -> np.ndarray:
    """
    Compute a decibel magnitude spectrogram with 50% frame overlap.

    Parameters
    ----------
    y : np.ndarray
        Mono audio time series
    fft_size : int
        FFT frame length, must be a power of two >= 2
    window : str
        Window type ('none', 'cosine', 'hann', 'bh7')

    Returns
    -------
    np.ndarray
        dB magnitudes, shape (n_frames, fft_size // 2), frames ordered by
        time and bins by ascending frequency. A buffer shorter than
        fft_size yields zero frames.

    Examples
    --------
    >>> import numpy as np
    >>> S = compute_spectrogram(np.random.randn(20000), fft_size=2048, window='hann')
    >>> S.shape  # 18 frames, 1024 bins
    (18, 1024)
    """
    y = np.asarray(y, dtype=np.float64)
    if y.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {y.shape}")
    if fft_size < 2 or not is_power_of_two(fft_size):
        raise ValueError(f"fft_size must be a power of two >= 2, got {fft_size}")

    n_bins = fft_size // 2
    hop_length = fft_size // 2
    n_frames = frame_count(len(y), fft_size)

    if n_frames == 0:
        logger.debug("Buffer of %d samples is shorter than fft_size %d; no frames", len(y), fft_size)
        return np.empty((0, n_bins), dtype=np.float64)

    # Extract all frames at once (vectorized)
    frame_starts = np.arange(n_frames) * hop_length
    frame_indices = frame_starts[:, np.newaxis] + np.arange(fft_size)
    frames = y[frame_indices]

    if normalize_window_type(window) != 'none':
        frames = frames * get_window(window, fft_size)

    spectrum = rfft_frames(frames)
    S_db = amplitude_to_db(spectrum)

    logger.debug("Spectrogram: %d frames x %d bins (window=%s)", n_frames, n_bins, window)
    return S_db


def bin_frequencies(sample_rate: float, fft_size: int) -> np.ndarray:
    """Centre frequency of each retained bin: k * sample_rate / fft_size for k < fft_size / 2."""
    return np.arange(fft_size // 2) * sample_rate / fft_size


def bin_range(sample_rate: float, fft_size: int, f_min: float, f_max: float) -> Tuple[int, int]:
    """
    Half-open bin index range [i_min, i_max) covering f_min..f_max.

    i_max may exceed the number of bins when f_max lies above Nyquist; consumers
    treat such bins as missing data.
    """
    nyquist = sample_rate / 2
    bin_freq = nyquist / (fft_size / 2)
    i_min = int(np.floor(f_min / bin_freq))
    i_max = int(np.floor(f_max / bin_freq))
    return i_min, i_max
