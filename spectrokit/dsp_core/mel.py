"""
Frequency axis mapping - Hz <-> Mel conversion and tick generation.

Uses the natural-log form of the HTK Mel formula:
    mel = 1127.01048 * ln(1 + f / 700)
The common 2595 * log10(1 + f / 700) form (librosa's htk=True) uses a rounded
constant and differs from this one by about 1.4e-5 relative.
"""

from typing import List, Union

import numpy as np

MEL_FACTOR = 1127.01048
MEL_BREAK_HZ = 700.0

SCALE_TYPES = ('linear', 'mel')

# Pixels per tick when the tick count is derived from the image height
TICK_SPACING_PX = 30


def normalize_scale_type(scale: str) -> str:
    key = str(scale).lower()
    if key not in SCALE_TYPES:
        raise ValueError(f"Unknown scale type: {scale}")
    return key


def hz_to_mel(frequencies: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Convert Hz to Mel scale.

    Args:
        frequencies: Frequencies in Hz (scalar or array)

    Returns:
        Frequencies in Mel scale
    """
    if np.isscalar(frequencies):
        return float(MEL_FACTOR * np.log(frequencies / MEL_BREAK_HZ + 1.0))
    frequencies = np.asarray(frequencies, dtype=np.float64)
    return MEL_FACTOR * np.log(frequencies / MEL_BREAK_HZ + 1.0)


def mel_to_hz(mels: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Convert Mel scale to Hz.

    Args:
        mels: Frequencies in Mel scale (scalar or array)

    Returns:
        Frequencies in Hz
    """
    if np.isscalar(mels):
        return float(MEL_BREAK_HZ * (np.exp(mels / MEL_FACTOR) - 1.0))
    mels = np.asarray(mels, dtype=np.float64)
    return MEL_BREAK_HZ * (np.exp(mels / MEL_FACTOR) - 1.0)


def frequency_ticks(f_min: float, f_max: float, scale: str = 'mel', n_ticks: int = 20) -> np.ndarray:
    """
    Generate ascending tick frequencies from f_min to f_max inclusive.

    Linear ticks are evenly spaced in Hz; Mel ticks are evenly spaced in Mel
    space and mapped back to Hz. Fewer than 2 ticks are clamped to 2.
    """
    scale = normalize_scale_type(scale)
    n_ticks = max(2, int(n_ticks))

    if scale == 'mel':
        mel_min = hz_to_mel(f_min)
        mel_max = hz_to_mel(f_max)
        mel_step = (mel_max - mel_min) / (n_ticks - 1)
        ticks = mel_to_hz(mel_min + np.arange(n_ticks) * mel_step)
        # pin the endpoints against round-trip error
        ticks[0], ticks[-1] = f_min, f_max
        return ticks

    step = (f_max - f_min) / (n_ticks - 1)
    return f_min + np.arange(n_ticks) * step


def tick_positions(
    ticks: np.ndarray,
    f_min: float,
    f_max: float,
    scale: str,
    height: int
) -> np.ndarray:
    """Pixel row for each tick on an axis of the given height (row 0 = f_max)."""
    scale = normalize_scale_type(scale)
    ticks = np.asarray(ticks, dtype=np.float64)
    if scale == 'mel':
        lo, hi = hz_to_mel(f_min), hz_to_mel(f_max)
        ratio = (hz_to_mel(ticks) - lo) / (hi - lo)
    else:
        ratio = (ticks - f_min) / (f_max - f_min)
    return height - ratio * height


def default_tick_count(height: int) -> int:
    return max(2, height // TICK_SPACING_PX)


def format_frequency(freq: float) -> str:
    if freq >= 1000:
        return f"{freq / 1000:.2f} kHz"
    return f"{freq:.0f} Hz"


def tick_labels(ticks: np.ndarray) -> List[str]:
    return [format_frequency(f) for f in ticks]
