"""
Turn a dB spectrogram matrix into an RGB pixel array.

The array is handed to whatever presentation layer the caller uses; nothing
here touches a drawing surface.
"""

import logging
from typing import Sequence

import numpy as np

from .colormap import Colormap, fallback_color

logger = logging.getLogger(__name__)

# dB value assumed for bins that have no frame data
MISSING_DB = -100.0


def band_peak_db(S_db: np.ndarray, i_min: int, i_max: int) -> float:
    """Loudest value inside the bin band [i_min, i_max), or MISSING_DB if the band holds no data."""
    S_db = np.asarray(S_db)
    if S_db.ndim != 2 or S_db.shape[0] == 0:
        return MISSING_DB
    lo = max(0, i_min)
    hi = min(S_db.shape[1], i_max)
    if hi <= lo:
        return MISSING_DB
    return float(S_db[:, lo:hi].max())


def band_rows(S_db: np.ndarray, i_min: int, i_max: int) -> np.ndarray:
    """
    Slice the band into image orientation: shape (height, n_frames), row 0 = highest bin.

    height is max(1, i_max - i_min); bins outside the matrix are MISSING_DB.
    """
    S_db = np.asarray(S_db, dtype=np.float64)
    n_frames = S_db.shape[0] if S_db.ndim == 2 else 0
    n_bins = S_db.shape[1] if S_db.ndim == 2 else 0
    height = max(1, i_max - i_min)

    band = np.full((height, n_frames), MISSING_DB)
    for row in range(height):
        bin_index = i_min + (height - row - 1)
        if 0 <= bin_index < n_bins:
            band[row] = S_db[:, bin_index]
    return band


def normalize_db(values_db: np.ndarray, gain_db: float, range_db: float) -> np.ndarray:
    """(dB + gain) / range, clamped to [0, 1]."""
    return np.clip((np.asarray(values_db) + gain_db) / range_db, 0.0, 1.0)


def _to_rgb(color, value: float) -> Sequence[int]:
    if isinstance(color, (list, tuple, np.ndarray)) and len(color) >= 3:
        return color[:3]
    return fallback_color(value)


def render_image(
    S_db: np.ndarray,
    i_min: int,
    i_max: int,
    colormap: Colormap,
    gain_db: float = 20.0,
    range_db: float = 80.0
) -> np.ndarray:
    """
    Render the [i_min, i_max) band of a spectrogram to pixels.

    Args:
        S_db: dB matrix, shape (n_frames, n_bins)
        i_min: First bin of the band
        i_max: One past the last bin of the band
        colormap: Callable mapping a value in [0, 1] to (r, g, b)
        gain_db: Offset added before normalisation
        range_db: dB span mapped onto [0, 1]

    Returns:
        uint8 array of shape (max(1, i_max - i_min), n_frames, 3)
    """
    values = normalize_db(band_rows(S_db, i_min, i_max), gain_db, range_db)
    height, width = values.shape
    image = np.zeros((height, width, 3), dtype=np.uint8)

    # Colormaps are scalar callables; identical values share one lookup
    cache = {}
    for row in range(height):
        for col in range(width):
            value = float(values[row, col])
            rgb = cache.get(value)
            if rgb is None:
                rgb = _to_rgb(colormap(value), value)
                cache[value] = rgb
            image[row, col] = np.clip(np.asarray(rgb, dtype=np.float64), 0, 255)

    logger.debug("Rendered %dx%d image from bins [%d, %d)", width, height, i_min, i_max)
    return image
