"""
Rendering boundary: colormap capabilities and dB-matrix -> RGB conversion.
"""

from .colormap import Colormap, ColormapRegistry, fallback_color, matplotlib_colormap, resolve_colormap
from .image import MISSING_DB, band_peak_db, band_rows, normalize_db, render_image

__all__ = [
    'Colormap',
    'ColormapRegistry',
    'fallback_color',
    'matplotlib_colormap',
    'resolve_colormap',
    'MISSING_DB',
    'band_peak_db',
    'band_rows',
    'normalize_db',
    'render_image',
]
