"""
spectrokit - spectrogram, FIR conditioning and pitch estimation for mono audio.
"""

from .analysis import SpectrogramConfig, SpectrogramGenerator, SpectrogramResult, FrequencyAxis, AnalysisReport
from .dsp_core import PitchEstimate
from .render import ColormapRegistry, matplotlib_colormap, render_image

__all__ = [
    'SpectrogramConfig',
    'SpectrogramGenerator',
    'SpectrogramResult',
    'FrequencyAxis',
    'AnalysisReport',
    'PitchEstimate',
    'ColormapRegistry',
    'matplotlib_colormap',
    'render_image',
]

__version__ = '1.0.0'
