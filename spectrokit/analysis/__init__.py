"""
Pipeline configuration and orchestration.
"""

from .config import SpectrogramConfig
from .generator import SpectrogramGenerator, SpectrogramResult, FrequencyAxis, AnalysisReport

__all__ = ['SpectrogramConfig', 'SpectrogramGenerator', 'SpectrogramResult', 'FrequencyAxis', 'AnalysisReport']
