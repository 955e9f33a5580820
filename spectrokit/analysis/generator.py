"""
Spectrogram pipeline orchestrator.

SpectrogramGenerator holds an immutable SpectrogramConfig and sequences
FIR conditioning -> framing/FFT for `analyze`. Pitch detection and harmonic
extraction work on the raw, unfiltered buffer.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np

from ..dsp_core.fir import apply_filter
from ..dsp_core.mel import default_tick_count, frequency_ticks, tick_labels, tick_positions
from ..dsp_core.pitch import PitchEstimate, detect_pitch, harmonic_series
from ..dsp_core.spectrogram import bin_frequencies, bin_range, compute_spectrogram
from ..render.colormap import Colormap, ColormapRegistry, resolve_colormap
from ..render.image import band_peak_db, render_image
from .config import SpectrogramConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpectrogramResult:
    """dB matrix (frames x bins) plus the half-open bin range [i_min, i_max) to display."""
    S_db: np.ndarray
    i_min: int
    i_max: int
    sample_rate: int
    fft_size: int

    @property
    def n_frames(self) -> int:
        return self.S_db.shape[0]

    @property
    def n_bins(self) -> int:
        return self.S_db.shape[1]

    @property
    def hop_size(self) -> int:
        return self.fft_size // 2

    @property
    def frequencies(self) -> np.ndarray:
        return bin_frequencies(self.sample_rate, self.fft_size)

    @property
    def times(self) -> np.ndarray:
        """Start time of each frame in seconds."""
        return np.arange(self.n_frames) * self.hop_size / self.sample_rate

    @property
    def peak_db(self) -> float:
        return band_peak_db(self.S_db, self.i_min, self.i_max)


@dataclass(frozen=True)
class FrequencyAxis:
    ticks: np.ndarray
    labels: List[str]
    positions: np.ndarray


@dataclass(frozen=True)
class AnalysisReport:
    spectrogram: SpectrogramResult
    pitch: Optional[PitchEstimate] = None


class SpectrogramGenerator:
    """
    Generate spectrograms and pitch estimates from mono sample buffers.

    Args:
        config: Base configuration (defaults when None)
        **overrides: Field overrides layered on top of config

    Examples
    --------
    >>> gen = SpectrogramGenerator(fft_size=2048, window_type='hann')
    >>> result = gen.analyze(np.random.randn(20000))
    >>> result.S_db.shape
    (18, 1024)
    """

    def __init__(self, config: Optional[SpectrogramConfig] = None, **overrides):
        if config is None:
            config = SpectrogramConfig.from_dict(overrides)
        elif overrides:
            config = config.replace(**overrides)
        self._config = config

    @property
    def config(self) -> SpectrogramConfig:
        return self._config

    def condition(self, buffer: np.ndarray) -> np.ndarray:
        """Apply the configured FIR filter (pass-through when none is usable)."""
        cfg = self._config
        return apply_filter(buffer, cfg.filter_type, cfg.filter_cutoffs, cfg.sample_rate)

    def analyze(self, buffer: np.ndarray) -> SpectrogramResult:
        cfg = self._config
        y = self.condition(buffer)
        S_db = compute_spectrogram(y, fft_size=cfg.fft_size, window=cfg.window_type)
        i_min, i_max = bin_range(cfg.sample_rate, cfg.fft_size, cfg.f_min, cfg.f_max)

        logger.info(
            "Analyzed %d samples: %d frames, bins [%d, %d) (filter=%s, window=%s)",
            len(y), S_db.shape[0], i_min, i_max, cfg.filter_type, cfg.window_type
        )
        return SpectrogramResult(S_db, i_min, i_max, cfg.sample_rate, cfg.fft_size)

    def detect_pitch(self, buffer: np.ndarray) -> float:
        """Fundamental frequency of the raw buffer in Hz (0.0 if undetected)."""
        cfg = self._config
        f0 = detect_pitch(buffer, cfg.sample_rate, cfg.f_min, cfg.f_max)
        logger.info("Detected pitch: %.2f Hz", f0)
        return f0

    def extract_harmonics(self, buffer: np.ndarray) -> PitchEstimate:
        f0 = self.detect_pitch(buffer)
        return PitchEstimate(f0, harmonic_series(f0, self._config.f_max))

    def run(self, buffer: np.ndarray) -> AnalysisReport:
        """Spectrogram plus pitch/harmonics according to the config's enable flags."""
        cfg = self._config
        spectrogram = self.analyze(buffer)

        pitch = None
        if cfg.extract_harmonics:
            pitch = self.extract_harmonics(buffer)
        elif cfg.detect_pitch:
            pitch = PitchEstimate(self.detect_pitch(buffer))

        return AnalysisReport(spectrogram, pitch)

    def frequency_axis(self, height: int) -> FrequencyAxis:
        """Ticks, labels and pixel rows for a vertical axis of the given height."""
        cfg = self._config
        n_ticks = cfg.n_ticks if cfg.n_ticks > 0 else default_tick_count(height)
        ticks = frequency_ticks(cfg.f_min, cfg.f_max, cfg.scale_type, n_ticks)
        positions = tick_positions(ticks, cfg.f_min, cfg.f_max, cfg.scale_type, height)
        return FrequencyAxis(ticks, tick_labels(ticks), positions)

    def render(
        self,
        buffer_or_result: Union[np.ndarray, SpectrogramResult],
        colormap: Union[str, Colormap],
        registry: Optional[ColormapRegistry] = None
    ) -> np.ndarray:
        """
        Render a buffer (or an existing analysis) to an RGB uint8 array.

        The colormap is a callable, or a name resolved through the given registry.
        """
        result = buffer_or_result
        if not isinstance(result, SpectrogramResult):
            result = self.analyze(result)
        cmap = resolve_colormap(colormap, registry)
        cfg = self._config
        return render_image(result.S_db, result.i_min, result.i_max, cmap, cfg.gain_db, cfg.range_db)
