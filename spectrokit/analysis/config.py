"""
Spectrogram pipeline configuration.

A SpectrogramConfig is built once by overlaying caller overrides on the
documented defaults and is never mutated afterwards. Overrides can come from
keyword arguments, a plain dict, or a YAML file.
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from ..dsp_core.fft import is_power_of_two
from ..dsp_core.fir import normalize_filter_type
from ..dsp_core.mel import normalize_scale_type
from ..dsp_core.window import normalize_window_type


@dataclass(frozen=True)
class SpectrogramConfig:
    """Immutable settings for analysis, filtering, pitch detection and rendering."""
    sample_rate: int = 44100
    scale_type: str = 'mel'
    f_min: float = 1.0
    f_max: float = 20000.0
    fft_size: int = 8192
    window_type: str = 'bh7'
    gain_db: float = 20.0
    range_db: float = 80.0
    filter_type: str = 'none'
    filter_cutoffs: Tuple[float, ...] = field(default_factory=tuple)
    detect_pitch: bool = False
    extract_harmonics: bool = False
    n_ticks: int = 20

    def __post_init__(self):
        # Canonicalise names and containers; frozen dataclasses need object.__setattr__
        object.__setattr__(self, 'scale_type', normalize_scale_type(self.scale_type))
        object.__setattr__(self, 'window_type', normalize_window_type(self.window_type))
        object.__setattr__(self, 'filter_type', normalize_filter_type(self.filter_type))
        object.__setattr__(self, 'filter_cutoffs', tuple(float(c) for c in (self.filter_cutoffs or ())))
        self._validate()

    def _validate(self):
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.fft_size < 2 or not is_power_of_two(self.fft_size):
            raise ValueError(f"fft_size must be a power of two >= 2, got {self.fft_size}")
        if self.f_min >= self.f_max:
            raise ValueError(f"f_min ({self.f_min}) must be below f_max ({self.f_max})")
        if self.scale_type == 'mel' and self.f_min <= 0:
            raise ValueError(f"Mel scale requires f_min > 0, got {self.f_min}")
        if self.range_db <= 0:
            raise ValueError(f"range_db must be positive, got {self.range_db}")
        if self.n_ticks < 0:
            raise ValueError(f"n_ticks must be >= 0, got {self.n_ticks}")

    @property
    def hop_size(self) -> int:
        return self.fft_size // 2

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2

    def replace(self, **overrides) -> 'SpectrogramConfig':
        """Return a new config with the given fields overridden."""
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        d = dataclasses.asdict(self)
        d['filter_cutoffs'] = list(self.filter_cutoffs)
        return d

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> 'SpectrogramConfig':
        """Overlay a (possibly partial) dict on the defaults; unknown keys are rejected."""
        overrides = dict(overrides or {})
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")
        return cls(**overrides)

    @classmethod
    def from_yaml(cls, path: Union[str, Path], **overrides) -> 'SpectrogramConfig':
        """
        Load a config from YAML. Keyword overrides take precedence over the file.

        The file may hold the settings at top level or under a 'spectrogram' key.
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        # an empty 'spectrogram:' section loads as None
        section = data.get('spectrogram', data) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'spectrogram' section of {path} must be a mapping")
        section = dict(section, **overrides)
        return cls.from_dict(section)
