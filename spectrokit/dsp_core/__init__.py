"""
DSP Core Module - Hand-written FFT, windowing, FIR and spectrogram routines

This module provides from-scratch implementations of the signal-processing
steps behind the spectrogram pipeline.

Modules:
    - fft: Fast Fourier Transform (radix-2 Cooley-Tukey, Numba JIT)
    - window: none / cosine / Hann / 7-term Blackman-Harris weights
    - spectrogram: framing, windowing and dB magnitude
    - mel: Hz <-> Mel conversion and frequency-axis ticks
    - fir: windowed-sinc FIR design and convolution
    - pitch: autocorrelation pitch and harmonic series
"""

from .fft import fft, ifft, rfft_frames, is_power_of_two
from .window import get_window, apply_window, BH7_COEFFICIENTS
from .spectrogram import compute_spectrogram, frame_count, bin_frequencies, bin_range, amplitude_to_db
from .mel import hz_to_mel, mel_to_hz, frequency_ticks, tick_positions, tick_labels, format_frequency
from .fir import (
    lowpass_kernel,
    highpass_kernel,
    bandpass_kernel,
    notch_kernel,
    unit_impulse,
    design_kernel,
    convolve,
    apply_filter,
)
from .pitch import PitchEstimate, detect_pitch, harmonic_series, estimate_harmonics

__all__ = [
    # FFT functions
    'fft',
    'ifft',
    'rfft_frames',
    'is_power_of_two',
    # Windows
    'get_window',
    'apply_window',
    'BH7_COEFFICIENTS',
    # Spectrogram
    'compute_spectrogram',
    'frame_count',
    'bin_frequencies',
    'bin_range',
    'amplitude_to_db',
    # Frequency axis
    'hz_to_mel',
    'mel_to_hz',
    'frequency_ticks',
    'tick_positions',
    'tick_labels',
    'format_frequency',
    # FIR filters
    'lowpass_kernel',
    'highpass_kernel',
    'bandpass_kernel',
    'notch_kernel',
    'unit_impulse',
    'design_kernel',
    'convolve',
    'apply_filter',
    # Pitch
    'PitchEstimate',
    'detect_pitch',
    'harmonic_series',
    'estimate_harmonics',
]
