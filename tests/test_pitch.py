"""
Unit Tests for autocorrelation pitch detection and harmonic series.

Run:
    pytest tests/test_pitch.py -v
"""

import numpy as np
import pytest

from spectrokit.dsp_core.pitch import (
    PitchEstimate,
    detect_pitch,
    harmonic_series,
    estimate_harmonics,
    lag_range,
)


def _sine(freq, sr=44100, duration=0.5):
    t = np.arange(int(sr * duration)) / sr
    return np.sin(2 * np.pi * freq * t)


class TestDetectPitch:
    """Test suite for fundamental frequency detection."""

    def test_pure_440(self):
        f0 = detect_pitch(_sine(440.0), 44100, 50.0, 2000.0)
        print(f"\n[Pitch 440 Hz] detected {f0:.2f} Hz")
        assert abs(f0 - 440.0) <= 5.0

    @pytest.mark.parametrize("freq", [110.0, 220.0, 330.0, 880.0])
    def test_other_tones(self, freq):
        f0 = detect_pitch(_sine(freq), 44100, 50.0, 2000.0)
        # one-sample lag resolution
        assert abs(f0 - freq) <= freq ** 2 / 44100 + 1.0

    def test_complex_tone(self):
        y = _sine(200.0) + 0.5 * _sine(400.0) + 0.25 * _sine(600.0)
        f0 = detect_pitch(y, 44100, 50.0, 2000.0)
        assert abs(f0 - 200.0) <= 2.0

    def test_result_is_sample_rate_over_lag(self):
        sr = 44100
        f0 = detect_pitch(_sine(440.0), sr, 50.0, 2000.0)
        lag = sr / f0
        assert lag == pytest.approx(round(lag))

    def test_degenerate_lag_range(self):
        # f_min above f_max leaves no lag to search
        assert detect_pitch(_sine(440.0), 44100, 3000.0, 2000.0) == 0.0

    def test_lags_past_buffer_end_score_zero(self):
        """Lags with no overlapping samples sum to 0 and still compete."""
        # lag 1 sums to -1, lag 2 has no terms and sums to 0
        assert detect_pitch(np.array([1.0, -1.0]), 1, 0.5, 1.0) == pytest.approx(0.5)
        # every lag is past the end: the lowest lag wins the tie
        assert detect_pitch(np.array([]), 44100, 50.0, 2000.0) == pytest.approx(44100 / 22)
        assert detect_pitch(np.ones(5), 44100, 50.0, 2000.0) == pytest.approx(44100 / 22)

    def test_non_positive_bounds(self):
        assert detect_pitch(_sine(440.0), 44100, 0.0, 2000.0) == 0.0

    def test_silence_ties_resolve_to_lowest_lag(self):
        """All lags score 0 on silence; the first (lowest) lag wins the tie."""
        sr = 44100
        min_lag, _ = lag_range(sr, 50.0, 2000.0)
        f0 = detect_pitch(np.zeros(4000), sr, 50.0, 2000.0)
        assert min_lag == 22
        assert f0 == pytest.approx(sr / min_lag)

    def test_lag_range_clamping(self):
        assert lag_range(44100, 50.0, 2000.0) == (22, 882)
        # f_max above the sample rate would give lag 0
        assert lag_range(8000, 50.0, 10000.0) == (1, 160)
        assert lag_range(44100, 3000.0, 2000.0) == (22, 14)


class TestHarmonics:
    """Test suite for harmonic series."""

    def test_harmonics_below_fmax(self):
        assert harmonic_series(100.0, 550.0) == [200.0, 300.0, 400.0, 500.0]

    def test_harmonic_equal_to_fmax_is_kept(self):
        assert harmonic_series(100.0, 500.0) == [200.0, 300.0, 400.0, 500.0]

    def test_at_most_nine(self):
        harmonics = harmonic_series(10.0, 1e6)
        assert len(harmonics) == 9
        assert harmonics[0] == 20.0
        assert harmonics[-1] == 100.0

    def test_undetected_fundamental(self):
        assert harmonic_series(0.0, 20000.0) == []

    def test_none_fit(self):
        assert harmonic_series(1500.0, 2000.0) == []

    def test_estimate_harmonics(self):
        est = estimate_harmonics(_sine(220.0), 44100, 50.0, 1000.0)
        assert isinstance(est, PitchEstimate)
        assert est.detected
        assert abs(est.fundamental - 220.0) <= 2.0
        assert est.harmonics == harmonic_series(est.fundamental, 1000.0)
        assert all(h <= 1000.0 for h in est.harmonics)
        assert est.harmonics == sorted(est.harmonics)

    def test_undetected_estimate(self):
        est = PitchEstimate(0.0)
        assert not est.detected
        assert est.harmonics == []
