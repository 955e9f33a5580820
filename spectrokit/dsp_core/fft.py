"""
Radix-2 FFT Implementation using Numba JIT

This module implements the Cooley-Tukey decimation-in-time FFT with Numba JIT
acceleration. The transform is only defined for power-of-two lengths; any other
length is rejected instead of being padded or truncated.

Optimizations:
1. Numba JIT compilation (nopython mode)
2. Iterative (non-recursive) implementation - avoids Python call overhead
3. In-place bit-reversal permutation
4. Frame-parallel batch transform for spectrograms (prange)
"""

import math

import numpy as np
from numba import jit, prange


def is_power_of_two(n: int) -> bool:
    """Return True if n is a positive power of two."""
    return n > 0 and (n & (n - 1)) == 0


def _check_length(n: int) -> None:
    if not is_power_of_two(n):
        raise ValueError(f"FFT length must be a power of two, got {n}")


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fft_radix2_iter(x: np.ndarray) -> np.ndarray:
    """
    Iterative Cooley-Tukey radix-2 DIT FFT (Numba JIT).

    Equivalent to the recursive even/odd split: after the bit-reversal
    permutation each stage combines pairs of half-size transforms with the
    twiddle factor e^(-2*pi*i*k/size).
    """
    N = len(x)
    n_bits = 0
    while (1 << n_bits) < N:
        n_bits += 1

    # Bit-reversal permutation
    X = np.empty(N, dtype=np.complex128)
    for i in range(N):
        X[_bit_reverse(i, n_bits)] = x[i]

    # Butterfly stages: size 2, 4, 8, ..., N
    stage_size = 2
    while stage_size <= N:
        half_size = stage_size // 2

        # Twiddles are evaluated directly rather than accumulated so that
        # rounding error does not grow with the stage length.
        twiddles = np.empty(half_size, dtype=np.complex128)
        for j in range(half_size):
            angle = -2.0 * math.pi * j / stage_size
            twiddles[j] = complex(math.cos(angle), math.sin(angle))

        for k in range(0, N, stage_size):
            for j in range(half_size):
                even_idx = k + j
                odd_idx = k + j + half_size

                even = X[even_idx]
                odd = X[odd_idx] * twiddles[j]

                X[even_idx] = even + odd
                X[odd_idx] = even - odd

        stage_size *= 2

    return X


def fft(x: np.ndarray) -> np.ndarray:
    """
    Compute the 1-D discrete Fourier Transform of a power-of-two length input.

    Parameters
    ----------
    x : np.ndarray
        Real or complex input of length N = 2^k

    Returns
    -------
    np.ndarray
        N complex bins; bin k corresponds to k * sample_rate / N for k < N/2

    Raises
    ------
    ValueError
        If N is not a power of two (N = 0 included)

    Examples
    --------
    >>> import numpy as np
    >>> X = fft(np.array([1.0, 2.0, 1.0, -1.0, 1.5, 1.0, 0.5, -0.5]))
    >>> X.shape
    (8,)
    """
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    _check_length(len(x))
    return _fft_radix2_iter(x.astype(np.complex128))


def ifft(X: np.ndarray) -> np.ndarray:
    """
    Compute the 1-D inverse discrete Fourier Transform.

    IFFT(X) = conj(FFT(conj(X))) / N
    """
    X = np.asarray(X, dtype=np.complex128)
    result = fft(np.conj(X))
    return np.conj(result) / len(X)


# ============== Batch operations for spectrograms ==============

@jit(nopython=True, cache=True, parallel=True)
def _rfft_frames(frames: np.ndarray) -> np.ndarray:
    n_frames, n_fft = frames.shape
    n_bins = n_fft // 2
    result = np.empty((n_frames, n_bins), dtype=np.complex128)

    for i in prange(n_frames):
        X = _fft_radix2_iter(frames[i].astype(np.complex128))
        result[i] = X[:n_bins]

    return result


def rfft_frames(frames: np.ndarray) -> np.ndarray:
    """
    Batch real FFT for multiple frames (optimized for spectrograms).

    Parameters
    ----------
    frames : np.ndarray
        Windowed frames, shape (n_frames, n_fft)

    Returns
    -------
    np.ndarray
        Non-negative frequency bins, shape (n_frames, n_fft // 2)
    """
    frames = np.ascontiguousarray(frames, dtype=np.float64)
    if frames.ndim != 2:
        raise ValueError(f"Frames must be 2D, got shape {frames.shape}")
    _check_length(frames.shape[1])
    return _rfft_frames(frames)
