import numpy as np

# 7-term Blackman-Harris coefficients
BH7_COEFFICIENTS = (
    0.2710514,
    -0.4332979392,
    0.2181229995,
    -0.06592544639,
    0.0108117421,
    -0.0007765848252,
    0.00001388721735,
)

WINDOW_TYPES = ('none', 'cosine', 'hann', 'bh7')

_ALIASES = {
    'none': 'none',
    'rect': 'none',
    'rectangular': 'none',
    'cosine': 'cosine',
    'hann': 'hann',
    'hanning': 'hann',
    'bh7': 'bh7',
}


def normalize_window_type(window: str) -> str:
    """Map a window name (any case, e.g. 'Hanning', 'BH7') onto its canonical form."""
    key = str(window).lower()
    if key not in _ALIASES:
        raise ValueError(f"Unknown window type: {window}")
    return _ALIASES[key]


def get_window(window: str, win_length: int) -> np.ndarray:
    """
    Generate per-sample window weights.

    Parameters
    ----------
    window : str
        Window specification:
        - 'none': identity (all ones)
        - 'cosine': sin(pi*n / N)
        - 'hann': 0.5 * (1 - cos(2*pi*n / N))
        - 'bh7': 7-term Blackman-Harris
    win_length : int
        Length of the window

    Returns
    -------
    np.ndarray
        Window function of length win_length

    Notes
    -----
    All windows are normalised by N (not N-1), i.e. the periodic / DFT-even
    form, so weight[0] is the taper minimum and the peak sits at N/2.
    """
    window_type = normalize_window_type(window)
    n = np.arange(win_length)

    if window_type == 'none':
        return np.ones(win_length)

    elif window_type == 'cosine':
        return np.sin(np.pi * n / win_length)

    elif window_type == 'hann':
        return 0.5 * (1.0 - np.cos(2 * np.pi * n / win_length))

    # bh7
    w = np.zeros(win_length)
    for j, c in enumerate(BH7_COEFFICIENTS):
        w += c * np.cos(2 * np.pi * j * n / win_length)
    return w


def apply_window(frame: np.ndarray, window: str) -> np.ndarray:
    """Multiply a frame by the window weights; 'none' returns the samples unchanged."""
    frame = np.asarray(frame, dtype=np.float64)
    if normalize_window_type(window) == 'none':
        return frame.copy()
    return frame * get_window(window, len(frame))
