"""
Colormap capabilities for the renderer.

A colormap is any callable mapping a normalised magnitude in [0, 1] to an
(r, g, b) triplet in [0, 255]. Callers pass the callable itself, or a name
together with the ColormapRegistry that should resolve it.
"""

from typing import Callable, Dict, Iterator, Optional, Sequence, Union

import numpy as np

Colormap = Callable[[float], Sequence[int]]


def fallback_color(value: float) -> tuple:
    """Red-to-yellow ramp used when a colormap returns something unusable."""
    return (int(np.floor(255 * min(1.0, value * 2))), 255 if value > 0.5 else 0, 0)


def matplotlib_colormap(name: str) -> Colormap:
    """
    Adapt a matplotlib colormap (e.g. 'hot', 'jet', 'magma') to value -> (r, g, b).

    Raises KeyError for names matplotlib does not know.
    """
    import matplotlib

    try:
        cmap = matplotlib.colormaps[name]
    except KeyError:
        raise KeyError(f"Unknown matplotlib colormap: {name}") from None

    def _lookup(value: float) -> tuple:
        r, g, b, _ = cmap(float(value))
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))

    _lookup.__name__ = name
    return _lookup


class ColormapRegistry:
    """
    Explicit name -> colormap mapping handed to the renderer by its caller.

    Args:
        colormaps: Initial name -> callable entries
        use_matplotlib: Resolve names missing from the registry through
            matplotlib's colormap table
    """

    def __init__(self, colormaps: Optional[Dict[str, Colormap]] = None, use_matplotlib: bool = False):
        self._colormaps: Dict[str, Colormap] = dict(colormaps or {})
        self.use_matplotlib = use_matplotlib

    def register(self, name: str, colormap: Colormap) -> None:
        if not callable(colormap):
            raise TypeError(f"Colormap '{name}' must be callable")
        self._colormaps[name] = colormap

    def get(self, name: str) -> Colormap:
        if name in self._colormaps:
            return self._colormaps[name]
        if self.use_matplotlib:
            colormap = matplotlib_colormap(name)
            self._colormaps[name] = colormap
            return colormap
        raise KeyError(f"Unknown colormap: {name}")

    def __contains__(self, name: str) -> bool:
        return name in self._colormaps

    def __iter__(self) -> Iterator[str]:
        return iter(self._colormaps)

    def __len__(self) -> int:
        return len(self._colormaps)


def resolve_colormap(
    colormap: Union[str, Colormap],
    registry: Optional[ColormapRegistry] = None
) -> Colormap:
    """Return a callable colormap; names require an explicit registry."""
    if callable(colormap):
        return colormap
    if registry is None:
        raise KeyError(f"Colormap '{colormap}' given by name but no registry was supplied")
    return registry.get(colormap)
