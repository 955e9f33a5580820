import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np


def save_image(image: np.ndarray, save_path: str, upscale: int = 1) -> str:
    """Write an RGB uint8 array as PNG, optionally enlarged by an integer factor."""
    if upscale > 1:
        image = np.repeat(np.repeat(image, upscale, axis=0), upscale, axis=1)
    save_dir = os.path.dirname(save_path)
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)
    plt.imsave(save_path, image)
    return save_path
