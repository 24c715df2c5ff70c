"""
Noise Texture
Small tileable grayscale grain, tiled at low alpha over the wall and floor
gradients to break up banding.
"""
from __future__ import annotations

from typing import Optional

import numpy as np
from PySide6.QtGui import QImage

NOISE_SIZE: int = 256
NOISE_MEAN: int = 128
NOISE_SPREAD: float = 40.0


def noise_values(size: int = NOISE_SIZE, seed: Optional[int] = None) -> np.ndarray:
    """
    Grain values as a (size, size) uint8 array, uniform in 128 +- 20.

    Args:
        size: Edge length in pixels.
        seed: Seed for a reproducible texture. None draws fresh entropy.
    """
    if size <= 0:
        raise ValueError(f"Noise size must be positive, got {size}.")
    rng = np.random.default_rng(seed)
    values = NOISE_MEAN + (rng.random((size, size)) - 0.5) * NOISE_SPREAD
    return np.clip(np.round(values), 0, 255).astype(np.uint8)


def create_noise_texture(size: int = NOISE_SIZE, seed: Optional[int] = None) -> QImage:
    """Opaque grayscale QImage of the grain. Every pixel is independent, so it tiles seamlessly."""
    values = np.ascontiguousarray(noise_values(size, seed))
    image = QImage(values.data, size, size, size, QImage.Format_Grayscale8)
    # detach from the numpy buffer
    return image.copy()
