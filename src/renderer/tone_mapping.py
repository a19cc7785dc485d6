# renderer/tone_mapping.py
import math

import numpy as np
from numba import njit

from core.interval import Interval

# Upper clamp keeps 256 * c below 256 after truncation.
INTENSITY = Interval(0.0, 0.999)


def linear_to_gamma(linear_component: float) -> float:
    """Gamma 2 transform: sqrt for positive values, 0 otherwise."""
    if linear_component > 0:
        return math.sqrt(linear_component)
    return 0.0


def to_byte(linear_component: float) -> int:
    return int(256 * INTENSITY.clamp(linear_to_gamma(linear_component)))


@njit
def _quantize_kernel(flat_in, flat_out):
    for k in range(flat_in.shape[0]):
        c = flat_in[k]
        if c > 0.0:
            c = math.sqrt(c)
        else:
            c = 0.0
        if c > 0.999:
            c = 0.999
        flat_out[k] = int(256.0 * c)


def quantize(pixels: np.ndarray) -> np.ndarray:
    """
    Gamma-correct, clamp to [0, 0.999] and scale to 0-255.
    Accepts any array of linear channel values; returns uint8 of the same shape.
    """
    linear_image = np.ascontiguousarray(pixels, dtype=np.float64)
    output_image = np.empty(linear_image.size, dtype=np.uint8)
    _quantize_kernel(linear_image.reshape(-1), output_image)
    return output_image.reshape(linear_image.shape)
