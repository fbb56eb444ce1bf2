# renderer/tone_mapping.py
from pathlib import Path
from typing import Union

import numpy as np
from numba import njit, prange
from PIL import Image


@njit(parallel=True)
def _clamp_kernel(linear_image, output_image, exposure, gamma):
    height, width, _ = linear_image.shape
    for y in prange(height):
        for x in range(width):
            for c in range(3):
                v = linear_image[y, x, c] * exposure
                v = min(1.0, max(0.0, v))
                v = v ** (1.0 / gamma)
                output_image[y, x, c] = min(255, max(0, int(v * 255.0 + 0.5)))


@njit(parallel=True)
def _reinhard_kernel(linear_image, output_image, exposure, white_point, gamma):
    height, width, _ = linear_image.shape
    for y in prange(height):
        for x in range(width):
            for c in range(3):
                v = max(0.0, linear_image[y, x, c] * exposure)
                v = v / (1.0 + v / white_point)
                v = v ** (1.0 / gamma)
                output_image[y, x, c] = min(255, max(0, int(v * 255.0)))


def clamp_tone_mapping(accumulated: np.ndarray, exposure: float = 1.0,
                       gamma: float = 1.0) -> np.ndarray:
    """
    Scale by exposure, clip each channel to [0, 1], gamma-encode and round
    to 8 bits.
    """
    output = np.zeros(accumulated.shape, dtype=np.uint8)
    _clamp_kernel(np.ascontiguousarray(accumulated, dtype=np.float64), output,
                  float(exposure), float(gamma))
    return output


def reinhard_tone_mapping(accumulated: np.ndarray, exposure: float = 1.0,
                          white_point: float = 1.0, gamma: float = 2.2) -> np.ndarray:
    """
    Apply Reinhard tone mapping to a linear radiance image.
    """
    output = np.zeros(accumulated.shape, dtype=np.uint8)
    _reinhard_kernel(np.ascontiguousarray(accumulated, dtype=np.float64), output,
                     float(exposure), float(white_point), float(gamma))
    return output


def tone_map(accumulated: np.ndarray, method: str = "clamp", exposure: float = 1.0,
             gamma: float = 1.0) -> np.ndarray:
    if method == "clamp":
        return clamp_tone_mapping(accumulated, exposure=exposure, gamma=gamma)
    if method == "reinhard":
        return reinhard_tone_mapping(accumulated, exposure=exposure, gamma=gamma)
    raise ValueError(f"unknown tone mapper {method!r}")


def save_image(pixels: np.ndarray, path: Union[str, Path]):
    """Write an HxWx3 uint8 array (row 0 at the top) to an image file."""
    Image.fromarray(pixels).save(path)
