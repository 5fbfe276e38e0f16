"""Elementwise colour and intensity transforms.

Centralized helper functions for:
- sRGB <-> linear RGB gamma conversion
- Relative luminance from linear RGB
- Perceptual lightness remap (display of magnitude spectra only)
- Interval remapping, clipping, alpha blending

Every function is pure: it returns a new float array and leaves its
arguments untouched, so callers can hand in fields owned by the pipeline
state without cloning them first.
"""

import logging
from typing import Optional, Union

import numpy as np

__all__ = [
    'srgb_to_linear',
    'linear_to_srgb',
    'linear_rgb_to_luminance',
    'rgb_image_to_luminance',
    'to_lightness',
    'normalise',
    'clip',
    'blend',
    'field_mean',
]

logger = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, float]

# sRGB transfer function constants (IEC 61966-2-1)
SRGB_DECODE_THRESHOLD = 0.04045
SRGB_ENCODE_THRESHOLD = 0.0031308
SRGB_LINEAR_SLOPE = 12.92
SRGB_OFFSET = 0.055
SRGB_GAMMA = 2.4

# Rec. 709 relative luminance weights
LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)

# CIE lightness constants
LIGHTNESS_THRESHOLD = 0.008856
LIGHTNESS_LINEAR_SLOPE = 903.3


# ============================================================================
# GAMMA
# ============================================================================

def srgb_to_linear(x: ArrayLike) -> np.ndarray:
    """Decode gamma-encoded sRGB values in [0, 1] to linear light.

    Parameters
    ----------
    x : array_like
        sRGB-encoded values, nominally in [0, 1].

    Returns
    -------
    np.ndarray
        Linear values: ``x / 12.92`` at or below 0.04045, else
        ``((x + 0.055) / 1.055) ** 2.4``.

    Examples
    --------
    >>> float(srgb_to_linear(1.0))
    1.0
    """
    x = np.asarray(x, dtype=np.float64)
    # clamp before the power so the unused branch never sees a negative base
    upper = np.power((np.maximum(x, SRGB_DECODE_THRESHOLD) + SRGB_OFFSET) / (1 + SRGB_OFFSET), SRGB_GAMMA)
    return np.where(x <= SRGB_DECODE_THRESHOLD, x / SRGB_LINEAR_SLOPE, upper)


def linear_to_srgb(x: ArrayLike) -> np.ndarray:
    """Encode linear light in [0, 1] to sRGB.

    Inverse of :func:`srgb_to_linear` to within floating-point tolerance.
    """
    x = np.asarray(x, dtype=np.float64)
    upper = (1 + SRGB_OFFSET) * np.power(np.maximum(x, SRGB_ENCODE_THRESHOLD), 1 / SRGB_GAMMA) - SRGB_OFFSET
    return np.where(x <= SRGB_ENCODE_THRESHOLD, x * SRGB_LINEAR_SLOPE, upper)


# ============================================================================
# LUMINANCE AND LIGHTNESS
# ============================================================================

def linear_rgb_to_luminance(red: np.ndarray, green: np.ndarray, blue: np.ndarray) -> np.ndarray:
    """Relative luminance of three co-shaped linear RGB fields.

    Parameters
    ----------
    red, green, blue : np.ndarray
        Linear-light channel fields of identical shape.

    Returns
    -------
    np.ndarray
        ``0.2126 * red + 0.7152 * green + 0.0722 * blue``

    Raises
    ------
    ValueError
        If the channel shapes differ.
    """
    red, green, blue = (np.asarray(c, dtype=np.float64) for c in (red, green, blue))
    if not (red.shape == green.shape == blue.shape):
        raise ValueError(
            f"channel shapes differ: {red.shape}, {green.shape}, {blue.shape}"
        )
    w_r, w_g, w_b = LUMINANCE_WEIGHTS
    return w_r * red + w_g * green + w_b * blue


def rgb_image_to_luminance(rgb: np.ndarray) -> np.ndarray:
    """Luminance of an sRGB-encoded (H, W, 3) image with values in [0, 1]."""
    if rgb.ndim != 3 or rgb.shape[2] < 3:
        raise ValueError(f"expected an (H, W, 3) image, got shape {rgb.shape}")
    linear = srgb_to_linear(rgb[..., :3])
    return linear_rgb_to_luminance(linear[..., 0], linear[..., 1], linear[..., 2])


def to_lightness(x: ArrayLike) -> np.ndarray:
    """Perceptual remap used only for showing magnitude spectra.

    ``x * 903.3`` at or below 0.008856, else ``x ** (1/3) * 116 - 16``;
    both divided by 100.
    """
    x = np.asarray(x, dtype=np.float64)
    upper = np.cbrt(x) * 116 - 16
    return np.where(x <= LIGHTNESS_THRESHOLD, x * LIGHTNESS_LINEAR_SLOPE, upper) / 100.0


# ============================================================================
# RANGE OPERATIONS
# ============================================================================

def normalise(x: ArrayLike, old_min: Optional[float] = None, old_max: Optional[float] = None,
              new_min: float = 0.0, new_max: float = 1.0) -> np.ndarray:
    """Affine remap of ``[old_min, old_max]`` onto ``[new_min, new_max]``.

    Parameters
    ----------
    x : array_like
        Input field.
    old_min, old_max : float, optional
        Source interval. Omitted bounds are taken from the field itself.
    new_min, new_max : float
        Target interval (default [0, 1]).

    Returns
    -------
    np.ndarray
        Remapped field. A degenerate source interval (``old_max == old_min``)
        maps every value to ``new_min``.

    Notes
    -----
    Applying ``normalise(y, 0, 1, 0, 1)`` to an output ``y`` of
    ``normalise(x, a, b, 0, 1)`` returns ``y`` unchanged.
    """
    x = np.asarray(x, dtype=np.float64)
    old_min = float(np.min(x)) if old_min is None else float(old_min)
    old_max = float(np.max(x)) if old_max is None else float(old_max)

    old_range = old_max - old_min
    if old_range == 0:
        logger.debug("normalise: degenerate source range [%g, %g]", old_min, old_max)
        return np.full_like(x, new_min)

    return (x - old_min) * (new_max - new_min) / old_range + new_min


def clip(x: ArrayLike, lo: float, hi: float) -> np.ndarray:
    """Elementwise clamp to ``[lo, hi]``."""
    return np.clip(np.asarray(x, dtype=np.float64), lo, hi)


def blend(src: ArrayLike, dst: ArrayLike, alpha: ArrayLike) -> np.ndarray:
    """Alpha compositing: ``src * alpha + dst * (1 - alpha)``.

    ``dst`` and ``alpha`` broadcast against ``src``, so a scalar ``dst``
    composites against a flat background.
    """
    src = np.asarray(src, dtype=np.float64)
    alpha = np.asarray(alpha, dtype=np.float64)
    return src * alpha + np.asarray(dst, dtype=np.float64) * (1 - alpha)


def field_mean(x: np.ndarray) -> float:
    return float(np.mean(x))
