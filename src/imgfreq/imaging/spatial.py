"""Spatial helpers on square N x N fields.

Distance and angle fields relative to the centre, radial band masks,
quadrant swapping and log-polar resampling. Row index is ``r``, column
index is ``c``; the centre of an even field sits at ``(N/2, N/2)``.
"""

import logging

import numpy as np
from scipy import fft as sp_fft
from skimage.transform import warp_polar

__all__ = [
    'distance_field',
    'angle_field',
    'radial_band_mask',
    'fft_shift',
    'to_log_polar',
    'column_mean',
]

logger = logging.getLogger(__name__)


def _centre_offsets(n: int):
    if n <= 0:
        raise ValueError(f"field size must be positive, got {n}")
    half = n / 2
    rows, cols = np.indices((n, n), dtype=np.float64)
    return rows - half, cols - half


def distance_field(n: int) -> np.ndarray:
    """Normalised distance of every cell from the centre.

    Parameters
    ----------
    n : int
        Side length of the square field.

    Returns
    -------
    np.ndarray
        ``sqrt((r - n/2)^2 + (c - n/2)^2) / (n/2)``. The centre cell is 0,
        the midpoints of the top and left edges are 1 and the top-left
        corner is ``sqrt(2)``.
    """
    dr, dc = _centre_offsets(n)
    return np.hypot(dr, dc) / (n / 2)


def angle_field(n: int) -> np.ndarray:
    """Angle of every cell about the centre, ``atan2(r - n/2, c - n/2)``."""
    dr, dc = _centre_offsets(n)
    return np.arctan2(dr, dc)


def radial_band_mask(distance: np.ndarray, inner: float, outer: float) -> np.ndarray:
    """Binary annulus: 1.0 where ``inner <= distance <= outer``, else 0.0.

    Both the aperture window and the band-pass filter are built with this.
    """
    distance = np.asarray(distance)
    return ((distance >= inner) & (distance <= outer)).astype(np.float64)


def fft_shift(field: np.ndarray) -> np.ndarray:
    """Swap diagonal quadrants so the zero frequency moves to the centre.

    For even N the shift is its own inverse, which is what lets the same
    function take the centred filter back to corner-origin layout.

    Raises
    ------
    ValueError
        If the field is not square with an even side length.
    """
    field = np.asarray(field)
    if field.ndim != 2 or field.shape[0] != field.shape[1]:
        raise ValueError(f"fft_shift expects a square 2-D field, got shape {field.shape}")
    if field.shape[0] % 2:
        raise ValueError(f"fft_shift requires an even side length, got {field.shape[0]}")
    return sp_fft.fftshift(field)


def to_log_polar(field: np.ndarray) -> np.ndarray:
    """Resample a centred field onto a log-polar grid of the same size.

    Rows index angle over a full turn, columns index radius on a log scale
    from 1 pixel (column 0) out to N/2 (last column). Bilinear interpolation;
    samples falling outside the field are 0.
    """
    field = np.asarray(field, dtype=np.float64)
    n = field.shape[0]
    return warp_polar(
        field,
        center=(n / 2, n / 2),
        radius=n / 2,
        output_shape=(n, n),
        scaling='log',
        order=1,
        mode='constant',
        cval=0.0,
        preserve_range=True,
    )


def column_mean(field: np.ndarray) -> np.ndarray:
    """Mean of each column: ``(1/rows) * sum_i field[i, j]``."""
    return np.asarray(field, dtype=np.float64).mean(axis=0)
