"""Frequency-domain engine.

Forward and inverse 2-D discrete Fourier transforms over split real and
imaginary fields, magnitude spectra, the radial band-pass filter and the
log-polar amplitude profile.

Conventions
-----------
- The forward transform is the unnormalised sum of complex exponentials;
  the inverse applies ``1/N^2`` (``scipy.fft`` "backward" norm).
- Filters are built centred (zero frequency at ``(N/2, N/2)``) for display
  and moved to corner-origin layout with :func:`fft_shift` before they
  multiply a spectrum.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

import numpy as np
from scipy import fft as sp_fft

from imgfreq.imaging.colour import clip, normalise
from imgfreq.imaging.spatial import column_mean, radial_band_mask, to_log_polar

__all__ = [
    'ComplexField',
    'FFTDirection',
    'FilterSpec',
    'fft2d',
    'forward_fft',
    'magnitude',
    'band_pass_filter',
    'apply_filter',
    'reconstruct',
    'radial_profile',
    'log_profile',
]

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = float(np.finfo(np.float64).eps)


@dataclass(frozen=True)
class ComplexField:
    """Complex field stored as two co-shaped real arrays."""

    real: np.ndarray
    imag: np.ndarray

    def __post_init__(self):
        if np.shape(self.real) != np.shape(self.imag):
            raise ValueError(
                f"real and imaginary parts differ in shape: "
                f"{np.shape(self.real)} vs {np.shape(self.imag)}"
            )

    @classmethod
    def zeros(cls, size: int) -> "ComplexField":
        return cls(np.zeros((size, size)), np.zeros((size, size)))

    @classmethod
    def from_complex(cls, values: np.ndarray) -> "ComplexField":
        return cls(np.ascontiguousarray(values.real, dtype=np.float64),
                   np.ascontiguousarray(values.imag, dtype=np.float64))

    def to_complex(self) -> np.ndarray:
        return self.real + 1j * self.imag

    @property
    def shape(self):
        return self.real.shape


class FFTDirection(IntEnum):
    FORWARD = 1
    INVERSE = -1


@dataclass(frozen=True)
class FilterSpec:
    """Inner and outer normalised-distance cutoffs of the band-pass filter.

    Cells with ``inner <= distance <= outer`` pass, all others are zeroed.
    """

    inner: float
    outer: float

    @classmethod
    def from_raw(cls, low_raw: float, high_raw: float, exponent: float = 4.0,
                 outer_scale: float = 1.5, raw_max: float = 100.0) -> "FilterSpec":
        """Map raw slider values onto distance cutoffs.

        Parameters
        ----------
        low_raw, high_raw : float
            Raw cutoff values in ``[0, raw_max]``.
        exponent : float
            Power applied to the fraction of ``raw_max``; spreads the
            slider travel over the low frequencies.
        outer_scale : float
            Multiplier on the outer cutoff so the top of the range reaches
            the corners of the spectrum (distance ``sqrt(2)``).
        raw_max : float
            Slider maximum.

        Returns
        -------
        FilterSpec
            ``inner = (low/raw_max)^exponent``,
            ``outer = (high/raw_max)^exponent * outer_scale``.

        Examples
        --------
        >>> FilterSpec.from_raw(0, 100)
        FilterSpec(inner=0.0, outer=1.5)
        """
        inner = (low_raw / raw_max) ** exponent
        outer = (high_raw / raw_max) ** exponent * outer_scale
        return cls(inner=float(inner), outer=float(outer))


# ============================================================================
# TRANSFORMS
# ============================================================================

def fft2d(field: ComplexField, direction: FFTDirection) -> ComplexField:
    """Two-dimensional DFT of a square complex field.

    Parameters
    ----------
    field : ComplexField
        Input field of shape (N, N).
    direction : FFTDirection
        ``FORWARD`` for the unnormalised transform, ``INVERSE`` for the
        inverse scaled by ``1/N^2``.

    Returns
    -------
    ComplexField
        New field; the input is left untouched.
    """
    values = field.to_complex()
    if FFTDirection(direction) is FFTDirection.FORWARD:
        result = sp_fft.fft2(values)
    else:
        result = sp_fft.ifft2(values)
    return ComplexField.from_complex(result)


def forward_fft(image: np.ndarray) -> ComplexField:
    """Forward DFT of a real image (imaginary input zero)."""
    image = np.asarray(image, dtype=np.float64)
    return fft2d(ComplexField(image, np.zeros_like(image)), FFTDirection.FORWARD)


def magnitude(spectrum: ComplexField) -> np.ndarray:
    return np.hypot(spectrum.real, spectrum.imag)


# ============================================================================
# FILTERING
# ============================================================================

def band_pass_filter(distance: np.ndarray, spec: FilterSpec) -> np.ndarray:
    """Centred binary band-pass mask for the given cutoffs."""
    return radial_band_mask(distance, spec.inner, spec.outer)


def apply_filter(spectrum: ComplexField, filter_unshifted: np.ndarray) -> ComplexField:
    """Multiply both parts of a corner-origin spectrum by a real mask."""
    if np.shape(filter_unshifted) != spectrum.shape:
        raise ValueError(
            f"filter shape {np.shape(filter_unshifted)} does not match spectrum {spectrum.shape}"
        )
    return ComplexField(spectrum.real * filter_unshifted, spectrum.imag * filter_unshifted)


def reconstruct(spectrum: ComplexField, filter_unshifted: np.ndarray, mean: float) -> np.ndarray:
    """Filtered image in the spatial domain.

    The spectrum is masked, inverse transformed, and the real part has the
    removed mean luminance added back before clipping to [0, 1].
    """
    filtered = apply_filter(spectrum, filter_unshifted)
    spatial = fft2d(filtered, FFTDirection.INVERSE)
    return clip(spatial.real + mean, 0.0, 1.0)


# ============================================================================
# RADIAL PROFILE
# ============================================================================

def radial_profile(shifted_magnitude: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Log-polar view of a centred magnitude spectrum and its column means.

    Returns
    -------
    log_polar : np.ndarray
        (N, N) field, rows angle, columns log-radius.
    profile : np.ndarray
        Length-N mean amplitude per log-radius column.
    """
    log_polar = to_log_polar(shifted_magnitude)
    return log_polar, column_mean(log_polar)


def log_profile(profile: np.ndarray, epsilon: float = DEFAULT_EPSILON,
                floor: float = 0.0, new_max: float = 0.75) -> np.ndarray:
    """Log amplitude profile rescaled to ``[0, new_max]``.

    ``log(profile + epsilon)`` is normalised from its own range onto
    ``[0, new_max]``. Zero-amplitude columns sit at the epsilon guard
    ``log(epsilon)`` and are left out of the lower bound, which becomes
    ``min(floor, smallest non-zero column)``; when every column is zero the
    bound is ``floor``. Values are clipped to ``[0, new_max]`` afterwards.
    """
    logged = np.log(np.asarray(profile, dtype=np.float64) + epsilon)
    hi = float(np.max(logged))
    guard = np.log(epsilon)
    if float(np.min(logged)) > guard:
        lo = float(np.min(logged))
    else:
        nonzero = logged[logged > guard]
        lo = min(floor, float(nonzero.min())) if nonzero.size else floor
        logger.debug("log_profile: zero-amplitude column, lower bound %g", lo)
    return clip(normalise(logged, lo, hi, 0.0, new_max), 0.0, new_max)
