"""Pipeline state shared by all stages.

One :class:`PipelineState` lives for the whole session. Geometry fields
(``distance``, ``angle``, ``aperture``) are computed once and made
read-only; every other field is owned by exactly one stage, which replaces
it wholesale when it recomputes.

Field ownership
---------------
======================  ==========  =========================================
field                   written by  meaning
======================  ==========  =========================================
luminance               source      linear luminance of the loaded image
source_name             source      name the luminance came from
windowed                window      luminance, optionally blended with grey
lum_mean                window      mean of ``windowed``
centred                 window      ``windowed - lum_mean``
spectrum                spectrum    forward DFT of ``centred``
magnitude               spectrum    corner-origin magnitude
magnitude_shifted       spectrum    centred magnitude
magnitude_polar         spectrum    log-polar magnitude
profile                 spectrum    mean amplitude per log-radius column
filter_spec             filter      inner/outer cutoffs
filter_shifted          filter      centred band-pass mask
filter_unshifted        filter      corner-origin band-pass mask
filter_polar            filter      log-polar view of the mask
output                  output      filtered luminance in [0, 1]
======================  ==========  =========================================
"""

from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np

from imgfreq.imaging.frequency import ComplexField, FilterSpec
from imgfreq.imaging.spatial import angle_field, distance_field, radial_band_mask

__all__ = ['PipelineState']

logger = logging.getLogger(__name__)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass
class PipelineState:
    size: int
    distance: np.ndarray
    angle: np.ndarray
    aperture: np.ndarray

    luminance: np.ndarray
    windowed: np.ndarray
    centred: np.ndarray
    lum_mean: float
    spectrum: ComplexField
    magnitude: np.ndarray
    magnitude_shifted: np.ndarray
    magnitude_polar: np.ndarray
    profile: np.ndarray
    filter_spec: Optional[FilterSpec]
    filter_shifted: np.ndarray
    filter_unshifted: np.ndarray
    filter_polar: np.ndarray
    output: np.ndarray
    source_name: Optional[str] = None

    @classmethod
    def initialise(cls, size: int, window_config) -> "PipelineState":
        """Build a zeroed state with the fixed geometry for an N x N session.

        Parameters
        ----------
        size : int
            Side length N (even, >= 4).
        window_config : InternalWindowConfig
            Supplies the aperture radii ``inner`` and ``outer``.

        Returns
        -------
        PipelineState
            ``distance``, ``angle`` and ``aperture`` are read-only; every
            working field is zero.
        """
        if size < 4 or size % 2:
            raise ValueError(f"size must be an even number >= 4, got {size}")

        distance = distance_field(size)
        aperture = radial_band_mask(distance, window_config.inner, window_config.outer)

        def zeros():
            return np.zeros((size, size), dtype=np.float64)

        logger.debug("Initialised pipeline state for %dx%d", size, size)
        return cls(
            size=size,
            distance=_read_only(distance),
            angle=_read_only(angle_field(size)),
            aperture=_read_only(aperture),
            luminance=zeros(),
            windowed=zeros(),
            centred=zeros(),
            lum_mean=0.0,
            spectrum=ComplexField.zeros(size),
            magnitude=zeros(),
            magnitude_shifted=zeros(),
            magnitude_polar=zeros(),
            profile=np.zeros(size, dtype=np.float64),
            filter_spec=None,
            filter_shifted=zeros(),
            filter_unshifted=zeros(),
            filter_polar=zeros(),
            output=zeros(),
        )

    @property
    def has_image(self) -> bool:
        return self.source_name is not None
