"""Numeric image and frequency-domain modules.

- colour: gamma, luminance, lightness, range remapping
- spatial: distance/angle fields, band masks, quadrant shift, log-polar
- frequency: 2-D DFT, band-pass filter, reconstruction, radial profile
"""

from imgfreq.imaging.frequency import (
    ComplexField,
    FFTDirection,
    FilterSpec,
    fft2d,
    forward_fft,
    magnitude,
    band_pass_filter,
    apply_filter,
    reconstruct,
    radial_profile,
    log_profile,
)

__all__ = [
    "ComplexField",
    "FFTDirection",
    "FilterSpec",
    "fft2d",
    "forward_fft",
    "magnitude",
    "band_pass_filter",
    "apply_filter",
    "reconstruct",
    "radial_profile",
    "log_profile",
]
