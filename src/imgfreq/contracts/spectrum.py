"""Spectrum stage contract.

Enforces the guarantee that after the forward transform, the complex
spectrum and all its derived views are present and co-shaped.
"""

import numpy as np
from imgfreq.contracts.base import require
from imgfreq.contracts.luminance import assert_image_field


def assert_spectrum(spectrum, magnitude: np.ndarray, magnitude_shifted: np.ndarray,
                    magnitude_polar: np.ndarray, profile: np.ndarray, size: int) -> None:
    """Enforce spectrum stage contract.

    Parameters
    ----------
    spectrum : ComplexField
        Forward transform of the centred image

    magnitude, magnitude_shifted, magnitude_polar : np.ndarray
        Derived magnitude views

    profile : np.ndarray
        Radial amplitude profile, one value per log-radius column

    size : int
        Session side length N

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    assert_image_field(spectrum.real, size, "spectrum.real")
    assert_image_field(spectrum.imag, size, "spectrum.imag")
    for name, field in (
        ("magnitude", magnitude),
        ("magnitude_shifted", magnitude_shifted),
        ("magnitude_polar", magnitude_polar),
    ):
        assert_image_field(field, size, name)
        require(
            float(field.min()) >= 0.0,
            f"Spectrum contract violated: '{name}' has negative values"
        )

    require(
        profile.shape == (size,),
        f"Spectrum contract violated: profile has shape {profile.shape}, expected ({size},)"
    )
