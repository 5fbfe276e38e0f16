"""Luminance stage contract.

Enforces the guarantee that after source loading and windowing, the
luminance fields are square, finite, and of the session size.
"""

import numpy as np
from imgfreq.contracts.base import require


def assert_image_field(field: np.ndarray, size: int, name: str) -> None:
    """Enforce the basic ImageField invariant: finite float array of shape (size, size).

    Parameters
    ----------
    field : np.ndarray
        Field produced by a stage

    size : int
        Session side length N (from config)

    name : str
        Field name for the error message

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        isinstance(field, np.ndarray),
        f"Field contract violated: '{name}' is {type(field)}, expected ndarray"
    )
    require(
        field.shape == (size, size),
        f"Field contract violated: '{name}' has shape {field.shape}, expected ({size}, {size})"
    )
    require(
        field.dtype.kind == "f",
        f"Field contract violated: '{name}' dtype is {field.dtype}, expected float"
    )
    require(
        bool(np.all(np.isfinite(field))),
        f"Field contract violated: '{name}' contains non-finite values"
    )


def assert_luminance(luminance: np.ndarray, size: int) -> None:
    """Enforce source stage contract.

    Called after the source image has been converted to linear luminance.
    Luminance of an sRGB image in [0, 1] is itself in [0, 1].

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    assert_image_field(luminance, size, "luminance")
    require(
        float(luminance.min()) >= -1e-12 and float(luminance.max()) <= 1.0 + 1e-12,
        f"Luminance contract violated: values outside [0, 1] "
        f"(min={luminance.min():.4g}, max={luminance.max():.4g})"
    )


def assert_centred(windowed: np.ndarray, centred: np.ndarray, lum_mean: float, size: int) -> None:
    """Enforce window stage contract.

    The zero-centred field plus the stored mean must give back the windowed field.

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    assert_image_field(windowed, size, "windowed")
    assert_image_field(centred, size, "centred")
    require(
        np.isfinite(lum_mean),
        f"Window contract violated: lum_mean is {lum_mean}"
    )
    require(
        abs(float(centred.mean())) < 1e-9,
        f"Window contract violated: centred field has mean {centred.mean():.3g}, expected 0"
    )
