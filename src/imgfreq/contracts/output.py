"""Output stage contract.

Enforces the guarantee that the reconstructed image is display-ready
([0, 1] range) and that presentation buffers are well-formed RGBA.
"""

import numpy as np
from imgfreq.contracts.base import require
from imgfreq.contracts.luminance import assert_image_field


def assert_output(output: np.ndarray, size: int) -> None:
    """Enforce output stage contract.

    Called after reconstruction. The output must be clipped to [0, 1].

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    assert_image_field(output, size, "output")
    require(
        float(output.min()) >= 0.0 and float(output.max()) <= 1.0,
        f"Output contract violated: values outside [0, 1] "
        f"(min={output.min():.4g}, max={output.max():.4g})"
    )


def assert_display_buffer(buffer: np.ndarray, size: int) -> None:
    """Enforce presentation buffer contract: (size, size, 4) uint8, opaque, grey.

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        buffer.shape == (size, size, 4),
        f"Display contract violated: buffer shape {buffer.shape}, expected ({size}, {size}, 4)"
    )
    require(
        buffer.dtype == np.uint8,
        f"Display contract violated: buffer dtype {buffer.dtype}, expected uint8"
    )
    require(
        bool(np.all(buffer[..., 3] == 255)),
        "Display contract violated: alpha channel is not fully opaque"
    )
