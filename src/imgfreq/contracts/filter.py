"""Filter stage contract.

Enforces the guarantee that the band-pass cutoffs are ordered and the
filter fields are binary masks of the session size.
"""

import numpy as np
from imgfreq.contracts.base import require
from imgfreq.contracts.luminance import assert_image_field


def assert_filter(filter_spec, filter_shifted: np.ndarray, filter_unshifted: np.ndarray,
                  size: int) -> None:
    """Enforce filter stage contract.

    Parameters
    ----------
    filter_spec : FilterSpec
        Cutoffs derived from the raw control values

    filter_shifted, filter_unshifted : np.ndarray
        Centred (display) and corner-origin (transform) versions of the mask

    size : int
        Session side length N

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        filter_spec.inner < filter_spec.outer,
        f"Filter contract violated: inner cutoff {filter_spec.inner:.4g} "
        f"is not below outer cutoff {filter_spec.outer:.4g}"
    )
    for name, field in (("filter_shifted", filter_shifted), ("filter_unshifted", filter_unshifted)):
        assert_image_field(field, size, name)
        require(
            bool(np.all((field == 0.0) | (field == 1.0))),
            f"Filter contract violated: '{name}' is not a binary mask"
        )
    require(
        float(filter_shifted.sum()) == float(filter_unshifted.sum()),
        "Filter contract violated: shifted and unshifted masks admit different cell counts"
    )
