"""Pipeline contracts: fail-fast enforcement of stage invariants.

This package enforces semantic guarantees between pipeline stages.
Contracts fail immediately and loudly when pipeline stages don't produce
their promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Algorithms handle numeric edge cases (epsilon guards, degenerate ranges)
"""

from imgfreq.contracts.failure import ContractViolation
from imgfreq.contracts.base import require
from imgfreq.contracts.luminance import assert_image_field, assert_luminance, assert_centred
from imgfreq.contracts.spectrum import assert_spectrum
from imgfreq.contracts.filter import assert_filter
from imgfreq.contracts.output import assert_output, assert_display_buffer

__all__ = [
    "ContractViolation",
    "require",
    "assert_image_field",
    "assert_luminance",
    "assert_centred",
    "assert_spectrum",
    "assert_filter",
    "assert_output",
    "assert_display_buffer",
]
