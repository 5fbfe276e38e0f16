"""Centralized failure policy for contract violations.

Contracts fail fast, loud, and once. All violations raise the same
exception type, allowing caller to handle pipeline bugs uniformly.
"""


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad user input or a
    recoverable numeric edge case. It means a pipeline stage did not produce
    the invariants it promised.

    Key distinction:
    - ValueError / ValidationError: User/config error (handled by Pydantic)
    - AcquisitionFailure: Image could not be fetched or decoded
    - ContractViolation: Pipeline bug (programmer error)
    """
    pass
