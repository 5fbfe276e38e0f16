"""Image acquisition errors.

Raised by the image source provider before any pipeline state is touched,
so a failed fetch or decode leaves the previous image in place.
"""


class AcquisitionFailure(RuntimeError):
    """Image could not be fetched, read, decoded or captured."""

    def __init__(self, message: str, source: str = ""):
        self.source = source
        super().__init__(message)


class CameraUnavailable(AcquisitionFailure):
    """Camera could not be opened (no device or permission denied)."""
