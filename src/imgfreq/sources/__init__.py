"""Image acquisition: bundled files, custom images, URLs and webcam snapshots."""

from imgfreq.sources.errors import AcquisitionFailure, CameraUnavailable
from imgfreq.sources.loader import ImageSourceProvider, CUSTOM_SOURCE, WEBCAM_SOURCE

__all__ = [
    "AcquisitionFailure",
    "CameraUnavailable",
    "ImageSourceProvider",
    "CUSTOM_SOURCE",
    "WEBCAM_SOURCE",
]
