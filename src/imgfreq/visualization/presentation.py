"""Conversion of pipeline fields into displayable RGBA buffers.

Panels
------
- ``image``: windowed luminance (before mean removal), sRGB encoded
- ``spectrum``: magnitude spectrum, normalised, lightness remapped, sRGB
- ``filter``: band-pass mask, shown as is
- ``output``: filtered luminance, sRGB encoded

Buffers are (N, N, 4) uint8 RGBA with grey replicated across R, G and B and
a fully opaque alpha channel.
"""

from pathlib import Path
from typing import Dict, Optional, Protocol, Union
import logging

import cv2
import numpy as np

from imgfreq.imaging import colour
from imgfreq.imaging.frequency import log_profile

__all__ = [
    'PANELS',
    'to_display_buffer',
    'profile_polyline',
    'PresentationSink',
    'BufferSink',
    'export_output',
]

logger = logging.getLogger(__name__)

PANELS = ("image", "spectrum", "filter", "output")


def to_display_buffer(field: np.ndarray, normalise: bool = False, to_srgb: bool = True,
                      to_lightness: bool = False, zoom: int = 1) -> np.ndarray:
    """Render a scalar field as an RGBA byte buffer.

    Parameters
    ----------
    field : np.ndarray
        (N, N) float field. Not modified.
    normalise : bool
        Stretch the (cropped) field to [0, 1] from its own range.
    to_srgb : bool
        Gamma-encode linear values.
    to_lightness : bool
        Apply the perceptual lightness remap (spectra only).
    zoom : int
        Show the centred ``N/zoom`` block, upsampled back to N x N by
        nearest neighbour (``floor(i / N * crop)``).

    Returns
    -------
    np.ndarray
        (N, N, 4) uint8.
    """
    n = field.shape[0]
    crop = n // zoom
    start = (n - crop) // 2
    sub = np.array(field[start:start + crop, start:start + crop], dtype=np.float64)

    if normalise:
        sub = colour.normalise(sub)
    if to_lightness:
        sub = colour.to_lightness(sub)
    if to_srgb:
        sub = colour.linear_to_srgb(sub)

    grey = np.clip(np.rint(sub * 255.0), 0, 255).astype(np.uint8)

    if crop != n:
        index = np.floor(np.arange(n) / n * crop).astype(int)
        grey = grey[index][:, index]

    rgba = np.empty((n, n, 4), dtype=np.uint8)
    rgba[..., :3] = grey[..., None]
    rgba[..., 3] = 255
    return rgba


def profile_polyline(profile: np.ndarray, size: int, amp_mean_max: float = 0.75,
                     floor: float = 0.0) -> np.ndarray:
    """Pixel coordinates of the radial profile line over the log-polar panel.

    Returns
    -------
    np.ndarray
        (N, 2) array of ``(x, y)`` with ``x`` the log-radius column and
        ``y = N - v * N`` for the rescaled log amplitude ``v``.
    """
    values = log_profile(profile, floor=floor, new_max=amp_mean_max)
    x = np.arange(len(values), dtype=np.float64)
    y = size - values * size
    return np.column_stack([x, y])


class PresentationSink(Protocol):
    """Anything that can receive rendered panels."""

    def show(self, panel: str, buffer: np.ndarray) -> None:
        ...

    def show_profile(self, xy: Optional[np.ndarray]) -> None:
        ...


class BufferSink:
    """Keeps the most recent buffer of each panel; used headless and in tests."""

    def __init__(self):
        self.buffers: Dict[str, np.ndarray] = {}
        self.profile: Optional[np.ndarray] = None
        self.render_counts: Dict[str, int] = {panel: 0 for panel in PANELS}

    def show(self, panel: str, buffer: np.ndarray) -> None:
        self.buffers[panel] = buffer
        self.render_counts[panel] = self.render_counts.get(panel, 0) + 1

    def show_profile(self, xy: Optional[np.ndarray]) -> None:
        self.profile = xy


def export_output(state, path: Union[str, Path]) -> Path:
    """Write the output panel to a PNG file.

    Parameters
    ----------
    state : PipelineState
        Supplies the ``output`` field.
    path : str or Path
        Destination; parent directories are created.

    Returns
    -------
    Path
        The written file.

    Raises
    ------
    OSError
        If OpenCV could not encode or write the file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    buffer = to_display_buffer(state.output, to_srgb=True)
    ok = cv2.imwrite(str(path), cv2.cvtColor(buffer, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise OSError(f"failed to write {path}")

    logger.info("Exported filtered image: %s", path)
    return path
