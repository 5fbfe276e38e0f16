"""Resolve image source names to square RGB arrays.

Sources
-------
- Sample names ("Cat (Chelsea)", "Astronaut", "Coffee") load the images
  that ship with scikit-image (``skimage.data``).
- Bundled names ("Dog (Joe)", "Landscape", "Beach") map to files inside
  ``sources.image_dir`` and are only listed once that is set.
- "Custom" is an image the user supplied (file path, URL or array).
- "Webcam" is the last snapshot taken from the camera.
- Any ``http://`` or ``https://`` name is fetched once with ``requests``.

Every image comes back as an (N, N, 3) float64 array of sRGB-encoded values
in [0, 1]: scaled so the shortest side is N, then cropped from the top-left.
Failures raise :class:`AcquisitionFailure`; nothing is cached on failure.
"""

from pathlib import Path
from typing import Optional, Union
import logging

import cv2
import numpy as np
import requests
from skimage import data as sample_data

from imgfreq.sources.errors import AcquisitionFailure, CameraUnavailable

__all__ = ['ImageSourceProvider', 'CUSTOM_SOURCE', 'WEBCAM_SOURCE', 'resample_square']

logger = logging.getLogger(__name__)

CUSTOM_SOURCE = "Custom"
WEBCAM_SOURCE = "Webcam"


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def _bgr_to_rgb_float(bgr: np.ndarray) -> np.ndarray:
    """OpenCV BGR(A)/grey image to RGB float64 in [0, 1]."""
    if bgr.ndim == 2:
        rgb = cv2.cvtColor(bgr, cv2.COLOR_GRAY2RGB)
    elif bgr.shape[2] == 4:
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGRA2RGB)
    else:
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    scale = float(np.iinfo(rgb.dtype).max) if rgb.dtype.kind in "ui" else 1.0
    return np.clip(rgb.astype(np.float64) / scale, 0.0, 1.0)


def resample_square(rgb: np.ndarray, size: int) -> np.ndarray:
    """Scale an (H, W, 3) image so its shortest side is ``size``, crop top-left.

    Parameters
    ----------
    rgb : np.ndarray
        Image of any aspect ratio, float values in [0, 1].
    size : int
        Target side length N.

    Returns
    -------
    np.ndarray
        (size, size, 3) float64 array.
    """
    height, width = rgb.shape[:2]
    if height == 0 or width == 0:
        raise AcquisitionFailure(f"image has empty shape {rgb.shape}")

    scale = size / min(height, width)
    new_w = max(size, int(round(width * scale)))
    new_h = max(size, int(round(height * scale)))
    interpolation = cv2.INTER_AREA if scale < 1 else cv2.INTER_LINEAR
    resized = cv2.resize(rgb.astype(np.float32), (new_w, new_h), interpolation=interpolation)

    return np.clip(resized[:size, :size, :3].astype(np.float64), 0.0, 1.0)


class ImageSourceProvider:
    """Load named images for the pipeline's source stage.

    Parameters
    ----------
    config : InternalConfig
        Uses ``image.size`` and the ``sources`` section.

    Notes
    -----
    - "Custom" and "Webcam" only appear in :meth:`source_names` once an
      image has been supplied or captured.
    - A configured ``sources.initial_image`` stands in for "Custom" until
      :meth:`set_custom_image` replaces it; it is read lazily on first use.

    Examples
    --------
    >>> provider = ImageSourceProvider(config)
    >>> provider.source_names()
    ['Cat (Chelsea)', 'Astronaut', 'Coffee']
    >>> rgb = provider.load("Astronaut")
    >>> rgb.shape
    (512, 512, 3)
    """

    def __init__(self, config):
        self.config = config
        self.size = config.image.size
        self.image_dir = Path(config.sources.image_dir) if config.sources.image_dir else None
        self.samples = dict(config.sources.samples)
        self.bundled = dict(config.sources.bundled)
        self.camera_index = config.sources.camera_index
        self.timeout = config.sources.fetch_timeout_sec

        self._custom: Optional[np.ndarray] = None
        self._webcam: Optional[np.ndarray] = None
        self._initial_image = config.sources.initial_image

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def source_names(self) -> list[str]:
        names = list(self.samples)
        if self.image_dir is not None:
            names.extend(n for n in self.bundled if n not in names)
        if self._custom is not None or self._initial_image:
            names.append(CUSTOM_SOURCE)
        if self._webcam is not None:
            names.append(WEBCAM_SOURCE)
        return names

    @property
    def has_custom(self) -> bool:
        return self._custom is not None or bool(self._initial_image)

    @property
    def has_webcam(self) -> bool:
        return self._webcam is not None

    # ------------------------------------------------------------------
    # Supplying images
    # ------------------------------------------------------------------

    def set_custom_image(self, image: Union[str, Path, np.ndarray]) -> None:
        """Replace the "Custom" image.

        Parameters
        ----------
        image : str, Path or np.ndarray
            A file path, an http(s) URL, or an (H, W, 3) RGB array
            (uint8, or float in [0, 1]).

        Raises
        ------
        AcquisitionFailure
            If the image cannot be read or decoded. The previous custom
            image is kept.
        """
        if isinstance(image, np.ndarray):
            rgb = self._from_array(image)
        else:
            rgb = self._read(str(image))
        self._custom = resample_square(rgb, self.size)
        logger.info("Custom image set (%dx%d source)", rgb.shape[1], rgb.shape[0])

    def capture_webcam(self) -> None:
        """Take one snapshot from the camera and keep it as "Webcam".

        Raises
        ------
        CameraUnavailable
            If the camera cannot be opened.
        AcquisitionFailure
            If the camera opened but returned no frame.
        """
        capture = cv2.VideoCapture(self.camera_index)
        try:
            if not capture.isOpened():
                raise CameraUnavailable(f"cannot open camera {self.camera_index}", WEBCAM_SOURCE)
            ok, frame = capture.read()
        finally:
            capture.release()

        if not ok or frame is None:
            raise AcquisitionFailure(f"camera {self.camera_index} returned no frame", WEBCAM_SOURCE)

        self._webcam = resample_square(_bgr_to_rgb_float(frame), self.size)
        logger.info("Webcam snapshot captured from camera %d", self.camera_index)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, name: str) -> np.ndarray:
        """Return the (N, N, 3) sRGB image for a source name.

        Raises
        ------
        AcquisitionFailure
            Unknown name, missing file, failed fetch or undecodable data.
        """
        if name in self.samples:
            return resample_square(self._sample(name), self.size)

        if name in self.bundled:
            if self.image_dir is None:
                raise AcquisitionFailure(
                    f"no image directory configured for bundled image '{name}'", name
                )
            rgb = self._read(str(self.image_dir / self.bundled[name]))
            return resample_square(rgb, self.size)

        if name == CUSTOM_SOURCE:
            if self._custom is None and self._initial_image:
                self.set_custom_image(self._initial_image)
            if self._custom is None:
                raise AcquisitionFailure("no custom image has been set", name)
            return self._custom.copy()

        if name == WEBCAM_SOURCE:
            if self._webcam is None:
                raise AcquisitionFailure("no webcam snapshot has been captured", name)
            return self._webcam.copy()

        if _is_url(name):
            return resample_square(self._fetch(name), self.size)

        raise AcquisitionFailure(f"unknown image source '{name}'", name)

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    def _read(self, location: str) -> np.ndarray:
        if _is_url(location):
            return self._fetch(location)

        path = Path(location).expanduser()
        if not path.is_file():
            raise AcquisitionFailure(f"image file not found: {path}", location)

        # imdecode over a byte buffer copes with non-ASCII paths on every platform
        data = np.fromfile(str(path), dtype=np.uint8)
        bgr = cv2.imdecode(data, cv2.IMREAD_COLOR)
        if bgr is None:
            raise AcquisitionFailure(f"could not decode image file: {path}", location)
        logger.debug("Read %s (%dx%d)", path.name, bgr.shape[1], bgr.shape[0])
        return _bgr_to_rgb_float(bgr)

    def _fetch(self, url: str) -> np.ndarray:
        logger.info("Fetching image: %s", url)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise AcquisitionFailure(f"failed to fetch {url}: {e}", url) from e

        data = np.frombuffer(response.content, dtype=np.uint8)
        bgr = cv2.imdecode(data, cv2.IMREAD_COLOR) if data.size else None
        if bgr is None:
            raise AcquisitionFailure(f"could not decode image from {url}", url)
        return _bgr_to_rgb_float(bgr)

    def _sample(self, name: str) -> np.ndarray:
        fetch_sample = getattr(sample_data, self.samples[name], None)
        if not callable(fetch_sample):
            raise AcquisitionFailure(
                f"scikit-image has no sample image '{self.samples[name]}'", name
            )
        logger.debug("Loading sample image %s (skimage.data.%s)", name, self.samples[name])
        return self._from_array(np.asarray(fetch_sample()))

    @staticmethod
    def _from_array(image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            image = np.repeat(image[..., None], 3, axis=2)
        if image.ndim != 3 or image.shape[2] < 3:
            raise AcquisitionFailure(f"expected an (H, W, 3) image array, got shape {image.shape}")
        rgb = image[..., :3]
        if rgb.dtype.kind in "ui":
            rgb = rgb.astype(np.float64) / float(np.iinfo(rgb.dtype).max)
        return np.clip(rgb.astype(np.float64), 0.0, 1.0)
