"""Root-level pytest fixtures for the imgfreq test suite.

Provides shared configuration fixtures following Pydantic-based architecture.
All tests must use these fixtures instead of creating raw dict configs.

Pipeline tests run on a 16 x 16 field: large enough for every default zoom
level to give an even centred crop, small enough to keep the suite fast.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

import numpy as np

from imgfreq.schemas import ParamConfig, UserConfig, resolve_config
from imgfreq.sources import AcquisitionFailure, CameraUnavailable, CUSTOM_SOURCE, WEBCAM_SOURCE

SMALL_SIZE = 16


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_small_field(make_config):
    ...     config = make_config(IMAGE_SIZE=16, LOW_CUTOFF=10)
    ...     assert config.filter.low_default == 10
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


@pytest.fixture
def small_config(make_config):
    """InternalConfig for a 16 x 16 working field starting on "Dog (Joe)"."""
    return make_config(IMAGE_SIZE=SMALL_SIZE, IMAGE_SOURCE="Dog (Joe)")


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


# =============================================================================
# Image Fixtures
# =============================================================================

def make_rgb(size=SMALL_SIZE, seed=0):
    """Random sRGB image with values in [0, 1]."""
    rng = np.random.default_rng(seed)
    return rng.random((size, size, 3))


class FakeProvider:
    """In-memory stand-in for ImageSourceProvider.

    Holds ready-made (N, N, 3) images by name and counts loads, so pipeline
    tests can check which runs touched the source stage.
    """

    def __init__(self, images, camera_opens=True):
        self.images = dict(images)
        self.camera_opens = camera_opens
        self.loads = []

    def source_names(self):
        return list(self.images)

    def load(self, name):
        self.loads.append(name)
        if name not in self.images:
            raise AcquisitionFailure(f"unknown image source '{name}'", name)
        return self.images[name].copy()

    def set_custom_image(self, image):
        if not isinstance(image, np.ndarray):
            raise AcquisitionFailure(f"could not read {image}", CUSTOM_SOURCE)
        self.images[CUSTOM_SOURCE] = image

    def capture_webcam(self):
        if not self.camera_opens:
            raise CameraUnavailable("cannot open camera 0", WEBCAM_SOURCE)
        self.images[WEBCAM_SOURCE] = make_rgb(seed=99)


@pytest.fixture
def fake_provider():
    """Provider with two random images: the default source and "Landscape"."""
    return FakeProvider({
        "Dog (Joe)": make_rgb(seed=1),
        "Landscape": make_rgb(seed=2),
    })


@pytest.fixture
def rgb_factory():
    """The ``make_rgb(size, seed)`` helper, for tests that need several images."""
    return make_rgb


@pytest.fixture
def provider_factory():
    """The FakeProvider class, for tests that need custom image sets."""
    return FakeProvider
