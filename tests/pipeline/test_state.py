import numpy as np
import pytest

from imgfreq.pipeline.state import PipelineState

pytestmark = pytest.mark.unit


def test_initialise_shapes(small_config):
    state = PipelineState.initialise(16, small_config.window)
    for name in ("distance", "angle", "aperture", "luminance", "windowed", "centred",
                 "magnitude", "magnitude_shifted", "magnitude_polar",
                 "filter_shifted", "filter_unshifted", "filter_polar", "output"):
        assert getattr(state, name).shape == (16, 16), name
    assert state.spectrum.shape == (16, 16)
    assert state.profile.shape == (16,)


def test_initialise_is_empty(small_config):
    state = PipelineState.initialise(16, small_config.window)
    assert not state.has_image
    assert state.filter_spec is None
    assert state.lum_mean == 0.0
    assert not state.output.any()


def test_geometry_is_read_only(small_config):
    state = PipelineState.initialise(16, small_config.window)
    with pytest.raises(ValueError):
        state.distance[0, 0] = 5.0
    with pytest.raises(ValueError):
        state.aperture[0, 0] = 1.0


def test_aperture_is_disc(small_config):
    """Default aperture passes the centre and blocks the corners."""
    state = PipelineState.initialise(16, small_config.window)
    assert state.aperture[8, 8] == 1.0
    assert state.aperture[0, 0] == 0.0
    assert set(np.unique(state.aperture)) <= {0.0, 1.0}


@pytest.mark.parametrize("size", [0, 2, 7, 15])
def test_bad_sizes_rejected(small_config, size):
    with pytest.raises(ValueError, match="even"):
        PipelineState.initialise(size, small_config.window)
