import cv2
import numpy as np
import pytest

from imgfreq.contracts import assert_display_buffer
from imgfreq.pipeline.state import PipelineState
from imgfreq.visualization.presentation import (
    PANELS,
    BufferSink,
    export_output,
    profile_polyline,
    to_display_buffer,
)

pytestmark = pytest.mark.unit


class TestDisplayBuffer:

    def test_rgba_layout(self):
        buffer = to_display_buffer(np.full((8, 8), 0.5), to_srgb=False)
        assert_display_buffer(buffer, 8)
        assert buffer[0, 0, 0] == buffer[0, 0, 1] == buffer[0, 0, 2] == 128

    def test_srgb_encoding(self):
        linear = np.full((4, 4), 0.2)
        plain = to_display_buffer(linear, to_srgb=False)
        encoded = to_display_buffer(linear, to_srgb=True)
        assert encoded[0, 0, 0] > plain[0, 0, 0]

    def test_values_clipped_to_bytes(self):
        field = np.array([[-1.0, 2.0], [0.0, 1.0]])
        buffer = to_display_buffer(field, to_srgb=False)
        np.testing.assert_array_equal(buffer[..., 0], [[0, 255], [0, 255]])

    def test_normalise_stretches_range(self):
        field = np.array([[2.0, 3.0], [3.0, 4.0]])
        buffer = to_display_buffer(field, normalise=True, to_srgb=False)
        np.testing.assert_array_equal(buffer[..., 0], [[0, 128], [128, 255]])

    def test_zoom_upsamples_centre_block(self):
        field = np.arange(64, dtype=float).reshape(8, 8) / 63
        zoomed = to_display_buffer(field, to_srgb=False, zoom=2)
        centre = to_display_buffer(field[2:6, 2:6], to_srgb=False)
        expected = centre[..., 0].repeat(2, axis=0).repeat(2, axis=1)
        np.testing.assert_array_equal(zoomed[..., 0], expected)

    def test_input_not_modified(self):
        field = np.full((4, 4), 0.3)
        to_display_buffer(field, normalise=True, to_lightness=True)
        np.testing.assert_array_equal(field, 0.3)


class TestProfilePolyline:

    def test_shape_and_columns(self):
        xy = profile_polyline(np.exp(np.linspace(0, 3, 16)), 16)
        assert xy.shape == (16, 2)
        np.testing.assert_array_equal(xy[:, 0], np.arange(16))

    def test_peak_reaches_amp_mean_max(self):
        xy = profile_polyline(np.exp(np.linspace(0, 3, 16)), 16, amp_mean_max=0.75)
        assert xy[:, 1].min() == pytest.approx(16 - 0.75 * 16)
        assert xy[:, 1].max() == pytest.approx(16.0)

    def test_zero_profile_is_finite(self):
        assert np.all(np.isfinite(profile_polyline(np.zeros(16), 16)))


def test_buffer_sink_counts_renders():
    sink = BufferSink()
    assert set(sink.render_counts) == set(PANELS)
    buffer = np.zeros((4, 4, 4), dtype=np.uint8)
    sink.show("filter", buffer)
    sink.show("filter", buffer)
    sink.show_profile(np.zeros((4, 2)))
    assert sink.render_counts["filter"] == 2
    assert sink.buffers["filter"] is buffer
    assert sink.profile.shape == (4, 2)


def test_export_output(small_config, temp_dir):
    state = PipelineState.initialise(16, small_config.window)
    state.output = np.ones((16, 16))
    path = export_output(state, temp_dir / "nested" / "out.png")

    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    assert image.shape == (16, 16, 4)
    assert np.all(image == 255)


def test_export_output_bad_extension(small_config, temp_dir):
    state = PipelineState.initialise(16, small_config.window)
    with pytest.raises((OSError, cv2.error)):
        export_output(state, temp_dir / "out.unknownext")
