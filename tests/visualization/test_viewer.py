import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from imgfreq.pipeline import ViewerSession
from imgfreq.visualization.viewer import FrequencyViewer

pytestmark = pytest.mark.unit


@pytest.fixture
def viewer(small_config, fake_provider):
    session = ViewerSession(small_config, provider=fake_provider)
    viewer = FrequencyViewer(session)
    session.start()
    yield viewer
    plt.close(viewer.fig)


def test_viewer_becomes_sink(viewer):
    assert viewer.session.sink is viewer
    for panel, image in viewer._images.items():
        assert image.get_array().shape == (16, 16, 4), panel


def test_show_updates_panel(viewer):
    buffer = np.full((16, 16, 4), 255, dtype=np.uint8)
    viewer.show("output", buffer)
    np.testing.assert_array_equal(viewer._images["output"].get_array(), buffer)


def test_profile_line_visibility(viewer):
    viewer.show_profile(np.column_stack([np.arange(16.0), np.full(16, 8.0)]))
    assert viewer._profile_line.get_visible()
    viewer.show_profile(None)
    assert not viewer._profile_line.get_visible()


def test_axes_radio_disables_zoom(viewer):
    viewer._on_axes("Log-polar")
    assert viewer.session.controls.axes == "Log-polar"
    assert not viewer._zoom_radio.active
    viewer._on_axes("Cartesian")
    assert viewer._zoom_radio.active


def test_profile_tick_applies_after_switching_axes(viewer):
    """Ticking "Show profile" on Cartesian axes takes effect on log-polar."""
    viewer._toggles.set_active(1)
    assert viewer.session.controls.show_profile
    assert not viewer._profile_line.get_visible()
    assert viewer._toggles.labels[1].get_alpha() == pytest.approx(0.4)

    viewer._on_axes("Log-polar")
    assert viewer._profile_line.get_visible()
    assert viewer._toggles.labels[1].get_alpha() == pytest.approx(1.0)


def test_drag_and_release(viewer):
    output = viewer.session.state.output.copy()
    viewer._on_drag("low", 70)
    assert viewer.session.controls.low_cutoff == 70
    np.testing.assert_array_equal(viewer.session.state.output, output)

    viewer._on_release(None)
    assert not np.allclose(viewer.session.state.output, output)


def test_drag_past_other_end_moves_slider(viewer):
    viewer._on_drag("high", 30)
    viewer._on_drag("low", 80)
    assert viewer._low_slider.val == 29
    assert viewer.session.controls.low_cutoff == 29


def test_failed_source_reports_and_keeps_selection(viewer):
    viewer._on_source("Missing")
    assert "Could not load image" in viewer._status.get_text()
    assert viewer._source_radio.value_selected == "Dog (Joe)"


def test_custom_array_added_to_sources(viewer, rgb_factory):
    viewer.session.load_custom_image(rgb_factory(seed=3))
    viewer._build_source_radio()
    assert viewer._source_radio.value_selected == "Custom"


def test_export_button(viewer, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    viewer._on_export(None)
    assert (temp_dir / "img_freq_export.png").exists()
    assert "Exported" in viewer._status.get_text()
