"""Interactive matplotlib viewer.

One window holds the four panels and the controls. The viewer is both the
control surface (widget callbacks call :class:`ViewerSession` actions) and
the presentation sink (the session pushes re-rendered panels back into it).

Cutoff sliders follow the live/commit split of the pipeline: moving a slider
issues a filter change that only redraws the filter panel, and releasing
the mouse commits the cutoffs so the output is reconstructed once.
"""

import logging
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.widgets import Button, CheckButtons, RadioButtons, Slider, TextBox

from imgfreq.pipeline.controls import CARTESIAN, LOG_POLAR
from imgfreq.visualization.presentation import PANELS
from imgfreq.visualization.plotter import PANEL_TITLES

__all__ = ['FrequencyViewer']

logger = logging.getLogger(__name__)

# [left, bottom, width, height] in figure fractions
PANEL_RECTS = {
    "image": [0.02, 0.52, 0.30, 0.42],
    "spectrum": [0.34, 0.52, 0.30, 0.42],
    "filter": [0.02, 0.06, 0.30, 0.42],
    "output": [0.34, 0.06, 0.30, 0.42],
}


class FrequencyViewer:
    """Matplotlib window driving a :class:`ViewerSession`.

    Parameters
    ----------
    session : ViewerSession
        Session to drive. Its ``sink`` and ``on_error`` are pointed at
        this viewer.
    """

    def __init__(self, session):
        self.session = session
        self.config = session.config
        self.size = session.config.image.size

        session.sink = self
        session.on_error = self._report_error

        self.fig = plt.figure(figsize=self.config.display.figsize, dpi=self.config.display.dpi)
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title("Image frequency explorer")

        self._images = {}
        self._profile_line = None
        self._cutoffs_dirty = False
        self._syncing = False

        self._build_panels()
        self._build_controls()
        self.fig.canvas.mpl_connect("button_release_event", self._on_release)

    # ------------------------------------------------------------------
    # Presentation sink
    # ------------------------------------------------------------------

    def show(self, panel: str, buffer: np.ndarray) -> None:
        self._images[panel].set_data(buffer)
        self.fig.canvas.draw_idle()

    def show_profile(self, xy: Optional[np.ndarray]) -> None:
        if xy is None:
            self._profile_line.set_visible(False)
        else:
            self._profile_line.set_data(xy[:, 0], xy[:, 1])
            self._profile_line.set_visible(True)
        self.fig.canvas.draw_idle()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_panels(self):
        blank = np.zeros((self.size, self.size, 4), dtype=np.uint8)
        blank[..., 3] = 255
        for panel in PANELS:
            ax = self.fig.add_axes(PANEL_RECTS[panel])
            self._images[panel] = ax.imshow(blank, interpolation="nearest")
            ax.set_title(PANEL_TITLES[panel], fontsize=11, fontweight='bold')
            ax.set_axis_off()
            if panel == "spectrum":
                display = self.config.display
                (self._profile_line,) = ax.plot(
                    [], [], color=display.profile_color, linewidth=display.profile_linewidth,
                )
                self._profile_line.set_visible(False)
                ax.set_xlim(-0.5, self.size - 0.5)
                ax.set_ylim(self.size - 0.5, -0.5)

        self._status = self.fig.text(0.02, 0.01, "", fontsize=9, color="firebrick")

    def _build_controls(self):
        controls = self.session.controls
        f = self.config.filter

        self._source_ax = self.fig.add_axes([0.68, 0.74, 0.14, 0.20])
        self._build_source_radio()

        self._url_box = TextBox(self.fig.add_axes([0.68, 0.68, 0.22, 0.04]), "", initial="")
        self._url_box.on_submit(self._on_custom)
        self._webcam_button = Button(self.fig.add_axes([0.84, 0.74, 0.12, 0.05]), "Webcam")
        self._webcam_button.on_clicked(self._on_webcam)

        self._toggles = CheckButtons(
            self.fig.add_axes([0.68, 0.56, 0.22, 0.09]),
            ["Apply window", "Show profile"],
            [controls.apply_window, controls.show_profile],
        )
        self._toggles.on_clicked(self._on_toggle)

        self._low_slider = Slider(
            self.fig.add_axes([0.72, 0.48, 0.22, 0.03]), "Low",
            f.raw_min, f.raw_max, valinit=controls.low_cutoff, valstep=f.raw_step,
        )
        self._high_slider = Slider(
            self.fig.add_axes([0.72, 0.43, 0.22, 0.03]), "High",
            f.raw_min, f.raw_max, valinit=controls.high_cutoff, valstep=f.raw_step,
        )
        self._low_slider.on_changed(lambda value: self._on_drag("low", value))
        self._high_slider.on_changed(lambda value: self._on_drag("high", value))

        zoom_labels = [f"{z}x" for z in self.config.display.zoom_levels]
        self._zoom_radio = RadioButtons(
            self.fig.add_axes([0.68, 0.22, 0.12, 0.17]), zoom_labels,
            active=list(self.config.display.zoom_levels).index(controls.zoom),
        )
        self._zoom_radio.ax.set_title("Zoom", fontsize=10)
        self._zoom_radio.on_clicked(lambda label: self.session.set_zoom(int(label.rstrip("x"))))

        self._axes_radio = RadioButtons(
            self.fig.add_axes([0.82, 0.28, 0.14, 0.11]), [CARTESIAN, LOG_POLAR],
            active=0 if controls.axes == CARTESIAN else 1,
        )
        self._axes_radio.ax.set_title("Spectrum axes", fontsize=10)
        self._axes_radio.on_clicked(self._on_axes)

        self._export_button = Button(self.fig.add_axes([0.68, 0.08, 0.12, 0.05]), "Export")
        self._export_button.on_clicked(self._on_export)

        self._sync_enabled()

    def _build_source_radio(self):
        names = self.session.available_sources()
        if getattr(self, "_source_radio", None) is not None:
            self._source_radio.disconnect_events()
        self._source_ax.clear()
        self._source_ax.set_title("Image source", fontsize=10)
        current = self.session.controls.image_source
        active = names.index(current) if current in names else 0
        self._source_radio = RadioButtons(self._source_ax, names, active=active)
        self._source_radio.on_clicked(self._on_source)

    def _sync_enabled(self):
        """Zoom only applies to Cartesian axes, the profile only to log-polar."""
        controls = self.session.controls
        self._zoom_radio.active = controls.zoom_enabled
        # the tick is kept while greyed out and applies once log-polar is chosen
        self._toggles.labels[1].set_alpha(1.0 if controls.profile_enabled else 0.4)

    def _sync_sliders(self):
        controls = self.session.controls
        self._syncing = True
        try:
            if self._low_slider.val != controls.low_cutoff:
                self._low_slider.set_val(controls.low_cutoff)
            if self._high_slider.val != controls.high_cutoff:
                self._high_slider.set_val(controls.high_cutoff)
        finally:
            self._syncing = False

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def _on_source(self, label):
        if not self.session.select_source(label):
            # load failed; put the selection back on the current source
            self._build_source_radio()

    def _on_custom(self, text):
        text = text.strip()
        if not text:
            return
        self.session.load_custom_image(text)
        self._build_source_radio()

    def _on_webcam(self, _event):
        self.session.capture_webcam()
        self._build_source_radio()

    def _on_toggle(self, label):
        apply_window, show_profile = self._toggles.get_status()
        if label == "Apply window":
            self.session.set_apply_window(apply_window)
        else:
            self.session.set_show_profile(show_profile)

    def _on_drag(self, end, value):
        if self._syncing:
            return
        self.session.drag_cutoff(end, int(value))
        self._cutoffs_dirty = True
        self._sync_sliders()

    def _on_release(self, _event):
        if self._cutoffs_dirty:
            self._cutoffs_dirty = False
            self.session.commit_cutoffs()

    def _on_axes(self, label):
        self.session.set_axes(label)
        self._sync_enabled()

    def _on_export(self, _event):
        path = self.session.export()
        self._status.set_text(f"Exported {path}")
        self.fig.canvas.draw_idle()

    def _report_error(self, error):
        self._status.set_text(f"Could not load image: {error}")
        self.fig.canvas.draw_idle()

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------

    def run(self, block: bool = True):
        """Compute the initial state and show the window."""
        self.session.start()
        self._build_source_radio()
        plt.show(block=block)
