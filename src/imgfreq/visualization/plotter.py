"""Four-panel figure of the image, its spectrum, the filter and the output.

Renders headless with the Agg canvas so it works without a display and
does not touch the pyplot backend used by the interactive viewer.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg

from imgfreq.visualization.presentation import BufferSink, PANELS

__all__ = ['FrequencyPlotter']

logger = logging.getLogger(__name__)

PANEL_TITLES = {
    "image": "Image",
    "spectrum": "Amplitude spectrum",
    "filter": "Filter",
    "output": "Filtered image",
}


class FrequencyPlotter(BufferSink):
    """Presentation sink that lays the four panels out in a PNG figure.

    The plotter receives panels exactly like any other sink, so a session
    run with ``sink=plotter`` leaves it holding the latest buffers:

    - **Top left**: image (windowed luminance)
    - **Top right**: amplitude spectrum, with the radial profile line when
      it is switched on over the log-polar view
    - **Bottom left**: band-pass filter
    - **Bottom right**: filtered image

    Example usage::

        plotter = FrequencyPlotter(config)
        session = ViewerSession(config, sink=plotter)
        session.start()
        plotter.save("figure.png", title="Dog (Joe)")
    """

    def __init__(self, config):
        """Initialize plotter.

        Parameters
        ----------
        config : InternalConfig
            Uses the ``display`` section (dpi, figsize, profile style).
        """
        super().__init__()
        display = config.display
        self.size = config.image.size
        self.dpi = display.dpi
        self.figsize = tuple(display.figsize)
        self.profile_color = display.profile_color
        self.profile_linewidth = display.profile_linewidth

        logger.debug("FrequencyPlotter initialized (dpi=%d)", self.dpi)

    def _draw_panel(self, ax, panel: str) -> None:
        buffer = self.buffers.get(panel)
        if buffer is None:
            buffer = np.zeros((self.size, self.size, 4), dtype=np.uint8)
            buffer[..., 3] = 255
        ax.imshow(buffer, interpolation="nearest")
        ax.set_title(PANEL_TITLES[panel], fontsize=12, fontweight='bold', pad=8)
        ax.set_axis_off()

    def _draw_profile(self, ax) -> None:
        if self.profile is None:
            return
        ax.plot(self.profile[:, 0], self.profile[:, 1],
                color=self.profile_color, linewidth=self.profile_linewidth)
        ax.set_xlim(-0.5, self.size - 0.5)
        ax.set_ylim(self.size - 0.5, -0.5)

    def figure(self, title: Optional[str] = None) -> Figure:
        """Build the figure from the current buffers."""
        fig = Figure(figsize=self.figsize, dpi=self.dpi)
        FigureCanvasAgg(fig)
        axes = fig.subplots(2, 2)

        for ax, panel in zip(axes.flat, PANELS):
            self._draw_panel(ax, panel)
            if panel == "spectrum":
                self._draw_profile(ax)

        if title:
            fig.suptitle(title, fontsize=14, fontweight='bold')
        fig.tight_layout()
        return fig

    def save(self, output_path: Union[str, Path], title: Optional[str] = None) -> Path:
        """Render and write the figure as PNG.

        Returns
        -------
        Path
            The written file.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig = self.figure(title)
        fig.savefig(output_path, dpi=self.dpi, bbox_inches='tight', format='png')
        logger.info("Figure saved: %s", output_path)
        return output_path
