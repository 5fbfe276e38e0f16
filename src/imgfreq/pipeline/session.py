"""Interactive session: control actions mapped onto pipeline triggers."""

from pathlib import Path
from typing import Callable, List, Optional, Union, TYPE_CHECKING
import logging
import threading

import numpy as np

from imgfreq.pipeline.controls import Controls, adjust_cutoffs
from imgfreq.pipeline.scheduler import run_pipeline
from imgfreq.pipeline.state import PipelineState
from imgfreq.pipeline.triggers import Trigger
from imgfreq.sources import (
    AcquisitionFailure,
    CameraUnavailable,
    ImageSourceProvider,
    CUSTOM_SOURCE,
    WEBCAM_SOURCE,
)
from imgfreq.visualization.presentation import export_output

if TYPE_CHECKING:
    from imgfreq.schemas import InternalConfig

__all__ = ['ViewerSession']

logger = logging.getLogger(__name__)


class ViewerSession:
    """Owns the pipeline state, the control values, the provider and the sink.

    Every public action updates the controls and runs the pipeline with the
    trigger that action implies. Runs are serialised by a lock and image
    acquisition happens inside the run, so an action issued while a fetch is
    pending waits for it and then applies on top of its result.

    Failure handling
    ----------------
    - ``AcquisitionFailure``: logged, passed to ``on_error`` if given; the
      state and controls stay as they were.
    - ``CameraUnavailable``: ignored (logged at DEBUG only).
    - ``ContractViolation`` and ``ValidationError`` propagate.

    Example usage::

        session = ViewerSession(config, sink=BufferSink())
        session.start()
        session.drag_cutoff("low", 20)
        session.commit_cutoffs()
        session.export("filtered.png")
    """

    def __init__(self, config: "InternalConfig", provider: Optional[ImageSourceProvider] = None,
                 sink=None, on_error: Optional[Callable[[AcquisitionFailure], None]] = None):
        self.config = config
        self.provider = provider if provider is not None else ImageSourceProvider(config)
        self.sink = sink
        self.on_error = on_error

        self.state = PipelineState.initialise(config.image.size, config.window)
        self.controls = Controls.from_config(config)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    def _updated(self, **changes) -> Controls:
        return Controls.model_validate({**self.controls.model_dump(), **changes})

    def _run(self, trigger: Trigger, acquire: Optional[Callable[[], None]] = None,
             cutoff: Optional[tuple] = None, **changes) -> List[str]:
        with self._lock:
            previous = self.controls
            try:
                if acquire is not None:
                    acquire()
                if cutoff is not None:
                    adjusted = adjust_cutoffs(self.controls, cutoff[0], cutoff[1], self.config)
                    changes.update(low_cutoff=adjusted.low_cutoff, high_cutoff=adjusted.high_cutoff)
                if changes:
                    self.controls = self._updated(**changes)
                return run_pipeline(self.state, trigger, self.controls, self.provider,
                                    sink=self.sink, config=self.config)
            except CameraUnavailable as e:
                logger.debug("Camera unavailable, ignoring: %s", e)
                self.controls = previous
                return []
            except AcquisitionFailure as e:
                logger.warning("Image acquisition failed: %s", e)
                self.controls = previous
                if self.on_error is not None:
                    self.on_error(e)
                return []

    def run(self, trigger: Trigger) -> List[str]:
        """Run the pipeline for a trigger without changing any control."""
        return self._run(trigger)

    def start(self) -> List[str]:
        """Full initial run: load the default source and compute everything."""
        logger.info("Starting session with source '%s'", self.controls.image_source)
        return self._run(Trigger.INIT)

    # ------------------------------------------------------------------
    # Image source
    # ------------------------------------------------------------------

    def available_sources(self) -> List[str]:
        return self.provider.source_names()

    def select_source(self, name: str) -> List[str]:
        return self._run(Trigger.IMAGE_SOURCE, image_source=name)

    def load_custom_image(self, image: Union[str, Path, np.ndarray]) -> List[str]:
        """Use a file, URL or array as the "Custom" source and switch to it."""
        return self._run(
            Trigger.IMAGE_SOURCE,
            acquire=lambda: self.provider.set_custom_image(image),
            image_source=CUSTOM_SOURCE,
        )

    def capture_webcam(self) -> List[str]:
        """Snapshot the camera and switch to the "Webcam" source."""
        return self._run(
            Trigger.IMAGE_SOURCE,
            acquire=self.provider.capture_webcam,
            image_source=WEBCAM_SOURCE,
        )

    # ------------------------------------------------------------------
    # Window and filter
    # ------------------------------------------------------------------

    def set_apply_window(self, apply_window: bool) -> List[str]:
        return self._run(Trigger.IMAGE_WINDOW, apply_window=bool(apply_window))

    def drag_cutoff(self, end: str, value: int) -> List[str]:
        """Live cutoff change while a slider is moving (filter panel only)."""
        return self._run(Trigger.FILTER_CHANGE, cutoff=(end, value))

    def commit_cutoffs(self, end: Optional[str] = None, value: Optional[int] = None) -> List[str]:
        """Slider released: reconstruct the output from the current filter.

        With ``end`` and ``value`` the cutoff is first moved as by
        :meth:`drag_cutoff`, so the filter is rebuilt before the output.
        The two are given together or not at all.
        """
        if (end is None) != (value is None):
            raise ValueError(
                f"commit_cutoffs needs both end and value or neither, got end={end!r}, value={value!r}"
            )
        computed = []
        if end is not None:
            computed = self._run(Trigger.FILTER_CHANGE, cutoff=(end, value))
        return computed + self._run(Trigger.FILTER_SET)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def set_zoom(self, zoom: int) -> List[str]:
        zoom = int(zoom)
        if zoom not in self.config.display.zoom_levels:
            raise ValueError(f"zoom {zoom} not in {self.config.display.zoom_levels}")
        return self._run(Trigger.ZOOM, zoom=zoom)

    def set_axes(self, axes: str) -> List[str]:
        return self._run(Trigger.AXES_CHANGE, axes=axes)

    def set_show_profile(self, show_profile: bool) -> List[str]:
        return self._run(Trigger.SHOW_PROFILE, show_profile=bool(show_profile))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, path: Optional[Union[str, Path]] = None) -> Path:
        with self._lock:
            return export_output(self.state, path or self.config.export.filename)
