"""User-facing control values and the cutoff-drag correction."""

from typing import Literal
import logging

from pydantic import Field

from imgfreq.schemas.base import ImgFreqBaseModel

__all__ = ['Controls', 'adjust_cutoffs', 'CARTESIAN', 'LOG_POLAR']

logger = logging.getLogger(__name__)

CARTESIAN = "Cartesian"
LOG_POLAR = "Log-polar"


class Controls(ImgFreqBaseModel):
    """Current values of every interactive control.

    Assignment is validated, so a bad value raises ``ValidationError`` at
    the point it is set rather than inside a stage.
    """

    image_source: str
    apply_window: bool = False
    low_cutoff: int = Field(0, ge=0)
    high_cutoff: int = Field(100, ge=0)
    zoom: int = Field(1, ge=1)
    axes: Literal["Cartesian", "Log-polar"] = CARTESIAN
    show_profile: bool = False

    @classmethod
    def from_config(cls, config) -> "Controls":
        """Initial control values from an InternalConfig."""
        return cls(
            image_source=config.sources.default_source,
            apply_window=config.controls.apply_window,
            low_cutoff=config.filter.low_default,
            high_cutoff=config.filter.high_default,
            zoom=config.controls.zoom,
            axes=config.controls.axes,
            show_profile=config.controls.show_profile,
        )

    @property
    def zoom_enabled(self) -> bool:
        """Zoom only applies to the Cartesian views."""
        return self.axes == CARTESIAN

    @property
    def profile_enabled(self) -> bool:
        """The radial profile is only drawn over the log-polar spectrum."""
        return self.axes == LOG_POLAR


def adjust_cutoffs(controls: Controls, end: Literal["low", "high"], value: int, config) -> Controls:
    """Place one cutoff end at ``value`` while keeping ``low < high``.

    Parameters
    ----------
    controls : Controls
        Current control values (not modified).
    end : {"low", "high"}
        The cutoff being dragged.
    value : int
        Requested raw value; clamped to ``[raw_min, raw_max]``.
    config : InternalConfig
        Supplies ``filter.raw_min``, ``filter.raw_max`` and ``filter.raw_step``.

    Returns
    -------
    Controls
        Copy with corrected cutoffs. The dragged end stops one step short
        of the other end; if that would leave the slider range, the dragged
        end is pinned at the range limit and the other end moves instead.

    Examples
    --------
    >>> adjust_cutoffs(Controls(image_source="x", low_cutoff=10, high_cutoff=40), "low", 60, cfg)
    Controls(..., low_cutoff=39, high_cutoff=40, ...)
    """
    f = config.filter
    step = f.raw_step
    value = int(min(max(value, f.raw_min), f.raw_max))
    low, high = controls.low_cutoff, controls.high_cutoff

    if end == "low":
        low = min(value, high - step)
        if low < f.raw_min:
            low = f.raw_min
            high = low + step
    elif end == "high":
        high = max(value, low + step)
        if high > f.raw_max:
            high = f.raw_max
            low = high - step
    else:
        raise ValueError(f"cutoff end must be 'low' or 'high', got {end!r}")

    if (low, high) != (controls.low_cutoff, controls.high_cutoff):
        logger.debug("Cutoffs adjusted: %s=%d -> low=%d high=%d", end, value, low, high)

    return controls.model_copy(update={"low_cutoff": low, "high_cutoff": high})
