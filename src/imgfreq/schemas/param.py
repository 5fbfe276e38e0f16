"""ParamConfig: Expert defaults for the imgfreq pipeline.

This module defines the complete default configuration. ALL pipeline
parameters must have defaults here. No runtime code should define fallback
values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from imgfreq.schemas.base import ImgFreqBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ImageConfig(ImgFreqBaseModel):
    """Working image geometry."""
    size: int = Field(512, ge=4, description="Side length N of the square working field")

    @field_validator("size")
    @classmethod
    def require_even_size(cls, v):
        """FFT shift and the centred crop need an even side length."""
        if v % 2 != 0:
            raise ValueError(f"image size must be even, got {v}")
        return v


class SourcesConfig(ImgFreqBaseModel):
    """Image source provider configuration.

    ``samples`` name scikit-image sample images (``skimage.data``), which
    ship with the library and always load. ``bundled`` files are only
    offered once ``image_dir`` points at the folder holding them.
    """
    image_dir: Optional[str] = None
    samples: dict[str, str] = Field(
        default_factory=lambda: {
            "Cat (Chelsea)": "chelsea",
            "Astronaut": "astronaut",
            "Coffee": "coffee",
        }
    )
    bundled: dict[str, str] = Field(
        default_factory=lambda: {
            "Dog (Joe)": "joe.jpg",
            "Landscape": "landscape.jpg",
            "Beach": "ocean.jpg",
        }
    )
    default_source: str = "Cat (Chelsea)"
    initial_image: Optional[str] = None  # path or URL loaded as "Custom" at start
    camera_index: int = Field(0, ge=0)
    fetch_timeout_sec: float = Field(10.0, gt=0)


class WindowConfig(ImgFreqBaseModel):
    """Circular aperture applied to the luminance image."""
    inner: float = Field(0.0, ge=0)
    outer: float = Field(0.95, gt=0)
    background: float = Field(0.5, ge=0, le=1.0)


class FilterConfig(ImgFreqBaseModel):
    """Mapping from raw slider values to band-pass cutoffs."""
    exponent: float = Field(4.0, gt=0)
    outer_scale: float = Field(1.5, ge=1.0)
    raw_min: int = Field(0, ge=0)
    raw_max: int = 100
    raw_step: int = Field(1, ge=1)
    low_default: int = 0
    high_default: int = 100

    @model_validator(mode="after")
    def check_raw_range(self):
        """Defaults must sit inside the raw range, low strictly below high."""
        if self.raw_max - self.raw_min < self.raw_step:
            raise ValueError("raw_max must exceed raw_min by at least raw_step")
        if not (self.raw_min <= self.low_default < self.high_default <= self.raw_max):
            raise ValueError(
                f"cutoff defaults must satisfy raw_min <= low < high <= raw_max, "
                f"got low={self.low_default}, high={self.high_default}"
            )
        return self


class DisplayConfig(ImgFreqBaseModel):
    """Display and plotting settings."""
    zoom_levels: tuple[int, ...] = (1, 2, 4, 8)
    amp_mean_max: float = Field(0.75, gt=0, le=1.0)
    profile_floor: float = 0.0
    profile_color: str = "orange"
    profile_linewidth: float = Field(2.0, gt=0)
    dpi: int = Field(100, ge=50)
    figsize: tuple[float, float] = (12.0, 10.0)

    @field_validator("zoom_levels")
    @classmethod
    def require_positive_zooms(cls, v):
        if not v or any(z < 1 for z in v):
            raise ValueError("zoom_levels must be a non-empty tuple of integers >= 1")
        return v


class ControlsConfig(ImgFreqBaseModel):
    """Initial state of the user controls."""
    apply_window: bool = False
    zoom: int = Field(1, ge=1)
    axes: Literal["Cartesian", "Log-polar"] = "Cartesian"
    show_profile: bool = False


class ExportConfig(ImgFreqBaseModel):
    """Export of the filtered output image."""
    filename: str = "img_freq_export.png"


class LoggingConfig(ImgFreqBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(ImgFreqBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all pipeline parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    image: ImageConfig = Field(default_factory=ImageConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    controls: ControlsConfig = Field(default_factory=ControlsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
