"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import ConfigDict, Field, model_validator
from imgfreq.schemas.base import ImgFreqBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalImageConfig(ImgFreqBaseModel):
    """Runtime image geometry."""
    size: int


class InternalSourcesConfig(ImgFreqBaseModel):
    """Runtime image source configuration."""
    image_dir: Optional[str]
    samples: dict[str, str]
    bundled: dict[str, str]
    default_source: str
    initial_image: Optional[str]
    camera_index: int
    fetch_timeout_sec: float


class InternalWindowConfig(ImgFreqBaseModel):
    """Runtime aperture configuration."""
    inner: float
    outer: float
    background: float


class InternalFilterConfig(ImgFreqBaseModel):
    """Runtime cutoff mapping."""
    exponent: float
    outer_scale: float
    raw_min: int
    raw_max: int
    raw_step: int
    low_default: int
    high_default: int


class InternalDisplayConfig(ImgFreqBaseModel):
    """Runtime display settings."""
    zoom_levels: tuple[int, ...]
    amp_mean_max: float
    profile_floor: float
    profile_color: str
    profile_linewidth: float
    dpi: int
    figsize: tuple[float, float]


class InternalControlsConfig(ImgFreqBaseModel):
    """Runtime initial control values."""
    apply_window: bool
    zoom: int
    axes: Literal["Cartesian", "Log-polar"]
    show_profile: bool


class InternalExportConfig(ImgFreqBaseModel):
    """Runtime export configuration."""
    filename: str


class InternalLoggingConfig(ImgFreqBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    log_file: Optional[str]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(ImgFreqBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that processing code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.size = config.image.size  # NOT .get()
            self.exponent = config.filter.exponent

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO type checking
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    image: InternalImageConfig
    sources: InternalSourcesConfig
    window: InternalWindowConfig
    filter: InternalFilterConfig
    display: InternalDisplayConfig
    controls: InternalControlsConfig
    export: InternalExportConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )

    @model_validator(mode="after")
    def check_cross_section_consistency(self):
        """Checks that span sections, after all layers are merged."""
        size = self.image.size
        if size < 4 or size % 2 != 0:
            raise ValueError(f"image size must be an even number >= 4, got {size}")
        for zoom in self.display.zoom_levels:
            crop = size // zoom
            if size % zoom != 0 or crop % 2 != 0:
                raise ValueError(
                    f"zoom level {zoom} does not give an even centred crop of a {size}px field"
                )
        if self.controls.zoom not in self.display.zoom_levels:
            raise ValueError(
                f"initial zoom {self.controls.zoom} not in zoom_levels {self.display.zoom_levels}"
            )
        f = self.filter
        if not (f.raw_min <= f.low_default < f.high_default <= f.raw_max):
            raise ValueError("cutoff defaults must satisfy raw_min <= low < high <= raw_max")
        # inner = (low/max)^e and outer = (high/max)^e * scale stay ordered for
        # every low < high only with non-negative raw values and scale >= 1
        if f.raw_min < 0:
            raise ValueError(f"filter raw_min must be >= 0, got {f.raw_min}")
        if f.outer_scale < 1.0:
            raise ValueError(f"filter outer_scale must be >= 1, got {f.outer_scale}")
        return self
