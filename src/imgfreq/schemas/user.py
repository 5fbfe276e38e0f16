"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., IMAGE_SIZE -> image_size, LOW_CUTOFF -> low_cutoff).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys, integers where floats are expected, etc.
"""

from typing import Any, Literal, Optional
from pydantic import Field, field_validator
from imgfreq.schemas.base import ImgFreqBaseModel


class UserSourcesConfig(ImgFreqBaseModel):
    """User-facing source config."""
    image_dir: Optional[str] = None
    samples: Optional[dict[str, str]] = None
    bundled: Optional[dict[str, str]] = None
    default_source: Optional[str] = None
    initial_image: Optional[str] = None
    camera_index: Optional[int] = None
    fetch_timeout_sec: Optional[float] = None


class UserWindowConfig(ImgFreqBaseModel):
    """User-facing aperture config."""
    inner: Optional[float] = None
    outer: Optional[float] = None
    background: Optional[float] = None


class UserFilterConfig(ImgFreqBaseModel):
    """User-facing cutoff mapping config."""
    exponent: Optional[float] = None
    outer_scale: Optional[float] = None
    raw_min: Optional[int] = None
    raw_max: Optional[int] = None
    raw_step: Optional[int] = None
    low_default: Optional[int] = None
    high_default: Optional[int] = None

    @field_validator("exponent", "outer_scale", mode="before")
    @classmethod
    def coerce_float(cls, v):
        """Accept int or float."""
        if v is not None:
            return float(v)
        return v


class UserDisplayConfig(ImgFreqBaseModel):
    """User-facing display config."""
    zoom_levels: Optional[tuple[int, ...]] = None
    amp_mean_max: Optional[float] = None
    profile_floor: Optional[float] = None
    profile_color: Optional[str] = None
    profile_linewidth: Optional[float] = None
    dpi: Optional[int] = None
    figsize: Optional[tuple[float, float]] = None


class UserConfig(ImgFreqBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            IMAGE_DIR="~/pictures",
            IMAGE_SOURCE="Landscape",
            LOW_CUTOFF=10,
            HIGH_CUTOFF=60,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Image and sources (flat aliases)
    image_size: Optional[int] = Field(None, alias="IMAGE_SIZE")
    image_dir: Optional[str] = Field(None, alias="IMAGE_DIR")
    image_source: Optional[str] = Field(None, alias="IMAGE_SOURCE")
    image_path: Optional[str] = Field(None, alias="IMAGE_PATH")
    camera_index: Optional[int] = Field(None, alias="CAMERA_INDEX")

    # Initial controls (flat aliases)
    apply_window: Optional[bool] = Field(None, alias="APPLY_WINDOW")
    low_cutoff: Optional[int] = Field(None, alias="LOW_CUTOFF")
    high_cutoff: Optional[int] = Field(None, alias="HIGH_CUTOFF")
    zoom: Optional[int] = Field(None, alias="ZOOM")
    axes: Optional[Literal["Cartesian", "Log-polar"]] = Field(None, alias="AXES")
    show_profile: Optional[bool] = Field(None, alias="SHOW_PROFILE")

    # Export and logging
    export_filename: Optional[str] = Field(None, alias="EXPORT_FILENAME")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    sources: Optional[UserSourcesConfig] = None
    window: Optional[UserWindowConfig] = None
    filter: Optional[UserFilterConfig] = None
    display: Optional[UserDisplayConfig] = None

    model_config = ImgFreqBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("axes", mode="before")
    @classmethod
    def normalize_axes(cls, v):
        """Accept 'log-polar', 'logpolar', 'cartesian' in any case."""
        if isinstance(v, str):
            key = v.strip().lower().replace("_", "-")
            if key in ("log-polar", "logpolar", "polar"):
                return "Log-polar"
            if key == "cartesian":
                return "Cartesian"
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides: dict[str, Any] = {}

        if self.image_size is not None:
            overrides["image"] = {"size": self.image_size}

        # Sources section
        sources = {}
        if self.image_dir is not None:
            sources["image_dir"] = str(self.image_dir)
        if self.image_source is not None:
            sources["default_source"] = self.image_source
        if self.image_path is not None:
            sources["initial_image"] = str(self.image_path)
        if self.camera_index is not None:
            sources["camera_index"] = self.camera_index

        # Merge with explicit sources config
        if self.sources is not None:
            sources.update(self.sources.model_dump(exclude_none=True))

        if sources:
            overrides["sources"] = sources

        # Filter section (initial cutoffs live with the mapping)
        filter_cfg = {}
        if self.low_cutoff is not None:
            filter_cfg["low_default"] = self.low_cutoff
        if self.high_cutoff is not None:
            filter_cfg["high_default"] = self.high_cutoff

        if self.filter is not None:
            filter_cfg.update(self.filter.model_dump(exclude_none=True))

        if filter_cfg:
            overrides["filter"] = filter_cfg

        # Controls section
        controls = {}
        if self.apply_window is not None:
            controls["apply_window"] = self.apply_window
        if self.zoom is not None:
            controls["zoom"] = self.zoom
        if self.axes is not None:
            controls["axes"] = self.axes
        if self.show_profile is not None:
            controls["show_profile"] = self.show_profile

        if controls:
            overrides["controls"] = controls

        if self.window is not None:
            window = self.window.model_dump(exclude_none=True)
            if window:
                overrides["window"] = window

        if self.display is not None:
            display = self.display.model_dump(exclude_none=True)
            if display:
                overrides["display"] = display

        if self.export_filename is not None:
            overrides["export"] = {"filename": self.export_filename}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
