"""CLIConfig: Command-line overrides.

Minimal configuration for parameters that commonly change between runs:
which image to load, the initial cutoffs, the window flag, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import model_validator
from imgfreq.schemas.base import ImgFreqBaseModel


class CLIConfig(ImgFreqBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Notes
    -----
    If an image path is given but no source, the source is set to
    "Custom" (schema responsibility, not runtime).

    Usage
    -----
        cli_cfg = CLIConfig(image="photo.jpg", low=5, high=40)
        # source automatically set to "Custom"

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    image: Optional[str] = None
    source: Optional[str] = None
    image_dir: Optional[str] = None
    low: Optional[int] = None
    high: Optional[int] = None
    window: Optional[bool] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    log_file: Optional[str] = None

    @model_validator(mode="after")
    def infer_custom_source_from_image(self):
        """An explicit image path means the custom source is wanted."""
        if self.source is None and self.image:
            self.source = "Custom"
        return self

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        sources = {}
        if self.image is not None:
            sources["initial_image"] = str(self.image)
        if self.source is not None:
            sources["default_source"] = self.source
        if self.image_dir is not None:
            sources["image_dir"] = str(self.image_dir)
        if sources:
            overrides["sources"] = sources

        filter_cfg = {}
        if self.low is not None:
            filter_cfg["low_default"] = self.low
        if self.high is not None:
            filter_cfg["high_default"] = self.high
        if filter_cfg:
            overrides["filter"] = filter_cfg

        if self.window is not None:
            overrides["controls"] = {"apply_window": self.window}

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["log_file"] = str(self.log_file)
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
