"""Pydantic configuration schemas for imgfreq.

This module provides strictly typed configuration models for the
frequency-domain pipeline. All configuration validation, coercion, and
normalization happens at schema validation time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line overrides
"""

from imgfreq.schemas.resolve import resolve_config
from imgfreq.schemas.internal import InternalConfig
from imgfreq.schemas.param import ParamConfig
from imgfreq.schemas.user import UserConfig
from imgfreq.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
