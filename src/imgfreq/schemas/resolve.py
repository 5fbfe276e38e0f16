"""Configuration resolution and merging logic.

resolve_config() is the single entrypoint: it layers ParamConfig, UserConfig
and CLIConfig and returns a frozen InternalConfig.

Precedence (highest to lowest):
1. CLIConfig (command-line overrides)
2. UserConfig (user file)
3. ParamConfig (expert defaults)

Sections merge key by key, except the source lists named in
``REPLACED_WHOLE``: a user who lists bundled files or samples gives the
complete list, so those maps replace the defaults instead of extending them.
"""

from typing import Optional, Union
import logging

from imgfreq.schemas.param import ParamConfig
from imgfreq.schemas.user import UserConfig
from imgfreq.schemas.cli import CLIConfig
from imgfreq.schemas.internal import InternalConfig

logger = logging.getLogger(__name__)

# (section, key) pairs whose dict value is taken as-is from the highest layer
REPLACED_WHOLE = (
    ("sources", "samples"),
    ("sources", "bundled"),
)


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Deep merge multiple dictionaries.

    Later dictionaries override earlier ones. Nested dictionaries are
    merged recursively; other values are replaced.

    Examples
    --------
    >>> deep_merge({"window": {"inner": 0.0, "outer": 0.95}}, {"window": {"outer": 0.8}})
    {'window': {'inner': 0.0, 'outer': 0.8}}
    """
    result = base.copy()

    for override in overrides:
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value

    return result


def _replace_whole(merged: dict, *overrides: dict) -> dict:
    """Put back the ``REPLACED_WHOLE`` maps exactly as the top layer gave them."""
    for section, key in REPLACED_WHOLE:
        for override in reversed(overrides):
            if key in override.get(section, {}):
                merged[section][key] = dict(override[section][key])
                logger.debug("%s.%s replaced: %s", section, key, list(merged[section][key]))
                break
    return merged


def _as_model(value, model, empty):
    if value is None or (isinstance(value, dict) and not value):
        return empty()
    if isinstance(value, model):
        return value
    return model.model_validate(value)


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Resolve final runtime configuration from param, user, and CLI configs.

    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Expert configuration with complete defaults. Required.
    user_cfg : dict or UserConfig, optional
        User overrides. None or empty means expert defaults only.
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides. None or empty means none.

    Returns
    -------
    InternalConfig
        Fully validated, immutable runtime configuration

    Raises
    ------
    ValidationError
        If any layer, or the merged result, fails validation.

    Examples
    --------
    >>> from imgfreq.schemas import resolve_config, ParamConfig, UserConfig
    >>> config = resolve_config(ParamConfig(), UserConfig(LOW_CUTOFF=10))
    >>> config.filter.low_default
    10
    >>> config = resolve_config(ParamConfig(), {"sources": {"bundled": {"Mine": "mine.png"}}})
    >>> config.sources.bundled
    {'Mine': 'mine.png'}
    """
    if isinstance(param_cfg, ParamConfig):
        param = param_cfg
    else:
        param = ParamConfig.model_validate(param_cfg)
    user = _as_model(user_cfg, UserConfig, UserConfig)
    cli = _as_model(cli_cfg, CLIConfig, CLIConfig)

    user_overrides = user.to_internal_overrides()
    cli_overrides = cli.to_internal_overrides()

    merged = deep_merge(param.model_dump(), user_overrides, cli_overrides)
    merged = _replace_whole(merged, user_overrides, cli_overrides)

    return InternalConfig.model_validate(merged)
