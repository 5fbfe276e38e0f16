"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError

from imgfreq.schemas import ParamConfig, UserConfig, CLIConfig, InternalConfig
from imgfreq.schemas.resolve import resolve_config, deep_merge


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no user/CLI overrides uses all ParamConfig defaults."""
        config = resolve_config(ParamConfig(), None, None)

        assert isinstance(config, InternalConfig)
        assert config.image.size == 512
        assert config.filter.exponent == 4.0
        assert config.filter.outer_scale == 1.5
        assert config.window.outer == 0.95
        assert config.display.zoom_levels == (1, 2, 4, 8)
        assert config.export.filename == "img_freq_export.png"
        assert config.sources.image_dir is None
        assert config.sources.default_source in config.sources.samples

    def test_user_config_overrides_param_config(self):
        """UserConfig values override ParamConfig defaults."""
        user = UserConfig(LOW_CUTOFF=10, HIGH_CUTOFF=60)
        config = resolve_config(ParamConfig(), user, None)

        assert config.filter.low_default == 10
        assert config.filter.high_default == 60

    def test_precedence_param_user_cli(self):
        """Full precedence: CLI > User > Param."""
        user = UserConfig(LOW_CUTOFF=10, HIGH_CUTOFF=60, IMAGE_SOURCE="Beach")
        cli = CLIConfig(low=20)
        config = resolve_config(ParamConfig(), user, cli)

        assert config.filter.low_default == 20      # CLI won
        assert config.filter.high_default == 60     # User value preserved
        assert config.sources.default_source == "Beach"

    def test_dict_inputs_accepted(self):
        config = resolve_config({}, {"IMAGE_SIZE": 64}, {"high": 80})
        assert config.image.size == 64
        assert config.filter.high_default == 80

    def test_empty_user_config_uses_all_param_defaults(self):
        """Empty UserConfig() doesn't override anything."""
        config = resolve_config(ParamConfig(), UserConfig(), None)
        assert config == resolve_config(ParamConfig(), None, None)

    def test_nested_user_sections(self):
        user = UserConfig(
            window={"background": 0.25},
            filter={"exponent": 2},
            display={"amp_mean_max": 0.5},
        )
        config = resolve_config(ParamConfig(), user, None)

        assert config.window.background == 0.25
        assert config.window.outer == 0.95
        assert config.filter.exponent == 2.0
        assert config.display.amp_mean_max == 0.5

    def test_source_maps_replaced_whole(self):
        """A user list of bundled files is the complete list, not an addition."""
        user = UserConfig(sources={"bundled": {"Mine": "mine.png"}})
        config = resolve_config(ParamConfig(), user, None)

        assert config.sources.bundled == {"Mine": "mine.png"}
        assert config.sources.samples == ParamConfig().sources.samples

    def test_internal_config_is_frozen(self, internal_config):
        with pytest.raises(ValidationError):
            internal_config.export = internal_config.export


class TestConfigValidation:
    """Cross-section checks run after all layers are merged."""

    def test_odd_size_rejected(self):
        with pytest.raises(ValidationError, match="even"):
            resolve_config(ParamConfig(), UserConfig(IMAGE_SIZE=15), None)

    def test_param_odd_size_rejected(self):
        with pytest.raises(ValidationError, match="even"):
            ParamConfig(image={"size": 15})

    def test_zoom_must_give_even_crop(self):
        with pytest.raises(ValidationError, match="zoom level 8"):
            resolve_config(ParamConfig(), UserConfig(IMAGE_SIZE=20), None)

    def test_initial_zoom_must_be_a_level(self):
        with pytest.raises(ValidationError, match="initial zoom"):
            resolve_config(ParamConfig(), UserConfig(IMAGE_SIZE=16, ZOOM=3), None)

    def test_cutoff_defaults_must_be_ordered(self):
        with pytest.raises(ValidationError, match="cutoff defaults"):
            resolve_config(ParamConfig(), UserConfig(LOW_CUTOFF=60, HIGH_CUTOFF=60), None)

    @pytest.mark.parametrize("outer_scale", [0.5, 0.99])
    def test_outer_scale_below_one_rejected(self, outer_scale):
        """A shrunken outer cutoff could fall below the inner one."""
        with pytest.raises(ValidationError, match="outer_scale"):
            resolve_config(ParamConfig(), UserConfig(filter={"outer_scale": outer_scale}), None)
        with pytest.raises(ValidationError):
            ParamConfig(filter={"outer_scale": outer_scale})

    def test_negative_raw_min_rejected(self):
        with pytest.raises(ValidationError, match="raw_min"):
            resolve_config(ParamConfig(), UserConfig(filter={"raw_min": -10}), None)

    def test_param_cutoff_defaults_checked(self):
        with pytest.raises(ValidationError):
            ParamConfig(filter={"low_default": 100, "high_default": 100})

    def test_bad_zoom_levels(self):
        with pytest.raises(ValidationError):
            ParamConfig(display={"zoom_levels": (0, 1)})

    def test_unknown_param_field_rejected(self):
        with pytest.raises(ValidationError):
            ParamConfig(image={"size": 16, "depth": 3})


def test_deep_merge_nested():
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    override = {"b": {"d": 4, "e": 5}, "f": 6}
    assert deep_merge(base, override) == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}
    assert base == {"a": 1, "b": {"c": 2, "d": 3}}
