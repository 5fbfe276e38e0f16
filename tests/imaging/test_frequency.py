"""Tests for the 2-D DFT, band-pass filter, reconstruction and radial profile."""

import numpy as np
import pytest

pytestmark = pytest.mark.unit

from imgfreq.imaging.frequency import (
    ComplexField,
    FFTDirection,
    FilterSpec,
    fft2d,
    forward_fft,
    magnitude,
    band_pass_filter,
    apply_filter,
    reconstruct,
    radial_profile,
    log_profile,
)
from imgfreq.imaging.spatial import distance_field, fft_shift


class TestComplexField:

    def test_mismatched_shapes_raise(self):
        with pytest.raises(ValueError, match="differ in shape"):
            ComplexField(np.zeros((4, 4)), np.zeros((4, 2)))

    def test_zeros(self):
        field = ComplexField.zeros(8)
        assert field.shape == (8, 8)
        assert not field.real.any() and not field.imag.any()

    def test_complex_round_trip(self):
        values = np.array([[1 + 2j, 3 - 1j]])
        np.testing.assert_array_equal(ComplexField.from_complex(values).to_complex(), values)


class TestFFT:

    def test_forward_is_unnormalised(self):
        spectrum = forward_fft(np.ones((4, 4)))
        assert spectrum.real[0, 0] == pytest.approx(16.0)
        np.testing.assert_allclose(spectrum.real.ravel()[1:], 0.0, atol=1e-12)
        np.testing.assert_allclose(spectrum.imag, 0.0, atol=1e-12)

    def test_delta_has_flat_spectrum(self):
        delta = np.zeros((8, 8))
        delta[0, 0] = 1.0
        spectrum = forward_fft(delta)
        np.testing.assert_allclose(spectrum.real, 1.0)
        np.testing.assert_allclose(spectrum.imag, 0.0, atol=1e-12)

    def test_inverse_undoes_forward(self):
        rng = np.random.default_rng(4)
        field = ComplexField(rng.random((8, 8)), rng.random((8, 8)))
        back = fft2d(fft2d(field, FFTDirection.FORWARD), FFTDirection.INVERSE)
        np.testing.assert_allclose(back.real, field.real, atol=1e-12)
        np.testing.assert_allclose(back.imag, field.imag, atol=1e-12)

    def test_direction_accepts_plain_ints(self):
        field = ComplexField(np.ones((4, 4)), np.zeros((4, 4)))
        back = fft2d(fft2d(field, 1), -1)
        np.testing.assert_allclose(back.real, 1.0)

    def test_input_not_mutated(self):
        image = np.random.default_rng(5).random((8, 8))
        before = image.copy()
        forward_fft(image)
        np.testing.assert_array_equal(image, before)

    def test_magnitude(self):
        spectrum = ComplexField(np.array([[3.0]]), np.array([[4.0]]))
        assert magnitude(spectrum)[0, 0] == pytest.approx(5.0)


class TestFilterSpec:

    def test_full_range(self):
        spec = FilterSpec.from_raw(0, 100)
        assert spec.inner == 0.0
        assert spec.outer == pytest.approx(1.5)

    def test_fourth_power_mapping(self):
        spec = FilterSpec.from_raw(50, 50)
        assert spec.inner == pytest.approx(0.0625)
        assert spec.outer == pytest.approx(0.0625 * 1.5)

    def test_custom_exponent_and_scale(self):
        spec = FilterSpec.from_raw(10, 20, exponent=1.0, outer_scale=2.0)
        assert spec.inner == pytest.approx(0.1)
        assert spec.outer == pytest.approx(0.4)

    def test_ordered_raw_values_give_ordered_cutoffs(self):
        for low, high in [(0, 1), (10, 11), (98, 99), (99, 100)]:
            spec = FilterSpec.from_raw(low, high)
            assert spec.inner < spec.outer


class TestFiltering:

    def test_full_range_filter_passes_everything(self):
        mask = band_pass_filter(distance_field(16), FilterSpec.from_raw(0, 100))
        np.testing.assert_array_equal(mask, 1.0)

    def test_band_pass_is_annulus(self):
        d = distance_field(16)
        spec = FilterSpec(inner=0.25, outer=0.5)
        mask = band_pass_filter(d, spec)
        assert mask[8, 8] == 0.0            # centre below inner
        assert mask[8, 12] == 1.0           # distance 0.5
        assert mask[0, 0] == 0.0            # corner beyond outer

    def test_apply_filter_shape_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            apply_filter(ComplexField.zeros(8), np.ones((4, 4)))

    def test_all_pass_reconstructs_image(self):
        image = 0.2 + 0.6 * np.random.default_rng(6).random((16, 16))
        mean = float(image.mean())
        spectrum = forward_fft(image - mean)
        out = reconstruct(spectrum, np.ones((16, 16)), mean)
        np.testing.assert_allclose(out, image, atol=1e-9)

    def test_zero_filter_leaves_the_mean(self):
        image = np.random.default_rng(7).random((16, 16))
        mean = float(image.mean())
        out = reconstruct(forward_fft(image - mean), np.zeros((16, 16)), mean)
        np.testing.assert_allclose(out, mean)

    def test_output_is_clipped(self):
        image = np.zeros((8, 8))
        out = reconstruct(forward_fft(image), np.ones((8, 8)), 3.0)
        np.testing.assert_array_equal(out, 1.0)

    def test_filter_layouts_agree(self):
        shifted = band_pass_filter(distance_field(16), FilterSpec(0.1, 0.6))
        assert fft_shift(shifted).sum() == shifted.sum()


class TestRadialProfile:

    def test_shapes(self):
        polar, profile = radial_profile(np.ones((16, 16)))
        assert polar.shape == (16, 16)
        assert profile.shape == (16,)

    def test_profile_is_column_mean_of_polar(self):
        field = np.random.default_rng(8).random((16, 16))
        polar, profile = radial_profile(field)
        np.testing.assert_allclose(profile, polar.mean(axis=0))

    def test_log_profile_peak_is_new_max(self):
        profile = np.exp(np.array([0.5, 1.0, 2.0]))
        values = log_profile(profile, new_max=0.75)
        assert values.max() == pytest.approx(0.75)
        assert values.min() == pytest.approx(0.0)

    def test_log_profile_zero_column_uses_floor(self):
        profile = np.array([0.0, np.e, np.e ** 2])
        values = log_profile(profile, floor=0.0, new_max=0.75)
        assert np.all(np.isfinite(values))
        assert values[0] == 0.0
        assert values[1] == pytest.approx(0.375)
        assert values[2] == pytest.approx(0.75)

    def test_log_profile_small_amplitudes_keep_their_shape(self):
        """One zero column must not flatten amplitudes below one."""
        values = log_profile(np.array([0.0, 0.01, 0.1, 0.9]), floor=0.0, new_max=0.75)
        assert values[0] == 0.0
        assert values[1] == 0.0
        assert values[3] == pytest.approx(0.75)
        assert 0.0 < values[2] < values[3]

    def test_log_profile_all_zero_is_finite(self):
        values = log_profile(np.zeros(8))
        assert np.all(np.isfinite(values))
        assert values.min() >= 0.0 and values.max() <= 0.75
