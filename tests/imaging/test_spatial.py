"""Tests for distance/angle fields, band masks, quadrant shift and log-polar."""

import numpy as np
import pytest

pytestmark = pytest.mark.unit

from imgfreq.imaging.spatial import (
    distance_field,
    angle_field,
    radial_band_mask,
    fft_shift,
    to_log_polar,
    column_mean,
)


class TestDistanceField:

    def test_four_by_four_reference_cells(self):
        d = distance_field(4)
        assert d.shape == (4, 4)
        assert d[2, 2] == 0.0
        assert d[0, 2] == pytest.approx(1.0)
        assert d[2, 0] == pytest.approx(1.0)
        assert d[0, 0] == pytest.approx(np.sqrt(2))

    def test_symmetric_about_centre(self):
        d = distance_field(16)
        np.testing.assert_allclose(d[1:, 1:], d[1:, 1:][::-1, ::-1])

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            distance_field(0)


class TestAngleField:

    def test_axis_directions(self):
        a = angle_field(4)
        assert a[2, 3] == pytest.approx(0.0)
        assert a[3, 2] == pytest.approx(np.pi / 2)
        assert a[2, 0] == pytest.approx(np.pi)
        assert a[0, 2] == pytest.approx(-np.pi / 2)

    def test_range(self):
        a = angle_field(16)
        assert a.min() > -np.pi - 1e-12
        assert a.max() <= np.pi


class TestRadialBandMask:

    def test_bounds_are_inclusive(self):
        d = np.array([[0.0, 0.5], [1.0, 1.5]])
        mask = radial_band_mask(d, 0.5, 1.0)
        np.testing.assert_array_equal(mask, [[0.0, 1.0], [1.0, 0.0]])
        assert mask.dtype == np.float64

    def test_full_band_passes_everything(self):
        mask = radial_band_mask(distance_field(8), 0.0, 1.5)
        assert mask.sum() == 64


class TestFFTShift:

    def test_moves_origin_to_centre(self):
        field = np.zeros((8, 8))
        field[0, 0] = 1.0
        shifted = fft_shift(field)
        assert shifted[4, 4] == 1.0
        assert shifted.sum() == 1.0

    def test_self_inverse_for_even_size(self):
        field = np.random.default_rng(0).random((8, 8))
        np.testing.assert_array_equal(fft_shift(fft_shift(field)), field)

    def test_rejects_odd_size(self):
        with pytest.raises(ValueError, match="even"):
            fft_shift(np.zeros((5, 5)))

    def test_rejects_non_square(self):
        with pytest.raises(ValueError, match="square"):
            fft_shift(np.zeros((4, 6)))


class TestLogPolar:

    def test_shape_preserved(self):
        assert to_log_polar(np.ones((16, 16))).shape == (16, 16)

    def test_first_column_samples_radius_one(self):
        # at radius 1 every sample lies well inside the field
        lp = to_log_polar(np.ones((16, 16)))
        np.testing.assert_allclose(lp[:, 0], 1.0)

    def test_values_stay_within_input_range(self):
        lp = to_log_polar(np.ones((16, 16)))
        assert lp.min() >= 0.0
        assert lp.max() <= 1.0 + 1e-12

    def test_zero_field(self):
        np.testing.assert_array_equal(to_log_polar(np.zeros((16, 16))), 0.0)


class TestColumnMean:

    def test_constant_columns(self):
        field = np.tile(np.array([1.0, 2.0, 3.0, 4.0]), (4, 1))
        np.testing.assert_allclose(column_mean(field), [1.0, 2.0, 3.0, 4.0])

    def test_averages_over_rows(self):
        field = np.array([[0.0, 2.0], [2.0, 4.0]])
        np.testing.assert_allclose(column_mean(field), [1.0, 3.0])
