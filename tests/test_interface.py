"""Tests for the high-level interface and method presets."""
import numpy as np
import pytest
from corr_flow import compute_flow, estimate_flow, load_of_method, DimensionMismatchError
from corr_flow.methods.corr import CorrOpticalFlow


class TestComputeFlow:

    def test_returns_three_grids(self, synthetic_pair):
        im1, im2 = synthetic_pair
        vx, vy, reliab = compute_flow(im1, im2, 2, 3)
        assert vx.shape == vy.shape == reliab.shape == im1.shape
        np.testing.assert_allclose(vx[10:-10, 10:-10], -2.0, atol=1e-6)

    def test_uint8_input(self, synthetic_pair):
        """Integer images are processed as floats."""
        im1, im2 = synthetic_pair
        vx8, vy8, rel8 = compute_flow(im1.astype(np.uint8), im2.astype(np.uint8), 2, 3)
        vx, vy, rel = compute_flow(im1.astype(np.uint8).astype(float),
                                   im2.astype(np.uint8).astype(float), 2, 3)
        assert vx8.dtype == np.float64
        np.testing.assert_array_equal(vx8, vx)
        np.testing.assert_array_equal(rel8, rel)

    def test_shape_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="same dimensions"):
            compute_flow(np.zeros((8, 8)), np.zeros((8, 9)), 1, 1)

    def test_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            compute_flow(np.zeros(8), np.zeros(8), 1, 1)

    def test_show(self, synthetic_pair):
        """Plotting does not change the returned flow."""
        import matplotlib.pyplot as plt
        im1, im2 = synthetic_pair
        fig, ax = plt.subplots()
        shown = compute_flow(im1, im2, 1, 2, show=True, ax=ax)
        plain = compute_flow(im1, im2, 1, 2)
        assert len(ax.images) == 1
        for a, b in zip(shown, plain):
            np.testing.assert_array_equal(a, b)
        plt.close(fig)


class TestEstimateFlow:

    def test_preset(self, synthetic_pair):
        im1, im2 = synthetic_pair
        uv, reliab = estimate_flow(im1, im2, 'corr')
        assert uv.shape == (32, 32, 2)
        assert reliab.shape == (32, 32)
        np.testing.assert_allclose(uv[10:-10, 10:-10, 0], -2.0, atol=1e-6)
        np.testing.assert_allclose(uv[10:-10, 10:-10, 1], 1.0, atol=1e-6)

    def test_params_override(self, synthetic_pair):
        """A search radius too small for the motion cannot recover it."""
        im1, im2 = synthetic_pair
        uv, _ = estimate_flow(im1, im2, 'corr-integer', params={'search_r': 1})
        assert np.all(np.abs(uv) <= 1)


class TestLoadOfMethod:

    def test_presets(self):
        assert isinstance(load_of_method('corr'), CorrOpticalFlow)
        assert load_of_method('corr-integer').subpixel is False
        assert load_of_method('corr-nosmooth').sigma == 0
        assert load_of_method('corr-parallel').n_jobs == -1

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown optical flow method"):
            load_of_method('horn-schunck')

    def test_parse_list_parameters(self):
        ope = load_of_method('corr')
        ope.parse_input_parameter(['patch_r', 5, 'thr', 0.1, 'no_such_param', 1])
        assert ope.patch_r == 5
        assert ope.thr == 0.1
        assert not hasattr(ope, 'no_such_param')
