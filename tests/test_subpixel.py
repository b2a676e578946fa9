"""Tests for the closed-form 2x2 algebra and Lucas-Kanade step."""
import numpy as np
from corr_flow.utils.subpixel import solve_2x2, eig_2x2_symmetric, lucas_kanade_step


class TestSolve2x2:

    def test_known_system(self):
        """[[2, 1], [1, 3]] x = [3, 5] has x = [0.8, 1.4]."""
        x = solve_2x2((2.0, 1.0, 1.0, 3.0), (3.0, 5.0))
        np.testing.assert_allclose(x, (0.8, 1.4))

    def test_matches_numpy(self):
        rng = np.random.RandomState(0)
        M = rng.randn(2, 2)
        rhs = rng.randn(2)
        x = solve_2x2(tuple(M.ravel()), tuple(rhs))
        np.testing.assert_allclose(x, np.linalg.solve(M, rhs))

    def test_singular_returns_none(self):
        assert solve_2x2((1.0, 2.0, 2.0, 4.0), (1.0, 1.0)) is None
        assert solve_2x2((0.0, 0.0, 0.0, 0.0), (0.0, 0.0)) is None


class TestEig2x2Symmetric:

    def test_diagonal(self):
        assert eig_2x2_symmetric(5.0, 0.0, 2.0) == (2.0, 5.0)

    def test_matches_numpy(self):
        a, b, d = 4.0, 1.5, 1.0
        lmin, lmax = eig_2x2_symmetric(a, b, d)
        expected = np.linalg.eigvalsh(np.array([[a, b], [b, d]]))
        np.testing.assert_allclose((lmin, lmax), expected)


class TestLucasKanadeStep:
    """Test sub-pixel correction and its degenerate-geometry fallback."""

    def test_recovers_linear_shift(self):
        """If T2 = T - (dy*gy + dx*gx) the step returns (dy, dx) exactly."""
        rng = np.random.RandomState(3)
        T = rng.rand(5, 5) * 255
        gx = rng.randn(5, 5)
        gy = rng.randn(5, 5)
        T2 = T - (0.3 * gy - 0.2 * gx)
        ddy, ddx = lucas_kanade_step(T, T2, gx, gy)
        np.testing.assert_allclose((ddy, ddx), (0.3, -0.2), atol=1e-10)

    def test_identical_patches_no_correction(self):
        rng = np.random.RandomState(4)
        T = rng.rand(5, 5)
        ddy, ddx = lucas_kanade_step(T, T.copy(), rng.randn(5, 5), rng.randn(5, 5))
        assert (ddy, ddx) == (0.0, 0.0)

    def test_flat_patch_falls_back(self):
        """Zero gradients give a singular system and exactly zero correction."""
        T = np.full((5, 5), 100.0)
        T2 = np.full((5, 5), 90.0)
        zeros = np.zeros((5, 5))
        assert lucas_kanade_step(T, T2, zeros, zeros) == (0.0, 0.0)

    def test_straight_edge_falls_back(self):
        """A purely horizontal gradient is the aperture problem."""
        T = np.tile(np.arange(5, dtype=float), (5, 1))
        gx = np.ones((5, 5))
        gy = np.zeros((5, 5))
        assert lucas_kanade_step(T, T + 0.5, gx, gy) == (0.0, 0.0)

    def test_ill_conditioned_falls_back(self):
        """Nearly collinear gradients fail the eigenvalue ratio test."""
        rng = np.random.RandomState(5)
        gx = rng.randn(5, 5)
        gy = gx * 2.0 + 1e-4 * rng.randn(5, 5)
        T = rng.rand(5, 5)
        T2 = T - 0.1 * gx
        assert lucas_kanade_step(T, T2, gx, gy) == (0.0, 0.0)

    def test_ratio_threshold_is_configurable(self):
        """With min_ratio=0 a merely ill-conditioned system is solved."""
        rng = np.random.RandomState(5)
        gx = rng.randn(5, 5)
        gy = gx * 2.0 + 1e-4 * rng.randn(5, 5)
        T = rng.rand(5, 5)
        T2 = T - 0.1 * gx
        ddy, ddx = lucas_kanade_step(T, T2, gx, gy, min_ratio=0.0)
        assert (ddy, ddx) != (0.0, 0.0)
